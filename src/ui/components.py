"""
VCR Calculator - UI Components
再利用可能なUIコンポーネント
"""
import streamlit as st

from ..config import APP_NAME, APP_VERSION, CV_MODES, UNIT_SYSTEMS
from ..cv.formatters import format_pace, format_velocity
from ..cv.models import CVResult
from ..cv.units import velocity_to_pace
from .tables import curve_to_dataframe, predictions_to_dataframe, zones_to_dataframe


def load_css() -> None:
    """インラインCSSを適用"""
    st.markdown("""
    <style>
        .main-header { font-size: 2.5rem; color: #1E88E5; text-align: center; }
        .version-tag { font-size: 0.9rem; color: #888; text-align: center; }
        .sub-header { font-size: 1.2rem; color: #666; text-align: center; margin-bottom: 2rem; }
        .cv-display {
            background: linear-gradient(135deg, #1E88E5 0%, #1565C0 100%);
            color: white;
            padding: 1.5rem;
            border-radius: 12px;
            margin: 1rem 0;
        }
        .warning-box {
            background-color: #FFF3E0;
            border-left: 4px solid #FF9800;
            padding: 1rem;
            border-radius: 0 8px 8px 0;
            margin: 1rem 0;
        }
    </style>
    """, unsafe_allow_html=True)


def render_header() -> None:
    """アプリヘッダーを表示"""
    st.markdown(f'<h1 class="main-header">🏃 {APP_NAME}</h1>', unsafe_allow_html=True)
    st.markdown(f'<p class="version-tag">Version {APP_VERSION}</p>', unsafe_allow_html=True)
    st.markdown('<p class="sub-header">Critical Velocity Running Calculator</p>', unsafe_allow_html=True)


def render_footer() -> None:
    """フッターを表示"""
    st.markdown("---")
    st.caption(f"{APP_NAME} v{APP_VERSION}")


def render_cv_display(cv_result: CVResult, unit_system: str, cv_mode: str) -> None:
    """CV計算結果を表示

    Args:
        cv_result: CV計算結果
        unit_system: 表示単位系
        cv_mode: 表示するCV（"raw" / "adjusted"）
    """
    velocity = cv_result.select_velocity(cv_mode)
    pace = velocity_to_pace(velocity, unit_system)
    mode_label = "Unadjusted" if cv_mode == CV_MODES["RAW"] else "Adjusted"
    d_prime_label = "estimated" if cv_result.d_prime_estimated else "measured"

    st.markdown(f"""
<div class="cv-display">
    <h3 style="margin: 0 0 1rem 0; color: white;">📊 Critical Velocity ({mode_label})</h3>
    <div style="font-size: 1.3rem;">
        🏃 <strong>{format_pace(pace, unit_system)}</strong>
        <span style="margin-left: 2rem;">⚡ {format_velocity(velocity)}</span>
        <span style="margin-left: 2rem;">🔋 D': <strong>{cv_result.d_prime:.0f} m</strong> ({d_prime_label})</span>
    </div>
</div>
    """, unsafe_allow_html=True)

    with st.expander("📐 Calculation details"):
        st.code(cv_result.calculation_log or "No calculation log")


def render_zones(zones: list, unit_system: str, zone_system_name: str) -> None:
    """トレーニングゾーンの表を表示"""
    st.markdown(f"### 🎯 Training Zones ({zone_system_name})")
    st.dataframe(zones_to_dataframe(zones, unit_system), use_container_width=True)


def render_predictions(results: list, unit_system: str, d_prime_estimated: bool) -> None:
    """レース予測の表を表示"""
    st.markdown("### 🏁 Race Predictions")
    if not results:
        st.info("No race distance is long enough for a prediction.")
        return
    st.dataframe(predictions_to_dataframe(results, unit_system), use_container_width=True,
                 hide_index=True)
    if d_prime_estimated:
        st.caption("D' is estimated (±100 m); the range shows the fastest and slowest plausible times.")
    else:
        st.caption("D' was measured by the 2-point test, so no range is shown.")


def render_curve(curve, unit_system: str) -> None:
    """速度-時間カーブを表示"""
    st.markdown("### 📈 Velocity-Duration Curve")
    df = curve_to_dataframe(curve, unit_system)
    st.line_chart(df["Velocity (m/s)"])
    unit = "mile" if unit_system == UNIT_SYSTEMS["IMPERIAL"] else "km"
    st.caption(f"Hyperbolic model only; pace column is seconds per {unit}. Not used for predictions.")


def render_warning_box(title: str, content: str) -> None:
    """警告ボックスを表示"""
    st.markdown(f"""
<div class="warning-box">
    <h4>{title}</h4>
    {content}
</div>
    """, unsafe_allow_html=True)


def render_disclaimer() -> None:
    """注意事項を表示"""
    with st.expander("📜 Notes"):
        st.markdown("""
1. Results are estimates from a mathematical model and do not replace advice from a coach or physician.

2. Single-effort tests assume a D' value; use the 2-point test for a measured D'.

3. Inputs are used only for this calculation and are not stored.
""")

"""
VCR Calculator - Streamlit App
Critical Velocity（CV）テストからトレーニングゾーンとレース予測を計算

Version: 1.2.0
"""

import streamlit as st

from src.config import (
    APP_NAME,
    APP_VERSION,
    CV_MODES,
    D_PRIME_DEFAULTS_BY_TEST,
    D_PRIME_PRESETS,
    D_PRIME_RANGE,
    DEFAULT_CV_MODE,
    DEFAULT_TEST_PROTOCOL,
    DEFAULT_UNIT_SYSTEM,
    DEFAULT_ZONE_SYSTEM,
    TEST_PROTOCOLS,
    TWO_POINT_PROTOCOL,
    UNIT_SYSTEMS,
)
from src.cv import (
    CVCalculatorError,
    calculate_cv_for_protocol,
    calculate_training_zones,
    check_realistic_pace,
    generate_hyperbolic_curve,
    list_zone_systems,
    predict_all_races,
    validate_2point_test,
    validate_fixed_duration_test,
)
from src.cv.units import miles_to_meters
from src.ui.components import (
    load_css,
    render_curve,
    render_cv_display,
    render_disclaimer,
    render_footer,
    render_header,
    render_predictions,
    render_warning_box,
    render_zones,
)

# =============================================
# ページ設定
# =============================================
st.set_page_config(
    page_title=f"{APP_NAME} v{APP_VERSION}",
    page_icon="🏃",
    layout="wide",
    initial_sidebar_state="collapsed"
)


# =============================================
# セッション状態の初期化
# =============================================
def init_session_state():
    """セッション状態を初期化"""
    if "cv_result" not in st.session_state:
        st.session_state.cv_result = None


# =============================================
# 入力フォーム
# =============================================
def render_settings() -> dict:
    """詳細設定（ゾーン方式・D'・CVモード・単位系）"""
    with st.expander("⚙️ Advanced settings"):
        col1, col2 = st.columns(2)
        with col1:
            zone_systems = list_zone_systems()
            zone_ids = [system.id for system in zone_systems]
            zone_system_id = st.selectbox(
                "Zone system",
                zone_ids,
                index=zone_ids.index(DEFAULT_ZONE_SYSTEM),
                format_func=lambda system_id: next(
                    system.name for system in zone_systems if system.id == system_id
                ),
            )
            st.caption(next(
                system.description for system in zone_systems if system.id == zone_system_id
            ))
            cv_mode = st.radio(
                "CV used for zones and predictions",
                list(CV_MODES.values()),
                index=list(CV_MODES.values()).index(DEFAULT_CV_MODE),
                format_func=lambda mode: "Unadjusted (raw)" if mode == CV_MODES["RAW"] else "Adjusted for D'",
                horizontal=True,
            )
        with col2:
            unit_system = st.radio(
                "Units",
                list(UNIT_SYSTEMS.values()),
                index=list(UNIT_SYSTEMS.values()).index(DEFAULT_UNIT_SYSTEM),
                horizontal=True,
            )
            preset_options = ["auto"] + list(D_PRIME_PRESETS.keys()) + ["custom"]
            d_prime_choice = st.selectbox(
                "D' (fixed-duration tests)",
                preset_options,
                format_func=lambda key: (
                    "Recommended for test" if key == "auto"
                    else "Custom" if key == "custom"
                    else D_PRIME_PRESETS[key]["label"]
                ),
            )
            custom_d_prime = None
            if d_prime_choice == "custom":
                custom_d_prime = st.number_input(
                    "Custom D' (m)",
                    min_value=float(D_PRIME_RANGE["MIN"]),
                    max_value=float(D_PRIME_RANGE["MAX"]),
                    value=250.0,
                    step=10.0,
                )

    if d_prime_choice == "auto":
        d_prime = None
    elif d_prime_choice == "custom":
        d_prime = custom_d_prime
    else:
        d_prime = D_PRIME_PRESETS[d_prime_choice]["value"]

    return {
        "zone_system_id": zone_system_id,
        "cv_mode": cv_mode,
        "unit_system": unit_system,
        "d_prime": d_prime,
    }


def render_test_inputs(protocol_id: str, unit_system: str) -> dict:
    """テスト結果の入力欄。入力値（未検証）を返す"""
    imperial = unit_system == UNIT_SYSTEMS["IMPERIAL"]

    if protocol_id == TWO_POINT_PROTOCOL:
        st.caption("Enter distances in meters and times as MM:SS or seconds.")
        col1, col2 = st.columns(2)
        with col1:
            st.markdown("**Test 1 (shorter, faster)**")
            distance1 = st.text_input("Distance 1 (m)", value="1500", key="distance1")
            time1 = st.text_input("Time 1", value="6:00", key="time1")
        with col2:
            st.markdown("**Test 2 (longer)**")
            distance2 = st.text_input("Distance 2 (m)", value="4200", key="distance2")
            time2 = st.text_input("Time 2", value="18:00", key="time2")
        return {
            "distance1": distance1,
            "time1": time1,
            "distance2": distance2,
            "time2": time2,
        }

    protocol = TEST_PROTOCOLS[protocol_id]
    min_meters, max_meters = protocol["distance_range"]
    if imperial:
        miles = st.number_input(
            f"Distance covered in {protocol['duration'] // 60} minutes (mi)",
            min_value=0.0,
            value=3.7,
            step=0.01,
        )
        distance = miles_to_meters(miles)
    else:
        distance = st.number_input(
            f"Distance covered in {protocol['duration'] // 60} minutes (m)",
            min_value=0.0,
            value=float(min(max(6000, min_meters), max_meters)),
            step=10.0,
        )
    return {"distance": distance}


def validate_inputs(protocol_id: str, raw_fields: dict) -> dict:
    """入力を検証し、{"valid", "errors", "fields"} を返す"""
    if protocol_id == TWO_POINT_PROTOCOL:
        result = validate_2point_test(**raw_fields)
        return {"valid": result["valid"], "errors": result["errors"], "fields": result["values"]}

    result = validate_fixed_duration_test(protocol_id, raw_fields["distance"])
    if not result["valid"]:
        return {"valid": False, "errors": {"distance": result["error"]}, "fields": {}}
    return {"valid": True, "errors": {}, "fields": {"distance": result["value"]}}


def pace_checks(protocol_id: str, fields: dict) -> list:
    """非現実的なペースの警告を集める"""
    if protocol_id == TWO_POINT_PROTOCOL:
        efforts = [(fields["distance1"], fields["time1"]), (fields["distance2"], fields["time2"])]
    else:
        efforts = [(fields["distance"], TEST_PROTOCOLS[protocol_id]["duration"])]

    warnings = []
    for distance, duration in efforts:
        check = check_realistic_pace(distance, duration)
        if not check["realistic"]:
            warnings.append(check["warning"])
    return warnings


# =============================================
# 結果表示
# =============================================
def render_results(cv_result, settings: dict) -> None:
    """CV・ゾーン・レース予測・カーブを表示"""
    unit_system = settings["unit_system"]
    velocity = cv_result.select_velocity(settings["cv_mode"])

    render_cv_display(cv_result, unit_system, settings["cv_mode"])

    zone_system = next(
        system for system in list_zone_systems() if system.id == settings["zone_system_id"]
    )
    try:
        zones = calculate_training_zones(velocity, zone_system.id, cv_result.d_prime)
        results = predict_all_races(velocity, cv_result.d_prime, cv_result.d_prime_estimated)
        curve = generate_hyperbolic_curve(velocity, cv_result.d_prime)
    except CVCalculatorError as e:
        st.error(f"Calculation failed: {e}")
        return

    col1, col2 = st.columns(2)
    with col1:
        render_zones(zones, unit_system, zone_system.name)
    with col2:
        render_predictions(results, unit_system, cv_result.d_prime_estimated)

    render_curve(curve, unit_system)


# =============================================
# メイン UI
# =============================================
def main():
    init_session_state()
    load_css()
    render_header()

    st.markdown("### 📝 Test result")
    protocol_ids = list(TEST_PROTOCOLS.keys())
    protocol_id = st.selectbox(
        "Test protocol",
        protocol_ids,
        index=protocol_ids.index(DEFAULT_TEST_PROTOCOL),
        format_func=lambda key: TEST_PROTOCOLS[key]["name"],
    )
    protocol = TEST_PROTOCOLS[protocol_id]
    st.caption(f"{protocol['description']} | Accuracy: {protocol['accuracy']}")
    if protocol_id in D_PRIME_DEFAULTS_BY_TEST:
        preset = D_PRIME_PRESETS[D_PRIME_DEFAULTS_BY_TEST[protocol_id]]
        st.caption(f"Recommended D': {preset['label']}")

    settings = render_settings()
    raw_fields = render_test_inputs(protocol_id, settings["unit_system"])

    validation = validate_inputs(protocol_id, raw_fields)
    for field, message in validation["errors"].items():
        st.error(f"{field}: {message}")

    warnings = pace_checks(protocol_id, validation["fields"]) if validation["valid"] else []
    for warning in warnings:
        render_warning_box("⚠️ Unrealistic pace", warning.message)
    confirmed = True
    if warnings:
        confirmed = st.checkbox("I have verified my input and want to continue")

    st.markdown("---")
    if st.button("🚀 Calculate", use_container_width=True, type="primary",
                 disabled=not (validation["valid"] and confirmed)):
        d_prime = None if protocol_id == TWO_POINT_PROTOCOL else settings["d_prime"]
        try:
            st.session_state.cv_result = calculate_cv_for_protocol(
                protocol_id, d_prime, **validation["fields"]
            )
        except CVCalculatorError as e:
            st.session_state.cv_result = None
            st.error(f"Calculation failed: {e}")

    if st.session_state.cv_result is not None:
        # 詳細設定の変更は再計算なしで表示に反映する
        render_results(st.session_state.cv_result, settings)

    render_disclaimer()
    render_footer()


if __name__ == "__main__":
    main()

"""
VCR Calculator - Result Tables
計算結果を表示用のDataFrameに変換
"""
from typing import Iterable, List

import pandas as pd

from ..config import DEFAULT_UNIT_SYSTEM, UNIT_SYSTEMS
from ..cv.formatters import format_distance, format_pace, format_pace_range, seconds_to_time
from ..cv.models import CurvePoint, RaceResult, Zone
from ..cv.units import velocity_to_pace


def zones_to_dataframe(zones: List[Zone], unit_system: str = DEFAULT_UNIT_SYSTEM) -> pd.DataFrame:
    """ゾーン一覧をテーブルにする

    Args:
        zones: calculate_training_zones の結果
        unit_system: "metric" または "imperial"

    Returns:
        ゾーン番号をインデックスとするDataFrame
    """
    imperial = unit_system == UNIT_SYSTEMS["IMPERIAL"]
    rows = []
    for zone in zones:
        pace_min = zone.pace_min_sec_per_mile if imperial else zone.pace_min_sec_per_km
        pace_max = zone.pace_max_sec_per_mile if imperial else zone.pace_max_sec_per_km
        rows.append({
            "Zone": f"Z{zone.number}",
            "Name": zone.name,
            "Pace": format_pace_range(pace_min, pace_max, unit_system),
            "Min pace (s)": round(pace_min, 1),
            "Max pace (s)": round(pace_max, 1),
            "Velocity (m/s)": f"{zone.velocity_min:.2f} - {zone.velocity_max:.2f}",
            "Anchors": " → ".join(zone.race_anchors),
        })
    return pd.DataFrame(rows).set_index("Zone")


def predictions_to_dataframe(results: List[RaceResult],
                             unit_system: str = DEFAULT_UNIT_SYSTEM) -> pd.DataFrame:
    """レース予測一覧をテーブルにする

    D'が推定値の場合は予測範囲（速い〜遅い）の列を加える。
    """
    imperial = unit_system == UNIT_SYSTEMS["IMPERIAL"]
    rows = []
    show_range = any(result.prediction.is_d_prime_estimated for result in results)

    for result in results:
        best = result.prediction.best
        pace = best.pace_sec_per_mile if imperial else best.pace_sec_per_km
        row = {
            "Race": result.name,
            "Distance": format_distance(result.distance_meters, unit_system),
            "Time": seconds_to_time(best.time_seconds),
            "Pace": format_pace(pace, unit_system),
            "Time (s)": round(best.time_seconds, 1),
        }
        if show_range:
            fast = result.prediction.min
            slow = result.prediction.max
            row["Range"] = (
                f"{seconds_to_time(fast.time_seconds) if fast else '—'} - "
                f"{seconds_to_time(slow.time_seconds) if slow else '—'}"
            )
        rows.append(row)

    return pd.DataFrame(rows)


def curve_to_dataframe(curve: Iterable[CurvePoint],
                       unit_system: str = DEFAULT_UNIT_SYSTEM) -> pd.DataFrame:
    """速度-時間カーブをグラフ用のDataFrameにする（インデックスは分）"""
    df = pd.DataFrame(
        [
            {
                "Duration (min)": point.time_seconds / 60,
                "Velocity (m/s)": point.velocity_ms,
                "Pace (s)": velocity_to_pace(point.velocity_ms, unit_system),
            }
            for point in curve
        ]
    )
    return df.set_index("Duration (min)")

"""
VCR Calculator - Formatters
時間・ペース・距離の表示用フォーマット
"""
import math
from typing import Optional

import pandas as pd

from ..config import UNIT_SYSTEMS
from .units import meters_to_km, meters_to_miles


def time_to_seconds(time_str: str) -> Optional[int]:
    """時間文字列を秒に変換

    Args:
        time_str: 時間文字列 (例: "1:05:00", "18:00", "360")

    Returns:
        秒数（変換できない場合はNone）
    """
    if time_str is None or pd.isna(time_str) or time_str == "":
        return None

    time_str = str(time_str).strip()

    try:
        parts = time_str.replace("：", ":").split(":")
        parts = [int(p) for p in parts]

        # 負の値や、2番目以降の60以上の値は形式エラー
        if any(p < 0 for p in parts) or any(p >= 60 for p in parts[1:]):
            return None

        if len(parts) == 3:
            # H:MM:SS
            return parts[0] * 3600 + parts[1] * 60 + parts[2]
        elif len(parts) == 2:
            # M:SS or MM:SS
            return parts[0] * 60 + parts[1]
        elif len(parts) == 1:
            return parts[0]
        else:
            return None
    except (ValueError, AttributeError):
        return None


def seconds_to_time(seconds: float, include_hours: bool = False) -> str:
    """秒を時間文字列に変換

    Args:
        seconds: 秒数
        include_hours: 時間を含めるかどうか

    Returns:
        時間文字列 (例: "1:23:45" or "3:47")
    """
    if seconds is None or not math.isfinite(seconds):
        return "N/A"

    hours = int(seconds // 3600)
    minutes = int((seconds % 3600) // 60)
    secs = int(seconds % 60)

    if include_hours or hours > 0:
        return f"{hours}:{minutes:02d}:{secs:02d}"
    else:
        return f"{minutes}:{secs:02d}"


def pace_unit_label(unit_system: str) -> str:
    return "mi" if unit_system == UNIT_SYSTEMS["IMPERIAL"] else "km"


def format_pace(seconds_per_unit: float, unit_system: str = UNIT_SYSTEMS["METRIC"]) -> str:
    """ペースを "M:SS/km" または "M:SS/mi" 形式にする"""
    return f"{seconds_to_time(seconds_per_unit)}/{pace_unit_label(unit_system)}"


def format_pace_range(pace_min_sec: float, pace_max_sec: float,
                      unit_system: str = UNIT_SYSTEMS["METRIC"]) -> str:
    """ゾーンのペース範囲を表示用にする

    Min pace（速い側）とMax pace（遅い側）を受け取り、遅い→速いの順で返す。
    """
    slower = format_pace(pace_max_sec, unit_system)
    faster = format_pace(pace_min_sec, unit_system)
    return f"{slower} - {faster}"


def format_distance(meters: float, unit_system: str = UNIT_SYSTEMS["METRIC"],
                    decimals: int = 2) -> str:
    if unit_system == UNIT_SYSTEMS["IMPERIAL"]:
        return f"{meters_to_miles(meters):.{decimals}f} mi"
    return f"{meters_to_km(meters):.{decimals}f} km"


def format_velocity(velocity_ms: float, decimals: int = 2) -> str:
    return f"{velocity_ms:.{decimals}f} m/s"

"""
VCR Calculator - Unit Conversions
距離・速度・ペースの単位変換

すべて純粋関数。0除算は例外にせずinf/nanを返すので、
入力の検証は呼び出し側で行うこと。
"""
import math

from ..config import METERS_PER_KM, METERS_PER_MILE, UNIT_SYSTEMS


def _divide(numerator: float, denominator: float) -> float:
    """IEEE754と同じ挙動の割り算（0除算はinf/nan）"""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def velocity_to_pace_per_km(velocity_ms: float) -> float:
    """速度（m/s）→ ペース（秒/km）"""
    return _divide(METERS_PER_KM, velocity_ms)


def velocity_to_pace_per_mile(velocity_ms: float) -> float:
    """速度（m/s）→ ペース（秒/mile）"""
    return _divide(METERS_PER_MILE, velocity_ms)


def pace_per_km_to_velocity(seconds_per_km: float) -> float:
    """ペース（秒/km）→ 速度（m/s）"""
    return _divide(METERS_PER_KM, seconds_per_km)


def pace_per_mile_to_velocity(seconds_per_mile: float) -> float:
    """ペース（秒/mile）→ 速度（m/s）"""
    return _divide(METERS_PER_MILE, seconds_per_mile)


def sec_per_km_to_sec_per_mile(seconds_per_km: float) -> float:
    return seconds_per_km * (METERS_PER_MILE / METERS_PER_KM)


def sec_per_mile_to_sec_per_km(seconds_per_mile: float) -> float:
    return seconds_per_mile * (METERS_PER_KM / METERS_PER_MILE)


def meters_to_miles(meters: float) -> float:
    return meters / METERS_PER_MILE


def miles_to_meters(miles: float) -> float:
    return miles * METERS_PER_MILE


def meters_to_km(meters: float) -> float:
    return meters / METERS_PER_KM


def km_to_meters(km: float) -> float:
    return km * METERS_PER_KM


def velocity_to_pace(velocity_ms: float, unit_system: str) -> float:
    """単位系に応じたペースを返す（metric: 秒/km, imperial: 秒/mile）

    Args:
        velocity_ms: 速度（m/s）
        unit_system: "metric" または "imperial"

    Returns:
        ペース（秒/単位距離）
    """
    if unit_system == UNIT_SYSTEMS["METRIC"]:
        return velocity_to_pace_per_km(velocity_ms)
    if unit_system == UNIT_SYSTEMS["IMPERIAL"]:
        return velocity_to_pace_per_mile(velocity_ms)
    raise ValueError(f"Unknown unit system: {unit_system}")

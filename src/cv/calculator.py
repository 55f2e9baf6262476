"""
VCR Calculator - Critical Velocity Calculator
テスト結果からCritical Velocity（CV）とD'を計算するロジック

Tom Schwartz（Tinman）方式の固定時間テストと、
距離 = CV × 時間 + D' の2点解法に基づく。
"""
import math
from typing import Optional

from ..config import (
    D_PRIME_DEFAULTS_BY_TEST,
    D_PRIME_PRESETS,
    D_PRIME_RANGE,
    DEFAULT_D_PRIME,
    TWO_POINT_PROTOCOL,
    get_protocol_for_duration,
    get_test_protocol,
)
from .errors import InvalidInputError
from .formatters import seconds_to_time
from .models import CVResult, FixedDurationTest, TestInput, TwoPointTest
from .units import velocity_to_pace_per_km


def _require_positive(**values) -> None:
    """すべての値が正の有限数であることを確認"""
    for name, value in values.items():
        if value is None or isinstance(value, bool) or not isinstance(value, (int, float)):
            raise InvalidInputError(f"{name} must be a number, got {value!r}")
        if not math.isfinite(value):
            raise InvalidInputError(f"{name} must be a finite number, got {value}")
        if value <= 0:
            raise InvalidInputError(f"{name} must be a positive number, got {value}")


def estimate_d_prime() -> float:
    """1点テスト用の母集団ベースのD'推定値（保守的な中間値）"""
    return DEFAULT_D_PRIME


def recommended_d_prime(duration: float) -> float:
    """テスト時間に対する推奨D'を返す

    テスト時間が長いほど無酸素性の寄与が小さいので、低めの値になる。
    対応するプロトコルがない場合はデフォルト値。
    """
    protocol_id = get_protocol_for_duration(duration)
    preset_id = D_PRIME_DEFAULTS_BY_TEST.get(protocol_id)
    if preset_id is None:
        return estimate_d_prime()
    return D_PRIME_PRESETS[preset_id]["value"]


def clamp_d_prime(d_prime: float) -> float:
    """ユーザー指定のD'を有効範囲（50〜500m）に収める"""
    return max(D_PRIME_RANGE["MIN"], min(D_PRIME_RANGE["MAX"], d_prime))


def resolve_d_prime(duration: float, d_prime: Optional[float] = None) -> float:
    """固定時間テストで使うD'を決める

    Args:
        duration: テスト時間（秒）
        d_prime: ユーザー指定のD'（Noneならプロトコル推奨値）

    Returns:
        D'（m）
    """
    if d_prime is None:
        return recommended_d_prime(duration)
    if isinstance(d_prime, bool) or not isinstance(d_prime, (int, float)) or not math.isfinite(d_prime):
        raise InvalidInputError(f"D' must be a finite number, got {d_prime!r}")
    return clamp_d_prime(d_prime)


def calculate_cv_fixed_duration(distance: float, duration: float,
                                d_prime: Optional[float] = None,
                                protocol_id: Optional[str] = None) -> CVResult:
    """固定時間の1本走からCVを計算

    D'はデータから求めず、仮定値（推奨プリセットまたはユーザー指定）を使う。

    Args:
        distance: 走行距離（m）
        duration: テスト時間（秒）
        d_prime: ユーザー指定のD'（m）。Noneなら推奨値
        protocol_id: プロトコルID（ログ用。省略時は時間から推定）

    Returns:
        CVResult

    Raises:
        InvalidInputError: 値が正の有限数でない、または距離がD'以下
    """
    _require_positive(distance=distance, duration=duration)

    d_prime = resolve_d_prime(duration, d_prime)
    if protocol_id is None:
        protocol_id = get_protocol_for_duration(duration)

    velocity_ms_raw = distance / duration
    adjusted_distance = distance - d_prime
    if adjusted_distance <= 0:
        raise InvalidInputError(
            f"Distance ({distance:.0f}m) must be greater than D' ({d_prime:.0f}m)"
        )
    velocity_ms = adjusted_distance / duration

    pace_sec_per_km = velocity_to_pace_per_km(velocity_ms)
    pace_sec_per_km_raw = velocity_to_pace_per_km(velocity_ms_raw)

    calculation_log = (
        f"[Calculation] {protocol_id or 'fixed-duration'} test\n"
        f"Raw CV = {distance:.0f} / {duration:.0f} = {velocity_ms_raw:.4f} m/s "
        f"({seconds_to_time(pace_sec_per_km_raw)}/km)\n"
        f"D' (estimated) = {d_prime:.0f} m\n"
        f"Adjusted distance = {distance:.0f} - {d_prime:.0f} = {adjusted_distance:.0f} m\n"
        f"Adjusted CV = {adjusted_distance:.0f} / {duration:.0f} = {velocity_ms:.4f} m/s "
        f"({seconds_to_time(pace_sec_per_km)}/km)"
    )

    return CVResult(
        velocity_ms=velocity_ms,
        velocity_ms_raw=velocity_ms_raw,
        pace_sec_per_km=pace_sec_per_km,
        pace_sec_per_km_raw=pace_sec_per_km_raw,
        d_prime=d_prime,
        d_prime_estimated=True,
        adjusted_distance=adjusted_distance,
        protocol_id=protocol_id,
        calculation_log=calculation_log,
    )


def _calculate_cv_for_fixed_protocol(protocol_id: str, distance: float,
                                     d_prime: Optional[float]) -> CVResult:
    duration = get_test_protocol(protocol_id)["duration"]
    return calculate_cv_fixed_duration(distance, duration, d_prime, protocol_id)


def calculate_cv_cooper(distance: float, d_prime: Optional[float] = None) -> CVResult:
    """Cooper 12分走からCVを計算"""
    return _calculate_cv_for_fixed_protocol("cooper", distance, d_prime)


def calculate_cv_30min(distance: float, d_prime: Optional[float] = None) -> CVResult:
    """30分走からCVを計算"""
    return _calculate_cv_for_fixed_protocol("30min", distance, d_prime)


def calculate_cv_45min(distance: float, d_prime: Optional[float] = None) -> CVResult:
    return _calculate_cv_for_fixed_protocol("45min", distance, d_prime)


def calculate_cv_60min(distance: float, d_prime: Optional[float] = None) -> CVResult:
    return _calculate_cv_for_fixed_protocol("60min", distance, d_prime)


def calculate_cv_2point(distance1: float, time1: float,
                        distance2: float, time2: float) -> CVResult:
    """2点テストからCVとD'を同時に求める

    距離 = CV × 時間 + D' の直線を2点から一意に決める。

    Args:
        distance1: 1本目の距離（m、短い方）
        time1: 1本目の時間（秒）
        distance2: 2本目の距離（m、長い方）
        time2: 2本目の時間（秒）

    Returns:
        CVResult（d_prime_estimated=False）

    Raises:
        InvalidInputError: 値が不正、または2本目が1本目より長く・遠くない、
            または1本目の方が遅くD'が負になる場合
    """
    _require_positive(distance1=distance1, time1=time1, distance2=distance2, time2=time2)

    # バリデータを通っているはずだが、負のD'を黙って返さないよう再確認
    if time1 >= time2:
        raise InvalidInputError("Second test must be longer than first test")
    if distance1 >= distance2:
        raise InvalidInputError("Second test distance should be greater than first test distance")

    velocity_ms = (distance2 - distance1) / (time2 - time1)
    d_prime = (distance1 * time2 - distance2 * time1) / (time2 - time1)
    if d_prime < 0:
        raise InvalidInputError(
            f"First test must be faster-paced than the second test (D' would be {d_prime:.1f}m)"
        )

    speed1 = distance1 / time1
    speed2 = distance2 / time2
    velocity_ms_raw = (speed1 + speed2) / 2
    adjusted_distance = ((distance1 - d_prime) + (distance2 - d_prime)) / 2

    pace_sec_per_km = velocity_to_pace_per_km(velocity_ms)
    pace_sec_per_km_raw = velocity_to_pace_per_km(velocity_ms_raw)

    calculation_log = (
        f"[Calculation] 2-point test\n"
        f"CV = ({distance2:.0f} - {distance1:.0f}) / ({time2:.0f} - {time1:.0f}) "
        f"= {velocity_ms:.4f} m/s ({seconds_to_time(pace_sec_per_km)}/km)\n"
        f"D' = ({distance1:.0f} x {time2:.0f} - {distance2:.0f} x {time1:.0f}) / "
        f"({time2:.0f} - {time1:.0f}) = {d_prime:.1f} m\n"
        f"Raw CV = ({speed1:.4f} + {speed2:.4f}) / 2 = {velocity_ms_raw:.4f} m/s "
        f"({seconds_to_time(pace_sec_per_km_raw)}/km)"
    )

    return CVResult(
        velocity_ms=velocity_ms,
        velocity_ms_raw=velocity_ms_raw,
        pace_sec_per_km=pace_sec_per_km,
        pace_sec_per_km_raw=pace_sec_per_km_raw,
        d_prime=d_prime,
        d_prime_estimated=False,
        adjusted_distance=adjusted_distance,
        protocol_id=TWO_POINT_PROTOCOL,
        calculation_log=calculation_log,
    )


def calculate_cv(test_input: TestInput, d_prime: Optional[float] = None) -> CVResult:
    """テスト入力の種類に応じてCVを計算

    Args:
        test_input: FixedDurationTest または TwoPointTest
        d_prime: 固定時間テスト用のユーザー指定D'（2点テストでは無視）

    Returns:
        CVResult
    """
    if isinstance(test_input, FixedDurationTest):
        return calculate_cv_fixed_duration(
            test_input.distance_meters,
            test_input.duration_seconds,
            d_prime,
            test_input.protocol_id,
        )
    if isinstance(test_input, TwoPointTest):
        return calculate_cv_2point(
            test_input.distance1, test_input.time1,
            test_input.distance2, test_input.time2,
        )
    raise TypeError(f"Unsupported test input: {type(test_input).__name__}")


def build_test_input(protocol_id: str, **fields) -> TestInput:
    """プロトコルIDと入力値からテスト入力を作る

    固定時間テスト: distance
    2点テスト: distance1, time1, distance2, time2
    """
    protocol = get_test_protocol(protocol_id)
    if protocol_id == TWO_POINT_PROTOCOL:
        return TwoPointTest(
            distance1=fields["distance1"],
            time1=fields["time1"],
            distance2=fields["distance2"],
            time2=fields["time2"],
        )
    return FixedDurationTest(
        distance_meters=fields["distance"],
        duration_seconds=protocol["duration"],
        protocol_id=protocol_id,
    )


def calculate_cv_for_protocol(protocol_id: str, d_prime: Optional[float] = None,
                              **fields) -> CVResult:
    """プロトコルIDを指定してCVを計算（UIからの入口）"""
    return calculate_cv(build_test_input(protocol_id, **fields), d_prime)

"""
VCR Calculator - Input Validators
テスト入力値の検証

検証エラーは例外で外に投げず、フィールドごとのメッセージとして返す。
UIで複数のエラーを同時に表示できるようにするため。
"""
import math
from typing import Optional

from ..config import REALISTIC_PACE_RANGE, TWO_POINT_BOUNDS, get_test_protocol
from .errors import (
    InvalidInputError,
    InvalidRangeError,
    InvalidRelationError,
    UnrealisticPaceWarning,
)
from .formatters import seconds_to_time, time_to_seconds
from .units import velocity_to_pace_per_km


def _parse_number(value, field: str, label: str, accept_time_format: bool = False) -> float:
    """入力値を正の有限数に変換（失敗時はInvalidRangeError）"""
    if value is None or (isinstance(value, str) and value.strip() == ""):
        raise InvalidRangeError(f"{label} is required", [field])

    if isinstance(value, bool):
        raise InvalidRangeError(f"{label} must be a number", [field])

    if accept_time_format and isinstance(value, str) and ":" in value:
        seconds = time_to_seconds(value)
        if seconds is None:
            raise InvalidRangeError(f"{label} must be a number or MM:SS", [field])
        num = float(seconds)
    else:
        try:
            num = float(value)
        except (TypeError, ValueError):
            raise InvalidRangeError(f"{label} must be a number", [field])

    if math.isnan(num):
        raise InvalidRangeError(f"{label} must be a number", [field])
    if not math.isfinite(num):
        raise InvalidRangeError(f"{label} must be a finite number", [field])
    if num <= 0:
        raise InvalidRangeError(f"{label} must be positive", [field])
    return num


def _check_bounds(num: float, min_value: float, max_value: float,
                  field: str, label: str, unit: str) -> float:
    if num < min_value:
        raise InvalidRangeError(f"{label} must be at least {min_value} {unit}", [field])
    if num > max_value:
        raise InvalidRangeError(f"{label} must be at most {max_value} {unit}", [field])
    return num


def validate_distance(value, min_meters: float = TWO_POINT_BOUNDS["distance"][0],
                      max_meters: float = TWO_POINT_BOUNDS["distance"][1],
                      field: str = "distance") -> dict:
    """距離（m）を検証

    Args:
        value: 入力値（数値または数値文字列）
        min_meters: 最小距離
        max_meters: 最大距離
        field: フィールド名

    Returns:
        dict: {"valid": bool, "value": float or None, "error": str or None}
    """
    try:
        num = _parse_number(value, field, "Distance")
        num = _check_bounds(num, min_meters, max_meters, field, "Distance", "meters")
    except InvalidRangeError as e:
        return {"valid": False, "value": None, "error": e.message}
    return {"valid": True, "value": num, "error": None}


def validate_time(value, min_seconds: float = TWO_POINT_BOUNDS["time"][0],
                  max_seconds: float = TWO_POINT_BOUNDS["time"][1],
                  field: str = "time") -> dict:
    """時間（秒）を検証。"MM:SS" / "H:MM:SS" 形式も受け付ける

    Returns:
        dict: {"valid": bool, "value": float or None, "error": str or None}
    """
    try:
        num = _parse_number(value, field, "Time", accept_time_format=True)
        num = _check_bounds(num, min_seconds, max_seconds, field, "Time", "seconds")
    except InvalidRangeError as e:
        return {"valid": False, "value": None, "error": e.message}
    return {"valid": True, "value": num, "error": None}


def validate_fixed_duration_test(protocol_id: str, distance) -> dict:
    """固定時間テストの距離をプロトコルごとの範囲で検証"""
    protocol = get_test_protocol(protocol_id)
    if protocol["distance_range"] is None:
        raise ValueError(f"Protocol '{protocol_id}' is not a fixed-duration test")

    min_meters, max_meters = protocol["distance_range"]
    return validate_distance(distance, min_meters, max_meters)


def _check_2point_relations(d1: float, t1: float, d2: float, t2: float) -> list:
    """2点テストのフィールド間の関係を検証し、違反をすべて返す"""
    violations = []

    if t1 >= t2:
        violations.append(InvalidRelationError(
            "Second test must be longer than first test", ["time2"]))

    if d1 >= d2:
        violations.append(InvalidRelationError(
            "Second test distance should be greater than first test distance", ["distance2"]))

    # 短い方の平均速度が速くないと、D'が負になり物理的に意味をなさない
    if d1 / t1 <= d2 / t2:
        violations.append(InvalidRelationError(
            "First test must be run at a faster pace than the second test",
            ["distance2", "time2"]))

    return violations


def validate_2point_test(distance1, time1, distance2, time2) -> dict:
    """2点テストの入力を検証

    Returns:
        dict: {
            "valid": bool,
            "errors": {フィールド名: メッセージ},
            "values": {フィールド名: 数値}（有効なもののみ）
        }
    """
    errors = {}
    values = {}

    min_d, max_d = TWO_POINT_BOUNDS["distance"]
    min_t, max_t = TWO_POINT_BOUNDS["time"]

    checks = [
        ("distance1", validate_distance(distance1, min_d, max_d, "distance1")),
        ("time1", validate_time(time1, min_t, max_t, "time1")),
        ("distance2", validate_distance(distance2, min_d, max_d, "distance2")),
        ("time2", validate_time(time2, min_t, max_t, "time2")),
    ]
    for field, result in checks:
        if result["valid"]:
            values[field] = result["value"]
        else:
            errors[field] = result["error"]

    # 個別の値がすべて有効な場合のみ関係をチェック
    if not errors:
        violations = _check_2point_relations(
            values["distance1"], values["time1"], values["distance2"], values["time2"]
        )
        for violation in violations:
            for field in violation.fields:
                errors.setdefault(field, violation.message)

    return {
        "valid": len(errors) == 0,
        "errors": errors,
        "values": values,
    }


def check_realistic_pace(distance: float, duration: float,
                         min_pace: float = REALISTIC_PACE_RANGE["MIN"],
                         max_pace: float = REALISTIC_PACE_RANGE["MAX"]) -> dict:
    """距離と時間から求めたペースが現実的かチェック（警告のみ、拒否はしない）

    Returns:
        dict: {
            "realistic": bool,
            "warning": UnrealisticPaceWarning or None,
            "pace_sec_per_km": float
        }

    Raises:
        InvalidInputError: 距離や時間が正の有限数でない
    """
    for name, value in (("distance", distance), ("duration", duration)):
        if not math.isfinite(value) or value <= 0:
            raise InvalidInputError(f"{name} must be a positive number, got {value!r}")

    pace_sec_per_km = velocity_to_pace_per_km(distance / duration)
    warning: Optional[UnrealisticPaceWarning] = None

    if pace_sec_per_km < min_pace:
        warning = UnrealisticPaceWarning(
            f"This pace ({seconds_to_time(pace_sec_per_km)}/km) is faster than world records. "
            f"Please verify your input.",
            pace_sec_per_km,
        )
    elif pace_sec_per_km > max_pace:
        warning = UnrealisticPaceWarning(
            f"This pace ({seconds_to_time(pace_sec_per_km)}/km) is very slow. "
            f"Please verify your input.",
            pace_sec_per_km,
        )

    return {
        "realistic": warning is None,
        "warning": warning,
        "pace_sec_per_km": pace_sec_per_km,
    }

"""
VCR Calculator - Race Predictions
CVとD'からレースタイムを予測

双曲線モデル: 距離 = CV × 時間 + D'
Riegel式: t2 = t1 × (d2 / d1) ^ fatigue_factor（ゾーン4-5のアンカー専用）
"""
import math
from typing import List, Optional

from ..config import (
    D_PRIME_UNCERTAINTY,
    RIEGEL_FATIGUE_FACTOR,
    RIEGEL_REFERENCE_DURATION,
    get_race_distances,
)
from .errors import InvalidInputError
from .models import PredictionRange, RacePrediction, RaceResult
from .units import velocity_to_pace_per_km, velocity_to_pace_per_mile


def _check_model_inputs(critical_speed: float, d_prime: float) -> None:
    if not isinstance(critical_speed, (int, float)) or not math.isfinite(critical_speed) \
            or critical_speed <= 0:
        raise InvalidInputError(f"Critical speed must be a positive number, got {critical_speed!r}")
    if not isinstance(d_prime, (int, float)) or not math.isfinite(d_prime) or d_prime < 0:
        raise InvalidInputError(f"D' must be a non-negative number, got {d_prime!r}")


def _make_prediction(distance_meters: float, time_seconds: float) -> RacePrediction:
    velocity_ms = distance_meters / time_seconds
    return RacePrediction(
        distance_meters=distance_meters,
        time_seconds=time_seconds,
        pace_sec_per_km=velocity_to_pace_per_km(velocity_ms),
        pace_sec_per_mile=velocity_to_pace_per_mile(velocity_ms),
    )


def predict_race_time(distance_meters: float, critical_speed: float,
                      d_prime: float) -> Optional[RacePrediction]:
    """双曲線モデルでレースタイムを予測

    時間 = (距離 - D') / CV

    Args:
        distance_meters: レース距離（m）
        critical_speed: CV（m/s）
        d_prime: D'（m）

    Returns:
        RacePrediction。距離がD'以下の場合はモデルが適用できないのでNone

    Raises:
        InvalidInputError: 距離やCVが正でない、D'が負
    """
    if not isinstance(distance_meters, (int, float)) or not math.isfinite(distance_meters) \
            or distance_meters <= 0:
        raise InvalidInputError(f"Distance must be a positive number, got {distance_meters!r}")
    _check_model_inputs(critical_speed, d_prime)

    # 無酸素性容量だけで走り切れる距離は予測できない
    if distance_meters <= d_prime:
        return None

    time_seconds = (distance_meters - d_prime) / critical_speed
    return _make_prediction(distance_meters, time_seconds)


def predict_race_time_with_confidence(distance_meters: float, critical_speed: float,
                                      d_prime: float, is_d_prime_estimated: bool = False,
                                      uncertainty: float = D_PRIME_UNCERTAINTY
                                      ) -> Optional[PredictionRange]:
    """D'の不確かさを考慮した信頼区間つき予測

    D'が推定値の場合のみ、D' ± 不確かさ で2つの予測を追加する。
    CVを固定すると時間 = (距離 - D') / CV はD'について単調減少なので、
    D' + 不確かさ が速い側（min）、D' - 不確かさ が遅い側（max）になる。

    Args:
        distance_meters: レース距離（m）
        critical_speed: CV（m/s）
        d_prime: D'（m）
        is_d_prime_estimated: D'が推定値か（2点テストの実測値ならFalse）
        uncertainty: D'の不確かさ（m）

    Returns:
        PredictionRange（予測できない距離はNone）
        D' + 不確かさ が距離以上になる場合、minはNone
    """
    best = predict_race_time(distance_meters, critical_speed, d_prime)
    if best is None:
        return None

    if not is_d_prime_estimated:
        return PredictionRange(best=best, is_d_prime_estimated=False)

    d_prime_low = max(0, d_prime - uncertainty)
    d_prime_high = d_prime + uncertainty

    return PredictionRange(
        best=best,
        min=predict_race_time(distance_meters, critical_speed, d_prime_high),
        max=predict_race_time(distance_meters, critical_speed, d_prime_low),
        is_d_prime_estimated=True,
    )


def predict_all_races(critical_speed: float, d_prime: float,
                      is_d_prime_estimated: bool = False,
                      typical_only: bool = True) -> List[RaceResult]:
    """標準レース距離をすべて予測

    Args:
        critical_speed: CV（m/s）
        d_prime: D'（m）
        is_d_prime_estimated: D'が推定値か
        typical_only: 代表的な距離のみ

    Returns:
        RaceResultのリスト（D'以下の短すぎる距離は除外）
    """
    results = []
    for race in get_race_distances(typical_only):
        prediction = predict_race_time_with_confidence(
            race["distance_meters"], critical_speed, d_prime, is_d_prime_estimated
        )
        if prediction is None:
            continue
        results.append(RaceResult(
            race_id=race["id"],
            name=race["name"],
            distance_meters=race["distance_meters"],
            prediction=prediction,
        ))
    return results


def predict_race_time_riegel(critical_speed: float, d_prime: float,
                             target_distance: float,
                             fatigue_factor: float = RIEGEL_FATIGUE_FACTOR,
                             reference_duration: float = RIEGEL_REFERENCE_DURATION
                             ) -> RacePrediction:
    """Riegel式でレースタイムを予測（ゾーン4-5のアンカー専用）

    双曲線モデルの基準時間（30分）での距離を基準ペアとし、
    t2 = t1 × (d2 / d1) ^ fatigue_factor で目標距離へ外挿する。
    双曲線モデルの予測とは別物なので、直接比較しないこと。

    Args:
        critical_speed: CV（m/s）
        d_prime: D'（m）
        target_distance: 目標距離（m）
        fatigue_factor: 疲労係数（1.06〜1.08）
        reference_duration: 基準時間（秒）

    Returns:
        RacePrediction
    """
    _check_model_inputs(critical_speed, d_prime)
    if not math.isfinite(target_distance) or target_distance <= 0:
        raise InvalidInputError(f"Target distance must be a positive number, got {target_distance!r}")
    if not math.isfinite(fatigue_factor) or fatigue_factor <= 0:
        raise InvalidInputError(f"Fatigue factor must be a positive number, got {fatigue_factor!r}")
    if not math.isfinite(reference_duration) or reference_duration <= 0:
        raise InvalidInputError(
            f"Reference duration must be a positive number, got {reference_duration!r}"
        )

    reference_distance = critical_speed * reference_duration + d_prime
    time_seconds = reference_duration * (target_distance / reference_distance) ** fatigue_factor
    return _make_prediction(target_distance, time_seconds)

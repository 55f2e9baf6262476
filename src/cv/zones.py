"""
VCR Calculator - Training Zones
CVからトレーニングゾーン（5段階）を計算

2つの方式を選択できる:
1. Offset-Based: ゾーン1-3はCVの割合、ゾーン4-5はCVペースからの固定秒数
   （Front Runner SportsによるLange & Pöhlitz方式の実装）
2. Race-Prediction-Based: ゾーン1-3は同じ割合、ゾーン4-5はRiegel式の予測レースペース
   （Lange & Pöhlitz 1995のオリジナル）
   ゾーン3の上限は10Kペースを超えないよう抑える

各ゾーンの境界は「割合」「固定秒数」「レースアンカー」のいずれかのルールで表し、
共通の resolve_boundary で評価する。
"""
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from ..config import (
    DEFAULT_ZONE_SYSTEM,
    RIEGEL_FATIGUE_FACTOR,
    ZONE_4_LOWER_FRACTION,
    ZONE_NAMES,
    ZONE_PERCENT_BOUNDS,
    ZONE_RACE_ANCHORS,
    ZONE_TIME_OFFSETS,
)
from .errors import InvalidInputError, MissingDPrimeError
from .models import Zone
from .races import predict_race_time_riegel
from .units import (
    pace_per_km_to_velocity,
    velocity_to_pace_per_km,
    velocity_to_pace_per_mile,
)


# =============================================
# 境界ルール
# =============================================
@dataclass(frozen=True)
class PercentageBound:
    """CV速度 × fraction"""
    fraction: float


@dataclass(frozen=True)
class FixedTimeOffset:
    """CVペース（秒/km）から seconds を引いたペース

    高強度ではコーチが「CVペースより何秒速い」で考えるため、
    速度の割合ではなくペース上で計算してから速度に戻す。
    """
    seconds: float


@dataclass(frozen=True)
class RaceAnchor:
    """Riegel式で予測した distance_meters のレースペース"""
    distance_meters: float
    label: str


@dataclass(frozen=True)
class SlowerOf:
    """複数ルールのうち遅い方（速度が小さい方）

    割合の境界とレースアンカーが隣り合うとき、重ならないよう上限を抑える。
    """
    rules: Tuple["BoundaryRule", ...]


BoundaryRule = Union[PercentageBound, FixedTimeOffset, RaceAnchor, SlowerOf]


def _iter_rules(rule: BoundaryRule):
    """複合ルールを展開して単純なルールを列挙"""
    if isinstance(rule, SlowerOf):
        for child in rule.rules:
            yield from _iter_rules(child)
    else:
        yield rule


@dataclass(frozen=True)
class ZoneDefinition:
    """ゾーン定義。lowerが遅い側、upperが速い側の境界"""
    number: int
    name: str
    lower: BoundaryRule
    upper: BoundaryRule


@dataclass(frozen=True)
class ZoneSystem:
    """ゾーン計算方式（不変の設定データ）"""
    id: str
    name: str
    description: str
    zones: Tuple[ZoneDefinition, ...]
    fatigue_factor: Optional[float] = None

    @property
    def requires_d_prime(self) -> bool:
        return any(
            isinstance(rule, RaceAnchor)
            for zone in self.zones
            for boundary in (zone.lower, zone.upper)
            for rule in _iter_rules(boundary)
        )


def _percentage_zones() -> Tuple[ZoneDefinition, ...]:
    """ゾーン1-3（両方式共通）"""
    return tuple(
        ZoneDefinition(
            number=number,
            name=ZONE_NAMES[number],
            lower=PercentageBound(lower),
            upper=PercentageBound(upper),
        )
        for number, (lower, upper) in sorted(ZONE_PERCENT_BOUNDS.items())
    )


def _race_anchor_zone(number: int) -> ZoneDefinition:
    (slow_distance, slow_label), (fast_distance, fast_label) = ZONE_RACE_ANCHORS[number]
    return ZoneDefinition(
        number=number,
        name=ZONE_NAMES[number],
        lower=RaceAnchor(slow_distance, slow_label),
        upper=RaceAnchor(fast_distance, fast_label),
    )


def _capped_tempo_zone() -> ZoneDefinition:
    """ゾーン3の上限を10Kペースで抑える

    CVが低くD'が小さいと、Riegel式の10KペースがCVの97.25%より遅くなり、
    そのままではゾーン3と4が重なる。その場合はゾーン4の下限と一致させる。
    """
    lower, upper = ZONE_PERCENT_BOUNDS[3]
    slow_distance, slow_label = ZONE_RACE_ANCHORS[4][0]
    return ZoneDefinition(
        number=3,
        name=ZONE_NAMES[3],
        lower=PercentageBound(lower),
        upper=SlowerOf((PercentageBound(upper), RaceAnchor(slow_distance, slow_label))),
    )


OFFSET_BASED = ZoneSystem(
    id="offset-based",
    name="Offset-Based",
    description="Percentages of CV for Z1-Z3, fixed time offsets from CV pace for Z4-Z5",
    zones=_percentage_zones() + (
        ZoneDefinition(
            number=4,
            name=ZONE_NAMES[4],
            lower=PercentageBound(ZONE_4_LOWER_FRACTION),
            upper=FixedTimeOffset(ZONE_TIME_OFFSETS[4]),
        ),
        ZoneDefinition(
            number=5,
            name=ZONE_NAMES[5],
            lower=FixedTimeOffset(ZONE_TIME_OFFSETS[5][0]),
            upper=FixedTimeOffset(ZONE_TIME_OFFSETS[5][1]),
        ),
    ),
)

RACE_PREDICTION_BASED = ZoneSystem(
    id="race-prediction-based",
    name="Race Prediction-Based",
    description=(
        "Percentages of CV for Z1-Z3 (Z3 capped at 10K pace), "
        "Riegel race-pace predictions for Z4-Z5"
    ),
    zones=_percentage_zones()[:2] + (
        _capped_tempo_zone(),
        _race_anchor_zone(4),
        _race_anchor_zone(5),
    ),
    fatigue_factor=RIEGEL_FATIGUE_FACTOR,
)

ZONE_SYSTEMS = {
    OFFSET_BASED.id: OFFSET_BASED,
    RACE_PREDICTION_BASED.id: RACE_PREDICTION_BASED,
}


def get_zone_system(zone_system_id: str) -> ZoneSystem:
    if zone_system_id not in ZONE_SYSTEMS:
        raise InvalidInputError(f"Unknown zone system: {zone_system_id}")
    return ZONE_SYSTEMS[zone_system_id]


def list_zone_systems() -> List[ZoneSystem]:
    return list(ZONE_SYSTEMS.values())


# =============================================
# ゾーン計算
# =============================================
def resolve_boundary(rule: BoundaryRule, cv_velocity_ms: float,
                     d_prime: Optional[float] = None,
                     fatigue_factor: float = RIEGEL_FATIGUE_FACTOR) -> float:
    """境界ルールを速度（m/s）に変換

    Args:
        rule: 境界ルール
        cv_velocity_ms: CV（m/s）
        d_prime: D'（m）。RaceAnchorの場合は必須
        fatigue_factor: Riegel式の疲労係数

    Returns:
        境界の速度（m/s）
    """
    if isinstance(rule, PercentageBound):
        return cv_velocity_ms * rule.fraction

    if isinstance(rule, FixedTimeOffset):
        cv_pace_sec_per_km = velocity_to_pace_per_km(cv_velocity_ms)
        offset_pace = cv_pace_sec_per_km - rule.seconds
        if offset_pace <= 0:
            raise InvalidInputError(
                f"CV pace ({cv_pace_sec_per_km:.1f} s/km) is too fast for a "
                f"{rule.seconds}s offset"
            )
        return pace_per_km_to_velocity(offset_pace)

    if isinstance(rule, RaceAnchor):
        if d_prime is None:
            raise MissingDPrimeError(
                f"D' is required for the {rule.label} race-pace anchor"
            )
        prediction = predict_race_time_riegel(
            cv_velocity_ms, d_prime, rule.distance_meters, fatigue_factor
        )
        return prediction.velocity_ms

    if isinstance(rule, SlowerOf):
        return min(
            resolve_boundary(child, cv_velocity_ms, d_prime, fatigue_factor)
            for child in rule.rules
        )

    raise TypeError(f"Unsupported boundary rule: {type(rule).__name__}")


def _build_zone(definition: ZoneDefinition, cv_velocity_ms: float,
                d_prime: Optional[float], fatigue_factor: float) -> Zone:
    velocity_min = resolve_boundary(definition.lower, cv_velocity_ms, d_prime, fatigue_factor)
    velocity_max = resolve_boundary(definition.upper, cv_velocity_ms, d_prime, fatigue_factor)

    race_anchors = tuple(
        rule.label for rule in (definition.lower, definition.upper)
        if isinstance(rule, RaceAnchor)
    )

    # 速度の最小 = ペースの最大（遅い側）、速度の最大 = ペースの最小（速い側）
    return Zone(
        number=definition.number,
        name=definition.name,
        velocity_min=velocity_min,
        velocity_max=velocity_max,
        pace_min_sec_per_km=velocity_to_pace_per_km(velocity_max),
        pace_max_sec_per_km=velocity_to_pace_per_km(velocity_min),
        pace_min_sec_per_mile=velocity_to_pace_per_mile(velocity_max),
        pace_max_sec_per_mile=velocity_to_pace_per_mile(velocity_min),
        race_anchors=race_anchors,
    )


def _check_cv_velocity(cv_velocity_ms: float) -> None:
    if isinstance(cv_velocity_ms, bool) or not isinstance(cv_velocity_ms, (int, float)) \
            or not math.isfinite(cv_velocity_ms) or cv_velocity_ms <= 0:
        raise InvalidInputError(f"CV velocity must be a positive number, got {cv_velocity_ms!r}")


def calculate_training_zones(cv_velocity_ms: float,
                             zone_system_id: str = DEFAULT_ZONE_SYSTEM,
                             d_prime: Optional[float] = None,
                             fatigue_factor: Optional[float] = None) -> List[Zone]:
    """CVからトレーニングゾーンを計算

    Args:
        cv_velocity_ms: CV（m/s）
        zone_system_id: ゾーン計算方式のID
        d_prime: D'（m）。Race-Prediction-Basedでは必須
        fatigue_factor: Riegel式の疲労係数（Noneなら方式のデフォルト）

    Returns:
        5つのZone（ゾーン1→5の順）

    Raises:
        InvalidInputError: CVが正でない、未知の方式
        MissingDPrimeError: D'が必要な方式でD'がない
    """
    _check_cv_velocity(cv_velocity_ms)
    zone_system = get_zone_system(zone_system_id)

    # 黙ってOffset-Basedにフォールバックしない
    if zone_system.requires_d_prime and d_prime is None:
        raise MissingDPrimeError(f"D' is required for {zone_system.name} zones")
    if d_prime is not None and (not math.isfinite(d_prime) or d_prime < 0):
        raise InvalidInputError(f"D' must be a non-negative number, got {d_prime!r}")

    if fatigue_factor is None:
        fatigue_factor = zone_system.fatigue_factor or RIEGEL_FATIGUE_FACTOR

    return [
        _build_zone(definition, cv_velocity_ms, d_prime, fatigue_factor)
        for definition in zone_system.zones
    ]


def calculate_race_prediction_based_zones(cv_velocity_ms: float, d_prime: float,
                                          fatigue_factor: float = RIEGEL_FATIGUE_FACTOR
                                          ) -> List[Zone]:
    """Race-Prediction-Based方式でゾーンを計算

    ゾーン4: 10Kペース（遅い側）〜 5Kペース（速い側）
    ゾーン5: 3Kペース（遅い側）〜 1500mペース（速い側）
    """
    return calculate_training_zones(
        cv_velocity_ms, RACE_PREDICTION_BASED.id, d_prime, fatigue_factor
    )


def get_zone(cv_velocity_ms: float, zone_number: int,
             zone_system_id: str = DEFAULT_ZONE_SYSTEM,
             d_prime: Optional[float] = None) -> Zone:
    """指定した番号のゾーンを返す"""
    zones = calculate_training_zones(cv_velocity_ms, zone_system_id, d_prime)
    for zone in zones:
        if zone.number == zone_number:
            return zone
    raise InvalidInputError(f"Invalid zone number: {zone_number}. Must be 1-5.")

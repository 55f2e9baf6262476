"""
VCR Calculator - Data Model
テスト入力・計算結果のデータ構造

すべて計算ごとに生成される不変オブジェクト。
"""
from dataclasses import dataclass
from typing import Optional, Tuple, Union

from ..config import CV_MODES
from .units import velocity_to_pace_per_mile


# =============================================
# テスト入力（プロトコルごとのバリアント）
# =============================================
@dataclass(frozen=True)
class FixedDurationTest:
    """固定時間の1本走（Cooper, 30分, 45分, 60分）"""
    distance_meters: float
    duration_seconds: float
    protocol_id: Optional[str] = None


@dataclass(frozen=True)
class TwoPointTest:
    """距離・時間の異なる2本の全力走"""
    distance1: float
    time1: float
    distance2: float
    time2: float


TestInput = Union[FixedDurationTest, TwoPointTest]


# =============================================
# 計算結果
# =============================================
@dataclass(frozen=True)
class CVResult:
    """Critical Velocityの計算結果

    Attributes:
        velocity_ms: D'補正後のCV（m/s）
        velocity_ms_raw: 補正前のCV（m/s）。D' > 0 なら velocity_ms 以上
        pace_sec_per_km: 補正後CVのペース（秒/km）
        pace_sec_per_km_raw: 補正前CVのペース（秒/km）
        d_prime: D'（m）
        d_prime_estimated: D'が仮定値ならTrue（2点テストのみFalse）
        adjusted_distance: D'を差し引いた距離（m）
        protocol_id: 使用したテストプロトコル
        calculation_log: 計算過程
    """
    velocity_ms: float
    velocity_ms_raw: float
    pace_sec_per_km: float
    pace_sec_per_km_raw: float
    d_prime: float
    d_prime_estimated: bool
    adjusted_distance: float
    protocol_id: Optional[str] = None
    calculation_log: str = ""

    @property
    def pace_sec_per_mile(self) -> float:
        return velocity_to_pace_per_mile(self.velocity_ms)

    @property
    def pace_sec_per_mile_raw(self) -> float:
        return velocity_to_pace_per_mile(self.velocity_ms_raw)

    def select_velocity(self, cv_mode: str) -> float:
        """CVモード（"raw" / "adjusted"）に応じた速度を返す"""
        if cv_mode == CV_MODES["RAW"]:
            return self.velocity_ms_raw
        if cv_mode == CV_MODES["ADJUSTED"]:
            return self.velocity_ms
        raise ValueError(f"Unknown CV mode: {cv_mode}")


@dataclass(frozen=True)
class Zone:
    """トレーニングゾーン

    pace_min_* は速い側（秒数が小さい）、pace_max_* は遅い側。
    速度の大小とは逆になるので注意。
    """
    number: int
    name: str
    velocity_min: float
    velocity_max: float
    pace_min_sec_per_km: float
    pace_max_sec_per_km: float
    pace_min_sec_per_mile: float
    pace_max_sec_per_mile: float
    race_anchors: Tuple[str, ...] = ()


@dataclass(frozen=True)
class RacePrediction:
    """1距離のレース予測"""
    distance_meters: float
    time_seconds: float
    pace_sec_per_km: float
    pace_sec_per_mile: float

    @property
    def velocity_ms(self) -> float:
        return self.distance_meters / self.time_seconds


@dataclass(frozen=True)
class PredictionRange:
    """信頼区間つきのレース予測

    min: D' + 不確かさ で予測（速い側）
    max: D' - 不確かさ（0未満は0）で予測（遅い側）
    D'が実測（2点テスト）の場合はどちらもNone
    """
    best: RacePrediction
    min: Optional[RacePrediction] = None
    max: Optional[RacePrediction] = None
    is_d_prime_estimated: bool = False


@dataclass(frozen=True)
class RaceResult:
    """標準レース距離ごとの予測結果"""
    race_id: str
    name: str
    distance_meters: float
    prediction: PredictionRange


@dataclass(frozen=True)
class CurvePoint:
    """速度-時間カーブの1点"""
    time_seconds: float
    distance_meters: float
    velocity_ms: float

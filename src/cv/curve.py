"""
VCR Calculator - Hyperbolic Curve
CVとD'から速度-時間カーブを生成（グラフ表示用）

予測には使わないこと。双曲線モデルをなぞるだけ。
"""
import math
from typing import Iterator

from ..config import CURVE_MAX_TIME, CURVE_MIN_TIME, CURVE_POINTS
from .errors import InvalidInputError
from .models import CurvePoint


class HyperbolicCurve:
    """速度-時間カーブのサンプル列

    遅延評価で、何度でも最初から反復できる。
    """

    def __init__(self, critical_speed: float, d_prime: float,
                 min_time: float, max_time: float, points: int):
        self.critical_speed = critical_speed
        self.d_prime = d_prime
        self.min_time = min_time
        self.max_time = max_time
        self.points = points

    def __len__(self) -> int:
        return self.points

    def __iter__(self) -> Iterator[CurvePoint]:
        time_step = (self.max_time - self.min_time) / (self.points - 1)
        for i in range(self.points):
            time_seconds = self.min_time + i * time_step
            distance_meters = self.critical_speed * time_seconds + self.d_prime
            yield CurvePoint(
                time_seconds=time_seconds,
                distance_meters=distance_meters,
                velocity_ms=distance_meters / time_seconds,
            )

    def __repr__(self) -> str:
        return (
            f"HyperbolicCurve(cv={self.critical_speed:.3f}, d_prime={self.d_prime:.0f}, "
            f"{self.min_time:.0f}-{self.max_time:.0f}s, points={self.points})"
        )


def generate_hyperbolic_curve(critical_speed: float, d_prime: float,
                              min_time: float = CURVE_MIN_TIME,
                              max_time: float = CURVE_MAX_TIME,
                              points: int = CURVE_POINTS) -> HyperbolicCurve:
    """速度-時間カーブを生成

    距離 = CV × 時間 + D'、速度 = 距離 / 時間 を等間隔の時間で評価する。

    Args:
        critical_speed: CV（m/s）
        d_prime: D'（m）
        min_time: 開始時間（秒、デフォルト3分）
        max_time: 終了時間（秒、デフォルト3時間）
        points: サンプル数

    Returns:
        HyperbolicCurve（CurvePointの反復可能オブジェクト）
    """
    if not math.isfinite(critical_speed) or critical_speed <= 0:
        raise InvalidInputError(f"Critical speed must be a positive number, got {critical_speed!r}")
    if not math.isfinite(d_prime) or d_prime < 0:
        raise InvalidInputError(f"D' must be a non-negative number, got {d_prime!r}")
    if not math.isfinite(min_time) or min_time <= 0:
        raise InvalidInputError(f"min_time must be a positive number, got {min_time!r}")
    if not math.isfinite(max_time) or max_time <= min_time:
        raise InvalidInputError("max_time must be greater than min_time")
    if isinstance(points, bool) or not isinstance(points, int) or points < 2:
        raise InvalidInputError(f"points must be an integer of at least 2, got {points!r}")

    return HyperbolicCurve(critical_speed, d_prime, min_time, max_time, points)

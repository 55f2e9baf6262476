"""
VCR Calculator - Race Prediction Tests
"""
import pytest
import sys
import os

# srcディレクトリをパスに追加
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.cv.errors import InvalidInputError
from src.cv.races import (
    predict_all_races,
    predict_race_time,
    predict_race_time_riegel,
    predict_race_time_with_confidence,
)


class TestPredictRaceTime:
    """双曲線モデルによる予測"""

    def test_1000m(self):
        """CV 3.75 m/s, D' 150m で1000mは (1000 - 150) / 3.75 秒"""
        prediction = predict_race_time(1000, 3.75, 150)
        assert prediction.time_seconds == pytest.approx(226.67, abs=0.01)
        assert prediction.distance_meters == 1000
        assert prediction.pace_sec_per_km == pytest.approx(226.67, abs=0.01)
        assert prediction.pace_sec_per_mile == pytest.approx(226.67 * 1.60934, abs=0.05)

    @pytest.mark.parametrize("distance", [100, 150])
    def test_distance_not_greater_than_d_prime(self, distance):
        """D'以下の距離は予測しない"""
        assert predict_race_time(distance, 3.75, 150) is None

    def test_zero_d_prime(self):
        prediction = predict_race_time(5000, 4.0, 0)
        assert prediction.time_seconds == pytest.approx(1250)

    @pytest.mark.parametrize("distance,cv,d_prime", [
        (0, 3.75, 150),
        (5000, 0, 150),
        (5000, -1, 150),
        (5000, 3.75, -10),
        (5000, float("inf"), 150),
    ])
    def test_invalid_input(self, distance, cv, d_prime):
        with pytest.raises(InvalidInputError):
            predict_race_time(distance, cv, d_prime)


class TestPredictWithConfidence:
    """D'推定値の信頼区間"""

    def test_estimated_range(self):
        result = predict_race_time_with_confidence(5000, 3.75, 150, is_d_prime_estimated=True)
        assert result.best.time_seconds == pytest.approx(4850 / 3.75)
        assert result.min.time_seconds == pytest.approx(4750 / 3.75)
        assert result.max.time_seconds == pytest.approx(4950 / 3.75)
        assert result.is_d_prime_estimated is True

    @pytest.mark.parametrize("distance", [1000, 1609.34, 5000, 10000, 21097.5, 42195])
    @pytest.mark.parametrize("cv,d_prime", [(3.0, 150), (3.75, 250), (5.0, 350)])
    def test_range_ordering(self, distance, cv, d_prime):
        """速い側 <= 最良推定 <= 遅い側"""
        result = predict_race_time_with_confidence(distance, cv, d_prime, is_d_prime_estimated=True)
        assert result.min.time_seconds <= result.best.time_seconds <= result.max.time_seconds

    def test_measured_d_prime_has_no_range(self):
        """2点テストで実測したD'には区間をつけない"""
        result = predict_race_time_with_confidence(5000, 3.75, 150, is_d_prime_estimated=False)
        assert result.min is None
        assert result.max is None
        assert result.is_d_prime_estimated is False

    def test_low_bound_floored_at_zero(self):
        result = predict_race_time_with_confidence(5000, 4.0, 50, is_d_prime_estimated=True)
        assert result.max.time_seconds == pytest.approx(1250)

    def test_fast_bound_unavailable_for_short_distance(self):
        """D' + 不確かさ が距離以上なら速い側はNone"""
        result = predict_race_time_with_confidence(300, 4.0, 250, is_d_prime_estimated=True)
        assert result.best is not None
        assert result.min is None
        assert result.max is not None

    def test_unpredictable_distance(self):
        assert predict_race_time_with_confidence(100, 3.75, 150, True) is None


class TestPredictAllRaces:
    """標準レース距離の一括予測"""

    def test_typical_races(self):
        results = predict_all_races(3.75, 150)
        race_ids = [result.race_id for result in results]
        assert race_ids == ["mile", "1500m", "5k", "10k", "half", "marathon"]

    def test_all_races(self):
        results = predict_all_races(3.75, 150, typical_only=False)
        assert len(results) == 8

    def test_estimated_flag_propagates(self):
        results = predict_all_races(3.75, 250, is_d_prime_estimated=True)
        assert all(result.prediction.is_d_prime_estimated for result in results)
        assert all(result.prediction.min is not None for result in results)

    def test_short_distances_skipped(self):
        """D'がレース距離以上なら除外"""
        results = predict_all_races(3.75, 2000)
        race_ids = [result.race_id for result in results]
        assert "mile" not in race_ids
        assert "1500m" not in race_ids
        assert "5k" in race_ids

    def test_longer_races_take_longer(self):
        results = predict_all_races(3.75, 150)
        times = [result.prediction.best.time_seconds
                 for result in sorted(results, key=lambda r: r.distance_meters)]
        assert times == sorted(times)


class TestRiegel:
    """Riegel式による予測"""

    def test_reference_point(self):
        """基準距離（30分地点）ではちょうど30分"""
        reference_distance = 3.75 * 1800 + 150
        prediction = predict_race_time_riegel(3.75, 150, reference_distance)
        assert prediction.time_seconds == pytest.approx(1800)

    def test_formula(self):
        prediction = predict_race_time_riegel(3.75, 150, 10000)
        assert prediction.time_seconds == pytest.approx(1800 * (10000 / 6900) ** 1.06)

    @pytest.mark.parametrize("cv,d_prime", [(3.0, 150), (4.0, 250), (5.0, 350)])
    def test_velocity_decreases_with_distance(self, cv, d_prime):
        velocities = [
            predict_race_time_riegel(cv, d_prime, distance).velocity_ms
            for distance in (1500, 3000, 5000, 10000, 42195)
        ]
        assert velocities == sorted(velocities, reverse=True)

    def test_higher_fatigue_factor_is_slower(self):
        standard = predict_race_time_riegel(4.0, 250, 10000, fatigue_factor=1.06)
        conservative = predict_race_time_riegel(4.0, 250, 10000, fatigue_factor=1.08)
        assert conservative.time_seconds > standard.time_seconds

    def test_invalid_target(self):
        with pytest.raises(InvalidInputError):
            predict_race_time_riegel(4.0, 250, 0)

"""
VCR Calculator - CV Calculator Tests
"""
import pytest
import sys
import os

# srcディレクトリをパスに追加
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.cv.calculator import (
    build_test_input,
    calculate_cv,
    calculate_cv_2point,
    calculate_cv_30min,
    calculate_cv_45min,
    calculate_cv_60min,
    calculate_cv_cooper,
    calculate_cv_fixed_duration,
    calculate_cv_for_protocol,
    clamp_d_prime,
    estimate_d_prime,
    recommended_d_prime,
)
from src.cv.errors import CVCalculatorError, InvalidInputError
from src.cv.models import FixedDurationTest, TwoPointTest


class TestFixedDuration:
    """固定時間テストのCV計算"""

    def test_30min_default_d_prime(self):
        """30分で6000m、D'は推奨値250m"""
        result = calculate_cv_30min(6000)

        assert result.velocity_ms_raw == pytest.approx(3.33333, abs=1e-4)
        assert result.d_prime == 250
        assert result.adjusted_distance == pytest.approx(5750)
        assert result.velocity_ms == pytest.approx(3.19444, abs=1e-4)
        assert result.pace_sec_per_km == pytest.approx(313.04, abs=0.01)
        assert result.pace_sec_per_km_raw == pytest.approx(300.0)
        assert result.d_prime_estimated is True
        assert result.protocol_id == "30min"

    def test_calculation_log(self):
        """計算過程が記録される"""
        result = calculate_cv_30min(6000)
        assert "Raw CV" in result.calculation_log
        assert "Adjusted distance = 6000 - 250 = 5750 m" in result.calculation_log

    def test_custom_d_prime(self):
        result = calculate_cv_fixed_duration(6000, 1800, d_prime=300)
        assert result.adjusted_distance == pytest.approx(5700)
        assert result.d_prime_estimated is True

    def test_custom_d_prime_clamped(self):
        """ユーザー指定D'は50〜500mに収める"""
        assert calculate_cv_30min(6000, d_prime=1000).d_prime == 500
        assert calculate_cv_30min(6000, d_prime=10).d_prime == 50

    @pytest.mark.parametrize("calculate,distance,d_prime", [
        (calculate_cv_cooper, 3000, 300),
        (calculate_cv_30min, 6000, 250),
        (calculate_cv_45min, 9000, 200),
        (calculate_cv_60min, 12000, 150),
    ])
    def test_recommended_d_prime_by_protocol(self, calculate, distance, d_prime):
        """テスト時間が長いほど推奨D'は小さい"""
        assert calculate(distance).d_prime == d_prime

    @pytest.mark.parametrize("distance", [3000, 6000, 9500])
    def test_raw_not_slower_than_adjusted(self, distance):
        result = calculate_cv_30min(distance)
        assert result.velocity_ms_raw >= result.velocity_ms

    def test_distance_not_greater_than_d_prime(self):
        with pytest.raises(InvalidInputError):
            calculate_cv_fixed_duration(200, 1800, d_prime=250)

    @pytest.mark.parametrize("distance,duration", [
        (0, 1800), (-100, 1800), (6000, 0), (float("inf"), 1800), (float("nan"), 1800), (None, 1800),
    ])
    def test_invalid_input(self, distance, duration):
        with pytest.raises(InvalidInputError):
            calculate_cv_fixed_duration(distance, duration)

    def test_unknown_duration_uses_default(self):
        result = calculate_cv_fixed_duration(5000, 1500)
        assert result.d_prime == estimate_d_prime()
        assert result.protocol_id is None


class TestDPrimeHelpers:
    """D'の推奨値・クランプのテスト"""

    def test_recommended(self):
        assert recommended_d_prime(720) == 300
        assert recommended_d_prime(3600) == 150
        assert recommended_d_prime(999) == 250

    def test_clamp(self):
        assert clamp_d_prime(250) == 250
        assert clamp_d_prime(600) == 500
        assert clamp_d_prime(0) == 50


class TestTwoPoint:
    """2点テストのCV計算"""

    def test_known_values(self):
        """1500m/6:00 と 4200m/18:00"""
        result = calculate_cv_2point(1500, 360, 4200, 1080)

        assert result.velocity_ms == pytest.approx(3.75)
        assert result.d_prime == pytest.approx(150)
        assert result.d_prime_estimated is False
        assert result.velocity_ms_raw == pytest.approx((1500 / 360 + 4200 / 1080) / 2)
        assert result.adjusted_distance == pytest.approx(((1500 - 150) + (4200 - 150)) / 2)
        assert result.protocol_id == "2point"

    @pytest.mark.parametrize("d1,t1,d2,t2", [
        (1500, 360, 4200, 1080),
        (800, 120, 3000, 600),
        (1000, 200, 5000, 1200),
        (2000, 420, 2400, 520),
        (400, 60, 10000, 2400),
    ])
    def test_d_prime_not_negative(self, d1, t1, d2, t2):
        result = calculate_cv_2point(d1, t1, d2, t2)
        assert result.d_prime >= 0
        assert result.velocity_ms > 0

    def test_line_passes_through_both_points(self):
        result = calculate_cv_2point(1500, 360, 4200, 1080)
        assert result.velocity_ms * 360 + result.d_prime == pytest.approx(1500)
        assert result.velocity_ms * 1080 + result.d_prime == pytest.approx(4200)

    def test_first_test_slower(self):
        """1本目が遅いとD'が負になるので拒否"""
        with pytest.raises(InvalidInputError):
            calculate_cv_2point(1500, 400, 4200, 1000)

    def test_second_test_shorter(self):
        with pytest.raises(InvalidInputError):
            calculate_cv_2point(1500, 360, 4200, 300)

    def test_second_distance_shorter(self):
        with pytest.raises(InvalidInputError):
            calculate_cv_2point(4200, 360, 1500, 1080)

    def test_errors_share_base_class(self):
        with pytest.raises(CVCalculatorError):
            calculate_cv_2point(0, 360, 4200, 1080)


class TestDispatch:
    """calculate_cv / calculate_cv_for_protocol のテスト"""

    def test_fixed_duration_input(self):
        test_input = FixedDurationTest(distance_meters=6000, duration_seconds=1800, protocol_id="30min")
        assert calculate_cv(test_input).velocity_ms == pytest.approx(5750 / 1800)

    def test_two_point_input_ignores_d_prime(self):
        test_input = TwoPointTest(distance1=1500, time1=360, distance2=4200, time2=1080)
        assert calculate_cv(test_input, d_prime=300).d_prime == pytest.approx(150)

    def test_unsupported_input(self):
        with pytest.raises(TypeError):
            calculate_cv({"distance": 6000})

    def test_build_test_input(self):
        assert build_test_input("cooper", distance=3000) == FixedDurationTest(3000, 720, "cooper")
        assert build_test_input("2point", distance1=1500, time1=360, distance2=4200, time2=1080) \
            == TwoPointTest(1500, 360, 4200, 1080)

    def test_for_protocol(self):
        result = calculate_cv_for_protocol("45min", d_prime=None, distance=9000)
        assert result.protocol_id == "45min"
        assert result.d_prime == 200

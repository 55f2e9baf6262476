"""
VCR Calculator - Unit Conversion Tests
"""
import math
import pytest
import sys
import os

# srcディレクトリをパスに追加
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from src.config import METERS_PER_MILE
from src.cv.units import (
    _divide,
    km_to_meters,
    meters_to_km,
    meters_to_miles,
    miles_to_meters,
    pace_per_km_to_velocity,
    pace_per_mile_to_velocity,
    sec_per_km_to_sec_per_mile,
    sec_per_mile_to_sec_per_km,
    velocity_to_pace,
    velocity_to_pace_per_km,
    velocity_to_pace_per_mile,
)


class TestVelocityPace:
    """速度とペースの変換テスト"""

    def test_velocity_to_pace_per_km(self):
        """4 m/s = 250秒/km"""
        assert velocity_to_pace_per_km(4.0) == pytest.approx(250.0)

    def test_velocity_to_pace_per_mile(self):
        """1マイルは1609.34mで統一"""
        assert velocity_to_pace_per_mile(4.0) == pytest.approx(1609.34 / 4.0)

    @pytest.mark.parametrize("velocity", [1.5, 3.19444, 4.0, 6.2])
    def test_round_trip_km(self, velocity):
        """速度→ペース→速度で元に戻る"""
        assert pace_per_km_to_velocity(velocity_to_pace_per_km(velocity)) == pytest.approx(velocity)

    @pytest.mark.parametrize("velocity", [1.5, 3.19444, 4.0, 6.2])
    def test_round_trip_mile(self, velocity):
        assert pace_per_mile_to_velocity(velocity_to_pace_per_mile(velocity)) == pytest.approx(velocity)

    def test_mile_km_ratio(self):
        """秒/mile と 秒/km の比は一定"""
        for velocity in (2.5, 4.0, 5.5):
            ratio = velocity_to_pace_per_mile(velocity) / velocity_to_pace_per_km(velocity)
            assert ratio == pytest.approx(METERS_PER_MILE / 1000)

    def test_zero_velocity(self):
        """0除算は例外ではなくinf"""
        assert velocity_to_pace_per_km(0) == math.inf
        assert pace_per_km_to_velocity(0) == math.inf

    def test_zero_over_zero(self):
        """0/0はnan"""
        assert math.isnan(_divide(0, 0))

    def test_unit_system(self):
        assert velocity_to_pace(4.0, "metric") == pytest.approx(250.0)
        assert velocity_to_pace(4.0, "imperial") == pytest.approx(402.335)

    def test_unknown_unit_system(self):
        with pytest.raises(ValueError):
            velocity_to_pace(4.0, "furlongs")


class TestPaceConversion:
    """ペース単位の変換テスト"""

    def test_km_to_mile(self):
        assert sec_per_km_to_sec_per_mile(300) == pytest.approx(482.802)

    @pytest.mark.parametrize("pace", [180, 250, 313.04, 600])
    def test_round_trip(self, pace):
        assert sec_per_mile_to_sec_per_km(sec_per_km_to_sec_per_mile(pace)) == pytest.approx(pace)


class TestDistanceConversion:
    """距離の変換テスト"""

    def test_miles(self):
        assert meters_to_miles(1609.34) == pytest.approx(1.0)
        assert miles_to_meters(26.2) == pytest.approx(42164.708)

    def test_km(self):
        assert meters_to_km(42195) == pytest.approx(42.195)
        assert km_to_meters(5) == 5000

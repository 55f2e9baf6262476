"""
VCR Calculator - CV Package
Critical Velocity・トレーニングゾーン・レース予測の計算
"""
from .calculator import (
    calculate_cv,
    calculate_cv_for_protocol,
    calculate_cv_fixed_duration,
    calculate_cv_cooper,
    calculate_cv_30min,
    calculate_cv_45min,
    calculate_cv_60min,
    calculate_cv_2point,
    estimate_d_prime,
    recommended_d_prime,
)
from .curve import generate_hyperbolic_curve
from .errors import (
    CVCalculatorError,
    InvalidInputError,
    InvalidRangeError,
    InvalidRelationError,
    MissingDPrimeError,
    UnrealisticPaceWarning,
)
from .models import (
    CVResult,
    FixedDurationTest,
    RacePrediction,
    TwoPointTest,
    Zone,
)
from .races import (
    predict_race_time,
    predict_race_time_with_confidence,
    predict_all_races,
    predict_race_time_riegel,
)
from .validators import (
    validate_distance,
    validate_time,
    validate_fixed_duration_test,
    validate_2point_test,
    check_realistic_pace,
)
from .zones import calculate_training_zones, get_zone, list_zone_systems

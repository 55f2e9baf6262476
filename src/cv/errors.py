"""
VCR Calculator - Errors
CV計算で使う例外と警告
"""
from typing import Sequence


class CVCalculatorError(Exception):
    """CV計算の基底例外"""


class ValidationError(CVCalculatorError, ValueError):
    """入力値の検証エラー（フィールド名付き）

    バリデータ内部でのみ送出され、呼び出し側にはメッセージとして返される。
    """

    def __init__(self, message: str, fields: Sequence[str] = ()):
        super().__init__(message)
        self.message = message
        self.fields = tuple(fields)


class InvalidRangeError(ValidationError):
    """値が未入力・数値でない・範囲外"""


class InvalidRelationError(ValidationError):
    """フィールド間の関係（2点テストの順序など）が不正"""


class InvalidInputError(CVCalculatorError, ValueError):
    """計算エンジンが事前検証されていない値を受け取った"""


class MissingDPrimeError(CVCalculatorError):
    """Race-Prediction-BasedゾーンにD'が渡されなかった"""


class UnrealisticPaceWarning(UserWarning):
    """ペースが現実的な範囲外（確認すれば続行可能）"""

    def __init__(self, message: str, pace_sec_per_km: float):
        super().__init__(message)
        self.message = message
        self.pace_sec_per_km = pace_sec_per_km

"""
VCR Calculator - Configuration
アプリケーション全体の設定値を管理
"""

# =============================================
# アプリ情報
# =============================================
APP_NAME = "VCR Calculator"
APP_VERSION = "1.2.0"

# =============================================
# 単位
# =============================================
# 距離・ペースの単位変換はすべてこの定数を使う（表示値と計算値のズレ防止）
METERS_PER_MILE = 1609.34
METERS_PER_KM = 1000

UNIT_SYSTEMS = {
    "METRIC": "metric",
    "IMPERIAL": "imperial",
}
DEFAULT_UNIT_SYSTEM = UNIT_SYSTEMS["METRIC"]

# =============================================
# テストプロトコル
# =============================================
# duration: テスト時間（秒）。2点テストはNone
# distance_range: 入力距離の許容範囲（m）
TEST_PROTOCOLS = {
    "cooper": {
        "name": "Cooper 12-Minute Test",
        "short_name": "Cooper",
        "description": "Run maximum distance in exactly 12 minutes",
        "duration": 720,
        "distance_range": (500, 5000),
        "accuracy": "Moderate (overestimates CV due to shorter duration)",
    },
    "30min": {
        "name": "30-Minutes Test",
        "short_name": "30min",
        "description": "Run maximum distance in exactly 30 minutes",
        "duration": 1800,
        "distance_range": (1000, 10000),
        "accuracy": "High (direct approximation of CV)",
    },
    "45min": {
        "name": "45-Minutes Test",
        "short_name": "45min",
        "description": "Run maximum distance in exactly 45 minutes",
        "duration": 2700,
        "distance_range": (1500, 15000),
        "accuracy": "High (small anaerobic contribution)",
    },
    "60min": {
        "name": "60-Minutes Test",
        "short_name": "60min",
        "description": "Run maximum distance in exactly 60 minutes",
        "duration": 3600,
        "distance_range": (2000, 20000),
        "accuracy": "High (close to hour-record intensity)",
    },
    "2point": {
        "name": "2-Point Maximal Test",
        "short_name": "2-Point",
        "description": "Two maximal efforts at different distances/durations",
        "duration": None,
        "distance_range": None,
        "accuracy": "Very High (true CV calculation with D')",
    },
}

DEFAULT_TEST_PROTOCOL = "30min"
TWO_POINT_PROTOCOL = "2point"

# 2点テストの各フィールドの汎用範囲
TWO_POINT_BOUNDS = {
    "distance": (100, 50000),  # m
    "time": (60, 7200),        # 秒
}


def get_test_protocol(protocol_id: str) -> dict:
    """プロトコルIDから設定を返す（存在しない場合はKeyError）"""
    if protocol_id not in TEST_PROTOCOLS:
        raise KeyError(f"Unknown test protocol: {protocol_id}")
    return TEST_PROTOCOLS[protocol_id]


def get_protocol_for_duration(duration: float):
    """テスト時間に一致する固定時間プロトコルIDを返す（該当なしはNone）"""
    for protocol_id, protocol in TEST_PROTOCOLS.items():
        if protocol["duration"] is not None and protocol["duration"] == duration:
            return protocol_id
    return None


# =============================================
# D'（無酸素性距離容量）
# =============================================
# 一般的なD'は150〜400m
DEFAULT_D_PRIME = 250

D_PRIME_PRESETS = {
    "low": {
        "label": "Low (150m)",
        "value": 150,
        "description": "60-minute test, very small anaerobic contribution",
    },
    "moderate": {
        "label": "Moderate (200m)",
        "value": 200,
        "description": "45-minute test / recreational runners",
    },
    "standard": {
        "label": "Standard (250m)",
        "value": 250,
        "description": "Conservative middle-ground estimate",
    },
    "high": {
        "label": "High (300m)",
        "value": 300,
        "description": "Short tests (Cooper) / trained runners",
    },
    "elite": {
        "label": "Elite (350m)",
        "value": 350,
        "description": "Elite middle-distance runners",
    },
}

# テスト時間が長いほど無酸素性の寄与が小さいので、低めのD'を推奨
D_PRIME_DEFAULTS_BY_TEST = {
    "cooper": "high",
    "30min": "standard",
    "45min": "moderate",
    "60min": "low",
}

# ユーザー指定D'のクランプ範囲（m）
D_PRIME_RANGE = {"MIN": 50, "MAX": 500}

# 推定D'の不確かさ（±m）。予測の信頼区間に使用
D_PRIME_UNCERTAINTY = 100

# =============================================
# Riegel式（ゾーン4-5のアンカー用）
# =============================================
RIEGEL_FATIGUE_FACTOR = 1.06
RIEGEL_FATIGUE_FACTOR_RANGE = (1.06, 1.08)
# 基準ペアは双曲線モデルの30分地点から取る
RIEGEL_REFERENCE_DURATION = 1800

# =============================================
# トレーニングゾーン
# =============================================
ZONE_NAMES = {
    1: "Recovery / Easy",
    2: "Steady State",
    3: "Tempo",
    4: "Threshold",
    5: "VO₂ Max",
}

# ゾーン1-3（両方式共通）: CV速度に対する割合 (下限, 上限)
# 過去のリビジョンで値が異なるが、最新のものを採用
ZONE_PERCENT_BOUNDS = {
    1: (0.70, 0.85),
    2: (0.85, 0.905),
    3: (0.905, 0.9725),
}

# Offset-Based: ゾーン4下限の割合と、CVペースから引く秒数（/km）
ZONE_4_LOWER_FRACTION = 0.9725
ZONE_TIME_OFFSETS = {
    4: 10,        # ゾーン4上限: CVペース - 10秒
    5: (10, 20),  # ゾーン5: CVペース - 10秒 〜 - 20秒
}

# Race-Prediction-Based: (遅い側の距離, 速い側の距離) とラベル
ZONE_RACE_ANCHORS = {
    4: ((10000, "10K"), (5000, "5K")),
    5: ((3000, "3K"), (1500, "1500m")),
}

DEFAULT_ZONE_SYSTEM = "offset-based"

# =============================================
# CVモード（表示・予測に使う速度）
# =============================================
CV_MODES = {
    "RAW": "raw",
    "ADJUSTED": "adjusted",
}
DEFAULT_CV_MODE = CV_MODES["RAW"]

# =============================================
# 入力チェック
# =============================================
# 非現実的なペースの警告しきい値（秒/km）
REALISTIC_PACE_RANGE = {
    "MIN": 150,  # 約2:30/km（世界記録より速い）
    "MAX": 720,  # 約12:00/km（非常に遅い）
}

# =============================================
# レース距離
# =============================================
RACE_DISTANCES = {
    "mile": {"name": "Mile", "distance_meters": METERS_PER_MILE, "typical": True},
    "1500m": {"name": "1500m", "distance_meters": 1500, "typical": True},
    "3k": {"name": "3K", "distance_meters": 3000, "typical": False},
    "5k": {"name": "5K", "distance_meters": 5000, "typical": True},
    "10k": {"name": "10K", "distance_meters": 10000, "typical": True},
    "15k": {"name": "15K", "distance_meters": 15000, "typical": False},
    "half": {"name": "Half Marathon", "distance_meters": 21097.5, "typical": True},
    "marathon": {"name": "Marathon", "distance_meters": 42195, "typical": True},
}


def get_race_distances(typical_only: bool = True) -> list:
    """表示用のレース距離リストを返す

    Args:
        typical_only: Trueの場合は代表的な距離のみ

    Returns:
        list of dict: {"id", "name", "distance_meters", "typical"}
    """
    distances = []
    for race_id, race in RACE_DISTANCES.items():
        if typical_only and not race["typical"]:
            continue
        distances.append({"id": race_id, **race})
    return distances


# =============================================
# グラフ（速度-時間カーブ）
# =============================================
CURVE_MIN_TIME = 180      # 3分
CURVE_MAX_TIME = 10800    # 3時間
CURVE_POINTS = 50

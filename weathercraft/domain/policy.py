"""
WEATHER POLICY CONSTANTS
Domain thresholds shared by the compliance, risk and scheduling engines

These values are roofing policy, not tuning knobs. Per-material limits live
in the YAML catalogs; everything here applies across all assemblies.
"""

# ======================
# Precipitation
# ======================
# Condition descriptions containing any of these count as active precipitation
PRECIP_TERMS = ("rain", "snow", "drizzle", "sleet")

# Work-package screening also treats storms as precipitation
PACKAGE_PRECIP_TERMS = ("rain", "snow", "sleet", "drizzle", "storm")

# A no-precipitation component fails when probability exceeds this (%)
MAX_PRECIP_PROBABILITY_PCT = 50

# ======================
# Temperature trend (°F)
# ======================
CURRENT_TREND_THRESHOLD_F = 2.0
DAILY_TREND_THRESHOLD_F = 3.0
HOURLY_TREND_THRESHOLD_F = 1.0
# Number of forecast samples averaged against the current reading
TREND_LOOKAHEAD_SAMPLES = 2

# ======================
# Risk scoring
# ======================
RISK_LOW_TEMP_SEVERE_F = 40
RISK_LOW_TEMP_SEVERE_POINTS = 30
RISK_LOW_TEMP_LIMITING_F = 50
RISK_LOW_TEMP_LIMITING_POINTS = 15

RISK_PRECIP_HIGH_PCT = 70
RISK_PRECIP_HIGH_POINTS = 35
RISK_PRECIP_MODERATE_PCT = 40
RISK_PRECIP_MODERATE_POINTS = 20
RISK_PRECIP_SOME_PCT = 20
RISK_PRECIP_SOME_POINTS = 10

RISK_WIND_HIGH_MPH = 25
RISK_WIND_HIGH_POINTS = 25
RISK_WIND_ELEVATED_MPH = 15
RISK_WIND_ELEVATED_POINTS = 10

RISK_HUMIDITY_HIGH_PCT = 85
RISK_HUMIDITY_HIGH_POINTS = 10

RISK_SCORE_MAX = 100
RISK_CRITICAL_SCORE = 60
RISK_HIGH_SCORE = 40
RISK_MODERATE_SCORE = 20

FAVORABLE_FACTOR = "Favorable conditions expected"

# Hours bounding the "best work window" of a day
GOOD_HOUR_MIN_TEMP_F = 50
GOOD_HOUR_MAX_PRECIP = 0.3

# ======================
# Scheduling
# ======================
FORECAST_HORIZON_DAYS = 5

SCHEDULE_BASE_SCORE = 50
SCHEDULE_WARMTH_BASELINE_F = 50
SCHEDULE_WARMTH_FACTOR = 2
SCHEDULE_WARMTH_CAP = 20
SCHEDULE_DRYNESS_DIVISOR = 5
SCHEDULE_CALM_WIND_MPH = 25
SCHEDULE_HUMIDITY_BASELINE_PCT = 60
SCHEDULE_HUMIDITY_DIVISOR = 2
SCHEDULE_MAX_CONFIDENCE = 95

NO_SUITABLE_DAY = "No suitable day in forecast"

# ======================
# Winter work planner
# ======================
FORECAST_INTERVAL_HOURS = 3
PACKAGE_MAX_PRECIP_PCT = 40
PACKAGE_RISING_DELTA_F = 2.0
SUITABILITY_MAX_PRECIP_PCT = 40

# ======================
# Insights
# ======================
INSIGHT_RISING_WATCH_LOW_F = 45
INSIGHT_RISING_WATCH_HIGH_F = 50
INSIGHT_PRECIP_WATCH_PCT = 30
INSIGHT_WIND_CAUTION_MPH = 15
INSIGHT_WIND_LIMIT_MPH = 25
INSIGHT_HUMIDITY_PCT = 80
INSIGHT_LONG_CURE_HOURS = 24
INSIGHT_CURE_MAX_PRECIP_PCT = 30

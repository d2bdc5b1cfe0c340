"""
RISK SCORER (ENGINE-4)
Daily additive weather-risk score

RULES:
❌ No decisions (pure scoring)
✅ Each factor fires at most once per day
✅ Score clamped to 0-100
"""

from datetime import tzinfo
from typing import Optional, Sequence

from weathercraft.domain import policy
from weathercraft.domain.models import (
    DailyForecast,
    DailyRiskAssessment,
    RiskLevel,
    WeatherSample,
)
from weathercraft.utils.numbers import round_half_up


def best_work_window(
    hourly: Sequence[WeatherSample],
    tz: Optional[tzinfo] = None,
) -> Optional[str]:
    """
    Clock-hour range bounded by the first and last good hour of a day

    Good hours are at least 50°F with precipitation probability under 30 %.
    Hours in between need not qualify.
    """
    good = [
        sample for sample in hourly
        if sample.temp >= policy.GOOD_HOUR_MIN_TEMP_F
        and sample.precip_probability < policy.GOOD_HOUR_MAX_PRECIP
    ]
    if not good:
        return None

    start, end = good[0].timestamp, good[-1].timestamp
    if tz is not None:
        start, end = start.astimezone(tz), end.astimezone(tz)
    return f"{start.hour}:00 - {end.hour}:00"


class RiskScorer:
    """
    Risk Scorer
    Independent of the assembly catalog
    """

    def score_daily_risk(
        self,
        daily: DailyForecast,
        tz: Optional[tzinfo] = None,
    ) -> DailyRiskAssessment:
        """
        Score one forecast day

        Points:
        - Low temp: < 40°F +30, < 50°F +15
        - Precip: > 70% +35, > 40% +20, > 20% +10
        - Wind: > 25 mph +25, > 15 mph +10
        - Humidity: > 85% +10
        """
        factors: list[str] = []
        score = 0

        low = round_half_up(daily.low)
        if daily.low < policy.RISK_LOW_TEMP_SEVERE_F:
            score += policy.RISK_LOW_TEMP_SEVERE_POINTS
            factors.append(f"Low temp {low}°F below {policy.RISK_LOW_TEMP_SEVERE_F}°F threshold")
        elif daily.low < policy.RISK_LOW_TEMP_LIMITING_F:
            score += policy.RISK_LOW_TEMP_LIMITING_POINTS
            factors.append(f"Low temp {low}°F limits some assemblies")

        precip = daily.precip_probability
        if precip > policy.RISK_PRECIP_HIGH_PCT:
            score += policy.RISK_PRECIP_HIGH_POINTS
            factors.append(f"High precipitation probability ({precip}%)")
        elif precip > policy.RISK_PRECIP_MODERATE_PCT:
            score += policy.RISK_PRECIP_MODERATE_POINTS
            factors.append(f"Moderate precipitation risk ({precip}%)")
        elif precip > policy.RISK_PRECIP_SOME_PCT:
            score += policy.RISK_PRECIP_SOME_POINTS
            factors.append(f"Some precipitation chance ({precip}%)")

        wind = round_half_up(daily.max_wind)
        if daily.max_wind > policy.RISK_WIND_HIGH_MPH:
            score += policy.RISK_WIND_HIGH_POINTS
            factors.append(f"High winds ({wind} mph) - safety concern")
        elif daily.max_wind > policy.RISK_WIND_ELEVATED_MPH:
            score += policy.RISK_WIND_ELEVATED_POINTS
            factors.append(f"Elevated winds ({wind} mph)")

        if daily.avg_humidity > policy.RISK_HUMIDITY_HIGH_PCT:
            score += policy.RISK_HUMIDITY_HIGH_POINTS
            factors.append(f"High humidity ({daily.avg_humidity}%) affects cure times")

        score = max(0, min(policy.RISK_SCORE_MAX, score))

        if not factors:
            factors.append(policy.FAVORABLE_FACTOR)

        return DailyRiskAssessment(
            date=daily.date,
            day_name=daily.day_name,
            risk_score=score,
            overall_risk=self.risk_level(score),
            factors=tuple(factors),
            best_work_window=best_work_window(daily.hourly, tz),
        )

    def generate_risk_assessments(
        self,
        dailies: Sequence[DailyForecast],
        tz: Optional[tzinfo] = None,
        days: int = policy.FORECAST_HORIZON_DAYS,
    ) -> list[DailyRiskAssessment]:
        """Score the first `days` forecast days in order"""
        return [self.score_daily_risk(daily, tz) for daily in list(dailies or [])[:days]]

    @staticmethod
    def risk_level(score: int) -> RiskLevel:
        if score >= policy.RISK_CRITICAL_SCORE:
            return RiskLevel.CRITICAL
        if score >= policy.RISK_HIGH_SCORE:
            return RiskLevel.HIGH
        if score >= policy.RISK_MODERATE_SCORE:
            return RiskLevel.MODERATE
        return RiskLevel.LOW

    @staticmethod
    def favorable_day_count(assessments: Sequence[DailyRiskAssessment]) -> int:
        """Days rated low or moderate; zero for an empty list"""
        return sum(
            1 for a in assessments
            if a.overall_risk in (RiskLevel.LOW, RiskLevel.MODERATE)
        )

"""
SCHEDULE RECOMMENDER (ENGINE-5)
Best and alternate install day per assembly from the daily forecast

RESPONSIBILITIES:
- Normalize each forecast day (worst-case values)
- Score compliant days
- Recommend the best day, keep the runner-up as alternate

RULES:
❌ No assembly omitted (zero-confidence entry when nothing fits)
✅ Output sorted by confidence, never by evaluation order
"""

from dataclasses import dataclass
from datetime import date, tzinfo
from typing import Optional, Sequence

from weathercraft.domain import policy
from weathercraft.domain.models import (
    Assembly,
    AssemblyCatalog,
    DailyForecast,
    ScheduleRecommendation,
)
from weathercraft.domain.services.assembly_evaluator import AssemblyEvaluator
from weathercraft.domain.services.condition_normalizer import ConditionNormalizer
from weathercraft.domain.services.risk_scorer import best_work_window
from weathercraft.utils.numbers import fmt_number, round_half_up


@dataclass(frozen=True)
class _ScoredDay:
    forecast: DailyForecast
    score: float


def day_label(day: date) -> str:
    """e.g. 'Monday, Jan 5'"""
    return f"{day:%A}, {day:%b} {day.day}"


class ScheduleRecommender:
    """
    Schedule Recommender
    Reuses the assembly evaluator for per-day compliance
    """

    def __init__(
        self,
        assembly_evaluator: Optional[AssemblyEvaluator] = None,
        normalizer: Optional[ConditionNormalizer] = None,
    ):
        self.assembly_evaluator = assembly_evaluator or AssemblyEvaluator()
        self.normalizer = normalizer or ConditionNormalizer()

    def generate_schedule_recommendations(
        self,
        catalog: AssemblyCatalog,
        dailies: Sequence[DailyForecast],
        tz: Optional[tzinfo] = None,
        days: int = policy.FORECAST_HORIZON_DAYS,
    ) -> list[ScheduleRecommendation]:
        """
        Recommend install days for every assembly

        Args:
            catalog: Assemblies to schedule
            dailies: Daily forecast (chronological)
            tz: Project timezone for the work window string
            days: Forecast horizon considered

        Returns:
            Recommendations sorted by descending confidence
        """
        horizon = list(dailies or [])[:days]
        recommendations = [
            self.recommend(assembly, horizon, tz)
            for assembly in catalog.assemblies
        ]
        return sorted(recommendations, key=lambda rec: -rec.confidence)

    def recommend(
        self,
        assembly: Assembly,
        horizon: Sequence[DailyForecast],
        tz: Optional[tzinfo] = None,
    ) -> ScheduleRecommendation:
        best: Optional[_ScoredDay] = None
        alternate: Optional[_ScoredDay] = None

        for forecast in horizon:
            conditions = self.normalizer.normalize_daily(forecast)
            if not self.assembly_evaluator.is_compliant(assembly, conditions):
                continue

            scored = _ScoredDay(forecast=forecast, score=self.score_day(forecast))
            if best is None or scored.score > best.score:
                alternate = best
                best = scored
            elif alternate is None or scored.score > alternate.score:
                alternate = scored

        if best is None:
            return ScheduleRecommendation(
                assembly=assembly.name,
                recommended_day=policy.NO_SUITABLE_DAY,
                confidence=0,
                reason=(
                    "Weather conditions do not meet requirements within the "
                    f"{len(horizon)}-day forecast window"
                ),
            )

        day = best.forecast
        return ScheduleRecommendation(
            assembly=assembly.name,
            recommended_day=day_label(day.date),
            confidence=max(0, min(policy.SCHEDULE_MAX_CONFIDENCE, round_half_up(best.score))),
            reason=(
                f"Optimal conditions: {round_half_up(day.high)}°F high, "
                f"{day.precip_probability}% precip risk, "
                f"{fmt_number(day.max_wind)}mph max wind"
            ),
            alternate_day=day_label(alternate.forecast.date) if alternate else None,
            work_window=best_work_window(day.hourly, tz),
        )

    @staticmethod
    def score_day(forecast: DailyForecast) -> float:
        """
        Score a compliant day (higher is better)

        base 50
        + warmth bonus  min((high - 50) * 2, 20)
        + dryness bonus (100 - precip) / 5
        + calm bonus    25 - max wind
        - humidity penalty (avg humidity - 60) / 2
        """
        score = float(policy.SCHEDULE_BASE_SCORE)
        score += min(
            (forecast.high - policy.SCHEDULE_WARMTH_BASELINE_F) * policy.SCHEDULE_WARMTH_FACTOR,
            policy.SCHEDULE_WARMTH_CAP,
        )
        score += max(0.0, (100 - forecast.precip_probability) / policy.SCHEDULE_DRYNESS_DIVISOR)
        score += max(0.0, policy.SCHEDULE_CALM_WIND_MPH - forecast.max_wind)
        score -= max(
            0.0,
            (forecast.avg_humidity - policy.SCHEDULE_HUMIDITY_BASELINE_PCT)
            / policy.SCHEDULE_HUMIDITY_DIVISOR,
        )
        return score

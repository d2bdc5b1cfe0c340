"""
SITE OUTLOOK SERVICE

• Fetch current + forecast for a project site
• Normalize once, run every engine on the same inputs
• No persistence; results are rebuilt on every call
"""

import logging
from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import Optional, Sequence

from weathercraft.domain import policy
from weathercraft.domain.models import (
    AssemblyCatalog,
    AssemblyResult,
    DailyForecast,
    DailyRiskAssessment,
    Insight,
    Project,
    ScheduleRecommendation,
    WeatherConditions,
    WeatherSample,
)
from weathercraft.domain.services.assembly_evaluator import AssemblyEvaluator
from weathercraft.domain.services.condition_normalizer import ConditionNormalizer
from weathercraft.domain.services.insight_generator import InsightGenerator
from weathercraft.domain.services.risk_scorer import RiskScorer
from weathercraft.domain.services.scheduler import ScheduleRecommender
from weathercraft.infrastructure.weather.types import WeatherProvider
from weathercraft.utils.time import now_utc

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SiteOutlook:
    """Everything the dashboard needs for one site at one moment"""
    generated_at: datetime
    current_sample: WeatherSample
    conditions: WeatherConditions
    dailies: tuple[DailyForecast, ...]
    assembly_results: tuple[AssemblyResult, ...]
    risk_assessments: tuple[DailyRiskAssessment, ...]
    recommendations: tuple[ScheduleRecommendation, ...]
    insights: tuple[Insight, ...]
    summary: str


class SiteOutlookService:
    def __init__(
        self,
        provider: WeatherProvider,
        catalog: AssemblyCatalog,
        tz: Optional[tzinfo] = None,
        forecast_days: int = policy.FORECAST_HORIZON_DAYS,
        hours_per_sample: int = policy.FORECAST_INTERVAL_HOURS,
    ):
        self.provider = provider
        self.catalog = catalog
        self.tz = tz
        self.forecast_days = forecast_days
        self.hours_per_sample = hours_per_sample

        self.normalizer = ConditionNormalizer()
        self.assembly_evaluator = AssemblyEvaluator()
        self.risk_scorer = RiskScorer()
        self.recommender = ScheduleRecommender(self.assembly_evaluator, self.normalizer)
        self.insight_generator = InsightGenerator(
            self.assembly_evaluator, self.normalizer, self.risk_scorer
        )

    async def get_outlook(self, project: Project, now: Optional[datetime] = None) -> SiteOutlook:
        current = await self.provider.get_current(project.lat, project.lon)
        forecast = await self.provider.get_forecast(project.lat, project.lon)
        logger.info(
            f"Building outlook for {project.id}: {len(forecast)} forecast samples"
        )
        return self.build_outlook(current, forecast, now=now)

    def build_outlook(
        self,
        current: WeatherSample,
        forecast: Sequence[WeatherSample],
        now: Optional[datetime] = None,
    ) -> SiteOutlook:
        """Run all engines over already-fetched weather"""
        now = now or now_utc()
        conditions = self.normalizer.normalize_conditions(current, forecast)
        hourly = self.normalizer.normalize_hourly_series(forecast, self.hours_per_sample)
        dailies = self.normalizer.group_forecast_by_day(forecast, self.tz)

        results = self.assembly_evaluator.evaluate_all_assemblies(
            self.catalog, conditions, hourly, now
        )
        risks = self.risk_scorer.generate_risk_assessments(dailies, self.tz, self.forecast_days)
        recommendations = self.recommender.generate_schedule_recommendations(
            self.catalog, dailies, self.tz, self.forecast_days
        )
        insights = self.insight_generator.generate_insights(
            self.catalog, conditions, results, dailies
        )
        summary = self.insight_generator.generate_executive_summary(conditions, results, dailies)

        return SiteOutlook(
            generated_at=now,
            current_sample=current,
            conditions=conditions,
            dailies=tuple(dailies),
            assembly_results=tuple(results),
            risk_assessments=tuple(risks),
            recommendations=tuple(recommendations),
            insights=tuple(insights),
            summary=summary,
        )

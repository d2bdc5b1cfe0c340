"""
INSIGHT GENERATOR (ENGINE-6)
Templated advisory text from engine outputs

Every insight is triggered by a threshold on a value already present in the
conditions, assembly results or daily forecast passed in. Nothing here
decides compliance on its own; tomorrow's comparison goes through the
assembly evaluator.
"""

from typing import Optional, Sequence

from weathercraft.domain import policy
from weathercraft.domain.models import (
    AssemblyCatalog,
    AssemblyResult,
    DailyForecast,
    Insight,
    InsightType,
    TempTrend,
    WeatherConditions,
)
from weathercraft.domain.services.assembly_evaluator import AssemblyEvaluator
from weathercraft.domain.services.condition_normalizer import ConditionNormalizer
from weathercraft.domain.services.risk_scorer import RiskScorer
from weathercraft.utils.numbers import round_half_up


class InsightGenerator:
    """Insight Generator"""

    def __init__(
        self,
        assembly_evaluator: Optional[AssemblyEvaluator] = None,
        normalizer: Optional[ConditionNormalizer] = None,
        risk_scorer: Optional[RiskScorer] = None,
    ):
        self.assembly_evaluator = assembly_evaluator or AssemblyEvaluator()
        self.normalizer = normalizer or ConditionNormalizer()
        self.risk_scorer = risk_scorer or RiskScorer()

    def generate_insights(
        self,
        catalog: AssemblyCatalog,
        current: WeatherConditions,
        assembly_results: Sequence[AssemblyResult],
        dailies: Sequence[DailyForecast],
    ) -> list[Insight]:
        """
        Build advisory insights

        Returns:
            Insights sorted by priority (1 first)
        """
        insights: list[Insight] = []
        temp = round_half_up(current.temp)
        all_go = all(result.compliant for result in assembly_results)

        # Temperature trend
        if (
            current.temp_trend == TempTrend.RISING
            and policy.INSIGHT_RISING_WATCH_LOW_F <= current.temp < policy.INSIGHT_RISING_WATCH_HIGH_F
        ):
            waiting = [r.assembly.name for r in assembly_results if not r.compliant]
            insights.append(Insight(
                id="temp-rising-opportunity",
                type=InsightType.OPPORTUNITY,
                priority=1,
                title="Temperature Window Opening",
                description=(
                    f"Temperature is {temp}°F and rising toward the "
                    f"{policy.INSIGHT_RISING_WATCH_HIGH_F}°F threshold."
                ),
                reasoning=(
                    "Rising trend is approaching the minimum application temperature of the "
                    "warm-weather materials. Assemblies on hold: "
                    + (", ".join(waiting) if waiting else "none") + "."
                ),
                action_items=(
                    "Stage temperature-sensitive materials",
                    "Brief crew on area priorities",
                    "Monitor temp every 30 minutes",
                ),
            ))

        if current.temp_trend == TempTrend.FALLING and all_go:
            insights.append(Insight(
                id="temp-falling-warning",
                type=InsightType.WARNING,
                priority=1,
                title="Closing Weather Window",
                description="Temperature is falling. Current installation window may close soon.",
                reasoning=(
                    "Temperature is declining while every assembly is still in spec. "
                    "Finish active adhesive applications so they cure before limits are crossed."
                ),
                action_items=(
                    "Prioritize completing in-progress adhesive work",
                    "Do not start new rising-temperature applications",
                    "Document current material placements",
                ),
            ))

        # Precipitation
        precip = current.precip_probability
        if policy.INSIGHT_PRECIP_WATCH_PCT < precip <= policy.MAX_PRECIP_PROBABILITY_PCT:
            insights.append(Insight(
                id="precip-watch",
                type=InsightType.WARNING,
                priority=2,
                title="Precipitation Watch",
                description=f"{precip}% chance of precipitation detected.",
                reasoning=(
                    "Moderate precipitation risk. Installation can proceed with protection "
                    "materials staged for rapid deployment."
                ),
                action_items=(
                    "Stage protective tarps near active work areas",
                    "Prioritize work that can be quickly protected",
                    "Assign spotter to monitor sky conditions",
                ),
            ))

        if precip > policy.MAX_PRECIP_PROBABILITY_PCT:
            insights.append(Insight(
                id="precip-likely",
                type=InsightType.RISK,
                priority=1,
                title="High Precipitation Probability",
                description=f"{precip}% chance of precipitation - recommend defensive posture.",
                reasoning=(
                    "Precipitation probability exceeds the limit for every no-precipitation "
                    "component. Focus on interior work, staging or protected prep."
                ),
                action_items=(
                    "Suspend exterior membrane work",
                    "Use time for material inventory and staging",
                    "Review tomorrow's forecast for scheduling",
                ),
            ))

        # Tomorrow vs today
        if len(dailies) > 1:
            tomorrow = dailies[1]
            tomorrow_conditions = self.normalizer.normalize_daily(tomorrow)
            tomorrow_go = sum(
                1 for assembly in catalog.assemblies
                if self.assembly_evaluator.is_compliant(assembly, tomorrow_conditions)
            )
            today_go = sum(1 for result in assembly_results if result.compliant)
            total = len(catalog.assemblies)
            if tomorrow_go > today_go:
                insights.append(Insight(
                    id="better-tomorrow",
                    type=InsightType.RECOMMENDATION,
                    priority=2,
                    title="Better Conditions Tomorrow",
                    description=(
                        f"Tomorrow shows {tomorrow_go}/{total} assemblies GO "
                        f"vs today's {today_go}/{total}."
                    ),
                    reasoning=(
                        f"Tomorrow's high of {round_half_up(tomorrow.high)}°F with "
                        f"{tomorrow.precip_probability}% precip chance clears more assemblies. "
                        "Consider shifting weather-sensitive work."
                    ),
                    action_items=(
                        "Focus today on prep work and staging",
                        "Schedule critical adhesive work for tomorrow AM",
                        "Ensure materials are properly stored overnight",
                    ),
                ))

        # Wind
        if policy.INSIGHT_WIND_CAUTION_MPH < current.wind_speed <= policy.INSIGHT_WIND_LIMIT_MPH:
            insights.append(Insight(
                id="wind-caution",
                type=InsightType.WARNING,
                priority=2,
                title="Elevated Wind Conditions",
                description=f"Wind speed {round_half_up(current.wind_speed)} mph requires caution.",
                reasoning=(
                    "Winds are within spec but elevated. Large membrane sheets are harder to "
                    "handle; secure loose materials."
                ),
                action_items=(
                    "Add crew members for membrane handling",
                    "Secure all loose materials and equipment",
                ),
            ))

        # Long-cure materials
        cure_ready = [
            r.assembly.name for r in assembly_results
            if r.compliant and any(
                (c.constraint.cure_time_hours or 0) >= policy.INSIGHT_LONG_CURE_HOURS
                for c in r.assembly.components
            )
        ]
        if cure_ready and dailies:
            next_two = dailies[:2]
            if not any(d.precip_probability > policy.INSIGHT_CURE_MAX_PRECIP_PCT for d in next_two):
                insights.append(Insight(
                    id="cure-window",
                    type=InsightType.OPPORTUNITY,
                    priority=1,
                    title="Cure Window Open",
                    description=(
                        f"{policy.INSIGHT_LONG_CURE_HOURS}-hour dry window detected for "
                        + ", ".join(cure_ready) + "."
                    ),
                    reasoning=(
                        "Precipitation stays low across the next two forecast days, meeting the "
                        "cure time requirement of long-cure materials."
                    ),
                    action_items=(
                        "Prioritize long-cure applications today",
                        "Ensure surface is clean and dry before application",
                        "Document application time for warranty records",
                    ),
                ))

        # Humidity
        if current.humidity > policy.INSIGHT_HUMIDITY_PCT:
            insights.append(Insight(
                id="high-humidity",
                type=InsightType.WARNING,
                priority=2,
                title="High Humidity Alert",
                description=(
                    f"Humidity at {round_half_up(current.humidity)}% may affect adhesive performance."
                ),
                reasoning=(
                    "High humidity extends cure times of cold-applied adhesives and may "
                    "affect initial tack."
                ),
                action_items=(
                    "Extend cure time before foot traffic",
                    "Monitor adhesive tack more frequently",
                    "Document humidity in daily log",
                ),
            ))

        # Labor decision
        cleared = [r for r in assembly_results if r.labor_green_light]
        if cleared:
            insights.append(Insight(
                id="labor-green-light",
                type=InsightType.RECOMMENDATION,
                priority=1,
                title="Labor Green Light",
                description=(
                    "Crews can be committed for: "
                    + ", ".join(r.assembly.name for r in cleared) + "."
                ),
                reasoning=(
                    "Current conditions, work window length and forecast lead time all pass. "
                    "Longest window: "
                    f"{max(r.work_window_hours for r in cleared)}h."
                ),
                action_items=("Confirm crew and material deliveries",),
            ))

        return sorted(insights, key=lambda insight: insight.priority)

    def generate_executive_summary(
        self,
        current: WeatherConditions,
        assembly_results: Sequence[AssemblyResult],
        dailies: Sequence[DailyForecast],
    ) -> str:
        """One-paragraph status summary for the field report"""
        go_count = sum(1 for r in assembly_results if r.compliant)
        total = len(assembly_results)
        temp = round_half_up(current.temp)

        assessments = self.risk_scorer.generate_risk_assessments(dailies)
        good_days = self.risk_scorer.favorable_day_count(assessments)

        if go_count == total:
            summary = (
                f"All {total} roofing assemblies are cleared for installation. "
                f"Current conditions: {temp}°F, {current.temp_trend.value} trend, "
                f"{current.precip_probability}% precipitation probability. "
            )
        else:
            flagged = ", ".join(r.assembly.name for r in assembly_results if not r.compliant)
            summary = (
                f"{go_count} of {total} assemblies are GO. Flagged: {flagged}. "
                f"Current temp {temp}°F. "
            )

        summary += f"{len(assessments)}-day outlook: {good_days} favorable days for exterior work. "

        if current.temp_trend == TempTrend.RISING:
            summary += "Temperature trend is positive - conditions may improve. "
        elif current.temp_trend == TempTrend.FALLING:
            summary += "Temperature declining - prioritize time-sensitive work. "

        return summary.strip()

"""
COMPONENT EVALUATOR (ENGINE-2)
Check one component's weather constraint against one sample

RULES:
❌ No short-circuiting: every violated rule is reported
✅ Fixed check order (reason order is part of the contract)
✅ Pure function
"""

from weathercraft.domain import policy
from weathercraft.domain.models import (
    Component,
    ComponentResult,
    TempTrend,
    WeatherConditions,
    WeatherConstraint,
)
from weathercraft.utils.numbers import fmt_number, round_half_up


class ComponentEvaluator:
    """
    Component Evaluator
    Stateless; safe to share across concurrent callers
    """

    def evaluate(
        self,
        component: Component,
        conditions: WeatherConditions,
    ) -> ComponentResult:
        """
        Evaluate component compliance

        Check order:
        min temp, max temp, rising, max wind, max humidity,
        active precipitation, precipitation probability

        Returns:
            ComponentResult (compliant iff no reasons)
        """
        reasons = self.collect_violations(component.constraint, conditions)
        return ComponentResult(
            component=component,
            compliant=not reasons,
            reasons=tuple(reasons),
        )

    @staticmethod
    def collect_violations(
        constraint: WeatherConstraint,
        conditions: WeatherConditions,
    ) -> list[str]:
        reasons: list[str] = []
        temp = round_half_up(conditions.temp)

        if constraint.min_temp is not None and conditions.temp < constraint.min_temp:
            reasons.append(f"Temp {temp}°F < min {fmt_number(constraint.min_temp)}°F")

        if constraint.max_temp is not None and conditions.temp > constraint.max_temp:
            reasons.append(f"Temp {temp}°F > max {fmt_number(constraint.max_temp)}°F")

        if constraint.must_be_rising and conditions.temp_trend != TempTrend.RISING:
            reasons.append(
                f"Temp must be rising (currently {TempTrend(conditions.temp_trend).value})"
            )

        if constraint.max_wind_speed is not None and conditions.wind_speed > constraint.max_wind_speed:
            reasons.append(
                f"Wind {round_half_up(conditions.wind_speed)}mph > max "
                f"{fmt_number(constraint.max_wind_speed)}mph"
            )

        if constraint.max_humidity is not None and conditions.humidity > constraint.max_humidity:
            reasons.append(
                f"Humidity {fmt_number(conditions.humidity)}% > max "
                f"{fmt_number(constraint.max_humidity)}%"
            )

        if constraint.no_precipitation and conditions.is_precipitating:
            reasons.append("Active precipitation")

        if (
            constraint.no_precipitation
            and conditions.precip_probability > policy.MAX_PRECIP_PROBABILITY_PCT
        ):
            reasons.append(f"High precip probability ({conditions.precip_probability}%)")

        return reasons

    def is_compliant(self, component: Component, conditions: WeatherConditions) -> bool:
        return not self.collect_violations(component.constraint, conditions)

"""
WINTER WORK PLANNER
Find forecast slots where cold-weather work packages can run

Works directly on the 3-hourly provider forecast rather than on normalized
conditions: package screening is stricter on precipitation (storms count,
40 % cut-off) and checks the rising requirement across the whole window.
"""

import math
from datetime import timedelta
from typing import Sequence

from weathercraft.domain import policy
from weathercraft.domain.models import (
    DailyForecast,
    DailySuitability,
    PackageWindow,
    SuitabilityStatus,
    WeatherConstraint,
    WeatherSample,
    WorkPackage,
)
from weathercraft.domain.services.condition_normalizer import is_precipitating
from weathercraft.utils.numbers import fmt_number, round_half_up


def sample_violations(sample: WeatherSample, constraint: WeatherConstraint) -> list[str]:
    """Reasons a single forecast slot fails a package constraint"""
    reasons = []
    if constraint.min_temp is not None and sample.temp < constraint.min_temp:
        reasons.append(f"Temp {round_half_up(sample.temp)}F below {fmt_number(constraint.min_temp)}F")
    if constraint.max_temp is not None and sample.temp > constraint.max_temp:
        reasons.append(f"Temp {round_half_up(sample.temp)}F above {fmt_number(constraint.max_temp)}F")
    if constraint.max_wind_speed is not None and sample.wind_speed > constraint.max_wind_speed:
        reasons.append(
            f"Wind {round_half_up(sample.wind_speed)}mph above {fmt_number(constraint.max_wind_speed)}mph"
        )
    if constraint.max_humidity is not None and sample.humidity > constraint.max_humidity:
        reasons.append(
            f"Humidity {fmt_number(sample.humidity)}% above {fmt_number(constraint.max_humidity)}%"
        )
    if constraint.no_precipitation:
        if is_precipitating(sample.description, policy.PACKAGE_PRECIP_TERMS):
            reasons.append("Active precipitation")
        precip_pct = (sample.precip_probability or 0.0) * 100
        if precip_pct > policy.PACKAGE_MAX_PRECIP_PCT:
            reasons.append(f"Precip risk {round_half_up(precip_pct)}%")
    return reasons


def _is_rising(window: Sequence[WeatherSample]) -> bool:
    if len(window) < 2:
        return True
    return window[-1].temp - window[0].temp >= policy.PACKAGE_RISING_DELTA_F


class WinterPlanner:
    """Winter Planner"""

    def find_work_windows(
        self,
        forecast: Sequence[WeatherSample],
        package: WorkPackage,
    ) -> list[PackageWindow]:
        """
        Every run of consecutive forecast slots long enough for the package

        Windows overlap: each qualifying start slot yields one window.
        """
        interval = policy.FORECAST_INTERVAL_HOURS
        slots = max(1, math.ceil(package.required_hours / interval))
        forecast = list(forecast or [])
        windows: list[PackageWindow] = []

        for start in range(0, len(forecast) - slots + 1):
            window = forecast[start:start + slots]
            if any(sample_violations(sample, package.constraint) for sample in window):
                continue
            if package.constraint.must_be_rising and not _is_rising(window):
                continue

            temps = [s.temp for s in window]
            max_precip = max(s.precip_probability or 0.0 for s in window) * 100
            windows.append(PackageWindow(
                start=window[0].timestamp,
                end=window[-1].timestamp + timedelta(hours=interval),
                duration_hours=slots * interval,
                avg_temp=round_half_up(sum(temps) / len(temps)),
                max_wind=round_half_up(max(s.wind_speed for s in window)),
                max_precip=round_half_up(max_precip),
                confidence=max(0, round_half_up(100 - max_precip)),
            ))

        return windows

    def build_daily_suitability(
        self,
        dailies: Sequence[DailyForecast],
        package: WorkPackage,
        days: int = policy.FORECAST_HORIZON_DAYS,
    ) -> list[DailySuitability]:
        """Go / caution / hold per forecast day for one package"""
        constraint = package.constraint
        results = []

        for day in list(dailies or [])[:days]:
            reasons = []
            status = SuitabilityStatus.GO

            if constraint.min_temp is not None and day.low < constraint.min_temp:
                status = SuitabilityStatus.HOLD
                reasons.append(f"Low {round_half_up(day.low)}F below {fmt_number(constraint.min_temp)}F")

            if constraint.max_temp is not None and day.high > constraint.max_temp:
                status = SuitabilityStatus.CAUTION
                reasons.append(f"High {round_half_up(day.high)}F above {fmt_number(constraint.max_temp)}F")

            if constraint.no_precipitation and day.precip_probability > policy.SUITABILITY_MAX_PRECIP_PCT:
                if status != SuitabilityStatus.HOLD:
                    status = SuitabilityStatus.CAUTION
                reasons.append(f"Precip risk {day.precip_probability}%")

            if constraint.max_wind_speed is not None and day.max_wind > constraint.max_wind_speed:
                status = SuitabilityStatus.HOLD
                reasons.append(f"Wind {round_half_up(day.max_wind)}mph")

            results.append(DailySuitability(date=day.date, status=status, reasons=tuple(reasons)))

        return results

"""
CONDITION NORMALIZER (ENGINE-1)
Convert raw weather samples into canonical WeatherConditions

RESPONSIBILITIES:
- Derive temperature trend from forecast lookahead
- Classify active precipitation from condition text
- Aggregate hourly samples into daily summaries

RULES:
❌ No smoothing, no regression on trends
❌ No network access
✅ Pure calculation
✅ Deterministic output
"""

from collections import Counter, OrderedDict
from dataclasses import replace
from datetime import tzinfo
from typing import Optional, Sequence

from weathercraft.domain import policy
from weathercraft.domain.models import (
    DailyForecast,
    TempTrend,
    WeatherConditions,
    WeatherSample,
)
from weathercraft.utils.numbers import round_half_up


def is_precipitating(description: str, terms: Sequence[str] = policy.PRECIP_TERMS) -> bool:
    """Crude substring classifier over the condition description"""
    lowered = (description or "").lower()
    return any(term in lowered for term in terms)


def classify_trend(delta: float, threshold: float) -> TempTrend:
    """
    Map a temperature delta to a trend

    Strictly greater than +threshold is rising, strictly less than
    -threshold is falling, anything in between is stable.
    """
    if delta > threshold:
        return TempTrend.RISING
    if delta < -threshold:
        return TempTrend.FALLING
    return TempTrend.STABLE


class ConditionNormalizer:
    """
    Condition Normalizer
    Every raw weather shape passes through here before evaluation
    """

    def normalize_conditions(
        self,
        current: WeatherSample,
        forecast: Sequence[WeatherSample],
    ) -> WeatherConditions:
        """
        Normalize the current reading using the upcoming forecast

        Args:
            current: Current observation
            forecast: Upcoming forecast samples (chronological)

        Returns:
            WeatherConditions for "now"
        """
        forecast = forecast or []
        trend = TempTrend.STABLE
        lookahead = forecast[:policy.TREND_LOOKAHEAD_SAMPLES]
        if lookahead:
            avg_future = sum(sample.temp for sample in lookahead) / len(lookahead)
            trend = classify_trend(avg_future - current.temp, policy.CURRENT_TREND_THRESHOLD_F)

        next_pop = forecast[0].precip_probability if forecast else 0.0

        return WeatherConditions(
            temp=current.temp,
            temp_trend=trend,
            wind_speed=current.wind_speed,
            humidity=current.humidity,
            is_precipitating=is_precipitating(current.description),
            precip_probability=_to_percent(next_pop),
        )

    def normalize_hourly_series(
        self,
        forecast: Sequence[WeatherSample],
        hours_per_sample: int = 1,
    ) -> list[WeatherConditions]:
        """
        Normalize each forecast sample for the work-window scan

        Each sample's trend compares it to the following sample; the last
        sample has nothing to compare against and stays stable. Coarser
        forecasts (e.g. 3-hourly) repeat each sample hours_per_sample times
        so that list offsets stay in hours.
        """
        forecast = forecast or []
        series: list[WeatherConditions] = []
        for index, sample in enumerate(forecast):
            trend = TempTrend.STABLE
            if index < len(forecast) - 1:
                trend = classify_trend(
                    forecast[index + 1].temp - sample.temp,
                    policy.HOURLY_TREND_THRESHOLD_F,
                )
            conditions = WeatherConditions(
                temp=sample.temp,
                temp_trend=trend,
                wind_speed=sample.wind_speed,
                humidity=sample.humidity,
                is_precipitating=is_precipitating(sample.description),
                precip_probability=_to_percent(sample.precip_probability),
            )
            series.extend([conditions] * max(1, hours_per_sample))
        return series

    def normalize_daily(self, daily: DailyForecast) -> WeatherConditions:
        """
        Normalize a daily summary using worst-case values

        The day's low stands in for temperature. Trend compares the averages
        of the first and second half of the retained hourly samples.
        """
        temps = [sample.temp for sample in daily.hourly]
        trend = TempTrend.STABLE
        if len(temps) > 2:
            middle = len(temps) // 2
            first_half = temps[:middle]
            second_half = temps[middle:]
            first_avg = sum(first_half) / len(first_half)
            second_avg = sum(second_half) / len(second_half)
            trend = classify_trend(second_avg - first_avg, policy.DAILY_TREND_THRESHOLD_F)

        return WeatherConditions(
            temp=daily.low,
            temp_trend=trend,
            wind_speed=daily.max_wind,
            humidity=daily.avg_humidity,
            is_precipitating=is_precipitating(daily.conditions),
            precip_probability=daily.precip_probability,
        )

    def group_forecast_by_day(
        self,
        forecast: Sequence[WeatherSample],
        tz: Optional[tzinfo] = None,
    ) -> list[DailyForecast]:
        """
        Aggregate forecast samples per local calendar day

        Args:
            forecast: Forecast samples (any order)
            tz: Project timezone; samples keep their own offset when omitted

        Returns:
            DailyForecast list sorted by date
        """
        by_day: "OrderedDict[object, list[WeatherSample]]" = OrderedDict()
        for sample in forecast or []:
            local = sample
            if tz is not None:
                local = _localize(sample, tz)
            by_day.setdefault(local.timestamp.date(), []).append(local)

        dailies = [self._summarize_day(samples) for samples in by_day.values()]
        return sorted(dailies, key=lambda day: day.date)

    @staticmethod
    def _summarize_day(samples: list[WeatherSample]) -> DailyForecast:
        temps = [s.temp for s in samples]
        winds = [s.wind_speed for s in samples]
        humidities = [s.humidity for s in samples]
        pops = [s.precip_probability for s in samples]

        # Most common description wins; ties go to the first seen
        conditions = Counter(s.description for s in samples).most_common(1)[0][0]

        midday = next(
            (s for s in samples if 10 <= s.timestamp.hour <= 14),
            samples[0],
        )
        first = samples[0].timestamp

        return DailyForecast(
            date=first.date(),
            day_name=first.strftime("%a"),
            high=max(temps),
            low=min(temps),
            avg_temp=sum(temps) / len(temps),
            max_wind=max(winds),
            avg_humidity=round_half_up(sum(humidities) / len(humidities)),
            precip_probability=_to_percent(max(pops)),
            conditions=conditions,
            icon=midday.icon,
            hourly=tuple(samples),
        )


def _to_percent(probability: Optional[float]) -> int:
    return round_half_up((probability or 0.0) * 100)


def _localize(sample: WeatherSample, tz: tzinfo) -> WeatherSample:
    return replace(sample, timestamp=sample.timestamp.astimezone(tz))

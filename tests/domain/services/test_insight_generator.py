"""
Unit Tests for Insight Generator
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from weathercraft.domain.models import (
    Assembly,
    AssemblyCatalog,
    Component,
    DailyForecast,
    InsightType,
    ScopeType,
    TempTrend,
    WeatherConditions,
    WeatherConstraint,
)
from weathercraft.domain.services.assembly_evaluator import AssemblyEvaluator
from weathercraft.domain.services.insight_generator import InsightGenerator

NOW = datetime(2026, 1, 5, 15, 0, tzinfo=timezone.utc)


def conditions(temp: float = 55.0, trend: TempTrend = TempTrend.STABLE, wind: float = 5.0,
               humidity: float = 40.0, precip: int = 0) -> WeatherConditions:
    return WeatherConditions(
        temp=temp,
        temp_trend=trend,
        wind_speed=wind,
        humidity=humidity,
        is_precipitating=False,
        precip_probability=precip,
    )


def catalog(cure_hours=None, window_hours: int = 4) -> AssemblyCatalog:
    return AssemblyCatalog(assemblies=(
        Assembly(
            id="base",
            name="Base System",
            description="",
            components=(Component(
                id="primer", name="Primer", description="",
                constraint=WeatherConstraint(
                    min_temp=40.0, no_precipitation=True, cure_time_hours=cure_hours,
                ),
            ),),
            scope_type=ScopeType.DECK_PREP,
            min_lead_time_days=1,
            min_work_window_hours=window_hours,
        ),
    ))


def day(offset: int, low: float = 45.0, precip: int = 10) -> DailyForecast:
    return DailyForecast(
        date=date(2026, 1, 5) + timedelta(days=offset),
        day_name="",
        high=low + 12,
        low=low,
        avg_temp=low + 6,
        max_wind=8.0,
        avg_humidity=50,
        precip_probability=precip,
        conditions="clear sky",
    )


@pytest.fixture
def generator():
    return InsightGenerator()


def run(generator, cat, current, dailies=(), hourly=None):
    results = AssemblyEvaluator().evaluate_all_assemblies(cat, current, hourly, NOW)
    return generator.generate_insights(cat, current, results, list(dailies))


def ids(insights):
    return [i.id for i in insights]


class TestInsightGenerator:

    def test_quiet_day_has_no_insights(self, generator):
        assert run(generator, catalog(), conditions()) == []

    def test_rising_toward_threshold(self, generator, config_engine):
        insights = run(generator, config_engine.catalog, conditions(47.0, TempTrend.RISING))
        opportunity = next(i for i in insights if i.id == "temp-rising-opportunity")
        assert opportunity.type == InsightType.OPPORTUNITY
        assert opportunity.priority == 1
        assert "47°F" in opportunity.description

    @pytest.mark.parametrize("temp", [44.0, 50.0])
    def test_rising_outside_watch_band(self, generator, temp):
        assert "temp-rising-opportunity" not in ids(run(generator, catalog(), conditions(temp, TempTrend.RISING)))

    def test_falling_while_everything_compliant(self, generator):
        insights = run(generator, catalog(), conditions(55.0, TempTrend.FALLING))
        assert ids(insights) == ["temp-falling-warning"]

    def test_falling_with_hold_is_silent(self, generator):
        assert run(generator, catalog(), conditions(35.0, TempTrend.FALLING)) == []

    @pytest.mark.parametrize("precip,expected", [
        (30, []),
        (31, ["precip-watch"]),
        (50, ["precip-watch"]),
        (51, ["precip-likely"]),
    ])
    def test_precipitation_bands(self, generator, precip, expected):
        insights = run(generator, AssemblyCatalog(assemblies=()), conditions(precip=precip))
        assert ids(insights) == expected

    @pytest.mark.parametrize("wind,expected", [(15.0, False), (20.0, True), (25.0, True), (26.0, False)])
    def test_wind_caution_band(self, generator, wind, expected):
        insights = run(generator, catalog(), conditions(wind=wind))
        assert ("wind-caution" in ids(insights)) is expected

    def test_high_humidity(self, generator):
        insights = run(generator, catalog(), conditions(humidity=85.0))
        assert ids(insights) == ["high-humidity"]
        assert insights[0].description == "Humidity at 85% may affect adhesive performance."

    def test_better_tomorrow(self, generator):
        insights = run(generator, catalog(), conditions(35.0), [day(0, low=32.0), day(1, low=45.0)])
        better = next(i for i in insights if i.id == "better-tomorrow")
        assert better.description == "Tomorrow shows 1/1 assemblies GO vs today's 0/1."

    def test_not_better_tomorrow_when_equal(self, generator):
        insights = run(generator, catalog(), conditions(55.0), [day(0), day(1)])
        assert "better-tomorrow" not in ids(insights)

    def test_cure_window(self, generator):
        insights = run(generator, catalog(cure_hours=24), conditions(), [day(0, precip=20), day(1, precip=30)])
        assert "cure-window" in ids(insights)

    def test_cure_window_blocked_by_wet_second_day(self, generator):
        insights = run(generator, catalog(cure_hours=24), conditions(), [day(0), day(1, precip=31)])
        assert "cure-window" not in ids(insights)

    def test_labor_green_light(self, generator):
        hourly = [conditions()] * 48
        insights = run(generator, catalog(), conditions(), hourly=hourly)
        green = next(i for i in insights if i.id == "labor-green-light")
        assert green.description == "Crews can be committed for: Base System."
        assert green.type == InsightType.RECOMMENDATION

    def test_sorted_by_priority(self, generator, config_engine):
        insights = run(
            generator, config_engine.catalog,
            conditions(47.0, TempTrend.RISING, wind=20.0, humidity=90.0, precip=40),
        )
        priorities = [i.priority for i in insights]
        assert priorities == sorted(priorities)
        assert insights[0].id == "temp-rising-opportunity"


class TestExecutiveSummary:

    def test_all_clear(self, generator):
        cat = catalog()
        current = conditions(55.0, precip=10)
        results = AssemblyEvaluator().evaluate_all_assemblies(cat, current, None, NOW)
        summary = generator.generate_executive_summary(current, results, [day(0), day(1, low=30.0, precip=80)])
        assert summary == (
            "All 1 roofing assemblies are cleared for installation. "
            "Current conditions: 55°F, stable trend, 10% precipitation probability. "
            "2-day outlook: 1 favorable days for exterior work."
        )

    def test_flagged_and_falling(self, generator, config_engine):
        cat = config_engine.catalog
        current = conditions(45.0, TempTrend.FALLING)
        results = AssemblyEvaluator().evaluate_all_assemblies(cat, current, None, NOW)
        summary = generator.generate_executive_summary(current, results, [])
        assert summary.startswith("1 of 5 assemblies are GO. Flagged: ")
        assert summary.endswith("Temperature declining - prioritize time-sensitive work.")

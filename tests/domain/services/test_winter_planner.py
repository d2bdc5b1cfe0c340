"""
Unit Tests for Winter Work Planner
"""

from datetime import date, datetime, timedelta, timezone

import pytest

from weathercraft.domain.models import (
    DailyForecast,
    SuitabilityStatus,
    WeatherConstraint,
    WeatherSample,
    WorkPackage,
)
from weathercraft.domain.services.winter_planner import WinterPlanner, sample_violations

T0 = datetime(2026, 1, 5, 15, 0, tzinfo=timezone.utc)


def slot(index: int, temp: float, pop: float = 0.0, wind: float = 5.0,
         description: str = "clear sky") -> WeatherSample:
    return WeatherSample(
        timestamp=T0 + timedelta(hours=3 * index),
        temp=temp,
        humidity=50,
        wind_speed=wind,
        description=description,
        precip_probability=pop,
    )


def package(required_hours: int = 6, **constraint) -> WorkPackage:
    constraint.setdefault("min_temp", 40.0)
    constraint.setdefault("no_precipitation", True)
    constraint.setdefault("max_wind_speed", 25.0)
    return WorkPackage(
        id="pkg",
        name="Package",
        description="",
        constraint=WeatherConstraint(**constraint),
        required_hours=required_hours,
        lead_time_hours=12,
    )


def day(offset: int, low: float = 45.0, high: float = 60.0, precip: int = 10,
        wind: float = 10.0) -> DailyForecast:
    return DailyForecast(
        date=date(2026, 1, 5) + timedelta(days=offset),
        day_name="",
        high=high,
        low=low,
        avg_temp=(high + low) / 2,
        max_wind=wind,
        avg_humidity=50,
        precip_probability=precip,
        conditions="clear sky",
    )


@pytest.fixture
def planner():
    return WinterPlanner()


class TestSampleViolations:

    def test_reasons(self):
        reasons = sample_violations(
            slot(0, 35.0, pop=0.45, wind=30.0, description="thunderstorm"),
            package().constraint,
        )
        assert reasons == [
            "Temp 35F below 40F",
            "Wind 30mph above 25mph",
            "Active precipitation",
            "Precip risk 45%",
        ]

    def test_clean_slot(self):
        assert sample_violations(slot(0, 50.0, pop=0.3), package().constraint) == []

    def test_precip_just_over_limit_is_rejected(self):
        assert sample_violations(slot(0, 50.0, pop=0.404), package().constraint) == ["Precip risk 40%"]


class TestFindWorkWindows:

    def test_overlapping_windows(self, planner):
        forecast = [slot(0, 45.0), slot(1, 47.0), slot(2, 30.0),
                    slot(3, 50.0), slot(4, 52.0), slot(5, 55.0)]
        windows = planner.find_work_windows(forecast, package(6))

        assert [w.start for w in windows] == [forecast[0].timestamp, forecast[3].timestamp,
                                              forecast[4].timestamp]
        first = windows[0]
        assert first.end == T0 + timedelta(hours=6)
        assert first.duration_hours == 6
        assert first.avg_temp == 46
        assert first.max_wind == 5
        assert first.max_precip == 0
        assert first.confidence == 100

    def test_confidence_from_worst_precip(self, planner):
        windows = planner.find_work_windows([slot(0, 50.0, pop=0.1), slot(1, 50.0, pop=0.25)], package(6))
        assert windows[0].max_precip == 25
        assert windows[0].confidence == 75

    def test_slot_count_rounds_up(self, planner):
        forecast = [slot(i, 50.0) for i in range(10)]
        assert len(planner.find_work_windows(forecast, package(3))) == 10
        assert len(planner.find_work_windows(forecast, package(7))) == 8
        assert len(planner.find_work_windows(forecast, package(24))) == 3
        assert planner.find_work_windows(forecast, package(24))[0].duration_hours == 24

    def test_rising_requirement(self, planner):
        rising = package(6, must_be_rising=True)
        assert planner.find_work_windows([slot(0, 40.0), slot(1, 41.5)], rising) == []
        assert len(planner.find_work_windows([slot(0, 40.0), slot(1, 42.0)], rising)) == 1

    def test_forecast_shorter_than_package(self, planner):
        assert planner.find_work_windows([slot(0, 50.0)], package(6)) == []


class TestDailySuitability:

    def test_go(self, planner):
        [result] = planner.build_daily_suitability([day(0)], package())
        assert result.status == SuitabilityStatus.GO
        assert result.reasons == ()

    def test_cold_low_holds(self, planner):
        [result] = planner.build_daily_suitability([day(0, low=35.0, precip=50)], package())
        assert result.status == SuitabilityStatus.HOLD
        assert result.reasons == ("Low 35F below 40F", "Precip risk 50%")

    def test_wet_day_is_caution(self, planner):
        [result] = planner.build_daily_suitability([day(0, precip=41)], package())
        assert result.status == SuitabilityStatus.CAUTION

    def test_hot_day_is_caution(self, planner):
        [result] = planner.build_daily_suitability([day(0, high=105.0)], package(max_temp=100.0))
        assert result.status == SuitabilityStatus.CAUTION
        assert result.reasons == ("High 105F above 100F",)

    def test_wind_holds(self, planner):
        [result] = planner.build_daily_suitability([day(0, precip=60, wind=30.0)], package())
        assert result.status == SuitabilityStatus.HOLD
        assert result.reasons == ("Precip risk 60%", "Wind 30mph")

    def test_limited_to_five_days(self, planner):
        assert len(planner.build_daily_suitability([day(i) for i in range(7)], package())) == 5

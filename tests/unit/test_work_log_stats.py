from datetime import date

import pytest

from weathercraft.domain.models import WorkLogEntry
from weathercraft.domain.services.work_log_service import (
    work_log_months,
    work_log_stats,
)


def entry(day: date, hours: float, **categories) -> WorkLogEntry:
    return WorkLogEntry(date=day, labor_hours=hours, categories=categories)


@pytest.fixture
def entries():
    return [
        entry(date(2026, 1, 12), 8.0, roofing=6.0, flashing=2.0),  # Monday
        entry(date(2026, 1, 5), 8.0),                              # Monday
        entry(date(2026, 1, 6), 6.0),                              # Tuesday
        entry(date(2026, 1, 9), 4.0),                              # Friday
    ]


def test_empty_log():
    stats = work_log_stats([], today=date(2026, 1, 14))
    assert stats.total_days == 0
    assert stats.total_labor_hours == 0.0
    assert stats.average_hours_per_day == 0.0
    assert stats.work_streak == 0
    assert stats.days_since_last_work is None
    assert stats.last_worked_date is None


def test_totals_and_dates(entries):
    stats = work_log_stats(entries, today=date(2026, 1, 14))
    assert stats.total_days == 4
    assert stats.total_labor_hours == 26.0
    assert stats.average_hours_per_day == 6.5
    assert stats.first_worked_date == date(2026, 1, 5)
    assert stats.last_worked_date == date(2026, 1, 12)
    assert stats.days_since_last_work == 2


def test_streak_skips_weekends(entries):
    # Mon 12 and Fri 9 are logged, Thu 8 is not
    assert work_log_stats(entries, today=date(2026, 1, 12)).work_streak == 2


def test_streak_over_full_week():
    week = [entry(date(2026, 1, d), 8.0) for d in (5, 6, 7, 8, 9)]
    assert work_log_stats(week, today=date(2026, 1, 9)).work_streak == 5


def test_days_since_never_negative(entries):
    assert work_log_stats(entries, today=date(2026, 1, 1)).days_since_last_work == 0


def test_months():
    log = [entry(date(2026, 1, 5), 8.0), entry(date(2025, 12, 30), 4.0), entry(date(2026, 1, 6), 2.0)]
    assert work_log_months(log) == ["2025-12", "2026-01"]


def test_negative_hours_rejected():
    with pytest.raises(ValueError):
        WorkLogEntry(date=date(2026, 1, 5), labor_hours=-1.0)


def test_average_rounds_half_up():
    log = [entry(date(2026, 1, 5), 8.0), entry(date(2026, 1, 6), 0.25)]
    stats = work_log_stats(log, today=date(2026, 1, 6))
    assert stats.total_labor_hours == 8.25
    assert stats.average_hours_per_day == 4.13

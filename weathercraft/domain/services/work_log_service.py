"""
WORK LOG STATS
Summaries over manually entered labor days

Pure functions; entries come from the work-log repository.
"""

from datetime import date, timedelta
from typing import Iterable, Optional

from weathercraft.domain.models import WorkLogEntry, WorkLogStats
from weathercraft.utils.numbers import round_half_up


def work_log_stats(entries: Iterable[WorkLogEntry], today: Optional[date] = None) -> WorkLogStats:
    """
    Totals, averages and the current weekday streak

    Args:
        entries: Logged days (any order)
        today: Reference day for "days since last work"

    Returns:
        WorkLogStats; zeros and None for an empty log
    """
    ordered = sorted(entries, key=lambda entry: entry.date)
    if not ordered:
        return WorkLogStats(
            total_days=0,
            total_labor_hours=0.0,
            average_hours_per_day=0.0,
            work_streak=0,
            days_since_last_work=None,
        )

    today = today or date.today()
    total_hours = sum(entry.labor_hours for entry in ordered)
    total_days = len(ordered)
    first = ordered[0].date
    last = ordered[-1].date

    return WorkLogStats(
        total_days=total_days,
        total_labor_hours=round_half_up(total_hours * 100) / 100,
        average_hours_per_day=round_half_up(total_hours / total_days * 100) / 100,
        work_streak=_weekday_streak(last, {entry.date for entry in ordered}),
        days_since_last_work=max(0, (today - last).days),
        first_worked_date=first,
        last_worked_date=last,
    )


def _weekday_streak(last_worked: date, logged: set[date]) -> int:
    """Consecutive logged weekdays ending at last_worked; weekends are skipped"""
    streak = 0
    cursor = last_worked
    while True:
        if cursor.weekday() < 5:
            if cursor not in logged:
                break
            streak += 1
        cursor -= timedelta(days=1)
    return streak


def work_log_months(entries: Iterable[WorkLogEntry]) -> list[str]:
    """Distinct YYYY-MM months with entries, sorted"""
    return sorted({entry.date.strftime("%Y-%m") for entry in entries})

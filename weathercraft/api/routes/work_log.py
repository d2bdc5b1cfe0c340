"""
Work Log API Routes
Daily labor entries keyed by date
"""

from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from weathercraft.domain.models import WorkLogEntry
from weathercraft.domain.schemas.work_log import (
    WorkLogEntryRequest,
    WorkLogEntryResponse,
    WorkLogStatsResponse,
)
from weathercraft.domain.services.work_log_service import work_log_months, work_log_stats
from weathercraft.infrastructure.db.database import get_db
from weathercraft.infrastructure.db.repositories.work_log_repository import WorkLogRepository

router = APIRouter()


def _entry_response(entry: WorkLogEntry) -> WorkLogEntryResponse:
    return WorkLogEntryResponse(
        date=entry.date,
        labor_hours=entry.labor_hours,
        categories=dict(entry.categories),
    )


@router.get("", response_model=List[WorkLogEntryResponse])
async def list_entries(
    start: Optional[date] = None,
    end: Optional[date] = None,
    db: AsyncSession = Depends(get_db),
):
    repo = WorkLogRepository(db)
    if start or end:
        entries = await repo.list_between(start or date.min, end or date.max)
    else:
        entries = await repo.list_all()
    return [_entry_response(e) for e in entries]


@router.get("/stats", response_model=WorkLogStatsResponse)
async def get_stats(db: AsyncSession = Depends(get_db)):
    entries = await WorkLogRepository(db).list_all()
    stats = work_log_stats(entries)
    return WorkLogStatsResponse(
        total_days=stats.total_days,
        total_labor_hours=stats.total_labor_hours,
        average_hours_per_day=stats.average_hours_per_day,
        work_streak=stats.work_streak,
        days_since_last_work=stats.days_since_last_work,
        first_worked_date=stats.first_worked_date,
        last_worked_date=stats.last_worked_date,
        months=work_log_months(entries),
    )


@router.get("/{entry_date}", response_model=WorkLogEntryResponse)
async def get_entry(entry_date: date, db: AsyncSession = Depends(get_db)):
    entry = await WorkLogRepository(db).get_by_date(entry_date)
    if entry is None:
        raise HTTPException(status_code=404, detail=f"No work logged for {entry_date.isoformat()}")
    return _entry_response(entry)


@router.put("/{entry_date}", response_model=WorkLogEntryResponse)
async def put_entry(
    entry_date: date,
    request: WorkLogEntryRequest,
    db: AsyncSession = Depends(get_db),
):
    entry = WorkLogEntry(
        date=entry_date,
        labor_hours=request.labor_hours,
        categories=dict(request.categories),
    )
    saved = await WorkLogRepository(db).upsert(entry)
    return _entry_response(saved)


@router.delete("/{entry_date}")
async def delete_entry(entry_date: date, db: AsyncSession = Depends(get_db)):
    deleted = await WorkLogRepository(db).delete(entry_date)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"No work logged for {entry_date.isoformat()}")
    return {"status": "deleted", "date": entry_date.isoformat()}

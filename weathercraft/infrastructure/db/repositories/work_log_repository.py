"""
Work Log Repository
Key-value store of labor entries by date
"""

from datetime import date
from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from weathercraft.domain.models import WorkLogEntry
from weathercraft.infrastructure.db.models import WorkLogEntryModel


def _to_entry(model: WorkLogEntryModel) -> WorkLogEntry:
    return WorkLogEntry(
        date=model.date,
        labor_hours=float(model.labor_hours),
        categories={k: float(v) for k, v in (model.categories or {}).items()},
    )


class WorkLogRepository:
    """Repository for daily work-log entries"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_date(self, entry_date: date) -> Optional[WorkLogEntry]:
        model = await self._get_model(entry_date)
        return _to_entry(model) if model else None

    async def list_all(self) -> List[WorkLogEntry]:
        result = await self.session.execute(
            select(WorkLogEntryModel).order_by(WorkLogEntryModel.date)
        )
        return [_to_entry(m) for m in result.scalars().all()]

    async def list_between(self, start: date, end: date) -> List[WorkLogEntry]:
        result = await self.session.execute(
            select(WorkLogEntryModel)
            .where(WorkLogEntryModel.date >= start, WorkLogEntryModel.date <= end)
            .order_by(WorkLogEntryModel.date)
        )
        return [_to_entry(m) for m in result.scalars().all()]

    async def upsert(self, entry: WorkLogEntry) -> WorkLogEntry:
        """Insert or replace the entry for entry.date"""
        model = await self._get_model(entry.date)
        if model is None:
            model = WorkLogEntryModel(date=entry.date)
            self.session.add(model)
        model.labor_hours = entry.labor_hours
        model.categories = dict(entry.categories)
        await self.session.flush()
        return _to_entry(model)

    async def delete(self, entry_date: date) -> bool:
        result = await self.session.execute(
            delete(WorkLogEntryModel).where(WorkLogEntryModel.date == entry_date)
        )
        return (result.rowcount or 0) > 0

    async def _get_model(self, entry_date: date) -> Optional[WorkLogEntryModel]:
        result = await self.session.execute(
            select(WorkLogEntryModel).where(WorkLogEntryModel.date == entry_date)
        )
        return result.scalars().first()

from datetime import date

import pytest

from weathercraft.domain.models import WorkLogEntry
from weathercraft.infrastructure.db.repositories.work_log_repository import WorkLogRepository


@pytest.mark.asyncio
@pytest.mark.integration
async def test_upsert_and_fetch(db_session):
    repo = WorkLogRepository(db_session)
    saved = await repo.upsert(WorkLogEntry(
        date=date(2026, 1, 5), labor_hours=7.5, categories={"roofing": 7.5},
    ))
    await db_session.commit()

    assert saved.labor_hours == 7.5
    fetched = await repo.get_by_date(date(2026, 1, 5))
    assert fetched == WorkLogEntry(date=date(2026, 1, 5), labor_hours=7.5, categories={"roofing": 7.5})


@pytest.mark.asyncio
@pytest.mark.integration
async def test_upsert_replaces_existing_day(db_session):
    repo = WorkLogRepository(db_session)
    await repo.upsert(WorkLogEntry(date=date(2026, 1, 5), labor_hours=4.0))
    await repo.upsert(WorkLogEntry(date=date(2026, 1, 5), labor_hours=9.0, categories={"metal": 9.0}))
    await db_session.commit()

    entries = await repo.list_all()
    assert len(entries) == 1
    assert entries[0].labor_hours == 9.0
    assert entries[0].categories == {"metal": 9.0}


@pytest.mark.asyncio
@pytest.mark.integration
async def test_list_ordering_and_range(db_session):
    repo = WorkLogRepository(db_session)
    for day in (12, 5, 8):
        await repo.upsert(WorkLogEntry(date=date(2026, 1, day), labor_hours=8.0))
    await db_session.commit()

    assert [e.date.day for e in await repo.list_all()] == [5, 8, 12]
    between = await repo.list_between(date(2026, 1, 6), date(2026, 1, 12))
    assert [e.date.day for e in between] == [8, 12]


@pytest.mark.asyncio
@pytest.mark.integration
async def test_delete(db_session):
    repo = WorkLogRepository(db_session)
    await repo.upsert(WorkLogEntry(date=date(2026, 1, 5), labor_hours=8.0))
    await db_session.commit()

    assert await repo.delete(date(2026, 1, 5)) is True
    assert await repo.delete(date(2026, 1, 5)) is False
    assert await repo.get_by_date(date(2026, 1, 5)) is None

"""Integration tests for the SQLAlchemy repository on a SQLite file."""

import sqlite3
from collections.abc import AsyncIterator
from datetime import date

import pytest
import pytest_asyncio
from sqlalchemy.exc import IntegrityError

from visitlog.application.services import VisitService
from visitlog.domain.categories import VisitCategory
from visitlog.domain.entities import VisitRecord
from visitlog.domain.exceptions import ConstraintError, ValidationError
from visitlog.infrastructure.database.models import CATEGORY_CONSTRAINT, MAX_VISIT_ID
from visitlog.infrastructure.database.repositories import SQLiteVisitRecordRepository
from visitlog.infrastructure.database.repositories.visit_record_repository import (
    GENERIC_CONSTRAINT,
    _constraint_error,
)


def _record(day: str = "2025-01-15", category: str = "Psychological", name: str = "Maria Silva"):
    return VisitRecord.from_input(
        {
            "name": name,
            "professional": "Dr. João",
            "visitDate": day,
            "category": category,
            "notes": "first visit",
        }
    )


@pytest_asyncio.fixture
async def repository(tmp_path) -> AsyncIterator[SQLiteVisitRecordRepository]:
    repo = SQLiteVisitRecordRepository(f"sqlite:///{tmp_path}/nested/visits.db")
    await repo.initialize()
    try:
        yield repo
    finally:
        await repo.close()


@pytest.mark.asyncio
async def test_initialize_creates_database_file(tmp_path, repository):
    assert (tmp_path / "nested" / "visits.db").exists()
    # Running it twice must not fail on the existing table
    await repository.initialize()


@pytest.mark.asyncio
async def test_insert_and_find(repository):
    row = await repository.insert(_record())
    assert row.id > 0
    assert row.visit_date == date(2025, 1, 15)
    assert row.created_at.tzinfo is not None

    found = await repository.find_by_id(row.id)
    assert found == row
    assert await repository.find_by_id(row.id + 100) is None


@pytest.mark.asyncio
async def test_table_check_rejects_unknown_category(repository):
    with pytest.raises(ConstraintError) as exc_info:
        await repository.insert(_record(category="Astrology"))
    assert exc_info.value.constraint == CATEGORY_CONSTRAINT
    assert await repository.count() == 0


@pytest.mark.asyncio
async def test_list_all_orders_by_visit_date_descending(repository):
    first = await repository.insert(_record("2025-01-15"))
    latest = await repository.insert(_record("2025-04-01"))
    same_day = await repository.insert(_record("2025-01-15"))

    result = await repository.list_all()
    assert result.row_count == 3
    assert [row.id for row in result.rows] == [latest.id, same_day.id, first.id]


@pytest.mark.asyncio
async def test_update_and_remove(repository):
    row = await repository.insert(_record())
    updated = await repository.update(row.id, _record("2025-05-05", "SocialAssistance", "Maria S."))
    assert updated.id == row.id
    assert updated.name == "Maria S."
    assert updated.category == "SocialAssistance"
    assert updated.updated_at >= row.updated_at

    assert await repository.update(row.id + 100, _record()) is None
    assert await repository.remove(row.id) == 1
    assert await repository.remove(row.id) == 0


@pytest.mark.asyncio
async def test_update_rolls_back_on_constraint_violation(repository):
    row = await repository.insert(_record())
    with pytest.raises(ConstraintError):
        await repository.update(row.id, _record(category="Astrology"))
    assert (await repository.find_by_id(row.id)).category == "Psychological"


@pytest.mark.asyncio
async def test_aggregate_and_filter(repository):
    await repository.insert(_record(category="Pedagogical"))
    await repository.insert(_record(category="Pedagogical", day="2025-02-01"))
    await repository.insert(_record(category="SocialAssistance"))

    counts = await repository.aggregate_by_category()
    assert counts == {
        VisitCategory.PSYCHOLOGICAL: 0,
        VisitCategory.PEDAGOGICAL: 2,
        VisitCategory.SOCIAL_ASSISTANCE: 1,
    }

    pedagogical = await repository.list_by_category(VisitCategory.PEDAGOGICAL)
    assert [row.visit_date for row in pedagogical.rows] == [date(2025, 2, 1), date(2025, 1, 15)]


@pytest.mark.asyncio
async def test_service_scenarios_on_sqlite(repository):
    service = VisitService(repository)
    created = await service.create(
        {
            "name": "Maria Silva",
            "professional": "Dr. João",
            "visitDate": "2025-01-15",
            "category": "Psychological",
            "notes": "first visit",
        }
    )
    assert await service.find_by_id(created.id) == created
    assert (await service.statistics()).by_category[VisitCategory.PSYCHOLOGICAL] == 1

    with pytest.raises(ValidationError):
        await service.create({"name": "A", "professional": "Dr. João", "category": "Psychological"})
    assert await service.update(9999, {"name": "Maria Silva"}) is None
    assert len(await service.list_all()) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("visit_id", [MAX_VISIT_ID + 1, 2**63, 2**70])
async def test_out_of_range_id_is_not_found(repository, visit_id):
    await repository.insert(_record())

    assert await repository.find_by_id(visit_id) is None
    assert await repository.update(visit_id, _record()) is None
    assert await repository.remove(visit_id) == 0
    assert await repository.count() == 1

    service = VisitService(repository)
    assert await service.find_by_id(visit_id) is None
    assert await service.remove(visit_id) is False


def test_integrity_error_without_category_check_uses_generic_name():
    error = IntegrityError(
        "INSERT INTO visits ...", {}, sqlite3.IntegrityError("NOT NULL constraint failed: visits.name")
    )
    converted = _constraint_error(error)
    assert converted.constraint == GENERIC_CONSTRAINT
    assert "NOT NULL" in converted.detail

"""Unit tests for the in-memory visit repository."""

from datetime import date

import pytest

from visitlog.domain.categories import VisitCategory
from visitlog.domain.entities import VisitRecord
from visitlog.domain.exceptions import ConstraintError
from visitlog.infrastructure.database.repositories import InMemoryVisitRecordRepository


def _record(day: str = "2025-01-15", category: str = "Psychological") -> VisitRecord:
    return VisitRecord.from_input(
        {
            "name": "Maria Silva",
            "professional": "Dr. João",
            "visitDate": day,
            "category": category,
        }
    )


@pytest.fixture
def repository() -> InMemoryVisitRecordRepository:
    return InMemoryVisitRecordRepository()


@pytest.mark.asyncio
async def test_insert_assigns_increasing_ids_and_timestamps(repository):
    first = await repository.insert(_record())
    second = await repository.insert(_record())
    assert (first.id, second.id) == (1, 2)
    assert first.created_at == first.updated_at
    assert first.visit_date == date(2025, 1, 15)
    assert first.notes == ""


@pytest.mark.asyncio
async def test_insert_enforces_category_check(repository):
    with pytest.raises(ConstraintError):
        await repository.insert(_record(category="Other"))
    assert await repository.count() == 0


@pytest.mark.asyncio
async def test_find_by_id_returns_none_for_absent(repository):
    assert await repository.find_by_id(42) is None


@pytest.mark.asyncio
async def test_list_all_orders_by_date_then_id_descending(repository):
    a = await repository.insert(_record("2025-01-15"))
    b = await repository.insert(_record("2025-03-01"))
    c = await repository.insert(_record("2025-01-15"))

    result = await repository.list_all()
    assert result.row_count == 3
    assert [row.id for row in result.rows] == [b.id, c.id, a.id]


@pytest.mark.asyncio
async def test_update_refreshes_updated_at_and_reports_missing(repository):
    row = await repository.insert(_record())
    updated = await repository.update(row.id, _record("2025-02-02", "Pedagogical"))
    assert updated.category == "Pedagogical"
    assert updated.created_at == row.created_at
    assert updated.updated_at >= row.updated_at

    assert await repository.update(999, _record()) is None


@pytest.mark.asyncio
async def test_remove_reports_affected_rows(repository):
    row = await repository.insert(_record())
    assert await repository.remove(row.id) == 1
    assert await repository.remove(row.id) == 0


@pytest.mark.asyncio
async def test_aggregate_zero_fills_categories(repository):
    await repository.insert(_record(category="SocialAssistance"))
    counts = await repository.aggregate_by_category()
    assert counts == {
        VisitCategory.PSYCHOLOGICAL: 0,
        VisitCategory.PEDAGOGICAL: 0,
        VisitCategory.SOCIAL_ASSISTANCE: 1,
    }

"""Unit tests for the visit field predicates."""

from datetime import date, datetime, timedelta, timezone

import pytest

from visitlog.domain.categories import VisitCategory
from visitlog.domain.validators import (
    CATEGORY_ERROR,
    DATE_ERROR,
    NAME_ERROR,
    PROFESSIONAL_ERROR,
    is_valid_category,
    is_valid_date,
    is_valid_name,
    normalize_visit_date,
    sanitize_text,
    validate_visit_fields,
)


@pytest.mark.parametrize("value", ["Jo", "Maria Silva", "  Ana  "])
def test_valid_names(value):
    assert is_valid_name(value) is True


@pytest.mark.parametrize("value", ["", "A", "  A  ", None, 42, ["Maria"]])
def test_invalid_names(value):
    assert is_valid_name(value) is False


@pytest.mark.parametrize(
    "value",
    ["2025-01-15", "2025-01-15T10:30:00", "2025-01-15T10:30:00Z", date(2025, 1, 15)],
)
def test_valid_dates(value):
    assert is_valid_date(value) is True


@pytest.mark.parametrize("value", ["", "not a date", "2025-02-30", "15/01/2025", None, 20250115])
def test_invalid_dates(value):
    assert is_valid_date(value) is False


def test_category_accepts_only_the_three_values():
    assert is_valid_category("Psychological")
    assert is_valid_category("Pedagogical")
    assert is_valid_category("SocialAssistance")
    assert is_valid_category(VisitCategory.PEDAGOGICAL)
    assert not is_valid_category("psychological")
    assert not is_valid_category("Social Assistance")
    assert not is_valid_category("Psicológico")
    assert not is_valid_category(None)


def test_sanitize_text_trims_and_defaults_to_empty():
    assert sanitize_text("  hello ") == "hello"
    assert sanitize_text(None) == ""
    assert sanitize_text(12) == ""


def test_normalize_visit_date_converts_aware_datetimes_to_utc():
    late_evening = datetime(2025, 1, 15, 23, 30, tzinfo=timezone(timedelta(hours=-3)))
    assert normalize_visit_date(late_evening) == date(2025, 1, 16)
    assert normalize_visit_date("2025-01-15") == date(2025, 1, 15)
    assert normalize_visit_date("2025-01-15T08:00:00") == date(2025, 1, 15)


def test_normalize_visit_date_rejects_garbage():
    with pytest.raises(ValueError):
        normalize_visit_date("yesterday")


def test_validate_collects_every_failing_rule():
    result = validate_visit_fields("A", "", "nope", "Other")
    assert result.valid is False
    assert result.errors == [NAME_ERROR, PROFESSIONAL_ERROR, DATE_ERROR, CATEGORY_ERROR]


def test_validate_passes_for_complete_input():
    result = validate_visit_fields("Maria Silva", "Dr. João", "2025-01-15", "Psychological")
    assert result.valid is True
    assert result.errors == []

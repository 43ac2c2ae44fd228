"""Pydantic DTOs (Data Transfer Objects) for the visit feature.

Request fields accept any JSON value: the service runs the domain
validators so that every violated rule is reported together instead of
pydantic stopping at type errors.
"""

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from visitlog.domain.entities import VisitRecord, VisitStatistics


class VisitPayload(BaseModel):
    """Schema for creating or replacing a visit."""

    model_config = ConfigDict(populate_by_name=True)

    name: Any = Field(None, examples=["Maria Silva"])
    professional: Any = Field(None, examples=["Dr. João Santos"])
    visit_date: Any = Field(None, alias="visitDate", examples=["2025-01-15"])
    category: Any = Field(None, examples=["Psychological"])
    notes: Any = Field(None, examples=["Primeira consulta"])

    def to_field_map(self) -> dict[str, Any]:
        """Only the fields the client actually sent, keyed by wire name."""
        return self.model_dump(by_alias=True, exclude_unset=True)


class VisitResponse(BaseModel):
    """Schema returned to the client."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    name: str
    professional: str
    visit_date: date = Field(alias="visitDate")
    category: str
    notes: str
    created_at: datetime | None = Field(None, alias="createdAt")
    updated_at: datetime | None = Field(None, alias="updatedAt")

    @classmethod
    def from_entity(cls, record: VisitRecord) -> "VisitResponse":
        return cls.model_validate(record.serialize())


class VisitStatisticsResponse(BaseModel):
    """Visit counts per category plus the overall total."""

    model_config = ConfigDict(populate_by_name=True)

    total: int
    by_category: dict[str, int] = Field(alias="byCategory")

    @classmethod
    def from_statistics(cls, statistics: VisitStatistics) -> "VisitStatisticsResponse":
        return cls.model_validate(statistics.to_dict())


class ValidationErrorResponse(BaseModel):
    """Body returned with a 400 when visit data is rejected."""

    message: str
    errors: list[str]

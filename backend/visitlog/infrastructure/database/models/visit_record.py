"""SQLAlchemy ORM model for the visit record entity."""

from datetime import date, datetime, timezone

from sqlalchemy import CheckConstraint, Date, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from visitlog.domain.categories import VisitCategory
from visitlog.infrastructure.database.base import Base

CATEGORY_CONSTRAINT = "ck_visits_category"

# Largest value the INTEGER primary key holds on every backend (int4 on PostgreSQL)
MAX_VISIT_ID = 2**31 - 1

_CATEGORY_CHECK = "category IN ({})".format(
    ", ".join(f"'{value}'" for value in VisitCategory.values())
)


class VisitRecordModel(Base):
    """ORM model: maps to the 'visits' table."""

    __tablename__ = "visits"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    professional: Mapped[str] = mapped_column(String(255), nullable=False)
    visit_date: Mapped[date] = mapped_column(Date, nullable=False)
    category: Mapped[str] = mapped_column(String(32), nullable=False)
    notes: Mapped[str] = mapped_column(Text, nullable=False, default="")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint(_CATEGORY_CHECK, name=CATEGORY_CONSTRAINT),
        Index("ix_visits_visit_date", "visit_date"),
        Index("ix_visits_category", "category"),
    )

    def __repr__(self) -> str:
        return (
            f"<VisitRecordModel(id={self.id}, "
            f"date='{self.visit_date}', category='{self.category}')>"
        )

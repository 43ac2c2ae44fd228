"""Concrete repository implementations for visit records backed by SQLAlchemy.

SQLite and PostgreSQL share every query; the subclasses only differ in
how the engine is built and how the database is bootstrapped.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

from sqlalchemy import delete, func, select
from sqlalchemy.engine import Result
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncEngine
from sqlalchemy.pool import StaticPool

from visitlog.application.interfaces import QueryResult, VisitRecordRepository
from visitlog.domain.categories import VisitCategory
from visitlog.domain.entities import StoredVisit, VisitRecord
from visitlog.domain.exceptions import ConstraintError
from visitlog.domain.validators import normalize_visit_date
from visitlog.infrastructure.database.base import Base
from visitlog.infrastructure.database.models import (
    CATEGORY_CONSTRAINT,
    MAX_VISIT_ID,
    VisitRecordModel,
)
from visitlog.infrastructure.database.session import build_engine, build_session_factory

logger = logging.getLogger(__name__)

GENERIC_CONSTRAINT = "integrity"


def _category_value(category: VisitCategory | str | None) -> Any:
    # Unknown values go through untouched so the table check rejects them
    return category.value if isinstance(category, VisitCategory) else category


def _in_id_range(visit_id: int) -> bool:
    return 0 < visit_id <= MAX_VISIT_ID


def _constraint_error(exc: IntegrityError) -> ConstraintError:
    """Name the violated constraint from the driver error when it reports one."""
    orig = exc.orig
    detail = str(orig)
    # asyncpg exposes the name on the error the DBAPI adapter wraps
    name = getattr(orig, "constraint_name", None) or getattr(
        getattr(orig, "__cause__", None), "constraint_name", None
    )
    if not name and CATEGORY_CONSTRAINT in detail:
        name = CATEGORY_CONSTRAINT
    return ConstraintError(name or GENERIC_CONSTRAINT, detail)


def _as_utc(value: datetime) -> datetime:
    """SQLite hands back naive datetimes; they were written as UTC."""
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


class SQLAlchemyVisitRecordRepository(VisitRecordRepository):
    """Implements the VisitRecordRepository port using SQLAlchemy async sessions.

    Each operation runs in its own session; writes run inside a single
    transaction that commits on success and rolls back on error.
    """

    def __init__(self, database_url: str, *, echo: bool = False):
        self._database_url = database_url
        self._engine = self._create_engine(database_url, echo=echo)
        self._session_factory = build_session_factory(self._engine)

    @property
    def engine(self) -> AsyncEngine:
        return self._engine

    def _create_engine(self, database_url: str, *, echo: bool) -> AsyncEngine:
        return build_engine(database_url, echo=echo)

    async def _prepare_database(self) -> None:
        """Backend-specific bootstrap run before the tables are created."""

    async def initialize(self) -> None:
        await self._prepare_database()
        async with self._engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Visit table ready (%s)", self._engine.url.get_backend_name())

    async def close(self) -> None:
        await self._engine.dispose()

    def _to_row(self, model: VisitRecordModel) -> StoredVisit:
        """Map ORM model → stored row."""
        return StoredVisit(
            id=model.id,
            name=model.name,
            professional=model.professional,
            visit_date=model.visit_date,
            category=model.category,
            notes=model.notes or "",
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
        )

    def _to_result(self, result: Result) -> QueryResult:
        return QueryResult.of([self._to_row(model) for model in result.scalars().all()])

    def _ordered(self, stmt):
        return stmt.order_by(VisitRecordModel.visit_date.desc(), VisitRecordModel.id.desc())

    async def insert(self, record: VisitRecord) -> StoredVisit:
        now = datetime.now(timezone.utc)
        model = VisitRecordModel(
            name=record.client_name,
            professional=record.professional_name,
            visit_date=normalize_visit_date(record.visit_date),
            category=_category_value(record.category),
            notes=record.notes or "",
            created_at=now,
            updated_at=now,
        )
        try:
            async with self._session_factory.begin() as session:
                session.add(model)
                await session.flush()
                row = self._to_row(model)
        except IntegrityError as exc:
            raise _constraint_error(exc) from exc
        logger.debug("Inserted visit %d", row.id)
        return row

    async def find_by_id(self, visit_id: int) -> StoredVisit | None:
        if not _in_id_range(visit_id):
            return None
        async with self._session_factory() as session:
            model = await session.get(VisitRecordModel, visit_id)
            return self._to_row(model) if model else None

    async def list_all(self) -> QueryResult:
        stmt = self._ordered(select(VisitRecordModel))
        async with self._session_factory() as session:
            return self._to_result(await session.execute(stmt))

    async def list_by_category(self, category: VisitCategory) -> QueryResult:
        stmt = self._ordered(
            select(VisitRecordModel).where(VisitRecordModel.category == category.value)
        )
        async with self._session_factory() as session:
            return self._to_result(await session.execute(stmt))

    async def update(self, visit_id: int, record: VisitRecord) -> StoredVisit | None:
        if not _in_id_range(visit_id):
            return None
        try:
            async with self._session_factory.begin() as session:
                model = await session.get(VisitRecordModel, visit_id)
                if model is None:
                    return None
                model.name = record.client_name
                model.professional = record.professional_name
                model.visit_date = normalize_visit_date(record.visit_date)
                model.category = _category_value(record.category)
                model.notes = record.notes or ""
                model.updated_at = datetime.now(timezone.utc)
                await session.flush()
                row = self._to_row(model)
        except IntegrityError as exc:
            raise _constraint_error(exc) from exc
        logger.debug("Updated visit %d", visit_id)
        return row

    async def remove(self, visit_id: int) -> int:
        if not _in_id_range(visit_id):
            return 0
        stmt = delete(VisitRecordModel).where(VisitRecordModel.id == visit_id)
        async with self._session_factory.begin() as session:
            result = await session.execute(stmt)
        removed = result.rowcount or 0
        logger.debug("Removed %d row(s) for visit %d", removed, visit_id)
        return removed

    async def aggregate_by_category(self) -> dict[VisitCategory, int]:
        stmt = select(VisitRecordModel.category, func.count()).group_by(VisitRecordModel.category)
        async with self._session_factory() as session:
            result = await session.execute(stmt)
            rows = result.all()

        counts = {category: 0 for category in VisitCategory}
        for category, total in rows:
            parsed = VisitCategory.parse(category)
            if parsed is not None:
                counts[parsed] = int(total)
        return counts

    async def count(self) -> int:
        stmt = select(func.count()).select_from(VisitRecordModel)
        async with self._session_factory() as session:
            return int((await session.execute(stmt)).scalar_one())


class SQLiteVisitRecordRepository(SQLAlchemyVisitRecordRepository):
    """File-based embedded store (aiosqlite)."""

    def _create_engine(self, database_url: str, *, echo: bool) -> AsyncEngine:
        if self._is_memory_url(database_url):
            # A private in-memory database only lives as long as its connection
            return build_engine(
                database_url,
                echo=echo,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        return build_engine(database_url, echo=echo)

    @staticmethod
    def _is_memory_url(database_url: str) -> bool:
        return database_url.rstrip("/").endswith(":memory:") or database_url in (
            "sqlite://",
            "sqlite+aiosqlite://",
        )

    async def _prepare_database(self) -> None:
        """Create the directory holding the database file."""
        if self._is_memory_url(self._database_url):
            return
        database = self._engine.url.database
        if database:
            Path(database).parent.mkdir(parents=True, exist_ok=True)


class PostgresVisitRecordRepository(SQLAlchemyVisitRecordRepository):
    """Networked RDBMS store (asyncpg)."""

    def _create_engine(self, database_url: str, *, echo: bool) -> AsyncEngine:
        return build_engine(database_url, echo=echo, pool_pre_ping=True)

    async def _prepare_database(self) -> None:
        """Create the PostgreSQL database if it does not yet exist.

        Connects to the default ``postgres`` maintenance database, checks for the
        target database name, and issues ``CREATE DATABASE`` when missing.
        """
        import asyncpg

        parsed = urlparse(self._database_url)
        db_name = parsed.path.lstrip("/")
        if not db_name:
            return

        maintenance_url = self._database_url.rsplit("/", 1)[0] + "/postgres"
        maintenance_url = maintenance_url.replace("postgresql+asyncpg://", "postgresql://", 1)

        try:
            conn = await asyncpg.connect(maintenance_url)
            try:
                exists = await conn.fetchval(
                    "SELECT 1 FROM pg_database WHERE datname = $1", db_name
                )
                if not exists:
                    # CREATE DATABASE cannot run inside a transaction block
                    # nor take a bound parameter for the name
                    quoted = db_name.replace('"', '""')
                    await conn.execute(f'CREATE DATABASE "{quoted}"')
                    logger.info("Created database '%s'", db_name)
                else:
                    logger.debug("Database '%s' already exists", db_name)
            finally:
                await conn.close()
        except Exception as exc:
            logger.warning("Could not auto-create database '%s': %s", db_name, exc)

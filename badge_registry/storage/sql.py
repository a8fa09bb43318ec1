"""SQLAlchemy-backed repository mapping dataclass records onto ORM rows."""

from __future__ import annotations

import contextlib
import logging
from dataclasses import asdict, fields
from typing import Any, AsyncIterator

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from badge_registry.db.models import Base
from badge_registry.storage.base import EntityRepository, RecordT, StoreError

logger = logging.getLogger(__name__)


class SqlAlchemyRepository(EntityRepository[RecordT]):
    """Stores one record type in one table, opening a session per call."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        *,
        row_type: type[Base],
        record_type: type[RecordT],
    ) -> None:
        self._session_factory = session_factory
        self._row_type = row_type
        self._record_type = record_type
        self._field_names = [field.name for field in fields(record_type)]  # type: ignore[arg-type]

    @contextlib.asynccontextmanager
    async def _session(self, action: str) -> AsyncIterator[AsyncSession]:
        async with self._session_factory() as session:
            try:
                yield session
            except SQLAlchemyError as exc:
                await session.rollback()
                logger.error("Failed to %s %s: %s", action, self._row_type.__tablename__, exc)
                raise StoreError(f"Failed to {action} {self._row_type.__tablename__}.") from exc

    def _to_record(self, row: Base) -> RecordT:
        return self._record_type(**{name: getattr(row, name) for name in self._field_names})

    async def find_one(self, record_id: str) -> RecordT | None:
        async with self._session("read") as session:
            row = await session.get(self._row_type, record_id)
            return self._to_record(row) if row is not None else None

    async def find_one_by(self, **criteria: Any) -> RecordT | None:
        stmt = select(self._row_type).filter_by(**criteria).limit(1)
        async with self._session("query") as session:
            result = await session.execute(stmt)
            row = result.scalar_one_or_none()
            return self._to_record(row) if row is not None else None

    async def find_all(self) -> list[RecordT]:
        async with self._session("list") as session:
            result = await session.execute(select(self._row_type))
            return [self._to_record(row) for row in result.scalars().all()]

    async def insert_one(self, record: RecordT) -> None:
        async with self._session("insert into") as session:
            session.add(self._row_type(**asdict(record)))  # type: ignore[call-overload]
            await session.commit()

    async def replace_one(self, record: RecordT) -> None:
        values = asdict(record)  # type: ignore[call-overload]
        async with self._session("replace in") as session:
            row = await session.get(self._row_type, values["id"])
            if row is None:
                raise StoreError(f"Record {values['id']} does not exist.")
            for name, value in values.items():
                setattr(row, name, value)
            await session.commit()

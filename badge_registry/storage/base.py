"""Keyed record store abstraction used by the badge services."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

RecordT = TypeVar("RecordT")


class StoreError(RuntimeError):
    """Raised when the underlying store fails to read or write a record."""


class NotFoundError(LookupError):
    """Raised when a record requested by id does not exist."""


class EntityRepository(ABC, Generic[RecordT]):
    """
    Minimal repository contract: find, insert and replace single records.

    Every call is atomic for the record it touches. Returned records are
    detached copies; changes only reach the store through ``insert_one`` or
    ``replace_one``.
    """

    @abstractmethod
    async def find_one(self, record_id: str) -> RecordT | None:
        """Return the record with the given id or ``None``."""

    @abstractmethod
    async def find_one_by(self, **criteria: Any) -> RecordT | None:
        """Return the first record whose attributes equal ``criteria``."""

    @abstractmethod
    async def find_all(self) -> list[RecordT]:
        """Return every stored record."""

    @abstractmethod
    async def insert_one(self, record: RecordT) -> None:
        """Store a new record; fails with ``StoreError`` if the id is taken."""

    @abstractmethod
    async def replace_one(self, record: RecordT) -> None:
        """Overwrite the stored record with the same id."""

"""Process-local repository used for tests and tooling without a database."""

from __future__ import annotations

import copy
from typing import Any

from badge_registry.storage.base import EntityRepository, RecordT, StoreError


class InMemoryRepository(EntityRepository[RecordT]):
    """Dictionary-backed store holding private copies of each record."""

    def __init__(self) -> None:
        self._records: dict[str, RecordT] = {}

    async def find_one(self, record_id: str) -> RecordT | None:
        record = self._records.get(record_id)
        return copy.deepcopy(record) if record is not None else None

    async def find_one_by(self, **criteria: Any) -> RecordT | None:
        for record in self._records.values():
            if all(getattr(record, key) == value for key, value in criteria.items()):
                return copy.deepcopy(record)
        return None

    async def find_all(self) -> list[RecordT]:
        return [copy.deepcopy(record) for record in self._records.values()]

    async def insert_one(self, record: RecordT) -> None:
        record_id = record.id  # type: ignore[attr-defined]
        if record_id in self._records:
            raise StoreError(f"Record {record_id} already exists.")
        self._records[record_id] = copy.deepcopy(record)

    async def replace_one(self, record: RecordT) -> None:
        record_id = record.id  # type: ignore[attr-defined]
        if record_id not in self._records:
            raise StoreError(f"Record {record_id} does not exist.")
        self._records[record_id] = copy.deepcopy(record)

"""Record stores for badges and badge images."""

from .base import EntityRepository, NotFoundError, StoreError
from .memory import InMemoryRepository
from .sql import SqlAlchemyRepository

__all__ = [
    "EntityRepository",
    "InMemoryRepository",
    "NotFoundError",
    "SqlAlchemyRepository",
    "StoreError",
]

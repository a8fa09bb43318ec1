"""Assembly of the registration pipeline over the SQL stores."""

from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncEngine

from badge_registry.db.models import BadgeImageRow, BadgeRow
from badge_registry.db.session import build_session_factory, get_engine
from badge_registry.domain.records import BadgeImageRecord, BadgeRecord
from badge_registry.services.badges import RegistrationCoordinator
from badge_registry.storage.sql import SqlAlchemyRepository


def build_coordinator(engine: AsyncEngine | None = None) -> RegistrationCoordinator:
    """Return a coordinator persisting into the configured database."""

    session_factory = build_session_factory(engine or get_engine())
    return RegistrationCoordinator(
        SqlAlchemyRepository(session_factory, row_type=BadgeRow, record_type=BadgeRecord),
        SqlAlchemyRepository(session_factory, row_type=BadgeImageRow, record_type=BadgeImageRecord),
    )

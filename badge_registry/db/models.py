"""SQLAlchemy models describing the badge tables."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Integer, LargeBinary, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    """Base class for ORM models."""

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=_utcnow)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=_utcnow,
        onupdate=_utcnow,
    )


class BadgeRow(Base):
    """Fursuit badge metadata received from the registration system."""

    __tablename__ = "fursuit_badges"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    external_reference: Mapped[str] = mapped_column(String(32), unique=True, index=True)
    owner_uid: Mapped[str] = mapped_column(String(64), default="")
    name: Mapped[str] = mapped_column(String(128), default="")
    species: Mapped[str] = mapped_column(String(128), default="")
    gender: Mapped[str] = mapped_column(String(32), default="")
    worn_by: Mapped[str] = mapped_column(String(128), default="")
    is_public: Mapped[bool] = mapped_column(Boolean, default=True)
    last_change_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))


class BadgeImageRow(Base):
    """Rendered badge photo, keyed by the id of its badge."""

    __tablename__ = "fursuit_badge_images"

    id: Mapped[str] = mapped_column(String(36), primary_key=True)
    width: Mapped[int] = mapped_column(Integer, nullable=False)
    height: Mapped[int] = mapped_column(Integer, nullable=False)
    mime_type: Mapped[str] = mapped_column(String(32), nullable=False)
    source_content_hash_sha1: Mapped[str | None] = mapped_column(String(40))
    size_in_bytes: Mapped[int] = mapped_column(Integer, default=0)
    image_bytes: Mapped[bytes | None] = mapped_column(LargeBinary)
    last_change_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))

"""Badge records shared by the registration pipeline and its stores."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

BADGE_IMAGE_MIME_TYPE = "image/jpeg"


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True)
class BadgeRecord:
    """Metadata of a single fursuit badge, keyed by the registration badge number."""

    id: str
    external_reference: str
    owner_uid: str = ""
    name: str = ""
    species: str = ""
    gender: str = ""
    worn_by: str = ""
    is_public: bool = True
    last_change_at: Optional[datetime] = None

    def touch(self) -> None:
        """Update the modification timestamp."""

        self.last_change_at = _utcnow()


@dataclass(slots=True)
class BadgeImageRecord:
    """Rendered badge photo; shares its id with the owning ``BadgeRecord``."""

    id: str
    width: int
    height: int
    mime_type: str = BADGE_IMAGE_MIME_TYPE
    source_content_hash_sha1: Optional[str] = None
    size_in_bytes: int = 0
    image_bytes: Optional[bytes] = None
    last_change_at: Optional[datetime] = None

    def touch(self) -> None:
        """Update the modification timestamp."""

        self.last_change_at = _utcnow()

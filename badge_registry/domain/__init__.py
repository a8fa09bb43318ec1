"""Domain records for fursuit badges."""

from .records import BADGE_IMAGE_MIME_TYPE, BadgeImageRecord, BadgeRecord

__all__ = ["BADGE_IMAGE_MIME_TYPE", "BadgeImageRecord", "BadgeRecord"]

"""Fursuit badge registration pipeline."""

from __future__ import annotations

import asyncio
import logging
import uuid

from badge_registry.config.settings import get_settings
from badge_registry.domain.records import BADGE_IMAGE_MIME_TYPE, BadgeImageRecord, BadgeRecord
from badge_registry.imgproc.fingerprint import ContentFingerprinter
from badge_registry.imgproc.normalize import ImageNormalizer
from badge_registry.metrics.prometheus_exporter import badge_image_renders_total, badge_upserts_total
from badge_registry.services.registration import BadgeRegistration
from badge_registry.storage.base import EntityRepository, NotFoundError

logger = logging.getLogger(__name__)

BADGE_ID_NAMESPACE = uuid.UUID("6f1c0d52-3b7e-4d1a-9a55-0b8f2e4c7d31")


class BadgeNotFoundError(NotFoundError):
    """Raised when a badge is requested by an unknown id."""


class RegistrationCoordinator:
    """
    Upserts badge metadata and the rendered badge photo.

    All upserts run one at a time behind a single lock, so two registrations
    for an unseen badge number can never both decide to create it. Reads do
    not take the lock.
    """

    def __init__(
        self,
        badges: EntityRepository[BadgeRecord],
        images: EntityRepository[BadgeImageRecord],
        *,
        normalizer: ImageNormalizer | None = None,
        fingerprinter: ContentFingerprinter | None = None,
        convention_number: int | None = None,
    ) -> None:
        settings = get_settings()
        self._badges = badges
        self._images = images
        self._normalizer = normalizer or ImageNormalizer(
            max_width=settings.badge_image_width,
            max_height=settings.badge_image_height,
            quality=settings.badge_image_quality,
        )
        self._fingerprinter = fingerprinter or ContentFingerprinter()
        self._convention_number = (
            convention_number if convention_number is not None else settings.convention_number
        )
        self._gate = asyncio.Lock()

    def badge_id_for(self, external_reference: str) -> str:
        """Return the id a new badge with this external reference receives."""

        return str(uuid.uuid5(BADGE_ID_NAMESPACE, f"{self._convention_number}:{external_reference}"))

    async def upsert(self, registration: BadgeRegistration) -> str:
        """Create or update the badge described by ``registration`` and return its id."""

        try:
            photo = registration.photo_bytes()
            async with self._gate:
                badge_id, created = await self._upsert_locked(registration, photo)
        except Exception:
            badge_upserts_total.labels(result="failed").inc()
            raise

        badge_upserts_total.labels(result="created" if created else "updated").inc()
        return badge_id

    async def _upsert_locked(self, registration: BadgeRegistration, photo: bytes) -> tuple[str, bool]:
        fingerprint = self._fingerprinter.fingerprint(photo)
        external_reference = str(registration.badge_no)

        record = await self._badges.find_one_by(external_reference=external_reference)
        is_new_badge = record is None
        if record is None:
            record = BadgeRecord(
                id=self.badge_id_for(external_reference),
                external_reference=external_reference,
            )
        self._apply_registration(record, registration)

        image = await self._images.find_one(record.id)
        is_new_image = image is None
        if image is None:
            image = BadgeImageRecord(
                id=record.id,
                width=self._normalizer.max_width,
                height=self._normalizer.max_height,
                mime_type=BADGE_IMAGE_MIME_TYPE,
            )
            image.touch()

        image_changed = image.source_content_hash_sha1 != fingerprint
        if image_changed:
            content = await asyncio.to_thread(self._normalizer.normalize, photo)
            image.source_content_hash_sha1 = fingerprint
            image.image_bytes = content
            image.size_in_bytes = len(content)
            image.touch()
            badge_image_renders_total.labels(outcome="rendered").inc()
            logger.info("Rendered photo for badge %s (%s bytes).", external_reference, len(content))
        else:
            badge_image_renders_total.labels(outcome="skipped").inc()
            logger.debug("Photo for badge %s unchanged; skipping render.", external_reference)

        if is_new_image:
            await self._images.insert_one(image)
        elif image_changed:
            await self._images.replace_one(image)

        if is_new_badge:
            await self._badges.insert_one(record)
            logger.info("Created badge %s for reference %s.", record.id, external_reference)
        else:
            await self._badges.replace_one(record)

        return record.id, is_new_badge

    def _apply_registration(self, record: BadgeRecord, registration: BadgeRegistration) -> None:
        record.owner_uid = f"RegSys:{self._convention_number}:{registration.reg_no}"
        record.gender = registration.gender
        record.name = registration.name
        record.species = registration.species
        record.is_public = registration.dont_publish == 0
        record.worn_by = registration.worn_by
        record.touch()

    async def get_image_bytes(self, badge_id: str) -> bytes | None:
        """Return the rendered JPEG for the badge, or ``None`` if there is none."""

        image = await self._images.find_one(badge_id)
        return image.image_bytes if image is not None else None

    async def get_image_record(self, badge_id: str) -> BadgeImageRecord | None:
        """Return the stored image record, including its source fingerprint."""

        return await self._images.find_one(badge_id)

    async def get_badge(self, badge_id: str) -> BadgeRecord:
        """Return the badge with the given id or raise ``BadgeNotFoundError``."""

        record = await self._badges.find_one(badge_id)
        if record is None:
            raise BadgeNotFoundError(f"Badge {badge_id} does not exist.")
        return record

    async def list_all(self) -> list[BadgeRecord]:
        """Return all badges."""

        return await self._badges.find_all()

"""Shared fixtures for badge registry tests."""

from __future__ import annotations

import base64
from io import BytesIO

import pytest
from PIL import Image

from badge_registry.config.settings import get_settings
from badge_registry.domain.records import BadgeImageRecord, BadgeRecord
from badge_registry.services.badges import RegistrationCoordinator
from badge_registry.services.registration import BadgeRegistration
from badge_registry.storage.memory import InMemoryRepository


def make_photo(size: tuple[int, int] = (400, 600), color: tuple[int, int, int] = (200, 40, 40), fmt: str = "PNG") -> bytes:
    buffer = BytesIO()
    Image.new("RGB", size, color).save(buffer, format=fmt)
    return buffer.getvalue()


def make_registration(photo: bytes, *, badge_no: int = 100, dont_publish: int = 0, **overrides: object) -> BadgeRegistration:
    payload = {
        "badgeNo": badge_no,
        "regNo": 4242,
        "gender": "male",
        "name": "Tiberius",
        "species": "Red Panda",
        "dontPublish": dont_publish,
        "wornBy": "Alex",
        "imageContent": base64.b64encode(photo).decode("ascii"),
    }
    payload.update(overrides)
    return BadgeRegistration.model_validate(payload)


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def photo_a() -> bytes:
    return make_photo(color=(200, 40, 40))


@pytest.fixture
def photo_b() -> bytes:
    return make_photo(color=(20, 90, 220))


@pytest.fixture
def badges() -> InMemoryRepository[BadgeRecord]:
    return InMemoryRepository()


@pytest.fixture
def images() -> InMemoryRepository[BadgeImageRecord]:
    return InMemoryRepository()


@pytest.fixture
def coordinator(badges, images) -> RegistrationCoordinator:
    return RegistrationCoordinator(badges, images, convention_number=23)

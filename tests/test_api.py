"""Tests for the fursuit badge HTTP routes."""

from __future__ import annotations

import base64

import pytest
from fastapi.testclient import TestClient

from badge_registry.api.main import create_app
from badge_registry.config.settings import get_settings
from badge_registry.services.badges import RegistrationCoordinator
from conftest import make_photo

TOKEN = "test-internal-token"


@pytest.fixture
def client(monkeypatch: pytest.MonkeyPatch, coordinator: RegistrationCoordinator) -> TestClient:
    monkeypatch.setenv("INTERNAL_API_TOKEN", TOKEN)
    get_settings.cache_clear()
    return TestClient(create_app(coordinator))


def _payload(photo: bytes, **overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "badgeNo": 100,
        "regNo": 7,
        "gender": "female",
        "name": "Nyx",
        "species": "Arctic Fox",
        "dontPublish": 0,
        "wornBy": "Sam",
        "imageContent": base64.b64encode(photo).decode("ascii"),
    }
    payload.update(overrides)
    return payload


def test_register_list_and_fetch_image(client: TestClient) -> None:
    response = client.post(
        "/fursuits/badges",
        json=_payload(make_photo((4000, 2000))),
        headers={"X-Internal-Token": TOKEN},
    )

    assert response.status_code == 200
    badge_id = response.json()["id"]

    listing = client.get("/fursuits/badges").json()
    assert [badge["id"] for badge in listing] == [badge_id]
    assert listing[0]["external_reference"] == "100"
    assert listing[0]["owner_uid"] == "RegSys:23:7"
    assert listing[0]["is_public"] is True

    image = client.get(f"/fursuits/badges/{badge_id}/image")
    assert image.status_code == 200
    assert image.headers["content-type"] == "image/jpeg"
    assert image.content[:2] == b"\xff\xd8"


def test_missing_image_is_404(client: TestClient) -> None:
    assert client.get("/fursuits/badges/unknown/image").status_code == 404


def test_registration_requires_token(client: TestClient) -> None:
    response = client.post("/fursuits/badges", json=_payload(make_photo()))

    assert response.status_code == 401


def test_registration_unavailable_without_configured_token(
    monkeypatch: pytest.MonkeyPatch,
    coordinator: RegistrationCoordinator,
) -> None:
    monkeypatch.setenv("INTERNAL_API_TOKEN", "")
    get_settings.cache_clear()
    client = TestClient(create_app(coordinator))

    response = client.post("/fursuits/badges", json=_payload(make_photo()), headers={"X-Internal-Token": "x"})

    assert response.status_code == 503


def test_undecodable_photo_is_422(client: TestClient) -> None:
    response = client.post(
        "/fursuits/badges",
        json=_payload(b"plain text"),
        headers={"X-Internal-Token": TOKEN},
    )

    assert response.status_code == 422
    assert client.get("/fursuits/badges").json() == []

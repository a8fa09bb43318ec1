"""Tests for the badge administration commands."""

from __future__ import annotations

from pathlib import Path

import pytest
import pytest_mock

from badge_registry.services.badges import RegistrationCoordinator
from badge_registry.storage.base import StoreError
from conftest import make_photo, make_registration
from scripts.badges import run


@pytest.mark.asyncio
async def test_register_list_and_export(
    tmp_path: Path,
    coordinator: RegistrationCoordinator,
    capsys: pytest.CaptureFixture[str],
) -> None:
    photo_path = tmp_path / "suit.png"
    photo_path.write_bytes(make_photo((1200, 1600)))
    output_path = tmp_path / "badge.jpg"

    exit_code = await run(
        [
            "register",
            "--badge-no", "31",
            "--reg-no", "5",
            "--name", "Ember",
            "--species", "Dragon",
            "--hidden",
            "--photo", str(photo_path),
        ],
        coordinator,
    )
    assert exit_code == 0
    badge_id = coordinator.badge_id_for("31")
    assert "hash=" in capsys.readouterr().out

    assert await run(["list"], coordinator) == 0
    listing = capsys.readouterr().out
    assert badge_id in listing
    assert "Ember (Dragon)  hidden" in listing

    assert await run(["export-image", badge_id, str(output_path)], coordinator) == 0
    assert output_path.read_bytes() == await coordinator.get_image_bytes(badge_id)


@pytest.mark.asyncio
async def test_export_unknown_badge_fails(tmp_path: Path, coordinator: RegistrationCoordinator) -> None:
    exit_code = await run(["export-image", "missing", str(tmp_path / "out.jpg")], coordinator)

    assert exit_code == 1
    assert not (tmp_path / "out.jpg").exists()


@pytest.mark.asyncio
async def test_show_prints_badge_details(
    coordinator: RegistrationCoordinator,
    capsys: pytest.CaptureFixture[str],
) -> None:
    badge_id = await coordinator.upsert(make_registration(make_photo(), badge_no=8, name="Pip"))

    assert await run(["show", badge_id], coordinator) == 0

    output = capsys.readouterr().out
    assert f"{badge_id}  #8  Pip (Red Panda)  public" in output
    assert "owner=RegSys:23:4242" in output


@pytest.mark.asyncio
async def test_show_unknown_badge_fails(
    coordinator: RegistrationCoordinator,
    capsys: pytest.CaptureFixture[str],
) -> None:
    assert await run(["show", "missing"], coordinator) == 1
    assert "missing" in capsys.readouterr().err


@pytest.mark.asyncio
async def test_register_reports_undecodable_photo(
    tmp_path: Path,
    coordinator: RegistrationCoordinator,
    capsys: pytest.CaptureFixture[str],
) -> None:
    photo_path = tmp_path / "notes.txt"
    photo_path.write_text("not a photo", encoding="utf-8")

    exit_code = await run(
        ["register", "--badge-no", "9", "--reg-no", "1", "--name", "X", "--species", "Y", "--photo", str(photo_path)],
        coordinator,
    )

    assert exit_code == 1
    assert "Registration failed" in capsys.readouterr().err
    assert await coordinator.list_all() == []


@pytest.mark.asyncio
async def test_register_reports_store_failure(
    tmp_path: Path,
    coordinator: RegistrationCoordinator,
    capsys: pytest.CaptureFixture[str],
    mocker: pytest_mock.MockerFixture,
) -> None:
    photo_path = tmp_path / "suit.png"
    photo_path.write_bytes(make_photo())
    mocker.patch.object(coordinator, "upsert", side_effect=StoreError("database unavailable"))

    exit_code = await run(
        ["register", "--badge-no", "9", "--reg-no", "1", "--name", "X", "--species", "Y", "--photo", str(photo_path)],
        coordinator,
    )

    assert exit_code == 1
    assert "database unavailable" in capsys.readouterr().err

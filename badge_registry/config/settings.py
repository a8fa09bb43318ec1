"""Application configuration loaded from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


def _load_env_file(path: str = ".env") -> None:
    """Populate os.environ from the provided .env file if it exists."""

    env_path = Path(path)
    if not env_path.exists():
        return

    for line in env_path.read_text(encoding="utf-8").splitlines():
        stripped = line.strip()
        if not stripped or stripped.startswith("#") or "=" not in stripped:
            continue
        key, value = stripped.split("=", 1)
        os.environ.setdefault(key.strip(), value.strip())


@dataclass(frozen=True, slots=True)
class Settings:
    """Centralised project settings based on OS environment variables."""

    environment: str = "dev"
    log_level: str = "INFO"

    database_url: str = "sqlite+aiosqlite:///./data/badges.db"
    internal_api_token: str = ""

    convention_number: int = 23

    badge_image_width: int = 240
    badge_image_height: int = 320
    badge_image_quality: int = 85


def _build_settings() -> Settings:
    _load_env_file()

    return Settings(
        environment=os.getenv("ENVIRONMENT", "dev"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
        database_url=os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./data/badges.db"),
        internal_api_token=os.getenv("INTERNAL_API_TOKEN", ""),
        convention_number=int(os.getenv("CONVENTION_NUMBER", "23")),
        badge_image_width=int(os.getenv("BADGE_IMAGE_WIDTH", "240")),
        badge_image_height=int(os.getenv("BADGE_IMAGE_HEIGHT", "320")),
        badge_image_quality=int(os.getenv("BADGE_IMAGE_QUALITY", "85")),
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance to avoid re-reading configuration."""

    return _build_settings()

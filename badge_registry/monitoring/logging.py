"""Logging configuration module."""

from __future__ import annotations

import logging

from badge_registry.config.settings import get_settings

# Pillow logs each plugin it tries at DEBUG; aiosqlite logs every cursor call.
_NOISY_LOGGERS = ("PIL", "aiosqlite", "sqlalchemy.engine")


def configure_logging() -> None:
    """Configure root logger and keep library chatter out of badge pipeline logs."""

    settings = get_settings()
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    logging.getLogger("badge_registry").setLevel(level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

"""User settings (planner/settings.yaml) and logging setup."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from core.fileio import read_yaml
from core.workspace import settings_path

logger = logging.getLogger(__name__)

DEFAULT_REMINDER_MESSAGE = "Time to complete your learning tasks for today!"
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


@dataclass
class Settings:
    log_level: str = "INFO"
    reminder_message: str = DEFAULT_REMINDER_MESSAGE
    reminder_poll_seconds: float = 1.0

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> Settings:
        if not d or not isinstance(d, dict):
            return cls()
        try:
            poll = float(d.get("reminder_poll_seconds", 1.0))
        except (TypeError, ValueError):
            poll = 1.0
        return cls(
            log_level=str(d.get("log_level", "INFO")).upper(),
            reminder_message=str(d.get("reminder_message") or DEFAULT_REMINDER_MESSAGE),
            reminder_poll_seconds=poll if poll > 0 else 1.0,
        )


def load_settings(root: Path | None = None) -> Settings:
    """Load settings.yaml; missing or broken files fall back to defaults."""
    try:
        settings = Settings.from_dict(read_yaml(settings_path(root)))
    except (OSError, ValueError, yaml.YAMLError) as e:
        logger.warning("Ignoring unreadable settings.yaml: %s", e)
        settings = Settings()
    env_level = os.environ.get("PATHFORGE_LOG_LEVEL")
    if env_level:
        settings.log_level = env_level.upper()
    return settings


def configure_logging(settings: Settings | None = None, handler: logging.Handler | None = None) -> None:
    """Install one handler (stderr by default) on the root logger."""
    if settings is None:
        settings = load_settings()
    level = getattr(logging, settings.log_level, logging.INFO)
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    if not any(getattr(h, "_pathforge", False) for h in root_logger.handlers):
        if handler is None:
            handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._pathforge = True  # type: ignore[attr-defined]
        root_logger.addHandler(handler)

"""
Application settings loader

Reads the `storage`, `export` and `logging` sections of config.yaml, fills in
defaults and validates them. Every section and key is optional.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

import yaml

from pcconfigmanager.infrastructure.config.config_manager import get_config_manager
from pcconfigmanager.shared import constants

logger = logging.getLogger(__name__)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class SettingsError(Exception):
    """Settings error with user-facing message in args[0]."""


@dataclass(frozen=True)
class AppSettings:
    storage_file: Path
    storage_key: str
    export_dir: Path
    log_level: str


def _validate_section(value: object, *, label: str) -> Mapping[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, Mapping):
        raise SettingsError(f"{label} must be a mapping")
    return value


def _validate_str(value: object, *, label: str, default: str) -> str:
    if value is None:
        return default
    if not isinstance(value, str) or not value.strip():
        raise SettingsError(f"{label} must be a non-empty string: {value!r}")
    return value.strip()


def _validate_path(value: object, *, label: str, default: Path, base_dir: Path) -> Path:
    if value is None:
        return default
    raw = _validate_str(value, label=label, default="")
    path = Path(raw).expanduser()
    # relative paths are anchored at the config file's directory
    if not path.is_absolute():
        path = base_dir / path
    return path


def _validate_log_level(value: object, *, label: str) -> str:
    level = _validate_str(value, label=label, default=constants.DEFAULT_LOG_LEVEL).upper()
    if level not in VALID_LOG_LEVELS:
        raise SettingsError(
            f"{label} must be one of {', '.join(VALID_LOG_LEVELS)}: {value!r}"
        )
    return level


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    """
    Load and validate the application settings.

    Note:
        - Call `get_app_settings.cache_clear()` to reload at runtime.
    """
    manager = get_config_manager()
    try:
        data = manager.load()
    except yaml.YAMLError as e:
        raise SettingsError(f"Config YAML is malformed: {e}") from e

    base_dir = manager.config_path.parent
    storage = _validate_section(data.get("storage"), label="storage")
    export = _validate_section(data.get("export"), label="export")
    logging_section = _validate_section(data.get("logging"), label="logging")

    settings = AppSettings(
        storage_file=_validate_path(
            storage.get("file"),
            label="storage.file",
            default=constants.STORAGE_FILE,
            base_dir=base_dir,
        ),
        storage_key=_validate_str(
            storage.get("key"), label="storage.key", default=constants.STORAGE_KEY
        ),
        export_dir=_validate_path(
            export.get("dir"),
            label="export.dir",
            default=constants.EXPORT_DIR,
            base_dir=base_dir,
        ),
        log_level=_validate_log_level(logging_section.get("level"), label="logging.level"),
    )
    logger.debug("Settings loaded: %s", settings)
    return settings

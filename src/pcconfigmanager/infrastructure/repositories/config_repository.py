"""
Configuration list persistence.

The full list is stored as one JSON array string under a single storage key.
"""

from __future__ import annotations

import json
import logging
from typing import Callable, Optional, Sequence

from pcconfigmanager.domain.models.pc_config import PCConfig
from pcconfigmanager.infrastructure.storage.kv_storage import KeyValueStorage
from pcconfigmanager.shared.constants import STORAGE_KEY

logger = logging.getLogger(__name__)


class ConfigDataError(Exception):
    """Malformed persisted configuration data, user-facing message in args[0]."""


def _skip(msg: str, on_warning: Optional[Callable[[str], None]]) -> None:
    if on_warning:
        on_warning(msg)
    else:
        logger.warning(msg)


def serialize_configs(configs: Sequence[PCConfig]) -> str:
    return json.dumps([config.to_dict() for config in configs], ensure_ascii=False)


def deserialize_configs(
    raw_text: str, *, on_warning: Optional[Callable[[str], None]] = None
) -> list[PCConfig]:
    """
    Parse the stored JSON array.

    An item that is not a valid configuration, or that repeats an earlier id,
    is skipped with a warning so the rest of the list survives. Only an
    unreadable payload as a whole raises ConfigDataError.
    """
    try:
        data = json.loads(raw_text)
    except json.JSONDecodeError as e:
        raise ConfigDataError(f"Stored configurations are not valid JSON ({e})") from e

    if data is None:
        return []
    if not isinstance(data, list):
        raise ConfigDataError("Stored configurations must be a JSON array")

    configs: list[PCConfig] = []
    seen_ids: set[str] = set()
    for idx, item in enumerate(data):
        try:
            config = PCConfig.from_dict(item)
        except ValueError as e:
            _skip(f"Skipped stored configuration [{idx}], it is invalid: {e}", on_warning)
            continue
        if config.id in seen_ids:
            _skip(f"Skipped stored configuration [{idx}], it repeats id {config.id!r}", on_warning)
            continue
        seen_ids.add(config.id)
        configs.append(config)
    return configs


class ConfigRepository:
    def __init__(self, storage: KeyValueStorage, key: str = STORAGE_KEY):
        self.storage = storage
        self.key = key

    def load(
        self, *, on_warning: Optional[Callable[[str], None]] = None
    ) -> list[PCConfig]:
        """
        Read the persisted configuration list.

        Invalid items are skipped and reported through `on_warning`.

        Returns:
            the stored list, or an empty list when nothing is stored yet

        Raises:
            StorageError: the storage could not be read
            ConfigDataError: the stored data is malformed
        """
        raw_text = self.storage.get_item(self.key)
        if raw_text is None:
            logger.debug("No stored configurations under key %r", self.key)
            return []
        configs = deserialize_configs(raw_text, on_warning=on_warning)
        logger.debug("Loaded %d configurations", len(configs))
        return configs

    def save(self, configs: Sequence[PCConfig]) -> None:
        """
        Overwrite the stored list with `configs`.

        Raises:
            StorageError: the storage write failed
        """
        self.storage.set_item(self.key, serialize_configs(configs))
        logger.debug("Saved %d configurations", len(configs))

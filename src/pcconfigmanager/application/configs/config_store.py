"""
In-memory configuration list with write-through persistence.

The store is the single owner of the configuration list for a session. Every
mutator changes the list first and then persists the whole list; a failed
write is reported in the returned result but the in-memory change stays.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from pcconfigmanager.domain.models.pc_config import PCConfig, new_config_id
from pcconfigmanager.domain.services.config_search import search_configs
from pcconfigmanager.domain.services.config_stats import ConfigStats, compute_config_stats
from pcconfigmanager.infrastructure.exports.json_export import (
    ExportArtifact,
    build_export_artifact,
)
from pcconfigmanager.infrastructure.repositories.config_repository import (
    ConfigDataError,
    ConfigRepository,
)
from pcconfigmanager.infrastructure.storage.kv_storage import StorageError
from pcconfigmanager.shared.constants import COPY_SUFFIX

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoreResult:
    ok: bool
    message: str = ""
    config: Optional[PCConfig] = None


class ConfigStore:
    def __init__(
        self,
        repository: ConfigRepository,
        *,
        on_warning: Optional[Callable[[str], None]] = None,
    ):
        self.repository = repository
        self.on_warning = on_warning
        self._configs: list[PCConfig] = []

    @classmethod
    def open(
        cls,
        repository: ConfigRepository,
        *,
        on_warning: Optional[Callable[[str], None]] = None,
    ) -> "ConfigStore":
        """Create a store and load the persisted list into it."""
        store = cls(repository, on_warning=on_warning)
        store.reload()
        return store

    @property
    def configs(self) -> list[PCConfig]:
        """A copy of the current list, in insertion order."""
        return list(self._configs)

    def _warn(self, msg: str) -> None:
        if self.on_warning:
            self.on_warning(msg)
        else:
            logger.warning(msg)

    # ==================== persistence ====================

    def load(self) -> list[PCConfig]:
        """
        Read the persisted list without touching the in-memory one.

        Unreadable or malformed data yields an empty list and a warning.
        """
        try:
            return self.repository.load(on_warning=self._warn)
        except (StorageError, ConfigDataError) as e:
            logger.debug("Failed to load configurations", exc_info=True)
            self._warn(f"Stored configurations could not be loaded, starting empty: {e}")
            return []

    def reload(self) -> None:
        self._configs = self.load()

    def save(self) -> StoreResult:
        try:
            self.repository.save(self._configs)
        except StorageError as e:
            logger.debug("Failed to save configurations", exc_info=True)
            msg = f"Changes are kept for this session but could not be saved: {e}"
            self._warn(msg)
            return StoreResult(ok=False, message=msg)
        return StoreResult(ok=True)

    def _persist(self, message: str, config: Optional[PCConfig] = None) -> StoreResult:
        saved = self.save()
        if not saved.ok:
            return StoreResult(ok=False, message=saved.message, config=config)
        return StoreResult(ok=True, message=message, config=config)

    # ==================== queries ====================

    def ids(self) -> set[str]:
        return {config.id for config in self._configs}

    def get(self, config_id: str) -> Optional[PCConfig]:
        for config in self._configs:
            if config.id == config_id:
                return config
        return None

    def mint_id(self) -> str:
        """A fresh id not used by any configuration in the store."""
        return new_config_id(self.ids())

    def search(self, term: str) -> list[PCConfig]:
        return search_configs(self._configs, term)

    def stats(self) -> ConfigStats:
        """Statistics over the full, unfiltered list."""
        return compute_config_stats(self._configs)

    def export(self, config: PCConfig) -> ExportArtifact:
        return build_export_artifact(config)

    # ==================== mutations ====================

    def create(self, config: PCConfig) -> StoreResult:
        if config.id in self.ids():
            logger.warning("Refusing to create configuration with existing id %s", config.id)
            return StoreResult(
                ok=False, message=f"A configuration with id {config.id} already exists"
            )

        self._configs.append(config)
        logger.info("Created configuration %s (%s)", config.id, config.name)
        return self._persist(f"Configuration '{config.name}' created", config)

    def update(self, config: PCConfig) -> StoreResult:
        """Replace the configuration with the same id; unknown ids change nothing."""
        found = False
        updated: list[PCConfig] = []
        for existing in self._configs:
            if existing.id == config.id:
                updated.append(config)
                found = True
            else:
                updated.append(existing)
        self._configs = updated

        if found:
            logger.info("Updated configuration %s", config.id)
        else:
            logger.debug("Update ignored, unknown configuration id %s", config.id)
        return self._persist(f"Configuration '{config.name}' saved", config if found else None)

    def delete(self, config_id: str) -> StoreResult:
        """Remove a configuration by id, keeping the order of the others."""
        before = len(self._configs)
        self._configs = [c for c in self._configs if c.id != config_id]

        if len(self._configs) < before:
            logger.info("Deleted configuration %s", config_id)
        else:
            logger.debug("Delete ignored, unknown configuration id %s", config_id)
        return self._persist("Configuration deleted")

    def duplicate(self, config: PCConfig) -> StoreResult:
        copy = config.with_id(self.mint_id()).with_name(f"{config.name}{COPY_SUFFIX}")
        self._configs.append(copy)
        logger.info("Duplicated configuration %s as %s", config.id, copy.id)
        return self._persist(f"Configuration '{copy.name}' created", copy)

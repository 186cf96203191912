"""
Configuration list facade (use-case / app layer).

Goal:
- Give front ends (CLI, any renderer) one entry point over the store.
- Provide display-ready snapshots: rows with derived metrics, statistics over
  the full list, amounts formatted with two decimals.
- Turn raw form values into typed edits and report every action as a
  `UiActionResult`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from pcconfigmanager.application.common.facade_common import (
    UiActionResult,
    format_amount,
)
from pcconfigmanager.application.configs.config_store import ConfigStore, StoreResult
from pcconfigmanager.domain.models.component import Component, ComponentSlot, coerce_amount
from pcconfigmanager.domain.models.pc_config import PCConfig
from pcconfigmanager.domain.services.config_stats import ConfigStats
from pcconfigmanager.domain.services.pricing import (
    is_complete,
    margin,
    missing_slots,
    total_price,
)
from pcconfigmanager.infrastructure.config.settings import AppSettings, get_app_settings
from pcconfigmanager.infrastructure.exports.json_export import write_export_artifact
from pcconfigmanager.infrastructure.repositories.config_repository import ConfigRepository
from pcconfigmanager.infrastructure.storage.kv_storage import JsonFileStorage

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ConfigRow:
    config: PCConfig
    total_price: float
    margin: float
    complete: bool
    missing_slots: tuple[ComponentSlot, ...]

    @property
    def total_price_text(self) -> str:
        return format_amount(self.total_price)

    @property
    def margin_text(self) -> str:
        return format_amount(self.margin)


@dataclass(frozen=True)
class ConfigListSnapshot:
    search_term: str
    rows: tuple[ConfigRow, ...]
    stats: ConfigStats

    @property
    def stats_text(self) -> dict[str, str]:
        return {
            "count": str(self.stats.count),
            "complete_count": str(self.stats.complete_count),
            "average_total": format_amount(self.stats.average_total),
            "max_total": format_amount(self.stats.max_total),
            "min_total": format_amount(self.stats.min_total),
        }


def open_config_store(
    settings: Optional[AppSettings] = None,
    *,
    on_warning: Optional[Callable[[str], None]] = None,
) -> ConfigStore:
    """Open the file-backed store described by the settings."""
    settings = settings or get_app_settings()
    repository = ConfigRepository(
        JsonFileStorage(settings.storage_file), key=settings.storage_key
    )
    logger.debug("Opening configuration store at %s", settings.storage_file)
    return ConfigStore.open(repository, on_warning=on_warning)


def build_config_row(config: PCConfig) -> ConfigRow:
    return ConfigRow(
        config=config,
        total_price=total_price(config),
        margin=margin(config),
        complete=is_complete(config),
        missing_slots=tuple(missing_slots(config)),
    )


def get_config_list_snapshot(store: ConfigStore, search_term: str = "") -> ConfigListSnapshot:
    """Rows for the filtered list; statistics always cover every configuration."""
    return ConfigListSnapshot(
        search_term=str(search_term or ""),
        rows=tuple(build_config_row(c) for c in store.search(search_term)),
        stats=store.stats(),
    )


def _to_ui_result(result: StoreResult) -> UiActionResult:
    if result.ok:
        return UiActionResult(ok=True, message=f"✅ {result.message}")
    return UiActionResult(ok=False, message=f"❌ {result.message}")


def _not_found(config_id: str) -> UiActionResult:
    return UiActionResult(ok=False, message=f"❌ Configuration not found: {config_id}")


def create_config_from_ui(
    store: ConfigStore, *, name: str, sale_target: object = None
) -> tuple[UiActionResult, Optional[PCConfig]]:
    """Create a configuration with every slot unset."""
    try:
        config = PCConfig.blank(
            store.mint_id(),
            name=str(name or "").strip(),
            sale_target=coerce_amount(sale_target, label="sale target"),
        )
    except ValueError as e:
        return UiActionResult(ok=False, message=f"❌ Invalid input: {str(e)}"), None

    result = store.create(config)
    return _to_ui_result(result), config


def save_component_from_ui(
    store: ConfigStore,
    config_id: str,
    *,
    slot: str,
    name: Optional[str] = None,
    price: object = None,
    notes: Optional[str] = None,
) -> UiActionResult:
    """
    Edit one slot of a configuration.

    Fields left as None keep their current value.
    """
    config = store.get(config_id)
    if config is None:
        return _not_found(config_id)

    try:
        component_slot = ComponentSlot.from_str(slot)
        current = config.component(component_slot)
        component = Component(
            name=current.name if name is None else str(name).strip(),
            price=current.price if price is None else coerce_amount(price, label="price"),
            notes=current.notes if notes is None else (str(notes) or None),
        )
    except ValueError as e:
        return UiActionResult(ok=False, message=f"❌ Invalid input: {str(e)}")

    return _to_ui_result(store.update(config.with_component(component_slot, component)))


def set_sale_target_from_ui(
    store: ConfigStore, config_id: str, *, sale_target: object
) -> UiActionResult:
    config = store.get(config_id)
    if config is None:
        return _not_found(config_id)

    try:
        amount = coerce_amount(sale_target, label="sale target")
    except ValueError as e:
        return UiActionResult(ok=False, message=f"❌ Invalid input: {str(e)}")

    return _to_ui_result(store.update(config.with_sale_target(amount)))


def rename_config_from_ui(store: ConfigStore, config_id: str, *, name: str) -> UiActionResult:
    config = store.get(config_id)
    if config is None:
        return _not_found(config_id)
    return _to_ui_result(store.update(config.with_name(str(name or "").strip())))


def duplicate_config_from_ui(
    store: ConfigStore, config_id: str
) -> tuple[UiActionResult, Optional[PCConfig]]:
    config = store.get(config_id)
    if config is None:
        return _not_found(config_id), None
    result = store.duplicate(config)
    return _to_ui_result(result), result.config


def delete_config_from_ui(store: ConfigStore, config_id: str) -> UiActionResult:
    if store.get(config_id) is None:
        return _not_found(config_id)
    return _to_ui_result(store.delete(config_id))


def export_config_from_ui(
    store: ConfigStore, config_id: str, *, output_dir: Path
) -> tuple[UiActionResult, Optional[Path]]:
    config = store.get(config_id)
    if config is None:
        return _not_found(config_id), None

    artifact = store.export(config)
    try:
        path = write_export_artifact(artifact, output_dir)
    except OSError as e:
        logger.debug("Export write failed", exc_info=True)
        return UiActionResult(ok=False, message=f"❌ Export failed: {str(e)}"), None
    return UiActionResult(ok=True, message=f"✅ Exported to {path}"), path

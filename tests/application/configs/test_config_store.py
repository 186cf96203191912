from __future__ import annotations

import json
from typing import Optional

from pcconfigmanager.application.configs.config_store import ConfigStore
from pcconfigmanager.domain.models.component import Component, ComponentSlot
from pcconfigmanager.domain.models.pc_config import PCConfig
from pcconfigmanager.infrastructure.repositories.config_repository import ConfigRepository
from pcconfigmanager.infrastructure.storage.kv_storage import InMemoryStorage, StorageError


class _FailingWriteStorage(InMemoryStorage):
    def set_item(self, key: str, value: str) -> None:
        raise StorageError("disk full")


class _FailingReadStorage(InMemoryStorage):
    def get_item(self, key: str) -> Optional[str]:
        raise StorageError("permission denied")


def _store(storage: Optional[InMemoryStorage] = None, warnings: Optional[list[str]] = None) -> ConfigStore:
    repo = ConfigRepository(storage if storage is not None else InMemoryStorage())
    return ConfigStore.open(repo, on_warning=warnings.append if warnings is not None else None)


def _stored_ids(storage: InMemoryStorage) -> list[str]:
    return [item["id"] for item in json.loads(storage.get_item("pcConfigs") or "[]")]


def _config(store: ConfigStore, name: str) -> PCConfig:
    return PCConfig.blank(store.mint_id(), name=name)


def test_open_loads_persisted_list() -> None:
    storage = InMemoryStorage()
    ConfigRepository(storage).save([PCConfig.blank("a", name="A"), PCConfig.blank("b", name="B")])
    store = _store(storage)
    assert [c.id for c in store.configs] == ["a", "b"]


def test_open_with_malformed_data_starts_empty_and_warns() -> None:
    warnings: list[str] = []
    store = _store(InMemoryStorage({"pcConfigs": "{oops"}), warnings)
    assert store.configs == []
    assert warnings and "could not be loaded" in warnings[0]


def test_invalid_stored_item_does_not_wipe_the_valid_ones() -> None:
    raw = json.dumps(
        [
            {"id": "a", "name": "Good A"},
            {"id": "b", "name": "Good B"},
            {"id": "bad", "name": "Bad", "cpu": {"name": "x", "price": -5}},
        ]
    )
    storage = InMemoryStorage({"pcConfigs": raw})
    warnings: list[str] = []
    store = _store(storage, warnings)

    assert [c.id for c in store.configs] == ["a", "b"]
    assert len(warnings) == 1

    new = _config(store, "New")
    assert store.create(new).ok
    assert _stored_ids(storage) == ["a", "b", new.id]


def test_open_with_unreadable_storage_starts_empty() -> None:
    warnings: list[str] = []
    store = _store(_FailingReadStorage(), warnings)
    assert store.configs == []
    assert "permission denied" in warnings[0]


def test_create_appends_and_persists() -> None:
    storage = InMemoryStorage()
    store = _store(storage)
    first = _config(store, "First")
    second = _config(store, "Second")

    assert store.create(first).ok
    result = store.create(second)
    assert result.ok
    assert result.config == second
    assert [c.name for c in store.configs] == ["First", "Second"]
    assert _stored_ids(storage) == [first.id, second.id]


def test_create_rejects_existing_id() -> None:
    store = _store()
    config = _config(store, "A")
    store.create(config)
    result = store.create(config.with_name("Other"))
    assert not result.ok
    assert [c.name for c in store.configs] == ["A"]


def test_create_then_delete_restores_prior_content_and_order() -> None:
    storage = InMemoryStorage()
    store = _store(storage)
    for name in ("A", "B", "C"):
        store.create(_config(store, name))
    before = store.configs

    extra = _config(store, "Extra")
    store.create(extra)
    store.delete(extra.id)

    assert store.configs == before
    assert _stored_ids(storage) == [c.id for c in before]


def test_delete_keeps_order_of_remaining_configs() -> None:
    store = _store()
    configs = [_config(store, n) for n in ("A", "B", "C")]
    for config in configs:
        store.create(config)
    store.delete(configs[1].id)
    assert [c.name for c in store.configs] == ["A", "C"]


def test_delete_unknown_id_is_a_noop() -> None:
    store = _store()
    store.create(_config(store, "A"))
    before = store.configs
    result = store.delete("missing")
    assert result.ok
    assert store.configs == before


def test_update_replaces_matching_config_in_place() -> None:
    storage = InMemoryStorage()
    store = _store(storage)
    a, b = _config(store, "A"), _config(store, "B")
    store.create(a)
    store.create(b)

    edited = a.with_component(ComponentSlot.CPU, Component("Ryzen 5", 150)).with_name("A2")
    result = store.update(edited)

    assert result.ok
    assert store.configs == [edited, b]
    assert ConfigRepository(storage).load() == [edited, b]


def test_update_unknown_id_leaves_list_unchanged() -> None:
    store = _store()
    store.create(_config(store, "A"))
    before = store.configs
    result = store.update(PCConfig.blank("ghost", name="Ghost"))
    assert result.ok
    assert result.config is None
    assert store.configs == before


def test_duplicate_creates_independent_copy() -> None:
    store = _store()
    original = PCConfig.blank(store.mint_id(), name="Gaming", sale_target=1000).with_component(
        ComponentSlot.GRAPHICS_CARD, Component("RTX 4070", 600, notes="OC")
    )
    store.create(original)

    result = store.duplicate(original)
    copy = result.config

    assert result.ok
    assert copy is not None
    assert copy.id != original.id
    assert copy.name == "Gaming (copy)"
    assert list(copy.components()) == list(original.components())
    assert copy.sale_target == original.sale_target
    assert store.configs == [original, copy]

    store.update(copy.with_component(ComponentSlot.GRAPHICS_CARD, Component("RX 7800", 500)))
    assert store.get(original.id) == original


def test_repeated_duplicates_get_distinct_ids() -> None:
    store = _store()
    original = _config(store, "A")
    store.create(original)
    for _ in range(20):
        store.duplicate(original)
    ids = [c.id for c in store.configs]
    assert len(ids) == len(set(ids)) == 21


def test_write_failure_keeps_in_memory_mutation() -> None:
    warnings: list[str] = []
    store = _store(_FailingWriteStorage(), warnings)
    config = _config(store, "A")

    result = store.create(config)

    assert not result.ok
    assert "disk full" in result.message
    assert store.configs == [config]
    assert warnings


def test_search_and_stats_delegate_to_full_list() -> None:
    store = _store()
    store.create(_config(store, "Gaming"))
    store.create(_config(store, "Office"))
    assert [c.name for c in store.search("office")] == ["Office"]
    assert [c.name for c in store.search("")] == ["Gaming", "Office"]
    assert store.stats().count == 2


def test_export_returns_artifact_without_persisting() -> None:
    storage = InMemoryStorage()
    store = _store(storage)
    config = _config(store, "Rig")
    store.create(config)
    stored_before = storage.get_item("pcConfigs")

    artifact = store.export(config)

    assert artifact.filename == "Rig.json"
    assert json.loads(artifact.content)["id"] == config.id
    assert storage.get_item("pcConfigs") == stored_before


def test_configs_property_returns_a_copy() -> None:
    store = _store()
    store.create(_config(store, "A"))
    snapshot = store.configs
    snapshot.clear()
    assert len(store.configs) == 1

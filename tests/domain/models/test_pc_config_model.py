from __future__ import annotations

import pytest

from pcconfigmanager.domain.models.component import (
    COMPONENT_SLOTS,
    Component,
    ComponentSlot,
)
from pcconfigmanager.domain.models.pc_config import PCConfig, new_config_id


def test_blank_config_has_all_eight_slots_unset() -> None:
    config = PCConfig.blank("id-1", name="Office")
    pairs = list(config.components())
    assert [slot for slot, _ in pairs] == list(COMPONENT_SLOTS)
    assert len(pairs) == 8
    assert all(c == Component() for _, c in pairs)
    assert config.sale_target == 0.0


def test_to_dict_uses_camel_case_keys_and_omits_absent_notes() -> None:
    config = PCConfig.blank("abc", name="Rig").with_component(
        ComponentSlot.POWER_SUPPLY, Component("Corsair 750W", 99.5, notes="modular")
    )
    data = config.to_dict()
    assert list(data) == [
        "id",
        "name",
        "motherboard",
        "case",
        "powerSupply",
        "ram",
        "cpu",
        "ssd",
        "hdd",
        "graphicsCard",
        "saleTarget",
    ]
    assert data["powerSupply"] == {"name": "Corsair 750W", "price": 99.5, "notes": "modular"}
    assert data["cpu"] == {"name": "", "price": 0.0}


def test_from_dict_round_trips_and_fills_missing_slots() -> None:
    data = {
        "id": "42",
        "name": "Budget",
        "cpu": {"name": "Ryzen 5", "price": "149.90"},
        "saleTarget": 600,
    }
    config = PCConfig.from_dict(data)
    assert config.cpu == Component("Ryzen 5", 149.9)
    assert config.graphics_card == Component()
    assert config.sale_target == 600.0
    assert PCConfig.from_dict(config.to_dict()) == config


@pytest.mark.parametrize(
    "data",
    [
        {"id": "", "name": "x"},
        {"name": "no id"},
        {"id": "1", "cpu": "not an object"},
        {"id": "1", "cpu": {"name": "x", "price": -1}},
        {"id": "1", "cpu": {"name": "x", "price": "cheap"}},
        {"id": "1", "saleTarget": True},
    ],
)
def test_from_dict_rejects_invalid_data(data: dict) -> None:
    with pytest.raises(ValueError):
        PCConfig.from_dict(data)


def test_component_rejects_negative_or_non_finite_price() -> None:
    with pytest.raises(ValueError):
        Component("x", -0.01)
    with pytest.raises(ValueError):
        Component("x", float("nan"))


def test_with_helpers_return_new_instances() -> None:
    config = PCConfig.blank("1", name="A")
    renamed = config.with_name("B").with_sale_target(900)
    assert config.name == "A"
    assert config.sale_target == 0.0
    assert renamed.name == "B"
    assert renamed.sale_target == 900.0
    assert renamed.id == "1"


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("powerSupply", ComponentSlot.POWER_SUPPLY),
        ("power-supply", ComponentSlot.POWER_SUPPLY),
        ("GRAPHICS_CARD", ComponentSlot.GRAPHICS_CARD),
        ("Graphics card", ComponentSlot.GRAPHICS_CARD),
        ("ram", ComponentSlot.RAM),
    ],
)
def test_component_slot_from_str(raw: str, expected: ComponentSlot) -> None:
    assert ComponentSlot.from_str(raw) is expected


def test_component_slot_from_str_unknown() -> None:
    with pytest.raises(ValueError):
        ComponentSlot.from_str("floppy")


def test_new_config_id_skips_existing_ids(monkeypatch: pytest.MonkeyPatch) -> None:
    from pcconfigmanager.domain.models import pc_config as mod

    class _FakeUuid:
        def __init__(self, hex_value: str) -> None:
            self.hex = hex_value

    values = iter([_FakeUuid("taken"), _FakeUuid("fresh")])
    monkeypatch.setattr(mod.uuid, "uuid4", lambda: next(values))
    assert new_config_id({"taken"}) == "fresh"

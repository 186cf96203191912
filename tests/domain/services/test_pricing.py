from __future__ import annotations

import pytest

from pcconfigmanager.domain.models.component import COMPONENT_SLOTS, Component, ComponentSlot
from pcconfigmanager.domain.models.pc_config import PCConfig
from pcconfigmanager.domain.services.pricing import (
    is_complete,
    margin,
    missing_slots,
    total_price,
)

PRICES = {
    ComponentSlot.MOTHERBOARD: 100,
    ComponentSlot.CASE: 50,
    ComponentSlot.POWER_SUPPLY: 40,
    ComponentSlot.RAM: 60,
    ComponentSlot.CPU: 200,
    ComponentSlot.SSD: 70,
    ComponentSlot.HDD: 30,
    ComponentSlot.GRAPHICS_CARD: 300,
}


def _full_config(sale_target: float = 1000) -> PCConfig:
    config = PCConfig.blank("cfg-1", name="Gaming", sale_target=sale_target)
    for slot, price in PRICES.items():
        config = config.with_component(slot, Component(f"{slot.label} part", price))
    return config


def test_worked_example() -> None:
    config = _full_config()
    assert total_price(config) == 850
    assert margin(config) == 150
    assert is_complete(config) is True
    assert missing_slots(config) == []


def test_total_price_sums_every_slot() -> None:
    config = _full_config()
    assert total_price(config) == sum(c.price for _, c in config.components())


def test_total_price_is_order_independent_for_fractional_prices() -> None:
    prices = [0.1, 0.2, 0.3, 1e-3, 19.99, 0.7, 1234.56, 0.05]
    forward = PCConfig.blank("a")
    backward = PCConfig.blank("b")
    for slot, price in zip(COMPONENT_SLOTS, prices):
        forward = forward.with_component(slot, Component("x", price))
    for slot, price in zip(COMPONENT_SLOTS, reversed(prices)):
        backward = backward.with_component(slot, Component("x", price))
    assert total_price(forward) == total_price(backward)


def test_margin_may_be_negative() -> None:
    assert margin(_full_config(sale_target=800)) == -50


def test_blank_config_is_incomplete_with_every_slot_missing() -> None:
    config = PCConfig.blank("x", name="Empty")
    assert total_price(config) == 0
    assert is_complete(config) is False
    assert missing_slots(config) == list(COMPONENT_SLOTS)


@pytest.mark.parametrize("slot", list(COMPONENT_SLOTS))
def test_empty_name_breaks_completeness(slot: ComponentSlot) -> None:
    config = _full_config()
    config = config.with_component(slot, Component("", config.component(slot).price))
    assert is_complete(config) is False
    assert missing_slots(config) == [slot]


@pytest.mark.parametrize("slot", list(COMPONENT_SLOTS))
def test_zero_price_breaks_completeness(slot: ComponentSlot) -> None:
    config = _full_config()
    config = config.with_component(slot, Component(config.component(slot).name, 0))
    assert is_complete(config) is False


def test_whitespace_name_counts_as_set() -> None:
    config = PCConfig.blank("ws", sale_target=10)
    for slot in COMPONENT_SLOTS:
        config = config.with_component(slot, Component(" ", 1))
    assert missing_slots(config) == []
    assert is_complete(config) is True


def test_zero_sale_target_breaks_completeness() -> None:
    config = _full_config(sale_target=0)
    assert missing_slots(config) == []
    assert is_complete(config) is False

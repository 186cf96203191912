from __future__ import annotations

import math

from pcconfigmanager.domain.models.component import ComponentSlot
from pcconfigmanager.domain.models.pc_config import PCConfig


def total_price(config: PCConfig) -> float:
    """Sum of the prices of the eight component slots."""
    return math.fsum(component.price for _, component in config.components())


def margin(config: PCConfig) -> float:
    """Sale target minus total cost; negative when the build sells at a loss."""
    return config.sale_target - total_price(config)


def missing_slots(config: PCConfig) -> list[ComponentSlot]:
    """Slots without a name or a positive price, in slot order."""
    return [slot for slot, component in config.components() if not component.is_set]


def is_complete(config: PCConfig) -> bool:
    """
    True when every slot has a non-empty name and a positive price and the
    sale target is positive.
    """
    return not missing_slots(config) and config.sale_target > 0

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional


class ComponentSlot(Enum):
    """The eight component roles of a PC build, in display order."""

    MOTHERBOARD = "motherboard"
    CASE = "case"
    POWER_SUPPLY = "powerSupply"
    RAM = "ram"
    CPU = "cpu"
    SSD = "ssd"
    HDD = "hdd"
    GRAPHICS_CARD = "graphicsCard"

    @property
    def key(self) -> str:
        """Serialized key of the slot."""
        return self.value

    @property
    def label(self) -> str:
        return _SLOT_LABELS[self]

    @classmethod
    def from_str(cls, value: str) -> "ComponentSlot":
        """
        Resolve a slot from its serialized key, enum name or label.

        Matching ignores case, spaces, dashes and underscores, so
        "power-supply", "POWER_SUPPLY" and "powerSupply" all work.
        """
        wanted = _normalize_slot_token(value)
        for slot in cls:
            candidates = (slot.value, slot.name, _SLOT_LABELS[slot])
            if wanted in {_normalize_slot_token(c) for c in candidates}:
                return slot
        raise ValueError(f"Unknown component slot: {value!r}")

    def __str__(self) -> str:
        return self.label


_SLOT_LABELS = {
    ComponentSlot.MOTHERBOARD: "Motherboard",
    ComponentSlot.CASE: "Case",
    ComponentSlot.POWER_SUPPLY: "Power supply",
    ComponentSlot.RAM: "RAM",
    ComponentSlot.CPU: "CPU",
    ComponentSlot.SSD: "SSD",
    ComponentSlot.HDD: "HDD",
    ComponentSlot.GRAPHICS_CARD: "Graphics card",
}

COMPONENT_SLOTS: tuple[ComponentSlot, ...] = tuple(ComponentSlot)


def _normalize_slot_token(value: str) -> str:
    return "".join(
        ch for ch in str(value or "").lower() if ch not in {" ", "-", "_"}
    )


def coerce_amount(value: Any, *, label: str) -> float:
    """
    Coerce a price-like value to a non-negative float.

    None and "" read as 0 (unset). Booleans, non-numeric text and negative
    amounts raise ValueError.
    """
    if value is None:
        return 0.0
    if isinstance(value, bool):
        raise ValueError(f"{label} must be a number (not bool)")
    if isinstance(value, (int, float)):
        amount = float(value)
    elif isinstance(value, str):
        text = value.strip().replace(",", "")
        if not text:
            return 0.0
        try:
            amount = float(text)
        except ValueError as e:
            raise ValueError(f"{label} is not a valid number: {value!r}") from e
    else:
        raise ValueError(f"{label} must be a number")

    if not math.isfinite(amount):
        raise ValueError(f"{label} must be finite")
    if amount < 0:
        raise ValueError(f"{label} cannot be negative: {amount}")
    return amount


@dataclass(frozen=True)
class Component:
    """
    One priced part.

    An empty name or a price of 0 means the slot is not filled in yet.
    """

    name: str = ""
    price: float = 0.0
    notes: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "name", "" if self.name is None else str(self.name))
        object.__setattr__(self, "price", coerce_amount(self.price, label="price"))
        if self.notes is not None:
            object.__setattr__(self, "notes", str(self.notes))

    @property
    def is_set(self) -> bool:
        return bool(self.name) and self.price > 0

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "price": self.price}
        if self.notes is not None:
            data["notes"] = self.notes
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any], *, label: str = "component") -> "Component":
        if not isinstance(data, Mapping):
            raise ValueError(f"{label} must be an object")
        notes = data.get("notes")
        return cls(
            name=str(data.get("name", "") or ""),
            price=coerce_amount(data.get("price"), label=f"{label}.price"),
            notes=None if notes is None else str(notes),
        )

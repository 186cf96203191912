from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Collection, Iterator, Mapping

from .component import COMPONENT_SLOTS, Component, ComponentSlot, coerce_amount


def new_config_id(existing_ids: Collection[str] = ()) -> str:
    """Mint an id that is not in `existing_ids`."""
    while True:
        config_id = uuid.uuid4().hex
        if config_id not in existing_ids:
            return config_id


@dataclass(frozen=True)
class PCConfig:
    """
    One PC build: a name, eight component slots and a target sale price.

    Instances are immutable; edits produce a new instance via the `with_*`
    helpers and are written back with `ConfigStore.update`.
    """

    id: str
    name: str = ""
    motherboard: Component = field(default_factory=Component)
    case: Component = field(default_factory=Component)
    power_supply: Component = field(default_factory=Component)
    ram: Component = field(default_factory=Component)
    cpu: Component = field(default_factory=Component)
    ssd: Component = field(default_factory=Component)
    hdd: Component = field(default_factory=Component)
    graphics_card: Component = field(default_factory=Component)
    sale_target: float = 0.0

    def __post_init__(self) -> None:
        config_id = str(self.id or "").strip()
        if not config_id:
            raise ValueError("Configuration id cannot be empty")
        object.__setattr__(self, "id", config_id)
        object.__setattr__(self, "name", "" if self.name is None else str(self.name))
        object.__setattr__(
            self, "sale_target", coerce_amount(self.sale_target, label="saleTarget")
        )
        for slot in COMPONENT_SLOTS:
            attr = _SLOT_ATTRS[slot]
            if not isinstance(getattr(self, attr), Component):
                raise ValueError(f"{slot.key} must be a Component")

    @classmethod
    def blank(cls, config_id: str, name: str = "", sale_target: float = 0.0) -> "PCConfig":
        """A configuration with every slot unset."""
        return cls(id=config_id, name=name, sale_target=sale_target)

    def component(self, slot: ComponentSlot) -> Component:
        return getattr(self, _SLOT_ATTRS[slot])

    def components(self) -> Iterator[tuple[ComponentSlot, Component]]:
        """Yield (slot, component) pairs in slot order."""
        for slot in COMPONENT_SLOTS:
            yield slot, self.component(slot)

    def with_component(self, slot: ComponentSlot, component: Component) -> "PCConfig":
        return replace(self, **{_SLOT_ATTRS[slot]: component})

    def with_name(self, name: str) -> "PCConfig":
        return replace(self, name=name)

    def with_sale_target(self, sale_target: float) -> "PCConfig":
        return replace(self, sale_target=sale_target)

    def with_id(self, config_id: str) -> "PCConfig":
        return replace(self, id=config_id)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"id": self.id, "name": self.name}
        for slot, component in self.components():
            data[slot.key] = component.to_dict()
        data["saleTarget"] = self.sale_target
        return data

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "PCConfig":
        """
        Build a configuration from its serialized form.

        A missing slot reads as an unset component; wrong types raise
        ValueError.
        """
        if not isinstance(data, Mapping):
            raise ValueError("configuration must be an object")

        kwargs: dict[str, Any] = {}
        for slot in COMPONENT_SLOTS:
            raw = data.get(slot.key)
            kwargs[_SLOT_ATTRS[slot]] = (
                Component() if raw is None else Component.from_dict(raw, label=slot.key)
            )

        return cls(
            id=str(data.get("id", "") or ""),
            name=str(data.get("name", "") or ""),
            sale_target=coerce_amount(data.get("saleTarget"), label="saleTarget"),
            **kwargs,
        )


_SLOT_ATTRS = {
    ComponentSlot.MOTHERBOARD: "motherboard",
    ComponentSlot.CASE: "case",
    ComponentSlot.POWER_SUPPLY: "power_supply",
    ComponentSlot.RAM: "ram",
    ComponentSlot.CPU: "cpu",
    ComponentSlot.SSD: "ssd",
    ComponentSlot.HDD: "hdd",
    ComponentSlot.GRAPHICS_CARD: "graphics_card",
}

from .component import COMPONENT_SLOTS, Component, ComponentSlot
from .pc_config import PCConfig, new_config_id

__all__ = ["COMPONENT_SLOTS", "Component", "ComponentSlot", "PCConfig", "new_config_id"]

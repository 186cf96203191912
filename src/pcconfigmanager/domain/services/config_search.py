from __future__ import annotations

from typing import Sequence

from pcconfigmanager.domain.models.pc_config import PCConfig


def config_matches(config: PCConfig, term: str) -> bool:
    term_norm = str(term or "").casefold()
    if not term_norm:
        return True

    if term_norm in config.name.casefold():
        return True
    return any(
        term_norm in component.name.casefold() for _, component in config.components()
    )


def search_configs(configs: Sequence[PCConfig], term: str) -> list[PCConfig]:
    """
    Case-insensitive substring search over configuration and component names.

    Keeps the input order. Only the empty term matches every configuration;
    whitespace is matched like any other character.
    """
    return [config for config in configs if config_matches(config, term)]

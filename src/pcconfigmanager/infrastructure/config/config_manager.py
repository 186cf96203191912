"""
Configuration manager

Sectioned CRUD over the user settings file (config.yaml).
"""

from __future__ import annotations

import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from pcconfigmanager.shared.constants import CONFIG_FILE

logger = logging.getLogger(__name__)


class ConfigManager:
    """
    Configuration manager

    Settings are grouped in sections, stored in config.yaml at the project
    root unless another path is given.

    Example:
    ```yaml
    storage:
      file: data/storage.json
      key: pcConfigs
    export:
      dir: outputs/exports
    logging:
      level: INFO
    ```
    """

    def __init__(self, config_path: Optional[Path] = None):
        if config_path is None:
            self.config_path = CONFIG_FILE
        else:
            self.config_path = Path(config_path)

    def _load_all_config(self) -> Dict[str, Any]:
        """
        Load the whole settings file.

        Returns:
            the settings dict; empty when the file does not exist

        Raises:
            yaml.YAMLError: the file is not valid YAML
        """
        if not self.config_path.exists():
            logger.debug(f"Config file not found: {self.config_path}")
            return {}

        try:
            with open(self.config_path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            logger.error(f"Invalid YAML in config file: {str(e)}")
            raise

        # an empty file is a valid, empty config
        if config_data is None:
            return {}

        if not isinstance(config_data, dict):
            logger.warning("Config file root is not a mapping, ignoring it")
            return {}

        return config_data

    def _save_all_config(self, config_data: Dict[str, Any]) -> None:
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.config_path, "w", encoding="utf-8") as f:
                yaml.safe_dump(
                    config_data, f, default_flow_style=False, allow_unicode=True
                )
            logger.info(f"Config saved to {self.config_path}")
        except Exception as e:
            logger.error(f"Failed to save config: {str(e)}")
            raise

    def load(self) -> Dict[str, Any]:
        return self._load_all_config()

    def get_section(self, section: str) -> Optional[Dict[str, Any]]:
        """
        Get one section, e.g. 'storage'.

        Returns:
            the section dict, or None when absent or not a mapping
        """
        value = self._load_all_config().get(section)
        if value is None:
            return None
        if not isinstance(value, dict):
            logger.warning(f"Config section {section} is not a mapping, ignoring it")
            return None
        return value

    def set_section(self, section: str, data: Dict[str, Any]) -> None:
        config = self._load_all_config()
        config[section] = data
        self._save_all_config(config)
        logger.info(f"Config section {section} updated")

    def get_value(self, section: str, key: str, default: Any = None) -> Any:
        section_data = self.get_section(section)
        if section_data is None:
            return default
        return section_data.get(key, default)

    def set_value(self, section: str, key: str, value: Any) -> None:
        config = self._load_all_config()

        if not isinstance(config.get(section), dict):
            config[section] = {}

        config[section][key] = value

        self._save_all_config(config)
        logger.info(f"Config {section}.{key} updated")

    def config_exists(self) -> bool:
        return self.config_path.exists()


@lru_cache(maxsize=1)
def get_config_manager() -> ConfigManager:
    return ConfigManager()

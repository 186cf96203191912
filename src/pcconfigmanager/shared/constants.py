"""
Global constants

Project-wide paths and conventions shared by every layer.
"""

import os
from pathlib import Path

# Project root (src/pcconfigmanager/shared -> project root)
PROJECT_ROOT = Path(__file__).resolve().parents[3]


def get_path_from_env(env_var: str, default: Path) -> Path:
    """
    Read a path from an environment variable, falling back to a default.

    Args:
        env_var: environment variable name
        default: path used when the variable is unset or empty

    Returns:
        Path: the configured path
    """
    env_value = os.getenv(env_var)
    if env_value:
        return Path(env_value)
    return default


# User settings file (YAML)
CONFIG_FILE = get_path_from_env(
    "PCCONFIGMANAGER_CONFIG_FILE", PROJECT_ROOT / "config.yaml"
)

# Key-value storage file holding the persisted configuration list
STORAGE_FILE = get_path_from_env(
    "PCCONFIGMANAGER_STORAGE_FILE", PROJECT_ROOT / "data" / "storage.json"
)

# Default directory for exported configurations
EXPORT_DIR = get_path_from_env(
    "PCCONFIGMANAGER_EXPORT_DIR", PROJECT_ROOT / "outputs" / "exports"
)

# Storage key of the configuration list (same key the browser build used)
STORAGE_KEY = "pcConfigs"

# Appended to the name of a duplicated configuration
COPY_SUFFIX = " (copy)"

# Export artifact conventions
EXPORT_FILE_SUFFIX = ".json"
EXPORT_MEDIA_TYPE = "application/json"
EXPORT_JSON_INDENT = 2
EXPORT_FALLBACK_NAME = "configuration"

DEFAULT_LOG_LEVEL = "INFO"

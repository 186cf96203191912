"""
Single-configuration JSON export.

`build_export_artifact` is pure; `write_export_artifact` is the file-system
boundary that offers the bytes to the user.
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from pathlib import Path

from pcconfigmanager.domain.models.pc_config import PCConfig
from pcconfigmanager.shared.constants import (
    EXPORT_FALLBACK_NAME,
    EXPORT_FILE_SUFFIX,
    EXPORT_JSON_INDENT,
    EXPORT_MEDIA_TYPE,
)

logger = logging.getLogger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f]')


@dataclass(frozen=True)
class ExportArtifact:
    filename: str
    content: bytes
    media_type: str = EXPORT_MEDIA_TYPE


def export_config_json(config: PCConfig, *, indent: int = EXPORT_JSON_INDENT) -> str:
    return json.dumps(config.to_dict(), ensure_ascii=False, indent=indent)


def build_export_artifact(
    config: PCConfig, *, indent: int = EXPORT_JSON_INDENT
) -> ExportArtifact:
    """Pretty-printed JSON of one configuration, labeled `<name>.json`."""
    return ExportArtifact(
        filename=f"{config.name}{EXPORT_FILE_SUFFIX}",
        content=export_config_json(config, indent=indent).encode("utf-8"),
    )


def safe_export_filename(filename: str) -> str:
    """
    Make an artifact label usable as a file name.

    Path separators and reserved characters become "_"; an empty stem falls
    back to a generic name.
    """
    raw = str(filename or "")
    if raw.endswith(EXPORT_FILE_SUFFIX):
        raw = raw[: -len(EXPORT_FILE_SUFFIX)]
    stem = _UNSAFE_FILENAME_CHARS.sub("_", raw).strip().strip(".")
    if not stem.strip(" _"):
        stem = EXPORT_FALLBACK_NAME
    return f"{stem}{EXPORT_FILE_SUFFIX}"


def write_export_artifact(artifact: ExportArtifact, output_dir: Path) -> Path:
    """
    Write an artifact into `output_dir`.

    Returns:
        the written file path

    Raises:
        OSError: the directory or file could not be written
    """
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    target = output_dir / safe_export_filename(artifact.filename)
    target.write_bytes(artifact.content)
    logger.info("Exported configuration to %s", target)
    return target

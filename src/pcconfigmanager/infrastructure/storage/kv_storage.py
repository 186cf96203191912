"""
Key-value storage backends

A string-keyed, string-valued store with the same contract as the browser's
`localStorage`: `get_item` returns None for an unknown key, `set_item`
overwrites wholesale.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Dict, Optional, Protocol

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Storage read/write error with user-facing message in args[0]."""


class KeyValueStorage(Protocol):
    def get_item(self, key: str) -> Optional[str]: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...


class InMemoryStorage:
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._items: Dict[str, str] = dict(initial or {})

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = str(value)

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)


class JsonFileStorage:
    """
    Key-value storage kept in a single JSON object file.

    The whole file is rewritten on every write: content goes to a temp file in
    the same directory, then `os.replace` swaps it in. A missing file reads as
    an empty store.
    """

    def __init__(self, path: Path):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}

        try:
            raw_text = self.path.read_text(encoding="utf-8")
        except OSError as e:
            raise StorageError(f"Failed to read storage file: {self.path} ({e})") from e

        if not raw_text.strip():
            return {}

        try:
            data = json.loads(raw_text)
        except json.JSONDecodeError as e:
            raise StorageError(f"Storage file is not valid JSON: {self.path} ({e})") from e

        if not isinstance(data, dict):
            raise StorageError(f"Storage file root must be a JSON object: {self.path}")

        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _write_all(self, items: Dict[str, str]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{self.path.name}.", suffix=".tmp", dir=self.path.parent
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(items, f, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as e:
            raise StorageError(f"Failed to write storage file: {self.path} ({e})") from e
        logger.debug("Storage written to %s", self.path)

    def get_item(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set_item(self, key: str, value: str) -> None:
        try:
            items = self._read_all()
        except StorageError:
            # unreadable content is replaced wholesale
            logger.warning("Storage file unreadable, overwriting: %s", self.path)
            items = {}
        items[key] = str(value)
        self._write_all(items)

    def remove_item(self, key: str) -> None:
        items = self._read_all()
        if key not in items:
            return
        del items[key]
        self._write_all(items)

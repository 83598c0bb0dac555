"""Scoped key-value cache backed by a single JSON file."""

from __future__ import annotations

from pathlib import Path

from ._jsonfile import JsonObjectFile
from ..log import logger


class KeyValueCache:
    """String values keyed by string, written through on every change.

    On-disk format: ``{key: value, ...}``. The file is read once when the
    cache is created; an unreadable or non-object file starts empty.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._file = JsonObjectFile(path)
        self._data: dict[str, object] = self._file.read()

    def get(self, key: str) -> str | None:
        """Return the value stored under *key*, or None if absent."""
        value = self._data.get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            logger.warning("Cache value for %r is not a string, ignoring it", key)
            return None
        return value

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        self._flush()

    def remove(self, key: str) -> None:
        if self._data.pop(key, None) is not None:
            self._flush()

    def clear(self) -> None:
        self._data = {}
        self._flush()

    def __contains__(self, key: object) -> bool:
        return key in self._data

    def _flush(self) -> None:
        try:
            self._file.write(self._data)
        except OSError:
            logger.warning("Failed to write cache %s", self.path, exc_info=True)

"""Pinned and recent case lists stored through the key-value cache."""

from __future__ import annotations

import json
from typing import Iterable

from .cache import KeyValueCache
from ..log import logger

PINNED_KEY = "pinned"
RECENT_KEY = "recent"


class CaseListStore:
    """Reads and writes ordered lists of case identifiers.

    Each list lives under its own cache key as a JSON array of strings.
    A malformed value only empties the list it belongs to.
    """

    def __init__(self, cache: KeyValueCache) -> None:
        self.cache = cache

    def load_list(self, name: str) -> list[str]:
        """Load the list stored under *name* (``[]`` if absent or malformed)."""
        raw = self.cache.get(name)
        if raw is None:
            return []
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Stored %r list is not valid JSON, using an empty list", name)
            return []
        if not isinstance(data, list) or not all(isinstance(i, str) for i in data):
            logger.warning(
                "Stored %r list is not an array of strings, using an empty list", name
            )
            return []
        return data

    def load(self) -> tuple[list[str], list[str]]:
        """Return ``(pinned, recent)``."""
        return self.load_list(PINNED_KEY), self.load_list(RECENT_KEY)

    def save(self, name: str, items: Iterable[str]) -> None:
        self.cache.set(name, json.dumps(list(items)))

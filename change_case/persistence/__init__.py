"""Persistence layer – the key-value cache and the case lists stored in it."""

from .cache import KeyValueCache
from .case_lists import PINNED_KEY, RECENT_KEY, CaseListStore

__all__ = [
    "CaseListStore",
    "KeyValueCache",
    "PINNED_KEY",
    "RECENT_KEY",
]

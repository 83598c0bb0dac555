"""Pinned and recently used cases.

``RecentList`` is a small most-recently-used list, ``PinnedList`` keeps the
user's favourites, and ``CaseMemory`` owns both and keeps them disjoint:
a pinned case never shows up under recent. Every mutation writes the
changed list through to the store it was built with.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from .log import logger
from .persistence import PINNED_KEY, RECENT_KEY, CaseListStore


def _dedupe(items: Iterable[str]) -> list[str]:
    seen: set[str] = set()
    result: list[str] = []
    for item in items:
        if item not in seen:
            seen.add(item)
            result.append(item)
    return result


class _CaseList:
    """Ordered, duplicate-free list of case identifiers with write-through."""

    KEY = ""

    def __init__(
        self, store: CaseListStore | None = None, items: Iterable[str] = ()
    ) -> None:
        self._store = store
        self._items: list[str] = _dedupe(items)

    @property
    def items(self) -> list[str]:
        return list(self._items)

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, case: object) -> bool:
        return case in self._items

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._items!r})"

    def clear(self) -> None:
        self._items = []
        self._persist()

    def _persist(self) -> None:
        if self._store is not None:
            self._store.save(self.KEY, self._items)


class RecentList(_CaseList):
    """Most recently used cases, newest first, capped at ``capacity``."""

    KEY = RECENT_KEY
    CAPACITY = 4

    def __init__(
        self,
        store: CaseListStore | None = None,
        items: Iterable[str] = (),
        capacity: int | None = None,
    ) -> None:
        super().__init__(store, items)
        self.capacity = self.CAPACITY if capacity is None else capacity
        del self._items[self.capacity :]

    def use(self, case: str, is_pinned: bool = False) -> None:
        """Move *case* to the front, evicting the oldest past capacity.

        Pinned cases are not tracked.
        """
        if is_pinned:
            return
        self._items = [case, *(c for c in self._items if c != case)]
        del self._items[self.capacity :]
        self._persist()

    def remove(self, case: str) -> None:
        self._items = [c for c in self._items if c != case]
        self._persist()


class PinnedList(_CaseList):
    """Pinned cases, most recently pinned first."""

    KEY = PINNED_KEY

    def pin(self, case: str) -> None:
        if case in self._items:
            return
        self._items.insert(0, case)
        self._persist()

    def unpin(self, case: str) -> None:
        if case not in self._items:
            return
        self._items = [c for c in self._items if c != case]
        self._persist()


class CaseMemory:
    """Pinned and recent cases kept mutually exclusive."""

    def __init__(
        self, pinned: PinnedList | None = None, recent: RecentList | None = None
    ) -> None:
        self._pinned = pinned if pinned is not None else PinnedList()
        self._recent = recent if recent is not None else RecentList()

    @classmethod
    def load(cls, store: CaseListStore) -> CaseMemory:
        """Build a memory from whatever *store* holds."""
        pinned_items, recent_items = store.load()
        pinned = PinnedList(store, pinned_items)
        stale = [c for c in recent_items if c in pinned]
        if stale:
            logger.debug("Dropping pinned cases from recent: %s", stale)
        recent = RecentList(store, (c for c in recent_items if c not in pinned))
        return cls(pinned, recent)

    @property
    def pinned(self) -> list[str]:
        return self._pinned.items

    @property
    def recent(self) -> list[str]:
        return self._recent.items

    def is_pinned(self, case: str) -> bool:
        return case in self._pinned

    def is_recent(self, case: str) -> bool:
        return case in self._recent

    def use(self, case: str) -> None:
        """Record that *case* was just used to copy or paste."""
        self._recent.use(case, is_pinned=self.is_pinned(case))

    def pin(self, case: str) -> None:
        self._pinned.pin(case)
        if case in self._recent:
            self._recent.remove(case)

    def unpin(self, case: str) -> None:
        self._pinned.unpin(case)

    def remove_recent(self, case: str) -> None:
        self._recent.remove(case)

    def clear_pinned(self) -> None:
        self._pinned.clear()

    def clear_recent(self) -> None:
        self._recent.clear()

    def remaining(self, cases: Iterable[str]) -> list[str]:
        """Return *cases* that are neither pinned nor recent, in order."""
        return [c for c in cases if c not in self._pinned and c not in self._recent]

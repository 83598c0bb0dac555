"""Shared test fixtures for the change-case test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from change_case.memory import CaseMemory
from change_case.persistence import CaseListStore, KeyValueCache


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the data directory at a temp dir so nothing touches ~/.change-case."""
    home = tmp_path / "home"
    monkeypatch.setenv("CHANGE_CASE_HOME", str(home))
    return home


@pytest.fixture
def cache_path(tmp_path: Path) -> Path:
    return tmp_path / "cache.json"


@pytest.fixture
def cache(cache_path: Path) -> KeyValueCache:
    return KeyValueCache(cache_path)


@pytest.fixture
def store(cache: KeyValueCache) -> CaseListStore:
    return CaseListStore(cache)


@pytest.fixture
def memory(store: CaseListStore) -> CaseMemory:
    """An empty CaseMemory writing through to a temp cache file."""
    return CaseMemory.load(store)

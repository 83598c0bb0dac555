"""Tests for persistence stores.

Each store is tested for:
  1. reading a non-existent file returns the empty default
  2. writes round-trip across instances
  3. corrupt data degrades gracefully instead of raising
"""

from __future__ import annotations

import json

import pytest

from change_case.persistence import (
    PINNED_KEY,
    RECENT_KEY,
    CaseListStore,
    KeyValueCache,
)
from change_case.persistence._jsonfile import JsonObjectFile


# ---------------------------------------------------------------------------
# JsonObjectFile
# ---------------------------------------------------------------------------


class TestJsonObjectFile:
    def test_read_nonexistent(self, tmp_path):
        assert JsonObjectFile(tmp_path / "nope.json").read() == {}

    def test_write_and_read(self, tmp_path):
        store = JsonObjectFile(tmp_path / "data.json")
        store.write({"key": "value"})
        assert JsonObjectFile(tmp_path / "data.json").read() == {"key": "value"}

    def test_read_corrupt_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("not valid json{{{")
        assert JsonObjectFile(path).read() == {}

    def test_read_non_object(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]")
        assert JsonObjectFile(path).read() == {}

    def test_write_creates_parent_dirs(self, tmp_path):
        path = tmp_path / "deep" / "nested" / "store.json"
        JsonObjectFile(path).write({"a": 1})
        assert path.exists()

    def test_write_leaves_no_temp_file(self, tmp_path):
        path = tmp_path / "data.json"
        JsonObjectFile(path).write({"a": 1})
        assert [p.name for p in tmp_path.iterdir()] == ["data.json"]


# ---------------------------------------------------------------------------
# KeyValueCache
# ---------------------------------------------------------------------------


class TestKeyValueCache:
    def test_get_missing(self, cache):
        assert cache.get("pinned") is None

    def test_set_then_get(self, cache):
        cache.set("pinned", "[]")
        assert cache.get("pinned") == "[]"

    def test_persists_across_instances(self, cache, cache_path):
        cache.set("recent", '["Dot Case"]')
        assert KeyValueCache(cache_path).get("recent") == '["Dot Case"]'

    def test_remove(self, cache, cache_path):
        cache.set("recent", "[]")
        cache.remove("recent")
        assert "recent" not in cache
        assert KeyValueCache(cache_path).get("recent") is None

    def test_clear(self, cache, cache_path):
        cache.set("a", "1")
        cache.set("b", "2")
        cache.clear()
        assert json.loads(cache_path.read_text()) == {}

    def test_corrupt_file_starts_empty(self, cache_path):
        cache_path.write_text("{{{")
        assert KeyValueCache(cache_path).get("pinned") is None

    def test_non_object_file_starts_empty(self, cache_path):
        cache_path.write_text("[1, 2]")
        cache = KeyValueCache(cache_path)
        cache.set("pinned", "[]")
        assert json.loads(cache_path.read_text()) == {"pinned": "[]"}

    def test_non_string_value_ignored(self, cache_path):
        cache_path.write_text(json.dumps({"pinned": ["Dot Case"]}))
        assert KeyValueCache(cache_path).get("pinned") is None

    def test_write_failure_is_not_raised(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        cache = KeyValueCache(blocker / "cache.json")
        cache.set("pinned", "[]")
        assert cache.get("pinned") == "[]"


# ---------------------------------------------------------------------------
# CaseListStore
# ---------------------------------------------------------------------------


class TestCaseListStore:
    def test_keys(self):
        assert PINNED_KEY == "pinned"
        assert RECENT_KEY == "recent"

    def test_load_empty(self, store):
        assert store.load() == ([], [])

    @pytest.mark.parametrize(
        "items",
        [
            [],
            ["Camel Case"],
            ["Snake Case", "Camel Case", "Dot Case"],
            ["ünïcödé", "with \"quotes\"", "back\\slash"],
        ],
    )
    def test_round_trip(self, store, items):
        store.save(PINNED_KEY, items)
        assert store.load_list(PINNED_KEY) == items

    def test_encoded_as_json_array_string(self, store, cache):
        store.save(RECENT_KEY, ("Dot Case", "Path Case"))
        assert json.loads(cache.get(RECENT_KEY)) == ["Dot Case", "Path Case"]

    def test_malformed_json_yields_empty(self, store, cache):
        cache.set(PINNED_KEY, "not json")
        assert store.load_list(PINNED_KEY) == []

    def test_non_list_yields_empty(self, store, cache):
        cache.set(PINNED_KEY, json.dumps({"a": 1}))
        assert store.load_list(PINNED_KEY) == []

    def test_non_string_members_yield_empty(self, store, cache):
        cache.set(RECENT_KEY, json.dumps(["Dot Case", 3]))
        assert store.load_list(RECENT_KEY) == []

    def test_malformed_key_does_not_affect_other(self, store, cache):
        cache.set(PINNED_KEY, "oops")
        cache.set(RECENT_KEY, json.dumps(["Dot Case"]))
        assert store.load() == ([], ["Dot Case"])

    def test_malformed_logs_warning(self, store, cache, caplog):
        cache.set(PINNED_KEY, "oops")
        with caplog.at_level("WARNING", logger="change_case"):
            store.load_list(PINNED_KEY)
        assert "pinned" in caplog.text

"""Tests for the key/value persistence adapters."""

import json
import os

from sift.core.storage import JsonFileStore, MemoryStore


class TestJsonFileStore:
    """File-backed store returns results instead of raising."""

    def test_missing_key_is_none(self, tmp_path):
        result = JsonFileStore(tmp_path).read("nothing")
        assert result.ok and result.value is None

    def test_write_then_read(self, tmp_path):
        store = JsonFileStore(tmp_path / "state")
        assert store.write("lists", [{"name": "a"}]).ok
        assert store.read("lists").value == [{"name": "a"}]
        assert (tmp_path / "state" / "lists.json").exists()
        assert not (tmp_path / "state" / "lists.json.tmp").exists()

    def test_corrupt_file(self, tmp_path):
        (tmp_path / "history.json").write_text("{oops")
        result = JsonFileStore(tmp_path).read("history")
        assert not result.ok
        assert "invalid JSON" in result.error

    def test_unencodable_value(self, tmp_path):
        result = JsonFileStore(tmp_path).write("bad", {"x": object()})
        assert not result.ok

    def test_unwritable_location(self, tmp_path):
        blocker = tmp_path / "blocker"
        blocker.write_text("a file, not a directory")
        result = JsonFileStore(blocker).write("key", [])
        assert not result.ok
        assert result.error

    def test_invalid_utf8(self, tmp_path):
        (tmp_path / "smart-lists.json").write_bytes(b'[\xff\xfe]')
        result = JsonFileStore(tmp_path).read("smart-lists")
        assert not result.ok
        assert "UTF-8" in result.error

    def test_failed_replace_removes_temp_file(self, tmp_path, monkeypatch):
        def refuse(src, dst):
            raise PermissionError("read-only target")

        monkeypatch.setattr(os, "replace", refuse)
        result = JsonFileStore(tmp_path).write("lists", [])
        assert not result.ok
        assert list(tmp_path.iterdir()) == []


class TestMemoryStore:
    def test_round_trip(self):
        store = MemoryStore()
        store.write("k", {"a": 1})
        assert store.read("k").value == {"a": 1}
        assert json.loads(store.raw("k")) == {"a": 1}

    def test_corrupt_raw(self):
        store = MemoryStore()
        store.set_raw("k", "nope")
        assert not store.read("k").ok

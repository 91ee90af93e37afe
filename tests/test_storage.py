"""
Tests for the blob stores.
"""

import json

import pytest

from core.storage import JsonFileBlobStore, MemoryBlobStore, StorageCorruptionError


class TestMemoryBlobStore:
    """Process-local store."""

    def test_json_helpers(self):
        store = MemoryBlobStore()
        store.set_json("key", {"a": [1, 2]})

        assert store.get_json("key") == {"a": [1, 2]}
        assert store.get_json("missing") is None

    def test_remove_missing_key(self):
        store = MemoryBlobStore({"a": "1"})
        store.remove("b")
        store.remove("a")

        assert store.keys() == []

    def test_corrupted_value(self):
        store = MemoryBlobStore({"key": "{oops"})

        with pytest.raises(StorageCorruptionError):
            store.get_json("key")


class TestJsonFileBlobStore:
    """Single JSON document on disk."""

    def test_survives_restart(self, tmp_path):
        path = tmp_path / "store.json"
        JsonFileBlobStore(path).set_json("programs", ["a"])

        reopened = JsonFileBlobStore(path)

        assert reopened.get_json("programs") == ["a"]
        assert not (tmp_path / "store.tmp").exists()

    def test_missing_file_starts_empty(self, tmp_path):
        store = JsonFileBlobStore(tmp_path / "nested" / "store.json")

        assert store.keys() == []
        store.set("k", "\"v\"")
        assert (tmp_path / "nested" / "store.json").exists()

    def test_corrupted_file_set_aside(self, tmp_path):
        path = tmp_path / "store.json"
        path.write_text("{not json", encoding="utf-8")

        store = JsonFileBlobStore(path)

        assert store.keys() == []
        assert (tmp_path / "store.corrupt").exists()

    def test_remove_rewrites_document(self, tmp_path):
        path = tmp_path / "store.json"
        store = JsonFileBlobStore(path)
        store.set("a", "1")
        store.set("b", "2")
        store.remove("a")

        assert json.loads(path.read_text(encoding="utf-8")) == {"b": "2"}
        assert store.get_stats()['save_count'] == 3

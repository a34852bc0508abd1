"""Unit tests for CacheStore and request fingerprints."""

from __future__ import annotations

import json
import os
from unittest.mock import patch

import pytest

from hubkit.github.cache import CacheStore, fingerprint, url_fingerprint
from hubkit.github.core import StorageError
from hubkit.github.models import CacheEntry


class TestFingerprint:
    def test_deterministic(self):
        parts = [("url", "https://api.github.com/a"), ("accept", "json")]
        assert fingerprint(parts) == fingerprint(list(parts))

    def test_order_sensitive(self):
        assert fingerprint([("a", "1"), ("b", "2")]) != fingerprint([("b", "2"), ("a", "1")])

    def test_different_urls(self):
        assert url_fingerprint("https://api.github.com/a") != url_fingerprint(
            "https://api.github.com/b"
        )

    def test_url_fingerprint_shape(self):
        key = url_fingerprint("https://api.github.com/a")
        assert key == fingerprint([("url", "https://api.github.com/a")])
        assert len(key) == 64
        int(key, 16)


class TestCacheStoreLoad:
    def test_missing_file_is_empty(self, tmp_path):
        store = CacheStore(tmp_path / "cache")
        assert len(store) == 0
        assert not (tmp_path / "cache").exists()

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "cache"
        path.write_text("{not json")
        with pytest.raises(StorageError) as exc_info:
            CacheStore(path)
        assert exc_info.value.path == str(path)

    def test_unknown_version(self, tmp_path):
        path = tmp_path / "cache"
        path.write_text(json.dumps({"version": 99, "entries": {}}))
        with pytest.raises(StorageError, match="version"):
            CacheStore(path)

    def test_load_false_skips_file(self, tmp_path):
        path = tmp_path / "cache"
        path.write_text("garbage")
        store = CacheStore(path, load=False)
        assert len(store) == 0


class TestCacheStoreMutation:
    def test_put_persists_and_reloads(self, tmp_path):
        path = tmp_path / "cache"
        store = CacheStore(path)
        entry = CacheEntry(body="[1]", etag='"e1"', next_link="https://api.github.com/x?page=2")

        store.put("k1", entry)

        reloaded = CacheStore(path)
        assert reloaded.get("k1") == entry
        assert "k1" in reloaded

    def test_put_without_persist(self, tmp_path):
        path = tmp_path / "cache"
        store = CacheStore(path)
        store.put("k1", CacheEntry(body="[]"), persist=False)
        assert store.get("k1") is not None
        assert not path.exists()

    def test_put_replaces(self, tmp_path):
        store = CacheStore(tmp_path / "cache")
        store.put("k", CacheEntry(etag='"old"'))
        store.put("k", CacheEntry(etag='"new"'))
        assert store.get("k").etag == '"new"'
        assert len(store) == 1

    def test_remove(self, tmp_path):
        store = CacheStore(tmp_path / "cache")
        store.put("k", CacheEntry(body="x"))
        assert store.remove("k") is True
        assert store.get("k") is None

    def test_remove_missing_is_noop(self, tmp_path):
        store = CacheStore(tmp_path / "cache")
        assert store.remove("nope") is False

    def test_persist_writes_versioned_document(self, tmp_path):
        path = tmp_path / "cache"
        store = CacheStore(path)
        store.put("k", CacheEntry(body="b", etag='"e"', last_modified="lm"))

        document = json.loads(path.read_text())
        assert document["version"] == 1
        assert document["entries"]["k"]["etag"] == '"e"'
        assert document["entries"]["k"]["last_modified"] == "lm"

    def test_persist_creates_parent_directory(self, tmp_path):
        path = tmp_path / "nested" / "dir" / "cache"
        CacheStore(path).put("k", CacheEntry())
        assert path.exists()

    def test_persist_failure_raises_storage_error(self, tmp_path):
        path = tmp_path / "cache"
        store = CacheStore(path)
        with patch("hubkit.github.cache.store.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(StorageError, match="disk full"):
                store.put("k", CacheEntry())
        assert not path.exists()
        assert os.listdir(tmp_path) == []

    def test_entries_is_a_snapshot(self, tmp_path):
        store = CacheStore(tmp_path / "cache")
        store.put("k", CacheEntry(), persist=False)
        snapshot = store.entries
        snapshot.clear()
        assert len(store) == 1


class TestFromEnv:
    def test_from_env_uses_cache_file_var(self, tmp_path, monkeypatch):
        path = tmp_path / "env-cache"
        monkeypatch.setenv("GITHUB_CACHE_FILE", str(path))
        store = CacheStore.from_env()
        assert store.path == str(path)

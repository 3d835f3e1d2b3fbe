"""
Tests for FileCacheStore: file layout, metadata handling and maintenance.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path

import pytest

from viewkit.cache import CacheEntry, FileCacheStore

from tests.infrastructure import write


class TestFileLayout:

    def test_put_writes_content_and_metadata(self, tmp_path: Path):
        store = FileCacheStore(tmp_path / "cache")
        store.put("page", "<p>x</p>", 3600)

        assert (tmp_path / "cache" / "page.html").read_text(encoding="utf-8") == "<p>x</p>"
        info = json.loads((tmp_path / "cache" / "page.cache").read_text(encoding="utf-8"))
        assert info == {"expires": 3600}
        assert store.get("page") == CacheEntry(content="<p>x</p>", expires=3600)

    def test_slashes_in_key_map_to_subdirectories(self, tmp_path: Path):
        store = FileCacheStore(tmp_path)
        store.put("/blog/post/", "body", 1.5)
        assert (tmp_path / "blog" / "post.html").is_file()
        assert store.get("blog/post") == CacheEntry(content="body", expires=1.5)

    def test_overwrite_replaces_entry(self, tmp_path: Path):
        store = FileCacheStore(tmp_path)
        store.put("page", "old", 1)
        store.put("page", "new", 2)
        assert store.get("page") == CacheEntry(content="new", expires=2)
        assert not list(tmp_path.glob("*.tmp"))

    def test_missing_entry(self, tmp_path: Path):
        assert FileCacheStore(tmp_path / "nowhere").get("page") is None

    def test_content_without_metadata_is_a_miss(self, tmp_path: Path):
        write(tmp_path / "page.html", "x")
        assert FileCacheStore(tmp_path).get("page") is None

    @pytest.mark.parametrize("key", ["../escape", "a/../b", "./a"])
    def test_keys_cannot_leave_the_directory(self, tmp_path: Path, key: str):
        with pytest.raises(ValueError):
            FileCacheStore(tmp_path / "cache").put(key, "x", 1)


class TestMalformedMetadata:

    @pytest.mark.parametrize("meta", ["not json", "[]", '{"other": 1}', '{"expires": "soon"}', '{"expires": true}'])
    def test_treated_as_miss(self, tmp_path: Path, caplog: pytest.LogCaptureFixture, meta: str):
        write(tmp_path / "page.html", "stale")
        write(tmp_path / "page.cache", meta)

        with caplog.at_level(logging.WARNING, logger="viewkit.cache.store"):
            assert FileCacheStore(tmp_path).get("page") is None
        assert "page.cache" in caplog.text

    def test_undecodable_metadata_is_a_miss(self, tmp_path: Path, caplog: pytest.LogCaptureFixture):
        write(tmp_path / "page.html", "stale")
        (tmp_path / "page.cache").write_bytes(b"\xff\xfe{")

        with caplog.at_level(logging.WARNING, logger="viewkit.cache.store"):
            assert FileCacheStore(tmp_path).get("page") is None
        assert "page.cache" in caplog.text

    def test_overwritten_by_next_put(self, tmp_path: Path):
        write(tmp_path / "page.html", "stale")
        write(tmp_path / "page.cache", "garbage")
        store = FileCacheStore(tmp_path)
        store.put("page", "fresh", 5)
        assert store.get("page") == CacheEntry(content="fresh", expires=5)


class TestMaintenance:

    def test_snapshot_counts_entries_and_bytes(self, tmp_path: Path):
        store = FileCacheStore(tmp_path / "cache")
        store.put("a", "1234", 1)
        store.put("b/c", "56", 1)

        snap = store.snapshot()
        assert snap.exists
        assert snap.path == tmp_path / "cache"
        assert snap.entries == 2
        expected = sum(p.stat().st_size for p in (tmp_path / "cache").rglob("*") if p.is_file())
        assert snap.size_bytes == expected

    def test_snapshot_of_missing_directory(self, tmp_path: Path):
        snap = FileCacheStore(tmp_path / "none").snapshot()
        assert not snap.exists
        assert snap.entries == 0
        assert snap.size_bytes == 0

    def test_clear(self, tmp_path: Path):
        store = FileCacheStore(tmp_path / "cache")
        store.put("a", "x", 1)
        store.put("b/c", "y", 1)
        store.clear()

        assert store.get("a") is None
        assert (tmp_path / "cache").is_dir()
        assert store.snapshot().entries == 0

    def test_clear_keeps_foreign_files(self, tmp_path: Path):
        cache = tmp_path / "cache"
        store = FileCacheStore(cache)
        store.put("a", "x", 1)
        store.put("blog/post", "y", 1)
        write(cache / "page.html.k3j9q.tmp", "interrupted")
        write(cache / "notes.txt", "keep me")
        write(cache / "static" / "logo.html", "<svg/>")
        write(cache / "user.tmp", "mine")
        (cache / "empty").mkdir()

        store.clear()

        assert (cache / "notes.txt").read_text(encoding="utf-8") == "keep me"
        assert (cache / "static" / "logo.html").is_file()
        assert (cache / "user.tmp").is_file()
        assert (cache / "empty").is_dir()
        assert not (cache / "a.html").exists()
        assert not (cache / "a.cache").exists()
        assert not (cache / "page.html.k3j9q.tmp").exists()
        assert not (cache / "blog").exists()


class TestConcurrentWrites:

    def test_parallel_puts_of_one_key(self, tmp_path: Path):
        store = FileCacheStore(tmp_path)
        errors: list[BaseException] = []

        def writer(n: int) -> None:
            try:
                for i in range(50):
                    store.put("page", f"writer {n} round {i}", n * 100 + i)
            except BaseException as e:  # collected for the main thread
                errors.append(e)

        threads = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert errors == []
        entry = store.get("page")
        assert entry is not None
        assert entry.content.startswith("writer ")
        assert not list(tmp_path.glob("*.tmp"))

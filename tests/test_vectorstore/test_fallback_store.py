"""Tests for the JSON-file fallback store."""

import json

import pytest

from profile_rag.vectorstore.base import DocumentBatch
from profile_rag.vectorstore.fallback_store import FileFallbackStore


def _batch(*texts: str) -> DocumentBatch:
    return DocumentBatch(
        ids=[f"doc_{i}" for i in range(len(texts))],
        documents=list(texts),
        metadatas=[{"type": "post", "postIndex": i} for i in range(len(texts))],
    )


class TestFileFallbackStore:
    """Tests for FileFallbackStore."""

    def test_path_layout(self, fallback_dir):
        store = FileFallbackStore(fallback_dir)

        assert store.path_for("instagram", "jane") == fallback_dir / "instagram_jane.json"

    def test_path_cannot_escape_directory(self, fallback_dir):
        store = FileFallbackStore(fallback_dir)

        path = store.path_for("instagram", "../../etc/passwd")

        assert path.parent == fallback_dir
        assert "/" not in path.name

    @pytest.mark.asyncio
    async def test_write_then_read(self, fallback_dir):
        store = FileFallbackStore(fallback_dir)

        written = await store.write("instagram", "jane", _batch("first", "second"))
        record = await store.read("instagram", "jane")

        assert record is not None
        assert record.username == "jane"
        assert record.platform == "instagram"
        assert record.documents == ["first", "second"]
        assert record.metadatas[1] == {"type": "post", "postIndex": 1}
        assert record.ids == ["doc_0", "doc_1"]
        assert record.timestamp == written.timestamp

    @pytest.mark.asyncio
    async def test_file_format(self, fallback_dir):
        store = FileFallbackStore(fallback_dir)

        await store.write("instagram", "jane", _batch("only"))

        data = json.loads((fallback_dir / "instagram_jane.json").read_text(encoding="utf-8"))
        assert set(data) == {"username", "platform", "timestamp", "documents", "metadatas", "ids"}

    @pytest.mark.asyncio
    async def test_write_overwrites(self, fallback_dir):
        store = FileFallbackStore(fallback_dir)

        await store.write("instagram", "jane", _batch("a", "b", "c"))
        await store.write("instagram", "jane", _batch("d"))

        record = await store.read("instagram", "jane")
        assert record.documents == ["d"]
        assert list(fallback_dir.glob("*.tmp")) == []

    @pytest.mark.asyncio
    async def test_read_missing(self, fallback_dir):
        assert await FileFallbackStore(fallback_dir).read("instagram", "nobody") is None

    @pytest.mark.asyncio
    async def test_stats_missing_directory(self, fallback_dir):
        assert await FileFallbackStore(fallback_dir).stats("instagram") is None

    @pytest.mark.asyncio
    async def test_stats_per_platform(self, fallback_dir):
        store = FileFallbackStore(fallback_dir)
        await store.write("instagram", "jane", _batch("a", "b"))
        second = await store.write("instagram", "marco", _batch("c"))
        await store.write("twitter", "jane", _batch("d", "e", "f"))

        stats = await store.stats("instagram")

        assert stats.identities == 2
        assert stats.documents == 3
        assert stats.last_updated == second.timestamp

    @pytest.mark.asyncio
    async def test_stats_skips_corrupt_files(self, fallback_dir):
        store = FileFallbackStore(fallback_dir)
        await store.write("instagram", "jane", _batch("a"))
        (fallback_dir / "instagram_broken.json").write_text("{oops", encoding="utf-8")

        stats = await store.stats("instagram")

        assert stats.identities == 1
        assert stats.documents == 1

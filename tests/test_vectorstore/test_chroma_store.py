"""Tests for ChromaVectorStore with a mocked chromadb client."""

import asyncio
from unittest.mock import AsyncMock

import pytest
from chromadb.errors import NotFoundError

from profile_rag.errors import StoreUnavailable
from profile_rag.vectorstore.chroma_store import ChromaVectorStore


@pytest.fixture
def chroma_store(store_config, mock_chroma_client) -> ChromaVectorStore:
    return ChromaVectorStore(store_config, client=mock_chroma_client)


class TestCollectionName:
    """Tests for collection naming."""

    def test_platform_suffix(self, chroma_store):
        assert chroma_store.collection_name("instagram") == "instagram_profiles"

    def test_unsafe_platform(self, chroma_store):
        assert chroma_store.collection_name("x.com") == "x_com_profiles"


class TestPing:
    """Tests for the health check."""

    @pytest.mark.asyncio
    async def test_version(self, chroma_store):
        assert await chroma_store.ping() == "1.0.12"

    @pytest.mark.asyncio
    async def test_retries_once(self, chroma_store, mock_chroma_client):
        """A transient failure is retried."""
        mock_chroma_client.get_version.side_effect = [ConnectionError("reset"), "1.0.12"]

        assert await chroma_store.ping() == "1.0.12"
        assert mock_chroma_client.get_version.await_count == 2

    @pytest.mark.asyncio
    async def test_heartbeat_when_version_fails(self, chroma_store, mock_chroma_client):
        mock_chroma_client.get_version.side_effect = ConnectionError("no version endpoint")

        assert await chroma_store.ping() == "unknown"
        mock_chroma_client.heartbeat.assert_awaited()

    @pytest.mark.asyncio
    async def test_unreachable(self, chroma_store, mock_chroma_client):
        mock_chroma_client.get_version.side_effect = ConnectionError("refused")
        mock_chroma_client.heartbeat.side_effect = ConnectionError("refused")

        with pytest.raises(StoreUnavailable, match="not reachable"):
            await chroma_store.ping()

        # One attempt plus one retry per endpoint
        assert mock_chroma_client.get_version.await_count == 2
        assert mock_chroma_client.heartbeat.await_count == 2

    @pytest.mark.asyncio
    async def test_timeout(self, store_config, mock_chroma_client):
        async def hang():
            await asyncio.sleep(10)

        mock_chroma_client.get_version = AsyncMock(side_effect=hang)
        mock_chroma_client.heartbeat = AsyncMock(side_effect=hang)
        config = store_config.model_copy(update={"request_timeout_seconds": 0.01, "max_retries": 0})
        store = ChromaVectorStore(config, client=mock_chroma_client)

        with pytest.raises(StoreUnavailable):
            await store.ping()


class TestReplaceIdentity:
    """Tests for delete-then-upsert ingestion."""

    @pytest.mark.asyncio
    async def test_delete_then_upsert(self, chroma_store, mock_collection, sample_batch):
        stored = await chroma_store.replace_identity("instagram", "jane", sample_batch)

        assert stored == 2
        mock_collection.delete.assert_awaited_once_with(where={"username": "jane"})
        kwargs = mock_collection.upsert.await_args.kwargs
        assert kwargs["ids"] == sample_batch.ids
        assert kwargs["documents"] == sample_batch.documents
        assert kwargs["embeddings"] == sample_batch.embeddings

    @pytest.mark.asyncio
    async def test_creates_missing_collection(self, chroma_store, mock_chroma_client, sample_batch):
        mock_chroma_client.get_collection.side_effect = NotFoundError("Collection does not exist")

        await chroma_store.replace_identity("instagram", "jane", sample_batch)

        kwargs = mock_chroma_client.get_or_create_collection.await_args.kwargs
        assert kwargs["name"] == "instagram_profiles"
        assert kwargs["metadata"]["platform"] == "instagram"
        assert kwargs["metadata"]["hnsw:space"] == "cosine"
        # NotFoundError is not retried
        assert mock_chroma_client.get_collection.await_count == 1

    @pytest.mark.asyncio
    async def test_delete_failure_is_tolerated(self, chroma_store, mock_collection, sample_batch):
        mock_collection.delete.side_effect = ValueError("nothing to delete")

        assert await chroma_store.replace_identity("instagram", "jane", sample_batch) == 2
        mock_collection.upsert.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_upsert_failure_propagates(self, chroma_store, mock_collection, sample_batch):
        mock_collection.upsert.side_effect = RuntimeError("disk full")

        with pytest.raises(RuntimeError, match="disk full"):
            await chroma_store.replace_identity("instagram", "jane", sample_batch)
        assert mock_collection.upsert.await_count == 2


class TestQuery:
    """Tests for similarity queries."""

    @pytest.mark.asyncio
    async def test_parses_rows(self, chroma_store, mock_collection, sample_embedding):
        matches = await chroma_store.query("instagram", "jane", sample_embedding, limit=5)

        assert [m.document_id for m in matches] == ["jane_instagram_post_0", "jane_instagram_profile"]
        assert matches[0].distance == pytest.approx(0.2)
        assert matches[0].metadata["type"] == "post"
        kwargs = mock_collection.query.await_args.kwargs
        assert kwargs["where"] == {"username": "jane"}
        assert kwargs["n_results"] == 5
        assert kwargs["query_embeddings"] == [sample_embedding]

    @pytest.mark.asyncio
    async def test_missing_collection(self, chroma_store, mock_chroma_client, sample_embedding):
        mock_chroma_client.get_collection.side_effect = NotFoundError("Collection does not exist")

        assert await chroma_store.query("instagram", "jane", sample_embedding, limit=5) == []

    @pytest.mark.asyncio
    async def test_empty_result(self, chroma_store, mock_collection, sample_embedding):
        mock_collection.query.return_value = {"ids": [[]], "documents": [[]], "metadatas": [[]], "distances": [[]]}

        assert await chroma_store.query("instagram", "jane", sample_embedding, limit=5) == []


class TestCount:
    """Tests for collection counts."""

    @pytest.mark.asyncio
    async def test_count(self, chroma_store):
        assert await chroma_store.count("instagram") == 2

    @pytest.mark.asyncio
    async def test_missing_collection(self, chroma_store, mock_chroma_client):
        mock_chroma_client.get_collection.side_effect = NotFoundError("Collection does not exist")

        assert await chroma_store.count("instagram") is None

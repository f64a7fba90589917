"""Pytest fixtures for vectorstore tests."""

import math
from unittest.mock import AsyncMock, MagicMock

import pytest

from profile_rag.documents.schemas import SemanticDocument
from profile_rag.vectorstore.base import DocumentBatch


@pytest.fixture
def sample_embedding() -> list[float]:
    """Sample 384-dimensional unit vector."""
    dim = 384
    value = 1.0 / math.sqrt(dim)
    return [value] * dim


@pytest.fixture
def sample_batch(sample_embedding) -> DocumentBatch:
    """Two documents for one identity, with embeddings."""
    return DocumentBatch(
        ids=["jane_instagram_profile", "jane_instagram_post_0"],
        documents=["Profile: Jane", "Post 1 on instagram:\nContent: hello"],
        metadatas=[
            {"type": "profile", "username": "jane", "platform": "instagram", "verified": True},
            {"type": "post", "username": "jane", "platform": "instagram", "likes": 10},
        ],
        embeddings=[sample_embedding, sample_embedding],
    )


@pytest.fixture
def sample_documents(sample_embedding) -> list[SemanticDocument]:
    return [
        SemanticDocument(
            id="jane_instagram_bio",
            content="Bio Analysis for @jane on instagram:",
            metadata={"type": "bio", "username": "jane", "themes": ["Travel", "Lifestyle"]},
            embedding=sample_embedding,
        ),
        SemanticDocument(
            id="jane_instagram_post_0",
            content="Post 1 on instagram:\nContent: hello",
            metadata={"type": "post", "username": "jane", "likes": 10, "website": None},
            embedding=sample_embedding,
        ),
    ]


@pytest.fixture
def mock_collection() -> MagicMock:
    """Mock Chroma async collection."""
    collection = MagicMock()
    collection.delete = AsyncMock(return_value=None)
    collection.upsert = AsyncMock(return_value=None)
    collection.count = AsyncMock(return_value=2)
    collection.query = AsyncMock(return_value={
        "ids": [["jane_instagram_post_0", "jane_instagram_profile"]],
        "documents": [["Post 1 on instagram:\nContent: hello", "Profile: Jane"]],
        "metadatas": [[{"type": "post", "username": "jane"}, {"type": "profile", "username": "jane"}]],
        "distances": [[0.2, 0.6]],
    })
    return collection


@pytest.fixture
def mock_chroma_client(mock_collection) -> MagicMock:
    """Mock chromadb AsyncHttpClient."""
    client = MagicMock()
    client.get_version = AsyncMock(return_value="1.0.12")
    client.heartbeat = AsyncMock(return_value=1700000000)
    client.get_collection = AsyncMock(return_value=mock_collection)
    client.get_or_create_collection = AsyncMock(return_value=mock_collection)
    return client

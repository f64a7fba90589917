"""Pytest fixtures for service tests."""

import numpy as np
import pytest

from profile_rag.services.profile_rag_service import ProfileRAGService
from profile_rag.vectorstore.base import DocumentBatch, StoredMatch, VectorBackend
from profile_rag.vectorstore.manager import ProfileStore


class InMemoryVectorBackend(VectorBackend):
    """Dict-backed VectorBackend with cosine distance, for end-to-end tests."""

    def __init__(self):
        self.collections: dict[str, dict[str, tuple[str, dict, list[float]]]] = {}

    async def ping(self) -> str:
        return "in-memory"

    async def replace_identity(self, platform: str, username: str, batch: DocumentBatch) -> int:
        collection = self.collections.setdefault(platform, {})
        for doc_id in [k for k, (_, meta, _) in collection.items() if meta.get("username") == username]:
            del collection[doc_id]
        for doc_id, content, metadata, embedding in zip(
            batch.ids, batch.documents, batch.metadatas, batch.embeddings or []
        ):
            collection[doc_id] = (content, metadata, embedding)
        return len(batch)

    async def query(self, platform, username, query_embedding, limit):
        query = np.asarray(query_embedding)
        matches = []
        for doc_id, (content, metadata, embedding) in self.collections.get(platform, {}).items():
            if metadata.get("username") != username:
                continue
            vector = np.asarray(embedding)
            denom = float(np.linalg.norm(query) * np.linalg.norm(vector))
            similarity = float(query @ vector) / denom if denom else 0.0
            matches.append(StoredMatch(doc_id, content, dict(metadata), 1.0 - similarity))
        matches.sort(key=lambda m: m.distance)
        return matches[:limit]

    async def count(self, platform):
        if platform not in self.collections:
            return None
        return len(self.collections[platform])


@pytest.fixture
def memory_backend() -> InMemoryVectorBackend:
    return InMemoryVectorBackend()


@pytest.fixture
def fallback_service(unreachable_backend, store_config, metrics) -> ProfileRAGService:
    """Service whose primary backend is down."""
    store = ProfileStore(primary=unreachable_backend, config=store_config)
    return ProfileRAGService(store=store, metrics=metrics)


@pytest.fixture
def connected_service(memory_backend, store_config, metrics) -> ProfileRAGService:
    """Service backed by an in-memory vector backend."""
    store = ProfileStore(primary=memory_backend, config=store_config)
    return ProfileRAGService(store=store, metrics=metrics)

"""
Abstract base class and data models for vector store backends.

Defines the interface the primary backend implements, plus the shared
batch, match and stats structures used by ProfileStore.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class BackendMode(str, Enum):
    """Which backend ProfileStore routes to. Decided once at initialize()."""

    UNINITIALIZED = "uninitialized"
    CONNECTED = "connected"
    FALLBACK = "fallback"


@dataclass
class DocumentBatch:
    """
    Parallel arrays for one ingestion call.

    Attributes:
        ids: Document IDs
        documents: Document texts
        metadatas: Metadata dicts
        embeddings: Embedding vectors (None when the backend stores no vectors)
    """

    ids: list[str]
    documents: list[str]
    metadatas: list[dict[str, Any]]
    embeddings: list[list[float]] | None = None

    def __len__(self) -> int:
        return len(self.ids)


@dataclass
class StoredMatch:
    """
    A document returned by a similarity query.

    Attributes:
        document_id: Stored document ID
        content: Document text
        metadata: Stored (flattened) metadata
        distance: Backend distance to the query vector (lower is closer)
    """

    document_id: str
    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    distance: float = 0.0


@dataclass
class StoreStats:
    """Document count and status for one platform."""

    platform: str
    total_documents: int = 0
    status: str = "not_found"  # active, not_found, fallback, error
    last_updated: str | None = None
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "platform": self.platform,
            "totalDocuments": self.total_documents,
            "status": self.status,
            "lastUpdated": self.last_updated,
        }
        if self.error is not None:
            data["error"] = self.error
        return data


class VectorBackend(ABC):
    """
    Abstract primary vector backend.

    One collection per platform, filterable by `username` metadata.
    All methods are async to support non-blocking I/O.
    """

    @abstractmethod
    async def ping(self) -> str:
        """
        Check the backend is reachable.

        Returns:
            Backend version string

        Raises:
            StoreUnavailable: If the backend cannot be reached
        """
        ...

    @abstractmethod
    async def replace_identity(self, platform: str, username: str, batch: DocumentBatch) -> int:
        """
        Replace all documents of one identity.

        Deletes every document whose metadata username matches, then
        inserts the batch. The two steps are not transactional.

        Returns:
            Number of documents written
        """
        ...

    @abstractmethod
    async def query(
        self,
        platform: str,
        username: str,
        query_embedding: list[float],
        limit: int,
    ) -> list[StoredMatch]:
        """
        Nearest-neighbour search scoped to one identity.

        Returns:
            Up to `limit` matches ordered by distance; [] if the
            platform's collection does not exist
        """
        ...

    @abstractmethod
    async def count(self, platform: str) -> int | None:
        """Number of documents for a platform, or None if its collection does not exist."""
        ...

    async def close(self) -> None:
        """Release backend resources."""
        return None

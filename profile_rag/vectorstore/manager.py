"""
ProfileStore: the store facade over the primary backend and the file fallback.

The backend mode is decided once, at initialize(): if the primary backend
answers its version/heartbeat check the store is CONNECTED, otherwise it is
FALLBACK for the rest of the process lifetime. It is never re-evaluated
mid-session.
"""

from datetime import datetime, timezone

import structlog

from profile_rag.documents.schemas import SemanticDocument
from profile_rag.errors import ErrorKind, ProfileRAGError, Result
from profile_rag.vectorstore.base import (
    BackendMode,
    DocumentBatch,
    StoredMatch,
    StoreStats,
    VectorBackend,
)
from profile_rag.vectorstore.chroma_store import ChromaVectorStore
from profile_rag.vectorstore.config import VectorStoreConfig
from profile_rag.vectorstore.fallback_store import FallbackRecord, FileFallbackStore
from profile_rag.vectorstore.sanitize import clean_batch, validate_embeddings, validate_lengths

logger = structlog.get_logger(__name__)


class ProfileStore:
    """
    Persists and queries semantic documents per (platform, username).

    Ingestion is full-replace: the identity's previous documents are
    deleted, then the new set is inserted. In fallback mode the identity's
    JSON file is overwritten instead and no vectors are kept.

    Usage:
        store = ProfileStore()
        connected = await store.initialize()
        result = await store.ingest("instagram", "jane", documents)
        if not result.ok:
            print(result.error, result.message)
    """

    def __init__(
        self,
        primary: VectorBackend | None = None,
        fallback: FileFallbackStore | None = None,
        config: VectorStoreConfig | None = None,
    ):
        """
        Initialize the store.

        Args:
            primary: Primary vector backend (default: ChromaVectorStore)
            fallback: File fallback store (default: under config.fallback_dir)
            config: Optional configuration
        """
        self._config = config or VectorStoreConfig()
        self._primary = primary or ChromaVectorStore(self._config)
        self._fallback = fallback or FileFallbackStore(self._config.fallback_dir)
        self._mode = BackendMode.UNINITIALIZED

    @property
    def mode(self) -> BackendMode:
        return self._mode

    @property
    def is_connected(self) -> bool:
        return self._mode == BackendMode.CONNECTED

    @property
    def fallback(self) -> FileFallbackStore:
        return self._fallback

    async def initialize(self) -> bool:
        """
        Probe the primary backend once and fix the backend mode.

        Returns:
            True if connected to the primary backend, False if in fallback mode
        """
        try:
            version = await self._primary.ping()
        except Exception as e:
            self._mode = BackendMode.FALLBACK
            logger.warning(
                "Primary vector backend not available, using file fallback",
                error=str(e),
                fallback_dir=str(self._fallback.directory),
            )
            return False

        self._mode = BackendMode.CONNECTED
        logger.info("Primary vector backend connected", version=version)
        return True

    async def ingest(
        self,
        platform: str,
        username: str,
        documents: list[SemanticDocument],
    ) -> Result[int]:
        """
        Store an identity's documents, replacing any previous set.

        Args:
            platform: Platform tag
            username: Identity
            documents: Synthesized documents (embedded, in connected mode)

        Returns:
            Result with the number of documents stored
        """
        batch = DocumentBatch(
            ids=[doc.id for doc in documents],
            documents=[doc.content for doc in documents],
            metadatas=[doc.metadata for doc in documents],
            embeddings=[doc.embedding for doc in documents] if self.is_connected else None,
        )
        return await self.ingest_batch(platform, username, batch)

    async def ingest_batch(self, platform: str, username: str, batch: DocumentBatch) -> Result[int]:
        """
        Validate, clean and persist a batch.

        Steps: length check, embedding check (connected mode), ID
        sanitizing and metadata flattening, delete prior identity
        documents, insert.
        """
        if self._mode == BackendMode.UNINITIALIZED:
            return Result.failure(ErrorKind.STORE_UNAVAILABLE, "Store is not initialized")

        try:
            validate_lengths(batch)
            if self.is_connected:
                validate_embeddings(batch.embeddings or [])

            cleaned = clean_batch(batch)

            if self.is_connected:
                stored = await self._primary.replace_identity(platform, username, cleaned)
            else:
                record = await self._fallback.write(platform, username, cleaned)
                stored = len(record.documents)

        except ProfileRAGError as e:
            logger.error(
                "Rejected ingestion",
                platform=platform,
                username=username,
                error_type=e.kind.value,
                error=str(e),
            )
            return Result.from_exception(e)
        except Exception as e:
            logger.error(
                "Failed to store documents",
                platform=platform,
                username=username,
                error=str(e),
            )
            return Result.failure(ErrorKind.STORE_ERROR, str(e))

        return Result.success(stored)

    async def query(
        self,
        platform: str,
        username: str,
        query_embedding: list[float],
        limit: int,
    ) -> list[StoredMatch]:
        """
        Similarity query against the primary backend.

        Fallback mode has no query primitive; token-overlap search over
        the fallback file lives in RetrievalEngine.

        Raises:
            RuntimeError: If the store is not connected
        """
        if not self.is_connected:
            raise RuntimeError(f"Similarity query requires a connected store (mode={self._mode.value})")
        return await self._primary.query(platform, username, query_embedding, limit)

    async def load_fallback(self, platform: str, username: str) -> FallbackRecord | None:
        """Read the identity's fallback file, or None if absent."""
        return await self._fallback.read(platform, username)

    async def get_stats(self, platform: str) -> StoreStats:
        """
        Document count and status for a platform.

        Status is `active` (connected, collection exists), `not_found`
        (no collection / no fallback data), `fallback` (file fallback) or
        `error` (backend call failed).
        """
        try:
            if self.is_connected:
                count = await self._primary.count(platform)
                if count is None:
                    return StoreStats(platform=platform, status="not_found")
                return StoreStats(
                    platform=platform,
                    total_documents=count,
                    status="active",
                    last_updated=datetime.now(timezone.utc).isoformat(),
                )

            if self._mode == BackendMode.FALLBACK:
                stats = await self._fallback.stats(platform)
                if stats is None:
                    return StoreStats(platform=platform, status="not_found")
                return StoreStats(
                    platform=platform,
                    total_documents=stats.documents,
                    status="fallback",
                    last_updated=stats.last_updated,
                )

            return StoreStats(platform=platform, status="error", error="Store is not initialized")

        except Exception as e:
            logger.error("Failed to get stats", platform=platform, error=str(e))
            return StoreStats(platform=platform, status="error", error=str(e))

    async def close(self) -> None:
        await self._primary.close()
        logger.info("Profile store closed")

"""
Chroma implementation of the VectorBackend interface.

Talks to a Chroma server through chromadb's async HTTP client. One
collection per platform ({platform}_profiles) holds the documents of every
identity on that platform, filterable by the `username` metadata key.

Every network call is bounded by a timeout and retried once
(VECTORSTORE_REQUEST_TIMEOUT_SECONDS / VECTORSTORE_MAX_RETRIES).
"""

import asyncio
import re
from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from typing import Any, TypeVar

import chromadb
import structlog
from chromadb.errors import NotFoundError

from profile_rag.errors import StoreUnavailable
from profile_rag.vectorstore.base import DocumentBatch, StoredMatch, VectorBackend
from profile_rag.vectorstore.config import VectorStoreConfig

logger = structlog.get_logger(__name__)

T = TypeVar("T")

_INVALID_COLLECTION_CHARS = re.compile(r"[^A-Za-z0-9_-]")


class ChromaVectorStore(VectorBackend):
    """
    Chroma-backed primary store.

    Usage:
        store = ChromaVectorStore()
        version = await store.ping()
        await store.replace_identity("instagram", "jane", batch)
        matches = await store.query("instagram", "jane", query_vector, limit=5)
    """

    def __init__(
        self,
        config: VectorStoreConfig | None = None,
        client: Any | None = None,
    ):
        """
        Initialize the Chroma store.

        The HTTP client is created on first use unless one is injected.

        Args:
            config: Optional configuration
            client: Pre-built chromadb async client (tests inject a mock)
        """
        self._config = config or VectorStoreConfig()
        self._client = client

    def collection_name(self, platform: str) -> str:
        safe_platform = _INVALID_COLLECTION_CHARS.sub("_", platform) or "default"
        return f"{safe_platform}{self._config.collection_suffix}"

    async def _call(self, operation: str, factory: Callable[[], Awaitable[T]]) -> T:
        """
        Run one backend call with a timeout and bounded retries.

        NotFoundError is never retried: a missing collection will not
        appear on the second attempt.
        """
        attempts = self._config.max_retries + 1
        last_error: Exception | None = None

        for attempt in range(1, attempts + 1):
            try:
                return await asyncio.wait_for(
                    factory(),
                    timeout=self._config.request_timeout_seconds,
                )
            except NotFoundError:
                raise
            except Exception as e:
                last_error = e
                if attempt < attempts:
                    logger.warning(
                        "Chroma call failed, retrying",
                        operation=operation,
                        attempt=attempt,
                        error=str(e) or type(e).__name__,
                    )
                    await asyncio.sleep(self._config.retry_delay_seconds)

        assert last_error is not None
        raise last_error

    async def _get_client(self) -> Any:
        if self._client is None:
            self._client = await self._call(
                "connect",
                lambda: chromadb.AsyncHttpClient(
                    host=self._config.chroma_host,
                    port=self._config.chroma_port,
                    ssl=self._config.chroma_ssl,
                ),
            )
        return self._client

    async def ping(self) -> str:
        """
        Check the server is reachable.

        Uses the version endpoint and falls back to the heartbeat for
        servers that do not expose it.

        Raises:
            StoreUnavailable: If neither call succeeds
        """
        try:
            client = await self._get_client()
            try:
                version = await self._call("version", client.get_version)
            except Exception:
                await self._call("heartbeat", client.heartbeat)
                version = "unknown"
        except Exception as e:
            raise StoreUnavailable(
                f"Chroma server at {self._config.chroma_host}:{self._config.chroma_port} "
                f"is not reachable: {e}"
            ) from e

        logger.info("Connected to Chroma", version=version)
        return str(version)

    async def _get_collection(self, platform: str) -> Any:
        client = await self._get_client()
        name = self.collection_name(platform)
        return await self._call(
            "get_collection",
            lambda: client.get_collection(name=name, embedding_function=None),
        )

    async def _get_or_create_collection(self, platform: str) -> Any:
        try:
            return await self._get_collection(platform)
        except NotFoundError:
            pass

        client = await self._get_client()
        name = self.collection_name(platform)
        logger.info("Creating collection", collection=name)
        return await self._call(
            "create_collection",
            lambda: client.get_or_create_collection(
                name=name,
                metadata={
                    "platform": platform,
                    "created": datetime.now(timezone.utc).isoformat(),
                    "hnsw:space": self._config.distance_space,
                },
                embedding_function=None,
            ),
        )

    async def replace_identity(self, platform: str, username: str, batch: DocumentBatch) -> int:
        """
        Delete the identity's documents, then upsert the batch.

        Args:
            platform: Platform (selects the collection)
            username: Identity whose documents are replaced
            batch: Validated, cleaned batch with embeddings

        Returns:
            Number of documents written
        """
        collection = await self._get_or_create_collection(platform)

        try:
            await self._call("delete", lambda: collection.delete(where={"username": username}))
        except Exception as e:
            # Nothing stored yet for this identity
            logger.debug("No prior documents deleted", username=username, error=str(e))

        await self._call(
            "upsert",
            lambda: collection.upsert(
                ids=batch.ids,
                embeddings=batch.embeddings,
                documents=batch.documents,
                metadatas=batch.metadatas,
            ),
        )

        logger.info(
            "Stored documents in Chroma",
            collection=self.collection_name(platform),
            username=username,
            documents=len(batch),
        )
        return len(batch)

    async def query(
        self,
        platform: str,
        username: str,
        query_embedding: list[float],
        limit: int,
    ) -> list[StoredMatch]:
        try:
            collection = await self._get_collection(platform)
        except NotFoundError:
            logger.info("Collection not found", collection=self.collection_name(platform))
            return []

        result = await self._call(
            "query",
            lambda: collection.query(
                query_embeddings=[query_embedding],
                n_results=limit,
                where={"username": username},
                include=["documents", "metadatas", "distances"],
            ),
        )

        ids = _first_row(result.get("ids"))
        documents = _first_row(result.get("documents"))
        metadatas = _first_row(result.get("metadatas"))
        distances = _first_row(result.get("distances"))

        matches = []
        for i, content in enumerate(documents):
            matches.append(
                StoredMatch(
                    document_id=ids[i] if i < len(ids) else "",
                    content=content or "",
                    metadata=dict(metadatas[i] or {}) if i < len(metadatas) else {},
                    distance=float(distances[i]) if i < len(distances) else 1.0,
                )
            )
        return matches

    async def count(self, platform: str) -> int | None:
        try:
            collection = await self._get_collection(platform)
        except NotFoundError:
            return None
        return int(await self._call("count", collection.count))

    async def close(self) -> None:
        self._client = None


def _first_row(rows: Any) -> list[Any]:
    """Chroma returns one row per query embedding; we always send one."""
    if not rows:
        return []
    return list(rows[0] or [])

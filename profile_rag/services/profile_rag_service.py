"""
Profile RAG service - the public entry point of the subsystem.

Wires normalization, document synthesis, embedding, storage, retrieval
and context assembly behind one explicitly constructed object with an
explicit lifecycle:

    async with ProfileRAGService() as service:
        await service.store_profile_data("jane", "instagram", export)
        context = await service.create_enhanced_context("what works best?", "jane", "instagram")

Internal steps return Results; the public methods collapse failures to
False / None / [] and never raise for data or backend problems.
"""

import time
from typing import Any

import structlog

from profile_rag.context.assembler import ContextAssembler
from profile_rag.context.config import ContextConfig
from profile_rag.documents.synthesizer import DocumentSynthesizer
from profile_rag.embedding import create_embedding_provider
from profile_rag.embedding.base import EmbeddingProvider
from profile_rag.errors import ErrorKind, Result
from profile_rag.ingestion.normalizer import DataNormalizer
from profile_rag.observability.logging import identity_context
from profile_rag.observability.metrics import MetricsCollector, get_metrics
from profile_rag.retrieval.config import RelevanceWeights
from profile_rag.retrieval.engine import RetrievalEngine
from profile_rag.retrieval.schemas import RetrievalResult
from profile_rag.vectorstore.manager import ProfileStore

logger = structlog.get_logger(__name__)


class ProfileRAGService:
    """
    Ingests social-media profile exports and serves retrieval and context.

    All collaborators are injectable; defaults are built from env settings.
    Call initialize() once before use (or use `async with`).
    """

    def __init__(
        self,
        store: ProfileStore | None = None,
        embedder: EmbeddingProvider | None = None,
        normalizer: DataNormalizer | None = None,
        synthesizer: DocumentSynthesizer | None = None,
        weights: RelevanceWeights | None = None,
        context_config: ContextConfig | None = None,
        metrics: MetricsCollector | None = None,
    ):
        """
        Initialize the service.

        Args:
            store: Document store (default: Chroma primary + file fallback)
            embedder: Embedding provider (default from EMBEDDING_ settings)
            normalizer: Export normalizer
            synthesizer: Document synthesizer
            weights: Relevance weights for the retrieval engine
            context_config: Context assembly settings
            metrics: Metrics collector (default: global collector)
        """
        self._metrics = metrics or get_metrics()
        self._store = store or ProfileStore()
        self._embedder = embedder or create_embedding_provider()
        self._normalizer = normalizer or DataNormalizer()
        self._synthesizer = synthesizer or DocumentSynthesizer()
        self._engine = RetrievalEngine(self._store, self._embedder, weights, self._metrics)
        self._assembler = ContextAssembler(self._engine, context_config, self._metrics)
        self._initialized = False

    @property
    def store(self) -> ProfileStore:
        return self._store

    @property
    def engine(self) -> RetrievalEngine:
        return self._engine

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    async def __aenter__(self) -> "ProfileRAGService":
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.shutdown()

    async def initialize(self) -> bool:
        """
        Probe the primary backend and fix the backend mode.

        Returns:
            True if connected to the primary backend, False if running on
            the file fallback. The service is usable either way.
        """
        connected = await self._store.initialize()
        self._metrics.set_backend_connected(connected)
        self._initialized = True
        logger.info(
            "Profile RAG service initialized",
            mode=self._store.mode.value,
            embedding_dimension=self._embedder.dimension,
        )
        return connected

    async def shutdown(self) -> None:
        """Release backend and embedder resources."""
        await self._store.close()
        await self._embedder.close()
        self._initialized = False
        logger.info("Profile RAG service shut down")

    async def store_profile_data(self, username: str, platform: str, raw_export: Any) -> bool:
        """
        Normalize, synthesize, embed and store one identity's export.

        Replaces any previously stored documents for (platform, username).

        Args:
            username: Identity to store under
            platform: Platform tag
            raw_export: Parsed JSON export, or its JSON text

        Returns:
            True if at least one document was stored
        """
        with identity_context(username, platform):
            start = time.perf_counter()
            result = await self._ingest(username, platform, raw_export)

            if not result.ok:
                error_type = result.error.value if result.error else ErrorKind.STORE_ERROR.value
                self._metrics.record_ingestion_failure(platform, error_type)
                logger.error("Failed to store profile data", error_type=error_type, error=result.message)
                return False

            self._metrics.record_ingestion(
                platform,
                result.value or 0,
                mode=self._store.mode.value,
                latency=time.perf_counter() - start,
            )
            logger.info("Stored profile data", documents=result.value, mode=self._store.mode.value)
            return True

    async def _ingest(self, username: str, platform: str, raw_export: Any) -> Result[int]:
        normalized = self._normalizer.try_normalize(raw_export, platform)
        if not normalized.ok or normalized.value is None:
            return Result.failure(normalized.error or ErrorKind.NORMALIZATION, normalized.message)

        documents = self._synthesizer.synthesize(normalized.value, platform, username)
        if not documents:
            return Result.failure(ErrorKind.NO_DOCUMENTS, "No documents could be built from the export")

        if self._store.is_connected:
            try:
                embeddings = await self._embedder.embed_documents([doc.content for doc in documents])
            except Exception as e:
                return Result.failure(ErrorKind.INVALID_EMBEDDING, f"Embedding failed: {e}")
            for doc, embedding in zip(documents, embeddings):
                doc.embedding = embedding

        return await self._store.ingest(platform, username, documents)

    async def semantic_search(
        self,
        query: str,
        username: str,
        platform: str,
        limit: int = 5,
    ) -> list[RetrievalResult]:
        """Ranked search over one identity's documents; [] when nothing matches."""
        with identity_context(username, platform):
            try:
                return await self._engine.semantic_search(query, username, platform, limit)
            except Exception as e:
                logger.error("Search failed", error=str(e))
                return []

    async def create_enhanced_context(self, query: str, username: str, platform: str) -> str | None:
        """LLM context text for the identity, or None when nothing is stored."""
        with identity_context(username, platform):
            return await self._assembler.create_enhanced_context(query, username, platform)

    async def get_stats(self, platform: str) -> dict[str, Any]:
        """
        Stored document count and backend status for a platform.

        Returns:
            {"platform", "totalDocuments", "status", "lastUpdated"[, "error"]}
        """
        stats = await self._store.get_stats(platform)
        return stats.to_dict()

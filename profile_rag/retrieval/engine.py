"""
Retrieval engine: similarity search with heuristic re-ranking.

Connected mode embeds the query, asks the store for the nearest documents
of one identity, converts distances to similarities and re-ranks by a
keyword/metadata relevance score. Fallback mode (or any failure of the
primary search) scores the identity's fallback file by token overlap.
Searches never raise; the worst case is an empty list.
"""

import time
from typing import Any

import structlog

from profile_rag.embedding.base import EmbeddingProvider
from profile_rag.errors import SearchFailure
from profile_rag.observability.metrics import MetricsCollector, get_metrics
from profile_rag.retrieval.config import RelevanceWeights
from profile_rag.retrieval.schemas import RetrievalResult
from profile_rag.vectorstore.manager import ProfileStore

logger = structlog.get_logger(__name__)

# Query keyword that earns the type bonus, per document type
TYPE_KEYWORDS: dict[str, str] = {
    "profile": "profile",
    "post": "post",
    "engagement": "engagement",
    "bio": "bio",
}


class RetrievalEngine:
    """
    Searches one identity's documents and ranks them.

    Usage:
        engine = RetrievalEngine(store, embedder)
        results = await engine.semantic_search("best travel posts", "jane", "instagram", limit=5)
        for r in results:
            print(r.relevance, r.metadata["type"])
    """

    def __init__(
        self,
        store: ProfileStore,
        embedder: EmbeddingProvider,
        weights: RelevanceWeights | None = None,
        metrics: MetricsCollector | None = None,
    ):
        """
        Initialize the engine.

        Args:
            store: Initialized ProfileStore
            embedder: Provider used to embed queries
            weights: Relevance weights (default from RETRIEVAL_ env)
            metrics: Metrics collector (default: global collector)
        """
        self._store = store
        self._embedder = embedder
        self._weights = weights or RelevanceWeights()
        self._metrics = metrics or get_metrics()

    @property
    def weights(self) -> RelevanceWeights:
        return self._weights

    async def semantic_search(
        self,
        query: str,
        username: str,
        platform: str,
        limit: int | None = None,
    ) -> list[RetrievalResult]:
        """
        Search an identity's documents.

        Args:
            query: Free-text query
            username: Identity to search
            platform: Platform of the identity
            limit: Maximum results (default from weights.default_limit)

        Returns:
            Results sorted by relevance (descending); [] when nothing matches
        """
        if limit is None:
            limit = self._weights.default_limit
        if limit <= 0:
            return []

        if not self._store.is_connected:
            return await self.fallback_search(query, username, platform, limit)

        start = time.perf_counter()
        try:
            results = await self._primary_search(query, username, platform, limit)
        except Exception as e:
            failure = SearchFailure(f"Primary search failed: {e}")
            logger.error(
                "Semantic search failed, using fallback search",
                platform=platform,
                username=username,
                error_type=failure.kind.value,
                error=str(e),
            )
            self._metrics.record_search_failure(platform)
            return await self.fallback_search(query, username, platform, limit)

        self._metrics.record_search(platform, mode="connected", latency=time.perf_counter() - start)
        logger.info(
            "Semantic search complete",
            platform=platform,
            username=username,
            results=len(results),
        )
        return results

    async def _primary_search(
        self,
        query: str,
        username: str,
        platform: str,
        limit: int,
    ) -> list[RetrievalResult]:
        query_embedding = await self._embedder.embed_query(query)
        matches = await self._store.query(platform, username, query_embedding, limit)

        results = [
            RetrievalResult(
                content=match.content,
                metadata=match.metadata,
                similarity=_clamp(1.0 - match.distance),
                relevance=self.calculate_relevance(query, match.content, match.metadata),
            )
            for match in matches
        ]
        results.sort(key=lambda r: r.relevance, reverse=True)
        return results

    async def fallback_search(
        self,
        query: str,
        username: str,
        platform: str,
        limit: int | None = None,
    ) -> list[RetrievalResult]:
        """
        Token-overlap search over the identity's fallback file.

        Relevance is the share of query words found in the document (see
        calculate_text_relevance); results at or below
        fallback_min_relevance are dropped.

        Returns:
            Up to `limit` results sorted by relevance; [] when no file exists
        """
        if limit is None:
            limit = self._weights.default_limit
        if limit <= 0:
            return []

        start = time.perf_counter()

        try:
            record = await self._store.load_fallback(platform, username)
            if record is None:
                logger.info("No fallback data found", platform=platform, username=username)
                return []

            query_lower = query.lower()
            results = []
            for i, document in enumerate(record.documents):
                metadata = record.metadatas[i] if i < len(record.metadatas) else {}
                relevance = self.calculate_text_relevance(query_lower, document.lower())
                if relevance > self._weights.fallback_min_relevance:
                    results.append(
                        RetrievalResult(
                            content=document,
                            metadata=metadata,
                            similarity=relevance,
                            relevance=relevance,
                        )
                    )
        except Exception as e:
            logger.error(
                "Fallback search failed",
                platform=platform,
                username=username,
                error=str(e),
            )
            return []

        results.sort(key=lambda r: r.relevance, reverse=True)
        self._metrics.record_search(platform, mode="fallback", latency=time.perf_counter() - start)
        return results[:limit]

    def calculate_relevance(self, query: str, document: str, metadata: dict[str, Any]) -> float:
        """
        Heuristic relevance of a document to a query.

        Score components (capped at max_relevance):
        - keyword_match_bonus per query word present in the document's word list
        - type_match_bonus when the query names the document's type
        - high_engagement_bonus when totalEngagement > high_engagement_threshold
        - verified_bonus / business_bonus for the account flags
        """
        w = self._weights
        query_lower = query.lower()
        doc_words = set(document.lower().split())

        score = 0.0
        for word in query_lower.split():
            if word in doc_words:
                score += w.keyword_match_bonus

        keyword = TYPE_KEYWORDS.get(str(metadata.get("type", "")))
        if keyword and keyword in query_lower:
            score += w.type_match_bonus

        if _as_number(metadata.get("totalEngagement")) > w.high_engagement_threshold:
            score += w.high_engagement_bonus
        if _is_true(metadata.get("verified")):
            score += w.verified_bonus
        if _is_true(metadata.get("businessAccount")):
            score += w.business_bonus

        return min(score, w.max_relevance)

    @staticmethod
    def calculate_text_relevance(query: str, document: str) -> float:
        """
        Share of query words matched by some document word.

        A query word matches when a document word contains it or is
        contained in it. Callers lowercase both texts.

        Returns:
            matches / query words, 0.0 for an empty query
        """
        query_words = query.split()
        if not query_words:
            return 0.0

        doc_words = document.split()
        matches = sum(
            1 for word in query_words
            if any(word in doc_word or doc_word in word for doc_word in doc_words)
        )
        return matches / len(query_words)


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def _as_number(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _is_true(value: Any) -> bool:
    if isinstance(value, str):
        return value.strip().lower() in ("true", "yes", "1")
    return bool(value)

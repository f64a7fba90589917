"""
Prometheus metrics for monitoring the profile RAG pipeline.

Defines and exposes metrics for:
- Profile ingestion (documents stored, failures by error kind)
- Search volume and latency per backend mode
- Context assembly
- Backend mode (connected vs fallback)

Metrics are exposed via HTTP endpoint for Prometheus scraping.
"""

from prometheus_client import (
    REGISTRY,
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    start_http_server,
)
import structlog

from profile_rag.config.settings import get_settings

logger = structlog.get_logger(__name__)

# Buckets for latency histograms (in seconds)
LATENCY_BUCKETS = (0.005, 0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0)


class MetricsCollector:
    """
    Prometheus metrics collector for the profile RAG pipeline.

    Usage:
        metrics = get_metrics()
        metrics.start_server()

        metrics.record_ingestion("instagram", count=12)
        metrics.record_search("instagram", mode="connected", latency=0.04)
    """

    def __init__(self, registry: CollectorRegistry | None = None):
        """
        Initialize Prometheus metrics.

        Args:
            registry: Registry to register metrics on (default: global REGISTRY)
        """
        self._registry = registry or REGISTRY

        self.documents_ingested = Counter(
            "profile_rag_documents_ingested_total",
            "Total semantic documents stored",
            ["platform", "mode"],
            registry=self._registry,
        )

        self.ingestion_failures = Counter(
            "profile_rag_ingestion_failures_total",
            "Total failed profile ingestions",
            ["platform", "error_type"],
            registry=self._registry,
        )

        self.ingestion_latency = Histogram(
            "profile_rag_ingestion_latency_seconds",
            "Time to normalize, embed and store a profile export",
            ["platform"],
            buckets=LATENCY_BUCKETS,
            registry=self._registry,
        )

        self.searches = Counter(
            "profile_rag_searches_total",
            "Total retrieval searches",
            ["platform", "mode"],  # mode: connected, fallback
            registry=self._registry,
        )

        self.search_latency = Histogram(
            "profile_rag_search_latency_seconds",
            "Time to run a retrieval search",
            ["mode"],
            buckets=LATENCY_BUCKETS,
            registry=self._registry,
        )

        self.search_failures = Counter(
            "profile_rag_search_failures_total",
            "Primary searches that degraded to fallback search",
            ["platform"],
            registry=self._registry,
        )

        self.contexts_built = Counter(
            "profile_rag_contexts_built_total",
            "Enhanced contexts assembled",
            ["platform", "status"],  # status: built, empty, error
            registry=self._registry,
        )

        self.backend_connected = Gauge(
            "profile_rag_backend_connected",
            "Primary vector backend status (1=connected, 0=fallback)",
            registry=self._registry,
        )

    def start_server(self, port: int | None = None) -> None:
        """
        Start Prometheus metrics HTTP server.

        Args:
            port: Port to expose metrics on (default from settings)
        """
        settings = get_settings()
        port = port or settings.metrics_port

        start_http_server(port, registry=self._registry)
        logger.info("Prometheus metrics server started", port=port)

    # Convenience methods

    def record_ingestion(
        self,
        platform: str,
        count: int,
        mode: str = "connected",
        latency: float | None = None,
    ) -> None:
        """
        Record a successful profile ingestion.

        Args:
            platform: Source platform
            count: Number of documents stored
            mode: Backend mode the documents went to
            latency: Optional end-to-end ingestion latency in seconds
        """
        self.documents_ingested.labels(platform=platform, mode=mode).inc(count)
        if latency is not None:
            self.ingestion_latency.labels(platform=platform).observe(latency)

    def record_ingestion_failure(self, platform: str, error_type: str) -> None:
        self.ingestion_failures.labels(platform=platform, error_type=error_type).inc()

    def record_search(self, platform: str, mode: str, latency: float | None = None) -> None:
        """
        Record a retrieval search.

        Args:
            platform: Platform searched
            mode: connected or fallback
            latency: Optional search latency in seconds
        """
        self.searches.labels(platform=platform, mode=mode).inc()
        if latency is not None:
            self.search_latency.labels(mode=mode).observe(latency)

    def record_search_failure(self, platform: str) -> None:
        self.search_failures.labels(platform=platform).inc()

    def record_context(self, platform: str, status: str) -> None:
        self.contexts_built.labels(platform=platform, status=status).inc()

    def set_backend_connected(self, connected: bool) -> None:
        self.backend_connected.set(1 if connected else 0)


_metrics: MetricsCollector | None = None


def get_metrics() -> MetricsCollector:
    """Get global metrics collector instance."""
    global _metrics
    if _metrics is None:
        _metrics = MetricsCollector()
    return _metrics

"""Tests for Prometheus metrics and logging setup."""

import json
import logging

import structlog

from profile_rag.config.settings import Settings
from profile_rag.observability.logging import identity_context, setup_logging
from profile_rag.observability.metrics import MetricsCollector, get_metrics


class TestMetricsCollector:
    """Tests for MetricsCollector convenience methods."""

    def test_record_ingestion(self, metrics, metrics_registry):
        metrics.record_ingestion("instagram", 5, mode="fallback", latency=0.2)

        assert metrics_registry.get_sample_value(
            "profile_rag_documents_ingested_total", {"platform": "instagram", "mode": "fallback"}
        ) == 5.0
        assert metrics_registry.get_sample_value(
            "profile_rag_ingestion_latency_seconds_count", {"platform": "instagram"}
        ) == 1.0

    def test_record_ingestion_failure(self, metrics, metrics_registry):
        metrics.record_ingestion_failure("twitter", "no_documents")
        metrics.record_ingestion_failure("twitter", "no_documents")

        assert metrics_registry.get_sample_value(
            "profile_rag_ingestion_failures_total", {"platform": "twitter", "error_type": "no_documents"}
        ) == 2.0

    def test_record_search(self, metrics, metrics_registry):
        metrics.record_search("twitter", mode="connected", latency=0.01)

        assert metrics_registry.get_sample_value(
            "profile_rag_searches_total", {"platform": "twitter", "mode": "connected"}
        ) == 1.0
        assert metrics_registry.get_sample_value(
            "profile_rag_search_latency_seconds_count", {"mode": "connected"}
        ) == 1.0

    def test_record_context(self, metrics, metrics_registry):
        metrics.record_context("twitter", "built")

        assert metrics_registry.get_sample_value(
            "profile_rag_contexts_built_total", {"platform": "twitter", "status": "built"}
        ) == 1.0

    def test_backend_gauge(self, metrics, metrics_registry):
        metrics.set_backend_connected(True)
        assert metrics_registry.get_sample_value("profile_rag_backend_connected") == 1.0

        metrics.set_backend_connected(False)
        assert metrics_registry.get_sample_value("profile_rag_backend_connected") == 0.0

    def test_global_collector(self):
        assert isinstance(get_metrics(), MetricsCollector)
        assert get_metrics() is get_metrics()


class TestLogging:
    """Tests for structlog configuration."""

    def test_json_lines_carry_identity(self, caplog):
        caplog.set_level(logging.INFO)
        setup_logging(Settings(log_format="json", _env_file=None))

        with identity_context("jane", "instagram"):
            structlog.get_logger("profile_rag.test").info("Stored profile data", documents=5)

        line = json.loads(caplog.records[-1].getMessage())
        assert line["event"] == "Stored profile data"
        assert line["username"] == "jane"
        assert line["platform"] == "instagram"
        assert line["documents"] == 5

    def test_quiet_loggers(self):
        setup_logging(Settings(_env_file=None))

        assert logging.getLogger("chromadb").level == logging.WARNING
        assert logging.getLogger("httpx").level == logging.WARNING

    def test_identity_context_is_scoped(self):
        with identity_context("jane", "twitter"):
            assert structlog.contextvars.get_contextvars() == {"username": "jane", "platform": "twitter"}

        assert structlog.contextvars.get_contextvars() == {}

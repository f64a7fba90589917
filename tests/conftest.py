"""Pytest fixtures for profile-rag tests."""

from pathlib import Path
from unittest.mock import AsyncMock

import pytest
from prometheus_client import CollectorRegistry

from profile_rag.errors import StoreUnavailable
from profile_rag.observability.metrics import MetricsCollector
from profile_rag.vectorstore.base import VectorBackend
from profile_rag.vectorstore.config import VectorStoreConfig


@pytest.fixture
def metrics_registry() -> CollectorRegistry:
    """Private Prometheus registry so tests never collide on the global one."""
    return CollectorRegistry()


@pytest.fixture
def metrics(metrics_registry: CollectorRegistry) -> MetricsCollector:
    return MetricsCollector(registry=metrics_registry)


@pytest.fixture
def fallback_dir(tmp_path: Path) -> Path:
    return tmp_path / "vector_fallback"


@pytest.fixture
def store_config(fallback_dir: Path) -> VectorStoreConfig:
    """Vector store config with a temp fallback directory and no retry delay."""
    return VectorStoreConfig(
        fallback_dir=str(fallback_dir),
        request_timeout_seconds=1.0,
        max_retries=1,
        retry_delay_seconds=0.0,
    )


@pytest.fixture
def unreachable_backend() -> AsyncMock:
    """Primary backend whose health check always fails."""
    backend = AsyncMock(spec=VectorBackend)
    backend.ping.side_effect = StoreUnavailable("Chroma server at localhost:8000 is not reachable")
    return backend


@pytest.fixture
def twitter_export() -> list[dict]:
    """Twitter/X scraper export: tweets carrying an author object."""
    author = {
        "userName": "jane",
        "name": "Jane Doe",
        "description": "Travel photographer and creative founder. I love to explore and share tips!",
        "followers": 1000,
        "following": 180,
        "statusesCount": 420,
        "isBlueVerified": True,
    }
    return [
        {
            "text": "Post A morning coffee in Lisbon #travel @bob",
            "like_count": 10,
            "reply_count": 5,
            "retweetCount": 2,
            "created_at": "2024-05-01T08:00:00Z",
            "author": author,
        },
        {
            "text": "Post B sunset from the mountains",
            "like_count": 120,
            "reply_count": 30,
            "retweetCount": 12,
            "created_at": "2024-05-02T19:30:00Z",
            "author": author,
        },
    ]


@pytest.fixture
def instagram_export() -> list[dict]:
    """Instagram profile scraper export: a list with one profile carrying latestPosts."""
    return [
        {
            "username": "chef.marco",
            "fullName": "Marco Rossi",
            "biography": "Chef and restaurant founder. Sharing recipe tips with our community.",
            "followersCount": 25000,
            "followsCount": 310,
            "postsCount": 87,
            "verified": False,
            "isBusinessAccount": True,
            "businessCategoryName": "Restaurant",
            "externalUrls": [{"url": "https://marco.example.com"}],
            "latestPosts": [
                {
                    "caption": "Fresh pasta night",
                    "likesCount": 900,
                    "commentsCount": 45,
                    "hashtags": ["Pasta", "#food"],
                    "mentions": ["Nonna"],
                    "timestamp": "2024-04-10T18:00:00Z",
                },
                {
                    "caption": "Tiramisu recipe in bio",
                    "likesCount": 1500,
                    "commentsCount": 120,
                    "hashtags": [],
                    "mentions": [],
                    "timestamp": "2024-04-12T18:00:00Z",
                },
            ],
        }
    ]


@pytest.fixture
def direct_profile_export() -> dict:
    """A single profile object with no posts."""
    return {
        "username": "techsam",
        "name": "Sam Lee",
        "bio": "Startup CEO building AI tools",
        "followers_count": 5400,
        "following_count": 90,
        "posts_count": 12,
        "verified": True,
        "website": "https://sam.example.com",
    }

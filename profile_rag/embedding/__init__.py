"""
Text embedding.

This module provides:
- EmbeddingProvider: Abstract embed_query / embed_documents interface
- HashEmbeddingProvider: Deterministic 384-dim hash embedding (default)
- EmbeddingConfig: Configuration settings
- create_embedding_provider: Build the configured provider
"""

from profile_rag.embedding.base import EmbeddingProvider
from profile_rag.embedding.config import EmbeddingConfig
from profile_rag.embedding.hash_provider import HashEmbeddingProvider, hash_embedding


def create_embedding_provider(config: EmbeddingConfig | None = None) -> EmbeddingProvider:
    """Build the embedding provider selected by EMBEDDING_PROVIDER."""
    config = config or EmbeddingConfig()
    if config.provider == "hash":
        return HashEmbeddingProvider(config)
    raise ValueError(f"Unknown embedding provider: {config.provider}")


__all__ = [
    "EmbeddingConfig",
    "EmbeddingProvider",
    "HashEmbeddingProvider",
    "create_embedding_provider",
    "hash_embedding",
]

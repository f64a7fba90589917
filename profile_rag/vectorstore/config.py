"""
Configuration for vector store operations.

Uses Pydantic BaseSettings for environment variable support.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class VectorStoreConfig(BaseSettings):
    """
    Configuration for ChromaVectorStore, FileFallbackStore and ProfileStore.

    All settings can be overridden via environment variables with
    VECTORSTORE_ prefix (e.g., VECTORSTORE_CHROMA_HOST=chroma).
    """

    # Primary backend (Chroma server)
    chroma_host: str = Field(default="localhost", description="Chroma server host")
    chroma_port: int = Field(default=8000, ge=1, le=65535, description="Chroma server port")
    chroma_ssl: bool = Field(default=False, description="Use HTTPS for the Chroma server")

    collection_suffix: str = Field(
        default="_profiles",
        description="Collections are named {platform}{suffix}",
    )
    distance_space: Literal["cosine", "l2", "ip"] = Field(
        default="cosine",
        description="HNSW distance function for new collections",
    )

    # Network boundary
    request_timeout_seconds: float = Field(
        default=10.0,
        gt=0.0,
        le=300.0,
        description="Timeout for each call to the primary backend",
    )
    max_retries: int = Field(
        default=1,
        ge=0,
        le=5,
        description="Retries after a failed primary backend call",
    )
    retry_delay_seconds: float = Field(
        default=0.5,
        ge=0.0,
        le=30.0,
        description="Pause before retrying a failed call",
    )

    # Fallback store
    fallback_dir: str = Field(
        default="data/vector_fallback",
        description="Directory for per-identity fallback JSON files",
    )

    model_config = SettingsConfigDict(env_prefix="VECTORSTORE_")

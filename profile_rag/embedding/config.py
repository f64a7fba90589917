"""
Embedding provider configuration.

Settings can be overridden via environment variables prefixed with EMBEDDING_.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class EmbeddingConfig(BaseSettings):
    """Configuration for the embedding provider."""

    model_config = SettingsConfigDict(
        env_prefix="EMBEDDING_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    provider: Literal["hash"] = Field(
        default="hash",
        description="Embedding implementation (hash = deterministic placeholder)",
    )
    dimension: int = Field(
        default=384,
        ge=8,
        le=4096,
        description="Embedding vector dimension",
    )
    min_token_length: int = Field(
        default=3,
        ge=1,
        description="Tokens shorter than this are ignored by the hash embedding",
    )

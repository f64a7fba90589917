"""
Deterministic hash-based embedding.

A placeholder for a real embedding model: reproducible, dependency-light
and cheap. Each character of each token adds sin(code * 0.1) * 0.1 at
index (code * (word_index + 1) * (char_index + 1)) mod dimension, then the
vector is L2-normalized. Texts with no usable tokens map to the zero vector.
"""

import math
import re

import numpy as np
import structlog

from profile_rag.embedding.base import EmbeddingProvider
from profile_rag.embedding.config import EmbeddingConfig

logger = structlog.get_logger(__name__)

_NON_WORD = re.compile(r"[^\w\s]")

DEFAULT_DIMENSION = 384


def tokenize(text: str, min_length: int = 3) -> list[str]:
    """Lowercase, replace non-word characters with spaces, keep tokens of min_length+."""
    cleaned = _NON_WORD.sub(" ", (text or "").lower())
    return [word for word in cleaned.split() if len(word) >= min_length]


def hash_embedding(text: str, dimension: int = DEFAULT_DIMENSION, min_length: int = 3) -> list[float]:
    """
    Compute the hash embedding of a text.

    Args:
        text: Input text
        dimension: Output vector length
        min_length: Minimum token length

    Returns:
        Unit-length vector, or the zero vector when no tokens survive
    """
    vector = np.zeros(dimension, dtype=np.float64)

    for i, word in enumerate(tokenize(text, min_length)):
        for j, char in enumerate(word):
            code = ord(char)
            vector[(code * (i + 1) * (j + 1)) % dimension] += math.sin(code * 0.1) * 0.1

    magnitude = float(np.linalg.norm(vector))
    if magnitude > 0 and math.isfinite(magnitude):
        vector = vector / magnitude

    return vector.tolist()


class HashEmbeddingProvider(EmbeddingProvider):
    """
    EmbeddingProvider backed by hash_embedding().

    Usage:
        provider = HashEmbeddingProvider()
        vector = await provider.embed_query("travel photography tips")
        assert len(vector) == 384
    """

    def __init__(self, config: EmbeddingConfig | None = None):
        self._config = config or EmbeddingConfig()
        logger.debug(
            "HashEmbeddingProvider created",
            dimension=self._config.dimension,
        )

    @property
    def dimension(self) -> int:
        return self._config.dimension

    async def embed_query(self, text: str) -> list[float]:
        return hash_embedding(
            text,
            dimension=self._config.dimension,
            min_length=self._config.min_token_length,
        )

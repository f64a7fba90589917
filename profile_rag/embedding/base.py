"""
Abstract embedding provider interface.

Callers only depend on embed_query / embed_documents, so the deterministic
hash embedding can be replaced by a real model without touching the
store, retrieval engine or service.
"""

import asyncio
from abc import ABC, abstractmethod


class EmbeddingProvider(ABC):
    """
    Maps text to a fixed-length numeric vector.

    All methods are async so model-backed implementations can do I/O or
    offload inference without blocking the event loop.
    """

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Length of every vector this provider returns."""
        ...

    @abstractmethod
    async def embed_query(self, text: str) -> list[float]:
        """
        Embed a single text.

        Args:
            text: Query or document text

        Returns:
            Vector of length `dimension`
        """
        ...

    async def embed_documents(self, texts: list[str]) -> list[list[float]]:
        """
        Embed many texts.

        Issues one embed_query call per text and awaits them together; any
        single failure fails the whole batch.

        Args:
            texts: Texts to embed

        Returns:
            Vectors in input order
        """
        if not texts:
            return []
        return list(await asyncio.gather(*(self.embed_query(text) for text in texts)))

    async def close(self) -> None:
        """Release provider resources."""
        return None

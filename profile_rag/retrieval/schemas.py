"""Retrieval result model."""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class RetrievalResult:
    """
    A ranked search hit.

    Attributes:
        content: Document text
        metadata: Stored document metadata
        similarity: Closeness to the query (0.0-1.0), from vector distance or token overlap
        relevance: Heuristic re-ranking score (0.0-1.0); results are sorted by it
    """

    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    similarity: float = 0.0
    relevance: float = 0.0

    def __post_init__(self) -> None:
        """Validate scores are in valid range."""
        if not 0.0 <= self.similarity <= 1.0:
            raise ValueError(f"Similarity must be between 0.0 and 1.0, got {self.similarity}")
        if not 0.0 <= self.relevance <= 1.0:
            raise ValueError(f"Relevance must be between 0.0 and 1.0, got {self.relevance}")

    @property
    def doc_type(self) -> str:
        return str(self.metadata.get("type", ""))

    def to_dict(self) -> dict[str, Any]:
        return {
            "content": self.content,
            "metadata": self.metadata,
            "similarity": self.similarity,
            "relevance": self.relevance,
        }

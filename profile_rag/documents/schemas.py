"""Semantic document model shared by the synthesizer, embedder and store."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class DocumentType(str, Enum):
    """Document families synthesized per identity."""

    PROFILE = "profile"
    POST = "post"
    BIO = "bio"
    ENGAGEMENT = "engagement"


@dataclass
class SemanticDocument:
    """
    A synthesized text + metadata unit that is embedded and stored.

    Attributes:
        id: Unique per username + platform + type (+ post index)
        content: Multi-line text that gets embedded
        metadata: Typed key/value map; list values are comma-joined before persistence
        embedding: Fixed-length vector, set by the embedding provider
    """

    id: str
    content: str
    metadata: dict[str, Any] = field(default_factory=dict)
    embedding: list[float] | None = None

    @property
    def doc_type(self) -> str:
        return str(self.metadata.get("type", ""))

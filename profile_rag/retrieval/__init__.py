"""
Retrieval and ranking.

This module provides:
- RetrievalEngine: Similarity search (primary) or token-overlap search (fallback) with re-ranking
- RelevanceWeights: Overridable relevance bonuses
- RetrievalResult: Ranked search hit
"""

from profile_rag.retrieval.config import RelevanceWeights
from profile_rag.retrieval.engine import TYPE_KEYWORDS, RetrievalEngine
from profile_rag.retrieval.schemas import RetrievalResult

__all__ = [
    "RelevanceWeights",
    "RetrievalEngine",
    "RetrievalResult",
    "TYPE_KEYWORDS",
]

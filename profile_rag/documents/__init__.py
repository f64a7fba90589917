"""
Semantic document synthesis.

This module provides:
- DocumentSynthesizer: Builds profile/post/bio/engagement documents from a CanonicalBundle
- SemanticDocument: Text + metadata + embedding unit
- DocumentType: Document family enum
- categorize_performance and the bio lexicon helpers
"""

from profile_rag.documents.analysis import (
    categorize_performance,
    extract_keywords,
    extract_personality,
    extract_themes,
)
from profile_rag.documents.schemas import DocumentType, SemanticDocument
from profile_rag.documents.synthesizer import DocumentSynthesizer, document_id

__all__ = [
    "DocumentSynthesizer",
    "DocumentType",
    "SemanticDocument",
    "categorize_performance",
    "document_id",
    "extract_keywords",
    "extract_personality",
    "extract_themes",
]

"""
Vector storage for semantic profile documents.

Main components:
- ProfileStore: Store facade; picks Chroma or the file fallback once at initialize()
- VectorBackend: Abstract primary backend interface
- ChromaVectorStore: Chroma server implementation (one collection per platform)
- FileFallbackStore: One JSON file per identity
- DocumentBatch / StoredMatch / StoreStats: Shared data structures
"""

from profile_rag.vectorstore.base import (
    BackendMode,
    DocumentBatch,
    StoredMatch,
    StoreStats,
    VectorBackend,
)
from profile_rag.vectorstore.chroma_store import ChromaVectorStore
from profile_rag.vectorstore.config import VectorStoreConfig
from profile_rag.vectorstore.fallback_store import FallbackRecord, FileFallbackStore
from profile_rag.vectorstore.manager import ProfileStore

__all__ = [
    "BackendMode",
    "ChromaVectorStore",
    "DocumentBatch",
    "FallbackRecord",
    "FileFallbackStore",
    "ProfileStore",
    "StoreStats",
    "StoredMatch",
    "VectorBackend",
    "VectorStoreConfig",
]

"""Service that wires ingestion, storage, retrieval and context assembly."""

from profile_rag.services.profile_rag_service import ProfileRAGService

__all__ = ["ProfileRAGService"]

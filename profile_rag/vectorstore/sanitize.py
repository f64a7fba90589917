"""
Validation and cleaning of ingestion batches before persistence.

Backends only accept flat metadata (str, int, float, bool) and restricted
IDs, and a batch whose arrays disagree in length must never be written.
"""

import math
import re
from typing import Any

from profile_rag.errors import DataLengthMismatch, InvalidEmbedding
from profile_rag.vectorstore.base import DocumentBatch

_INVALID_ID_CHARS = re.compile(r"[^A-Za-z0-9_-]")


def sanitize_id(raw_id: Any, index: int) -> str:
    """Replace characters outside [A-Za-z0-9_-] with '_'; empty IDs become doc_{index}."""
    return _INVALID_ID_CHARS.sub("_", str(raw_id)) or f"doc_{index}"


def sanitize_ids(ids: list[Any]) -> list[str]:
    return [sanitize_id(raw_id, index) for index, raw_id in enumerate(ids)]


def flatten_metadata(metadata: dict[str, Any]) -> dict[str, str | int | float | bool]:
    """
    Keep only backend-supported metadata values.

    Scalars pass through, lists and tuples are comma-joined, and anything
    else (None, dicts, non-finite floats) is dropped.
    """
    cleaned: dict[str, str | int | float | bool] = {}
    for key, value in metadata.items():
        if isinstance(value, (bool, int, str)):
            cleaned[key] = value
        elif isinstance(value, float):
            if math.isfinite(value):
                cleaned[key] = value
        elif isinstance(value, (list, tuple)):
            cleaned[key] = ",".join(str(item) for item in value)
    return cleaned


def validate_lengths(batch: DocumentBatch) -> None:
    """
    Check ids, documents, metadatas (and embeddings, when present) agree in length.

    Raises:
        DataLengthMismatch: If any array differs
    """
    lengths = {
        "ids": len(batch.ids),
        "documents": len(batch.documents),
        "metadatas": len(batch.metadatas),
    }
    if batch.embeddings is not None:
        lengths["embeddings"] = len(batch.embeddings)

    if len(set(lengths.values())) > 1:
        detail = ", ".join(f"{name}({size})" for name, size in lengths.items())
        raise DataLengthMismatch(f"Data length mismatch: {detail}")


def validate_embeddings(embeddings: list[Any]) -> None:
    """
    Check every embedding is a non-empty, all-finite vector.

    Raises:
        InvalidEmbedding: On the first offending vector
    """
    for index, embedding in enumerate(embeddings):
        if not isinstance(embedding, (list, tuple)) or len(embedding) == 0:
            raise InvalidEmbedding(f"Invalid embedding at index {index}: not an array or empty")
        for value in embedding:
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise InvalidEmbedding(
                    f"Invalid embedding values at index {index}: contains NaN, Infinity or non-numbers"
                )


def clean_batch(batch: DocumentBatch) -> DocumentBatch:
    """Return a copy with sanitized IDs and flattened metadata."""
    return DocumentBatch(
        ids=sanitize_ids(batch.ids),
        documents=list(batch.documents),
        metadatas=[flatten_metadata(metadata) for metadata in batch.metadatas],
        embeddings=[list(embedding) for embedding in batch.embeddings]
        if batch.embeddings is not None
        else None,
    )

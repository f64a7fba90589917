"""
Error taxonomy and result type for the profile RAG pipeline.

Internal boundaries (normalization, store ingestion, service ingestion)
return a Result instead of raising, so each failure carries an ErrorKind
the caller can log and count. The public service API collapses failed
results to False / None / [] at its edge.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Failure categories surfaced by the pipeline."""

    NORMALIZATION = "normalization_error"
    DATA_LENGTH_MISMATCH = "data_length_mismatch"
    INVALID_EMBEDDING = "invalid_embedding"
    STORE_UNAVAILABLE = "store_unavailable"
    SEARCH_FAILURE = "search_failure"
    NO_DOCUMENTS = "no_documents"
    STORE_ERROR = "store_error"


class ProfileRAGError(Exception):
    """Base class for pipeline errors."""

    kind: ErrorKind = ErrorKind.STORE_ERROR


class NormalizationError(ProfileRAGError):
    """Raw export has a malformed or unexpected shape."""

    kind = ErrorKind.NORMALIZATION


class DataLengthMismatch(ProfileRAGError):
    """Ingestion arrays (ids, documents, metadatas, embeddings) differ in length."""

    kind = ErrorKind.DATA_LENGTH_MISMATCH


class InvalidEmbedding(ProfileRAGError):
    """An embedding vector is empty or contains NaN/Infinity."""

    kind = ErrorKind.INVALID_EMBEDDING


class StoreUnavailable(ProfileRAGError):
    """The primary vector backend cannot be reached."""

    kind = ErrorKind.STORE_UNAVAILABLE


class SearchFailure(ProfileRAGError):
    """Primary similarity search failed."""

    kind = ErrorKind.SEARCH_FAILURE


@dataclass(frozen=True)
class Result(Generic[T]):
    """
    Success-or-error value.

    Attributes:
        value: Payload on success
        error: ErrorKind on failure, None on success
        message: Human-readable failure detail
    """

    value: T | None = None
    error: ErrorKind | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "Result[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str = "") -> "Result[T]":
        return cls(error=kind, message=message)

    @classmethod
    def from_exception(cls, exc: Exception) -> "Result[T]":
        """Build a failed result, keeping the kind of pipeline errors."""
        kind = exc.kind if isinstance(exc, ProfileRAGError) else ErrorKind.STORE_ERROR
        return cls(error=kind, message=str(exc))

    def unwrap_or(self, default: T) -> T:
        """Return the value on success, otherwise the default."""
        if self.ok:
            return self.value  # type: ignore[return-value]
        return default

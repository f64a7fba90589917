"""
Flat-file fallback store used when the primary vector backend is unreachable.

Each identity is one JSON file, {fallback_dir}/{platform}_{username}.json:

    {"username": ..., "platform": ..., "timestamp": ..., "documents": [...],
     "metadatas": [...], "ids": [...]}

Writes overwrite the previous file. There is no write lock: concurrent
ingestions of the same identity race and the last writer wins, so callers
must treat ingestion as single-writer per identity.
"""

import asyncio
import json
import os
import re
import tempfile
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

import structlog

from profile_rag.vectorstore.base import DocumentBatch

logger = structlog.get_logger(__name__)

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


@dataclass
class FallbackRecord:
    """Contents of one identity's fallback file."""

    username: str
    platform: str
    timestamp: str
    documents: list[str] = field(default_factory=list)
    metadatas: list[dict[str, Any]] = field(default_factory=list)
    ids: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "FallbackRecord":
        return cls(
            username=str(data.get("username", "")),
            platform=str(data.get("platform", "")),
            timestamp=str(data.get("timestamp", "")),
            documents=list(data.get("documents") or []),
            metadatas=list(data.get("metadatas") or []),
            ids=list(data.get("ids") or []),
        )


@dataclass
class FallbackStats:
    """Aggregate over a platform's fallback files."""

    identities: int
    documents: int
    last_updated: str | None


class FileFallbackStore:
    """
    JSON-file store, one file per (platform, username).

    File I/O runs in worker threads so callers stay non-blocking.
    """

    def __init__(self, directory: str | Path = "data/vector_fallback"):
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        return self._directory

    def path_for(self, platform: str, username: str) -> Path:
        name = f"{platform}_{username}"
        return self._directory / f"{_UNSAFE_FILENAME_CHARS.sub('_', name)}.json"

    async def write(self, platform: str, username: str, batch: DocumentBatch) -> FallbackRecord:
        """
        Overwrite the identity's file with the batch.

        Returns:
            The record written
        """
        record = FallbackRecord(
            username=username,
            platform=platform,
            timestamp=datetime.now(timezone.utc).isoformat(),
            documents=list(batch.documents),
            metadatas=list(batch.metadatas),
            ids=list(batch.ids),
        )
        path = self.path_for(platform, username)
        await asyncio.to_thread(self._write_sync, path, asdict(record))

        logger.info(
            "Stored fallback data",
            platform=platform,
            username=username,
            documents=len(record.documents),
            path=str(path),
        )
        return record

    async def read(self, platform: str, username: str) -> FallbackRecord | None:
        """Load the identity's record, or None if no file exists."""
        path = self.path_for(platform, username)
        data = await asyncio.to_thread(self._read_sync, path)
        if data is None:
            return None
        return FallbackRecord.from_dict(data)

    async def stats(self, platform: str) -> FallbackStats | None:
        """Count identities and documents for a platform; None if the directory is missing."""
        return await asyncio.to_thread(self._stats_sync, platform)

    def _write_sync(self, path: Path, data: dict[str, Any]) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(data, handle, indent=2, ensure_ascii=False)
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _read_sync(self, path: Path) -> dict[str, Any] | None:
        if not path.exists():
            return None
        with path.open(encoding="utf-8") as handle:
            return json.load(handle)

    def _stats_sync(self, platform: str) -> FallbackStats | None:
        if not self._directory.is_dir():
            return None

        prefix = _UNSAFE_FILENAME_CHARS.sub("_", f"{platform}_")
        identities = 0
        documents = 0
        last_updated: str | None = None

        for path in sorted(self._directory.glob(f"{prefix}*.json")):
            try:
                with path.open(encoding="utf-8") as handle:
                    record = FallbackRecord.from_dict(json.load(handle))
            except (OSError, json.JSONDecodeError) as e:
                logger.warning("Skipping unreadable fallback file", path=str(path), error=str(e))
                continue
            identities += 1
            documents += len(record.documents)
            if record.timestamp and (last_updated is None or record.timestamp > last_updated):
                last_updated = record.timestamp

        return FallbackStats(identities=identities, documents=documents, last_updated=last_updated)

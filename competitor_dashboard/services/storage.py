from __future__ import annotations

import asyncio
import json
import logging
import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from competitor_dashboard.utils.errors import StorageError

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 100
MAX_LIMIT = 1000

Record = Dict[str, Any]


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def clamp_window(skip: Optional[int], limit: Optional[int]) -> tuple[int, int]:
    """Normalize a skip/limit pair: skip >= 0, 1 <= limit <= MAX_LIMIT."""
    skip = max(0, skip or 0)
    limit = max(1, min(MAX_LIMIT, limit if limit is not None else DEFAULT_LIMIT))
    return skip, limit


def next_int_id(items: List[Record]) -> int:
    """Running max: 1 for an empty collection, otherwise max(id) + 1."""
    ids = [it["id"] for it in items if isinstance(it.get("id"), int)]
    return max(ids) + 1 if ids else 1


def paginate(items: List[Record], skip: Optional[int], limit: Optional[int]) -> List[Record]:
    skip, limit = clamp_window(skip, limit)
    return items[skip : skip + limit]


class StorageLocation:
    """
    Resolves the writable directory for one store's backing file.

    The primary directory is tried first; if it cannot be created or written
    the fallback directory is used instead. Resolution happens on first use
    and the result is kept for the lifetime of the instance, so once the
    fallback is chosen the primary is never retried.
    """

    def __init__(self, filename: str, primary_dir: Path, fallback_dir: Path):
        self.filename = filename
        self.primary_dir = Path(primary_dir)
        self.fallback_dir = Path(fallback_dir)
        self._path: Optional[Path] = None

    @property
    def resolved(self) -> Optional[Path]:
        return self._path

    def resolve(self) -> Path:
        if self._path is not None:
            return self._path

        try:
            self.primary_dir.mkdir(parents=True, exist_ok=True)
            if not os.access(self.primary_dir, os.W_OK):
                raise PermissionError(f"{self.primary_dir} is not writable")
            directory = self.primary_dir
        except OSError as e:
            logger.warning(
                "Data directory %s unavailable (%s); falling back to %s",
                self.primary_dir, e, self.fallback_dir,
            )
            try:
                self.fallback_dir.mkdir(parents=True, exist_ok=True)
            except OSError as fallback_error:
                raise StorageError(
                    f"Could not create data directory {self.fallback_dir}: {fallback_error}"
                ) from fallback_error
            directory = self.fallback_dir

        self._path = directory / self.filename
        return self._path


class JsonCollection:
    """
    One JSON array persisted as a whole file.

    Reads and writes run in a worker thread. Appends hold a per-collection
    lock across the whole read-modify-write cycle so concurrent creates
    cannot overwrite each other, and each write goes to a temp file that is
    then renamed over the original.
    """

    def __init__(self, location: StorageLocation):
        self.location = location
        self._lock = asyncio.Lock()

    # ---------- sync helpers (run in a thread) ----------
    def _read_sync(self) -> List[Record]:
        path = self.location.resolve()
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as e:
            logger.warning("Could not read %s (%s); treating as empty", path, e)
            return []

        try:
            data = json.loads(raw)
        except ValueError:
            logger.warning("Malformed JSON in %s; treating as empty", path)
            return []
        if not isinstance(data, list):
            logger.warning("Expected a JSON array in %s, got %s; treating as empty", path, type(data).__name__)
            return []
        return data

    def _write_sync(self, items: List[Record]) -> None:
        path = self.location.resolve()
        tmp_name = None
        try:
            with tempfile.NamedTemporaryFile(
                "w", encoding="utf-8", dir=path.parent, prefix=f".{path.name}.", suffix=".tmp", delete=False
            ) as f:
                tmp_name = f.name
                json.dump(items, f, indent=2, ensure_ascii=False)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Could not write {path}: {e}") from e

    # ---------- async API ----------
    async def all(self) -> List[Record]:
        return await asyncio.to_thread(self._read_sync)

    async def find(self, predicate: Callable[[Record], bool]) -> Optional[Record]:
        items = await self.all()
        return next((it for it in items if predicate(it)), None)

    async def append(self, build: Callable[[List[Record]], Record]) -> Record:
        """
        Append the record returned by ``build(current_items)`` and persist.

        ``build`` sees the collection as read under the lock, so id policies
        that scan existing records get a consistent view.
        """
        async with self._lock:
            items = await asyncio.to_thread(self._read_sync)
            record = build(items)
            items.append(record)
            await asyncio.to_thread(self._write_sync, items)
        return record

"""JSON document store with atomic writes.

Layout::

    {
      "tools": {
        "<tool_id>": {
          "compatibility_summary": {...},
          "compatibility": {"<peer_id>": {"score": ..., "rank_score": ...}}
        }
      }
    }

Each ``commit`` is applied as a whole: the merged document is written to a
temp file and moved into place, so a failed batch leaves the previous
document untouched.
"""

from __future__ import annotations

import asyncio
import contextlib
import fcntl
import json
import logging
import os
import tempfile
import threading
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from stackmatch.errors import StorageError
from stackmatch.models import CompatibilityRecord, CompatibilitySummary

logger = logging.getLogger(__name__)

_path_locks: dict[str, threading.Lock] = {}
_path_locks_guard = threading.Lock()


def _get_path_lock(path: Path) -> threading.Lock:
    """Get or create a per-path threading lock for concurrent safety."""
    key = str(path.resolve())
    with _path_locks_guard:
        if key not in _path_locks:
            _path_locks[key] = threading.Lock()
        return _path_locks[key]


@dataclass
class JsonFileStore:
    """Compatibility store persisted to a single JSON file."""

    path: Path

    async def commit(self, records: Sequence[CompatibilityRecord]) -> None:
        def apply(doc: dict) -> None:
            for record in records:
                entry = _tool_entry(doc, record.subject_id)
                peers = entry.setdefault("compatibility", {})
                peers.setdefault(record.peer_id, {}).update(record.fields())

        await asyncio.to_thread(self._update, apply)

    async def merge_summary(self, tool_id: str, summary: CompatibilitySummary) -> None:
        def apply(doc: dict) -> None:
            entry = _tool_entry(doc, tool_id)
            entry.setdefault("compatibility_summary", {}).update(summary.fields())

        await asyncio.to_thread(self._update, apply)

    async def load_records(self, subject_id: str) -> dict[str, dict[str, object]]:
        doc = await asyncio.to_thread(self._read)
        entry = doc.get("tools", {}).get(subject_id, {})
        return dict(entry.get("compatibility", {}))

    async def load_summary(self, tool_id: str) -> dict[str, object] | None:
        doc = await asyncio.to_thread(self._read)
        entry = doc.get("tools", {}).get(tool_id, {})
        return entry.get("compatibility_summary")

    # ── File helpers ─────────────────────────────────────────────

    def _read(self) -> dict:
        if not self.path.exists():
            return {"tools": {}}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise StorageError(f"Failed to read store file {self.path}: {exc}") from exc
        if not isinstance(data, dict) or not isinstance(data.get("tools", {}), dict):
            raise StorageError(f"Invalid store file format: {self.path}")
        data.setdefault("tools", {})
        return data

    def _update(self, apply) -> None:
        """Read-modify-write under both an in-process and a cross-process lock."""
        lock = _get_path_lock(self.path)
        with lock:
            lock_file_path = self.path.with_suffix(".lck")
            try:
                lock_file_path.parent.mkdir(parents=True, exist_ok=True)
                with open(lock_file_path, "w") as lock_fd:
                    fcntl.flock(lock_fd, fcntl.LOCK_EX)
                    try:
                        doc = self._read()
                        apply(doc)
                        _atomic_write(self.path, doc)
                    finally:
                        fcntl.flock(lock_fd, fcntl.LOCK_UN)
            except OSError as exc:
                raise StorageError(f"Failed to lock store file {self.path}: {exc}") from exc


def _tool_entry(doc: dict, tool_id: str) -> dict:
    return doc.setdefault("tools", {}).setdefault(tool_id, {})


def _atomic_write(path: Path, data: dict) -> None:
    """Write JSON data to disk atomically via tempfile + os.replace."""
    fd = None
    tmp_path: str | None = None
    try:
        fd, tmp_path = tempfile.mkstemp(
            dir=str(path.parent), suffix=".tmp", prefix=".stackmatch-store_"
        )
        content = json.dumps(data, indent=2, ensure_ascii=False, sort_keys=True) + "\n"
        os.write(fd, content.encode("utf-8"))
        os.close(fd)
        fd = None
        os.replace(tmp_path, str(path))
        tmp_path = None
    except OSError as exc:
        raise StorageError(f"Failed to write store file {path}: {exc}") from exc
    finally:
        if fd is not None:
            os.close(fd)
        if tmp_path is not None:
            with contextlib.suppress(OSError):
                os.unlink(tmp_path)
    logger.debug("Wrote store file %s", path)

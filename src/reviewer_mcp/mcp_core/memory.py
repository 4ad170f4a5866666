"""
Session Memory Store

Key-value notes that live for the server's lifetime, with optional
persistence to a JSON file in the working directory:

    .reviewer-memory.json
        {"key": {"value": "...", "created": "<iso>", "tags": ["..."]}}

Entries written with persist=True are flushed to that file and reloaded the
next time the server starts. Once a file exists, deletes and clears are
written through so the file never resurrects removed keys.
"""

from __future__ import annotations

import json
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable

import structlog

from .errors import ReviewerError

log = structlog.get_logger("reviewer.memory")

MEMORY_FILE = Path(".reviewer-memory.json")
MAX_ENTRIES = 1000


class MemoryFullError(ReviewerError):
    """The store already holds MAX_ENTRIES keys."""


@dataclass(slots=True)
class MemoryEntry:
    value: str
    created: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    tags: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, object]:
        return {"value": self.value, "created": self.created.isoformat(), "tags": list(self.tags)}

    @classmethod
    def from_dict(cls, data: dict[str, object]) -> "MemoryEntry":
        created_raw = data.get("created")
        try:
            created = datetime.fromisoformat(str(created_raw))
        except ValueError:
            created = datetime.now(timezone.utc)
        tags = data.get("tags") or []
        return cls(value=str(data.get("value", "")), created=created, tags=[str(t) for t in tags])


class MemoryStore:
    """In-memory key-value store with optional JSON persistence."""

    def __init__(self, path: Path | None = MEMORY_FILE, max_entries: int = MAX_ENTRIES) -> None:
        self.path = path
        self.max_entries = max_entries
        self._entries: dict[str, MemoryEntry] = {}
        self._loaded = False
        self._persisted = False
        self._lock = threading.Lock()

    def _ensure_loaded(self) -> None:
        if self._loaded:
            return
        self._loaded = True
        if self.path is None or not self.path.is_file():
            return
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            log.warning("memory.load_failed", path=str(self.path), error=str(e))
            return
        if not isinstance(raw, dict):
            log.warning("memory.load_failed", path=str(self.path), error="not a JSON object")
            return
        for key, data in raw.items():
            if isinstance(data, dict):
                self._entries[key] = MemoryEntry.from_dict(data)
        self._persisted = True
        log.info("memory.loaded", path=str(self.path), entries=len(self._entries))

    def save(self) -> None:
        if self.path is None:
            return
        payload = {key: entry.to_dict() for key, entry in self._entries.items()}
        self.path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")
        self._persisted = True
        log.info("memory.saved", path=str(self.path), entries=len(payload))

    def _flush(self, snapshot: dict[str, MemoryEntry], force: bool = False) -> None:
        """Write the entries out, restoring `snapshot` if the file cannot be written."""
        try:
            if force or self._persisted:
                self.save()
        except OSError:
            self._entries = snapshot
            raise

    def __len__(self) -> int:
        with self._lock:
            self._ensure_loaded()
            return len(self._entries)

    def set(
        self,
        key: str,
        value: str,
        tags: Iterable[str] | None = None,
        persist: bool = False,
    ) -> MemoryEntry:
        with self._lock:
            self._ensure_loaded()
            if len(self._entries) >= self.max_entries and key not in self._entries:
                raise MemoryFullError(
                    f"Storage limit reached ({self.max_entries} entries). Delete some entries first."
                )
            entry = MemoryEntry(value=value, tags=list(tags or []))
            snapshot = dict(self._entries)
            self._entries[key] = entry
            if persist:
                self._flush(snapshot, force=True)
            return entry

    def get(self, key: str) -> MemoryEntry | None:
        with self._lock:
            self._ensure_loaded()
            return self._entries.get(key)

    def keys(self, tags: Iterable[str] | None = None) -> list[str]:
        """Sorted keys, optionally limited to entries carrying any of `tags`."""
        wanted = set(tags or [])
        with self._lock:
            self._ensure_loaded()
            return sorted(
                key
                for key, entry in self._entries.items()
                if not wanted or wanted.intersection(entry.tags)
            )

    def items(self) -> list[tuple[str, MemoryEntry]]:
        with self._lock:
            self._ensure_loaded()
            return sorted(self._entries.items())

    def delete(self, key: str) -> bool:
        with self._lock:
            self._ensure_loaded()
            if key not in self._entries:
                return False
            snapshot = dict(self._entries)
            del self._entries[key]
            self._flush(snapshot)
            return True

    def search(self, pattern: str) -> list[str]:
        """Case-insensitive substring match over keys, values and tags."""
        needle = pattern.lower()
        with self._lock:
            self._ensure_loaded()
            return sorted(
                key
                for key, entry in self._entries.items()
                if needle in key.lower()
                or needle in entry.value.lower()
                or any(needle in tag.lower() for tag in entry.tags)
            )

    def clear(self) -> int:
        with self._lock:
            self._ensure_loaded()
            snapshot = dict(self._entries)
            self._entries.clear()
            self._flush(snapshot)
            return len(snapshot)


_store: MemoryStore | None = None


def get_memory_store() -> MemoryStore:
    global _store
    if _store is None:
        _store = MemoryStore()
    return _store


def reset_memory_store(store: MemoryStore | None = None) -> None:
    """Replace (or drop) the process-wide store."""
    global _store
    _store = store


__all__ = [
    "MEMORY_FILE",
    "MAX_ENTRIES",
    "MemoryEntry",
    "MemoryFullError",
    "MemoryStore",
    "get_memory_store",
    "reset_memory_store",
]

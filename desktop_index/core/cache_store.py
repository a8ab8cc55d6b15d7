#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""
Desktop Index - Cache Store

Persists the full, unfiltered snapshot of indexed entries:

    {"entries": [{...}, ...], "last_update": <epoch seconds>}

The snapshot is replaced wholesale on every write. A cache file that exists
but cannot be decoded is a hard error; it is never treated as absent.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, Optional, Protocol, Tuple

from ..exceptions import CacheDecodeError, CacheError, CacheWriteError
from ..logging_config import LoggingTimer
from .desktop_entry import DesktopEntry

logger = logging.getLogger(__name__)

Clock = Callable[[], float]

_ENTRY_OPTIONAL_FIELDS = ("generic_name", "comment", "icon")


@dataclass(frozen=True)
class CacheSnapshot:
    entries: Tuple[DesktopEntry, ...]
    last_update: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entries": [entry.to_dict() for entry in self.entries],
            "last_update": self.last_update,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "CacheSnapshot":
        if not isinstance(data, dict):
            raise CacheDecodeError("Cache root is not an object")

        raw_entries = data.get("entries")
        if not isinstance(raw_entries, list):
            raise CacheDecodeError("Cache 'entries' is missing or not a list")

        last_update = data.get("last_update")
        if isinstance(last_update, bool) or not isinstance(last_update, int) or last_update < 0:
            raise CacheDecodeError("Cache 'last_update' is not a non-negative integer")

        entries = []
        for index, raw in enumerate(raw_entries):
            if not isinstance(raw, dict):
                raise CacheDecodeError(f"Cache entry {index} is not an object")
            if not isinstance(raw.get("name"), str):
                raise CacheDecodeError(f"Cache entry {index} has no string 'name'")
            if not isinstance(raw.get("exec", ""), str):
                raise CacheDecodeError(f"Cache entry {index} has a non-string 'exec'")
            for key in _ENTRY_OPTIONAL_FIELDS:
                value = raw.get(key)
                if value is not None and not isinstance(value, str):
                    raise CacheDecodeError(f"Cache entry {index} has a non-string '{key}'")
            entries.append(DesktopEntry.from_dict(raw))

        return cls(entries=tuple(entries), last_update=last_update)


class CacheStore(Protocol):
    def exists(self) -> bool:
        ...

    def read(self) -> Optional[CacheSnapshot]:
        ...

    def write(self, entries: Iterable[DesktopEntry]) -> CacheSnapshot:
        ...


def _build_snapshot(entries: Iterable[DesktopEntry], clock: Clock) -> CacheSnapshot:
    return CacheSnapshot(entries=tuple(entries), last_update=int(clock()))


class JsonFileCacheStore:
    """Snapshot stored as one JSON document at a fixed path.

    Writes go through a temporary file in the same directory and
    os.replace, so readers see either the old or the new snapshot.
    There is no locking between concurrent writers.
    """

    def __init__(self, path: os.PathLike, indent: Optional[int] = None, clock: Clock = time.time):
        self.path = Path(path)
        self.indent = indent
        self._clock = clock

    def exists(self) -> bool:
        return self.path.exists()

    def read(self) -> Optional[CacheSnapshot]:
        if not self.exists():
            return None

        with LoggingTimer("cache.read"):
            try:
                raw = self.path.read_text(encoding="utf-8")
            except UnicodeDecodeError as exc:
                raise CacheDecodeError(f"Cache file is not valid UTF-8: {exc}", str(self.path)) from exc
            except OSError as exc:
                raise CacheError(f"Cache file could not be read: {exc}", "CACHE_READ_ERROR", str(self.path)) from exc

            try:
                data = json.loads(raw)
            except ValueError as exc:
                raise CacheDecodeError(f"Cache file is not valid JSON: {exc}", str(self.path)) from exc

            try:
                snapshot = CacheSnapshot.from_dict(data)
            except CacheDecodeError as exc:
                exc.details["cache_path"] = str(self.path)
                raise

        logger.debug(f"Loaded {len(snapshot.entries)} cached entries from {self.path}")
        return snapshot

    def write(self, entries: Iterable[DesktopEntry]) -> CacheSnapshot:
        snapshot = _build_snapshot(entries, self._clock)
        payload = json.dumps(snapshot.to_dict(), indent=self.indent, ensure_ascii=False)

        with LoggingTimer("cache.write"):
            tmp_name = None
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                with tempfile.NamedTemporaryFile(
                    "w", encoding="utf-8", dir=str(self.path.parent),
                    prefix=f".{self.path.name}.", suffix=".tmp", delete=False,
                ) as tmp:
                    tmp_name = tmp.name
                    tmp.write(payload)
                    tmp.flush()
                    os.fsync(tmp.fileno())
                os.replace(tmp_name, self.path)
            except OSError as exc:
                if tmp_name is not None:
                    Path(tmp_name).unlink(missing_ok=True)
                raise CacheWriteError(f"Cache snapshot could not be written: {exc}", str(self.path)) from exc

        logger.info(f"Wrote {len(snapshot.entries)} entries to cache {self.path}")
        return snapshot


class InMemoryCacheStore:
    """Process-local store, mainly for tests and embedding."""

    def __init__(self, snapshot: Optional[CacheSnapshot] = None, clock: Clock = time.time):
        self._snapshot = snapshot
        self._clock = clock
        self.write_count = 0

    def exists(self) -> bool:
        return self._snapshot is not None

    def read(self) -> Optional[CacheSnapshot]:
        return self._snapshot

    def write(self, entries: Iterable[DesktopEntry]) -> CacheSnapshot:
        self._snapshot = _build_snapshot(entries, self._clock)
        self.write_count += 1
        return self._snapshot

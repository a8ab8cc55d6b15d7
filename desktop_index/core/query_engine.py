#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""
Desktop Index - Query Engine

Public entry point of the index. A search is served from the cache
snapshot when one exists; otherwise a live concurrent scan answers it and
(by default) the snapshot is built for the next call.

Cache decode errors propagate; they never trigger a fallback scan. A failed
snapshot write after a miss is logged and the live result is still returned.
"""

import logging
from typing import TYPE_CHECKING, Iterator, List, Optional, Sequence, overload

from ..exceptions import CacheWriteError
from ..logging_config import LoggingTimer
from .cache_store import CacheSnapshot, CacheStore
from .desktop_entry import DesktopEntry
from .matching import match_cache_snapshot

if TYPE_CHECKING:
    from ..scanning.aggregator import Aggregator

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
DEFAULT_REBUILD_LIMIT = 1000

SOURCE_CACHE = "cache"
SOURCE_SCAN = "scan"


class SearchResult(Sequence[DesktopEntry]):
    """Ordered, immutable list of matched entries."""

    def __init__(self, entries: Sequence[DesktopEntry], source: str):
        self._entries = tuple(entries)
        self.source = source

    @overload
    def __getitem__(self, index: int) -> DesktopEntry: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[DesktopEntry]: ...

    def __getitem__(self, index):
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[DesktopEntry]:
        return iter(self._entries)

    def __eq__(self, other) -> bool:
        if isinstance(other, SearchResult):
            return self._entries == other._entries
        if isinstance(other, (list, tuple)):
            return list(self._entries) == list(other)
        return NotImplemented

    def __repr__(self) -> str:
        return f"SearchResult(source={self.source!r}, entries={list(self._entries)!r})"

    @property
    def is_empty(self) -> bool:
        return not self._entries

    @property
    def first(self) -> Optional[DesktopEntry]:
        return self._entries[0] if self._entries else None


def filter_snapshot(snapshot: CacheSnapshot, query: str, limit: int) -> List[DesktopEntry]:
    """Cache-path filtering; counting stops once `limit` entries matched."""
    matches: List[DesktopEntry] = []
    for entry in snapshot.entries:
        if len(matches) >= limit:
            break
        if match_cache_snapshot(entry, query):
            matches.append(entry)
    return matches


class QueryEngine:
    """Cache-first search over installed applications."""

    def __init__(self, store: CacheStore, aggregator: "Aggregator",
                 default_limit: int = DEFAULT_LIMIT,
                 rebuild_limit: int = DEFAULT_REBUILD_LIMIT,
                 build_on_miss: bool = True):
        self.store = store
        self.aggregator = aggregator
        self.default_limit = default_limit
        self.rebuild_limit = rebuild_limit
        self.build_on_miss = build_on_miss

    def search(self, query: str, limit: Optional[int] = None) -> SearchResult:
        limit = self.default_limit if limit is None else limit

        if self.store.exists():
            snapshot = self.store.read()
            if snapshot is not None:
                with LoggingTimer("search.cache"):
                    matches = filter_snapshot(snapshot, query, limit)
                logger.debug(f"Cache search {query!r}: {len(matches)} match(es)")
                return SearchResult(matches, SOURCE_CACHE)

        logger.info("No cache snapshot; scanning source directories")
        matches = self.aggregator.aggregate(query, limit)
        if self.build_on_miss:
            try:
                self.rebuild()
            except CacheWriteError as exc:
                logger.warning(f"Cache snapshot not written, serving live scan result: {exc}")
        return SearchResult(matches, SOURCE_SCAN)

    def rebuild(self) -> CacheSnapshot:
        """Full unfiltered scan written through the cache store."""
        logger.info("Rebuilding desktop entry cache")
        entries = self.aggregator.aggregate("", self.rebuild_limit)
        snapshot = self.store.write(entries)
        logger.info(f"Cache rebuilt with {len(snapshot.entries)} entries")
        return snapshot

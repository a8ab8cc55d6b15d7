#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""Desktop Index - concurrent aggregator.

Runs one DirectoryScanner task per source directory on a thread pool,
waits for all of them, then merges and sorts the results by name.

The limit is applied per directory: N directories can contribute up to
N * limit entries. Each task returns its own buffer; buffers are merged
in source-directory order after the join, so no lock is needed.

Every directory gets its own thread unless scanner.max_workers caps the
pool.
"""

import concurrent.futures
import logging
from typing import Iterable, List, Optional, Sequence

from ..core.desktop_entry import DesktopEntry
from ..core.source_dirs import resolve_source_dirs
from ..exceptions import ScannerError
from ..logging_config import LoggingTimer
from .directory_scanner import DirectoryScanner

logger = logging.getLogger(__name__)


def _task_result(future: concurrent.futures.Future, directory: str) -> List[DesktopEntry]:
    try:
        return future.result()
    except ScannerError:
        raise
    except Exception as exc:
        raise ScannerError(f"Scan task failed: {exc}", directory=directory) from exc


def merge_results(buffers: Iterable[Sequence[DesktopEntry]]) -> List[DesktopEntry]:
    """Concatenate per-directory buffers and sort by name (stable)."""
    merged: List[DesktopEntry] = []
    for buffer in buffers:
        merged.extend(buffer)
    merged.sort(key=lambda entry: entry.name)
    return merged


class Aggregator:
    """Concurrent multi-directory scan-and-merge."""

    def __init__(self, scanner: Optional[DirectoryScanner] = None,
                 source_dirs: Optional[Sequence[str]] = None,
                 max_workers: Optional[int] = None):
        self.scanner = scanner or DirectoryScanner()
        self._configured_dirs = list(source_dirs) if source_dirs else None
        self.max_workers = max_workers

    def source_dirs(self) -> List[str]:
        return resolve_source_dirs(self._configured_dirs)

    def _resolve_max_workers(self, task_count: int) -> int:
        """One thread per directory unless a cap is configured."""
        if self.max_workers:
            return max(1, min(self.max_workers, task_count))
        return max(1, task_count)

    def aggregate(self, query: str, limit: int,
                  source_dirs: Optional[Sequence[str]] = None) -> List[DesktopEntry]:
        """Scan every source directory concurrently; blocks until all finish."""
        dirs = list(source_dirs) if source_dirs is not None else self.source_dirs()
        if not dirs:
            logger.info("No source directories to scan")
            return []

        with LoggingTimer("scan.aggregate"):
            num_workers = self._resolve_max_workers(len(dirs))
            with concurrent.futures.ThreadPoolExecutor(
                max_workers=num_workers, thread_name_prefix="desktop-scan"
            ) as executor:
                futures = [executor.submit(self.scanner.scan, d, query, limit) for d in dirs]
                concurrent.futures.wait(futures)

            buffers = [_task_result(future, directory) for future, directory in zip(futures, dirs)]

        merged = merge_results(buffers)
        logger.debug(f"Aggregated {len(merged)} entries from {len(dirs)} directories for {query!r}")
        return merged

#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""Desktop Index - directory scanner.

Reads one directory, parses every descriptor file in it and returns the
entries that match a query, stopping once `limit` matches are collected.

Notes:
- Files are visited in name order so the limit cut-off is repeatable.
- Unlistable entries, unreadable files and malformed descriptors are
  skipped (logged at DEBUG); none of them abort the scan.
- A directory that cannot be opened yields no entries.
"""

import os
import logging
from pathlib import Path
from typing import List, Optional, Union

from ..core.desktop_entry import DesktopEntry, ParsedEntry, parse_desktop_entry
from ..core.icon_resolver import IconResolver, NullIconResolver
from ..core.matching import match_live_scan

logger = logging.getLogger(__name__)

DEFAULT_SUFFIX = ".desktop"
DEFAULT_ICON_SIZE = 128

PathLike = Union[str, "os.PathLike[str]"]


class DirectoryScanner:
    """Scans a single directory for matching descriptor files."""

    def __init__(self, icon_resolver: Optional[IconResolver] = None,
                 icon_size: int = DEFAULT_ICON_SIZE,
                 suffix: str = DEFAULT_SUFFIX,
                 encoding: str = "utf-8"):
        self.icon_resolver = icon_resolver or NullIconResolver()
        self.icon_size = icon_size
        self.suffix = suffix
        self.encoding = encoding

    def resolve_icon(self, raw_icon: Optional[str]) -> Optional[str]:
        """Existing path as-is, otherwise whatever the icon resolver finds."""
        if not raw_icon:
            return None
        if os.path.exists(raw_icon):
            return raw_icon
        try:
            return self.icon_resolver.resolve(raw_icon, self.icon_size)
        except OSError as exc:
            logger.debug(f"Icon lookup failed for {raw_icon!r}: {exc}")
            return None

    def _candidate_files(self, directory: PathLike) -> List[Path]:
        try:
            with os.scandir(directory) as it:
                names = []
                for dir_entry in it:
                    if not dir_entry.name.endswith(self.suffix):
                        continue
                    try:
                        if dir_entry.is_file():
                            names.append(dir_entry.name)
                    except OSError as exc:
                        logger.debug(f"Skipping {dir_entry.path}: {exc}")
        except OSError as exc:
            logger.debug(f"Cannot open {directory}: {exc}")
            return []
        return [Path(directory) / name for name in sorted(names)]

    def _read(self, path: Path) -> Optional[str]:
        try:
            return path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as exc:
            logger.debug(f"Skipping unreadable {path}: {exc}")
            return None

    def _to_entry(self, parsed: ParsedEntry) -> Optional[DesktopEntry]:
        return DesktopEntry.from_parsed(parsed, icon=self.resolve_icon(parsed.icon))

    def scan(self, directory: PathLike, query: str, limit: int) -> List[DesktopEntry]:
        """Return up to `limit` entries in `directory` whose name matches `query`."""
        matches: List[DesktopEntry] = []
        if limit <= 0:
            return matches

        for path in self._candidate_files(directory):
            if len(matches) >= limit:
                break

            text = self._read(path)
            if text is None:
                continue

            parsed = parse_desktop_entry(text)
            if parsed is None:
                logger.debug(f"Skipping malformed descriptor {path}")
                continue

            if not match_live_scan(parsed, query):
                continue

            entry = self._to_entry(parsed)
            if entry is not None:
                matches.append(entry)

        logger.debug(f"{directory}: {len(matches)} match(es) for {query!r}")
        return matches

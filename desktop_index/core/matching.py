"""Match policies.

Each search path has its own named predicate so the two can be unified
later by changing one function.

- live scan: Name, or GenericName when the descriptor has no Name key.
- cache snapshot: name; failing that, generic_name when present,
  otherwise comment. A present generic_name shadows comment.
"""

from __future__ import annotations

from typing import Optional

from .desktop_entry import DesktopEntry, ParsedEntry


def contains_ci(field: Optional[str], query: str) -> bool:
    """Case-insensitive substring test; an absent field never matches."""
    if field is None:
        return False
    return query.lower() in field.lower()


def match_live_scan(parsed: ParsedEntry, query: str) -> bool:
    if parsed.name is not None:
        return contains_ci(parsed.name, query)
    if parsed.generic_name is not None:
        return contains_ci(parsed.generic_name, query)
    return False


def match_cache_snapshot(entry: DesktopEntry, query: str) -> bool:
    if contains_ci(entry.name, query):
        return True
    if entry.generic_name is not None:
        return contains_ci(entry.generic_name, query)
    return contains_ci(entry.comment, query)

#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""Desktop Index - core package.

Records, parsing, matching, cache storage and the query engine.
"""

from .cache_store import CacheSnapshot, CacheStore, InMemoryCacheStore, JsonFileCacheStore
from .desktop_entry import DesktopEntry, ParsedEntry, parse_desktop_entry
from .icon_resolver import IconResolver, NullIconResolver, ThemeIconResolver
from .query_engine import QueryEngine, SearchResult

__all__ = [
    'CacheSnapshot',
    'CacheStore',
    'DesktopEntry',
    'IconResolver',
    'InMemoryCacheStore',
    'JsonFileCacheStore',
    'NullIconResolver',
    'ParsedEntry',
    'QueryEngine',
    'SearchResult',
    'ThemeIconResolver',
    'parse_desktop_entry',
]

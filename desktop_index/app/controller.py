"""Controller: builds the query engine from config and exposes search/rebuild."""

from __future__ import annotations

from typing import Optional

from ..config import IndexConfig, load_config
from ..core.cache_store import CacheSnapshot, CacheStore, JsonFileCacheStore
from ..core.icon_resolver import IconResolver, ThemeIconResolver
from ..core.query_engine import QueryEngine, SearchResult
from ..scanning import Aggregator, DirectoryScanner


def build_engine(
    config: Optional[IndexConfig] = None,
    store: Optional[CacheStore] = None,
    icon_resolver: Optional[IconResolver] = None,
) -> QueryEngine:
    """Wire a QueryEngine; the store and icon resolver can be injected."""
    cfg = config if config is not None else load_config()
    resolver = icon_resolver or ThemeIconResolver(theme=cfg.icons.theme)
    scanner = DirectoryScanner(
        icon_resolver=resolver,
        icon_size=cfg.icons.preferred_size,
        suffix=cfg.scanner.suffix,
        encoding=cfg.scanner.encoding,
    )
    aggregator = Aggregator(
        scanner=scanner,
        source_dirs=cfg.scanner.source_dirs or None,
        max_workers=cfg.scanner.max_workers,
    )
    if store is None:
        store = JsonFileCacheStore(cfg.cache.path, indent=cfg.cache.indent)
    return QueryEngine(
        store=store,
        aggregator=aggregator,
        default_limit=cfg.search.default_limit,
        rebuild_limit=cfg.cache.rebuild_limit,
        build_on_miss=cfg.cache.build_on_miss,
    )


def search(query: str, limit: Optional[int] = None, engine: Optional[QueryEngine] = None) -> SearchResult:
    engine = engine or build_engine()
    return engine.search(query, limit)


def rebuild_cache(engine: Optional[QueryEngine] = None) -> CacheSnapshot:
    engine = engine or build_engine()
    return engine.rebuild()

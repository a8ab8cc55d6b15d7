"""App-level APIs.

Thin controller functions for the command adapter; they keep it
decoupled from scanner and cache internals.
"""

from .controller import build_engine, rebuild_cache, search

__all__ = ["build_engine", "rebuild_cache", "search"]

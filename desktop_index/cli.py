#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""
Desktop Index - command adapter

    desktop-index <query>          print a launcher response as JSON
    desktop-index --update-cache   rebuild the cache snapshot

The response lists every match; the first match's icon and launch command
become the primary action. An empty result carries "No match found".
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from .app.controller import build_engine
from .config import IndexConfig, load_config
from .core.desktop_entry import DesktopEntry
from .core.query_engine import SearchResult
from .exceptions import BaseError
from .logging_config import cleanup_logging, setup_logging
from .version import load_version

logger = logging.getLogger(__name__)

UPDATE_CACHE_FLAG = "--update-cache"
RESPONSE_TITLE = "Launch"
NO_MATCH_MESSAGE = "No match found"
DEFAULT_ICON_PATH = "/usr/share/icons/Adwaita/scalable/mimetypes/application-x-executable.svg"


def entry_to_element(entry: DesktopEntry) -> Dict[str, Any]:
    return {
        "name": entry.name,
        "icon": entry.icon or DEFAULT_ICON_PATH,
        "exec": entry.exec,
    }


def build_response(result: SearchResult) -> Dict[str, Any]:
    if result.is_empty:
        return {
            "title": RESPONSE_TITLE,
            "error": NO_MATCH_MESSAGE,
            "elements": [],
            "action": None,
            "set_icon": None,
        }

    first = result.first
    elements: List[Dict[str, Any]] = [entry_to_element(entry) for entry in result]
    return {
        "title": RESPONSE_TITLE,
        "error": None,
        "elements": elements,
        "action": {"launch": first.exec, "close_after_run": True},
        "set_icon": first.icon,
    }


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="desktop-index",
        description="Search installed applications by name.",
    )
    parser.add_argument("query", nargs="?", help="substring to search for")
    parser.add_argument(UPDATE_CACHE_FLAG, dest="update_cache", action="store_true",
                        help="rebuild the cache snapshot and exit")
    parser.add_argument("--limit", type=int, default=None, help="maximum number of matches")
    parser.add_argument("--config", default=None, help="path to a YAML or JSON config file")
    parser.add_argument("--log-level", default=None, help="override the configured log level")
    parser.add_argument("--version", action="version", version=f"%(prog)s {load_version()}")
    return parser


def _configure_logging(config: IndexConfig, level_override: Optional[str]) -> None:
    log_cfg = config.logging
    setup_logging(
        log_level=level_override or log_cfg.level,
        log_dir=log_cfg.log_dir,
        enable_file_logging=log_cfg.file_logging,
        structured_json=log_cfg.structured_json,
    )


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    if not args.update_cache and args.query is None:
        return 0

    try:
        config = load_config(args.config)
        _configure_logging(config, args.log_level)
        engine = build_engine(config)

        if args.update_cache:
            print("Updating cache...")
            engine.rebuild()
            return 0

        result = engine.search(args.query, args.limit)
    except BaseError as exc:
        logger.error(f"{exc}")
        logger.debug(f"Error details: {exc.to_dict()}")
        return 1
    finally:
        cleanup_logging()

    print(json.dumps(build_response(result)))
    return 0


if __name__ == "__main__":
    sys.exit(main())

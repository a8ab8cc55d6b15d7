"""Directories that may hold application descriptor files."""

from __future__ import annotations

import logging
import os
import re
import shlex
from pathlib import Path
from typing import Iterable, List, Optional

logger = logging.getLogger(__name__)

SYSTEM_APPLICATIONS_DIR = "/usr/share/applications"
LOCAL_APPLICATIONS_DIR = "/usr/local/share/applications"
FLATPAK_APPLICATIONS_DIR = "/var/lib/flatpak/exports/share/applications"

_USER_DIR_LINE = re.compile(r'^\s*XDG_DESKTOP_DIR\s*=\s*(.+?)\s*$')


def _home() -> str:
    return os.environ.get("HOME") or os.path.expanduser("~")


def user_desktop_dir() -> str:
    """XDG_DESKTOP_DIR from user-dirs.dirs with $HOME expanded (default ~/Desktop)."""
    home = _home()
    config_home = os.environ.get("XDG_CONFIG_HOME") or os.path.join(home, ".config")
    user_dirs = Path(config_home) / "user-dirs.dirs"
    try:
        lines = user_dirs.read_text(encoding="utf-8").splitlines()
    except OSError:
        lines = []

    for line in lines:
        match = _USER_DIR_LINE.match(line)
        if not match:
            continue
        try:
            parts = shlex.split(match.group(1))
        except ValueError:
            continue
        if parts:
            return parts[0].replace("$HOME", home)
    return os.path.join(home, "Desktop")


def system_application_dirs() -> Optional[List[str]]:
    """Application directories reported by the XDG base directory environment.

    Returns None when XDG_DATA_DIRS is not set.
    """
    data_dirs = os.environ.get("XDG_DATA_DIRS")
    if not data_dirs:
        return None
    data_home = os.environ.get("XDG_DATA_HOME") or os.path.join(_home(), ".local", "share")
    dirs = [os.path.join(data_home, "applications")]
    dirs.extend(os.path.join(d, "applications") for d in data_dirs.split(":") if d)
    return dirs


def fallback_application_dirs() -> List[str]:
    return [
        SYSTEM_APPLICATIONS_DIR,
        LOCAL_APPLICATIONS_DIR,
        os.path.join(_home(), ".local", "share", "applications"),
        user_desktop_dir(),
        FLATPAK_APPLICATIONS_DIR,
    ]


def _dedupe(dirs: Iterable[str]) -> List[str]:
    seen = set()
    result = []
    for d in dirs:
        key = os.path.normpath(d)
        if key in seen:
            continue
        seen.add(key)
        result.append(d)
    return result


def resolve_source_dirs(configured: Optional[Iterable[str]] = None) -> List[str]:
    """Source directories in priority order: config override, XDG, fixed fallback."""
    if configured:
        dirs = [os.path.expanduser(d) for d in configured]
        origin = "config"
    else:
        reported = system_application_dirs()
        if reported:
            dirs, origin = reported, "xdg"
        else:
            dirs, origin = fallback_application_dirs(), "fallback"
    dirs = _dedupe(dirs)
    logger.debug(f"Source directories ({origin}): {dirs}")
    return dirs

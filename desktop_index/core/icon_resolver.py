"""
Icon lookup for desktop entries.

The scanner only needs `resolve(name, preferred_size)`; ThemeIconResolver
is the filesystem-backed implementation used by default.

Search order:
1. <root>/icons/<theme>, then <root>/icons/hicolor for every data root
2. inside each theme: <size>x<size>, scalable, then the other sizes (largest first)
3. /usr/share/pixmaps
"""

from __future__ import annotations

import configparser
import logging
import os
import threading
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Protocol, Tuple

logger = logging.getLogger(__name__)

FALLBACK_THEME = "hicolor"
ICON_EXTENSIONS = (".png", ".svg", ".xpm")
KNOWN_SIZES = (512, 256, 192, 128, 96, 72, 64, 48, 36, 32, 24, 22, 16)
PIXMAPS_DIR = Path("/usr/share/pixmaps")


class IconResolver(Protocol):
    def resolve(self, name: str, preferred_size: int) -> Optional[str]:
        ...


class NullIconResolver:
    """Resolver that never finds anything."""

    def resolve(self, name: str, preferred_size: int) -> Optional[str]:
        return None


def _xdg_data_roots() -> List[Path]:
    home = Path(os.path.expanduser("~"))
    data_home = os.environ.get("XDG_DATA_HOME") or str(home / ".local" / "share")
    data_dirs = os.environ.get("XDG_DATA_DIRS") or "/usr/local/share:/usr/share"
    roots = [Path(data_home)]
    roots.extend(Path(d) for d in data_dirs.split(":") if d)
    return roots


def detect_gtk_icon_theme() -> Optional[str]:
    """Read gtk-icon-theme-name from the user's GTK 3 settings, if any."""
    config_home = os.environ.get("XDG_CONFIG_HOME") or os.path.join(os.path.expanduser("~"), ".config")
    settings = Path(config_home) / "gtk-3.0" / "settings.ini"
    if not settings.is_file():
        return None
    parser = configparser.ConfigParser(interpolation=None, strict=False)
    try:
        parser.read(settings, encoding="utf-8")
    except (OSError, configparser.Error) as exc:
        logger.debug(f"Could not read {settings}: {exc}")
        return None
    theme = parser.get("Settings", "gtk-icon-theme-name", fallback=None)
    return theme.strip().strip('"') if theme else None


def _size_dirs(preferred_size: int) -> List[str]:
    dirs = [f"{preferred_size}x{preferred_size}", "scalable"]
    dirs.extend(f"{s}x{s}" for s in KNOWN_SIZES if s != preferred_size)
    return dirs


class ThemeIconResolver:
    """Resolves freedesktop icon names against installed icon themes."""

    def __init__(self, theme: Optional[str] = None, search_roots: Optional[Iterable[os.PathLike]] = None,
                 pixmaps_dir: Optional[os.PathLike] = PIXMAPS_DIR):
        self.theme = theme or detect_gtk_icon_theme() or FALLBACK_THEME
        if search_roots is None:
            roots = _xdg_data_roots()
            self._icon_dirs = [Path(os.path.expanduser("~")) / ".icons"] + [r / "icons" for r in roots]
        else:
            self._icon_dirs = [Path(r) / "icons" for r in search_roots]
        self._pixmaps_dir = Path(pixmaps_dir) if pixmaps_dir is not None else None
        self._cache: Dict[Tuple[str, int], Optional[str]] = {}
        self._lock = threading.Lock()

    def _theme_dirs(self) -> List[Path]:
        themes = [self.theme] if self.theme == FALLBACK_THEME else [self.theme, FALLBACK_THEME]
        return [base / theme for theme in themes for base in self._icon_dirs]

    def _lookup(self, name: str, preferred_size: int) -> Optional[str]:
        for theme_dir in self._theme_dirs():
            if not theme_dir.is_dir():
                continue
            for size_dir in _size_dirs(preferred_size):
                for ext in ICON_EXTENSIONS:
                    candidate = theme_dir / size_dir / "apps" / f"{name}{ext}"
                    if candidate.is_file():
                        return str(candidate)

        if self._pixmaps_dir is not None:
            for ext in ICON_EXTENSIONS:
                candidate = self._pixmaps_dir / f"{name}{ext}"
                if candidate.is_file():
                    return str(candidate)
        return None

    def resolve(self, name: str, preferred_size: int) -> Optional[str]:
        if not name or "/" in name:
            return None
        key = (name, preferred_size)
        with self._lock:
            if key in self._cache:
                return self._cache[key]
        found = self._lookup(name, preferred_size)
        with self._lock:
            self._cache[key] = found
        if found is None:
            logger.debug(f"No icon found for {name!r} at size {preferred_size}")
        return found

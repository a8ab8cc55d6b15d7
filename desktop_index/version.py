"""Version utilities for Desktop Index."""

from __future__ import annotations

from importlib import metadata

DISTRIBUTION_NAME = "desktop-index"
FALLBACK_VERSION = "0.1.0"


def load_version() -> str:
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return FALLBACK_VERSION

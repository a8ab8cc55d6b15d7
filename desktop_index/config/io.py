"""Config I/O utilities."""

from __future__ import annotations

import json
import os
import logging
from pathlib import Path
from typing import Any, Dict, Optional

import pydantic
import yaml

from ..exceptions import ValidationError
from .models import IndexConfig, validate_config

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "DESKTOP_INDEX_CONFIG"
CONFIG_DIR_NAME = "desktop-index"
CONFIG_FILE_NAME = "config.yaml"


def get_config_path() -> Path:
    override = os.environ.get(CONFIG_ENV_VAR, "").strip()
    if override:
        return Path(override)
    config_home = os.environ.get("XDG_CONFIG_HOME") or os.path.join(os.path.expanduser("~"), ".config")
    return Path(config_home) / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def _load_raw(path: Path) -> Optional[Dict[str, Any]]:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        logger.warning(f"Config file {path} could not be read: {exc}")
        return None

    try:
        if path.suffix.lower() == ".json":
            data = json.loads(raw)
        else:
            data = yaml.safe_load(raw)
    except (ValueError, yaml.YAMLError) as exc:
        logger.warning(f"Config file {path} could not be parsed: {exc}")
        return None

    if data is None:
        return {}
    if not isinstance(data, dict):
        logger.warning(f"Config file {path} does not contain a mapping; using defaults")
        return None
    return data


def _section(data: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = data.get(name)
    if not isinstance(section, dict):
        section = {}
        data[name] = section
    return section


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    cache_path = os.environ.get("DESKTOP_INDEX_CACHE_PATH", "").strip()
    if cache_path:
        _section(data, "cache")["path"] = cache_path

    log_level = os.environ.get("DESKTOP_INDEX_LOG_LEVEL", "").strip()
    if log_level:
        _section(data, "logging")["level"] = log_level

    max_workers = os.environ.get("DESKTOP_INDEX_MAX_WORKERS", "").strip()
    if max_workers:
        try:
            _section(data, "scanner")["max_workers"] = int(max_workers)
        except ValueError:
            logger.warning(f"Ignoring non-numeric DESKTOP_INDEX_MAX_WORKERS={max_workers!r}")
    return data


def load_config(config_path: Optional[os.PathLike] = None) -> IndexConfig:
    """Load the index configuration.

    A missing or unparsable file falls back to defaults; a file that parses
    but holds invalid values raises ValidationError.
    """
    path = Path(config_path) if config_path is not None else get_config_path()

    data: Dict[str, Any] = {}
    if path.exists():
        loaded = _load_raw(path)
        if loaded is not None:
            data = loaded
    else:
        logger.debug(f"No config file at {path}; using defaults")

    for section in ("scanner", "cache", "icons", "search", "logging"):
        if section in data and data[section] is None:
            data[section] = {}

    data = _apply_env_overrides(data)

    try:
        return validate_config(data)
    except pydantic.ValidationError as exc:
        raise ValidationError(
            f"Invalid configuration in {path}",
            file_path=str(path),
            errors=[f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in exc.errors()],
        ) from exc


def save_config(config: IndexConfig, config_path: Optional[os.PathLike] = None) -> Path:
    path = Path(config_path) if config_path is not None else get_config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json")
    if path.suffix.lower() == ".json":
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    else:
        path.write_text(yaml.safe_dump(data, sort_keys=False), encoding="utf-8")
    return path

#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""Desktop Index - configuration package.

Pydantic models for every setting plus YAML/JSON loading with
environment overrides.
"""

from .io import get_config_path, load_config, save_config
from .models import (
    DEFAULT_CACHE_PATH,
    CacheConfig,
    IconConfig,
    IndexConfig,
    LoggingConfig,
    ScannerConfig,
    SearchConfig,
    validate_config,
)

__all__ = [
    'DEFAULT_CACHE_PATH',
    'CacheConfig',
    'IconConfig',
    'IndexConfig',
    'LoggingConfig',
    'ScannerConfig',
    'SearchConfig',
    'get_config_path',
    'load_config',
    'save_config',
    'validate_config',
]

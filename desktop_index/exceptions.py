#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""
Desktop Index - Exception Classes

All project-specific exceptions live here. Per-item scan problems
(unreadable files, malformed descriptors) are never raised through these
classes; they are skipped where they occur.
"""

from datetime import datetime
from typing import Dict, Any, Optional


class BaseError(Exception):
    """Base class for all project-specific errors."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.error_code = error_code or "ERROR"
        self.details = details or {}
        self.timestamp = datetime.now()

    def to_dict(self) -> Dict[str, Any]:
        """Converts the exception to a dictionary for structured logging."""
        return {
            'error_code': self.error_code,
            'message': str(self),
            'details': self.details,
            'timestamp': self.timestamp.isoformat()
        }


# =====================================================================================================
# Configuration-related errors
# =====================================================================================================

class ConfigurationError(BaseError):
    """Base class for configuration errors."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 file_path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        config_details = details or {}
        if file_path:
            config_details['file_path'] = str(file_path)
        super().__init__(message, error_code or "CONFIG_ERROR", config_details)


class ValidationError(ConfigurationError):
    """Raised when configuration validation fails."""

    def __init__(self, message: str, file_path: Optional[str] = None,
                 errors: Optional[list] = None,
                 details: Optional[Dict[str, Any]] = None):
        validation_details = details or {}
        if errors:
            validation_details['errors'] = errors
        super().__init__(message, "VALIDATION_ERROR", file_path, validation_details)


# =====================================================================================================
# Scanning errors
# =====================================================================================================

class ScannerError(BaseError):
    """Raised when a scan cannot run at all (never for a single bad file)."""

    def __init__(self, message: str, directory: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        scanner_details = details or {}
        if directory:
            scanner_details['directory'] = str(directory)
        super().__init__(message, "SCANNER_ERROR", scanner_details)


# =====================================================================================================
# Cache errors
# =====================================================================================================

class CacheError(BaseError):
    """Base class for cache store errors."""

    def __init__(self, message: str, error_code: Optional[str] = None,
                 cache_path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        cache_details = details or {}
        if cache_path:
            cache_details['cache_path'] = str(cache_path)
        super().__init__(message, error_code or "CACHE_ERROR", cache_details)


class CacheDecodeError(CacheError):
    """Raised when a cache file exists but its content is malformed."""

    def __init__(self, message: str, cache_path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "CACHE_DECODE_ERROR", cache_path, details)


class CacheWriteError(CacheError):
    """Raised when a snapshot cannot be persisted."""

    def __init__(self, message: str, cache_path: Optional[str] = None,
                 details: Optional[Dict[str, Any]] = None):
        super().__init__(message, "CACHE_WRITE_ERROR", cache_path, details)

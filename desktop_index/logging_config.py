#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""
Logging setup for Desktop Index.

Features:
- Level-specific console format with optional ANSI colours
- Optional size-rotated log file
- Structured JSON output (DESKTOP_INDEX_LOG_JSON=1)
- Lightweight timing of scans and cache I/O

Console output goes to stderr; stdout is reserved for the command
adapter's response payload.
"""

import logging
import logging.handlers
import os
import sys
import time
import threading
import json
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional, Dict, Any
from functools import lru_cache
from collections import defaultdict

SLOW_OPERATION_SECONDS = 1.0
DEFAULT_LOG_FILE = "desktop_index.log"

# =====================================================================================================
# Formatters
# =====================================================================================================

class FastFormatter(logging.Formatter):
    """Formatter with one pre-built format per level."""

    _formats = {
        logging.ERROR: "[{asctime}] ERROR   [{name}] {message}",
        logging.WARNING: "[{asctime}] WARNING [{name}] {message}",
        logging.INFO: "[{asctime}] INFO    {message}",
        logging.DEBUG: "[{asctime}] DEBUG   {name}:{lineno} - {message}",
    }

    _colors = {
        'ERROR': '\033[91m',
        'WARNING': '\033[93m',
        'INFO': '\033[92m',
        'DEBUG': '\033[94m',
        'RESET': '\033[0m',
    }

    def __init__(self, enable_colors: bool = False):
        super().__init__()
        self.enable_colors = enable_colors
        self._formatters = {
            level: logging.Formatter(fmt, style='{', datefmt='%H:%M:%S')
            for level, fmt in self._formats.items()
        }

    def format(self, record):
        formatter = self._formatters.get(record.levelno, self._formatters[logging.INFO])
        text = formatter.format(record)
        if self.enable_colors and record.levelname in self._colors:
            return f"{self._colors[record.levelname]}{text}{self._colors['RESET']}"
        return text


class JsonFormatter(logging.Formatter):
    """Structured JSON formatter (optional)."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "pathname": record.pathname,
            "lineno": record.lineno,
            "thread": record.threadName,
            "process": record.process,
        }
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, ensure_ascii=False)

# =====================================================================================================
# Performance logger
# =====================================================================================================

class SimplePerformanceLogger:
    """Accumulates operation timings; warns about slow operations."""

    def __init__(self, name: str = "desktop_index.performance"):
        self.logger = logging.getLogger(name)
        self.metrics = defaultdict(float)
        self.counts = defaultdict(int)
        self._lock = threading.Lock()

    def log_timing(self, operation: str, duration: float):
        with self._lock:
            self.metrics[operation] += duration
            self.counts[operation] += 1

        if duration > SLOW_OPERATION_SECONDS:
            self.logger.warning(f"SLOW: {operation} took {duration:.2f}s")
        else:
            self.logger.debug(f"{operation} took {duration:.3f}s")

    def get_stats(self) -> Dict[str, Any]:
        with self._lock:
            stats = {}
            for operation in self.metrics:
                count = self.counts[operation]
                total = self.metrics[operation]
                stats[operation] = {
                    'count': count,
                    'total_time': total,
                    'avg_time': total / count if count > 0 else 0
                }
            return stats

    def reset(self):
        with self._lock:
            self.metrics.clear()
            self.counts.clear()

# =====================================================================================================
# Main Setup Function
# =====================================================================================================

def _env_bool(name: str, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def setup_logging(
    log_level: str = "WARNING",
    log_dir: Optional[str] = None,
    enable_file_logging: bool = False,
    enable_console_logging: bool = True,
    max_log_size: str = "10MB",
    backup_count: int = 3,
    structured_json: Optional[bool] = None
) -> Dict[str, Any]:
    """
    Configure the root logger for Desktop Index.

    Returns a dict with the installed handlers and the log directory
    (None when file logging is off).
    """
    numeric_level = getattr(logging, log_level.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handlers = {}
    use_json = structured_json if structured_json is not None else _env_bool("DESKTOP_INDEX_LOG_JSON")

    if enable_console_logging:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(numeric_level)

        enable_colors = (hasattr(sys.stderr, 'isatty') and
                         sys.stderr.isatty() and
                         os.environ.get('TERM') != 'dumb')

        console_handler.setFormatter(JsonFormatter() if use_json else FastFormatter(enable_colors=enable_colors))
        root_logger.addHandler(console_handler)
        handlers['console'] = console_handler

    log_dir_path = None
    if enable_file_logging:
        log_dir_path = Path(log_dir) if log_dir else _default_log_dir()
        log_dir_path.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            str(log_dir_path / DEFAULT_LOG_FILE),
            maxBytes=_parse_size_string(max_log_size),
            backupCount=backup_count,
            encoding='utf-8'
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(JsonFormatter() if use_json else FastFormatter())
        root_logger.addHandler(file_handler)
        handlers['file'] = file_handler

    get_logger('logging').debug(
        f"Logging initialised: level={log_level} file={enable_file_logging} json={use_json}"
    )

    return {
        'handlers': handlers,
        'log_dir': log_dir_path
    }

# =====================================================================================================
# Utility functions
# =====================================================================================================

def _default_log_dir() -> Path:
    state_home = os.environ.get("XDG_STATE_HOME") or os.path.join(os.path.expanduser("~"), ".local", "state")
    return Path(state_home) / "desktop-index"


def _parse_size_string(size_str: str) -> int:
    """Parse size string into bytes."""
    size_str = size_str.upper().strip()

    multipliers = {
        'KB': 1024,
        'MB': 1024 ** 2,
        'GB': 1024 ** 3,
        'B': 1,
    }

    for suffix, multiplier in multipliers.items():
        if size_str.endswith(suffix):
            try:
                number = float(size_str[:-len(suffix)].strip())
                return int(number * multiplier)
            except ValueError:
                continue

    try:
        return int(float(size_str))
    except ValueError:
        pass

    return 10 * 1024 * 1024


@lru_cache(maxsize=32)
def get_logger(name: str) -> logging.Logger:
    """Get cached logger instance."""
    return logging.getLogger(f"desktop_index.{name}")


def cleanup_logging():
    """Close and detach every root handler."""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)
    get_logger.cache_clear()

# =====================================================================================================
# Performance monitoring
# =====================================================================================================

_performance_logger = SimplePerformanceLogger()


def log_performance(operation: str, duration: float):
    _performance_logger.log_timing(operation, duration)


def get_performance_stats() -> Dict[str, Any]:
    return _performance_logger.get_stats()


class LoggingTimer:
    """Times a block and records it with the performance logger."""

    def __init__(self, operation_name: str):
        self.operation_name = operation_name
        self.start_time = None

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self.start_time:
            duration = time.perf_counter() - self.start_time
            log_performance(self.operation_name, duration)

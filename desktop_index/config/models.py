from __future__ import annotations

from typing import Any, Dict, List, Optional, cast

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_CACHE_PATH = "/tmp/fsearch_desktop_cache.json"
DEFAULT_SUFFIX = ".desktop"


class _BaseConfigModel(BaseModel):
    model_config = ConfigDict(extra="allow")


class ScannerConfig(_BaseConfigModel):
    source_dirs: List[str] = Field(default_factory=list)
    max_workers: Optional[int] = Field(default=None, ge=1, le=32)
    suffix: str = DEFAULT_SUFFIX
    encoding: str = "utf-8"

    @field_validator("suffix")
    @classmethod
    def _suffix_has_dot(cls, value: str) -> str:
        if not value.startswith("."):
            raise ValueError("suffix must start with '.'")
        return value


class CacheConfig(_BaseConfigModel):
    path: str = DEFAULT_CACHE_PATH
    rebuild_limit: int = Field(default=1000, ge=1)
    build_on_miss: bool = True
    indent: Optional[int] = None


class IconConfig(_BaseConfigModel):
    preferred_size: int = Field(default=128, ge=1)
    theme: Optional[str] = None


class SearchConfig(_BaseConfigModel):
    default_limit: int = Field(default=10, ge=1)


class LoggingConfig(_BaseConfigModel):
    level: str = "WARNING"
    file_logging: bool = False
    log_dir: Optional[str] = None
    structured_json: Optional[bool] = None


class IndexConfig(_BaseConfigModel):
    scanner: ScannerConfig = Field(default_factory=ScannerConfig)
    cache: CacheConfig = Field(default_factory=CacheConfig)
    icons: IconConfig = Field(default_factory=IconConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def validate_config(payload: Dict[str, Any]) -> IndexConfig:
    return cast(IndexConfig, IndexConfig.model_validate(payload))

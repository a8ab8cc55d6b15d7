from __future__ import annotations

import json
from pathlib import Path

import pytest

from desktop_index.config import DEFAULT_CACHE_PATH, IndexConfig, load_config, save_config, validate_config
from desktop_index.exceptions import ConfigurationError, ValidationError


def test_defaults() -> None:
    cfg = IndexConfig()
    assert cfg.cache.path == DEFAULT_CACHE_PATH
    assert cfg.cache.rebuild_limit == 1000
    assert cfg.cache.build_on_miss is True
    assert cfg.icons.preferred_size == 128
    assert cfg.search.default_limit == 10
    assert cfg.scanner.suffix == ".desktop"
    assert cfg.scanner.source_dirs == []


def test_validate_config_minimal() -> None:
    cfg = validate_config({"scanner": {"max_workers": 4}, "icons": {"theme": "Papirus"}})
    assert cfg.scanner.max_workers == 4
    assert cfg.icons.theme == "Papirus"


def test_missing_file_yields_defaults(isolated_env: Path) -> None:
    cfg = load_config()
    assert cfg == IndexConfig()


def test_yaml_file_is_loaded(tmp_path: Path, isolated_env: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text(
        "scanner:\n"
        "  source_dirs:\n"
        "    - /srv/applications\n"
        "cache:\n"
        "  path: /var/tmp/index.json\n"
        "  rebuild_limit: 50\n"
        "search:\n"
        "  default_limit: 3\n",
        encoding="utf-8",
    )

    cfg = load_config(path)

    assert cfg.scanner.source_dirs == ["/srv/applications"]
    assert cfg.cache.path == "/var/tmp/index.json"
    assert cfg.cache.rebuild_limit == 50
    assert cfg.search.default_limit == 3


def test_json_file_is_loaded(tmp_path: Path, isolated_env: Path) -> None:
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"cache": {"build_on_miss": False}}), encoding="utf-8")

    assert load_config(path).cache.build_on_miss is False


def test_config_path_from_environment(tmp_path: Path, isolated_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "custom.yaml"
    path.write_text("icons:\n  preferred_size: 48\n", encoding="utf-8")
    monkeypatch.setenv("DESKTOP_INDEX_CONFIG", str(path))

    assert load_config().icons.preferred_size == 48


def test_environment_overrides(isolated_env: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("DESKTOP_INDEX_CACHE_PATH", "/tmp/other-cache.json")
    monkeypatch.setenv("DESKTOP_INDEX_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("DESKTOP_INDEX_MAX_WORKERS", "3")

    cfg = load_config()

    assert cfg.cache.path == "/tmp/other-cache.json"
    assert cfg.logging.level == "DEBUG"
    assert cfg.scanner.max_workers == 3


def test_unparsable_file_falls_back_to_defaults(tmp_path: Path, isolated_env: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("scanner: [unclosed\n", encoding="utf-8")

    assert load_config(path) == IndexConfig()


def test_unparsable_file_warning_names_the_file(tmp_path: Path, isolated_env: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("scanner: [unclosed\n", encoding="utf-8")

    with caplog.at_level("WARNING", logger="desktop_index.config.io"):
        load_config(path)

    assert any(f"Config file {path} could not be parsed" in r.getMessage() for r in caplog.records)


def test_empty_sections_are_accepted(tmp_path: Path, isolated_env: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("cache:\nscanner:\n", encoding="utf-8")

    assert load_config(path) == IndexConfig()


def test_invalid_values_raise_validation_error(tmp_path: Path, isolated_env: Path) -> None:
    path = tmp_path / "config.yaml"
    path.write_text("cache:\n  rebuild_limit: 0\nscanner:\n  suffix: desktop\n", encoding="utf-8")

    with pytest.raises(ValidationError) as excinfo:
        load_config(path)

    assert isinstance(excinfo.value, ConfigurationError)
    assert excinfo.value.details["file_path"] == str(path)
    assert len(excinfo.value.details["errors"]) == 2


def test_save_then_load(tmp_path: Path, isolated_env: Path) -> None:
    cfg = validate_config({"cache": {"path": "/tmp/x.json", "indent": 2}})
    path = save_config(cfg, tmp_path / "out" / "config.yaml")

    assert load_config(path) == cfg

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Optional

import pytest

# Ensure repo root on path
ROOT = Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


def render_desktop_file(
    name: Optional[str] = None,
    generic_name: Optional[str] = None,
    comment: Optional[str] = None,
    exec_cmd: Optional[str] = None,
    icon: Optional[str] = None,
) -> str:
    lines = ["[Desktop Entry]", "Type=Application"]
    for key, value in (
        ("Name", name),
        ("GenericName", generic_name),
        ("Comment", comment),
        ("Exec", exec_cmd),
        ("Icon", icon),
    ):
        if value is not None:
            lines.append(f"{key}={value}")
    return "\n".join(lines) + "\n"


@pytest.fixture
def write_desktop() -> Callable[..., Path]:
    """Write a descriptor file: write_desktop(directory, "app.desktop", name=..., ...)."""

    def _write(directory: Path, filename: str, **fields) -> Path:
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / filename
        path.write_text(render_desktop_file(**fields), encoding="utf-8")
        return path

    return _write


@pytest.fixture
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point HOME and the XDG variables at an empty temporary tree."""
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(home / ".config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(home / ".local" / "share"))
    monkeypatch.delenv("XDG_DATA_DIRS", raising=False)
    for var in (
        "DESKTOP_INDEX_CONFIG",
        "DESKTOP_INDEX_CACHE_PATH",
        "DESKTOP_INDEX_LOG_LEVEL",
        "DESKTOP_INDEX_MAX_WORKERS",
        "DESKTOP_INDEX_LOG_JSON",
    ):
        monkeypatch.delenv(var, raising=False)
    return home

from __future__ import annotations

from pathlib import Path

from desktop_index.core.icon_resolver import (
    NullIconResolver,
    ThemeIconResolver,
    detect_gtk_icon_theme,
)


def _icon(root: Path, theme: str, size_dir: str, name: str) -> Path:
    path = root / "icons" / theme / size_dir / "apps" / name
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"icon")
    return path


def _resolver(tmp_path: Path, theme: str = "hicolor") -> ThemeIconResolver:
    return ThemeIconResolver(theme=theme, search_roots=[tmp_path / "share"], pixmaps_dir=tmp_path / "pixmaps")


def test_resolves_from_hicolor(tmp_path: Path) -> None:
    expected = _icon(tmp_path / "share", "hicolor", "128x128", "firefox.png")
    assert _resolver(tmp_path).resolve("firefox", 128) == str(expected)


def test_preferred_size_wins_over_other_sizes(tmp_path: Path) -> None:
    _icon(tmp_path / "share", "hicolor", "48x48", "gimp.png")
    preferred = _icon(tmp_path / "share", "hicolor", "64x64", "gimp.png")

    assert _resolver(tmp_path).resolve("gimp", 64) == str(preferred)


def test_scalable_is_used_when_preferred_size_missing(tmp_path: Path) -> None:
    _icon(tmp_path / "share", "hicolor", "16x16", "app.png")
    scalable = _icon(tmp_path / "share", "hicolor", "scalable", "app.svg")

    assert _resolver(tmp_path).resolve("app", 128) == str(scalable)


def test_active_theme_before_hicolor(tmp_path: Path) -> None:
    _icon(tmp_path / "share", "hicolor", "128x128", "term.png")
    themed = _icon(tmp_path / "share", "Papirus", "scalable", "term.svg")

    assert _resolver(tmp_path, theme="Papirus").resolve("term", 128) == str(themed)


def test_pixmaps_fallback(tmp_path: Path) -> None:
    pixmap = tmp_path / "pixmaps" / "legacy.xpm"
    pixmap.parent.mkdir(parents=True)
    pixmap.write_bytes(b"xpm")

    assert _resolver(tmp_path).resolve("legacy", 128) == str(pixmap)


def test_unknown_icon_is_none(tmp_path: Path) -> None:
    assert _resolver(tmp_path).resolve("nope", 128) is None
    assert _resolver(tmp_path).resolve("", 128) is None
    assert _resolver(tmp_path).resolve("/abs/missing.png", 128) is None


def test_lookups_are_memoised(tmp_path: Path) -> None:
    resolver = _resolver(tmp_path)
    assert resolver.resolve("late", 128) is None

    _icon(tmp_path / "share", "hicolor", "128x128", "late.png")

    assert resolver.resolve("late", 128) is None
    assert _resolver(tmp_path).resolve("late", 128) is not None


def test_gtk_theme_detection(isolated_env: Path) -> None:
    settings = isolated_env / ".config" / "gtk-3.0" / "settings.ini"
    settings.parent.mkdir(parents=True)
    settings.write_text("[Settings]\ngtk-icon-theme-name=Adwaita\ngtk-theme-name=Adwaita-dark\n", encoding="utf-8")

    assert detect_gtk_icon_theme() == "Adwaita"
    assert ThemeIconResolver(search_roots=[]).theme == "Adwaita"


def test_theme_defaults_to_hicolor(isolated_env: Path) -> None:
    assert detect_gtk_icon_theme() is None
    assert ThemeIconResolver(search_roots=[]).theme == "hicolor"


def test_null_resolver() -> None:
    assert NullIconResolver().resolve("firefox", 128) is None

#!/usr/bin/env python3
# -*-coding: utf-8-*-
"""
Desktop Index - Desktop Entry Models

The indexed record (DesktopEntry) and the parser that structures the raw
text of one `.desktop` descriptor file.
"""

import configparser
import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

DESKTOP_ENTRY_GROUP = "Desktop Entry"

_ESCAPES = {"s": " ", "n": "\n", "t": "\t", "r": "\r", "\\": "\\"}


@dataclass(frozen=True)
class ParsedEntry:
    """Raw fields of one descriptor; every field is None when the key is missing."""

    name: Optional[str] = None
    generic_name: Optional[str] = None
    comment: Optional[str] = None
    exec: Optional[str] = None
    icon: Optional[str] = None


@dataclass(frozen=True)
class DesktopEntry:
    """One indexed application."""

    name: str
    exec: str = ""
    generic_name: Optional[str] = None
    comment: Optional[str] = None
    icon: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DesktopEntry":
        return cls(
            name=data["name"],
            exec=data.get("exec") or "",
            generic_name=data.get("generic_name"),
            comment=data.get("comment"),
            icon=data.get("icon"),
        )

    @classmethod
    def from_parsed(cls, parsed: ParsedEntry, icon: Optional[str] = None) -> Optional["DesktopEntry"]:
        """Build an entry, or None when the descriptor has no display name.

        A descriptor without Name but with GenericName is displayed under
        its generic name.
        """
        name = parsed.name or parsed.generic_name
        if not name:
            return None
        return cls(
            name=name,
            exec=parsed.exec or "",
            generic_name=parsed.generic_name,
            comment=parsed.comment,
            icon=icon,
        )


def _unescape(value: str) -> str:
    if "\\" not in value:
        return value
    out = []
    chars = iter(value)
    for char in chars:
        if char != "\\":
            out.append(char)
            continue
        nxt = next(chars, None)
        if nxt is None:
            out.append("\\")
        elif nxt in _ESCAPES:
            out.append(_ESCAPES[nxt])
        else:
            out.append("\\" + nxt)
    return "".join(out)


def _new_parser() -> configparser.ConfigParser:
    parser = configparser.ConfigParser(
        interpolation=None,
        strict=False,
        delimiters=("=",),
        comment_prefixes=("#", ";"),
        empty_lines_in_values=False,
        default_section="__no_default__",
    )
    # Keys are case-sensitive ("Name" vs "name").
    parser.optionxform = str  # type: ignore[assignment,method-assign]
    return parser


def _desktop_entry_section(text: str) -> Optional[str]:
    """Lines of the first [Desktop Entry] group, header included.

    Other groups and anything before the header never reach the parser.
    """
    header = f"[{DESKTOP_ENTRY_GROUP}]"
    lines = []
    inside = False
    for line in text.splitlines():
        stripped = line.strip()
        if stripped.startswith("[") and stripped.endswith("]"):
            if inside:
                break
            inside = stripped == header
        if inside:
            lines.append(line)
    if not lines:
        return None
    return "\n".join(lines) + "\n"


def parse_desktop_entry(text: str) -> Optional[ParsedEntry]:
    """Structure the text of one descriptor file.

    Only the unlocalised Name, GenericName, Comment, Exec and Icon keys of
    the [Desktop Entry] group are read. Malformed text inside that group or
    a missing group yields None.
    """
    section = _desktop_entry_section(text)
    if section is None:
        return None

    parser = _new_parser()
    try:
        parser.read_string(section)
    except configparser.Error as exc:
        logger.debug(f"Unparseable descriptor: {exc}")
        return None

    if not parser.has_section(DESKTOP_ENTRY_GROUP):
        return None
    group = parser[DESKTOP_ENTRY_GROUP]

    def field(key: str) -> Optional[str]:
        value = group.get(key)
        if value is None:
            return None
        return _unescape(value.strip())

    return ParsedEntry(
        name=field("Name"),
        generic_name=field("GenericName"),
        comment=field("Comment"),
        exec=field("Exec"),
        icon=field("Icon"),
    )

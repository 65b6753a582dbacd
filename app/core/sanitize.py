"""Normalization helpers for names, emails, notes and other free text."""

from __future__ import annotations

import re
import unicodedata

_SPACES_RE = re.compile(r"\s+")
_BLANK_LINES_RE = re.compile(r"\n{3,}")


def _is_control(ch: str) -> bool:
    return unicodedata.category(ch) == "Cc"


def has_control_chars(value: str) -> bool:
    return any(_is_control(ch) for ch in value)


def clean_text(value: object, *, allow_newlines: bool = False) -> str:
    """Strip control characters and collapse whitespace.

    With ``allow_newlines`` line breaks survive, each line is trimmed and runs
    of blank lines shrink to one.
    """
    if value is None:
        return ""
    text = str(value).replace("\r\n", "\n").replace("\r", "\n")
    if not allow_newlines:
        text = "".join(" " if ch == "\n" else ch for ch in text if ch == "\n" or not _is_control(ch))
        return _SPACES_RE.sub(" ", text).strip()

    lines = ("".join(ch for ch in line if not _is_control(ch)).strip() for line in text.split("\n"))
    return _BLANK_LINES_RE.sub("\n\n", "\n".join(lines)).strip()


def clean_single_line(value: object) -> str:
    return clean_text(value)


def clean_multiline(value: object) -> str:
    return clean_text(value, allow_newlines=True)


def clean_email(value: object) -> str:
    return clean_single_line(value).lower()


def initials_from(full_name: str | None, email: str | None, *, fallback: str = "U") -> str:
    """Avatar initials: first letter of each name word, else the first email letter."""
    name = clean_single_line(full_name)
    if name:
        return "".join(word[0] for word in name.split(" ")).upper()
    address = clean_single_line(email)
    return address[0].upper() if address else fallback

from __future__ import annotations

import re
import unicodedata
from typing import Any

"""Text normalization helpers shared by every layer of the engine.

All helpers accept None (and non-string scalars such as ints coming from
spreadsheets) and treat them as their string form, so callers never have to
guard before normalizing.
"""

__all__ = [
    "normalize_code",
    "normalize_free_text",
    "normalize_email",
    "digits_only",
    "is_blank",
    "pad_left",
    "pad_right",
    "format_numeric_field",
]

_WHITESPACE_RE = re.compile(r"[\s\x00-\x1f\x7f]+")
_NON_DIGIT_RE = re.compile(r"[^0-9]")


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def _strip_accents(text: str) -> str:
    decomposed = unicodedata.normalize("NFD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def normalize_free_text(value: Any) -> str:
    """Strip diacritics and collapse whitespace/control runs, keeping case."""
    text = _strip_accents(_as_text(value))
    return _WHITESPACE_RE.sub(" ", text).strip()


def normalize_code(value: Any) -> str:
    """Canonical form used for catalog keys and uppercase fixed-width fields.

    >>> normalize_code("  Nota de  Crédito\\n")
    'NOTA DE CREDITO'
    """
    # upper() puede generar caracteres descomponibles; segunda pasada
    return normalize_free_text(normalize_free_text(value).upper())


def normalize_email(value: Any) -> str:
    return normalize_free_text(value).lower()


def digits_only(value: Any) -> str:
    return _NON_DIGIT_RE.sub("", _as_text(value))


def is_blank(value: Any) -> bool:
    """True when the value normalizes to an empty string."""
    return normalize_free_text(value) == ""


def pad_left(value: Any, length: int, char: str = "0") -> str:
    """Left-pad to `length`; longer input keeps its rightmost `length` chars."""
    text = _as_text(value)
    if len(text) >= length:
        return text[len(text) - length:]
    return char * (length - len(text)) + text


def pad_right(value: Any, length: int, char: str = " ") -> str:
    """Right-pad to `length`; longer input keeps its leftmost `length` chars."""
    text = _as_text(value)
    if len(text) >= length:
        return text[:length]
    return text + char * (length - len(text))


def format_numeric_field(value: Any, length: int) -> str:
    """Digits of `value`, zero-padded (or left-truncated) to `length`."""
    return pad_left(digits_only(value), length, "0")

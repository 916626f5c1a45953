from __future__ import annotations

import re
from typing import Any

from .errors import RutFormatError

"""Chilean RUT helpers: modulo-11 check digit, validation and formatting.

A RUT is a numeric body followed by a check digit (0-9 or K). Input may come
with dots, hyphens or spaces ("78.168.126-1", "781681261"); everything outside
[0-9kK] is discarded before any computation.
"""

__all__ = [
    "clean_rut",
    "compute_check_digit",
    "is_valid",
    "format_fixed_width10",
    "format_with_hyphen",
]

_RUT_CHARS_RE = re.compile(r"[^0-9kK]")
_MULTIPLIERS = (2, 3, 4, 5, 6, 7)


def clean_rut(value: Any) -> str:
    """Return body + check digit with separators removed, uppercased."""
    return _RUT_CHARS_RE.sub("", "" if value is None else str(value)).upper()


def compute_check_digit(body: str) -> str:
    """Compute the modulo-11 check digit for a numeric RUT body.

    Digits are weighted right-to-left with the cyclic series 2,3,4,5,6,7.
    """
    if not body or not body.isdigit():
        raise RutFormatError(f"cuerpo de RUT inválido: {body!r}")
    total = 0
    for position, digit in enumerate(reversed(body)):
        total += int(digit) * _MULTIPLIERS[position % len(_MULTIPLIERS)]
    remainder = 11 - (total % 11)
    if remainder == 11:
        return "0"
    if remainder == 10:
        return "K"
    return str(remainder)


def is_valid(value: Any) -> bool:
    clean = clean_rut(value)
    if len(clean) < 2:
        return False
    body, check_digit = clean[:-1], clean[-1]
    # K solo es válido como dígito verificador
    if not body.isdigit():
        return False
    return compute_check_digit(body) == check_digit


def format_fixed_width10(value: Any) -> str:
    """Render a RUT as 9 body digits + check digit (exactly 10 chars).

    Bodies longer than 9 digits keep their rightmost 9.
    """
    clean = clean_rut(value)
    if len(clean) < 2:
        raise RutFormatError(f"RUT inválido: {value if value is not None else ''}")
    body = re.sub(r"\D", "", clean[:-1])
    return body.rjust(9, "0")[-9:] + clean[-1]


def format_with_hyphen(value: Any) -> str:
    """'781681261' -> '78168126-1'. Too-short input is returned cleaned as is."""
    clean = clean_rut(value)
    if len(clean) < 2:
        return clean
    return f"{clean[:-1]}-{clean[-1]}"

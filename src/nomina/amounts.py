from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any

from .errors import InvalidAmountError

"""Monetary amount parsing and rounding.

Amounts are whole currency units (CLP has no minor unit in practice).
Rounding is half-up, so 10.5 -> 11 regardless of parity. Very large amounts
are rounded exactly; fixed-width fields truncate them later.
"""

__all__ = [
    "MAX_AMOUNT_DIGITS",
    "is_missing_amount",
    "parse_amount",
    "round_amount",
]

MAX_AMOUNT_DIGITS = 100


def is_missing_amount(value: Any) -> bool:
    """None, empty/blank text and float NaN (empty spreadsheet cell) count as missing."""
    if value is None:
        return True
    if isinstance(value, str):
        return value.strip() == ""
    if isinstance(value, float):
        return math.isnan(value)
    return False


def parse_amount(value: Any) -> Decimal:
    """Parse a finite amount from a number or numeric text.

    Raises:
        InvalidAmountError: missing, boolean, non-numeric or non-finite input.
    """
    if is_missing_amount(value) or isinstance(value, bool):
        raise InvalidAmountError(f"Monto inválido: {value!r}")
    try:
        if isinstance(value, float):
            amount = Decimal(repr(value))
        else:
            amount = Decimal(str(value).strip())
    except (InvalidOperation, ValueError) as e:
        raise InvalidAmountError(f"Monto inválido: {value!r}") from e
    if not amount.is_finite():
        raise InvalidAmountError(f"Monto inválido: {value!r}")
    return amount


def round_amount(value: Any) -> int:
    """Round half-up to an integer amount (negatives allowed here).

    Raises:
        InvalidAmountError: unparsable input, or more than MAX_AMOUNT_DIGITS
            integer digits.
    """
    amount = parse_amount(value)
    if amount and amount.adjusted() >= MAX_AMOUNT_DIGITS:
        raise InvalidAmountError(f"Monto fuera de rango: {value!r}")
    with localcontext() as ctx:
        # quantize exige que el entero quepa en la precisión
        ctx.prec = max(ctx.prec, amount.adjusted() + 2)
        return int(amount.quantize(Decimal("1"), rounding=ROUND_HALF_UP))

from __future__ import annotations

from ..amounts import round_amount
from ..errors import InvalidAmountError, LineLengthError
from ..models.normalized import NormalizedHeader, NormalizedRow
from ..rut import format_fixed_width10
from ..text import (
    format_numeric_field,
    normalize_code,
    normalize_email,
    normalize_free_text,
    pad_right,
)

"""Fixed-width record rendering for the bank payroll file.

Layout (every record is exactly LINE_LENGTH characters):

  "00" header   type(2) rut(10) agreement(3) date(8) line_count(5) total(12)
                literal "2500N"(5), space-padded to the end
  "10" payee    type(2) rut(10) name(40) reserved spaces(94) email(40)
                method code(2) account(16) bank code(3) branch(3) amount(12)
                message(40) flag "S"(1)
  "20" document type(2) doc type code(2) doc number(12) rut(10) name(40)
                message(40) amount(12) trailing spaces(145)

Numeric fields are zero-padded and keep their rightmost digits when too long;
text fields are space-padded and keep their leftmost characters.
"""

__all__ = [
    "LINE_LENGTH",
    "HEADER_LITERAL",
    "format_amount12",
    "build_header_line",
    "build_account_line",
    "build_document_line",
]

LINE_LENGTH = 263
HEADER_LITERAL = "2500N"
RECORD_HEADER = "00"
RECORD_ACCOUNT = "10"
RECORD_DOCUMENT = "20"
ACCOUNT_FLAG = "S"


def format_amount12(value: int | float | str) -> str:
    """Amount rounded half-up and zero-padded to 12 digits.

    Raises:
        InvalidAmountError: negative or non-numeric amount.
    """
    rounded = round_amount(value)
    if rounded < 0:
        raise InvalidAmountError(f"Monto negativo no permitido en exportación: {value}")
    return format_numeric_field(rounded, 12)


def _text(value: str, length: int) -> str:
    # El archivo es ASCII: lo que sobreviva a la normalización se marca con '?'
    ascii_text = value.encode("ascii", "replace").decode("ascii")
    return pad_right(ascii_text, length)


def _check_length(line: str, record_type: str) -> str:
    if len(line) != LINE_LENGTH:
        raise LineLengthError(record_type, LINE_LENGTH, len(line))
    return line


def build_header_line(header: NormalizedHeader, total_amount: int, line_count: int) -> str:
    fixed = "".join(
        [
            RECORD_HEADER,
            format_fixed_width10(header.company_rut),
            format_numeric_field(header.agreement, 3),
            format_numeric_field(header.compact_date, 8),
            format_numeric_field(line_count, 5),
            format_amount12(total_amount),
            HEADER_LITERAL,
        ]
    )
    return _check_length(pad_right(fixed, LINE_LENGTH), RECORD_HEADER)


def build_account_line(
    row: NormalizedRow,
    amount: int | None = None,
    message: str | None = None,
) -> str:
    """Payee record; grouped mode passes the net amount and composite message."""
    line = "".join(
        [
            RECORD_ACCOUNT,
            format_fixed_width10(row.provider_rut),
            _text(normalize_code(row.provider_name), 40),
            " " * 94,
            _text(normalize_email(row.email), 40),
            _text(row.payment_method_code, 2),
            format_numeric_field(row.account, 16),
            format_numeric_field(row.bank_code, 3),
            format_numeric_field(row.branch_code or "000", 3),
            format_amount12(row.amount if amount is None else amount),
            _text(normalize_free_text(row.message if message is None else message), 40),
            ACCOUNT_FLAG,
        ]
    )
    return _check_length(line, RECORD_ACCOUNT)


def build_document_line(row: NormalizedRow) -> str:
    line = "".join(
        [
            RECORD_DOCUMENT,
            _text(row.document_type_code, 2),
            format_numeric_field(row.document_number, 12),
            format_fixed_width10(row.provider_rut),
            _text(normalize_code(row.provider_name), 40),
            _text(normalize_free_text(row.message), 40),
            format_amount12(row.amount),
            " " * 145,
        ]
    )
    return _check_length(line, RECORD_DOCUMENT)

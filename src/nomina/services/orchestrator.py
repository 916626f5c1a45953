from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date

from ..errors import NominaGenerationError, NominaValidationError
from ..models.catalog import NominaCatalogs
from ..models.generated_file import LINE_SEPARATOR, GeneratedFile, OutputMode
from ..models.inputs import HeaderInput, RowInput
from ..models.normalized import NormalizedHeader
from ..models.validation import ValidationResult
from .grouping import group_rows
from .line_builder import build_account_line, build_document_line, build_header_line
from .normalizer import normalize_header, normalize_rows
from .validator import validate as _validate

"""Nomina generation entry points.

Pipeline: validate -> normalize header and rows -> (group) -> render lines
-> GeneratedFile. Each call either returns a complete GeneratedFile or raises
a single NominaError; there is no partial result.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "validate",
    "generate",
    "build_file_name",
]


def validate(
    header: HeaderInput,
    rows: Sequence[RowInput],
    catalogs: NominaCatalogs | None = None,
) -> ValidationResult:
    """Return every validation error for the request. Never raises."""
    return _validate(header, rows, catalogs)


def build_file_name(header: NormalizedHeader, mode: OutputMode) -> str:
    """nomina_<agreement>_<YYYYMMDD>_<normal|agrupada>.txt"""
    return f"nomina_{header.agreement}_{header.compact_date}_{mode.file_suffix}.txt"


def generate(
    header: HeaderInput,
    rows: Sequence[RowInput],
    catalogs: NominaCatalogs | None = None,
    grouped: bool = False,
    *,
    today: date | None = None,
) -> GeneratedFile:
    """Validate, normalize and render a nomina file.

    Args:
        header: Company / agreement header
        rows: Payments, in caller order
        catalogs: Reference catalogs (DEFAULT_CATALOGS when None)
        grouped: Consolidate rows per account with netted amounts
        today: Date used when header.process_date is empty

    Returns:
        GeneratedFile with CRLF-joined content

    Raises:
        NominaValidationError: input invalid (message = first error)
        NegativeGroupTotalError: grouped account with negative net total
        NominaError: any other fatal inconsistency
    """
    result = _validate(header, rows, catalogs)
    if not result.valid:
        first = result.errors[0]
        logger.debug("validation failed with %d error(s)", len(result.errors))
        raise NominaValidationError(
            first.message or "La nómina contiene errores de validación.", result
        )

    normalized_header = normalize_header(header, today=today)
    normalized_rows = normalize_rows(rows, catalogs)

    if grouped:
        mode = OutputMode.GROUPED
        groups = group_rows(normalized_rows)
        total_amount = sum(group.net_amount for group in groups)
        line_count = 1 + len(groups) + len(normalized_rows)
        lines = [build_header_line(normalized_header, total_amount, line_count)]
        for group in groups:
            lines.append(build_account_line(group.header_row, group.net_amount, group.composite_message))
            lines.extend(build_document_line(row) for row in group.detail_rows)
        grouped_rows = tuple(groups)
    else:
        mode = OutputMode.NORMAL
        total_amount = sum(row.amount for row in normalized_rows)
        line_count = 1 + 2 * len(normalized_rows)
        lines = [build_header_line(normalized_header, total_amount, line_count)]
        for row in normalized_rows:
            lines.append(build_account_line(row))
            lines.append(build_document_line(row))
        grouped_rows = None

    if len(lines) != line_count:
        raise NominaGenerationError(
            f"line count mismatch: header declares {line_count}, rendered {len(lines)}"
        )

    file_name = build_file_name(normalized_header, mode)
    logger.debug("generated %s lines=%d total=%d", file_name, line_count, total_amount)
    return GeneratedFile(
        file_name=file_name,
        content=LINE_SEPARATOR.join(lines),
        line_count=line_count,
        total_amount=total_amount,
        mode=mode,
        normalized_header=normalized_header,
        normalized_rows=tuple(normalized_rows),
        grouped_rows=grouped_rows,
    )

from __future__ import annotations

import re
from collections.abc import Sequence

from ..amounts import MAX_AMOUNT_DIGITS, is_missing_amount, parse_amount
from ..errors import InvalidAmountError
from ..models.catalog import NominaCatalogs
from ..models.inputs import HeaderInput, RowInput
from ..models.validation import ErrorScope, ValidationError, ValidationResult
from ..rut import is_valid as is_valid_rut
from ..text import is_blank
from .catalog_resolver import CatalogResolver

"""Field-level validation of a nomina request.

Validation is exhaustive, never fail-fast: every row is checked even when
earlier rows fail, and the result lists all errors in a stable order (header
first, then rows in input order, fields in layout order). Nothing here raises.
"""

__all__ = [
    "DATE_PATTERN",
    "validate_header",
    "validate_rows",
    "validate",
]

DATE_PATTERN = re.compile(r"\d{4}-\d{2}-\d{2}")


def validate_header(header: HeaderInput) -> list[ValidationError]:
    errors: list[ValidationError] = []

    def add(field: str, message: str) -> None:
        errors.append(ValidationError(scope=ErrorScope.HEADER, field=field, message=message))

    if is_blank(header.company_name):
        add("company_name", "El nombre de empresa es obligatorio.")

    if is_blank(header.company_rut):
        add("company_rut", "El RUT de empresa es obligatorio.")
    elif not is_valid_rut(header.company_rut):
        add("company_rut", "El RUT de empresa no es válido.")

    if is_blank(header.agreement):
        add("agreement", "El número de convenio es obligatorio.")

    if header.process_date and not DATE_PATTERN.fullmatch(str(header.process_date)):
        add("process_date", "La fecha debe estar en formato YYYY-MM-DD.")

    return errors


def _validate_row(row: RowInput, row_index: int, resolver: CatalogResolver) -> list[ValidationError]:
    errors: list[ValidationError] = []

    def add(field: str, message: str) -> None:
        errors.append(
            ValidationError(scope=ErrorScope.ROW, field=field, message=message, row_index=row_index)
        )

    if is_blank(row.provider_rut):
        add("provider_rut", "El RUT proveedor es obligatorio.")
    elif not is_valid_rut(row.provider_rut):
        add("provider_rut", "El RUT proveedor no es válido.")

    if is_blank(row.provider_name):
        add("provider_name", "El nombre proveedor es obligatorio.")

    if is_blank(row.bank):
        add("bank", "El banco proveedor es obligatorio.")
    elif resolver.resolve_bank(row.bank) is None:
        add("bank", "El banco proveedor no existe en el catálogo.")

    if is_blank(row.account):
        add("account", "La cuenta proveedor es obligatoria.")

    if is_blank(row.document_type):
        add("document_type", "El tipo de documento es obligatorio.")
    elif resolver.resolve_document_type(row.document_type) is None:
        add("document_type", "El tipo de documento no existe en el catálogo.")

    if is_blank(row.document_number):
        add("document_number", "El número de documento es obligatorio.")

    if is_missing_amount(row.amount):
        add("amount", "El monto es obligatorio.")
    else:
        try:
            amount = parse_amount(row.amount)
        except InvalidAmountError:
            add("amount", "El monto debe ser numérico.")
        else:
            if amount < 0:
                add("amount", "El monto no puede ser negativo.")
            elif amount and amount.adjusted() >= MAX_AMOUNT_DIGITS:
                add("amount", "El monto excede el máximo permitido.")

    if is_blank(row.payment_method):
        add("payment_method", "La forma de pago es obligatoria.")
    elif resolver.resolve_payment_method(row.payment_method) is None:
        add("payment_method", "La forma de pago no existe en el catálogo.")

    return errors


def validate_rows(rows: Sequence[RowInput], catalogs: NominaCatalogs | None = None) -> list[ValidationError]:
    """Validate every row; an empty sequence yields a single SYSTEM error."""
    if not rows:
        return [
            ValidationError(
                scope=ErrorScope.SYSTEM,
                field="rows",
                message="Debes ingresar al menos una fila para generar la nómina.",
            )
        ]
    resolver = CatalogResolver(catalogs)
    errors: list[ValidationError] = []
    for index, row in enumerate(rows):
        errors.extend(_validate_row(row, index, resolver))
    return errors


def validate(
    header: HeaderInput,
    rows: Sequence[RowInput],
    catalogs: NominaCatalogs | None = None,
) -> ValidationResult:
    """Validate header and rows together; `valid` is True iff no errors."""
    errors = validate_header(header) + validate_rows(rows, catalogs)
    return ValidationResult(errors=tuple(errors))

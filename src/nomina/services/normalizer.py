from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import UTC, date, datetime

from ..amounts import round_amount
from ..errors import CatalogResolutionError, InvalidAmountError, NominaGenerationError
from ..models.catalog import NominaCatalogs
from ..models.inputs import HeaderInput, RowInput
from ..models.normalized import NormalizedHeader, NormalizedRow
from ..rut import clean_rut
from ..text import format_numeric_field, normalize_code, normalize_email, normalize_free_text
from .catalog_resolver import CatalogResolver
from .validator import DATE_PATTERN

"""Normalization and mandatory business-rule rewriting.

Rows are expected to have passed validation already; any failure here is a
fatal inconsistency and raises instead of being reported.

Settlement rules applied to every row, in this order:

A. Vale vista (physical or virtual) can only clear through the house bank:
   bank is forced to the house bank and account to "0".
B. Any account outside the house bank must be paid with the external
   transfer method: payment method is forced to CUENTA OTRO BANCO.

Bank and payment method are resolved to their catalog names before the
rules run, so a bank given by code ("014", "14") counts as the house bank
and a method given as "VV" counts as vale vista.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "VALE_VISTA_METHODS",
    "EXTERNAL_ACCOUNT_METHOD",
    "DEFAULT_BRANCH_CODE",
    "normalize_header",
    "normalize_row",
    "normalize_rows",
]

VALE_VISTA_METHODS = frozenset({"VALE VISTA FISICO", "VALE VISTA VIRTUAL"})
EXTERNAL_ACCOUNT_METHOD = "CUENTA OTRO BANCO"
VALE_VISTA_ACCOUNT = "0"
DEFAULT_BRANCH_CODE = "000"


def normalize_header(header: HeaderInput, today: date | None = None) -> NormalizedHeader:
    """Canonical header; process_date defaults to today's UTC date."""
    if header.process_date:
        process_date = str(header.process_date)
        if not DATE_PATTERN.fullmatch(process_date):
            raise NominaGenerationError(f"Fecha inválida, se esperaba YYYY-MM-DD: {process_date}")
    else:
        process_date = (today or datetime.now(UTC).date()).isoformat()
    return NormalizedHeader(
        company_name=normalize_code(header.company_name),
        company_rut=clean_rut(header.company_rut),
        agreement=format_numeric_field(header.agreement, 3),
        process_date=process_date,
    )


def _canonical_name(resolved: object | None, fallback: str) -> str:
    # Acepta código de catálogo ("014", "VV") como si fuera el nombre
    return getattr(resolved, "name", None) or fallback


def normalize_row(
    row: RowInput,
    catalogs: NominaCatalogs | None = None,
    *,
    resolver: CatalogResolver | None = None,
) -> NormalizedRow:
    """Normalize one row and apply the vale vista / foreign bank rules.

    Raises:
        CatalogResolutionError: bank, payment method or document type unknown.
        InvalidAmountError: amount missing, non-numeric or negative.
    """
    resolver = resolver or CatalogResolver(catalogs)
    house_bank = resolver.house_bank

    bank = _canonical_name(resolver.resolve_bank(row.bank), normalize_code(row.bank))
    method = _canonical_name(
        resolver.resolve_payment_method(row.payment_method), normalize_code(row.payment_method)
    )
    account = normalize_code(row.account)
    document_type = normalize_code(row.document_type)

    if method in VALE_VISTA_METHODS:
        if bank != house_bank or account != VALE_VISTA_ACCOUNT:
            logger.debug("vale vista: banco %s cuenta %s -> %s cuenta 0", bank, account, house_bank)
        bank = house_bank
        account = VALE_VISTA_ACCOUNT

    if bank != house_bank and method != EXTERNAL_ACCOUNT_METHOD:
        logger.info(
            "forma de pago %s reemplazada por %s (banco %s)", method, EXTERNAL_ACCOUNT_METHOD, bank
        )
        method = EXTERNAL_ACCOUNT_METHOD

    resolved_bank = resolver.resolve_bank(bank)
    if resolved_bank is None:
        raise CatalogResolutionError(f"Banco no válido: {bank}")
    resolved_method = resolver.resolve_payment_method(method)
    if resolved_method is None:
        raise CatalogResolutionError(f"Forma de pago no válida: {method}")
    resolved_doc_type = resolver.resolve_document_type(document_type)
    if resolved_doc_type is None:
        raise CatalogResolutionError(f"Tipo de documento no válido: {document_type}")

    amount = round_amount(row.amount)
    if amount < 0:
        raise InvalidAmountError(f"Monto negativo no permitido: {row.amount}")

    branch = DEFAULT_BRANCH_CODE if not row.branch_code else format_numeric_field(row.branch_code, 3)

    return NormalizedRow(
        provider_rut=clean_rut(row.provider_rut),
        provider_name=normalize_free_text(row.provider_name),
        bank=resolved_bank.name,
        bank_code=resolved_bank.code,
        account=account,
        document_type=resolved_doc_type.name,
        document_type_code=resolved_doc_type.code,
        document_number=normalize_free_text(row.document_number),
        amount=amount,
        payment_method=resolved_method.name,
        payment_method_code=resolved_method.code,
        branch_code=branch,
        email=normalize_email(row.email),
        message=normalize_free_text(row.message),
    )


def normalize_rows(rows: Sequence[RowInput], catalogs: NominaCatalogs | None = None) -> list[NormalizedRow]:
    """Normalize rows keeping input order (one resolver for the whole batch)."""
    resolver = CatalogResolver(catalogs)
    return [normalize_row(row, resolver=resolver) for row in rows]

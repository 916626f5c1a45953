from __future__ import annotations

from collections.abc import Sequence
from itertools import groupby

from ..errors import NegativeGroupTotalError
from ..models.normalized import GroupedRow, NormalizedRow
from ..text import digits_only, normalize_free_text

"""Grouped output: one account-level record per destination account.

Rows are sorted by (account, document type, document number) using plain
string comparison, so document number "9" sorts after "10". The bank's
spreadsheet macro that this format comes from sorts the same way.
"""

__all__ = [
    "CREDIT_NOTE_TYPE",
    "sort_rows",
    "signed_amount",
    "build_composite_message",
    "group_rows",
]

CREDIT_NOTE_TYPE = "NOTA DE CREDITO"


def _sort_key(row: NormalizedRow) -> tuple[str, str, str]:
    return (row.account, row.document_type, row.document_number)


def sort_rows(rows: Sequence[NormalizedRow]) -> list[NormalizedRow]:
    """Stable ordinal sort; rows with identical keys keep input order."""
    return sorted(rows, key=_sort_key)


def signed_amount(row: NormalizedRow) -> int:
    return -row.amount if row.document_type == CREDIT_NOTE_TYPE else row.amount


def build_composite_message(rows: Sequence[NormalizedRow]) -> str:
    """'Pago FACTURA 1002-2001-...' built from the rows of one group.

    >>> from types import SimpleNamespace as R
    >>> build_composite_message([R(document_type="FACTURA", document_number="1002"),
    ...                          R(document_type="NOTA DE CREDITO", document_number="NC-2001")])
    'Pago FACTURA 1002-2001'
    """
    if not rows:
        return ""
    first = rows[0]
    suffix = "".join(
        f"-{digits_only(row.document_number) or row.document_number}" for row in rows[1:]
    )
    return normalize_free_text(f"Pago {first.document_type} {first.document_number}{suffix}")


def group_rows(rows: Sequence[NormalizedRow]) -> list[GroupedRow]:
    """Sort, bucket by account and net each bucket.

    Credit notes subtract from the account total.

    Raises:
        NegativeGroupTotalError: an account's credit notes exceed its debits.
    """
    groups: list[GroupedRow] = []
    for account, bucket in groupby(sort_rows(rows), key=lambda r: r.account):
        detail_rows = tuple(bucket)
        net_amount = sum(signed_amount(row) for row in detail_rows)
        if net_amount < 0:
            raise NegativeGroupTotalError(account, net_amount)
        groups.append(
            GroupedRow(
                account_key=account,
                header_row=detail_rows[0],
                detail_rows=detail_rows,
                net_amount=net_amount,
                composite_message=build_composite_message(detail_rows),
            )
        )
    return groups

from __future__ import annotations

from dataclasses import dataclass

"""Canonical (post-normalization) shapes of the header and rows.

Created once by the normalizer and never mutated afterwards.
"""

__all__ = [
    "NormalizedHeader",
    "NormalizedRow",
    "GroupedRow",
]


@dataclass(frozen=True)
class NormalizedHeader:
    company_name: str
    company_rut: str  # cuerpo + DV sin separadores
    agreement: str  # 3 dígitos
    process_date: str  # YYYY-MM-DD

    @property
    def compact_date(self) -> str:
        return self.process_date.replace("-", "")


@dataclass(frozen=True)
class NormalizedRow:
    """Catalog-resolved row, after the vale vista / foreign bank rewrites."""
    provider_rut: str
    provider_name: str
    bank: str
    bank_code: str
    account: str
    document_type: str
    document_type_code: str
    document_number: str
    amount: int
    payment_method: str
    payment_method_code: str
    branch_code: str
    email: str
    message: str


@dataclass(frozen=True)
class GroupedRow:
    """All rows paid to one account, rendered as a single "10" record.

    header_row is the first row in sorted order; detail_rows keep that order.
    """
    account_key: str
    header_row: NormalizedRow
    detail_rows: tuple[NormalizedRow, ...]
    net_amount: int
    composite_message: str

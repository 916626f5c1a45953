from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

"""Catalog reference data: banks, payment methods and document types.

Catalogs are read-only for a whole run and can be shared between calls.
The default catalog mirrors the bank's published SBIF bank codes and the
payment method / document codes accepted by its payroll format.
"""

__all__ = [
    "Bank",
    "PaymentMethod",
    "DocumentType",
    "NominaCatalogs",
    "DEFAULT_HOUSE_BANK",
    "DEFAULT_CATALOGS",
]

DEFAULT_HOUSE_BANK = "SCOTIABANK CHILE"


@dataclass(frozen=True)
class Bank:
    name: str
    code: str  # SBIF de 3 dígitos


@dataclass(frozen=True)
class PaymentMethod:
    name: str
    code: str  # 2 caracteres


@dataclass(frozen=True)
class DocumentType:
    name: str
    code: str  # 2 caracteres


@dataclass(frozen=True)
class NominaCatalogs:
    """The three catalogs plus the bank that clears vale vista instruments."""
    banks: tuple[Bank, ...]
    payment_methods: tuple[PaymentMethod, ...]
    document_types: tuple[DocumentType, ...]
    house_bank: str = DEFAULT_HOUSE_BANK

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any], base: NominaCatalogs | None = None) -> NominaCatalogs:
        """Build catalogs from plain data ({"banks": [{"name", "code"}], ...}).

        Sections missing from `data` are taken from `base` (DEFAULT_CATALOGS
        when not given), so a config may override only the bank list.
        """
        base = base or DEFAULT_CATALOGS
        return cls(
            banks=_items(Bank, data.get("banks"), base.banks),
            payment_methods=_items(PaymentMethod, data.get("payment_methods"), base.payment_methods),
            document_types=_items(DocumentType, data.get("document_types"), base.document_types),
            house_bank=str(data.get("house_bank") or base.house_bank),
        )


def _items(kind: type, raw: Iterable[Mapping[str, Any]] | None, fallback: tuple) -> tuple:
    if raw is None:
        return fallback
    return tuple(kind(name=str(item["name"]), code=str(item["code"])) for item in raw)


DEFAULT_CATALOGS = NominaCatalogs(
    banks=(
        Bank("SCOTIABANK CHILE", "014"),
        Bank("BANCO DE CHILE", "001"),
        Bank("BANCO ESTADO", "012"),
        Bank("BCI", "016"),
        Bank("BANCO SANTANDER", "037"),
        Bank("BANCO ITAU", "039"),
        Bank("BANCO SECURITY", "049"),
        Bank("BANCO BICE", "028"),
        Bank("BANCO FALABELLA", "051"),
        Bank("BANCO RIPLEY", "053"),
        Bank("BANCO CONSORCIO", "055"),
        Bank("BANCO INTERNACIONAL", "009"),
        Bank("COOPEUCH", "672"),
    ),
    payment_methods=(
        PaymentMethod("CUENTA OTRO BANCO", "OB"),
        PaymentMethod("CTACTE SCOTIABANK", "CC"),
        PaymentMethod("CTA RENTA SCOTIABANK", "CA"),
        PaymentMethod("CTA VISTA SCOTIABANK", "VI"),
        PaymentMethod("CTA AHORRO SCOTIABANK", "AH"),
        PaymentMethod("VALE VISTA FISICO", "VV"),
        PaymentMethod("VALE VISTA VIRTUAL", "VX"),
    ),
    document_types=(
        DocumentType("FACTURA", "FA"),
        DocumentType("NOTA DE CREDITO", "NC"),
        DocumentType("HONORARIO", "HO"),
        DocumentType("VARIOS", "VA"),
    ),
)

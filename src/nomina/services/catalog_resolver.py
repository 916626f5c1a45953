from __future__ import annotations

from typing import Any

from ..models.catalog import DEFAULT_CATALOGS, Bank, DocumentType, NominaCatalogs, PaymentMethod
from ..text import format_numeric_field, normalize_code

"""Catalog lookup by normalized name or by code.

Resolution tries the normalized name first and then the code:
- banks: the input's digits zero-padded to 3 ("1" -> "001")
- payment methods / document types: first 2 chars of the normalized input

A miss returns None. Whether that is a reportable validation error or a
fatal error is decided by the caller.
"""

__all__ = [
    "CatalogResolver",
]


class CatalogResolver:
    """Bidirectional (name, code) index over a NominaCatalogs snapshot.

    Indexed items are canonical copies: names normalized, bank codes padded
    to 3 digits, other codes cut to 2 characters.
    """

    def __init__(self, catalogs: NominaCatalogs | None = None) -> None:
        self.catalogs = catalogs or DEFAULT_CATALOGS
        self._banks_by_name: dict[str, Bank] = {}
        self._banks_by_code: dict[str, Bank] = {}
        self._methods_by_name: dict[str, PaymentMethod] = {}
        self._methods_by_code: dict[str, PaymentMethod] = {}
        self._doc_types_by_name: dict[str, DocumentType] = {}
        self._doc_types_by_code: dict[str, DocumentType] = {}

        for bank in self.catalogs.banks:
            item = Bank(name=normalize_code(bank.name), code=format_numeric_field(bank.code, 3))
            self._banks_by_name[item.name] = item
            self._banks_by_code[item.code] = item

        for method in self.catalogs.payment_methods:
            item = PaymentMethod(name=normalize_code(method.name), code=normalize_code(method.code)[:2])
            self._methods_by_name[item.name] = item
            self._methods_by_code[item.code] = item

        for doc_type in self.catalogs.document_types:
            item = DocumentType(name=normalize_code(doc_type.name), code=normalize_code(doc_type.code)[:2])
            self._doc_types_by_name[item.name] = item
            self._doc_types_by_code[item.code] = item

    @property
    def house_bank(self) -> str:
        return normalize_code(self.catalogs.house_bank)

    def resolve_bank(self, value: Any) -> Bank | None:
        normalized = normalize_code(value)
        if not normalized:
            return None
        found = self._banks_by_name.get(normalized)
        if found is not None:
            return found
        return self._banks_by_code.get(format_numeric_field(normalized, 3))

    def resolve_payment_method(self, value: Any) -> PaymentMethod | None:
        normalized = normalize_code(value)
        if not normalized:
            return None
        return self._methods_by_name.get(normalized) or self._methods_by_code.get(normalized[:2])

    def resolve_document_type(self, value: Any) -> DocumentType | None:
        normalized = normalize_code(value)
        if not normalized:
            return None
        return self._doc_types_by_name.get(normalized) or self._doc_types_by_code.get(normalized[:2])

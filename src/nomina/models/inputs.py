from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

"""Raw caller input for one nomina generation.

Values are kept exactly as supplied (untrimmed, possibly empty); the
validator decides what is acceptable and the normalizer canonicalizes.
"""

__all__ = [
    "HeaderInput",
    "RowInput",
    "ROW_FIELD_ALIASES",
]


@dataclass(frozen=True)
class HeaderInput:
    """Nomina header: paying company and agreement with the bank."""
    company_name: str
    company_rut: str
    agreement: str
    process_date: str | None = None  # YYYY-MM-DD; None -> fecha actual (UTC)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> HeaderInput:
        date = data.get("process_date", data.get("fechaProceso"))
        return cls(
            company_name=_text(data.get("company_name", data.get("nombreEmpresa"))),
            company_rut=_text(data.get("company_rut", data.get("rutEmpresa"))),
            agreement=_text(data.get("agreement", data.get("convenio"))),
            process_date=None if date in (None, "") else str(date),
        )


# Nombres de columna originales (export de planilla) -> campo
ROW_FIELD_ALIASES: dict[str, str] = {
    "rutproveedor": "provider_rut",
    "nombreproveedor": "provider_name",
    "bancoproveedor": "bank",
    "cuentaproveedor": "account",
    "tipodocumento": "document_type",
    "numerodocumento": "document_number",
    "monto": "amount",
    "formapago": "payment_method",
    "codigosucursal": "branch_code",
    "emailaviso": "email",
    "mensajeaviso": "message",
}


@dataclass(frozen=True)
class RowInput:
    """One payment to include in the nomina.

    Row order is kept only for error reporting (row_index); grouped output
    re-sorts the rows.
    """
    provider_rut: str = ""
    provider_name: str = ""
    bank: str = ""
    account: str = ""
    document_type: str = ""
    document_number: str = ""
    amount: int | float | str | None = None
    payment_method: str = ""
    branch_code: str | None = None  # None -> "000"
    email: str | None = None
    message: str | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> RowInput:
        """Build a row from a dict keyed by field names or original column names.

        Keys are matched case-insensitively; unknown keys are ignored.
        """
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in data.items():
            name = str(key).strip()
            lowered = name.lower()
            target = name if name in known else ROW_FIELD_ALIASES.get(lowered)
            if target is None and lowered in known:
                target = lowered
            if target is None:
                continue
            values[target] = value
        for name in known - {"amount", "branch_code", "email", "message"}:
            if name in values:
                values[name] = _text(values[name])
        return cls(**values)


def _text(value: Any) -> str:
    return "" if value is None else str(value)

from __future__ import annotations

import re
import zipfile
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pandas as pd

from ..models.inputs import ROW_FIELD_ALIASES, RowInput

"""Tabular row source: CSV or Excel exports of the payment list.

- First row is the header; names match either the field names
  (provider_rut, ...) or the original export columns (rutProveedor, ...),
  case-insensitively.
- Every cell is read as text so RUTs, accounts and document numbers keep
  their leading zeros.
- CSV delimiter is ';' when the header line contains one, ',' otherwise.
"""

__all__ = [
    "SUPPORTED_SUFFIXES",
    "REQUIRED_FIELDS",
    "RowSourceError",
    "MissingColumnsError",
    "RowSheet",
    "clean_amount_text",
    "read_rows",
]

SUPPORTED_SUFFIXES = (".csv", ".xlsx")

REQUIRED_FIELDS = (
    "provider_rut",
    "provider_name",
    "bank",
    "account",
    "document_type",
    "document_number",
    "amount",
    "payment_method",
)

_THOUSANDS_RE = re.compile(r"-?\d{1,3}(\.\d{3})+")


class RowSourceError(Exception):
    """Raised when the file cannot be read as a row table."""


class MissingColumnsError(RowSourceError):
    """Raised when required columns are missing from the header."""


@dataclass
class RowSheet:
    file_name: str
    columns: list[str]  # nombres de campo canónicos, en orden del archivo
    rows: list[RowInput]


def clean_amount_text(value: str) -> str:
    """Normalize Chilean-formatted amount text.

    '$1.234.567' -> '1234567', '1234,5' -> '1234.5', '150000.0' unchanged.
    """
    text = value.strip().replace("$", "").replace(" ", "")
    if "," in text:
        return text.replace(".", "").replace(",", ".")
    if _THOUSANDS_RE.fullmatch(text):
        return text.replace(".", "")
    return text


def _canonical_column(name: str) -> str | None:
    key = str(name).strip().lower()
    if key in REQUIRED_FIELDS or key in ("branch_code", "email", "message"):
        return key
    return ROW_FIELD_ALIASES.get(key)


def _detect_delimiter(path: Path) -> str:
    with path.open("r", encoding="utf-8-sig") as f:
        first_line = f.readline()
    return ";" if ";" in first_line else ","


def _read_frame(path: Path) -> pd.DataFrame:
    suffix = path.suffix.lower()
    try:
        if suffix == ".csv":
            return pd.read_csv(
                path,
                sep=_detect_delimiter(path),
                dtype=str,
                keep_default_na=False,
                skip_blank_lines=True,
                encoding="utf-8-sig",
            )
        if suffix == ".xlsx":
            return pd.read_excel(path, dtype=str, keep_default_na=False)
    except (OSError, ValueError, zipfile.BadZipFile, pd.errors.ParserError) as e:
        raise RowSourceError(f"cannot read {path.name}: {e}") from e
    raise RowSourceError(f"unsupported file type: {path.name}")


def _cell(value: Any) -> str:
    if value is None or (isinstance(value, float) and pd.isna(value)):
        return ""
    return str(value).strip()


def read_rows(path: Path) -> RowSheet:
    """Read a CSV/XLSX payment list into RowInput values.

    Raises:
        RowSourceError: unreadable or unsupported file
        MissingColumnsError: a required column is absent
    """
    df = _read_frame(path)

    mapping: dict[str, str] = {}
    for column in df.columns:
        canonical = _canonical_column(column)
        if canonical is not None and canonical not in mapping.values():
            mapping[str(column)] = canonical

    missing = [f for f in REQUIRED_FIELDS if f not in mapping.values()]
    if missing:
        raise MissingColumnsError(f"{path.name} missing columns: {missing}")

    rows: list[RowInput] = []
    for record in df.to_dict(orient="records"):
        values = {mapping[str(k)]: _cell(v) for k, v in record.items() if str(k) in mapping}
        if not any(values.values()):
            continue  # fila vacía
        values["amount"] = clean_amount_text(values["amount"]) or None
        values["branch_code"] = values.get("branch_code") or "000"
        rows.append(RowInput.from_mapping(values))

    return RowSheet(file_name=path.name, columns=list(mapping.values()), rows=rows)

from __future__ import annotations

import json

from nomina.models import ErrorScope, ValidationError
from nomina.models.error_record import ErrorRecord

"""Unit tests for ErrorRecord model."""

RECORD_KEYS = {"timestamp", "file", "scope", "row", "field", "message"}


def test_error_record_row_minus_one_support():
    """File-level errors use row=-1."""
    rec = ErrorRecord.create(
        file="problematic.csv",
        scope="file",
        row=-1,
        field="-",
        message="problematic.csv missing columns: ['amount']",
    )

    assert rec.row == -1
    data = json.loads(rec.to_json_line())
    assert data["row"] == -1
    assert data["file"] == "problematic.csv"
    assert data["scope"] == "file"
    assert "timestamp" in data and data["timestamp"].endswith("Z")
    assert set(data.keys()) == RECORD_KEYS


def test_error_record_from_row_validation_error():
    error = ValidationError(ErrorScope.ROW, "amount", "El monto es obligatorio.", row_index=3)
    rec = ErrorRecord.from_validation_error("pagos.csv", error)

    assert (rec.scope, rec.row, rec.field) == ("row", 3, "amount")
    data = json.loads(rec.to_json_line())
    assert data["message"] == "El monto es obligatorio."


def test_error_record_from_header_validation_error():
    error = ValidationError(ErrorScope.HEADER, "company_rut", "El RUT de empresa no es válido.")
    rec = ErrorRecord.from_validation_error("pagos.csv", error)

    assert rec.row == -1
    assert rec.scope == "header"
    # ensure_ascii=False: los acentos quedan legibles
    assert "válido" in rec.to_json_line()


def test_error_record_zero_row():
    rec = ErrorRecord.create("edge.csv", "row", 0, "provider_rut", "El RUT proveedor es obligatorio.")
    assert json.loads(rec.to_json_line())["row"] == 0

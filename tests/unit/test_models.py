from __future__ import annotations

from nomina.models import (
    ErrorScope,
    GeneratedFile,
    HeaderInput,
    OutputMode,
    RowInput,
    ValidationError,
    ValidationResult,
)


def test_validation_result_partitions_errors():
    result = ValidationResult(
        errors=(
            ValidationError(ErrorScope.HEADER, "agreement", "El número de convenio es obligatorio."),
            ValidationError(ErrorScope.ROW, "bank", "El banco proveedor es obligatorio.", row_index=2),
            ValidationError(ErrorScope.ROW, "amount", "El monto es obligatorio.", row_index=2),
        )
    )
    assert result.valid is False
    assert len(result.header_errors) == 1
    assert len(result.row_errors) == 2
    assert result.invalid_row_indices == {2}
    assert ValidationResult().valid is True


def test_validation_error_str_is_one_based():
    row_error = ValidationError(ErrorScope.ROW, "bank", "El banco proveedor es obligatorio.", row_index=0)
    assert str(row_error) == "fila 1, bank: El banco proveedor es obligatorio."
    header_error = ValidationError(ErrorScope.HEADER, "company_rut", "El RUT de empresa es obligatorio.")
    assert str(header_error) == "company_rut: El RUT de empresa es obligatorio."


def test_output_mode_file_suffix():
    assert OutputMode.NORMAL.file_suffix == "normal"
    assert OutputMode.GROUPED.file_suffix == "agrupada"


def test_generated_file_lines():
    generated = GeneratedFile("x.txt", "a\r\nb", 2, 0, OutputMode.NORMAL)
    assert generated.lines == ["a", "b"]
    assert GeneratedFile("x.txt", "", 0, 0, OutputMode.NORMAL).lines == []


def test_header_from_mapping_accepts_export_names():
    header = HeaderInput.from_mapping(
        {"nombreEmpresa": "TDV", "rutEmpresa": "78168126-1", "convenio": 123, "fechaProceso": ""}
    )
    assert header == HeaderInput("TDV", "78168126-1", "123", None)


def test_row_from_mapping_is_case_insensitive():
    row = RowInput.from_mapping(
        {
            "RutProveedor": "11111111-1",
            "NOMBREPROVEEDOR": "Uno",
            "bank": "SCOTIABANK CHILE",
            "monto": 100,
            "emailAviso": "a@b.cl",
            "columnaDesconocida": "x",
        }
    )
    assert row.provider_rut == "11111111-1"
    assert row.provider_name == "Uno"
    assert row.bank == "SCOTIABANK CHILE"
    assert row.amount == 100
    assert row.email == "a@b.cl"
    assert row.branch_code is None

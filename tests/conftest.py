# Shared pytest fixtures
from __future__ import annotations

import tempfile
from pathlib import Path

import pytest

from nomina.models import HeaderInput, RowInput

CSV_COLUMNS = [
    "rutProveedor", "nombreProveedor", "emailAviso", "bancoProveedor",
    "cuentaProveedor", "formaPago", "tipoDocumento", "numeroDocumento",
    "monto", "codigoSucursal", "mensajeAviso",
]


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        monkeypatch.delenv("NOMINA_CONFIG", raising=False)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
output_directory: ./out
grouped: false
header:
  company_name: TDV SERVICIOS SPA
  company_rut: "78168126-1"
  agreement: "123"
  process_date: "2026-02-27"
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "nomina.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def header() -> HeaderInput:
    return HeaderInput(
        company_name="TDV SERVICIOS SPA",
        company_rut="78168126-1",
        agreement="123",
        process_date="2026-02-27",
    )


@pytest.fixture()
def scenario_rows() -> list[RowInput]:
    """Scotia row, foreign-bank factura, vale vista, credit note on the foreign account."""
    return [
        RowInput(
            provider_rut="11111111-1",
            provider_name="Proveedor Scotia",
            bank="SCOTIABANK CHILE",
            account="123456789",
            document_type="FACTURA",
            document_number="1001",
            amount=150000,
            payment_method="CTACTE SCOTIABANK",
            branch_code="000",
            email="proveedor1@correo.cl",
            message="PAGO DEVOLUCION",
        ),
        RowInput(
            provider_rut="22222222-2",
            provider_name="Proveedor Otro Banco",
            bank="BANCO DE CHILE",
            account="99887766",
            document_type="FACTURA",
            document_number="1002",
            amount=200000,
            payment_method="CUENTA OTRO BANCO",
            branch_code="000",
            email="proveedor2@correo.cl",
            message="PAGO DEVOLUCION",
        ),
        RowInput(
            provider_rut="33333333-3",
            provider_name="Proveedor Vale Vista",
            bank="SCOTIABANK CHILE",
            account="0",
            document_type="FACTURA",
            document_number="1003",
            amount=50000,
            payment_method="VALE VISTA FISICO",
            branch_code="000",
            email="proveedor3@correo.cl",
            message="PAGO DEVOLUCION",
        ),
        RowInput(
            provider_rut="22222222-2",
            provider_name="Proveedor Otro Banco",
            bank="BANCO DE CHILE",
            account="99887766",
            document_type="NOTA DE CREDITO",
            document_number="2001",
            amount=10000,
            payment_method="CUENTA OTRO BANCO",
            branch_code="000",
            email="proveedor2@correo.cl",
            message="AJUSTE DEVOLUCION",
        ),
    ]


def rows_to_csv(rows: list[RowInput], delimiter: str = ";") -> str:
    """Render rows with the original export column names."""
    lines = [delimiter.join(CSV_COLUMNS)]
    for r in rows:
        values = [
            r.provider_rut, r.provider_name, r.email or "", r.bank, r.account,
            r.payment_method, r.document_type, r.document_number, str(r.amount),
            r.branch_code or "", r.message or "",
        ]
        lines.append(delimiter.join(values))
    return "\n".join(lines) + "\n"


@pytest.fixture()
def scenario_csv(temp_workdir: Path, scenario_rows: list[RowInput]) -> Path:
    path = temp_workdir / "data" / "devoluciones.csv"
    path.write_text(rows_to_csv(scenario_rows), encoding="utf-8")
    return path


@pytest.fixture()
def make_rows_csv(temp_workdir: Path):
    def _make(name: str, rows: list[RowInput], delimiter: str = ";") -> Path:
        path = temp_workdir / "data" / name
        path.write_text(rows_to_csv(rows, delimiter), encoding="utf-8")
        return path
    return _make

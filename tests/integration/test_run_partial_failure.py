from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path

from nomina.cli import main as cli_main
from nomina.logging.init import reset_logging

"""End-to-end run where one file fails: the others are still written, exit code 2."""


def test_partial_failure_keeps_good_files(write_config, make_rows_csv, scenario_rows, temp_workdir: Path, capsys):
    reset_logging()
    make_rows_csv("bueno.csv", scenario_rows)
    bad = [replace(r, bank="BANCO INEXISTENTE") for r in scenario_rows[:2]]
    make_rows_csv("malo.csv", bad)

    code = cli_main([])
    out = capsys.readouterr().out

    assert code == 2
    assert "SUMMARY files=2/2 success=1 failed=1 rows=4 lines=9 amount=410000" in out
    assert "WARN malo.csv: 2 validation error(s), 2 invalid row(s)" in out

    assert (temp_workdir / "out" / "bueno" / "nomina_123_20260227_normal.txt").exists()
    assert not (temp_workdir / "out" / "malo").exists()

    logs = list((temp_workdir / "logs").glob("errors-*.log"))
    assert len(logs) == 1
    records = [json.loads(line) for line in logs[0].read_text(encoding="utf-8").splitlines()]
    assert [(r["file"], r["row"], r["field"]) for r in records] == [
        ("malo.csv", 0, "bank"),
        ("malo.csv", 1, "bank"),
    ]
    assert records[0]["message"] == "El banco proveedor no existe en el catálogo."


def test_negative_grouped_account_fails_only_that_file(write_config, make_rows_csv, scenario_rows, temp_workdir: Path, capsys):
    reset_logging()
    make_rows_csv("bueno.csv", scenario_rows)
    negative = list(scenario_rows)
    negative[3] = replace(negative[3], amount=250000)
    make_rows_csv("negativo.csv", negative)

    code = cli_main(["--grouped"])
    out = capsys.readouterr().out

    assert code == 2
    assert "success=1 failed=1" in out
    assert "ERROR negativo.csv:" in out
    assert (temp_workdir / "out" / "bueno" / "nomina_123_20260227_agrupada.txt").exists()

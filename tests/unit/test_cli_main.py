from __future__ import annotations

from pathlib import Path

import pytest

from nomina.cli import main as cli_main
from nomina.cli.main import EXIT_FATAL, EXIT_PARTIAL_FAILURE, EXIT_SUCCESS_ALL
from nomina.logging.init import reset_logging


@pytest.fixture(autouse=True)
def _fresh_logging():
    # el handler se enlaza al stdout capturado por capsys
    reset_logging()
    yield
    reset_logging()


def test_cli_no_files_success(write_config, capsys):
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == EXIT_SUCCESS_ALL
    assert "SUMMARY files=0/0 success=0 failed=0 rows=0 lines=0 amount=0" in out


def test_cli_generates_file(write_config, scenario_csv, temp_workdir: Path, capsys):
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == EXIT_SUCCESS_ALL
    assert "SUMMARY files=1/1 success=1 failed=0 rows=4 lines=9 amount=410000" in out
    assert (temp_workdir / "out" / "devoluciones" / "nomina_123_20260227_normal.txt").exists()


def test_cli_grouped_flag(write_config, scenario_csv, capsys):
    assert cli_main(["--grouped"]) == EXIT_SUCCESS_ALL
    assert "lines=8 amount=390000" in capsys.readouterr().out


def test_cli_mode_flags_are_exclusive(write_config):
    with pytest.raises(SystemExit):
        cli_main(["--grouped", "--normal"])


def test_cli_validate_only(write_config, scenario_csv, temp_workdir: Path, capsys):
    assert cli_main(["--validate-only"]) == EXIT_SUCCESS_ALL
    assert "success=1" in capsys.readouterr().out
    assert not (temp_workdir / "out").exists()


def test_cli_partial_failure(write_config, scenario_csv, temp_workdir: Path, capsys):
    (temp_workdir / "data" / "roto.csv").write_text("rutProveedor\n1-9\n", encoding="utf-8")
    code = cli_main([])
    out = capsys.readouterr().out
    assert code == EXIT_PARTIAL_FAILURE
    assert "SUMMARY files=2/2 success=1 failed=1" in out
    assert "ERROR roto.csv" in out


def test_cli_directory_missing(write_config, capsys):
    text = write_config.read_text(encoding="utf-8").replace("./data", "./missing_dir")
    write_config.write_text(text, encoding="utf-8")
    code = cli_main([])
    assert code == EXIT_FATAL
    assert "ERROR directory not found:" in capsys.readouterr().out


def test_cli_config_error(temp_workdir: Path, capsys):
    code = cli_main([])
    assert code == EXIT_FATAL
    assert "ERROR config: config file not found" in capsys.readouterr().out


def test_cli_config_from_env(write_config, temp_workdir: Path, monkeypatch, capsys):
    moved = temp_workdir / "otra.yml"
    write_config.rename(moved)
    monkeypatch.setenv("NOMINA_CONFIG", str(moved))
    assert cli_main([]) == EXIT_SUCCESS_ALL
    assert "SUMMARY" in capsys.readouterr().out


def test_cli_config_from_dotenv(write_config, temp_workdir: Path, monkeypatch, capsys):
    moved = temp_workdir / "desde_env.yml"
    write_config.rename(moved)
    (temp_workdir / ".env").write_text(f"NOMINA_CONFIG={moved}\n", encoding="utf-8")
    # .env pisa la variable de entorno; monkeypatch la restaura al final
    monkeypatch.setenv("NOMINA_CONFIG", str(temp_workdir / "no_existe.yml"))
    assert cli_main([]) == EXIT_SUCCESS_ALL
    capsys.readouterr()


def test_cli_config_flag_wins(write_config, temp_workdir: Path, monkeypatch, capsys):
    monkeypatch.setenv("NOMINA_CONFIG", str(temp_workdir / "no_existe.yml"))
    assert cli_main(["--config", str(write_config)]) == EXIT_SUCCESS_ALL
    capsys.readouterr()


def test_cli_debug_mode(write_config, capsys):
    assert cli_main(["--debug"]) == EXIT_SUCCESS_ALL
    assert "DEBUG debug mode enabled" in capsys.readouterr().out

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..logging.init import log_summary, set_debug, setup_logging
from ..services.batch import ProcessingError, process_all
from ..services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env (NOMINA_CONFIG may point to the config file)
- Load and validate the YAML config
- Generate one nomina per .csv/.xlsx file of source_directory
- Print the SUMMARY line and return the exit code
"""

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2

CONFIG_ENV_VAR = "NOMINA_CONFIG"


def _load_env_file(path: Path, override: bool = True) -> None:
    """Load .env with python-dotenv; values in .env win over the environment."""
    if path.exists():
        load_dotenv(dotenv_path=path, override=override)


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(prog="nomina", description="Bank payroll (nomina) file generator")
    p.add_argument("--config", type=Path, help=f"Config file (default: ${CONFIG_ENV_VAR} or {DEFAULT_CONFIG_PATH})")
    mode = p.add_mutually_exclusive_group()
    mode.add_argument("--grouped", dest="grouped", action="store_true", default=None,
                      help="One account record per destination account (netted amounts)")
    mode.add_argument("--normal", dest="grouped", action="store_false",
                      help="One account record per payment row")
    p.add_argument("--validate-only", action="store_true", help="Validate input files without writing nominas")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    return p.parse_args(argv)


def _resolve_config_path(args: argparse.Namespace) -> Path:
    if args.config is not None:
        return args.config
    env_path = os.getenv(CONFIG_ENV_VAR)
    return Path(env_path) if env_path else DEFAULT_CONFIG_PATH


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # argv None: se lee sys.argv (los tests pasan main([]))
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        set_debug(logger)
        logger.debug("debug mode enabled")

    _load_env_file(Path(".env"), override=True)

    config_path = _resolve_config_path(args)
    try:
        cfg = load_config(config_path)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    directory = Path(cfg.source_directory)
    if not directory.exists():
        logger.error(f"directory not found: {directory}")
        return EXIT_FATAL

    logger.info(f"Processing files from: {directory}")
    try:
        result = process_all(cfg, grouped=args.grouped, validate_only=args.validate_only)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    total_files = result.success_files + result.failed_files
    summary_line = render_summary_line(total_files, result)
    # log_summary agrega el prefijo "SUMMARY "
    log_summary(summary_line.removeprefix("SUMMARY "))

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL

from __future__ import annotations

import logging

import pytest

from nomina.logging.init import (
    LOGGER_NAME,
    SUMMARY_LEVEL,
    LabeledFormatter,
    get_logger,
    log_summary,
    reset_logging,
    set_debug,
    setup_logging,
)


@pytest.fixture(autouse=True)
def _fresh_logging():
    reset_logging()
    yield
    reset_logging()


def test_setup_logging_is_idempotent():
    first = setup_logging()
    second = setup_logging()
    assert first is second
    assert first.name == LOGGER_NAME
    assert len(first.handlers) == 1
    assert first.propagate is False


def test_labels_and_summary_level(capsys):
    setup_logging()
    logger = get_logger()
    logger.info("hola")
    logger.warning("cuidado")
    logger.error("falla")
    log_summary("files=0/0 success=0")
    out = capsys.readouterr().out.splitlines()
    assert out == ["INFO hola", "WARN cuidado", "ERROR falla", "SUMMARY files=0/0 success=0"]


def test_child_loggers_reach_handler(capsys):
    setup_logging()
    logging.getLogger(f"{LOGGER_NAME}.services.batch").info("archivo procesado")
    assert capsys.readouterr().out == "INFO archivo procesado\n"


def test_debug_hidden_until_set_debug(capsys):
    logger = setup_logging()
    logger.debug("oculto")
    set_debug(logger)
    logger.debug("visible")
    assert capsys.readouterr().out == "DEBUG visible\n"


def test_formatter_unknown_level_uses_levelname():
    record = logging.LogRecord(LOGGER_NAME, 15, __file__, 1, "msg", None, None)
    record.levelname = "TRACE"
    assert LabeledFormatter().format(record) == "TRACE msg"
    assert SUMMARY_LEVEL == 25

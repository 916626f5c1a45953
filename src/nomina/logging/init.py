from __future__ import annotations

import logging
import sys

"""Console logging for batch runs.

Every line starts with a label (DEBUG, INFO, WARN, ERROR, SUMMARY) so a run
can be filtered with grep. Engine modules only call
`logging.getLogger(__name__)`; living under the `nomina` package, their
records end up in the single stdout handler installed by setup_logging().
"""

__all__ = [
    "LOGGER_NAME",
    "SUMMARY_LEVEL",
    "LabeledFormatter",
    "setup_logging",
    "set_debug",
    "get_logger",
    "log_summary",
    "reset_logging",
]

LOGGER_NAME = "nomina"

# entre INFO (20) y WARNING (30)
SUMMARY_LEVEL = 25

_LABELS = {
    logging.DEBUG: "DEBUG",
    logging.INFO: "INFO",
    logging.WARNING: "WARN",
    logging.ERROR: "ERROR",
    logging.CRITICAL: "CRITICAL",
    SUMMARY_LEVEL: "SUMMARY",
}

_configured: logging.Logger | None = None


class LabeledFormatter(logging.Formatter):
    """`LABEL message`, no timestamps (the error log carries those)."""

    def format(self, record: logging.LogRecord) -> str:
        label = _LABELS.get(record.levelno, record.levelname)
        return f"{label} {record.getMessage()}"


def _stdout_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    handler.setFormatter(LabeledFormatter())
    return handler


def setup_logging(level: int = logging.INFO) -> logging.Logger:
    """Install the stdout handler on the `nomina` logger.

    Safe to call more than once; later calls return the same logger until
    reset_logging() is called.
    """
    global _configured
    if _configured is not None:
        return _configured

    logging.addLevelName(SUMMARY_LEVEL, "SUMMARY")
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    logger.addHandler(_stdout_handler(level))
    logger.setLevel(level)
    # sin propagación al root: cada línea sale una sola vez
    logger.propagate = False

    _configured = logger
    return logger


def set_debug(logger: logging.Logger) -> None:
    logger.setLevel(logging.DEBUG)
    for handler in logger.handlers:
        handler.setLevel(logging.DEBUG)


def get_logger() -> logging.Logger:
    return _configured if _configured is not None else setup_logging()


def log_summary(message: str) -> None:
    get_logger().log(SUMMARY_LEVEL, message)


def reset_logging() -> None:
    """Forget the configured logger so the next setup_logging() rebuilds it (tests)."""
    global _configured
    _configured = None

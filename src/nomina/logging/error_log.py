from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from nomina.models.error_record import ErrorRecord

"""Per-run JSON Lines error log.

Records accumulate in memory while files are processed and are appended to
`logs/errors-YYYYMMDD-HHMMSS.log` (UTC stamp of the first flush). A run with
no errors leaves no log file behind.
"""

__all__ = [
    "ErrorRecord",
    "ErrorLogBuffer",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class ErrorLogBuffer:
    """Buffered error records of one batch run (serial use only)."""

    def __init__(self, logs_dir: Path | None = None) -> None:
        self.logs_dir = logs_dir or LOGS_DIR
        self._pending: list[ErrorRecord] = []
        self._path: Path | None = None

    @property
    def file_path(self) -> Path:
        """Log path, fixed on first access; creates the logs directory."""
        if self._path is None:
            self.logs_dir.mkdir(parents=True, exist_ok=True)
            self._path = self.logs_dir / f"errors-{datetime.now(UTC):{TIMESTAMP_FMT}}.log"
        return self._path

    def append(self, record: ErrorRecord) -> None:
        self._pending.append(record)

    def extend(self, records: list[ErrorRecord]) -> None:
        self._pending.extend(records)

    def __len__(self) -> int:
        return len(self._pending)

    def flush(self) -> Path | None:
        """Append pending records; returns the log path or None when there was nothing to write."""
        if not self._pending:
            return None
        path = self.file_path
        with path.open("a", encoding="utf-8") as f:
            f.writelines(f"{record.to_json_line()}\n" for record in self._pending)
        self._pending.clear()
        return path

from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

from .validation import ValidationError

"""ErrorRecord model for the JSON Lines error log.

One record per validation error or per failed input file. Row-less errors
(header, system, file-level) use row=-1.
"""

__all__ = [
    "ErrorRecord",
]


@dataclass(frozen=True)
class ErrorRecord:
    """Structured error record for JSON Lines logging.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: Input file name being processed
        scope: header | row | system | file
        row: 0-based row index in the input file, -1 when not row-scoped
        field: Offending field name ("-" for file-level errors)
        message: Human readable description (Spanish)
    """
    timestamp: str  # ISO8601 UTC
    file: str
    scope: str
    row: int
    field: str
    message: str

    @staticmethod
    def create(file: str, scope: str, row: int, field: str, message: str) -> ErrorRecord:
        """Create a new ErrorRecord stamped with the current UTC time."""
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return ErrorRecord(
            timestamp=ts,
            file=file,
            scope=scope,
            row=row,
            field=field,
            message=message,
        )

    @staticmethod
    def from_validation_error(file: str, error: ValidationError) -> ErrorRecord:
        return ErrorRecord.create(
            file=file,
            scope=error.scope.value,
            row=-1 if error.row_index is None else error.row_index,
            field=error.field,
            message=error.message,
        )

    def to_json_line(self) -> str:
        """Serialize to one JSON line with exactly the dataclass keys."""
        return json.dumps(asdict(self), ensure_ascii=False)

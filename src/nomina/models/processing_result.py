from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

"""Batch run result models.

FileStat holds per-input-file figures; ProcessingResult aggregates them for
the SUMMARY line.
"""

__all__ = [
    "FileStatus",
    "FileStat",
    "ProcessingResult",
]


class FileStatus(Enum):
    """Outcome of one input file.

    - SUCCESS: nomina written (or validated, in validate-only mode)
    - INVALID: validation errors, nothing written
    - FAILED: unreadable input or fatal generation error
    """
    SUCCESS = "success"
    INVALID = "invalid"
    FAILED = "failed"


@dataclass(frozen=True)
class FileStat:
    file_name: str
    status: FileStatus
    row_count: int  # filas leídas del archivo
    elapsed_seconds: float
    line_count: int = 0
    total_amount: int = 0
    output_file: str | None = None  # ruta del .txt generado
    error: str | None = None  # primer error / motivo de falla


@dataclass(frozen=True)
class ProcessingResult:
    success_files: int
    failed_files: int  # INVALID + FAILED
    total_rows: int  # filas de archivos exitosos
    total_lines: int
    total_amount: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] | None = None
    error_log_path: str | None = None

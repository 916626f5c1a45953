from __future__ import annotations

import logging
from datetime import UTC, datetime
from pathlib import Path

from ..config.loader import NominaConfig
from ..errors import NominaError
from ..logging.error_log import ErrorLogBuffer
from ..models.error_record import ErrorRecord
from ..models.processing_result import FileStat, FileStatus, ProcessingResult
from ..reader.rows_reader import SUPPORTED_SUFFIXES, RowSourceError, read_rows
from .orchestrator import generate, validate
from .progress import ProgressTracker

"""Batch runner: one nomina per input file in the source directory.

Each file is independent: a file that cannot be read, does not validate or
fails generation is recorded (error log + FileStat) and the run continues
with the next one. Validation errors are written to the JSON Lines error log
in full; the console gets one line per failed file.
"""

logger = logging.getLogger(__name__)

__all__ = [
    "ProcessingError",
    "scan_input_files",
    "process_file",
    "process_all",
]

FILE_SCOPE = "file"


class ProcessingError(Exception):
    """Fatal error that prevents the batch from running at all."""


def scan_input_files(directory: Path) -> list[Path]:
    """List .csv/.xlsx files (non-recursive, sorted by name).

    Raises:
        ProcessingError: directory missing, not a directory or unreadable
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")
    try:
        return sorted(
            p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in SUPPORTED_SUFFIXES
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def process_file(
    file_path: Path,
    config: NominaConfig,
    error_log: ErrorLogBuffer,
    *,
    grouped: bool,
    validate_only: bool = False,
) -> FileStat:
    """Read, validate and (unless validate_only) generate + write one nomina."""
    start = datetime.now(UTC)

    def elapsed() -> float:
        return (datetime.now(UTC) - start).total_seconds()

    try:
        sheet = read_rows(file_path)
    except RowSourceError as e:
        error_log.append(ErrorRecord.create(file_path.name, FILE_SCOPE, -1, "-", str(e)))
        logger.error(f"{file_path.name}: {e}")
        return FileStat(file_path.name, FileStatus.FAILED, 0, elapsed(), error=str(e))

    result = validate(config.header, sheet.rows, config.catalogs)
    if not result.valid:
        error_log.extend([ErrorRecord.from_validation_error(file_path.name, e) for e in result.errors])
        logger.warning(
            f"{file_path.name}: {len(result.errors)} validation error(s), "
            f"{len(result.invalid_row_indices)} invalid row(s); first: {result.errors[0]}"
        )
        return FileStat(
            file_path.name,
            FileStatus.INVALID,
            len(sheet.rows),
            elapsed(),
            error=result.errors[0].message,
        )

    if validate_only:
        logger.info(f"{file_path.name}: {len(sheet.rows)} row(s) valid")
        return FileStat(file_path.name, FileStatus.SUCCESS, len(sheet.rows), elapsed())

    try:
        nomina_file = generate(config.header, sheet.rows, config.catalogs, grouped=grouped)
    except NominaError as e:
        error_log.append(ErrorRecord.create(file_path.name, FILE_SCOPE, -1, "-", str(e)))
        logger.error(f"{file_path.name}: {e}")
        return FileStat(file_path.name, FileStatus.FAILED, len(sheet.rows), elapsed(), error=str(e))

    output_dir = Path(config.output_directory) / file_path.stem
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / nomina_file.file_name
    # newline="" conserva el CRLF del contenido
    output_path.write_text(nomina_file.content, encoding="ascii", newline="")
    logger.info(
        f"{file_path.name} -> {output_path} lines={nomina_file.line_count} "
        f"amount={nomina_file.total_amount}"
    )
    return FileStat(
        file_path.name,
        FileStatus.SUCCESS,
        len(sheet.rows),
        elapsed(),
        line_count=nomina_file.line_count,
        total_amount=nomina_file.total_amount,
        output_file=str(output_path),
    )


def process_all(
    config: NominaConfig,
    *,
    grouped: bool | None = None,
    validate_only: bool = False,
    logs_dir: Path | None = None,
) -> ProcessingResult:
    """Process every input file of config.source_directory.

    Args:
        config: Loaded batch configuration
        grouped: Output mode override (None -> config.grouped)
        validate_only: Validate without generating files
        logs_dir: Error log directory (default ./logs)

    Raises:
        ProcessingError: source directory missing or unreadable
    """
    start_time = datetime.now(UTC)
    error_log = ErrorLogBuffer(logs_dir)
    use_grouped = config.grouped if grouped is None else grouped

    file_paths = scan_input_files(Path(config.source_directory))

    file_stats: list[FileStat] = []
    success_count = 0
    failed_count = 0
    total_rows = 0
    total_lines = 0
    total_amount = 0

    with ProgressTracker(len(file_paths)) as progress:
        for file_path in file_paths:
            progress.start_file(file_path)
            stat = process_file(
                file_path, config, error_log, grouped=use_grouped, validate_only=validate_only
            )
            if stat.status is FileStatus.SUCCESS:
                success_count += 1
                total_rows += stat.row_count
                total_lines += stat.line_count
                total_amount += stat.total_amount
            else:
                failed_count += 1
            file_stats.append(stat)
            progress.finish_file(stat.status is FileStatus.SUCCESS)

    log_path = error_log.flush()
    if log_path is not None:
        logger.info(f"error log: {log_path}")

    end_time = datetime.now(UTC)
    return ProcessingResult(
        success_files=success_count,
        failed_files=failed_count,
        total_rows=total_rows,
        total_lines=total_lines,
        total_amount=total_amount,
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=file_stats,
        error_log_path=str(log_path) if log_path is not None else None,
    )

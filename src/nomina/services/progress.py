from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from tqdm import tqdm

"""tqdm progress bar over the input files of a batch run.

The bar only exists when stdout is a terminal; redirected output (CI, cron,
`> run.log`) keeps plain labeled log lines.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]

DEFAULT_DESCRIPTION = "Generando nominas"


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class ProgressTracker:
    """One tick per input file, with ok/failed counters as postfix."""

    def __init__(self, total_files: int, *, description: str = DEFAULT_DESCRIPTION) -> None:
        self.total_files = total_files
        self.description = description
        self.current_file = 0
        self.succeeded = 0
        self.failed = 0
        self.enabled = is_tty_enabled()
        self.pbar: Any | None = None
        if self.enabled:
            self.pbar = tqdm(
                total=total_files,
                desc=description,
                unit="file",
                disable=False,
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )

    def start_file(self, file_path: Path) -> None:
        self.current_file += 1
        if self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({file_path.name})")

    def finish_file(self, ok: bool) -> None:
        if ok:
            self.succeeded += 1
        else:
            self.failed += 1
        if self.pbar is not None:
            self.pbar.set_postfix(ok=self.succeeded, failed=self.failed)
            self.pbar.update(1)
            self.pbar.set_description(self.description)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

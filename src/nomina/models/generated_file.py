from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .normalized import GroupedRow, NormalizedHeader, NormalizedRow

"""GeneratedFile: terminal artifact of a successful generate() call."""

__all__ = [
    "OutputMode",
    "GeneratedFile",
    "LINE_SEPARATOR",
]

LINE_SEPARATOR = "\r\n"


class OutputMode(Enum):
    """Output layout.

    - NORMAL: one "10" + one "20" record per row, original order
    - GROUPED: one "10" record per account with netted amount
    """
    NORMAL = "normal"
    GROUPED = "grouped"

    @property
    def file_suffix(self) -> str:
        return "agrupada" if self is OutputMode.GROUPED else "normal"


@dataclass(frozen=True)
class GeneratedFile:
    file_name: str
    content: str  # líneas unidas con CRLF, sin separador final
    line_count: int
    total_amount: int
    mode: OutputMode
    normalized_header: NormalizedHeader | None = None
    normalized_rows: tuple[NormalizedRow, ...] = ()
    grouped_rows: tuple[GroupedRow, ...] | None = None  # solo modo agrupado

    @property
    def lines(self) -> list[str]:
        return self.content.split(LINE_SEPARATOR) if self.content else []

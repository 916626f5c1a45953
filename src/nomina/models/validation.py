from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

"""Validation result models.

A validation run returns every problem it finds; the presence of a single
ValidationError means the input is not generatable.
"""

__all__ = [
    "ErrorScope",
    "ValidationError",
    "ValidationResult",
]


class ErrorScope(Enum):
    """Where a validation error belongs.

    - HEADER: header field problem
    - ROW: row field problem, carries row_index
    - SYSTEM: structural problem of the whole input (e.g. no rows)
    """
    HEADER = "header"
    ROW = "row"
    SYSTEM = "system"


@dataclass(frozen=True)
class ValidationError:
    scope: ErrorScope
    field: str
    message: str
    row_index: int | None = None  # índice 0-based en la secuencia original

    def __str__(self) -> str:
        if self.row_index is not None:
            return f"fila {self.row_index + 1}, {self.field}: {self.message}"
        return f"{self.field}: {self.message}"


@dataclass(frozen=True)
class ValidationResult:
    errors: tuple[ValidationError, ...] = ()

    @property
    def valid(self) -> bool:
        return not self.errors

    @property
    def header_errors(self) -> list[ValidationError]:
        return [e for e in self.errors if e.scope is ErrorScope.HEADER]

    @property
    def row_errors(self) -> list[ValidationError]:
        return [e for e in self.errors if e.scope is ErrorScope.ROW]

    @property
    def invalid_row_indices(self) -> set[int]:
        """Indices of rows with at least one error."""
        return {e.row_index for e in self.errors if e.row_index is not None}

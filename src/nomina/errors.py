from __future__ import annotations

"""Fatal error hierarchy for the nomina engine.

Reportable problems (missing fields, unknown banks, invalid RUTs) travel as
ValidationError values inside a ValidationResult and never raise. The classes
below are the other channel: invariant violations or business situations with
no safe continuation. `generate` raises exactly one of them and stops.
"""

__all__ = [
    "NominaError",
    "NominaValidationError",
    "NominaGenerationError",
    "RutFormatError",
    "CatalogResolutionError",
    "InvalidAmountError",
    "NegativeGroupTotalError",
    "LineLengthError",
]


class NominaError(Exception):
    """Base class for every fatal engine error."""


class NominaValidationError(NominaError):
    """Raised by generate() when validation fails.

    The message is the first validation error; the full result stays
    available on `.result` for callers that want every error.
    """

    def __init__(self, message: str, result: object | None = None) -> None:
        super().__init__(message)
        self.result = result


class NominaGenerationError(NominaError):
    """Internal inconsistency while assembling the output file."""


class RutFormatError(NominaError):
    """RUT has no usable body to render in a fixed-width field."""


class CatalogResolutionError(NominaError):
    """A catalog lookup failed after validation said it would succeed."""


class InvalidAmountError(NominaError):
    """Amount is negative, non-numeric or not finite at render time."""


class NegativeGroupTotalError(NominaError):
    """Credit notes of an account exceed its debits in grouped mode."""

    def __init__(self, account: str, net_amount: int) -> None:
        super().__init__(
            f"La suma agrupada de la cuenta {account} quedó negativa ({net_amount}). "
            "Revisa las notas de crédito asociadas."
        )
        self.account = account
        self.net_amount = net_amount


class LineLengthError(NominaError):
    """A rendered record does not have the exact layout length."""

    def __init__(self, record_type: str, expected: int, actual: int) -> None:
        super().__init__(
            f"La línea {record_type} no cumple largo {expected}. Largo real: {actual}"
        )
        self.record_type = record_type
        self.expected = expected
        self.actual = actual

"""Bank payroll ("nomina") file generation for refund payments.

Public API:

    from nomina import HeaderInput, RowInput, generate, validate

    result = validate(header, rows)  # never raises
    nomina_file = generate(header, rows, grouped=True)
"""

from .errors import NominaError, NominaValidationError
from .models import (
    DEFAULT_CATALOGS,
    ErrorScope,
    GeneratedFile,
    HeaderInput,
    NominaCatalogs,
    OutputMode,
    RowInput,
    ValidationError,
    ValidationResult,
)
from .services.orchestrator import build_file_name, generate, validate

__all__ = [
    "generate",
    "validate",
    "build_file_name",
    "HeaderInput",
    "RowInput",
    "NominaCatalogs",
    "DEFAULT_CATALOGS",
    "ErrorScope",
    "ValidationError",
    "ValidationResult",
    "GeneratedFile",
    "OutputMode",
    "NominaError",
    "NominaValidationError",
]

__version__ = "0.1.0"

"""Domain models for the nomina generation engine.

Every model is a frozen dataclass: values are produced and consumed inside a
single validate()/generate() call and never outlive it.
"""

from .catalog import DEFAULT_CATALOGS, Bank, DocumentType, NominaCatalogs, PaymentMethod
from .generated_file import GeneratedFile, OutputMode
from .inputs import HeaderInput, RowInput
from .normalized import GroupedRow, NormalizedHeader, NormalizedRow
from .validation import ErrorScope, ValidationError, ValidationResult

__all__ = [
    # Catalogs
    "Bank",
    "PaymentMethod",
    "DocumentType",
    "NominaCatalogs",
    "DEFAULT_CATALOGS",
    # Input
    "HeaderInput",
    "RowInput",
    # Validation
    "ErrorScope",
    "ValidationError",
    "ValidationResult",
    # Normalized / output
    "NormalizedHeader",
    "NormalizedRow",
    "GroupedRow",
    "GeneratedFile",
    "OutputMode",
]

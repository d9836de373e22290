"""Modelli di dati per la fattura elettronica."""

from felkit.models.enums import ResourceKind, SubType, Verdict
from felkit.models.validation import ValidationResult

__all__ = [
    "ResourceKind",
    "SubType",
    "ValidationResult",
    "Verdict",
]

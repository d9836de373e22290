"""felkit : fatture elettroniche italiane (FatturaPA).

IT: Parsing, rilevamento del tipo (ordinaria/semplificata), validazione XSD
    e trasformazione in JSON, HTML e PDF.
EN: Parsing, sub-type detection, XSD validation and JSON/HTML/PDF rendering
    of Italian electronic invoices.
"""

from felkit.detection import detect_type, detect_type_by_versione
from felkit.document import FatturaElettronica, parse_xml
from felkit.environment import Capabilities, default_capabilities
from felkit.errors import (
    FelkitError,
    ParseError,
    PreconditionError,
    ResourceNotFound,
    TransformationFailed,
    UnrecognizedFormat,
    ValidationUnavailable,
)
from felkit.models import ResourceKind, SubType, ValidationResult, Verdict

__all__ = [
    "Capabilities",
    "FatturaElettronica",
    "FelkitError",
    "ParseError",
    "PreconditionError",
    "ResourceKind",
    "ResourceNotFound",
    "SubType",
    "TransformationFailed",
    "UnrecognizedFormat",
    "ValidationResult",
    "ValidationUnavailable",
    "Verdict",
    "default_capabilities",
    "detect_type",
    "detect_type_by_versione",
    "parse_xml",
]

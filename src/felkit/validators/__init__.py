"""Validazione XSD delle fatture elettroniche.

IT: Interfaccia dei validatori di schema, validatore lxml e validatore
    per ambienti privi di motore XSD.
EN: Schema validator interface, lxml validator and a validator for
    runtimes without an XSD engine.
"""

from felkit.validators.base import BaseSchemaValidator, UnavailableValidator
from felkit.validators.xsd import (
    SCHEMA_LOCATION_SUBSTITUTIONS,
    XSDValidator,
    patch_schema_locations,
)

__all__ = [
    "SCHEMA_LOCATION_SUBSTITUTIONS",
    "BaseSchemaValidator",
    "UnavailableValidator",
    "XSDValidator",
    "patch_schema_locations",
]

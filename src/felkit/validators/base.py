"""Interfaccia astratta per i validatori di schema.

IT: Un validatore riceve il testo XML e il nome canonico dello schema
    ("FatturaOrdinaria", "FatturaSemplificata") e restituisce un
    ValidationResult. Un documento invalido NON è un'eccezione: le eccezioni
    segnalano solo un guasto del motore di validazione.
EN: A validator takes the XML text and the canonical schema name and
    returns a ValidationResult. An invalid document is not an exception:
    exceptions only signal a validation engine failure.
"""

import logging
from abc import ABCMeta, abstractmethod

from felkit.models.validation import ValidationResult

logger = logging.getLogger(__name__)


class BaseSchemaValidator(metaclass=ABCMeta):
    """Classe base astratta per i validatori di schema."""

    @abstractmethod
    async def validate(self, xml_text: str, schema_name: str) -> ValidationResult:
        """Valida un documento XML contro uno schema.

        Args:
            xml_text: Il documento XML.
            schema_name: Nome dello schema senza estensione.

        Returns:
            VALID / INVALID con gli errori, UNKNOWN se il motore non è disponibile.

        Raises:
            ResourceNotFound: Se lo schema non esiste.
            ValidationUnavailable: Se il motore di validazione fallisce.
        """
        ...


class UnavailableValidator(BaseSchemaValidator):
    """Validatore per ambienti senza motore XSD.

    IT: Restituisce sempre UNKNOWN: il rilevamento del tipo passa quindi
        all'euristica sull'attributo ``versione``.
    EN: Always returns UNKNOWN, so type detection falls back to the
        ``versione`` heuristic.
    """

    reason = "Validazione XSD non disponibile in questo ambiente"

    async def validate(self, xml_text: str, schema_name: str) -> ValidationResult:
        logger.warning("%s (schema %s)", self.reason, schema_name)
        return ValidationResult.unknown(self.reason)

"""Enumerazioni per la fattura elettronica italiana.

IT: Sotto-tipi FatturaPA, esiti di validazione e tipi di risorsa.
EN: FatturaPA sub-types, validation verdicts and resource kinds.
"""

from enum import StrEnum

from felkit.errors import PreconditionError


class SubType(StrEnum):
    """Sotto-tipo della fattura elettronica.

    IT: Ordinaria (FPA12/FPR12) o semplificata (FSM10). UNDETERMINED finché
        il tipo non è stato rilevato.
    EN: Ordinary (FPA12/FPR12) or simplified (FSM10) invoice.
    """

    ORDINARIA = "ordinaria"
    """Fattura ordinaria / Ordinary invoice"""

    SEMPLIFICATA = "semplificata"
    """Fattura semplificata / Simplified invoice"""

    UNDETERMINED = "undetermined"
    """Tipo non ancora rilevato / Not yet detected"""

    @property
    def schema_name(self) -> str:
        """Nome canonico dello schema (e del foglio di stile) del sotto-tipo.

        Raises:
            PreconditionError: Se il tipo non è determinato.
        """
        if self is SubType.UNDETERMINED:
            msg = "Il tipo di fattura non è determinato: nessuno schema associato"
            raise PreconditionError(msg)
        return _SCHEMA_NAMES[self]

    @classmethod
    def from_schema_name(cls, schema_name: str) -> "SubType":
        """Sotto-tipo corrispondente a un nome di schema.

        Raises:
            ValueError: Se lo schema è sconosciuto.
        """
        for sub_type, name in _SCHEMA_NAMES.items():
            if name == schema_name:
                return sub_type
        msg = f"Schema sconosciuto : {schema_name!r}"
        raise ValueError(msg)


_SCHEMA_NAMES: dict[SubType, str] = {
    SubType.ORDINARIA: "FatturaOrdinaria",
    SubType.SEMPLIFICATA: "FatturaSemplificata",
}


class Verdict(StrEnum):
    """Esito di una validazione XSD.

    IT: UNKNOWN solo se il motore di validazione non è disponibile
        nell'ambiente: non equivale mai a INVALID.
    EN: UNKNOWN only when no validation engine is available.
    """

    VALID = "valid"
    INVALID = "invalid"
    UNKNOWN = "unknown"


class ResourceKind(StrEnum):
    """Tipo di risorsa caricata dal resource store."""

    SCHEMA = "schema"
    """Schema XSD (cartella ``schemi``)"""

    STYLESHEET = "stylesheet"
    """Foglio di stile XSLT (cartella ``style``)"""

    @property
    def directory(self) -> str:
        return "schemi" if self is ResourceKind.SCHEMA else "style"

    @property
    def extension(self) -> str:
        return ".xsd" if self is ResourceKind.SCHEMA else ".xsl"

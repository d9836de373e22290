"""Interfaccia astratta per il caricamento di schemi e fogli di stile.

IT: Il resource store fornisce il testo degli XSD e degli XSLT ufficiali.
    Ogni ambiente (filesystem, memoria, archivio remoto...) fornisce la
    propria implementazione.
EN: The resource store supplies the text of the official XSD and XSLT
    assets. Each environment provides its own implementation.
"""

import logging
from abc import ABCMeta, abstractmethod

from felkit.models.enums import ResourceKind, SubType

logger = logging.getLogger(__name__)


def resource_name(kind: ResourceKind, sub_type: SubType) -> str:
    """Nome file della risorsa per un sotto-tipo ("FatturaOrdinaria.xsd")."""
    return f"{sub_type.schema_name}{kind.extension}"


def resource_id(kind: ResourceKind, name: str) -> str:
    """Identificativo completo di una risorsa ("schemi/FatturaOrdinaria.xsd")."""
    return f"{kind.directory}/{name}"


class BaseResourceStore(metaclass=ABCMeta):
    """Classe base astratta per i resource store.

    IT: Le implementazioni concrete definiscono solo read(); load() risolve
        il nome canonico a partire dal sotto-tipo.
    EN: Concrete stores only implement read(); load() maps the sub-type to
        its canonical resource name.
    """

    @abstractmethod
    async def read(self, kind: ResourceKind, name: str) -> str:
        """Legge una risorsa per nome.

        Args:
            kind: Schema XSD o foglio di stile XSLT.
            name: Nome file della risorsa ("xmldsig-core-schema.xsd").

        Returns:
            Il contenuto testuale della risorsa.

        Raises:
            ResourceNotFound: Se la risorsa non esiste.
        """
        ...

    async def load(self, kind: ResourceKind, sub_type: SubType) -> str:
        """Carica lo schema o il foglio di stile di un sotto-tipo.

        Raises:
            PreconditionError: Se il sotto-tipo non è determinato.
            ResourceNotFound: Se la risorsa non esiste.
        """
        name = resource_name(kind, sub_type)
        logger.debug("Caricamento risorsa %s", resource_id(kind, name))
        return await self.read(kind, name)

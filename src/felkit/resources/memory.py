"""Resource store in memoria per i test e l'integrazione.

IT: Conserva schemi e fogli di stile in un dizionario. Utile per i test
    e per le applicazioni che caricano le risorse per conto proprio
    (database, bundle, download).
EN: Keeps schemas and stylesheets in a dictionary. Useful for tests and
    for applications that load the assets themselves.
"""

from __future__ import annotations

from felkit.errors import ResourceNotFound
from felkit.models.enums import ResourceKind
from felkit.resources.base import BaseResourceStore, resource_id


class MemoryResourceStore(BaseResourceStore):
    """Resource store basato su un dizionario.

    Example:
        store = MemoryResourceStore(
            schemas={"FatturaOrdinaria.xsd": xsd_text},
            stylesheets={"FatturaOrdinaria.xsl": xsl_text},
        )
    """

    def __init__(
        self,
        schemas: dict[str, str] | None = None,
        stylesheets: dict[str, str] | None = None,
    ) -> None:
        self._resources: dict[ResourceKind, dict[str, str]] = {
            ResourceKind.SCHEMA: dict(schemas or {}),
            ResourceKind.STYLESHEET: dict(stylesheets or {}),
        }

    def add(self, kind: ResourceKind, name: str, content: str) -> None:
        """Registra (o sostituisce) una risorsa."""
        self._resources[kind][name] = content

    async def read(self, kind: ResourceKind, name: str) -> str:
        try:
            return self._resources[kind][name]
        except KeyError:
            identifier = resource_id(kind, name)
            msg = f"Risorsa non trovata : {identifier}"
            raise ResourceNotFound(msg, resource=identifier) from None

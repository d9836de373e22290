"""Validazione XSD delle fatture elettroniche.

IT: Valida un XML di fattura contro lo schema XSD ufficiale FatturaPA
    caricato dal resource store. Usa lxml direttamente per restituire
    TUTTI gli errori di validazione. Gli import remoti degli XSD ufficiali
    (firma XMLDSig) vengono riscritti verso copie locali: nessun accesso
    alla rete.
EN: Validates an invoice XML against the official FatturaPA XSD loaded
    from the resource store, returning every error. Remote imports are
    rewritten to local copies: no network access.
"""

from __future__ import annotations

import asyncio
import logging

from lxml import etree

from felkit.errors import ResourceNotFound, ValidationUnavailable
from felkit.models.enums import ResourceKind
from felkit.models.validation import ValidationResult
from felkit.resources.base import BaseResourceStore
from felkit.utils.xml_helpers import parse_text, safe_parser, strip_schema_location
from felkit.validators.base import BaseSchemaValidator

logger = logging.getLogger(__name__)

# URL remoti usati negli import degli XSD ufficiali → nome del file locale
SCHEMA_LOCATION_SUBSTITUTIONS: dict[str, str] = {
    "http://www.w3.org/TR/2002/REC-xmldsig-core-20020212/xmldsig-core-schema.xsd": (
        "xmldsig-core-schema.xsd"
    ),
}


def patch_schema_locations(xsd_text: str) -> str:
    """Sostituisce gli URL remoti negli import XSD con i nomi dei file locali."""
    for url, local_name in SCHEMA_LOCATION_SUBSTITUTIONS.items():
        xsd_text = xsd_text.replace(url, local_name)
    return xsd_text


class _LocalSchemaResolver(etree.Resolver):
    """Risolve gli import XSD verso gli schemi di supporto precaricati."""

    def __init__(self, schemas: dict[str, str]) -> None:
        super().__init__()
        self._schemas = schemas

    def resolve(self, system_url, public_id, context):  # noqa: ANN001, ANN201
        name = (system_url or "").rsplit("/", 1)[-1]
        content = self._schemas.get(name)
        if content is None:
            return None
        return self.resolve_string(patch_schema_locations(content).encode("utf-8"), context)


class XSDValidator(BaseSchemaValidator):
    """Validatore XSD basato su lxml.

    IT: Lo schema viene compilato a ogni chiamata: nessuno stato condiviso
        tra documenti validati in parallelo.
    EN: The schema is compiled on each call: no state is shared between
        concurrent validations.
    """

    def __init__(self, store: BaseResourceStore) -> None:
        self.store = store

    async def validate(self, xml_text: str, schema_name: str) -> ValidationResult:
        """Valida ``xml_text`` contro ``<schema_name>.xsd``.

        Returns:
            VALID, oppure INVALID con tutti gli errori ("Riga n: messaggio").
            Un XML non ben formato è INVALID con l'errore di sintassi.

        Raises:
            ResourceNotFound: Se lo schema principale non esiste.
            ValidationUnavailable: Se lo schema non può essere compilato.
        """
        xsd_text = await self.store.read(ResourceKind.SCHEMA, f"{schema_name}.xsd")
        support_schemas = await self._load_support_schemas(schema_name)
        return await asyncio.to_thread(
            _validate_sync, xml_text, schema_name, xsd_text, support_schemas
        )

    async def _load_support_schemas(self, schema_name: str) -> dict[str, str]:
        """Carica gli schemi importati (es. xmldsig-core-schema.xsd) se presenti."""
        schemas: dict[str, str] = {}
        for name in sorted(set(SCHEMA_LOCATION_SUBSTITUTIONS.values())):
            if name == f"{schema_name}.xsd":
                continue
            try:
                schemas[name] = await self.store.read(ResourceKind.SCHEMA, name)
            except ResourceNotFound:
                logger.debug("Schema di supporto %s assente, import non risolto", name)
        return schemas


def _validate_sync(
    xml_text: str,
    schema_name: str,
    xsd_text: str,
    support_schemas: dict[str, str],
) -> ValidationResult:
    # 1. Compilazione dello schema (un guasto qui non dipende dal documento)
    schema = _compile_schema(schema_name, xsd_text, support_schemas)

    # 2. Parsing dell'XML
    try:
        xml_doc = parse_text(xml_text)
    except etree.XMLSyntaxError as exc:
        return ValidationResult.failed([f"Errore di sintassi XML : {exc}"])
    strip_schema_location(xml_doc)

    # 3. Validazione
    if schema.validate(xml_doc):
        return ValidationResult.ok()

    return ValidationResult.failed(
        [f"Riga {error.line}: {error.message}" for error in schema.error_log]
    )


def _compile_schema(
    schema_name: str,
    xsd_text: str,
    support_schemas: dict[str, str],
) -> etree.XMLSchema:
    """Compila lo schema XSD con gli import risolti localmente.

    Raises:
        ValidationUnavailable: Se lo schema è malformato o non compilabile.
    """
    parser = safe_parser(encoding="utf-8")
    parser.resolvers.add(_LocalSchemaResolver(support_schemas))
    try:
        xsd_doc = etree.fromstring(
            patch_schema_locations(xsd_text).encode("utf-8"),
            parser=parser,
            base_url=f"{schema_name}.xsd",
        )
        return etree.XMLSchema(xsd_doc)
    except (etree.XMLSyntaxError, etree.XMLSchemaParseError) as exc:
        msg = f"Schema XSD {schema_name} non utilizzabile : {exc}"
        errors = [f"Riga {error.line}: {error.message}" for error in exc.error_log]
        raise ValidationUnavailable(msg, errors=errors) from exc

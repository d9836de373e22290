"""Modello del documento di fattura elettronica.

IT: Classe principale della libreria. Il documento viene parsato alla
    costruzione; il tipo (ordinaria/semplificata) resta UNDETERMINED finché
    non si chiama detect_type(). Tutte le operazioni che dipendono dal tipo
    verificano esplicitamente questa precondizione.

    Utilizzo consigliato (rileva il tipo automaticamente via XSD)::

        fattura = await FatturaElettronica.from_xml(xml)
        fattura.sub_type  # SubType.ORDINARIA | SubType.SEMPLIFICATA

    Utilizzo in due passi::

        fattura = FatturaElettronica(xml)
        await fattura.detect_type()
EN: Main library class. The document is parsed on construction; the
    sub-type stays UNDETERMINED until detect_type() is called, and every
    sub-type dependent operation checks that precondition explicitly.
"""

from __future__ import annotations

import copy
import logging
from typing import Any

from felkit.detection import detect_type
from felkit.environment import Capabilities, default_capabilities
from felkit.errors import PreconditionError
from felkit.models.enums import ResourceKind, SubType
from felkit.models.validation import ValidationResult
from felkit.renderers.json_renderer import to_json
from felkit.utils.xml_helpers import decode_xml, element_to_dict

logger = logging.getLogger(__name__)


def parse_xml(xml: str | bytes) -> dict[str, Any]:
    """Parsa un documento XML nella struttura a dizionari usata da felkit.

    Raises:
        ParseError: Se l'XML è vuoto, non testuale o non ben formato.
    """
    _, root = decode_xml(xml)
    return element_to_dict(root)


class FatturaElettronica:
    """Fattura elettronica italiana (FatturaPA)."""

    def __init__(self, xml: str | bytes, *, capabilities: Capabilities | None = None) -> None:
        """Parsa il documento.

        Args:
            xml: Documento XML (stringa, o bytes decodificati secondo il prologo).
            capabilities: Capacità esterne; di default quelle configurate.

        Raises:
            ParseError: Se l'XML è vuoto, non testuale o non ben formato.
        """
        self._raw_text, root = decode_xml(xml)
        self._data = element_to_dict(root)
        self._sub_type = SubType.UNDETERMINED
        self._capabilities = capabilities

    @classmethod
    async def from_xml(
        cls,
        xml: str | bytes,
        *,
        capabilities: Capabilities | None = None,
    ) -> FatturaElettronica:
        """Crea il documento rilevandone subito il tipo tramite validazione XSD."""
        instance = cls(xml, capabilities=capabilities)
        await instance.detect_type()
        return instance

    # --- Proprietà (sola lettura) ---

    @property
    def raw_text(self) -> str:
        """XML grezzo originale."""
        return self._raw_text

    @property
    def data(self) -> dict[str, Any]:
        """Copia della struttura parsata della fattura.

        IT: Modificare la copia non altera il documento.
        EN: Mutating the returned copy never alters the document.
        """
        return copy.deepcopy(self._data)

    structure = data

    @property
    def capabilities(self) -> Capabilities:
        """Validatore, resource store e motori di trasformazione.

        IT: Senza capacità esplicite quelle configurate vengono risolte al
            primo utilizzo, non alla costruzione.
        EN: Default capabilities are resolved on first use.

        Raises:
            ValueError: Se la configurazione felkit non è valida.
        """
        if self._capabilities is None:
            self._capabilities = default_capabilities()
        return self._capabilities

    @property
    def sub_type(self) -> SubType:
        """Tipo rilevato, UNDETERMINED finché detect_type() non è stato chiamato."""
        return self._sub_type

    def __repr__(self) -> str:
        root = next(iter(self._data), "?")
        return f"<FatturaElettronica {root} sub_type={self._sub_type.value}>"

    # --- Rilevamento tipo ---

    async def detect_type(self) -> SubType:
        """Valida il documento contro gli XSD e imposta ``sub_type``.

        IT: Idempotente: a parità di XML il risultato è sempre lo stesso.
        EN: Idempotent for an unchanged document.

        Raises:
            ValidationUnavailable: Se il validatore stesso fallisce.
            UnrecognizedFormat: Se il tipo non può essere determinato.
        """
        self._sub_type = await detect_type(self._raw_text, self.capabilities.validator)
        return self._sub_type

    # --- Validazione ---

    async def validate(self) -> ValidationResult:
        """Valida il documento contro lo schema del tipo rilevato.

        Raises:
            PreconditionError: Se il tipo non è stato rilevato.
        """
        self._require_type("validate")
        return await self.capabilities.validator.validate(
            self._raw_text, self._sub_type.schema_name
        )

    # --- Trasformatori ---

    def to_json(self, indent: int | None = 2) -> str:
        """Serializza la struttura della fattura in JSON.

        Raises:
            PreconditionError: Se il tipo non è stato rilevato.
        """
        self._require_type("to_json")
        return to_json(self._data, indent=indent)

    async def to_html(self) -> str:
        """Trasforma la fattura in HTML con il foglio XSLT ufficiale del tipo.

        Raises:
            PreconditionError: Se il tipo non è stato rilevato.
            ResourceNotFound: Se il foglio di stile non esiste.
            TransformationFailed: Se la trasformazione non produce risultato.
        """
        self._require_type("to_html")
        stylesheet = await self.capabilities.store.load(ResourceKind.STYLESHEET, self._sub_type)
        return await self._render_html(stylesheet)

    async def to_html_from_xsl(self, xsl: str) -> str:
        """Come to_html(), con un foglio di stile già caricato dal chiamante.

        Raises:
            PreconditionError: Se il tipo non è stato rilevato.
            TransformationFailed: Se la trasformazione non produce risultato.
        """
        self._require_type("to_html_from_xsl")
        return await self._render_html(xsl)

    async def to_pdf(self) -> bytes:
        """Converte la fattura in PDF (HTML ufficiale stampato da un browser headless).

        Raises:
            PreconditionError: Se il tipo non è stato rilevato.
            ResourceNotFound: Se il foglio di stile non esiste.
            TransformationFailed: Se HTML o PDF risultano vuoti.
        """
        self._require_type("to_pdf")
        html = await self.to_html()
        return await self.capabilities.pdf_renderer.render(html)

    # --- Helper privati ---

    async def _render_html(self, stylesheet: str) -> str:
        html = await self.capabilities.transformer.render(self._raw_text, stylesheet)
        logger.info("Fattura %s trasformata in HTML (%d caratteri)", self._sub_type, len(html))
        return html

    def _require_type(self, method: str) -> None:
        if self._sub_type is SubType.UNDETERMINED:
            msg = (
                f"{method}() richiede che il tipo sia stato rilevato. "
                "Usare FatturaElettronica.from_xml() oppure chiamare detect_type() prima."
            )
            raise PreconditionError(msg)

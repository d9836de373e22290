"""Capacità esterne iniettate nel documento.

IT: Il nucleo è scritto una sola volta contro le interfacce astratte; ogni
    ambiente di esecuzione fornisce il proprio validatore, resource store,
    motore XSLT e motore PDF.
EN: The core is written once against abstract interfaces; each runtime
    supplies its own validator, resource store, XSLT engine and PDF engine.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from felkit.conf import get_setting
from felkit.renderers.base import BasePDFRenderer, BaseTransformer
from felkit.renderers.html import LxmlXSLTTransformer, SaxonXSLTTransformer
from felkit.renderers.pdf import PlaywrightPDFRenderer
from felkit.resources.base import BaseResourceStore
from felkit.resources.filesystem import FileSystemResourceStore
from felkit.validators.base import BaseSchemaValidator
from felkit.validators.xsd import XSDValidator

_TRANSFORMERS: dict[str, type[BaseTransformer]] = {
    "lxml": LxmlXSLTTransformer,
    "saxon": SaxonXSLTTransformer,
}


@dataclass(frozen=True)
class Capabilities:
    """Insieme delle capacità usate da FatturaElettronica."""

    store: BaseResourceStore
    validator: BaseSchemaValidator
    transformer: BaseTransformer = field(default_factory=LxmlXSLTTransformer)
    pdf_renderer: BasePDFRenderer = field(default_factory=PlaywrightPDFRenderer)

    @classmethod
    def from_store(cls, store: BaseResourceStore, **kwargs: object) -> Capabilities:
        """Capacità predefinite costruite attorno a un resource store."""
        return cls(store=store, validator=XSDValidator(store), **kwargs)  # type: ignore[arg-type]


def default_capabilities() -> Capabilities:
    """Capacità predefinite secondo la configurazione felkit.

    Raises:
        ValueError: Se FELKIT_XSLT_ENGINE non è supportato.
    """
    engine = str(get_setting("XSLT_ENGINE")).lower()
    transformer_class = _TRANSFORMERS.get(engine)
    if transformer_class is None:
        msg = (
            f"Motore XSLT non supportato : {engine!r}. "
            f"Motori disponibili : {', '.join(sorted(_TRANSFORMERS))}"
        )
        raise ValueError(msg)

    return Capabilities.from_store(
        FileSystemResourceStore(),
        transformer=transformer_class(),
    )

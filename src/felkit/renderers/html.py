"""Trasformazione XSLT della fattura in HTML.

IT: Applica i fogli di stile ufficiali dell'Agenzia delle Entrate.
    Il motore predefinito è libxslt (lxml, XSLT 1.0); per fogli XSLT 2.0/3.0
    è disponibile saxonche (Saxon C HE) come dipendenza opzionale.
EN: Applies the official stylesheets. The default engine is libxslt
    (lxml, XSLT 1.0); saxonche is available as an optional XSLT 2.0/3.0
    engine.
"""

from __future__ import annotations

import asyncio
import logging
import re

from lxml import etree

from felkit.errors import TransformationFailed
from felkit.renderers.base import BaseTransformer
from felkit.utils.xml_helpers import parse_text

logger = logging.getLogger(__name__)

_STYLESHEET_VERSION_RE = re.compile(r'(<xsl:stylesheet\b[^>]*?\s)version=(["\'])1\.1\2')

_ACCESS_CONTROL = etree.XSLTAccessControl(
    read_network=False,
    write_file=False,
    create_dir=False,
    write_network=False,
)


def patch_stylesheet_version(stylesheet_text: str) -> str:
    """Riporta a 1.0 la versione dichiarata dai fogli ufficiali.

    IT: I fogli dell'Agenzia delle Entrate dichiarano version="1.1" ma usano
        solo istruzioni XSLT 1.0.
    EN: The official stylesheets declare version="1.1" but only use
        XSLT 1.0 instructions.
    """
    return _STYLESHEET_VERSION_RE.sub(r'\1version="1.0"', stylesheet_text, count=1)


class LxmlXSLTTransformer(BaseTransformer):
    """Motore XSLT 1.0 basato su lxml (libxslt), senza accesso alla rete."""

    async def render(self, document_text: str, stylesheet_text: str) -> str:
        return await asyncio.to_thread(_transform_sync, document_text, stylesheet_text)


def _transform_sync(document_text: str, stylesheet_text: str) -> str:
    try:
        xsl_doc = parse_text(patch_stylesheet_version(stylesheet_text))
        transform = etree.XSLT(xsl_doc, access_control=_ACCESS_CONTROL)
        result = transform(parse_text(document_text))
    except (etree.XMLSyntaxError, etree.XSLTError) as exc:
        msg = f"Trasformazione XSLT fallita : {exc}"
        errors = [f"Riga {error.line}: {error.message}" for error in exc.error_log]
        raise TransformationFailed(msg, errors=errors) from exc

    output = str(result) if result is not None else ""
    if not output.strip():
        logger.warning("La trasformazione XSLT non ha prodotto alcun risultato")
        msg = "Trasformazione XSLT fallita : lxml ha restituito un risultato vuoto"
        raise TransformationFailed(msg)
    return output


class SaxonXSLTTransformer(BaseTransformer):
    """Motore XSLT 2.0/3.0 basato su saxonche (Saxon C HE).

    IT: Richiede l'extra opzionale: pip install felkit[xslt2]
    EN: Requires the optional extra: pip install felkit[xslt2]
    """

    async def render(self, document_text: str, stylesheet_text: str) -> str:
        return await asyncio.to_thread(_saxon_transform_sync, document_text, stylesheet_text)


def _saxon_transform_sync(document_text: str, stylesheet_text: str) -> str:
    try:
        from saxonche import PySaxonApiError, PySaxonProcessor
    except ImportError:
        msg = (
            "saxonche è richiesto per le trasformazioni XSLT 2.0. "
            "Installarlo con : pip install felkit[xslt2]"
        )
        raise ImportError(msg)

    try:
        with PySaxonProcessor(license=False) as proc:
            xslt_proc = proc.new_xslt30_processor()
            executable = xslt_proc.compile_stylesheet(stylesheet_text=stylesheet_text)
            node = proc.parse_xml(xml_text=document_text)
            output = executable.transform_to_string(xdm_node=node)
    except PySaxonApiError as exc:
        msg = f"Trasformazione XSLT fallita : {exc}"
        raise TransformationFailed(msg) from exc

    if not output:
        logger.warning("La trasformazione XSLT non ha prodotto alcun risultato")
        msg = "Trasformazione XSLT fallita : saxonche ha restituito un risultato vuoto"
        raise TransformationFailed(msg)
    return output

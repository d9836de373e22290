"""Utilità per la manipolazione XML.

IT: Parsing sicuro con lxml (niente rete, niente espansione di entità),
    conversione del documento in dizionario, rimozione degli hint
    xsi:schemaLocation e lettura testuale dell'attributo ``versione``.
EN: Hardened lxml parsing, XML to mapping conversion, schema location hint
    stripping and textual lookup of the ``versione`` attribute.
"""

from __future__ import annotations

import codecs
import re
from typing import Any

from lxml import etree

from felkit.errors import ParseError

ATTRIBUTE_PREFIX = "@_"
TEXT_KEY = "#text"

_XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
_SCHEMA_LOCATION_HINTS = (
    f"{{{_XSI_NS}}}schemaLocation",
    f"{{{_XSI_NS}}}noNamespaceSchemaLocation",
)
_XML_NS = "http://www.w3.org/XML/1998/namespace"

# Dichiarazione, PI, commenti e DOCTYPE (con eventuale subset interno)
_PROLOG_NOISE_RE = re.compile(
    r"<!--.*?-->|<\?.*?\?>|<!DOCTYPE[^\[>]*(?:\[.*?\])?\s*>",
    re.DOTALL,
)
_ROOT_TAG_RE = re.compile(r"<(?![?!/])[^>]*>")
_VERSIONE_RE = re.compile(r"\bversione\s*=\s*([\"'])(.*?)\1", re.DOTALL)


def safe_parser(**kwargs: Any) -> etree.XMLParser:
    """Parser lxml senza accesso alla rete né espansione di entità."""
    return etree.XMLParser(no_network=True, resolve_entities=False, **kwargs)


def parse_text(text: str, base_url: str | None = None) -> etree._Element:
    """Parsa una stringa XML ignorando la codifica dichiarata nel prologo.

    lxml rifiuta le stringhe Unicode con dichiarazione di encoding:
    il testo viene quindi ricodificato in UTF-8 forzando il parser.

    Raises:
        etree.XMLSyntaxError: Se il testo non è XML ben formato.
    """
    parser = safe_parser(encoding="utf-8")
    return etree.fromstring(text.encode("utf-8"), parser=parser, base_url=base_url)


def decode_xml(xml: str | bytes) -> tuple[str, etree._Element]:
    """Restituisce il testo del documento e l'elemento radice.

    IT: Le stringhe sono usate così come sono; i bytes vengono decodificati
        secondo la codifica dichiarata nel prologo XML (BOM compreso).
    EN: Strings are used as is; bytes are decoded following the XML
        declaration (BOM aware).

    Raises:
        ParseError: Se l'input è vuoto, non testuale o non ben formato.
    """
    if not isinstance(xml, (str, bytes)):
        msg = f"L'XML deve essere una stringa non vuota, ricevuto {type(xml).__name__}"
        raise ParseError(msg)
    if not xml.strip():
        msg = "L'XML deve essere una stringa non vuota"
        raise ParseError(msg)

    try:
        if isinstance(xml, str):
            return xml, parse_text(xml)
        root = etree.fromstring(xml, parser=safe_parser())
    except (etree.XMLSyntaxError, UnicodeError) as exc:
        msg = f"Errore nel parsing XML : {exc}"
        raise ParseError(msg) from exc

    encoding = root.getroottree().docinfo.encoding or "utf-8"
    if codecs.lookup(encoding).name == "utf-8":
        encoding = "utf-8-sig"
    try:
        return xml.decode(encoding), root
    except (LookupError, UnicodeDecodeError) as exc:
        msg = f"Impossibile decodificare l'XML come {encoding} : {exc}"
        raise ParseError(msg) from exc


def element_to_dict(root: etree._Element) -> dict[str, Any]:
    """Converte l'albero XML in un dizionario annidato.

    IT: I nomi mantengono il prefisso del documento ("p:FatturaElettronica"),
        gli attributi sono prefissati da "@_", gli elementi ripetuti diventano
        liste e i valori restano stringhe.
    EN: Names keep the document prefix, attributes are prefixed with "@_",
        repeated elements become lists and values stay strings.
    """
    return {_tag_name(root): _element_value(root, {})}


def _element_value(element: etree._Element, parent_nsmap: dict) -> Any:
    node: dict[str, Any] = {}

    for prefix, uri in element.nsmap.items():
        if parent_nsmap.get(prefix) != uri:
            key = "xmlns" if prefix is None else f"xmlns:{prefix}"
            node[ATTRIBUTE_PREFIX + key] = uri

    for name, value in element.attrib.items():
        node[ATTRIBUTE_PREFIX + _qualified_name(element, name)] = value

    for child in element:
        # Commenti, PI ed entità non risolte hanno un tag non testuale
        if not isinstance(child.tag, str):
            continue
        key = _tag_name(child)
        value = _element_value(child, element.nsmap)
        if key not in node:
            node[key] = value
        elif isinstance(node[key], list):
            node[key].append(value)
        else:
            node[key] = [node[key], value]

    text = "".join(element.xpath("text()")).strip()
    if not node:
        return text
    if text:
        node[TEXT_KEY] = text
    return node


def _tag_name(element: etree._Element) -> str:
    localname = etree.QName(element).localname
    return f"{element.prefix}:{localname}" if element.prefix else localname


def _qualified_name(element: etree._Element, name: str) -> str:
    qname = etree.QName(name)
    if qname.namespace is None:
        return qname.localname
    if qname.namespace == _XML_NS:
        return f"xml:{qname.localname}"
    prefix = next(
        (p for p, uri in element.nsmap.items() if uri == qname.namespace and p),
        None,
    )
    return f"{prefix}:{qname.localname}" if prefix else qname.localname


def strip_schema_location(root: etree._Element) -> etree._Element:
    """Rimuove gli hint xsi:schemaLocation da tutti gli elementi.

    IT: Le fatture reali puntano a schemi remoti: l'hint non deve mai
        prevalere sullo schema passato esplicitamente al validatore.
    EN: Removes xsi schema location hints so that they never override the
        explicitly supplied schema.
    """
    for element in root.iter():
        if not isinstance(element.tag, str):
            continue
        for attribute in _SCHEMA_LOCATION_HINTS:
            element.attrib.pop(attribute, None)
    return root


def find_versione(text: str) -> str | None:
    """Legge l'attributo ``versione`` dal tag radice con una scansione testuale.

    IT: Volutamente non strutturale: viene usata quando il documento non
        rispetta nessuno schema noto.
    EN: Deliberately textual: used when the document matches no schema.
    """
    root_tag = _ROOT_TAG_RE.search(_PROLOG_NOISE_RE.sub("", text))
    if root_tag is None:
        return None
    match = _VERSIONE_RE.search(root_tag.group(0))
    return match.group(2).strip() if match else None


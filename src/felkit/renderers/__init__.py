"""Trasformatori della fattura: JSON, HTML (XSLT) e PDF."""

from felkit.renderers.base import BasePDFRenderer, BaseTransformer
from felkit.renderers.html import (
    LxmlXSLTTransformer,
    SaxonXSLTTransformer,
    patch_stylesheet_version,
)
from felkit.renderers.json_renderer import to_json
from felkit.renderers.pdf import PlaywrightPDFRenderer

__all__ = [
    "BasePDFRenderer",
    "BaseTransformer",
    "LxmlXSLTTransformer",
    "PlaywrightPDFRenderer",
    "SaxonXSLTTransformer",
    "patch_stylesheet_version",
    "to_json",
]

"""Interfacce astratte per i motori di trasformazione e di stampa."""

from abc import ABC, abstractmethod


class BaseTransformer(ABC):
    """Classe base astratta per i motori XSLT.

    IT: Applica un foglio di stile al documento e restituisce il testo
        prodotto (HTML per i fogli ufficiali).
    EN: Applies a stylesheet to the document and returns the output text.
    """

    @abstractmethod
    async def render(self, document_text: str, stylesheet_text: str) -> str:
        """Trasforma il documento con il foglio di stile.

        Args:
            document_text: Il documento XML.
            stylesheet_text: Il foglio di stile XSLT.

        Returns:
            Il risultato serializzato della trasformazione.

        Raises:
            TransformationFailed: Se il motore non produce alcun risultato.
        """
        ...


class BasePDFRenderer(ABC):
    """Classe base astratta per la conversione HTML → PDF."""

    @abstractmethod
    async def render(self, html: str) -> bytes:
        """Converte una pagina HTML in PDF.

        Raises:
            TransformationFailed: Se il PDF prodotto è vuoto.
        """
        ...

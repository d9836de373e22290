"""Gerarchia di eccezioni di felkit.

IT: Eccezioni tipizzate che distinguono "documento non valido",
    "documento non validabile" e "tipo non ancora rilevato".
EN: Typed exceptions distinguishing "not valid", "could not be validated"
    and "not yet classified".
"""


class FelkitError(Exception):
    """Errore di base per tutte le operazioni felkit.

    IT: Classe madre di tutte le eccezioni sollevate dalla libreria.
    EN: Base class for all library exceptions.
    """


class ParseError(FelkitError, ValueError):
    """XML vuoto, non ben formato o di tipo non testuale.

    IT: Sollevata alla costruzione del documento.
    EN: Raised while constructing a document.
    """


class ValidationUnavailable(FelkitError):
    """Il motore di validazione stesso ha fallito.

    IT: Schema malformato, risorsa illeggibile o errore del motore XSD.
        Non significa che il documento sia invalido.
    EN: The validation engine failed (broken schema, I/O error...).
        It does not mean the document is invalid.
    """

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors: list[str] = errors or []


class UnrecognizedFormat(FelkitError):
    """Né la validazione XSD né l'attributo versione identificano il tipo."""


class PreconditionError(FelkitError):
    """Operazione che richiede il tipo invocata prima del rilevamento.

    IT: Chiamare detect_type() oppure usare FatturaElettronica.from_xml().
    EN: Call detect_type() first, or use FatturaElettronica.from_xml().
    """


class ResourceNotFound(FelkitError):
    """Schema XSD o foglio di stile XSLT non trovato.

    IT: L'attributo ``resource`` contiene l'identificativo atteso.
    EN: The ``resource`` attribute holds the expected identifier.
    """

    def __init__(self, message: str, resource: str = "") -> None:
        super().__init__(message)
        self.resource = resource


class TransformationFailed(FelkitError):
    """Il motore di trasformazione non ha prodotto un risultato utilizzabile."""

    def __init__(self, message: str, errors: list[str] | None = None) -> None:
        super().__init__(message)
        self.errors: list[str] = errors or []

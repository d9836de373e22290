"""Rilevamento del tipo di fattura elettronica.

IT: Algoritmo in due fasi:
    1. Validazione contro gli XSD ufficiali (fase principale), nell'ordine
       FatturaSemplificata poi FatturaOrdinaria: il primo schema rispettato
       determina il tipo.
    2. Se nessuno XSD valida (fattura con scostamenti minori dallo standard),
       fallback sull'attributo ``versione`` dell'elemento radice:
       FSM* → semplificata, FPR*/FPA* → ordinaria.
    Un guasto del motore di validazione interrompe subito il rilevamento.
EN: Two-phase detection: XSD validation first (simplified schema before
    ordinary), then a textual fallback on the root ``versione`` attribute.
    A validation engine failure aborts detection immediately.
"""

import logging

from felkit.errors import UnrecognizedFormat, ValidationUnavailable
from felkit.models.enums import SubType, Verdict
from felkit.utils.xml_helpers import find_versione
from felkit.validators.base import BaseSchemaValidator

logger = logging.getLogger(__name__)

# L'ordine conta: uno schema più restrittivo viene provato per primo
DETECTION_ORDER: tuple[SubType, ...] = (SubType.SEMPLIFICATA, SubType.ORDINARIA)

_VERSIONE_PREFIXES: tuple[tuple[str, SubType], ...] = (
    ("FSM", SubType.SEMPLIFICATA),
    ("FPR", SubType.ORDINARIA),
    ("FPA", SubType.ORDINARIA),
)


async def detect_type(raw_text: str, validator: BaseSchemaValidator) -> SubType:
    """Rileva il tipo di una fattura elettronica.

    Args:
        raw_text: Il documento XML grezzo.
        validator: Il validatore di schema da usare come verità di riferimento.

    Returns:
        SubType.SEMPLIFICATA oppure SubType.ORDINARIA.

    Raises:
        ValidationUnavailable: Se il validatore stesso fallisce.
        UnrecognizedFormat: Se né gli XSD né ``versione`` determinano il tipo.
    """
    # --- Fase 1 : validazione XSD ---
    for sub_type in DETECTION_ORDER:
        schema_name = sub_type.schema_name
        try:
            result = await validator.validate(raw_text, schema_name)
        except ValidationUnavailable:
            raise
        except Exception as exc:
            msg = f"Impossibile rilevare il tipo di fattura : {exc}"
            raise ValidationUnavailable(msg) from exc

        if result.verdict is Verdict.VALID:
            logger.info("Tipo fattura rilevato via XSD : %s", sub_type)
            return sub_type
        logger.debug(
            "Documento non conforme a %s (%s, %d errori)",
            schema_name,
            result.verdict,
            len(result.errors),
        )

    # --- Fase 2 : fallback sull'attributo versione ---
    sub_type = detect_type_by_versione(raw_text)
    if sub_type is not None:
        logger.warning(
            "Nessuno schema XSD rispettato : tipo %s dedotto dall'attributo versione",
            sub_type,
        )
        return sub_type

    msg = (
        "Formato fattura non riconosciuto : il documento XML non è valido "
        "né come FatturaSemplificata né come FatturaOrdinaria, "
        "e l'attributo versione non è riconoscibile."
    )
    raise UnrecognizedFormat(msg)


def detect_type_by_versione(raw_text: str) -> SubType | None:
    """Deduce il tipo dal prefisso dell'attributo ``versione`` (maiuscole/minuscole indifferenti).

    Returns:
        Il sotto-tipo, oppure None se l'attributo è assente o sconosciuto.
    """
    versione = find_versione(raw_text)
    if not versione:
        return None

    versione = versione.upper()
    for prefix, sub_type in _VERSIONE_PREFIXES:
        if versione.startswith(prefix):
            return sub_type
    return None

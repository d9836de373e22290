"""Serializzazione JSON della struttura della fattura."""

import json
from typing import Any


def to_json(data: dict[str, Any], indent: int | None = 2) -> str:
    """Serializza i dati parsati della fattura in una stringa JSON.

    IT: L'ordine delle chiavi e i caratteri accentati sono conservati:
        json.loads() sul risultato restituisce una struttura uguale a ``data``.
    EN: Key order and non-ASCII characters are preserved: json.loads() on
        the output yields a structure equal to ``data``.
    """
    return json.dumps(data, indent=indent, ensure_ascii=False)

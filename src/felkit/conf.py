"""Configurazione di felkit.

IT: Helper per accedere ai parametri della libreria. Ordine di ricerca:
    override programmatici (configure()), variabili d'ambiente FELKIT_<NOME>,
    poi i valori di default.
EN: Helper for accessing library settings. Lookup order: programmatic
    overrides (configure()), FELKIT_<NAME> environment variables, defaults.
"""

from __future__ import annotations

import logging
import os

logger = logging.getLogger(__name__)

ENV_PREFIX = "FELKIT_"

DEFAULTS: dict[str, object] = {
    "RESOURCES_DIR": None,
    "XSLT_ENGINE": "lxml",
    "PDF_FORMAT": "A4",
    "PDF_MARGIN": "15mm",
    "PDF_TIMEOUT_MS": 30000,
}

_overrides: dict[str, object] = {}


def get_setting(name: str) -> object:
    """Restituisce il valore di un parametro felkit.

    IT: Le variabili d'ambiente vengono convertite al tipo del default
        quando questo è un intero.
    EN: Environment values are cast to int when the default is an int.

    Raises:
        KeyError: Se il parametro è sconosciuto.
    """
    if name not in DEFAULTS:
        msg = f"Parametro felkit sconosciuto : {name}"
        raise KeyError(msg)
    if name in _overrides:
        return _overrides[name]

    raw = os.environ.get(f"{ENV_PREFIX}{name}")
    if raw is None:
        return DEFAULTS[name]
    if isinstance(DEFAULTS[name], int):
        try:
            return int(raw)
        except ValueError:
            msg = f"{ENV_PREFIX}{name} deve essere un intero, ricevuto {raw!r}"
            raise ValueError(msg) from None
    return raw


def configure(**settings: object) -> None:
    """Imposta uno o più parametri a runtime.

    Raises:
        KeyError: Se un parametro è sconosciuto.
    """
    unknown = sorted(set(settings) - set(DEFAULTS))
    if unknown:
        msg = f"Parametri felkit sconosciuti : {', '.join(unknown)}"
        raise KeyError(msg)
    _overrides.update(settings)
    logger.debug("Configurazione felkit aggiornata : %s", ", ".join(sorted(settings)))


def reset() -> None:
    """Rimuove tutti gli override programmatici."""
    _overrides.clear()

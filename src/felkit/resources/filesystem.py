"""Resource store su filesystem.

IT: Legge gli XSD da ``<base_dir>/schemi`` e gli XSLT da ``<base_dir>/style``.
    Senza cartella esplicita usa FELKIT_RESOURCES_DIR, poi la cartella
    ``data`` inclusa nel package.
EN: Reads XSD files from ``<base_dir>/schemi`` and XSLT files from
    ``<base_dir>/style``.
"""

from __future__ import annotations

import asyncio
import importlib.resources
from pathlib import Path

from felkit.conf import get_setting
from felkit.errors import ResourceNotFound
from felkit.models.enums import ResourceKind
from felkit.resources.base import BaseResourceStore, resource_id


def default_resources_dir() -> Path:
    """Cartella risorse configurata, o quella inclusa nel package."""
    configured = get_setting("RESOURCES_DIR")
    if configured:
        return Path(str(configured))
    return Path(str(importlib.resources.files("felkit").joinpath("data")))


class FileSystemResourceStore(BaseResourceStore):
    """Resource store che legge i file da una cartella locale."""

    def __init__(self, base_dir: str | Path | None = None) -> None:
        self.base_dir = Path(base_dir) if base_dir is not None else default_resources_dir()

    def path_for(self, kind: ResourceKind, name: str) -> Path:
        return self.base_dir / kind.directory / name

    async def read(self, kind: ResourceKind, name: str) -> str:
        path = self.path_for(kind, name)
        try:
            return await asyncio.to_thread(path.read_text, encoding="utf-8")
        except FileNotFoundError:
            identifier = resource_id(kind, name)
            msg = (
                f"Risorsa non trovata : {path}. "
                f"Inserire il file {name} in {path.parent}"
            )
            raise ResourceNotFound(msg, resource=identifier) from None

"""Resource store per schemi XSD e fogli di stile XSLT.

IT: Interfaccia astratta e implementazioni su filesystem e in memoria.
EN: Abstract interface plus filesystem and in-memory implementations.
"""

from felkit.resources.base import BaseResourceStore, resource_id, resource_name
from felkit.resources.filesystem import FileSystemResourceStore
from felkit.resources.memory import MemoryResourceStore

__all__ = [
    "BaseResourceStore",
    "FileSystemResourceStore",
    "MemoryResourceStore",
    "resource_id",
    "resource_name",
]

"""Mirror catalog and selection services."""

from .catalog import MirrorCatalogClient
from .selector import MirrorSelector

__all__ = ["MirrorCatalogClient", "MirrorSelector"]

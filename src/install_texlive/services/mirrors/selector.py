"""Mirror selection."""

import random

from install_texlive.exceptions import NoMirrorAvailableError
from install_texlive.logger import get_logger
from install_texlive.models.mirror import (
    CatalogUnavailable,
    LiveMirrorStatus,
    MirrorCatalog,
    MirrorRecord,
    SelectedMirror,
)

logger = get_logger(__name__)


class MirrorSelector:
    """Picks the freshest mirror of a region, breaking ties at random."""

    def __init__(self, continent: str, country: str, rng: random.Random | None = None) -> None:
        self.continent = continent
        self.country = country
        self._rng = rng or random.Random()

    @staticmethod
    def is_applicable(record: MirrorRecord, requested_version: int | None) -> bool:
        """
        Check whether a mirror can serve the requested version.

        Without a requested version only ``Alive`` mirrors qualify. With one,
        ``Special`` mirrors qualify too, as long as they serve exactly that version.
        """
        entry = record.entry
        if not isinstance(entry, LiveMirrorStatus):
            return False
        if requested_version is None:
            return entry.status == "Alive"
        return entry.texlive_version == requested_version

    def select(
        self,
        catalog: MirrorCatalog | CatalogUnavailable,
        requested_version: int | None = None,
    ) -> SelectedMirror | None:
        """
        Select a mirror from the catalog.

        Args:
            catalog: Fetched catalog or the unavailable marker
            requested_version: TeX Live version the mirror must serve

        Returns:
            Selected mirror, or None when the catalog is unavailable

        Raises:
            NoMirrorAvailableError: If no mirror of the region is applicable
        """
        if isinstance(catalog, CatalogUnavailable):
            logger.info(f"Mirror catalog unavailable ({catalog.reason}), falling back to CTAN auto selection")
            return None

        candidates = [
            r for r in catalog.in_region(self.continent, self.country) if self.is_applicable(r, requested_version)
        ]
        if not candidates:
            raise NoMirrorAvailableError(requested_version)

        entries = {r.url: r.entry for r in candidates if isinstance(r.entry, LiveMirrorStatus)}

        newest_version = max(e.texlive_version for e in entries.values())
        newest = {url: e for url, e in entries.items() if e.texlive_version == newest_version}

        newest_revision = max(e.revision for e in newest.values())
        tied = sorted(url for url, e in newest.items() if e.revision == newest_revision)

        url = self._rng.choice(tied)
        logger.info(f"Selected mirror {url} (TeX Live {newest_version}, revision {newest_revision})")
        return SelectedMirror(url=url, texlive_version=newest_version, revision=newest_revision)

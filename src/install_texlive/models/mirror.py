"""Mirror catalog models."""

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class LiveMirrorStatus(BaseModel):
    """Status of a reachable mirror.

    ``Special`` mirrors serve one pinned TeX Live version (usually a frozen
    historic release) without being globally alive.
    """

    model_config = ConfigDict(frozen=True)

    status: Literal["Alive", "Special"]
    texlive_version: int
    revision: int


class DownMirrorStatus(BaseModel):
    """Status of a mirror that failed its last check."""

    model_config = ConfigDict(frozen=True)

    status: Literal["Dead", "Timeout"]


MirrorStatus = Annotated[LiveMirrorStatus | DownMirrorStatus, Field(discriminator="status")]

# continent -> country -> mirror url -> status
CatalogDocument = dict[str, dict[str, dict[str, MirrorStatus]]]
_document_adapter: TypeAdapter[CatalogDocument] = TypeAdapter(CatalogDocument)


class MirrorRecord(BaseModel):
    """One mirror of the catalog, flattened out of the nested document."""

    model_config = ConfigDict(frozen=True)

    continent: str
    country: str
    url: str
    entry: MirrorStatus


class MirrorCatalog(BaseModel):
    """Immutable snapshot of the mirror catalog."""

    model_config = ConfigDict(frozen=True)

    records: tuple[MirrorRecord, ...] = ()

    @classmethod
    def from_document(cls, data: Any) -> "MirrorCatalog":  # noqa: ANN401
        """Validate a nested catalog document and flatten it.

        Raises:
            pydantic.ValidationError: If the document does not match the catalog shape
        """
        document = _document_adapter.validate_python(data)
        records = tuple(
            MirrorRecord(continent=continent, country=country, url=url, entry=entry)
            for continent, countries in document.items()
            for country, mirrors in countries.items()
            for url, entry in mirrors.items()
        )
        return cls(records=records)

    def in_region(self, continent: str, country: str) -> list[MirrorRecord]:
        """Return the mirrors of one country."""
        return [r for r in self.records if r.continent == continent and r.country == country]


class CatalogUnavailable(BaseModel):
    """The catalog could not be retrieved; tlmgr picks a mirror instead."""

    model_config = ConfigDict(frozen=True)

    reason: str


class SelectedMirror(BaseModel):
    """Mirror picked by the selector."""

    model_config = ConfigDict(frozen=True)

    url: str
    texlive_version: int
    revision: int

    @property
    def repository_url(self) -> str:
        """tlnet repository below the mirror root."""
        return self.url.rstrip("/") + "/systems/texlive/tlnet"


class ResolvedRepository(BaseModel):
    """Repository, version and revision used for this run.

    A missing ``url`` lets tlmgr choose a mirror automatically.
    """

    model_config = ConfigDict(frozen=True)

    url: str | None = None
    texlive_version: int | None = None
    revision: int | None = None

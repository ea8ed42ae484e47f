"""Action input models."""

from pathlib import Path

from pydantic import BaseModel


class ActionInputs(BaseModel):
    """Inputs of the action as given in the workflow file."""

    repository: str | None = None
    package_file: Path | None = None
    packages: str | None = None
    cache_version: str
    texlive_version: int | None = None
    accept_stale: bool = False

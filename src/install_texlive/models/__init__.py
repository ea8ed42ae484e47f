"""Data models for install-texlive."""

from install_texlive.models.cache import CacheKey, InstallOutcome, InstallResult
from install_texlive.models.config import AppConfig
from install_texlive.models.inputs import ActionInputs
from install_texlive.models.mirror import (
    CatalogUnavailable,
    MirrorCatalog,
    MirrorRecord,
    ResolvedRepository,
    SelectedMirror,
)

__all__ = [
    "ActionInputs",
    "AppConfig",
    "CacheKey",
    "CatalogUnavailable",
    "InstallOutcome",
    "InstallResult",
    "MirrorCatalog",
    "MirrorRecord",
    "ResolvedRepository",
    "SelectedMirror",
]

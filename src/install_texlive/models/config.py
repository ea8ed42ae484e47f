"""Configuration data models for install-texlive."""

import tempfile
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

DEFAULT_CATALOG_URL = "https://zauguin.github.io/texlive-mirrors/v1/mirrors.json"
DEFAULT_REPOSITORY = "https://mirrors.ctan.org/systems/texlive/tlnet"


class MirrorsConfig(BaseModel):
    """Mirror catalog and region configuration."""

    catalog_url: str = DEFAULT_CATALOG_URL
    continent: str = "North America"
    country: str = "USA"
    # Used to download the installer when no mirror was resolved
    default_repository: str = DEFAULT_REPOSITORY
    request_timeout: float = 30.0


class PathsConfig(BaseModel):
    """Paths configuration."""

    home_dir: Path = Field(default_factory=Path.home)
    tmp_dir: Path = Field(default_factory=lambda: Path(tempfile.gettempdir()))
    cache_dir: Path | None = None

    @field_validator("home_dir", "tmp_dir", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        """Expand user path."""
        if isinstance(v, str):
            return Path(v).expanduser()
        return v

    @field_validator("cache_dir", mode="before")
    @classmethod
    def expand_optional_path(cls, v: str | Path | None) -> Path | None:
        """Expand user path for optional paths."""
        if v is None:
            return None
        if isinstance(v, str):
            return Path(v).expanduser()
        return v

    @property
    def cache_root(self) -> Path:
        """Cache store directory, under the home directory unless configured."""
        return self.cache_dir or self.home_dir / ".cache" / "install-texlive"

    @property
    def texlive_dir(self) -> Path:
        """TEXDIR of the managed installation."""
        return self.home_dir / "texlive"


class AdvancedConfig(BaseModel):
    """Advanced configuration."""

    log_level: Literal["INFO", "DEBUG", "TRACE"] = "INFO"
    # Cache entries kept per key prefix after a save
    cache_retention: int = Field(default=1, ge=1)


class AppConfig(BaseModel):
    """Application configuration."""

    mirrors: MirrorsConfig = Field(default_factory=MirrorsConfig)
    paths: PathsConfig = Field(default_factory=PathsConfig)
    advanced: AdvancedConfig = Field(default_factory=AdvancedConfig)

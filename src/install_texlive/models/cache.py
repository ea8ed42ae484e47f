"""Cache key and installation outcome models."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, model_validator


class CacheKey(BaseModel):
    """Coarse and exact addressing of a cached installation."""

    model_config = ConfigDict(frozen=True)

    prefix: str
    full: str

    @model_validator(mode="after")
    def full_starts_with_prefix(self) -> "CacheKey":
        if not self.full.startswith(self.prefix):
            raise ValueError("full cache key must start with its prefix")
        return self


class InstallOutcome(str, Enum):
    """Terminal state of a successful run."""

    EXACT_HIT = "exact_hit"
    FRESH_INSTALLED = "fresh_installed"
    REFRESH_APPLIED = "refresh_applied"
    STALE_ACCEPTED = "stale_accepted"


class InstallResult(BaseModel):
    """Outcome of the orchestrator together with the emitted cache key."""

    outcome: InstallOutcome
    key: str

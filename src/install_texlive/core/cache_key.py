"""Cache key derivation."""

import hashlib
from datetime import date, datetime, timezone

from install_texlive.models.cache import CacheKey

NO_VERSION = "NONE"


def hash_packages(packages: list[str]) -> str:
    """SHA-256 hex digest of the comma separated, sorted package names."""
    return hashlib.sha256(",".join(packages).encode("utf-8")).hexdigest()


def calculate_cache_key(
    namespace: str,
    packages: list[str],
    tl_platform: str,
    texlive_version: int | None = None,
    revision: int | None = None,
    today: date | None = None,
) -> CacheKey:
    """
    Derive the cache key of an installation.

    The prefix identifies platform, namespace, package set and TeX Live
    version. The full key appends the mirror revision, or the current UTC
    date when no revision is known so that unpinned caches expire daily.

    Args:
        namespace: Caller supplied cache version
        packages: Sorted package names
        tl_platform: TeX Live platform identifier
        texlive_version: Resolved TeX Live version, if any
        revision: Resolved repository revision, if any
        today: Date used when no revision is known, defaults to today in UTC

    Returns:
        CacheKey with prefix and full key
    """
    version = str(texlive_version) if texlive_version is not None else NO_VERSION
    prefix = f"texlive-{tl_platform}-{namespace}-{hash_packages(packages)}-{version}-"

    if revision is not None:
        suffix = str(revision)
    else:
        if today is None:
            today = datetime.now(timezone.utc).date()
        suffix = today.isoformat()

    return CacheKey(prefix=prefix, full=prefix + suffix)

"""Persisted cache storage with prefix fallback."""

import asyncio
import os
import shutil
import tarfile
import tempfile
from collections.abc import Sequence
from pathlib import Path
from typing import Protocol

from install_texlive.exceptions import CacheStoreError
from install_texlive.logger import get_logger

logger = get_logger(__name__)

ARCHIVE_SUFFIX = ".tar.gz"


class CacheStore(Protocol):
    """Blob storage for directory snapshots addressed by key."""

    async def restore(self, paths: Sequence[Path], key: str, restore_keys: Sequence[str] = ()) -> str | None:
        """Restore paths from key, or from the newest entry matching a restore key prefix."""
        ...

    async def save(self, paths: Sequence[Path], key: str, evict_prefix: str | None = None) -> str:
        """Save paths under key and return the key saved.

        Older entries whose key starts with evict_prefix may be dropped.
        """
        ...


class LocalCacheStore:
    """CacheStore keeping gzip tarballs in a local directory.

    Each path is stored under its index in ``paths``, so restore and save
    must be called with the same path list. A save with an eviction prefix
    keeps only the newest ``retention`` entries sharing that prefix.
    """

    def __init__(self, root: Path, retention: int = 1) -> None:
        if retention < 1:
            raise ValueError("retention must be at least 1")
        self.root = root
        self.retention = retention

    def _archive_path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key in (".", ".."):
            raise CacheStoreError(key)
        return self.root / f"{key}{ARCHIVE_SUFFIX}"

    def _entries(self) -> list[tuple[str, Path]]:
        if not self.root.is_dir():
            return []
        entries = [
            (p.name[: -len(ARCHIVE_SUFFIX)], p) for p in self.root.iterdir() if p.name.endswith(ARCHIVE_SUFFIX)
        ]
        # Newest first
        entries.sort(key=lambda e: e[1].stat().st_mtime_ns, reverse=True)
        return entries

    def find(self, key: str, restore_keys: Sequence[str] = ()) -> str | None:
        """
        Look up the key that restore would use.

        An exact match wins. Otherwise restore keys are tried in order, each
        matching the most recently saved entry whose key starts with it.
        """
        if self._archive_path(key).is_file():
            return key
        entries = self._entries()
        for prefix in restore_keys:
            for entry_key, _path in entries:
                if entry_key.startswith(prefix):
                    return entry_key
        return None

    async def restore(self, paths: Sequence[Path], key: str, restore_keys: Sequence[str] = ()) -> str | None:
        matched = self.find(key, restore_keys)
        if matched is None:
            logger.info(f"No cache entry found for {key}")
            return None

        archive = self._archive_path(matched)
        logger.info(f"Restoring {archive}")
        await asyncio.to_thread(self._extract, archive, paths)
        return matched

    async def save(self, paths: Sequence[Path], key: str, evict_prefix: str | None = None) -> str:
        archive = self._archive_path(key)
        await asyncio.to_thread(self._write_archive, archive, paths)
        logger.info(f"Saved cache entry {key} to {archive}")
        if evict_prefix is not None:
            await asyncio.to_thread(self.evict, evict_prefix, key)
        return key

    def evict(self, prefix: str, keep: str) -> list[str]:
        """
        Delete entries starting with prefix beyond the newest retained ones.

        The entry named keep is never deleted and counts towards the retained
        entries.

        Returns:
            Keys of the deleted entries
        """
        retained = 1
        evicted = []
        for entry_key, path in self._entries():
            if entry_key == keep or not entry_key.startswith(prefix):
                continue
            if retained < self.retention:
                retained += 1
                continue
            path.unlink(missing_ok=True)
            evicted.append(entry_key)
            logger.info(f"Evicted cache entry {entry_key}")
        return evicted

    def _write_archive(self, archive: Path, paths: Sequence[Path]) -> None:
        self.root.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.root, suffix=".tmp")
        os.close(fd)
        try:
            with tarfile.open(tmp_name, "w:gz") as tar:
                for index, path in enumerate(paths):
                    if path.exists():
                        tar.add(path, arcname=str(index))
                    else:
                        logger.warning(f"Cache path {path} does not exist, skipping")
            os.replace(tmp_name, archive)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _extract(self, archive: Path, paths: Sequence[Path]) -> None:
        with tempfile.TemporaryDirectory(dir=self.root) as staging_dir:
            staging = Path(staging_dir)
            with tarfile.open(archive, "r:gz") as tar:
                tar.extractall(staging)

            for index, path in enumerate(paths):
                source = staging / str(index)
                if not source.exists():
                    continue
                if path.is_dir() and not path.is_symlink():
                    shutil.rmtree(path)
                elif path.exists() or path.is_symlink():
                    path.unlink()
                path.parent.mkdir(parents=True, exist_ok=True)
                shutil.move(str(source), str(path))

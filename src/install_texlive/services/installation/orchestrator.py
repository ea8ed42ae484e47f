"""Cache-aware install/update state machine."""

from pathlib import Path
from typing import Protocol

from install_texlive.logger import get_logger
from install_texlive.models.cache import CacheKey, InstallOutcome, InstallResult
from install_texlive.models.mirror import ResolvedRepository
from install_texlive.services.cache.store import CacheStore

logger = get_logger(__name__)

OUTPUT_KEY = "key"


class Installer(Protocol):
    async def install(self, initial_install: bool, repository: str | None, packages: list[str]) -> None: ...


class OutputSink(Protocol):
    def set_output(self, name: str, value: str) -> None: ...

    def info(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...


class InstallationOrchestrator:
    """
    Restores a cached installation and brings it up to date.

    An exact cache hit ends the run immediately. Otherwise the restored
    installation is refreshed, or TeX Live is installed from scratch when
    nothing was restored. When a refresh fails and stale caches are
    accepted, the restored installation is kept and its key is emitted.
    A failed first-time install is always fatal.
    """

    def __init__(self, store: CacheStore, installer: Installer, sink: OutputSink, texlive_dir: Path) -> None:
        """
        Initialize the orchestrator.

        Args:
            store: Cache store holding installation snapshots
            installer: Performs the install or update
            sink: Receives the emitted cache key
            texlive_dir: Installation directory that is cached
        """
        self.store = store
        self.installer = installer
        self.sink = sink
        self.texlive_dir = texlive_dir

    async def run(
        self,
        repository: ResolvedRepository,
        cache_key: CacheKey,
        packages: list[str],
        accept_stale: bool,
    ) -> InstallResult:
        """
        Run the install/update for one cache key.

        Returns:
            The terminal outcome and the emitted key

        Raises:
            Exception: Whatever the install or update raised, unless a stale cache is accepted
        """
        paths = [self.texlive_dir]

        self.sink.info(f"Trying to restore with key {cache_key.full}")
        restored = await self.store.restore(paths, cache_key.full, [cache_key.prefix])

        if restored == cache_key.full:
            self.sink.info(f"Restored cache with key {restored}")
            return self._emit(InstallOutcome.EXACT_HIT, restored)

        initial_install = restored is None
        if initial_install:
            self.sink.info("No cached installation found, installing TeX Live")
        else:
            self.sink.info(f"Restored stale cache with key {restored}, updating")

        try:
            await self.installer.install(initial_install, repository.url, packages)
        except Exception as e:
            if not accept_stale or restored is None:
                raise
            self.sink.warning(f"Updating TeX Live failed, keeping cached installation {restored}: {e}")
            return self._emit(InstallOutcome.STALE_ACCEPTED, restored)

        saved = await self.store.save(paths, cache_key.full, evict_prefix=cache_key.prefix)
        self.sink.info(f"Updated cache with key {saved}")
        outcome = InstallOutcome.FRESH_INSTALLED if initial_install else InstallOutcome.REFRESH_APPLIED
        return self._emit(outcome, saved)

    def _emit(self, outcome: InstallOutcome, key: str) -> InstallResult:
        logger.debug(f"Installation finished: {outcome.value}")
        self.sink.set_output(OUTPUT_KEY, key)
        return InstallResult(outcome=outcome, key=key)

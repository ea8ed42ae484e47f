# ruff: noqa: ANN201, ANN001
from collections.abc import Sequence
from pathlib import Path

import pytest

from install_texlive.core.cache_key import calculate_cache_key
from install_texlive.exceptions import InstallerExitError, PackageManagerExitError
from install_texlive.models.cache import InstallOutcome
from install_texlive.models.mirror import ResolvedRepository
from install_texlive.services.installation import InstallationOrchestrator

TEXLIVE_DIR = Path("/home/runner/texlive")
KEY = calculate_cache_key("v1", ["amsmath"], "x86_64-linux", texlive_version=2024, revision=71000)
REPOSITORY = ResolvedRepository(url="https://mirror.example/systems/texlive/tlnet", texlive_version=2024, revision=71000)


class FakeStore:
    def __init__(self, restored: str | None):
        self.restored = restored
        self.restore_calls = []
        self.saved = []
        self.evict_prefixes = []

    async def restore(self, paths: Sequence[Path], key: str, restore_keys: Sequence[str] = ()):
        self.restore_calls.append((list(paths), key, list(restore_keys)))
        return self.restored

    async def save(self, paths: Sequence[Path], key: str, evict_prefix: str | None = None):
        self.saved.append((list(paths), key))
        self.evict_prefixes.append(evict_prefix)
        return key


class FakeInstaller:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.calls = []

    async def install(self, initial_install, repository, packages):
        self.calls.append((initial_install, repository, packages))
        if self.error is not None:
            raise self.error


class FakeSink:
    def __init__(self):
        self.outputs = {}
        self.messages = []

    def set_output(self, name, value):
        self.outputs[name] = value

    def info(self, message):
        self.messages.append(("info", message))

    def warning(self, message):
        self.messages.append(("warning", message))


def make_orchestrator(store, installer):
    sink = FakeSink()
    return InstallationOrchestrator(store, installer, sink, TEXLIVE_DIR), sink


@pytest.mark.asyncio
async def test_exact_hit_short_circuits():
    store = FakeStore(restored=KEY.full)
    installer = FakeInstaller()
    orchestrator, sink = make_orchestrator(store, installer)

    result = await orchestrator.run(REPOSITORY, KEY, ["amsmath"], accept_stale=False)

    assert result.outcome == InstallOutcome.EXACT_HIT
    assert result.key == KEY.full
    assert sink.outputs == {"key": KEY.full}
    assert installer.calls == []
    assert store.saved == []
    assert store.restore_calls == [([TEXLIVE_DIR], KEY.full, [KEY.prefix])]


@pytest.mark.asyncio
async def test_first_install_saves_and_emits_full_key():
    store = FakeStore(restored=None)
    installer = FakeInstaller()
    orchestrator, sink = make_orchestrator(store, installer)

    result = await orchestrator.run(REPOSITORY, KEY, ["amsmath"], accept_stale=False)

    assert result.outcome == InstallOutcome.FRESH_INSTALLED
    assert installer.calls == [(True, REPOSITORY.url, ["amsmath"])]
    assert store.saved == [([TEXLIVE_DIR], KEY.full)]
    assert store.evict_prefixes == [KEY.prefix]
    assert sink.outputs == {"key": KEY.full}


@pytest.mark.asyncio
async def test_stale_cache_is_refreshed():
    store = FakeStore(restored=KEY.prefix + "70000")
    installer = FakeInstaller()
    orchestrator, sink = make_orchestrator(store, installer)

    result = await orchestrator.run(REPOSITORY, KEY, ["amsmath"], accept_stale=True)

    assert result.outcome == InstallOutcome.REFRESH_APPLIED
    assert installer.calls == [(False, REPOSITORY.url, ["amsmath"])]
    assert store.saved == [([TEXLIVE_DIR], KEY.full)]
    assert sink.outputs == {"key": KEY.full}


@pytest.mark.asyncio
async def test_failed_refresh_accepts_stale_cache():
    restored = KEY.prefix + "2024-01-01"
    store = FakeStore(restored=restored)
    installer = FakeInstaller(error=PackageManagerExitError("Updating TeX Live", 1))
    orchestrator, sink = make_orchestrator(store, installer)

    result = await orchestrator.run(REPOSITORY, KEY, ["amsmath"], accept_stale=True)

    assert result.outcome == InstallOutcome.STALE_ACCEPTED
    assert result.key == restored
    assert sink.outputs == {"key": restored}
    assert store.saved == []
    assert any(level == "warning" for level, _ in sink.messages)


@pytest.mark.asyncio
async def test_failed_refresh_is_fatal_without_accept_stale():
    store = FakeStore(restored=KEY.prefix + "2024-01-01")
    installer = FakeInstaller(error=PackageManagerExitError("Setting repository", 2))
    orchestrator, sink = make_orchestrator(store, installer)

    with pytest.raises(PackageManagerExitError) as exc_info:
        await orchestrator.run(REPOSITORY, KEY, ["amsmath"], accept_stale=False)

    assert str(exc_info.value) == "Setting repository failed with status code 2"
    assert sink.outputs == {}
    assert store.saved == []


@pytest.mark.asyncio
async def test_failed_first_install_is_fatal_even_with_accept_stale():
    store = FakeStore(restored=None)
    installer = FakeInstaller(error=InstallerExitError("Installing TeX Live", 1))
    orchestrator, sink = make_orchestrator(store, installer)

    with pytest.raises(InstallerExitError):
        await orchestrator.run(REPOSITORY, KEY, ["amsmath"], accept_stale=True)

    assert sink.outputs == {}
    assert store.saved == []


@pytest.mark.asyncio
async def test_unexpected_refresh_error_can_also_be_accepted():
    restored = KEY.prefix + "69000"
    store = FakeStore(restored=restored)
    installer = FakeInstaller(error=FileNotFoundError("tlmgr"))
    orchestrator, sink = make_orchestrator(store, installer)

    result = await orchestrator.run(ResolvedRepository(), KEY, [], accept_stale=True)

    assert result.outcome == InstallOutcome.STALE_ACCEPTED
    assert installer.calls == [(False, None, [])]

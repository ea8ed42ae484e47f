# ruff: noqa: ANN201, ANN001
import io
import tarfile
import zipfile
from pathlib import Path

import httpx
import pytest

from install_texlive.exceptions import DownloadFailedError, InstallerExitError, PackageManagerExitError
from install_texlive.services.installation import TexLiveInstaller

REPOSITORY = "https://mirror.example/systems/texlive/tlnet"
DEFAULT_REPOSITORY = "https://mirrors.ctan.org/systems/texlive/tlnet"


def make_tarball() -> bytes:
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as tar:
        script = b"#!/bin/sh\necho install-tl\n"
        info = tarfile.TarInfo("install-tl-20240312/install-tl")
        info.size = len(script)
        info.mode = 0o755
        tar.addfile(info, io.BytesIO(script))
    return buffer.getvalue()


def make_zip() -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        zf.writestr("install-tl-20240312/install-tl-windows.bat", "@echo off\r\n")
    return buffer.getvalue()


class FakeRunner:
    def __init__(self, failing: dict[str, int] | None = None):
        self.commands = []
        self.failing = failing or {}

    async def __call__(self, *command):
        self.commands.append(command)
        for marker, status in self.failing.items():
            if marker in command:
                return status
        return 0


def make_installer(tmp_path, runner, handler, tl_platform="x86_64-linux"):
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    installer = TexLiveInstaller(
        tl_platform,
        home_dir=tmp_path / "home",
        tmp_dir=tmp_path / "tmp",
        default_repository=DEFAULT_REPOSITORY,
        run_process=runner,
        client=client,
    )
    return installer, client


@pytest.mark.asyncio
async def test_initial_install_runs_every_step(tmp_path: Path):
    requested = []

    def handler(request):
        requested.append(str(request.url))
        return httpx.Response(200, content=make_tarball())

    runner = FakeRunner()
    installer, client = make_installer(tmp_path, runner, handler)
    async with client:
        await installer.install(True, REPOSITORY, ["amsmath", "hyperref"])

    assert requested == [f"{REPOSITORY}/install-tl-unx.tar.gz"]
    # Leading directory of the archive is stripped
    assert (tmp_path / "tmp" / "install-texlive" / "install-tl").is_file()

    profile = (tmp_path / "tmp" / "texlive.profile").read_text(encoding="utf-8")
    assert "selected_scheme scheme-infraonly" in profile
    assert f"TEXDIR {(tmp_path / 'home').as_posix()}/texlive" in profile

    tlmgr = installer.tlmgr
    assert runner.commands == [
        (
            str(tmp_path / "tmp" / "install-texlive" / "install-tl"),
            f"--repository={REPOSITORY}",
            f"--profile={(tmp_path / 'tmp' / 'texlive.profile').as_posix()}",
        ),
        (tlmgr, "option", "--", "autobackup", "0"),
        (tlmgr, "option", "repository", REPOSITORY),
        (tlmgr, "install", "amsmath", "hyperref"),
        (tlmgr, "update", "--self", "--all"),
    ]


@pytest.mark.asyncio
async def test_initial_install_without_repository_uses_defaults(tmp_path: Path):
    requested = []

    def handler(request):
        requested.append(str(request.url))
        return httpx.Response(200, content=make_tarball())

    runner = FakeRunner()
    installer, client = make_installer(tmp_path, runner, handler)
    async with client:
        await installer.install(True, None, [])

    assert requested == [f"{DEFAULT_REPOSITORY}/install-tl-unx.tar.gz"]
    install_tl = runner.commands[0]
    assert not any(arg.startswith("--repository") for arg in install_tl)
    assert (installer.tlmgr, "option", "repository", "ctan") in runner.commands
    # Nothing to install
    assert not any("install" in command[1:2] for command in runner.commands[1:])


@pytest.mark.asyncio
async def test_refresh_only_repoints_and_updates(tmp_path: Path):
    def handler(request):
        raise AssertionError("refresh must not download the installer")

    runner = FakeRunner()
    installer, client = make_installer(tmp_path, runner, handler)
    async with client:
        await installer.install(False, REPOSITORY, ["amsmath"])

    assert runner.commands == [
        (installer.tlmgr, "option", "repository", REPOSITORY),
        (installer.tlmgr, "update", "--self", "--all"),
    ]


@pytest.mark.asyncio
async def test_failing_tlmgr_step_raises_with_description(tmp_path: Path):
    runner = FakeRunner(failing={"install": 2})
    installer, client = make_installer(tmp_path, runner, lambda request: httpx.Response(200, content=make_tarball()))

    async with client:
        with pytest.raises(PackageManagerExitError) as exc_info:
            await installer.install(True, REPOSITORY, ["amsmath"])

    assert str(exc_info.value) == "Installing packages failed with status code 2"
    assert exc_info.value.status == 2
    # Update is never reached
    assert (installer.tlmgr, "update", "--self", "--all") not in runner.commands


@pytest.mark.asyncio
async def test_failing_installer_raises(tmp_path: Path):
    runner = FakeRunner(failing={f"--repository={REPOSITORY}": 1})
    installer, client = make_installer(tmp_path, runner, lambda request: httpx.Response(200, content=make_tarball()))

    async with client:
        with pytest.raises(InstallerExitError) as exc_info:
            await installer.install(True, REPOSITORY, ["amsmath"])

    assert str(exc_info.value) == "Installing TeX Live failed with status code 1"
    assert len(runner.commands) == 1


@pytest.mark.asyncio
async def test_download_status_error(tmp_path: Path):
    runner = FakeRunner()
    installer, client = make_installer(tmp_path, runner, lambda request: httpx.Response(404))

    async with client:
        with pytest.raises(DownloadFailedError) as exc_info:
            await installer.install(True, REPOSITORY, ["amsmath"])

    assert str(exc_info.value) == "Downloading installer failed with status code 404"
    assert runner.commands == []


@pytest.mark.asyncio
async def test_download_transport_error(tmp_path: Path):
    def handler(request):
        raise httpx.ReadTimeout("timed out", request=request)

    installer, client = make_installer(tmp_path, FakeRunner(), handler)

    async with client:
        with pytest.raises(DownloadFailedError) as exc_info:
            await installer.install(True, REPOSITORY, [])

    assert exc_info.value.status is None


@pytest.mark.asyncio
async def test_windows_uses_zip_and_batch_files(tmp_path: Path):
    requested = []

    def handler(request):
        requested.append(str(request.url))
        return httpx.Response(200, content=make_zip())

    runner = FakeRunner()
    installer, client = make_installer(tmp_path, runner, handler, tl_platform="windows")
    async with client:
        await installer.install(True, None, ["amsmath"])

    assert requested == [f"{DEFAULT_REPOSITORY}/install-tl.zip"]
    assert runner.commands[0][0].endswith("install-tl-windows.bat")
    assert installer.tlmgr.endswith("tlmgr.bat")
    assert (tmp_path / "tmp" / "install-texlive" / "install-tl-windows.bat").is_file()

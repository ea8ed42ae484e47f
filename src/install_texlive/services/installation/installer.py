"""TeX Live installation and update via install-tl and tlmgr."""

import asyncio
from collections.abc import Awaitable, Callable
from pathlib import Path

import httpx

from install_texlive.core.platform import TlPlatform
from install_texlive.exceptions import (
    DownloadFailedError,
    InstallerExitError,
    InstallStepError,
    PackageManagerExitError,
)
from install_texlive.logger import get_logger
from install_texlive.utils.archive import extract_archive
from install_texlive.utils.subprocess_executor import SubprocessExecutor

from .profile import get_profile

logger = get_logger(__name__)

ProcessRunner = Callable[..., Awaitable[int]]


class TexLiveInstaller:
    """Installs TeX Live from scratch or refreshes an existing installation."""

    def __init__(
        self,
        tl_platform: TlPlatform,
        home_dir: Path,
        tmp_dir: Path,
        default_repository: str,
        run_process: ProcessRunner = SubprocessExecutor.run_streaming,
        client: httpx.AsyncClient | None = None,
        timeout: float = 300.0,
    ) -> None:
        """
        Initialize the installer.

        Args:
            tl_platform: TeX Live platform identifier of the host
            home_dir: Directory the installation lives below
            tmp_dir: Directory for the extracted installer and the profile
            default_repository: Where to download the installer when no repository was resolved
            run_process: Coroutine running a command and returning its exit status
            client: HTTP client to use instead of creating one per download
            timeout: Download timeout in seconds
        """
        self.tl_platform = tl_platform
        self.home_dir = home_dir
        self.tmp_dir = tmp_dir
        self.default_repository = default_repository
        self._run_process = run_process
        self._client = client
        self.timeout = timeout

    @property
    def is_windows(self) -> bool:
        return self.tl_platform == "windows"

    @property
    def texlive_dir(self) -> Path:
        return self.home_dir / "texlive"

    @property
    def bin_dir(self) -> Path:
        return self.texlive_dir / "bin" / self.tl_platform

    @property
    def tlmgr(self) -> str:
        return str(self.bin_dir / ("tlmgr.bat" if self.is_windows else "tlmgr"))

    @property
    def installer_archive(self) -> str:
        return "install-tl.zip" if self.is_windows else "install-tl-unx.tar.gz"

    @property
    def installer_dir(self) -> Path:
        return self.tmp_dir / "install-texlive"

    @property
    def profile_path(self) -> Path:
        return self.tmp_dir / "texlive.profile"

    async def install(self, initial_install: bool, repository: str | None, packages: list[str]) -> None:
        """
        Bring the installation below home_dir up to date.

        Args:
            initial_install: Whether nothing was restored and TeX Live must be installed first
            repository: Repository URL, None to let tlmgr pick a CTAN mirror
            packages: Packages to install on a fresh installation

        Raises:
            InstallStepError: If a download or command fails
        """
        if initial_install:
            await self._install_base(repository)
            await self._exec(PackageManagerExitError, "Setting tlmgr options", "option", "--", "autobackup", "0")
            await self._set_repository(repository)
            if packages:
                await self._exec(PackageManagerExitError, "Installing packages", "install", *packages)
            else:
                logger.info("No packages requested, skipping package installation")
        else:
            await self._set_repository(repository)

        await self._exec(PackageManagerExitError, "Updating TeX Live", "update", "--self", "--all")

    async def download_installer(self, repository: str | None) -> bytes:
        """Download the installer archive for this platform."""
        url = f"{(repository or self.default_repository).rstrip('/')}/{self.installer_archive}"
        logger.info(f"Downloading installer from {url}")
        try:
            if self._client is not None:
                response = await self._client.get(url)
            else:
                async with httpx.AsyncClient(follow_redirects=True, timeout=self.timeout) as client:
                    response = await client.get(url)
        except httpx.HTTPError as e:
            raise DownloadFailedError("Downloading installer", error=str(e) or type(e).__name__) from e

        if response.status_code != 200:
            raise DownloadFailedError("Downloading installer", response.status_code)
        return response.content

    async def _install_base(self, repository: str | None) -> None:
        installer_blob = await self.download_installer(repository)

        logger.info(f"Extracting installer to {self.installer_dir}")
        await asyncio.to_thread(
            extract_archive, installer_blob, self.installer_archive, self.installer_dir, strip_components=1
        )

        self.profile_path.parent.mkdir(parents=True, exist_ok=True)
        self.profile_path.write_text(get_profile(self.home_dir), encoding="utf-8")

        script = self.installer_dir / ("install-tl-windows.bat" if self.is_windows else "install-tl")
        profile_arg = f"--profile={self.profile_path.as_posix()}"
        args = [profile_arg] if repository is None else [f"--repository={repository}", profile_arg]
        await self._check(InstallerExitError, "Installing TeX Live", str(script), *args)

    async def _set_repository(self, repository: str | None) -> None:
        await self._exec(PackageManagerExitError, "Setting repository", "option", "repository", repository or "ctan")

    async def _exec(self, error_cls: type[InstallStepError], description: str, *args: str) -> None:
        await self._check(error_cls, description, self.tlmgr, *args)

    async def _check(self, error_cls: type[InstallStepError], description: str, *command: str) -> None:
        logger.info(f"{description}: {' '.join(command)}")
        status = await self._run_process(*command)
        if status != 0:
            raise error_cls(description, status)

"""Mapping of the host to a TeX Live platform identifier."""

import platform
import sys
from typing import Literal

from install_texlive.exceptions import UnsupportedArchitectureError, UnsupportedPlatformError

TlPlatform = Literal["universal-darwin", "windows", "x86_64-linux", "aarch64-linux"]

# Linux machine names as reported by uname
LINUX_ARCHITECTURES: dict[str, TlPlatform] = {
    "x86_64": "x86_64-linux",
    "amd64": "x86_64-linux",
    "aarch64": "aarch64-linux",
    "arm64": "aarch64-linux",
}


def detect_tl_platform(system: str | None = None, machine: str | None = None) -> TlPlatform:
    """
    Detect the TeX Live platform of the host.

    Args:
        system: OS name in ``sys.platform`` form, defaults to the host
        machine: Machine architecture, defaults to ``platform.machine()``

    Returns:
        One of the four supported platform identifiers

    Raises:
        UnsupportedPlatformError: If the OS is not darwin, win32 or linux
        UnsupportedArchitectureError: If Linux runs on an unsupported architecture
    """
    if system is None:
        system = sys.platform

    if system == "darwin":
        return "universal-darwin"
    if system == "win32":
        return "windows"
    if system.startswith("linux"):
        if machine is None:
            machine = platform.machine()
        tl_platform = LINUX_ARCHITECTURES.get(machine.lower())
        if tl_platform is None:
            raise UnsupportedArchitectureError(machine)
        return tl_platform

    raise UnsupportedPlatformError(system)

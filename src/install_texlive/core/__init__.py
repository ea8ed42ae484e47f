"""Core decision logic for install-texlive."""

from install_texlive.core.cache_key import calculate_cache_key
from install_texlive.core.packages import load_packages, parse_packages
from install_texlive.core.platform import TlPlatform, detect_tl_platform

__all__ = [
    "TlPlatform",
    "calculate_cache_key",
    "detect_tl_platform",
    "load_packages",
    "parse_packages",
]

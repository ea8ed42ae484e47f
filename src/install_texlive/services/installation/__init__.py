"""Installation services."""

from .installer import TexLiveInstaller
from .orchestrator import InstallationOrchestrator
from .profile import get_profile

__all__ = ["InstallationOrchestrator", "TexLiveInstaller", "get_profile"]

"""Utilities for install-texlive."""

from install_texlive.utils.actions import ActionsReporter
from install_texlive.utils.archive import extract_archive
from install_texlive.utils.subprocess_executor import SubprocessExecutor

__all__ = ["ActionsReporter", "SubprocessExecutor", "extract_archive"]

"""GitHub Actions workflow command helpers."""

import os
import sys
import uuid
from collections.abc import MutableMapping
from pathlib import Path
from typing import TextIO

from install_texlive.logger import get_logger

logger = get_logger(__name__)


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


class ActionsReporter:
    """Reports outputs, PATH additions and failures to the Actions runner.

    Outside of a runner (no GITHUB_OUTPUT / GITHUB_PATH) outputs are only
    logged and PATH changes only affect the current process.
    """

    def __init__(self, stream: TextIO | None = None, environ: MutableMapping[str, str] | None = None) -> None:
        self._stream = stream
        self._environ: MutableMapping[str, str] = environ if environ is not None else os.environ
        self.outputs: dict[str, str] = {}
        self.exit_code = 0

    @property
    def stream(self) -> TextIO:
        return self._stream or sys.stdout

    def _command(self, command: str, message: str) -> None:
        self.stream.write(f"::{command}::{_escape_data(message)}\n")
        self.stream.flush()

    def _append_file(self, variable: str, content: str) -> bool:
        path = self._environ.get(variable)
        if not path:
            return False
        with open(path, "a", encoding="utf-8") as f:
            f.write(content)
        return True

    def set_output(self, name: str, value: str) -> None:
        """Set a step output."""
        self.outputs[name] = value
        if "\n" in value:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            content = f"{name}<<{delimiter}\n{value}\n{delimiter}\n"
        else:
            content = f"{name}={value}\n"
        if not self._append_file("GITHUB_OUTPUT", content):
            logger.info(f"Output {name}={value}")

    def add_path(self, directory: Path | str) -> None:
        """Prepend a directory to PATH for this process and later steps."""
        directory = str(directory)
        self._append_file("GITHUB_PATH", f"{directory}\n")
        current = self._environ.get("PATH", "")
        self._environ["PATH"] = f"{directory}{os.pathsep}{current}" if current else directory

    def info(self, message: str) -> None:
        logger.info(message)

    def warning(self, message: str) -> None:
        logger.warning(message)
        self._command("warning", message)

    def error(self, message: str) -> None:
        logger.error(message)
        self._command("error", message)

    def set_failed(self, message: str) -> None:
        """Report a fatal error and mark the run as failed."""
        self.exit_code = 1
        self.error(message)

"""Action input loading from the runner environment."""

import os
from collections.abc import Mapping
from pathlib import Path

from install_texlive.exceptions import InputValidationError
from install_texlive.models.inputs import ActionInputs

TRUE_VALUES = ("true", "True", "TRUE")
FALSE_VALUES = ("false", "False", "FALSE")


class InputReader:
    """Reads inputs the way the Actions runner passes them, as INPUT_<NAME> variables."""

    def __init__(self, environ: Mapping[str, str] | None = None) -> None:
        self._environ = environ if environ is not None else os.environ

    def get(self, name: str, required: bool = False) -> str | None:
        """Return a trimmed input, None when empty or unset.

        The runner keeps hyphens in variable names (INPUT_ACCEPT-STALE); shells
        that cannot export such names may pass INPUT_ACCEPT_STALE instead.
        """
        variable = f"INPUT_{name.replace(' ', '_').upper()}"
        value = self._environ.get(variable) or self._environ.get(variable.replace("-", "_"), "")
        value = value.strip()
        if not value:
            if required:
                raise InputValidationError("inputs.required", name=name)
            return None
        return value

    def get_boolean(self, name: str, default: bool = False) -> bool:
        value = self.get(name)
        if value is None:
            return default
        if value in TRUE_VALUES:
            return True
        if value in FALSE_VALUES:
            return False
        raise InputValidationError("inputs.invalid_boolean", name=name)

    def get_integer(self, name: str) -> int | None:
        value = self.get(name)
        if value is None:
            return None
        try:
            return int(value)
        except ValueError as e:
            raise InputValidationError("inputs.invalid_integer", name=name, value=value) from e

    def read(self) -> ActionInputs:
        """Read all inputs of the action."""
        package_file = self.get("package_file")
        return ActionInputs(
            repository=self.get("repository"),
            package_file=Path(package_file) if package_file else None,
            packages=self.get("packages"),
            cache_version=self.get("cache_version", required=True),
            texlive_version=self.get_integer("texlive_version"),
            accept_stale=self.get_boolean("accept-stale"),
        )

"""Package list parsing."""

import re
from pathlib import Path

from install_texlive.exceptions import InputValidationError, MissingPackageInputError

_COMMENT_RE = re.compile(r"#[^\n]*")


def parse_packages(packages_string: str) -> list[str]:
    """
    Parse a whitespace separated package list.

    ``#`` starts a comment that runs to the end of the line. The result is
    sorted so that formatting and ordering of the input do not matter.
    """
    return sorted(_COMMENT_RE.sub("", packages_string).split())


def inline_or_file_content(inline: str | None, filename: Path | None) -> str | None:
    """Return the inline package text, or the content of the package file if no inline text was given."""
    if inline is not None or filename is None:
        return inline
    try:
        return filename.read_text(encoding="utf-8")
    except OSError as e:
        raise InputValidationError("inputs.unreadable_package_file", path=str(filename), error=str(e)) from e


def load_packages(inline: str | None, filename: Path | None) -> list[str]:
    """
    Resolve the requested package set from the action inputs.

    Raises:
        MissingPackageInputError: If neither input was supplied
    """
    content = inline_or_file_content(inline, filename)
    if content is None:
        raise MissingPackageInputError()
    return parse_packages(content)

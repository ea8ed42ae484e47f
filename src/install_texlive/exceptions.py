"""Centralized exception hierarchy for install-texlive.

Every error carries a dotted code and formatting parameters. The English
message is rendered from ``MESSAGES`` when the error is converted to a string.
"""

MESSAGES: dict[str, str] = {
    "platform.unsupported": "Unsupported platform {platform}",
    "platform.unsupported_arch": "Unsupported architecture {arch}",
    "inputs.missing_packages": "package-file or packages input required",
    "inputs.required": "Input required and not supplied: {name}",
    "inputs.invalid_boolean": (
        "Input does not meet YAML 1.2 \"Core Schema\" specification: {name}. "
        "Support boolean input list: `true | True | TRUE | false | False | FALSE`"
    ),
    "inputs.invalid_integer": "Input {name} must be an integer, got {value!r}",
    "inputs.unreadable_package_file": "Unable to read package file {path}: {error}",
    "mirrors.none_available": "No mirror available for TeX Live {version}",
    "mirrors.malformed_catalog": "Malformed mirror catalog from {url}: {error}",
    "install.step_failed": "{description} failed with status code {status}",
    "install.download_error": "{description} failed: {error}",
    "cache.invalid_key": "Invalid cache key {key!r}",
}


class AppBaseError(Exception):
    """Base exception for all application-specific errors."""

    def __init__(self, code: str, **params: object) -> None:
        """
        Initialize the error.

        Args:
            code: Dot-path into MESSAGES (e.g., 'mirrors.none_available')
            **params: Parameters for string formatting of the message
        """
        super().__init__(code)
        self.code = code
        self.params = params

    def __str__(self) -> str:
        """Returns the English message for logging and failure reports."""
        template = MESSAGES.get(self.code)
        if template is None:
            params_str = ", ".join(f"{k}={v}" for k, v in self.params.items())
            return f"[{self.code}] {params_str}"
        try:
            return template.format(**self.params)
        except (KeyError, IndexError):
            return template


class PreflightError(AppBaseError):
    """Raised before any network or cache work when the run cannot proceed."""


class UnsupportedPlatformError(PreflightError):
    """Raised when the host OS is not one of darwin, win32 or linux."""

    def __init__(self, platform: str) -> None:
        super().__init__("platform.unsupported", platform=platform)


class UnsupportedArchitectureError(PreflightError):
    """Raised when Linux runs on an architecture other than x86_64 or arm64."""

    def __init__(self, arch: str) -> None:
        super().__init__("platform.unsupported_arch", arch=arch)


class MissingPackageInputError(PreflightError):
    """Raised when neither inline packages nor a package file were given."""

    def __init__(self) -> None:
        super().__init__("inputs.missing_packages")


class InputValidationError(PreflightError):
    """Raised when an action input is missing or malformed."""


class MirrorResolutionError(AppBaseError):
    """Raised when a mirror cannot be determined from the catalog."""


class NoMirrorAvailableError(MirrorResolutionError):
    """Raised when no mirror in the target region satisfies the request."""

    def __init__(self, version: int | None) -> None:
        super().__init__("mirrors.none_available", version=version if version is not None else "(latest)")
        self.version = version


class MalformedCatalogError(MirrorResolutionError):
    """Raised when the catalog was fetched but could not be parsed."""

    def __init__(self, url: str, error: str) -> None:
        super().__init__("mirrors.malformed_catalog", url=url, error=error)


class InstallStepError(AppBaseError):
    """Raised when one step of an install or update fails.

    Attributes:
        description: Human readable name of the failing step
        status: Exit status or HTTP status code, None for transport failures
    """

    def __init__(
        self,
        description: str,
        status: int | None,
        code: str = "install.step_failed",
        **params: object,
    ) -> None:
        super().__init__(code, description=description, status=status, **params)
        self.description = description
        self.status = status


class DownloadFailedError(InstallStepError):
    """Raised when the installer archive cannot be downloaded."""

    def __init__(self, description: str, status: int | None = None, error: str | None = None) -> None:
        if error is not None:
            super().__init__(description, status, code="install.download_error", error=error)
        else:
            super().__init__(description, status)


class InstallerExitError(InstallStepError):
    """Raised when install-tl exits with a non-zero status."""

    def __init__(self, description: str, status: int) -> None:
        super().__init__(description, status)


class PackageManagerExitError(InstallStepError):
    """Raised when tlmgr exits with a non-zero status."""

    def __init__(self, description: str, status: int) -> None:
        super().__init__(description, status)


class CacheStoreError(AppBaseError):
    """Raised when the cache store rejects a key."""

    def __init__(self, key: str) -> None:
        super().__init__("cache.invalid_key", key=key)

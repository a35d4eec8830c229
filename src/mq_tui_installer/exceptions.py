"""Installer-specific exceptions.

Every fatal condition in the pipeline surfaces as an InstallerError subclass.
Non-fatal conditions (checksum skipped, profile not updated) never raise.
"""


class InstallerError(Exception):
    """Base exception for installer operations."""

    def __init__(self, message: str, context: dict | None = None):
        """Initialize with message and optional context.

        Args:
            message: Human-readable error message
            context: Optional dict with additional context (URLs, paths, digests, etc.)
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}


class UnsupportedPlatformError(InstallerError):
    """Host OS or architecture is not in the supported set."""


class ReleaseLookupError(InstallerError):
    """Latest release tag could not be resolved."""


class DownloadError(InstallerError):
    """Fetching a release asset failed."""


class ChecksumMismatchError(InstallerError):
    """Downloaded binary digest differs from the manifest entry."""


class InstallError(InstallerError):
    """Placing the binary into the install directory failed."""


class VerificationError(InstallerError):
    """Installed binary is missing or not executable."""

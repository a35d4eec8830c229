"""mq-tui-installer - Install the latest mq-tui release binary from GitHub.

Public API: an injectable configuration, the pipeline driver, and each
pipeline step as a standalone function.
"""

from .artifacts import ArtifactDescriptor
from .artifacts import locate_artifact
from .artifacts import target_triple
from .checksum import ChecksumResult
from .checksum import ChecksumStatus
from .checksum import parse_manifest
from .checksum import verify_checksum
from .config import InstallerConfig
from .exceptions import ChecksumMismatchError
from .exceptions import DownloadError
from .exceptions import InstallError
from .exceptions import InstallerError
from .exceptions import ReleaseLookupError
from .exceptions import UnsupportedPlatformError
from .exceptions import VerificationError
from .installer import install_binary
from .pipeline import InstallPipeline
from .pipeline import InstallReport
from .platform import Architecture
from .platform import OperatingSystem
from .platform import Platform
from .platform import detect_platform
from .profile import integrate_path
from .protocols import HttpClientProtocol
from .release import resolve_latest_version
from .results import Outcome
from .results import StepResult
from .validation import verify_installation

__all__ = [
    # Configuration
    "InstallerConfig",
    # Pipeline
    "InstallPipeline",
    "InstallReport",
    "Outcome",
    "StepResult",
    # Platform and artifacts
    "Platform",
    "OperatingSystem",
    "Architecture",
    "detect_platform",
    "ArtifactDescriptor",
    "locate_artifact",
    "target_triple",
    # Steps
    "HttpClientProtocol",
    "resolve_latest_version",
    "ChecksumResult",
    "ChecksumStatus",
    "parse_manifest",
    "verify_checksum",
    "install_binary",
    "integrate_path",
    "verify_installation",
    # Exceptions
    "InstallerError",
    "UnsupportedPlatformError",
    "ReleaseLookupError",
    "DownloadError",
    "ChecksumMismatchError",
    "InstallError",
    "VerificationError",
]

__version__ = "1.0.0"

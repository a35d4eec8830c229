"""Release artifact naming.

Pure functions: given a release tag and a platform, build the binary name, the
target triple and the asset URLs. No network or filesystem access.
"""

from pydantic import BaseModel
from pydantic import ConfigDict

from .config import InstallerConfig
from .platform import OperatingSystem
from .platform import Platform

_TRIPLE_TEMPLATES: dict[OperatingSystem, str] = {
    OperatingSystem.LINUX: "{arch}-unknown-linux-gnu",
    OperatingSystem.DARWIN: "{arch}-apple-darwin",
    OperatingSystem.WINDOWS: "{arch}-pc-windows-msvc",
}


class ArtifactDescriptor(BaseModel):
    """Everything needed to fetch and place one release binary."""

    model_config = ConfigDict(frozen=True)

    version: str
    target_triple: str
    download_url: str
    checksum_manifest_url: str
    # Asset filename on the release, e.g. mq-tui-x86_64-unknown-linux-gnu
    expected_filename: str
    # Filename inside the install directory, e.g. mq-tui or mq-tui.exe
    binary_name: str

    @property
    def manifest_key(self) -> str:
        """Identifier of this artifact inside the checksum manifest."""
        return f"{self.expected_filename}/{self.expected_filename}"


def target_triple(platform: Platform) -> str:
    """Target triple for a platform, e.g. ``aarch64-apple-darwin``."""
    return _TRIPLE_TEMPLATES[platform.os].format(arch=platform.arch.value)


def executable_name(binary_name: str, platform: Platform) -> str:
    """Installed filename: ``.exe`` suffix on Windows only."""
    return f"{binary_name}.exe" if platform.is_windows else binary_name


def locate_artifact(version: str, platform: Platform, config: InstallerConfig) -> ArtifactDescriptor:
    """
    Build the artifact descriptor for a release and platform.

    Args:
        version: Release tag (opaque, used verbatim in URLs)
        platform: Target platform
        config: Installer configuration (repository, hosts, names)

    Returns:
        ArtifactDescriptor with download and manifest URLs

    Example:
        >>> desc = locate_artifact("v1.2.0", Platform(os="linux", arch="x86_64"), InstallerConfig())
        >>> desc.download_url
        'https://github.com/harehare/mq-tui/releases/download/v1.2.0/mq-tui-x86_64-unknown-linux-gnu'
    """
    triple = target_triple(platform)
    suffix = ".exe" if platform.is_windows else ""
    expected_filename = f"{config.binary_name}-{triple}{suffix}"

    return ArtifactDescriptor(
        version=version,
        target_triple=triple,
        download_url=config.release_asset_url(version, expected_filename),
        checksum_manifest_url=config.release_asset_url(version, config.checksum_manifest_name),
        expected_filename=expected_filename,
        binary_name=executable_name(config.binary_name, platform),
    )

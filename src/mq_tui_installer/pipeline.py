"""Installation pipeline.

Strictly linear: platform -> version -> artifact -> manifest download ->
binary download -> checksum -> placement -> shell profile -> verification.

Each step either returns a value, raises an InstallerError (fatal), or reports
a StepResult that the driver handles with one policy: warnings are logged and
collected, fatal results abort the run. All downloads happen inside a
run-scoped temporary directory that is removed on every exit path.
"""

import logging
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field

from .artifacts import ArtifactDescriptor
from .artifacts import locate_artifact
from .checksum import ChecksumResult
from .checksum import ChecksumStatus
from .checksum import verify_checksum
from .config import InstallerConfig
from .download import download_binary
from .download import download_manifest
from .exceptions import ChecksumMismatchError
from .exceptions import InstallerError
from .http import RequestsHttpClient
from .installer import install_binary
from .platform import Platform
from .platform import detect_platform
from .profile import integrate_path
from .protocols import HttpClientProtocol
from .release import resolve_latest_version
from .results import StepResult
from .validation import verify_installation

logger = logging.getLogger(__name__)


class InstallReport(BaseModel):
    """Summary of a completed installation."""

    model_config = ConfigDict(frozen=True)

    platform: Platform
    version: str
    artifact: ArtifactDescriptor
    installed_path: Path
    checksum: ChecksumStatus
    profile_path: Path | None = None
    warnings: list[str] = Field(default_factory=list)


class InstallPipeline:
    """
    Release binary installer (with injected configuration and transport).

    Example:
        >>> config = InstallerConfig.from_env()
        >>> report = InstallPipeline(config).run()
        >>> print(report.installed_path)
    """

    def __init__(
        self,
        config: InstallerConfig,
        client: HttpClientProtocol | None = None,
        *,
        platform: Platform | None = None,
        environ: Mapping[str, str] | None = None,
        home: Path | None = None,
        modify_path: bool = True,
    ):
        """Initialize pipeline.

        Args:
            config: Installer configuration
            client: Release host transport (defaults to RequestsHttpClient)
            platform: Target platform (defaults to host detection)
            environ: Environment for PATH/SHELL lookup (defaults to os.environ)
            home: Home directory for profile lookup (defaults to Path.home())
            modify_path: Whether to edit the shell profile
        """
        self.config = config
        self._owns_client = client is None
        self.client = client if client is not None else RequestsHttpClient(config)
        self.platform = platform
        self.environ = os.environ if environ is None else environ
        self.home = home
        self.modify_path = modify_path
        self.warnings: list[str] = []

    def _apply(self, result: StepResult) -> StepResult:
        """Apply the pipeline policy to a step result."""
        if result.is_fatal:
            if isinstance(result.value, InstallerError):
                raise result.value
            if isinstance(result.value, ChecksumResult):
                raise ChecksumMismatchError(
                    f"{result.message}, aborting installation",
                    context={
                        "identifier": result.value.identifier,
                        "expected": result.value.expected,
                        "actual": result.value.actual,
                    },
                )
            raise InstallerError(result.message, context={"step": result.step})

        if result.is_warning:
            logger.warning(result.message)
            self.warnings.append(result.message)

        return result

    def run(self) -> InstallReport:
        """
        Run the installation pipeline.

        Returns:
            InstallReport describing the installed binary

        Raises:
            InstallerError: On any fatal condition; nothing is left at the final
                install path unless placement itself succeeded
        """
        try:
            return self._run()
        finally:
            if self._owns_client:
                self.client.close()

    def _run(self) -> InstallReport:
        self.warnings = []

        platform = self.platform or detect_platform()
        logger.info(f"Detected system: {platform}")

        version = resolve_latest_version(self.client, self.config)
        logger.info(f"Latest version: {version}")

        artifact = locate_artifact(version, platform, self.config)
        logger.info(f"Downloading {self.config.binary_name} {version} for {platform}...")
        logger.debug(f"Download URL: {artifact.download_url}")

        with tempfile.TemporaryDirectory(prefix=f"{self.config.binary_name}-install-") as tmpdir:
            temp_dir = Path(tmpdir)

            logger.info("Downloading checksums file...")
            manifest = self._apply(
                download_manifest(
                    self.client,
                    artifact.checksum_manifest_url,
                    temp_dir,
                    self.config.checksum_manifest_name,
                )
            )
            binary = self._apply(
                download_binary(self.client, artifact.download_url, temp_dir, artifact.expected_filename)
            )

            checksum = verify_checksum(
                binary.value,
                manifest.value,
                artifact.manifest_key,
                self.config.digest_algorithm,
            )
            self._apply(checksum.to_step_result())
            if checksum.status is ChecksumStatus.VERIFIED:
                logger.info("Checksum verification successful")

            installed = install_binary(binary.value, self.config.bin_dir, artifact.binary_name)

        if self.modify_path:
            profile = self._apply(
                integrate_path(self.config.bin_dir, self.config.profile_marker, self.environ, self.home)
            )
            profile_path = profile.value
        else:
            self._apply(
                StepResult.warning(
                    "update-shell-profile",
                    f"Skipped PATH update; add {self.config.bin_dir} to your PATH manually",
                )
            )
            profile_path = None

        verify_installation(installed)

        return InstallReport(
            platform=platform,
            version=version,
            artifact=artifact,
            installed_path=installed,
            checksum=checksum.status,
            profile_path=profile_path,
            warnings=list(self.warnings),
        )

"""Installer configuration.

Fixed paths and the repository identifier are carried in one immutable value
that callers construct and inject into the pipeline, so every component can be
exercised against a temporary home directory and a fake release host.
"""

import os
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import field_validator

DEFAULT_REPOSITORY = "harehare/mq-tui"
DEFAULT_BINARY_NAME = "mq-tui"
DEFAULT_HOME_DIR_NAME = ".mq"

# Environment variable to override the install root
INSTALL_DIR_ENV = "MQ_INSTALL_DIR"
GITHUB_TOKEN_ENV = "GITHUB_TOKEN"


def default_install_dir() -> Path:
    """Default install root (~/.mq)."""
    return Path.home() / DEFAULT_HOME_DIR_NAME


class InstallerConfig(BaseModel):
    """
    Configuration for one installer run.

    Directory structure:
        {install_dir}/
            bin/
                mq-tui          - Installed binary (mq-tui.exe on Windows)
    """

    model_config = ConfigDict(frozen=True)

    repository: str = DEFAULT_REPOSITORY
    binary_name: str = DEFAULT_BINARY_NAME
    install_dir: Path = Field(default_factory=default_install_dir)

    api_url: str = "https://api.github.com"
    download_host: str = "https://github.com"
    checksum_manifest_name: str = "checksums.txt"

    # Network policy: every request is bounded, retries are opt-in
    timeout: float = Field(default=30.0, gt=0)
    retries: int = Field(default=0, ge=0)

    digest_algorithm: str = "sha256"
    github_token: str | None = None

    @field_validator("install_dir")
    @classmethod
    def _absolute_install_dir(cls, v: Path) -> Path:
        # PATH entries and profile lines must not depend on the shell's working directory
        return Path(os.path.abspath(v.expanduser()))

    @property
    def bin_dir(self) -> Path:
        """Directory that receives the installed binary."""
        return self.install_dir / "bin"

    @property
    def profile_marker(self) -> str:
        """Comment line written above the PATH export in shell profiles."""
        return f"# Added by {self.binary_name} installer"

    @property
    def latest_release_url(self) -> str:
        """Release host endpoint describing the latest published release."""
        return f"{self.api_url.rstrip('/')}/repos/{self.repository}/releases/latest"

    def release_asset_url(self, version: str, filename: str) -> str:
        """URL of a named asset attached to a release."""
        return f"{self.download_host.rstrip('/')}/{self.repository}/releases/download/{version}/{filename}"

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None, **overrides) -> "InstallerConfig":
        """
        Build configuration from environment variables.

        Resolution order for the install root:
        1. Explicit ``install_dir`` override
        2. MQ_INSTALL_DIR environment variable (if set)
        3. ~/.mq (default)

        Args:
            environ: Environment mapping (defaults to os.environ)
            **overrides: Field values taking precedence over the environment

        Returns:
            InstallerConfig instance
        """
        env = os.environ if environ is None else environ
        values: dict = {}

        env_home = env.get(INSTALL_DIR_ENV)
        if env_home:
            values["install_dir"] = Path(env_home).expanduser()

        token = env.get(GITHUB_TOKEN_ENV)
        if token:
            values["github_token"] = token

        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)

"""Tests for InstallerConfig."""

from pathlib import Path

import pytest
from mq_tui_installer import InstallerConfig
from pydantic import ValidationError


def test_defaults():
    """Test default repository and install location."""
    config = InstallerConfig()

    assert config.repository == "harehare/mq-tui"
    assert config.install_dir == Path.home() / ".mq"
    assert config.bin_dir == Path.home() / ".mq" / "bin"
    assert config.profile_marker == "# Added by mq-tui installer"
    assert config.latest_release_url == "https://api.github.com/repos/harehare/mq-tui/releases/latest"
    assert config.retries == 0


def test_from_env_overrides_install_dir(tmp_path):
    """Test MQ_INSTALL_DIR takes precedence over ~/.mq."""
    config = InstallerConfig.from_env({"MQ_INSTALL_DIR": str(tmp_path / "custom")})

    assert config.install_dir == tmp_path / "custom"
    assert config.bin_dir == tmp_path / "custom" / "bin"


def test_from_env_explicit_override_wins(tmp_path):
    """Test explicit values beat environment variables."""
    config = InstallerConfig.from_env(
        {"MQ_INSTALL_DIR": str(tmp_path / "env")},
        install_dir=tmp_path / "explicit",
        timeout=None,
    )

    assert config.install_dir == tmp_path / "explicit"
    assert config.timeout == 30.0


def test_from_env_reads_github_token():
    """Test GITHUB_TOKEN is picked up."""
    assert InstallerConfig.from_env({"GITHUB_TOKEN": "ghp_test"}).github_token == "ghp_test"
    assert InstallerConfig.from_env({}).github_token is None


@pytest.mark.parametrize(("field", "value"), [("timeout", 0), ("timeout", -1.0), ("retries", -1)])
def test_invalid_network_policy(field, value):
    """Test timeouts must be positive and retries non-negative."""
    with pytest.raises(ValidationError):
        InstallerConfig(**{field: value})


def test_config_immutable():
    """Test configuration is frozen."""
    config = InstallerConfig()

    with pytest.raises(ValidationError):
        config.repository = "other/repo"


def test_relative_install_dir_is_made_absolute(tmp_path, monkeypatch):
    """Test relative install roots are anchored to the current directory."""
    monkeypatch.chdir(tmp_path)

    from_env = InstallerConfig.from_env({"MQ_INSTALL_DIR": "tools"})
    explicit = InstallerConfig(install_dir=Path("./tools"))

    assert from_env.install_dir == tmp_path / "tools"
    assert from_env.bin_dir.is_absolute()
    assert explicit.install_dir == tmp_path / "tools"


def test_install_dir_expands_home():
    """Test ~ in the install root expands to the home directory."""
    assert InstallerConfig(install_dir=Path("~/opt/mq")).install_dir == Path.home() / "opt" / "mq"

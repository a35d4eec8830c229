"""Tests for latest release resolution."""

import pytest
import requests
from mq_tui_installer import InstallerConfig
from mq_tui_installer import ReleaseLookupError
from mq_tui_installer import resolve_latest_version


class MockApi:
    """Mock release host returning a fixed payload."""

    def __init__(self, payload=None, error: Exception | None = None):
        self.payload = payload
        self.error = error
        self.requested: list[str] = []

    def get_json(self, url: str):
        self.requested.append(url)
        if self.error:
            raise self.error
        return self.payload

    def download(self, url, dest):
        raise AssertionError("resolver must not download assets")


def test_resolve_latest_version():
    """Test tag_name is extracted from the latest release."""
    api = MockApi({"tag_name": "v1.2.0", "name": "Release 1.2.0", "assets": []})

    assert resolve_latest_version(api, InstallerConfig()) == "v1.2.0"
    assert api.requested == ["https://api.github.com/repos/harehare/mq-tui/releases/latest"]


def test_resolve_uses_configured_repository():
    """Test repository identifier comes from configuration."""
    api = MockApi({"tag_name": "0.9.0"})

    resolve_latest_version(api, InstallerConfig(repository="org/tool", api_url="https://ghe.example.com/api/v3/"))

    assert api.requested == ["https://ghe.example.com/api/v3/repos/org/tool/releases/latest"]


def test_request_failure_is_fatal():
    """Test transport errors surface as ReleaseLookupError."""
    api = MockApi(error=requests.ConnectionError("network unreachable"))

    with pytest.raises(ReleaseLookupError, match="Failed to get the latest version") as exc_info:
        resolve_latest_version(api, InstallerConfig())

    assert isinstance(exc_info.value.__cause__, requests.ConnectionError)


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"tag_name": ""},
        {"tag_name": "   "},
        {"tag_name": None},
        {"message": "Not Found"},
        ["v1.0.0"],
    ],
)
def test_missing_tag_is_fatal(payload):
    """Test an empty or absent tag is a failure, not 'no version'."""
    with pytest.raises(ReleaseLookupError, match="no tag_name"):
        resolve_latest_version(MockApi(payload), InstallerConfig())

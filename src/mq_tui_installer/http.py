"""HTTP transport for the release host, built on requests.

Every request carries an explicit timeout. Retries on transient statuses are
bounded by InstallerConfig.retries (zero means a single attempt).
"""

import logging
from pathlib import Path
from typing import Any

import requests
from requests.adapters import HTTPAdapter
from requests.adapters import Retry

from .config import InstallerConfig

logger = logging.getLogger(__name__)

USER_AGENT = "mq-tui-installer"
CHUNK_SIZE = 64 * 1024


def make_session(retries: int = 0) -> requests.Session:
    """Create a session with bounded retries on transient failures."""
    session = requests.Session()
    retry = Retry(
        total=retries,
        backoff_factor=0.5,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=frozenset(["GET"]),
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.headers.update({"User-Agent": USER_AGENT})
    return session


class RequestsHttpClient:
    """Release host client implementing HttpClientProtocol."""

    def __init__(self, config: InstallerConfig, session: requests.Session | None = None):
        self.config = config
        self.session = session or make_session(config.retries)

    def _api_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/vnd.github+json"}
        if self.config.github_token:
            headers["Authorization"] = f"Bearer {self.config.github_token}"
        return headers

    def get_json(self, url: str) -> Any:
        logger.debug(f"GET {url}")
        response = self.session.get(url, headers=self._api_headers(), timeout=self.config.timeout)
        response.raise_for_status()
        return response.json()

    def download(self, url: str, dest: Path) -> None:
        logger.debug(f"Downloading {url} -> {dest}")
        with self.session.get(url, stream=True, allow_redirects=True, timeout=self.config.timeout) as response:
            response.raise_for_status()
            with open(dest, "wb") as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    if chunk:
                        f.write(chunk)

    def close(self) -> None:
        self.session.close()

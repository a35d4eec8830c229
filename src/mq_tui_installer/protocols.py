"""Protocols for the release host transport.

The pipeline only needs JSON metadata and raw asset bytes from the release
host; any implementation providing these two calls can be injected.

Example implementations:
- RequestsHttpClient: GitHub over HTTPS (default)
- In-memory fakes for tests
"""

from pathlib import Path
from typing import Any
from typing import Protocol


class HttpClientProtocol(Protocol):
    """Protocol for release host access."""

    def get_json(self, url: str) -> Any:
        """Fetch a URL and decode its JSON body.

        Args:
            url: Absolute URL

        Returns:
            Decoded JSON document

        Raises:
            Exception: If the request fails or the body is not JSON
        """
        ...

    def download(self, url: str, dest: Path) -> None:
        """Fetch a URL and write the response body to dest.

        Args:
            url: Absolute URL
            dest: File to create or overwrite

        Raises:
            Exception: If the request fails
        """
        ...

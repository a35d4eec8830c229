"""Latest release resolution.

A single request to the release host; the tag is treated as an opaque token.
Failure is fatal and not retried beyond the transport's configured policy.
"""

import logging

from .config import InstallerConfig
from .exceptions import ReleaseLookupError
from .protocols import HttpClientProtocol

logger = logging.getLogger(__name__)


def resolve_latest_version(client: HttpClientProtocol, config: InstallerConfig) -> str:
    """
    Resolve the tag name of the latest published release.

    Args:
        client: Release host transport
        config: Installer configuration (repository, API URL)

    Returns:
        Release tag, e.g. "v1.2.0"

    Raises:
        ReleaseLookupError: If the request fails or no tag can be extracted
    """
    url = config.latest_release_url
    logger.debug(f"Resolving latest release from {url}")

    try:
        payload = client.get_json(url)
    except Exception as e:
        raise ReleaseLookupError(
            f"Failed to get the latest version of {config.repository}: {e}",
            context={"url": url},
        ) from e

    tag = payload.get("tag_name") if isinstance(payload, dict) else None
    if not isinstance(tag, str) or not tag.strip():
        raise ReleaseLookupError(
            f"Failed to get the latest version of {config.repository}: no tag_name in response",
            context={"url": url},
        )

    return tag.strip()

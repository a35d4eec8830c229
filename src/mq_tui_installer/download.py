"""Release asset download into a run-scoped temporary directory."""

import logging
from pathlib import Path

from .exceptions import DownloadError
from .protocols import HttpClientProtocol
from .results import StepResult

logger = logging.getLogger(__name__)


def download_to(client: HttpClientProtocol, url: str, temp_dir: Path, filename: str) -> Path:
    """
    Download a URL into temp_dir/filename.

    A failed download never leaves a partial file behind.

    Args:
        client: Release host transport
        url: Asset URL
        temp_dir: Run-scoped temporary directory
        filename: Local filename inside temp_dir

    Returns:
        Path of the downloaded file

    Raises:
        DownloadError: If the transport fails or writes no file
    """
    dest = temp_dir / filename
    try:
        client.download(url, dest)
    except Exception as e:
        dest.unlink(missing_ok=True)
        raise DownloadError(f"Failed to download {url}: {e}", context={"url": url}) from e

    try:
        size = dest.stat().st_size
    except OSError as e:
        raise DownloadError(f"Download of {url} produced no file at {dest}: {e}", context={"url": url}) from e

    logger.debug(f"Downloaded {url} ({size} bytes)")
    return dest


def download_binary(client: HttpClientProtocol, url: str, temp_dir: Path, filename: str) -> StepResult:
    """Download the release binary. Failure is fatal."""
    try:
        path = download_to(client, url, temp_dir, filename)
    except DownloadError as e:
        return StepResult.fatal("download-binary", f"Failed to download binary: {e.message}", value=e)
    return StepResult.ok("download-binary", value=path)


def download_manifest(client: HttpClientProtocol, url: str, temp_dir: Path, filename: str) -> StepResult:
    """Download the checksum manifest. Failure only disables verification."""
    try:
        path = download_to(client, url, temp_dir, filename)
    except DownloadError as e:
        return StepResult.warning(
            "download-manifest",
            f"Failed to download checksums file, skipping verification ({e.message})",
        )
    return StepResult.ok("download-manifest", value=path)

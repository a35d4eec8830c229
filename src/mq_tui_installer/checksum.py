"""Checksum manifest parsing and binary verification.

Verification is best-effort: a missing manifest, an unavailable digest
algorithm or a missing manifest entry yields SKIPPED. Only a digest that is
present and differs from the computed one yields MISMATCH, which the pipeline
treats as fatal.

Manifest format (one entry per line, ``sha256sum`` style):

    <hex digest>  <identifier>

where the identifier for a release binary is ``{asset}/{asset}``, e.g.
``mq-tui-x86_64-unknown-linux-gnu/mq-tui-x86_64-unknown-linux-gnu``.
"""

import hashlib
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .exceptions import DownloadError
from .results import StepResult

logger = logging.getLogger(__name__)

_READ_SIZE = 64 * 1024


class ChecksumStatus(str, Enum):
    VERIFIED = "verified"
    MISMATCH = "mismatch"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class ChecksumResult:
    """Outcome of verifying one binary against the manifest."""

    status: ChecksumStatus
    identifier: str
    expected: str | None = None
    actual: str | None = None
    reason: str = ""

    def to_step_result(self) -> StepResult:
        """Map verification status onto the pipeline's severity policy."""
        if self.status is ChecksumStatus.VERIFIED:
            return StepResult.ok("verify-checksum", "Checksum verification successful", value=self)
        if self.status is ChecksumStatus.MISMATCH:
            return StepResult.fatal(
                "verify-checksum",
                f"Checksum verification failed for {self.identifier}: "
                f"expected {self.expected}, got {self.actual}",
                value=self,
            )
        return StepResult.warning("verify-checksum", f"{self.reason}, proceeding without verification", value=self)


def parse_manifest(text: str) -> dict[str, str]:
    """
    Parse manifest text into an identifier -> digest mapping.

    Blank lines, comments and lines without two fields are ignored. A leading
    ``*`` on the identifier (binary-mode marker) is dropped. When an identifier
    repeats, the first entry wins.

    Args:
        text: Manifest contents

    Returns:
        Mapping of identifier to hex digest (case preserved)
    """
    entries: dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue

        fields = line.split(maxsplit=1)
        if len(fields) != 2:
            logger.debug(f"Ignoring malformed manifest line: {line!r}")
            continue

        digest, identifier = fields[0], fields[1].strip().lstrip("*")
        entries.setdefault(identifier, digest)
    return entries


def load_manifest(manifest_file: Path) -> dict[str, str] | None:
    """Read and parse a manifest file, or None if it cannot be read."""
    try:
        return parse_manifest(manifest_file.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        logger.debug(f"Could not read checksums file {manifest_file}: {e}")
        return None


def lookup_digest(entries: dict[str, str], identifier: str) -> str | None:
    """
    Find the expected digest for an identifier.

    Resolution order:
    1. Exact identifier match
    2. Identifier as a trailing path component (``./dist/{identifier}``)
    3. Last path segment of the identifier (``{asset}`` alone)
    """
    if identifier in entries:
        return entries[identifier]

    for key, digest in entries.items():
        if key.endswith("/" + identifier):
            logger.debug(f"Matched {identifier} against manifest entry {key!r}")
            return digest

    basename = identifier.rsplit("/", 1)[-1]
    if basename != identifier and basename in entries:
        logger.debug(f"Matched {identifier} against bare manifest entry {basename!r}")
        return entries[basename]
    return None


def compute_digest(path: Path, algorithm: str = "sha256") -> str | None:
    """Hex digest of a file, or None if the algorithm is unavailable."""
    try:
        hasher = hashlib.new(algorithm)
    except ValueError:
        return None

    with open(path, "rb") as f:
        for block in iter(lambda: f.read(_READ_SIZE), b""):
            hasher.update(block)
    return hasher.hexdigest()


def verify_checksum(
    binary_file: Path,
    manifest_file: Path | None,
    identifier: str,
    algorithm: str = "sha256",
) -> ChecksumResult:
    """
    Verify a downloaded binary against the checksum manifest.

    Comparison is exact and case-sensitive on the hex strings.

    Args:
        binary_file: Downloaded binary (temporary file)
        manifest_file: Downloaded manifest, or None if it could not be fetched
        identifier: Manifest key for the binary
        algorithm: hashlib algorithm name

    Returns:
        ChecksumResult with status VERIFIED, MISMATCH or SKIPPED

    Raises:
        DownloadError: If the downloaded binary cannot be read
    """
    if manifest_file is None or not manifest_file.is_file():
        return ChecksumResult(ChecksumStatus.SKIPPED, identifier, reason="Checksums file not available")

    logger.info(f"Verifying checksum for {identifier}...")

    try:
        actual = compute_digest(binary_file, algorithm)
    except OSError as e:
        raise DownloadError(
            f"Downloaded binary {binary_file} could not be read: {e}",
            context={"path": str(binary_file)},
        ) from e

    if actual is None:
        return ChecksumResult(
            ChecksumStatus.SKIPPED, identifier, reason=f"No {algorithm} digest implementation available"
        )

    entries = load_manifest(manifest_file)
    if entries is None:
        return ChecksumResult(ChecksumStatus.SKIPPED, identifier, actual=actual, reason="Checksums file unreadable")

    expected = lookup_digest(entries, identifier)
    if expected is None:
        return ChecksumResult(
            ChecksumStatus.SKIPPED, identifier, actual=actual, reason=f"No checksum found for {identifier}"
        )

    status = ChecksumStatus.VERIFIED if actual == expected else ChecksumStatus.MISMATCH
    return ChecksumResult(status, identifier, expected=expected, actual=actual)

"""Tests for checksum manifest parsing and verification."""

import hashlib
import logging
import tempfile
from pathlib import Path

import pytest
from mq_tui_installer import ChecksumStatus
from mq_tui_installer import DownloadError
from mq_tui_installer import Outcome
from mq_tui_installer import parse_manifest
from mq_tui_installer import verify_checksum
from mq_tui_installer.checksum import compute_digest
from mq_tui_installer.checksum import lookup_digest

ASSET = "mq-tui-x86_64-unknown-linux-gnu"
KEY = f"{ASSET}/{ASSET}"
BINARY = b"\x7fELF fake mq-tui binary"
DIGEST = hashlib.sha256(BINARY).hexdigest()


def _write(tmpdir: str, name: str, data: bytes | str) -> Path:
    path = Path(tmpdir) / name
    if isinstance(data, str):
        path.write_text(data)
    else:
        path.write_bytes(data)
    return path


def test_parse_manifest():
    """Test sha256sum-style lines are parsed into a mapping."""
    text = f"""
# release checksums
{DIGEST}  {KEY}
{"0" * 64} *mq-tui-aarch64-apple-darwin/mq-tui-aarch64-apple-darwin
garbage
"""
    entries = parse_manifest(text)

    assert entries == {
        KEY: DIGEST,
        "mq-tui-aarch64-apple-darwin/mq-tui-aarch64-apple-darwin": "0" * 64,
    }


def test_parse_manifest_first_entry_wins():
    """Test duplicate identifiers keep the first digest."""
    assert parse_manifest(f"aaa  {KEY}\nbbb  {KEY}\n") == {KEY: "aaa"}


def test_lookup_digest_fallbacks():
    """Test exact, path-suffix and bare-filename matches."""
    assert lookup_digest({KEY: "exact"}, KEY) == "exact"
    assert lookup_digest({f"./dist/{KEY}": "nested"}, KEY) == "nested"
    assert lookup_digest({ASSET: "bare"}, KEY) == "bare"
    assert lookup_digest({"mq-tui-aarch64-apple-darwin": "other"}, KEY) is None


def test_compute_digest():
    """Test SHA-256 of a file."""
    with tempfile.TemporaryDirectory() as tmpdir:
        assert compute_digest(_write(tmpdir, "bin", BINARY)) == DIGEST


def test_compute_digest_unavailable_algorithm():
    """Test unknown algorithms report no digest."""
    with tempfile.TemporaryDirectory() as tmpdir:
        assert compute_digest(_write(tmpdir, "bin", BINARY), "not-a-hash") is None


def test_verified():
    """Test matching digest verifies."""
    with tempfile.TemporaryDirectory() as tmpdir:
        binary = _write(tmpdir, ASSET, BINARY)
        manifest = _write(tmpdir, "checksums.txt", f"{DIGEST}  {KEY}\n")

        result = verify_checksum(binary, manifest, KEY)

        assert result.status is ChecksumStatus.VERIFIED
        assert result.expected == result.actual == DIGEST
        assert result.to_step_result().outcome is Outcome.OK


def test_mismatch():
    """Test wrong digest is a fatal mismatch."""
    with tempfile.TemporaryDirectory() as tmpdir:
        binary = _write(tmpdir, ASSET, BINARY)
        manifest = _write(tmpdir, "checksums.txt", f"{'f' * 64}  {KEY}\n")

        result = verify_checksum(binary, manifest, KEY)

        assert result.status is ChecksumStatus.MISMATCH
        assert result.expected == "f" * 64
        assert result.actual == DIGEST
        step = result.to_step_result()
        assert step.outcome is Outcome.FATAL
        assert "Checksum verification failed" in step.message


def test_comparison_is_case_sensitive():
    """Test an upper-cased digest does not verify."""
    with tempfile.TemporaryDirectory() as tmpdir:
        binary = _write(tmpdir, ASSET, BINARY)
        manifest = _write(tmpdir, "checksums.txt", f"{DIGEST.upper()}  {KEY}\n")

        assert verify_checksum(binary, manifest, KEY).status is ChecksumStatus.MISMATCH


def test_no_matching_entry_skips():
    """Test absent entry skips verification with a warning."""
    with tempfile.TemporaryDirectory() as tmpdir:
        binary = _write(tmpdir, ASSET, BINARY)
        manifest = _write(tmpdir, "checksums.txt", f"{DIGEST}  mq-tui-aarch64-apple-darwin/mq-tui-aarch64-apple-darwin\n")

        result = verify_checksum(binary, manifest, KEY)

        assert result.status is ChecksumStatus.SKIPPED
        assert result.reason == f"No checksum found for {KEY}"
        assert result.to_step_result().outcome is Outcome.WARNING


def test_no_manifest_skips():
    """Test missing manifest skips verification."""
    with tempfile.TemporaryDirectory() as tmpdir:
        binary = _write(tmpdir, ASSET, BINARY)

        assert verify_checksum(binary, None, KEY).status is ChecksumStatus.SKIPPED
        assert verify_checksum(binary, Path(tmpdir) / "missing.txt", KEY).status is ChecksumStatus.SKIPPED


def test_unreadable_manifest_skips():
    """Test a manifest that is not text skips verification."""
    with tempfile.TemporaryDirectory() as tmpdir:
        binary = _write(tmpdir, ASSET, BINARY)
        manifest = _write(tmpdir, "checksums.txt", b"\xff\xfe\x00\x81")

        result = verify_checksum(binary, manifest, KEY)

        assert result.status is ChecksumStatus.SKIPPED
        assert result.reason == "Checksums file unreadable"


def test_no_digest_algorithm_skips():
    """Test missing digest implementation skips verification."""
    with tempfile.TemporaryDirectory() as tmpdir:
        binary = _write(tmpdir, ASSET, BINARY)
        manifest = _write(tmpdir, "checksums.txt", f"{DIGEST}  {KEY}\n")

        result = verify_checksum(binary, manifest, KEY, algorithm="not-a-hash")

        assert result.status is ChecksumStatus.SKIPPED
        assert "digest implementation" in result.reason


def test_unreadable_binary_raises_download_error():
    """Test a missing downloaded binary is a typed error, not a raw OSError."""
    with tempfile.TemporaryDirectory() as tmpdir:
        manifest = _write(tmpdir, "checksums.txt", f"{DIGEST}  {KEY}\n")

        with pytest.raises(DownloadError, match="could not be read") as exc_info:
            verify_checksum(Path(tmpdir) / "gone", manifest, KEY)

        assert isinstance(exc_info.value.__cause__, OSError)


def test_fallback_match_is_logged(caplog):
    """Test looser manifest matches are reported at debug level."""
    with caplog.at_level(logging.DEBUG, logger="mq_tui_installer.checksum"):
        assert lookup_digest({ASSET: "bare"}, KEY) == "bare"
        assert lookup_digest({f"./dist/{KEY}": "nested"}, KEY) == "nested"

    assert f"bare manifest entry '{ASSET}'" in caplog.text
    assert f"manifest entry './dist/{KEY}'" in caplog.text


def test_exact_match_is_not_logged(caplog):
    """Test the exact identifier match logs nothing."""
    with caplog.at_level(logging.DEBUG, logger="mq_tui_installer.checksum"):
        lookup_digest({KEY: "exact"}, KEY)

    assert "Matched" not in caplog.text

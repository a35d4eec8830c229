"""Binary placement into the install directory.

This is the only step that mutates persistent state. The verified temporary
file is first copied next to its destination, marked executable, and then
atomically renamed over the final path, so the final path only ever holds a
complete executable.
"""

import logging
import os
import shutil
import stat
import tempfile
from pathlib import Path

from .exceptions import InstallError

logger = logging.getLogger(__name__)

# rwxr-xr-x, the usual mode of an installed executable
_INSTALL_MODE = 0o755


def make_executable(path: Path) -> None:
    """Add read and execute permission for everyone (chmod 755 on top of the current mode)."""
    path.chmod(stat.S_IMODE(path.stat().st_mode) | _INSTALL_MODE)


def install_binary(source: Path, bin_dir: Path, binary_name: str) -> Path:
    """
    Install a verified binary into bin_dir.

    Process:
    1. Create bin_dir (recursively) if needed
    2. Copy source to a staging file inside bin_dir
    3. Set the executable bit on the staging file
    4. Atomically replace bin_dir/binary_name with the staging file

    Args:
        source: Verified temporary file
        bin_dir: Install directory (e.g. ~/.mq/bin)
        binary_name: Final filename (e.g. mq-tui or mq-tui.exe)

    Returns:
        Path of the installed binary

    Raises:
        InstallError: If any filesystem operation fails

    Example:
        >>> install_binary(Path("/tmp/run/mq-tui-x86_64-unknown-linux-gnu"), Path.home() / ".mq" / "bin", "mq-tui")
        PosixPath('/home/user/.mq/bin/mq-tui')
    """
    target = bin_dir / binary_name
    staging: Path | None = None

    try:
        bin_dir.mkdir(parents=True, exist_ok=True)

        fd, staging_name = tempfile.mkstemp(prefix=f".{binary_name}.", suffix=".tmp", dir=bin_dir)
        os.close(fd)
        staging = Path(staging_name)

        shutil.copyfile(source, staging)
        make_executable(staging)
        os.replace(staging, target)
        staging = None

        logger.info(f"{binary_name} installed successfully to {target}")
        return target

    except OSError as e:
        raise InstallError(
            f"Failed to install {binary_name} to {bin_dir}: {e}",
            context={"bin_dir": str(bin_dir), "target": str(target)},
        ) from e

    finally:
        if staging is not None:
            staging.unlink(missing_ok=True)

"""Host OS/architecture detection and normalization.

Mapping is a fixed table. Anything outside it is an UnsupportedPlatformError;
the installer never guesses a default platform.
"""

import logging
import platform as _host
from enum import Enum

from pydantic import BaseModel
from pydantic import ConfigDict

from .exceptions import UnsupportedPlatformError

logger = logging.getLogger(__name__)


class OperatingSystem(str, Enum):
    LINUX = "linux"
    DARWIN = "darwin"
    WINDOWS = "windows"


class Architecture(str, Enum):
    X86_64 = "x86_64"
    AARCH64 = "aarch64"


# Kernel name prefixes as reported by `uname -s` (and platform.system()).
_KERNEL_PREFIXES: tuple[tuple[str, OperatingSystem], ...] = (
    ("linux", OperatingSystem.LINUX),
    ("darwin", OperatingSystem.DARWIN),
    ("cygwin", OperatingSystem.WINDOWS),
    ("mingw", OperatingSystem.WINDOWS),
    ("msys", OperatingSystem.WINDOWS),
    ("windows", OperatingSystem.WINDOWS),
)

_ARCH_ALIASES: dict[str, Architecture] = {
    "x86_64": Architecture.X86_64,
    "amd64": Architecture.X86_64,
    "aarch64": Architecture.AARCH64,
    "arm64": Architecture.AARCH64,
}


class Platform(BaseModel):
    """Normalized (OS, architecture) pair of the running host."""

    model_config = ConfigDict(frozen=True)

    os: OperatingSystem
    arch: Architecture

    @property
    def is_windows(self) -> bool:
        return self.os is OperatingSystem.WINDOWS

    def __str__(self) -> str:
        return f"{self.os.value}/{self.arch.value}"


def normalize_os(kernel_name: str) -> OperatingSystem:
    """Map a raw kernel name (e.g. ``Linux``, ``MINGW64_NT-10.0``) to an OperatingSystem.

    Raises:
        UnsupportedPlatformError: If the kernel name matches no known family
    """
    lowered = kernel_name.strip().lower()
    for prefix, os_name in _KERNEL_PREFIXES:
        if lowered.startswith(prefix):
            return os_name
    raise UnsupportedPlatformError(
        f"Unsupported operating system: {kernel_name}",
        context={"kernel_name": kernel_name},
    )


def normalize_arch(machine: str) -> Architecture:
    """Map a raw machine string (e.g. ``amd64``, ``arm64``) to an Architecture.

    Raises:
        UnsupportedPlatformError: If the architecture is not supported
    """
    arch = _ARCH_ALIASES.get(machine.strip().lower())
    if arch is None:
        raise UnsupportedPlatformError(
            f"Unsupported architecture: {machine}",
            context={"machine": machine},
        )
    return arch


def detect_platform(kernel_name: str | None = None, machine: str | None = None) -> Platform:
    """
    Detect the running platform.

    Args:
        kernel_name: Raw kernel name; defaults to platform.system()
        machine: Raw machine architecture; defaults to platform.machine()

    Returns:
        Platform for the host

    Raises:
        UnsupportedPlatformError: If either value is outside the supported set

    Example:
        >>> detect_platform("Darwin", "arm64")
        Platform(os=<OperatingSystem.DARWIN: 'darwin'>, arch=<Architecture.AARCH64: 'aarch64'>)
    """
    kernel_name = _host.system() if kernel_name is None else kernel_name
    machine = _host.machine() if machine is None else machine

    detected = Platform(os=normalize_os(kernel_name), arch=normalize_arch(machine))
    logger.debug(f"Detected platform {detected} from kernel={kernel_name!r} machine={machine!r}")
    return detected

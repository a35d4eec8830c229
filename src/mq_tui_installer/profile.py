"""Shell profile integration.

Makes the install directory reachable from the user's shell by appending a
PATH export to the detected profile file. All outcomes are informational:
this step reports OK or WARNING and never aborts an installation.

Rules, checked in order:
1. Install directory already on PATH -> nothing to do
2. Profile identified and does not mention the directory -> append export block
3. Profile already mentions the directory -> warn, no duplicate edit
4. No profile identified -> warn, manual PATH edit required
"""

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from .results import StepResult

logger = logging.getLogger(__name__)

STEP = "update-shell-profile"


@dataclass(frozen=True)
class ShellDialect:
    """Syntax for extending PATH in one shell family."""

    name: str
    export_template: str

    def export_line(self, directory: Path) -> str:
        return self.export_template.format(directory=directory)


POSIX = ShellDialect("posix", 'export PATH="$PATH:{directory}"')
FISH = ShellDialect("fish", "set -gx PATH $PATH {directory}")


@dataclass(frozen=True)
class ProfileTarget:
    """A profile file together with the dialect it is written in."""

    path: Path
    dialect: ShellDialect


class TextPatcher:
    """Idempotent append-only editor for a text file.

    A missing file reads as empty and is created on first append.
    """

    def __init__(self, path: Path):
        self.path = path

    def read(self) -> str:
        if not self.path.exists():
            return ""
        return self.path.read_text(encoding="utf-8")

    def contains(self, needle: str) -> bool:
        return needle in self.read()

    def append_block(self, lines: list[str]) -> bool:
        """Append lines preceded by a blank line.

        Returns:
            False if the block was already present (file left untouched)
        """
        block = "\n".join(lines)
        if block in self.read():
            return False

        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "a", encoding="utf-8") as f:
            f.write("\n" + block + "\n")
        return True


def detect_shell(environ: Mapping[str, str]) -> str | None:
    """Shell name from $SHELL, e.g. ``/usr/bin/zsh`` -> ``zsh``."""
    shell = environ.get("SHELL", "").strip()
    if not shell:
        return None
    return Path(shell).name


def find_profile(shell_name: str | None, home: Path) -> ProfileTarget | None:
    """
    Map a shell name to its profile file.

    - bash: ~/.bashrc, else ~/.bash_profile (first one that exists)
    - zsh: ~/.zshrc if it exists
    - fish: ~/.config/fish/config.fish (created on write)
    - anything else: None
    """
    if shell_name == "bash":
        for candidate in (home / ".bashrc", home / ".bash_profile"):
            if candidate.is_file():
                return ProfileTarget(candidate, POSIX)
        return None

    if shell_name == "zsh":
        zshrc = home / ".zshrc"
        return ProfileTarget(zshrc, POSIX) if zshrc.is_file() else None

    if shell_name == "fish":
        return ProfileTarget(home / ".config" / "fish" / "config.fish", FISH)

    return None


def _normalize(entry: str) -> str:
    return os.path.normpath(os.path.expanduser(entry))


def is_on_path(directory: Path, path_value: str) -> bool:
    """True if directory is one of the entries of a PATH string."""
    wanted = _normalize(str(directory))
    return any(_normalize(entry) == wanted for entry in path_value.split(os.pathsep) if entry)


def integrate_path(
    bin_dir: Path,
    marker: str,
    environ: Mapping[str, str] | None = None,
    home: Path | None = None,
) -> StepResult:
    """
    Ensure bin_dir is reachable from the user's shell.

    Args:
        bin_dir: Install directory to expose
        marker: Comment line identifying this installer as the author of the edit
        environ: Environment (defaults to os.environ); reads PATH and SHELL
        home: Home directory (defaults to Path.home())

    Returns:
        StepResult, OK or WARNING; value is the edited profile path when one was written
    """
    env = os.environ if environ is None else environ
    home = Path.home() if home is None else home

    if is_on_path(bin_dir, env.get("PATH", "")):
        logger.info(f"{bin_dir} is already in PATH")
        return StepResult.ok(STEP, f"{bin_dir} is already in PATH")

    target = find_profile(detect_shell(env), home)
    if target is None:
        return StepResult.warning(
            STEP,
            f"Could not detect shell profile to update. Please manually add {bin_dir} to your PATH",
        )

    patcher = TextPatcher(target.path)
    try:
        if patcher.contains(str(bin_dir)):
            return StepResult.warning(STEP, f"{bin_dir} already exists in {target.path}", value=target.path)

        patcher.append_block([marker, target.dialect.export_line(bin_dir)])
    except (OSError, UnicodeDecodeError) as e:
        return StepResult.warning(
            STEP,
            f"Could not update {target.path} ({e}). Please manually add {bin_dir} to your PATH",
        )

    logger.info(f"Added {bin_dir} to PATH in {target.path}")
    return StepResult.ok(STEP, f"Added {bin_dir} to PATH in {target.path}", value=target.path)

"""Post-install verification.

Final gate of the pipeline: the installed binary must exist and be executable.
"""

import logging
import os
from pathlib import Path

from .exceptions import VerificationError

logger = logging.getLogger(__name__)


def verify_installation(path: Path) -> Path:
    """
    Confirm the installed binary took hold.

    Args:
        path: Expected install path (platform-appropriate name)

    Returns:
        The verified path

    Raises:
        VerificationError: If the binary is missing (or not a regular file) or not executable
    """
    if not path.is_file():
        problem = "missing"
    elif not os.access(path, os.X_OK):
        problem = "not executable"
    else:
        logger.info(f"{path.name} installation verified")
        return path

    raise VerificationError(
        f"{path.name} installation verification failed: {problem}",
        context={"path": str(path), "problem": problem},
    )

"""Hand downloaded artifacts to pip."""

from __future__ import annotations

import logging
import shlex
import subprocess
from pathlib import Path
from typing import List, Union

from errors import InstallerError

logger = logging.getLogger(__name__)


def build_pip_command(python: str, pip_args: str, path: Union[str, Path]) -> List[str]:
    """``python -m pip install --upgrade [pip_args...] path``."""
    extra = shlex.split(pip_args) if pip_args else []
    return [python, "-m", "pip", "install", "--upgrade", *extra, str(path)]


def install_package(python: str, pip_args: str, path: Union[str, Path]) -> None:
    """Run pip for one artifact, inheriting this process's stdio.

    Raises:
        InstallerError: If the interpreter cannot be started or pip exits
            non-zero.
    """
    cmd = build_pip_command(python, pip_args, path)
    logger.info("Installing %s (Interpreter=%s)", path, python)
    logger.debug("Running: %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd, check=False)  # noqa: S603
    except OSError as e:
        raise InstallerError(f"failed to start {python}: {e}") from e
    if result.returncode != 0:
        raise InstallerError(
            f"pip exited with status {result.returncode} for {path}",
            returncode=result.returncode,
        )

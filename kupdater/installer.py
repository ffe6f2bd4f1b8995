"""Privileged package installation from the staging directory.

The single place where the package manager is run.  The child inherits the
terminal's stdin/stdout/stderr so ``sudo`` can prompt for a password and the
operator sees ``dpkg`` output live.
"""

from __future__ import annotations

import logging
import os
import subprocess
from pathlib import Path
from typing import List

from kupdater.config import settings
from kupdater.errors import InstallError

logger = logging.getLogger(__name__)


def install_command(directory: Path) -> List[str]:
    """``[sudo] dpkg --install --recursive <directory>/``.

    The trailing slash tells dpkg to treat the argument as a directory of
    packages.  No privilege prefix is added when already running as root.
    """
    cmd = [
        settings.package_manager,
        "--install",
        "--recursive",
        str(directory).rstrip("/") + "/",
    ]
    if os.geteuid() != 0 and settings.privilege_command:
        cmd = [settings.privilege_command] + cmd
    return cmd


def install_packages(directory: Path) -> int:
    """Install every package under *directory*; return the installer's exit code.

    Raises:
        InstallError: The privilege helper or package manager is not available.
    """
    cmd = install_command(directory)
    logger.info("Running %s", " ".join(cmd))
    try:
        result = subprocess.run(cmd)
    except OSError as exc:
        raise InstallError(f"could not run {cmd[0]}: {exc}") from exc
    logger.info("Installer exited with %d", result.returncode)
    return result.returncode


def check_install_result(returncode: int) -> None:
    """Raise :class:`InstallError` for a failed install unless told to ignore it."""
    if returncode == 0:
        return
    if settings.ignore_install_status:
        logger.warning("Installer exited with %d, ignored by configuration", returncode)
        return
    raise InstallError(f"package installation failed (exit {returncode})")

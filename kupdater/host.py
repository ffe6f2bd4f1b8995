"""Host kernel detection via ``uname -a``."""

from __future__ import annotations

import logging
import re
import subprocess

from kupdater.errors import HostDetectionError

logger = logging.getLogger(__name__)

# "6.8.0-31-generic" in "Linux box 6.8.0-31-generic #31-Ubuntu SMP ..."
HOST_VERSION_RE = re.compile(r"\d+\.\d+\.\d+-\d+-[a-z]+")

UNAME_COMMAND = ["uname", "-a"]


def parse_host_version(uname_output: str) -> str:
    """Return the first kernel release/build string in *uname_output*."""
    match = HOST_VERSION_RE.search(uname_output)
    if match is None:
        raise HostDetectionError(
            f"no kernel version found in {' '.join(UNAME_COMMAND)!r} output"
        )
    return match.group(0)


def detect_host_version() -> str:
    """Run ``uname -a`` once and extract the running kernel's version.

    Raises:
        HostDetectionError: The utility could not be started or its output
            does not contain a recognisable version.
    """
    try:
        result = subprocess.run(UNAME_COMMAND, capture_output=True, text=True)
    except OSError as exc:
        raise HostDetectionError(f"could not run {UNAME_COMMAND[0]}: {exc}") from exc

    logger.debug("uname output: %s", result.stdout.strip())
    return parse_host_version(result.stdout)

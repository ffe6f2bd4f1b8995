"""Scoped ownership of the staging directory.

Usage::

    from kupdater.staging import StagingArea

    with StagingArea() as area:
        directory = download_targets(entry, targets, area)
        install_packages(directory)

The root is removed exactly once on whichever path ends the run first:
leaving the ``with`` block (normally, on error or on ``KeyboardInterrupt``),
``SIGTERM`` / ``SIGHUP``, or interpreter exit.
"""

from __future__ import annotations

import atexit
import logging
import shutil
import signal
import threading
from pathlib import Path
from types import FrameType
from typing import Any, Dict, Optional

from kupdater.config import settings

logger = logging.getLogger(__name__)

_TERMINATING_SIGNALS = tuple(
    sig for sig in (getattr(signal, "SIGTERM", None), getattr(signal, "SIGHUP", None)) if sig
)


class StagingArea:
    """Owns ``<root>/<version>/<file>`` paths and the cleanup of ``<root>``."""

    def __init__(self, root: Optional[Path] = None) -> None:
        self.root = Path(root) if root is not None else settings.staging_root
        self._acquired = False
        self._released = False
        self._previous_handlers: Dict[int, Any] = {}

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------
    def version_dir(self, version: str) -> Path:
        return self.root / version

    def file_path(self, version: str, file_name: str) -> Path:
        return self.version_dir(version) / file_name

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def acquire(self) -> "StagingArea":
        """Register cleanup hooks.  The directory itself is created lazily."""
        if self._acquired:
            return self
        self._acquired = True
        atexit.register(self.release)
        if threading.current_thread() is threading.main_thread():
            for sig in _TERMINATING_SIGNALS:
                self._previous_handlers[sig] = signal.signal(sig, self._on_signal)
        logger.debug("Staging area %s acquired", self.root)
        return self

    def release(self) -> None:
        """Remove the staging root.  Safe to call any number of times."""
        if self._released:
            return
        self._released = True
        atexit.unregister(self.release)
        for sig, handler in self._previous_handlers.items():
            signal.signal(sig, handler)
        self._previous_handlers.clear()
        shutil.rmtree(self.root, ignore_errors=True)
        logger.info("Removed staging area %s", self.root)

    @property
    def released(self) -> bool:
        return self._released

    def _on_signal(self, signum: int, frame: Optional[FrameType]) -> None:
        logger.warning("Received signal %d, cleaning up", signum)
        self.release()
        raise SystemExit(128 + signum)

    def __enter__(self) -> "StagingArea":
        return self.acquire()

    def __exit__(self, *exc_info: object) -> None:
        self.release()

"""Logging setup shared by the library and the CLI."""

from __future__ import annotations

import logging

_configured = False


def _log_level(level: str | int | None) -> int:
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        numeric = logging.getLevelName(level.strip().upper())
        if isinstance(numeric, int):
            return numeric
    return logging.WARNING


def configure_logging(level: str | int | None = None) -> None:
    """Attach a single stderr handler to the ``kupdater`` logger tree."""
    global _configured
    numeric_level = _log_level(level)
    root = logging.getLogger("kupdater")
    if not _configured:
        handler = logging.StreamHandler()
        handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        root.addHandler(handler)
        _configured = True
    root.setLevel(numeric_level)

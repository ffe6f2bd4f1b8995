"""Data models for the catalog pipeline."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass
class RawPage:
    """The raw HTTP response for a single index page fetch."""

    url: str
    html: str
    status_code: int


@dataclass(frozen=True)
class VersionEntry:
    """One published kernel build folder, e.g. ``6.9-rc1``."""

    version: str
    last_modified: datetime


@dataclass(frozen=True)
class DownloadTarget:
    """A single package file belonging to a chosen version."""

    url: str
    file_name: str

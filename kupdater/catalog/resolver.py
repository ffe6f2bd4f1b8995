"""Version detail resolution: chosen :class:`VersionEntry` -> package download targets.

Two selection strategies exist:

``positional``
    Take the link in the second cell of fixed row indices of the detail table
    (``settings.detail_rows``, 6-9 by default).  The upstream listing orders
    architecture variants stably, so these rows hold the generic package set.
    File names are never inspected.

``roles``
    Match every ``.deb`` link against the four package roles (headers-common,
    headers-arch, image, modules) for the configured architecture and flavour.
"""

from __future__ import annotations

import logging
import re
from typing import Callable, Dict, List, Optional

from bs4.element import Tag

from kupdater.config import settings
from kupdater.errors import DetailFormatError
from kupdater.catalog.fetcher import fetch_page
from kupdater.catalog.models import DownloadTarget, VersionEntry
from kupdater.catalog.parser import row_cells, table_rows

logger = logging.getLogger(__name__)

POSITIONAL = "positional"
ROLES = "roles"


# ---------------------------------------------------------------------------
# Positional strategy
# ---------------------------------------------------------------------------

def _row_href(rows: List[Tag], index: int) -> str:
    if index >= len(rows):
        raise DetailFormatError(
            f"detail listing has {len(rows)} rows, row {index} is missing"
        )
    cells = row_cells(rows[index])
    if len(cells) < 2:
        raise DetailFormatError(f"detail row {index} has no second cell")
    link = cells[1].find("a")
    if link is None or not link.get("href"):
        raise DetailFormatError(f"detail row {index} has no link")
    return link["href"]


def select_positional(rows: List[Tag]) -> List[str]:
    return [_row_href(rows, index) for index in settings.detail_rows]


# ---------------------------------------------------------------------------
# Role strategy
# ---------------------------------------------------------------------------

def _role_patterns(arch: str, flavour: str) -> Dict[str, re.Pattern[str]]:
    arch_re = re.escape(arch)
    flavour_re = re.escape(flavour)
    return {
        "headers-common": re.compile(r"^linux-headers-[^_]+_[^_]+_all\.deb$"),
        "headers-arch": re.compile(
            rf"^linux-headers-[^_]+-{flavour_re}_[^_]+_{arch_re}\.deb$"
        ),
        "image": re.compile(
            rf"^linux-image-(?:unsigned-)?[^_]+-{flavour_re}_[^_]+_{arch_re}\.deb$"
        ),
        "modules": re.compile(
            rf"^linux-modules-[^_]+-{flavour_re}_[^_]+_{arch_re}\.deb$"
        ),
    }


def select_by_role(rows: List[Tag]) -> List[str]:
    """Pick the first link matching each package role, in role order."""
    hrefs = []
    for row in rows:
        for cell in row_cells(row):
            for link in cell.find_all("a"):
                href = link.get("href") or ""
                if href.endswith(".deb"):
                    hrefs.append(href)

    selected = []
    for role, pattern in _role_patterns(settings.arch, settings.flavour).items():
        match = next((href for href in hrefs if pattern.match(href)), None)
        if match is None:
            raise DetailFormatError(
                f"no {role} package for {settings.arch}/{settings.flavour} in detail listing"
            )
        selected.append(match)
    return selected


_STRATEGIES: Dict[str, Callable[[List[Tag]], List[str]]] = {
    POSITIONAL: select_positional,
    ROLES: select_by_role,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def extract_targets(
    html: str, version: str, strategy: Optional[str] = None
) -> List[DownloadTarget]:
    """Build download targets for *version* from its detail listing *html*."""
    name = strategy or settings.selection
    try:
        select = _STRATEGIES[name]
    except KeyError:
        raise ValueError(f"unknown selection strategy {name!r}") from None

    rows = table_rows(html, DetailFormatError)
    targets = [
        DownloadTarget(url=settings.download_url(version, href), file_name=href)
        for href in select(rows)
    ]
    logger.info(
        "Resolved %d targets for %s (%s): %s",
        len(targets),
        version,
        name,
        ", ".join(t.file_name for t in targets),
    )
    return targets


def resolve_targets(
    entry: VersionEntry, strategy: Optional[str] = None
) -> List[DownloadTarget]:
    """Fetch the detail page of *entry* and return its package targets.

    Raises:
        DetailFormatError: The listing lacks a table, row, cell or link the
            strategy expects.
        httpx.HTTPStatusError: The detail page could not be fetched.
    """
    raw = fetch_page(settings.detail_url(entry.version))
    return extract_targets(raw.html, entry.version, strategy=strategy)

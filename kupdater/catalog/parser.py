"""Catalog parsing: turns the mainline listing page into :class:`VersionEntry` rows."""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import List, Optional, Type

from bs4 import BeautifulSoup
from bs4.element import Tag

from kupdater.config import settings
from kupdater.errors import CatalogFormatError, UpstreamFormatError
from kupdater.catalog.fetcher import fetch_page
from kupdater.catalog.models import VersionEntry

logger = logging.getLogger(__name__)

# "v6.9/", "v6.9-rc1/", "v6.8.10/", "v6.10-rc10/"; group 1 is the version
# without the leading "v" and the trailing slash.  A major number is required.
VERSION_FOLDER_RE = re.compile(r"^v((\d+)(\.\d+)?(\.\d+)?-?(rc\d+)?)/$")
LAST_MODIFIED_RE = re.compile(
    r"^\d{4}-(0[1-9]|1[0-2]|[1-9])-([1-9]|0[1-9]|[1-2]\d|3[0-1]) \d{2}:\d{2}$"
)
LAST_MODIFIED_FORMAT = "%Y-%m-%d %H:%M"


# ---------------------------------------------------------------------------
# Shared table helpers (also used by the resolver)
# ---------------------------------------------------------------------------

def table_rows(
    html: str, error_cls: Type[UpstreamFormatError] = CatalogFormatError
) -> List[Tag]:
    """Return every ``<tr>`` of the first ``<table>`` in *html*, in document order.

    Raises *error_cls* when the page has no table at all.
    """
    soup = BeautifulSoup(html, "html.parser")
    table = soup.find("table")
    if table is None:
        raise error_cls("no <table> found in upstream listing")
    return table.find_all("tr")


def row_cells(row: Tag) -> List[Tag]:
    return row.find_all("td")


def _parse_row(cells: List[Tag]) -> Optional[VersionEntry]:
    if len(cells) < 3:
        raise CatalogFormatError(
            f"catalog row has {len(cells)} cells, expected at least 3"
        )
    raw_version = cells[1].get_text().strip()
    raw_last_modified = cells[2].get_text().strip()

    match = VERSION_FOLDER_RE.match(raw_version)
    if not match or not LAST_MODIFIED_RE.match(raw_last_modified):
        logger.debug("Dropping row %r / %r", raw_version, raw_last_modified)
        return None

    try:
        last_modified = datetime.strptime(raw_last_modified, LAST_MODIFIED_FORMAT)
    except ValueError:
        # Shaped like a date but not a real one, e.g. "2024-02-31 10:00".
        logger.debug("Dropping row %r with impossible date %r", raw_version, raw_last_modified)
        return None

    return VersionEntry(version=match.group(1), last_modified=last_modified)


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def parse_catalog(html: str, max_count: Optional[int] = None) -> List[VersionEntry]:
    """Parse the mainline listing into at most *max_count* entries.

    Upstream order is kept as-is (the listing is requested newest-first).
    Rows without ``<td>`` cells (headers, separators) are skipped; rows whose
    version or date text does not match are dropped without counting toward
    the maximum.  Once the maximum is reached the remaining rows are not read.

    Raises:
        CatalogFormatError: No table, or a data row with fewer than 3 cells.
    """
    limit = settings.max_versions if max_count is None else max_count
    entries: List[VersionEntry] = []

    for row in table_rows(html, CatalogFormatError):
        if len(entries) >= limit:
            break
        cells = row_cells(row)
        if not cells:
            continue
        entry = _parse_row(cells)
        if entry is not None:
            entries.append(entry)

    logger.info("Parsed %d catalog entries", len(entries))
    return entries


def fetch_catalog(max_count: Optional[int] = None) -> List[VersionEntry]:
    """Fetch the upstream listing and parse it with :func:`parse_catalog`."""
    raw = fetch_page(settings.catalog_url)
    return parse_catalog(raw.html, max_count=max_count)

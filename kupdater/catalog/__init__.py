"""Catalog package — upstream index fetch, parsing & target resolution."""

from kupdater.catalog.fetcher import fetch_page
from kupdater.catalog.models import DownloadTarget, RawPage, VersionEntry
from kupdater.catalog.parser import fetch_catalog, parse_catalog
from kupdater.catalog.resolver import extract_targets, resolve_targets

__all__ = [
    "fetch_page",
    "fetch_catalog",
    "parse_catalog",
    "extract_targets",
    "resolve_targets",
    "RawPage",
    "VersionEntry",
    "DownloadTarget",
]

"""Shared fixtures: upstream listing pages shaped like kernel.ubuntu.com's autoindex."""

from __future__ import annotations

import logging
from typing import List, Tuple

import pytest

BASE_URL = "https://mirror.test/mainline"

_HEADER_ROWS = """\
<tr><th valign="top"><img src="/icons/blank.gif" alt="[ICO]"></th><th><a href="?C=N;O=A">Name</a></th><th><a href="?C=M;O=A">Last modified</a></th><th><a href="?C=S;O=A">Size</a></th><th><a href="?C=D;O=A">Description</a></th></tr>
<tr><th colspan="5"><hr></th></tr>
<tr><td valign="top"><img src="/icons/back.gif" alt="[PARENTDIR]"></td><td><a href="/">Parent Directory</a></td><td>&nbsp;</td><td align="right">  - </td><td>&nbsp;</td></tr>
"""

_FOOTER_ROW = '<tr><th colspan="5"><hr></th></tr>\n'


def _page(rows: str) -> str:
    return (
        "<!DOCTYPE HTML PUBLIC \"-//W3C//DTD HTML 3.2 Final//EN\">\n"
        "<html><head><title>Index of /mainline</title></head><body>\n"
        "<h1>Index of /mainline</h1>\n"
        f"<table>\n{_HEADER_ROWS}{rows}{_FOOTER_ROW}</table>\n"
        "</body></html>\n"
    )


def _file_row(name: str, date: str, size: str = " - ") -> str:
    return (
        '<tr><td valign="top"><img src="/icons/folder.gif" alt="[DIR]"></td>'
        f'<td><a href="{name}">{name}</a></td>'
        f'<td align="right">{date}  </td>'
        f'<td align="right">{size}</td><td>&nbsp;</td></tr>\n'
    )


def build_catalog_html(rows: List[Tuple[str, str]]) -> str:
    """Catalog page with one row per ``(folder, last_modified)`` pair."""
    return _page("".join(_file_row(name, date) for name, date in rows))


def build_detail_html(files: List[str]) -> str:
    """Detail page; with the three header rows, ``files[3]`` lands on row 6."""
    return _page("".join(_file_row(name, "2024-05-12 22:31", "12M") for name in files))


CATALOG_ROWS = [
    ("v6.10-rc1/", "2024-05-26 23:13"),
    ("v6.9.3/", "2024-05-30 09:08"),
    ("v6.9.2/", "2024-05-25 09:56"),
    ("v6.9.1/", "2024-05-17 12:27"),
    ("v6.9/", "2024-05-12 22:31"),
    ("v6.9-rc7/", "2024-05-05 22:42"),
    ("v6.9-rc6/", "2024-04-28 22:16"),
    ("v6.9-rc5/", "2024-04-21 23:33"),
    ("v6.8.12/", "2024-05-30 08:02"),
    ("v6.8.11/", "2024-05-25 09:37"),
    ("v6.8.10/", "2024-05-17 12:02"),
    ("v6.8.9/", "2024-05-02 15:33"),
]

GENERIC_FILES = [
    "linux-headers-6.9.0-060900_6.9.0-060900.202405122134_all.deb",
    "linux-headers-6.9.0-060900-generic_6.9.0-060900.202405122134_amd64.deb",
    "linux-image-unsigned-6.9.0-060900-generic_6.9.0-060900.202405122134_amd64.deb",
    "linux-modules-6.9.0-060900-generic_6.9.0-060900.202405122134_amd64.deb",
]

LOWLATENCY_FILES = [
    "linux-headers-6.9.0-060900-lowlatency_6.9.0-060900.202405122134_amd64.deb",
    "linux-image-unsigned-6.9.0-060900-lowlatency_6.9.0-060900.202405122134_amd64.deb",
    "linux-modules-6.9.0-060900-lowlatency_6.9.0-060900.202405122134_amd64.deb",
]

DETAIL_FILES = ["CHECKSUMS", "CHECKSUMS.gpg", "status"] + GENERIC_FILES + LOWLATENCY_FILES


@pytest.fixture
def mirror(monkeypatch):
    """Point the updater at a fake mirror with default resolver settings."""
    monkeypatch.setattr("kupdater.config.settings.base_url", BASE_URL)
    monkeypatch.setattr("kupdater.config.settings.arch", "amd64")
    monkeypatch.setattr("kupdater.config.settings.flavour", "generic")
    monkeypatch.setattr("kupdater.config.settings.max_versions", 10)
    monkeypatch.setattr("kupdater.config.settings.detail_rows", (6, 7, 8, 9))
    monkeypatch.setattr("kupdater.config.settings.selection", "positional")
    return BASE_URL


@pytest.fixture
def staging_root(tmp_path, monkeypatch):
    root = tmp_path / "kernel-updater"
    monkeypatch.setattr("kupdater.config.settings.staging_root", root)
    return root


@pytest.fixture(autouse=True)
def _reset_logging():
    """Drop handlers bound to a finished CliRunner's stderr."""
    yield
    import kupdater.log

    logger = logging.getLogger("kupdater")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    kupdater.log._configured = False

"""HTTP fetcher for the mainline index pages."""

from __future__ import annotations

import logging

import httpx

from kupdater.config import settings
from kupdater.catalog.models import RawPage

logger = logging.getLogger(__name__)

_DEFAULT_HEADERS = {
    "User-Agent": "kernel-updater/1.0 (+https://kernel.ubuntu.com/mainline/)"
}


def fetch_page(url: str) -> RawPage:
    """Fetch *url* and return a :class:`RawPage`.

    No retry is attempted.  ``settings.request_timeout`` of ``0`` means the
    request may block indefinitely.

    Raises:
        httpx.HTTPStatusError: If the server returns a 4xx/5xx status code.
    """
    logger.debug("GET %s", url)
    with httpx.Client(
        headers=_DEFAULT_HEADERS,
        timeout=settings.timeout_or_none(settings.request_timeout),
        follow_redirects=True,
    ) as client:
        response = client.get(url)
        response.raise_for_status()
        html = response.text
        status_code = response.status_code

    logger.debug("GET %s -> %s (%d bytes)", url, status_code, len(html))
    return RawPage(url=url, html=html, status_code=status_code)

"""Staging package — run-scoped download directory & sequential downloader."""

from kupdater.staging.area import StagingArea
from kupdater.staging.downloader import download_target, download_targets

__all__ = ["StagingArea", "download_target", "download_targets"]

"""Exception hierarchy for the update pipeline.

Every failure the pipeline can hit is fatal; the CLI catches
:class:`UpdaterError` at the command boundary and exits with status 1.
"""

from __future__ import annotations


class UpdaterError(Exception):
    """Base class for all kernel-updater failures."""


class UpstreamFormatError(UpdaterError):
    """The upstream index page no longer has the expected structure."""


class CatalogFormatError(UpstreamFormatError):
    pass


class DetailFormatError(UpstreamFormatError):
    pass


class SelectionError(UpdaterError):
    """The operator's version choice is missing, not a number, or out of range."""


class HostDetectionError(UpdaterError):
    pass


class TransferError(UpdaterError):
    """A package download failed or produced an empty file."""

    def __init__(self, url: str, message: str, returncode: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.returncode = returncode


class InstallError(UpdaterError):
    pass

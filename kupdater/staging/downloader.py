"""Sequential package downloads into the staging area.

Each target is fetched by an external ``curl --fail`` process whose stdout is
streamed straight into the destination file.  Transfers run one after the
other; the first failure aborts the run.
"""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Callable, List, Optional, Sequence

from kupdater.config import settings
from kupdater.errors import TransferError
from kupdater.catalog.models import DownloadTarget, VersionEntry
from kupdater.staging.area import StagingArea

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[DownloadTarget, int, int], None]


def download_command(url: str) -> List[str]:
    """Command line for one transfer.

    ``--fail`` makes HTTP errors a non-zero exit instead of an error page
    written to stdout.
    """
    return [
        settings.download_command,
        "--fail",
        "--silent",
        "--show-error",
        "--location",
        url,
    ]


def _destination(area: StagingArea, version: str, target: DownloadTarget) -> Path:
    version_dir = area.version_dir(version).resolve()
    path = area.file_path(version, target.file_name).resolve()
    if version_dir not in path.parents:
        raise TransferError(
            target.url, f"refusing to write {target.file_name!r} outside {version_dir}"
        )
    return path


def download_target(target: DownloadTarget, path: Path) -> None:
    """Fetch one *target* into *path* and verify the result is non-empty."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fh = path.open("wb")
    except OSError as exc:
        raise TransferError(target.url, f"cannot write {path}: {exc}") from exc

    with fh:
        try:
            result = subprocess.run(
                download_command(target.url),
                stdout=fh,
                stderr=subprocess.PIPE,
                timeout=settings.timeout_or_none(settings.download_timeout),
            )
        except subprocess.TimeoutExpired as exc:
            raise TransferError(
                target.url, f"timed out downloading {target.url!r}"
            ) from exc
        except OSError as exc:
            raise TransferError(
                target.url, f"could not run {settings.download_command}: {exc}"
            ) from exc

    if result.returncode != 0:
        stderr = (result.stderr or b"").decode(errors="replace").strip()
        logger.error("Download of %s failed (exit %d): %s", target.url, result.returncode, stderr)
        raise TransferError(
            target.url,
            f"error while downloading {target.url!r} (exit {result.returncode})",
            returncode=result.returncode,
        )

    size = path.stat().st_size
    if size == 0:
        # curl exited 0 but wrote nothing.
        raise TransferError(target.url, f"error while downloading {target.url!r} file")
    logger.info("Downloaded %s (%d bytes)", path.name, size)


def download_targets(
    entry: VersionEntry,
    targets: Sequence[DownloadTarget],
    area: StagingArea,
    on_progress: Optional[ProgressCallback] = None,
) -> Path:
    """Download every target of *entry* in order into the staging area.

    Args:
        entry: The chosen version; names the staging sub-directory.
        targets: Ordered download targets.
        area: Acquired staging area.
        on_progress: Called with ``(target, position, total)`` before each
            transfer.

    Returns:
        ``<staging_root>/<version>``, the directory holding every file.

    Raises:
        TransferError: On the first failed, timed-out or empty transfer.
    """
    directory = area.version_dir(entry.version)
    total = len(targets)
    for position, target in enumerate(targets, start=1):
        if on_progress is not None:
            on_progress(target, position, total)
        path = _destination(area, entry.version, target)
        logger.debug("[%d/%d] %s -> %s", position, total, target.url, path)
        download_target(target, path)
    return directory

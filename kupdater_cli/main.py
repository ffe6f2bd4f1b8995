"""Kernel updater CLI — entry-point for listing and installing mainline kernels.

Usage:
    python kupdater_cli/main.py --help

Commands:
    list     → show the newest mainline builds and the running kernel
    host     → show the running kernel version
    install  → pick a build, download its packages and install them
"""

from __future__ import annotations

import sys
from pathlib import Path

# Ensure the project root is on sys.path so that `from kupdater.xxx import ...`
# works when the CLI is invoked as `python kupdater_cli/main.py` from any
# working directory.
_ROOT = Path(__file__).resolve().parent.parent
if str(_ROOT) not in sys.path:
    sys.path.insert(0, str(_ROOT))

from enum import Enum
from typing import List, Optional

import typer

from kupdater.config import settings
from kupdater.errors import CatalogFormatError
from kupdater.log import configure_logging
from kupdater.catalog import fetch_catalog, resolve_targets
from kupdater.catalog.models import DownloadTarget, VersionEntry
from kupdater.host import detect_host_version
from kupdater.installer import check_install_result, install_packages
from kupdater.staging import StagingArea, download_targets
from kupdater_cli.prompt import ask_version
from kupdater_cli.rendering import (
    Loader,
    failure_message,
    host_line,
    render_versions,
    success_message,
)

app = typer.Typer(
    name="kupdater",
    help="Download and install Ubuntu mainline kernel builds.",
    no_args_is_help=True,
)

# Operator interrupt (128 + SIGINT)
EXIT_INTERRUPTED = 130


class Strategy(str, Enum):
    positional = "positional"
    roles = "roles"


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Download and install Ubuntu mainline kernel builds."""
    configure_logging("DEBUG" if verbose else settings.log_level)


def _fail(exc: Exception) -> typer.Exit:
    typer.echo(failure_message(str(exc)))
    return typer.Exit(code=1)


def _load_versions() -> List[VersionEntry]:
    entries = fetch_catalog()
    if not entries:
        raise CatalogFormatError("no kernel versions found in upstream listing")
    return entries


# ---------------------------------------------------------------------------
# Informational commands
# ---------------------------------------------------------------------------
@app.command("list")
def list_versions() -> None:
    """Print the newest mainline builds and the running kernel version."""
    try:
        entries = _load_versions()
        typer.echo(render_versions(entries))
        typer.echo(host_line(detect_host_version()))
    except Exception as e:
        raise _fail(e)


@app.command("host")
def host() -> None:
    """Print the running kernel version."""
    try:
        typer.echo(host_line(detect_host_version()))
    except Exception as e:
        raise _fail(e)


# ---------------------------------------------------------------------------
# Install pipeline
# ---------------------------------------------------------------------------
@app.command("install")
def install(
    index: Optional[str] = typer.Option(
        None, "--index", help="Version index to install (skips the prompt)."
    ),
    strategy: Optional[Strategy] = typer.Option(
        None, "--strategy", help="Package selection: positional | roles."
    ),
) -> None:
    """Pick a mainline build, download its packages and install them."""
    try:
        entries = _load_versions()
        typer.echo(render_versions(entries))
        typer.echo(host_line(detect_host_version()))
        entry = ask_version(entries, raw=index)

        with StagingArea() as area:
            loader = Loader(
                "Calculating files to fetch for " + typer.style(entry.version, bold=True)
            )
            with loader:
                targets = resolve_targets(
                    entry, strategy=strategy.value if strategy else None
                )

                def _progress(target: DownloadTarget, position: int, total: int) -> None:
                    loader.update(
                        f"Downloading {typer.style(target.file_name, bold=True)}"
                        f" ({position}/{total})"
                    )

                directory = download_targets(entry, targets, area, on_progress=_progress)

            # Loader is stopped before the installer so sudo's prompt is readable.
            check_install_result(install_packages(directory))
    except (KeyboardInterrupt, typer.Abort):
        # Ctrl+C or EOF at the prompt arrives as typer.Abort.
        typer.echo("")
        typer.echo(failure_message("interrupted"))
        raise typer.Exit(code=EXIT_INTERRUPTED)
    except Exception as e:
        raise _fail(e)

    typer.echo(success_message())


# ---------------------------------------------------------------------------
# Entry-point
# ---------------------------------------------------------------------------
if __name__ == "__main__":
    app()

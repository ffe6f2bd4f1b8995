"""Console presentation: version table, host line, loader and result messages."""

from __future__ import annotations

import sys
import threading
from typing import List, Optional, TextIO

import typer

from kupdater.catalog.models import VersionEntry

_DATE_FORMAT = "%Y-%m-%d %H:%M"


def render_versions(entries: List[VersionEntry]) -> str:
    """Render *entries* as an index / version / last-modified table."""
    width = max([len("version")] + [len(e.version) for e in entries])
    lines = [f"{'index':>5}  {'version':<{width}}  last modified"]
    lines.append(f"{'-' * 5}  {'-' * width}  {'-' * 16}")
    for index, entry in enumerate(entries):
        lines.append(
            f"{index:>5}  {entry.version:<{width}}  "
            f"{entry.last_modified.strftime(_DATE_FORMAT)}"
        )
    return "\n".join(lines)


def host_line(host_version: str) -> str:
    return "Your kernel version: " + typer.style(host_version, bold=True)


def success_message() -> str:
    return "Succeed ✨"


def failure_message(msg: Optional[str] = None) -> str:
    if msg:
        return f'Error with message "{msg}" 💣'
    return "Error 💣"


class Loader:
    """Single status line with cycling dots, redrawn in place.

    On a TTY a daemon thread redraws ``text .``/``..``/``...`` every
    *interval* seconds.  Elsewhere each new text is written once per line.
    """

    def __init__(
        self,
        text: str,
        stream: Optional[TextIO] = None,
        interval: float = 0.75,
    ) -> None:
        self._text = text
        self._stream = stream or sys.stdout
        self._interval = interval
        self._dots = ""
        self._lock = threading.Lock()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._animated = bool(getattr(self._stream, "isatty", lambda: False)())

    def start(self) -> "Loader":
        self._print()
        if self._animated:
            self._thread = threading.Thread(target=self._run, daemon=True)
            self._thread.start()
        return self

    def update(self, text: str) -> None:
        with self._lock:
            self._text = text
        self._print()

    def stop(self) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join()
            self._thread = None
        if self._animated:
            self._clear_line()
            self._stream.flush()

    def _run(self) -> None:
        while not self._stop.wait(self._interval):
            self._print()

    def _clear_line(self) -> None:
        self._stream.write("\r\033[2K")

    def _print(self) -> None:
        with self._lock:
            if not self._animated:
                self._stream.write(self._text + " ...\n")
                self._stream.flush()
                return
            self._dots = "." if len(self._dots) >= 3 else self._dots + "."
            self._clear_line()
            self._stream.write(f"{self._text} {self._dots}\r")
            self._stream.flush()

    def __enter__(self) -> "Loader":
        return self.start()

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

"""Interactive version selection."""

from __future__ import annotations

from typing import List, Optional

import typer

from kupdater.catalog.models import VersionEntry
from kupdater.errors import SelectionError

PROMPT_TEXT = "Pick index to install (or ctrl+c to kill the process)"


def parse_index(raw: Optional[str], count: int) -> int:
    """Validate the operator's answer as a zero-based index below *count*.

    Raises:
        SelectionError: Empty input, anything but plain digits, or out of range.
    """
    text = (raw or "").strip()
    if not text:
        raise SelectionError("no index given")
    # int() alone would also take "+3", "0_3" and non-ASCII digits.
    if not (text.isascii() and text.isdigit()):
        raise SelectionError(f"{text!r} is not a number")
    index = int(text)
    if index > count - 1:
        raise SelectionError(f"index {index} is out of range 0-{count - 1}")
    return index


def ask_version(entries: List[VersionEntry], raw: Optional[str] = None) -> VersionEntry:
    """Prompt once (unless *raw* is given) and return the chosen entry. No re-prompt."""
    if raw is None:
        raw = typer.prompt(PROMPT_TEXT, default="", show_default=False)
    return entries[parse_index(raw, len(entries))]

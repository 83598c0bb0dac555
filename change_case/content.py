"""Reading the text to convert from the clipboard or the current selection."""

from __future__ import annotations

from typing import Callable

from . import platform
from .log import logger

SOURCES = ("clipboard", "selection")


class NoTextError(Exception):
    """Neither the clipboard nor the selection holds any text."""

    def __init__(self) -> None:
        super().__init__("No text")


def _safe_selection(read_selection: Callable[[], str]) -> str:
    try:
        return read_selection()
    except Exception:
        logger.debug("Reading the selection failed", exc_info=True)
        return ""


def read_content(
    preferred_source: str,
    read_clipboard: Callable[[], str] | None = None,
    read_selection: Callable[[], str] | None = None,
) -> str:
    """Return text from the preferred source, falling back to the other one.

    ``"clipboard"`` prefers the clipboard; any other value prefers the
    selection. Raises :class:`NoTextError` when both are empty.
    """
    read_clipboard = read_clipboard or platform.read_clipboard
    read_selection = read_selection or platform.read_selection

    clipboard = read_clipboard()
    selected = _safe_selection(read_selection)

    if preferred_source == "clipboard":
        candidates = (clipboard, selected)
    else:
        candidates = (selected, clipboard)

    for text in candidates:
        if text:
            return text
    raise NoTextError()

"""Cross-platform abstractions for Change Case.

Detects the runtime platform once at import time and provides the data
directory plus clipboard, selection and paste helpers. Every other module
imports from here instead of doing its own platform detection.

Supported platforms:
  - linux   (native Linux, X11 or Wayland)
  - wsl     (Windows Subsystem for Linux)
  - macos   (macOS / Darwin)
  - windows (native Windows / PowerShell)
"""

from __future__ import annotations

import base64
import os
import platform
import shutil
import subprocess
import sys
from pathlib import Path

from .log import logger

# ---------------------------------------------------------------------------
# Platform detection (runs once at import time)
# ---------------------------------------------------------------------------

_system = platform.system()  # "Linux", "Darwin", "Windows"

try:
    _uname_release = platform.uname().release.lower()
except OSError:
    _uname_release = ""

IS_WINDOWS = _system == "Windows"
IS_MACOS = _system == "Darwin"
IS_LINUX = _system == "Linux"
IS_WSL = IS_LINUX and "microsoft" in _uname_release

_TIMEOUT = 2

# ---------------------------------------------------------------------------
# Paths
# ---------------------------------------------------------------------------


def app_home() -> Path:
    """Return the Change Case data directory.

    ``$CHANGE_CASE_HOME`` when set, otherwise ``~/.change-case``.
    """
    override = os.environ.get("CHANGE_CASE_HOME")
    if override:
        return Path(override).expanduser()
    return Path.home() / ".change-case"


def app_file(name: str) -> Path:
    """Return ``<app_home>/<name>`` for a data file."""
    return app_home() / name


# ---------------------------------------------------------------------------
# Reading text
# ---------------------------------------------------------------------------


def _read_first(commands: list[list[str]]) -> str:
    """Run the first available command and return its stdout ("" on failure)."""
    for cmd in commands:
        if not shutil.which(cmd[0]):
            continue
        try:
            result = subprocess.run(
                cmd, capture_output=True, check=True, timeout=_TIMEOUT
            )
        except (subprocess.SubprocessError, OSError):
            logger.debug("Reading text via %s failed", cmd[0], exc_info=True)
            continue
        return result.stdout.decode("utf-8", errors="replace")
    return ""


def read_clipboard() -> str:
    """Return the clipboard's text content, or "" if unavailable."""
    if IS_MACOS:
        return _read_first([["pbpaste"]])
    if IS_WINDOWS or IS_WSL:
        text = _read_first(
            [
                ["powershell.exe", "-NoProfile", "-Command", "Get-Clipboard -Raw"],
                ["pwsh.exe", "-NoProfile", "-Command", "Get-Clipboard -Raw"],
            ]
        )
        # PowerShell terminates output with CRLF
        return text.replace("\r\n", "\n").removesuffix("\n")
    return _read_first(
        [
            ["wl-paste", "--no-newline"],
            ["xclip", "-selection", "clipboard", "-o"],
            ["xsel", "--clipboard", "--output"],
        ]
    )


def read_selection() -> str:
    """Return the currently selected text (X11/Wayland primary selection).

    Other platforms have no primary selection to read, so this returns "".
    """
    if not IS_LINUX or IS_WSL:
        return ""
    return _read_first(
        [
            ["wl-paste", "--primary", "--no-newline"],
            ["xclip", "-selection", "primary", "-o"],
            ["xsel", "--primary", "--output"],
        ]
    )


# ---------------------------------------------------------------------------
# Clipboard
# ---------------------------------------------------------------------------

# (command, encoding of the piped text) per platform, first available wins
_WRITERS: dict[str, list[tuple[list[str], str]]] = {
    "wsl": [(["clip.exe"], "utf-16-le")],
    "windows": [(["clip.exe"], "utf-8")],
    "macos": [(["pbcopy"], "utf-8")],
    "linux": [
        (["wl-copy"], "utf-8"),
        (["xclip", "-selection", "clipboard"], "utf-8"),
        (["xsel", "--clipboard", "--input"], "utf-8"),
    ],
}


def _current_platform() -> str:
    # Evaluated per call so tests can flip the IS_* flags
    if IS_WSL:
        return "wsl"
    if IS_WINDOWS:
        return "windows"
    if IS_MACOS:
        return "macos"
    return "linux"


def _write_first(text: str, writers: list[tuple[list[str], str]]) -> bool:
    """Pipe *text* into the first clipboard tool that accepts it."""
    for cmd, encoding in writers:
        if not shutil.which(cmd[0]):
            continue
        try:
            subprocess.run(
                cmd,
                input=text.encode(encoding),
                check=True,
                timeout=_TIMEOUT,
                capture_output=True,
            )
        except (subprocess.SubprocessError, OSError):
            logger.debug("Clipboard write via %s failed", cmd[0], exc_info=True)
            continue
        return True
    return False


def copy_to_clipboard(text: str) -> bool:
    """Copy *text* to the system clipboard.

    Uses the platform's clipboard tool, falling back to an OSC 52 escape
    (modern terminals, also over SSH) when none is installed.
    """
    if _write_first(text, _WRITERS[_current_platform()]):
        return True
    return _clip_osc52(text)


def _clip_osc52(text: str) -> bool:
    """Write an OSC 52 sequence to the real terminal."""
    out = sys.__stdout__
    if out is None:
        return False
    try:
        encoded = base64.b64encode(text.encode()).decode()
        out.write(f"\033]52;c;{encoded}\a")
        out.flush()
        return True
    except OSError:
        logger.debug("OSC 52 clipboard write failed", exc_info=True)
        return False


# ---------------------------------------------------------------------------
# Paste into the focused application
# ---------------------------------------------------------------------------

_WINDOWS_PASTE = (
    "Add-Type -AssemblyName System.Windows.Forms;"
    "[System.Windows.Forms.SendKeys]::SendWait('^v')"
)

_KEYSTROKES: dict[str, list[list[str]]] = {
    "wsl": [["powershell.exe", "-NoProfile", "-Command", _WINDOWS_PASTE]],
    "windows": [["powershell.exe", "-NoProfile", "-Command", _WINDOWS_PASTE]],
    "macos": [
        [
            "osascript",
            "-e",
            'tell application "System Events" to keystroke "v" using command down',
        ]
    ],
    "linux": [
        ["wtype", "-M", "ctrl", "v", "-m", "ctrl"],
        ["xdotool", "key", "--clearmodifiers", "ctrl+v"],
    ],
}


def send_paste_keystroke() -> bool:
    """Send the platform's paste shortcut to whichever window has focus.

    Returns False when no keystroke tool is installed or every one fails.
    """
    for cmd in _KEYSTROKES[_current_platform()]:
        if not shutil.which(cmd[0]):
            continue
        try:
            subprocess.run(cmd, check=True, timeout=_TIMEOUT, capture_output=True)
        except (subprocess.SubprocessError, OSError):
            logger.debug("Paste keystroke via %s failed", cmd[0], exc_info=True)
            continue
        return True
    return False

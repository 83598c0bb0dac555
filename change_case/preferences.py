"""User preferences for Change Case.

Loads settings from ~/.change-case/preferences.yaml.
Falls back to sensible defaults if the file doesn't exist or is invalid.
Creates a default file on first run so users can discover and edit it.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path

import yaml

from .cases import CASES, preference_key
from .content import SOURCES
from .log import logger
from .platform import app_file

ACTIONS = ("copy", "paste")


def prefs_path() -> Path:
    return app_file("preferences.yaml")


def _default_yaml() -> str:
    lines = [
        "# Change Case Preferences",
        "# Delete this file to reset to defaults.",
        "",
        "source: clipboard   # clipboard | selection - where to read text first",
        "action: copy        # copy | paste - what Enter does",
        "",
        "# Cases listed under 'All Cases' (pinned and recent cases always show)",
        "cases:",
    ]
    lines.extend(f"  {preference_key(case)}: true" for case in CASES)
    return "\n".join(lines) + "\n"


@dataclass
class Preferences:
    """Top-level preferences."""

    source: str = "clipboard"
    action: str = "copy"
    cases: dict[str, bool] = field(default_factory=dict)

    def is_enabled(self, case: str) -> bool:
        """Cases missing from the file are enabled."""
        return self.cases.get(preference_key(case), True)

    def enabled_cases(self) -> list[str]:
        return [case for case in CASES if self.is_enabled(case)]


def load_preferences(path: Path | None = None) -> Preferences:
    """Load preferences from YAML file.

    Falls back to sensible defaults if the file doesn't exist or is invalid.
    Creates a default preferences file on first run.
    """
    path = path or prefs_path()
    prefs = Preferences()

    if path.exists():
        try:
            data = yaml.safe_load(path.read_text()) or {}
            if not isinstance(data, dict):
                raise ValueError("preferences must be a mapping")
            source = data.get("source")
            if source in SOURCES:
                prefs.source = source
            elif source is not None:
                logger.warning("Unknown source %r in %s, using clipboard", source, path)
            action = data.get("action")
            if action in ACTIONS:
                prefs.action = action
            elif action is not None:
                logger.warning("Unknown action %r in %s, using copy", action, path)
            if isinstance(data.get("cases"), dict):
                prefs.cases = {
                    str(key): bool(value) for key, value in data["cases"].items()
                }
        except (yaml.YAMLError, ValueError, OSError):
            logger.warning("Invalid preferences file %s, using defaults", path)
            return Preferences()
    else:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(_default_yaml())
        except OSError:
            pass  # Non-fatal: defaults still apply

    return prefs


def _update_key(path: Path, pattern: str, line: str, section: str | None) -> None:
    """Surgically set one key, preserving the rest of the file as-is."""
    if path.exists():
        text = path.read_text()
    else:
        path.parent.mkdir(parents=True, exist_ok=True)
        text = _default_yaml()

    if re.search(pattern, text, re.MULTILINE):
        text = re.sub(pattern, line, text, count=1, flags=re.MULTILINE)
    elif section and re.search(rf"^{section}:", text, re.MULTILINE):
        text = re.sub(
            rf"^({section}:.*)$",
            lambda m: f"{m.group(1)}\n{line}",
            text,
            count=1,
            flags=re.MULTILINE,
        )
    elif section:
        text = text.rstrip() + f"\n\n{section}:\n{line}\n"
    else:
        text = text.rstrip() + f"\n{line}\n"

    path.write_text(text)


def save_source(source: str, path: Path | None = None) -> None:
    """Persist the preferred text source."""
    if source not in SOURCES:
        raise ValueError(f"source must be one of {SOURCES}")
    try:
        _update_key(path or prefs_path(), r"^source:.*$", f"source: {source}", None)
    except OSError:
        logger.debug("failed to save source preference", exc_info=True)


def save_action(action: str, path: Path | None = None) -> None:
    """Persist the primary action."""
    if action not in ACTIONS:
        raise ValueError(f"action must be one of {ACTIONS}")
    try:
        _update_key(path or prefs_path(), r"^action:.*$", f"action: {action}", None)
    except OSError:
        logger.debug("failed to save action preference", exc_info=True)


def save_case_enabled(case: str, enabled: bool, path: Path | None = None) -> None:
    """Persist whether *case* shows under 'All Cases'."""
    key = preference_key(case)
    value = "true" if enabled else "false"
    try:
        _update_key(
            path or prefs_path(),
            rf"^[ \t]+{re.escape(key)}:.*$",
            f"  {key}: {value}",
            "cases",
        )
    except OSError:
        logger.debug("failed to save case preference", exc_info=True)

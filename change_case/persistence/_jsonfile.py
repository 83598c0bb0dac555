"""A JSON object kept in one file."""

from __future__ import annotations

import json
import os
from pathlib import Path

from ..log import logger


class JsonObjectFile:
    """Reads and atomically rewrites a file holding a single JSON object."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def read(self) -> dict:
        """Parsed object, or ``{}`` when the file is missing or unusable."""
        if not self.path.exists():
            return {}
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable file %s", self.path, exc_info=True)
            return {}
        if not isinstance(data, dict):
            logger.warning("%s is not a JSON object, starting empty", self.path)
            return {}
        return data

    def write(self, data: dict) -> None:
        """Replace the file's contents with *data*.

        The new text goes to a sibling temp file first so a crash never
        leaves half an object behind. Raises ``OSError`` on failure.
        """
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_name(self.path.name + ".tmp")
        tmp.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
        os.replace(tmp, self.path)

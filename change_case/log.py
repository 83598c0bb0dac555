"""Package-wide logger.

Textual owns the terminal while the app runs, so anything worth keeping
goes to a log file under the data directory instead of stderr.
"""

from __future__ import annotations

import logging
from pathlib import Path

logger = logging.getLogger("change_case")

_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(log_file: Path, verbose: bool = False) -> logging.Logger:
    """Send package logs to *log_file*, replacing any earlier log file."""
    level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(level)

    target = str(log_file.resolve())
    for handler in list(logger.handlers):
        if isinstance(handler, logging.FileHandler) and handler.baseFilename != target:
            logger.removeHandler(handler)
            handler.close()

    if not any(isinstance(h, logging.FileHandler) for h in logger.handlers):
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            handler = logging.FileHandler(log_file, encoding="utf-8")
        except OSError:
            return logger
        handler.setFormatter(logging.Formatter(_FORMAT))
        logger.addHandler(handler)

    for handler in logger.handlers:
        handler.setLevel(level)
    return logger

"""Tests for change_case.log.setup_logging."""

from __future__ import annotations

import logging

from change_case.log import logger, setup_logging


def _file_handlers():
    return [h for h in logger.handlers if isinstance(h, logging.FileHandler)]


class TestSetupLogging:
    def test_writes_to_file(self, tmp_path):
        path = tmp_path / "logs" / "change-case.log"
        setup_logging(path)
        logger.info("hello from the test")
        for handler in _file_handlers():
            handler.flush()
        assert "hello from the test" in path.read_text()

    def test_idempotent(self, tmp_path):
        path = tmp_path / "change-case.log"
        setup_logging(path)
        setup_logging(path)
        assert len(_file_handlers()) == 1

    def test_switching_files_replaces_handler(self, tmp_path):
        setup_logging(tmp_path / "a.log")
        setup_logging(tmp_path / "b.log")
        handlers = _file_handlers()
        assert len(handlers) == 1
        assert handlers[0].baseFilename.endswith("b.log")

    def test_verbose_sets_debug(self, tmp_path):
        setup_logging(tmp_path / "change-case.log", verbose=True)
        assert logger.level == logging.DEBUG
        setup_logging(tmp_path / "change-case.log")
        assert logger.level == logging.INFO

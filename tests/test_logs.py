"""Tests for package logger configuration."""

from __future__ import annotations

import logging
import tempfile
import unittest
from pathlib import Path

from yamlist.logs import PACKAGE_LOGGER, configure_logging


class ConfigureLoggingTests(unittest.TestCase):
    def tearDown(self) -> None:
        logger = logging.getLogger(PACKAGE_LOGGER)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()

    def test_console_handler_only_reports_warnings(self) -> None:
        logger = configure_logging()
        self.assertEqual(len(logger.handlers), 1)
        self.assertEqual(logger.handlers[0].level, logging.WARNING)
        self.assertFalse(logger.propagate)

    def test_reconfiguring_replaces_handlers(self) -> None:
        configure_logging()
        logger = configure_logging()
        self.assertEqual(len(logger.handlers), 1)

    def test_debug_records_reach_log_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_file = Path(tmp) / "yamlist.log"
            configure_logging(log_file, debug=True)
            logging.getLogger("yamlist.sync.client").debug("reader stopped")
            self.tearDown()

            contents = log_file.read_text(encoding="utf-8")
        self.assertIn("yamlist.sync.client - DEBUG - reader stopped", contents)

    def test_file_handler_skips_debug_without_flag(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            log_file = Path(tmp) / "yamlist.log"
            configure_logging(log_file)
            logging.getLogger("yamlist.runtime").debug("hidden")
            logging.getLogger("yamlist.runtime").info("shown")
            self.tearDown()

            contents = log_file.read_text(encoding="utf-8")
        self.assertNotIn("hidden", contents)
        self.assertIn("shown", contents)


if __name__ == "__main__":
    unittest.main()

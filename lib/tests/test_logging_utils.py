"""
Test suite for lib/logging_utils.py
"""

import logging
import os
import sys
import tempfile
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "../.."))
from lib.logging_utils import configureLogger, getLogLevelByStr


class TestLoggingUtils(unittest.TestCase):

    def setUp(self):
        self.logger = logging.getLogger("lib.tests.logging_utils.sample")
        self.addCleanup(self._resetLogger)

    def _resetLogger(self):
        for handler in self.logger.handlers[:]:
            handler.close()
            self.logger.removeHandler(handler)
        self.logger.setLevel(logging.NOTSET)
        self.logger.propagate = True

    def test_get_log_level_by_str(self):
        """Test level name parsing"""
        self.assertEqual(getLogLevelByStr("debug"), logging.DEBUG)
        self.assertEqual(getLogLevelByStr("WARNING"), logging.WARNING)
        self.assertIsNone(getLogLevelByStr("chatty"))
        self.assertEqual(getLogLevelByStr("chatty", logging.INFO), logging.INFO)

    def test_configure_console(self):
        """Test console handler with its own level"""
        configureLogger(self.logger, {"level": "DEBUG", "console": True, "console-level": "ERROR"})

        self.assertEqual(self.logger.level, logging.DEBUG)
        self.assertEqual(len(self.logger.handlers), 1)
        self.assertEqual(self.logger.handlers[0].level, logging.ERROR)

    def test_configure_file(self):
        """Test file handler writes records"""
        with tempfile.TemporaryDirectory() as tmpdir:
            logFile = os.path.join(tmpdir, "nested", "demo.log")
            configureLogger(self.logger, {"level": "INFO", "file": logFile, "format": "%(message)s", "propagate": False})

            self.logger.info("Person with id 17, dood!")
            self._resetLogger()

            with open(logFile, "rt", encoding="utf-8") as f:
                self.assertEqual(f.read(), "Person with id 17, dood!\n")

    def test_reconfigure_replaces_handlers(self):
        """Test that configuring twice doesn't duplicate handlers"""
        configureLogger(self.logger, {"console": True})
        configureLogger(self.logger, {"console": True})

        self.assertEqual(len(self.logger.handlers), 1)


if __name__ == "__main__":
    unittest.main()

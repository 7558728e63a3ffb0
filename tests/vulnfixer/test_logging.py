"""Tests for logging setup."""

from __future__ import annotations

import logging
import os
from unittest.mock import patch

import structlog

from vulnfixer.core.logging import setup_logging


class TestSetupLogging:
    def test_explicit_level_wins(self):
        with patch.dict(os.environ, {"VULNFIXER_LOG_LEVEL": "ERROR"}):
            setup_logging("DEBUG")
        assert logging.getLogger("vulnfixer").level == logging.DEBUG

    def test_env_level_and_json(self):
        with patch.dict(
            os.environ, {"VULNFIXER_LOG_LEVEL": "warning", "VULNFIXER_LOG_FORMAT": "json"}
        ):
            setup_logging()
        assert logging.getLogger("vulnfixer").level == logging.WARNING
        structlog.get_logger("vulnfixer.engine").warning("test.event", key="value")

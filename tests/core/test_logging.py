"""
Tests for the logging setup.
"""

import logging

from core.logging import setup_logging
from rich.logging import RichHandler


def test_setup_logging_installs_rich_handler():
    setup_logging("DEBUG")
    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert any(isinstance(handler, RichHandler) for handler in root.handlers)


def test_setup_logging_replaces_handlers():
    setup_logging(logging.INFO)
    setup_logging(logging.WARNING)
    root = logging.getLogger()
    assert root.level == logging.WARNING
    assert sum(isinstance(handler, RichHandler) for handler in root.handlers) == 1

"""
Tests for logging configuration.
"""

import logging

import pytest

from bookmark_interchange.utils.logging_setup import setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class TestSetupLogging:
    """Test cases for setup_logging."""

    def test_sets_level(self):
        setup_logging(level="WARNING", console_output=False)

        assert logging.getLogger().level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self):
        setup_logging(level="chatty", console_output=False)

        assert logging.getLogger().level == logging.INFO

    def test_writes_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "interchange.log"

        setup_logging(level="DEBUG", log_file=log_file, console_output=False)
        logging.getLogger("bookmark_interchange.test").info("hello from the test")
        for handler in logging.getLogger().handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "bookmark_interchange.test - INFO - hello from the test" in content

    def test_no_outputs_installs_null_handler(self):
        setup_logging(console_output=False)

        handlers = logging.getLogger().handlers
        assert len(handlers) == 1
        assert isinstance(handlers[0], logging.NullHandler)

    def test_console_output(self):
        setup_logging(console_output=True)

        assert any(
            type(handler) is logging.StreamHandler for handler in logging.getLogger().handlers
        )

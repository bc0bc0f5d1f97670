"""Tests for logger utility."""

import logging

from project_assistant.config import Settings
from project_assistant.utils.logger import init_app_logger, setup_logger, get_app_logger, with_context


class TestSetupLogger:
    """SUT: setup_logger"""

    def test_returns_logger(self):
        """Should return a Logger instance."""
        logger = setup_logger("test_logger_returns")
        assert isinstance(logger, logging.Logger)

    def test_with_level(self):
        """Setting DEBUG level should take effect."""
        logger = setup_logger("test_logger_level", log_level="DEBUG")
        assert logger.level == logging.DEBUG

    def test_no_duplicate_handlers(self):
        """Calling multiple times should not add duplicate handlers."""
        name = "test_logger_dup"
        logger1 = setup_logger(name)
        handler_count = len(logger1.handlers)
        logger2 = setup_logger(name)
        assert len(logger2.handlers) == handler_count
        assert logger1 is logger2

    def test_file_handler(self, tmp_path):
        """A log file path creates its directory and a file handler."""
        log_file = tmp_path / "logs" / "app.log"
        logger = setup_logger("test_logger_file", log_file=str(log_file))
        assert any(isinstance(h, logging.FileHandler) for h in logger.handlers)
        assert log_file.parent.exists()


class TestInitAppLogger:
    """SUT: init_app_logger"""

    def test_uses_settings(self):
        logger = init_app_logger(Settings(log_level="WARNING", log_file=None))
        assert logger.name == "project_assistant"
        assert get_app_logger() is logger


class TestGetAppLogger:
    """SUT: get_app_logger"""

    def test_default(self):
        """Should return a logger even when not explicitly initialized."""
        logger = get_app_logger()
        assert isinstance(logger, logging.Logger)


class TestWithContext:
    """SUT: with_context"""

    def test_appends_fields(self):
        assert with_context("Executing", user="u1", project="p1") == "Executing | user=u1 project=p1"

    def test_masks_secrets(self):
        message = with_context("Calling", api_token="abc123")
        assert "abc123" not in message
        assert "[REDACTED]" in message

    def test_skips_none(self):
        assert with_context("Done", user=None) == "Done"

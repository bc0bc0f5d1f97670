"""Logging utility."""

import logging
import os
from typing import Any, Optional

from .masking import mask_sensitive

APP_LOGGER_NAME = "project_assistant"

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _attach(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)


def setup_logger(
    name: str,
    log_level: str = "INFO",
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Set up a logger with console and optional file output.

    Calling it again for the same name only updates the level.

    Args:
        name: Logger name
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional path to log file

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    level = getattr(logging, log_level.upper(), logging.INFO)
    logger.setLevel(level)

    if logger.handlers:
        return logger

    _attach(logger, logging.StreamHandler(), level)

    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        _attach(logger, logging.FileHandler(log_file, encoding="utf-8"), level)

    return logger


# Application logger instance
app_logger: Optional[logging.Logger] = None


def init_app_logger(settings) -> logging.Logger:
    """
    Initialize the application logger from settings (log_level, log_file).

    Args:
        settings: Application settings instance

    Returns:
        Configured application logger
    """
    global app_logger
    app_logger = setup_logger(APP_LOGGER_NAME, settings.log_level, settings.log_file)
    return app_logger


def get_app_logger() -> logging.Logger:
    """Get the application logger, falling back to console-only defaults."""
    if app_logger is None:
        return setup_logger(APP_LOGGER_NAME)
    return app_logger


def with_context(message: str, **context: Any) -> str:
    """
    Append key=value context to a log message, secrets masked.

    Args:
        message: Log message
        **context: Context fields; None values are skipped

    Returns:
        Message with a " | k=v k=v" suffix, or the message unchanged
    """
    fields = mask_sensitive({k: v for k, v in context.items() if v is not None})
    if not fields:
        return message
    return f"{message} | " + " ".join(f"{k}={v}" for k, v in fields.items())

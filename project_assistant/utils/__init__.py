"""Utilities package."""

from .logger import get_app_logger, setup_logger, init_app_logger, with_context
from .masking import mask_sensitive, is_sensitive_key

__all__ = [
    "get_app_logger",
    "setup_logger",
    "init_app_logger",
    "with_context",
    "mask_sensitive",
    "is_sensitive_key",
]

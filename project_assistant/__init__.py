"""Project assistant action engine."""

__version__ = "1.0.0"

"""Sensitive-field masking for log context and audited action parameters."""

from typing import Any

MASK = "[REDACTED]"

_MAX_DEPTH = 20

# Substring match, case-insensitive
SENSITIVE_KEY_MARKERS = [
    "password",
    "token",
    "secret",
    "key",
    "authorization",
    "cookie",
    "session",
    "credit_card",
    "card_number",
    "cvv",
    "private",
]


def is_sensitive_key(key: str) -> bool:
    """Return True when a mapping key names a secret."""
    lowered = str(key).lower()
    return any(marker in lowered for marker in SENSITIVE_KEY_MARKERS)


def mask_sensitive(value: Any, depth: int = 0) -> Any:
    """
    Recursively replace values stored under sensitive keys.

    Dicts and lists are copied; other values are returned unchanged. Past
    the depth limit the whole sub-tree collapses to the mask.
    """
    if depth >= _MAX_DEPTH:
        return MASK
    if isinstance(value, dict):
        return {
            k: MASK if is_sensitive_key(k) else mask_sensitive(v, depth + 1)
            for k, v in value.items()
        }
    if isinstance(value, (list, tuple)):
        return [mask_sensitive(item, depth + 1) for item in value]
    return value

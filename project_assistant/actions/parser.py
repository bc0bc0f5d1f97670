"""Directive parsing for model output.

The model requests an action by embedding tags in its reply::

    [ACTION: clear_cache]
    [PARAMS: {"path": "/*"}]

Parsing is total: malformed or unknown directives mean "no action", never
an error.
"""

import json
import re
from typing import Optional

from .base import ActionDirective
from .registry import ActionRegistry, action_registry

ACTION_TAG = re.compile(r"\[ACTION:\s*(\w+)\s*\]", re.IGNORECASE)
PARAMS_TAG = re.compile(r"\[PARAMS:\s*([^\]]+)\]", re.IGNORECASE)

# Removal patterns also match empty or non-word tag bodies
_ACTION_STRIP = re.compile(r"\[ACTION:[^\]]*\]", re.IGNORECASE)
_PARAMS_STRIP = re.compile(r"\[PARAMS:[^\]]*\]", re.IGNORECASE)


def parse_action(text: Optional[str], registry: ActionRegistry = action_registry) -> Optional[ActionDirective]:
    """
    Extract the first action directive from model output.

    Args:
        text: Raw model reply
        registry: Registry used to validate the action name

    Returns:
        ActionDirective, or None when no registered action is requested
    """
    if not text:
        return None

    match = ACTION_TAG.search(text)
    if not match:
        return None

    action = match.group(1).lower()
    if not registry.is_registered(action):
        return None

    params = None
    params_match = PARAMS_TAG.search(text)
    if params_match:
        raw = params_match.group(1).strip()
        try:
            parsed = json.loads(raw)
        except ValueError:
            parsed = None
        params = parsed if isinstance(parsed, dict) else {"value": raw}

    return ActionDirective(action=action, params=params)


def strip_directives(text: Optional[str]) -> str:
    """Remove every ACTION and PARAMS tag, recognized or not."""
    if not text:
        return ""
    text = _ACTION_STRIP.sub("", text)
    text = _PARAMS_STRIP.sub("", text)
    return text.strip()

"""Assistant actions - registry, parser, executor and handlers."""

from .base import ActionContext, ActionDirective, ActionResult, ActionSettings
from .registry import ActionRegistry, action_registry
from .parser import parse_action, strip_directives
from .executor import ActionExecutor

__all__ = [
    "ActionContext",
    "ActionDirective",
    "ActionResult",
    "ActionSettings",
    "ActionRegistry",
    "action_registry",
    "parse_action",
    "strip_directives",
    "ActionExecutor",
]

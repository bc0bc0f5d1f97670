"""Action Registry - the closed set of privileged operations."""

from types import MappingProxyType
from typing import Dict, List, Mapping, Optional

from .base import ActionHandler
from .credentials import reset_password
from .deployment import clear_cache, restart_service, view_logs
from .health import health_check
from ..utils.logger import get_app_logger


BUILTIN_ACTIONS: Dict[str, ActionHandler] = {
    "reset_password": reset_password,
    "clear_cache": clear_cache,
    "restart_service": restart_service,
    "view_logs": view_logs,
    "health_check": health_check,
}


class ActionRegistry:
    """Read-only action name -> handler table."""

    def __init__(self, handlers: Optional[Mapping[str, ActionHandler]] = None):
        """
        Build the registry.

        Args:
            handlers: Table to use instead of the built-in actions
        """
        table = BUILTIN_ACTIONS if handlers is None else handlers
        self._actions: Mapping[str, ActionHandler] = MappingProxyType(
            {name.lower(): handler for name, handler in table.items()}
        )
        get_app_logger().debug(f"Action registry ready: {', '.join(self._actions)}")

    def is_registered(self, name: Optional[str]) -> bool:
        """
        Check whether an action exists.

        Args:
            name: Action name (case-insensitive)

        Returns:
            True if registered, False otherwise
        """
        return bool(name) and name.lower() in self._actions

    def get(self, name: Optional[str]) -> Optional[ActionHandler]:
        """
        Look up a handler.

        Args:
            name: Action name (case-insensitive)

        Returns:
            The handler, or None for unknown names
        """
        if not name:
            return None
        return self._actions.get(name.lower())

    def names(self) -> List[str]:
        """List registered action names."""
        return list(self._actions)


# Global singleton, read-only after import
action_registry = ActionRegistry()

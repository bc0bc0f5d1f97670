"""Shared types for assistant actions."""

from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncIterator, Awaitable, Callable, Dict, Optional, TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from ..db.repositories.project import ProjectRepository


@dataclass
class ActionResult:
    """Uniform outcome of an action handler."""

    success: bool
    message: str
    data: Optional[Dict[str, Any]] = None

    @classmethod
    def ok(cls, message: str, data: Optional[Dict[str, Any]] = None) -> "ActionResult":
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, message: str, data: Optional[Dict[str, Any]] = None) -> "ActionResult":
        return cls(success=False, message=message, data=data)


@dataclass(frozen=True)
class ActionSettings:
    """Process-wide credentials and limits, read-only at runtime."""

    vercel_token: Optional[str] = None
    vercel_team_id: Optional[str] = None
    vercel_api_base: str = "https://api.vercel.com"
    supabase_url: Optional[str] = None
    supabase_service_role_key: Optional[str] = None
    app_url: str = "http://localhost:3000"
    health_probe_timeout: float = 5.0
    logs_window_minutes: int = 5
    default_log_lines: int = 50


@dataclass
class ActionContext:
    """
    Everything a handler may touch for one invocation.

    The first four fields identify who asked and where; the rest are
    injected collaborators so handlers never read globals.
    """

    project_id: str
    requester_id: str
    vercel_project_id: Optional[str] = None
    supabase_project_ref: Optional[str] = None
    assistant_id: Optional[str] = None
    settings: ActionSettings = field(default_factory=ActionSettings)
    http_client: Optional[httpx.AsyncClient] = None
    projects: Optional["ProjectRepository"] = None


@dataclass
class ActionDirective:
    """An action request parsed out of model output."""

    action: str
    params: Optional[Dict[str, Any]] = None


ActionHandler = Callable[[ActionContext, Dict[str, Any]], Awaitable[ActionResult]]


@asynccontextmanager
async def http_session(context: ActionContext, timeout: float = 15.0) -> AsyncIterator[httpx.AsyncClient]:
    """Yield the injected HTTP client, or a short-lived one when none was given."""
    if context.http_client is not None:
        yield context.http_client
        return
    async with httpx.AsyncClient(timeout=timeout) as client:
        yield client


def describe_error(error: BaseException) -> str:
    """Readable text for an exception; some httpx errors stringify to ''."""
    return str(error) or error.__class__.__name__

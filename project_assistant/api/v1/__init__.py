"""API v1 package."""

from .assistant import router as assistant_router
from .projects import router as projects_router

__all__ = ["assistant_router", "projects_router"]

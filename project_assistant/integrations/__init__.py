"""External service clients."""

from .vercel import VercelClient
from .identity import IdentityClient

__all__ = ["VercelClient", "IdentityClient"]

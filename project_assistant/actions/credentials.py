"""Password reset action."""

from typing import Any, Dict, Optional

import httpx

from .base import ActionContext, ActionResult, describe_error, http_session
from ..errors import IntegrationError
from ..integrations.identity import IdentityClient
from ..utils.logger import get_app_logger


def _target_user_id(params: Dict[str, Any]) -> Optional[str]:
    user_id = params.get("userId") or params.get("user_id")
    return str(user_id) if user_id else None


def _explicit_email(params: Dict[str, Any]) -> Optional[str]:
    email = params.get("email")
    if email:
        return str(email).strip() or None
    if _target_user_id(params):
        return None
    # A bare [PARAMS: ana@example.com] arrives as {"value": ...}
    value = str(params.get("value") or "").strip()
    return value if "@" in value else None


async def reset_password(context: ActionContext, params: Dict[str, Any]) -> ActionResult:
    """
    Send a password recovery email.

    The address is taken from params["email"], else from the user named by
    params["userId"], else from a bare address in params["value"], else from
    the requester's own account.
    """
    logger = get_app_logger()
    settings = context.settings

    if not settings.supabase_url or not settings.supabase_service_role_key:
        return ActionResult.fail("El servicio de autenticación no está configurado.")

    try:
        async with http_session(context) as http:
            identity = IdentityClient(http, settings.supabase_url, settings.supabase_service_role_key)

            email = _explicit_email(params)

            target_user = _target_user_id(params)
            if not email and target_user:
                email = await identity.get_user_email(target_user)

            if not email:
                email = await identity.get_user_email(context.requester_id)

            if not email:
                return ActionResult.fail("No se pudo determinar el email para resetear la contraseña.")

            redirect_to = f"{settings.app_url.rstrip('/')}/auth/reset-password"
            await identity.send_password_reset(email, redirect_to)

    except IntegrationError as e:
        logger.warning(f"Password reset failed for project {context.project_id}: {e}")
        return ActionResult.fail(f"Error al enviar el email: {e.detail or e}")
    except httpx.HTTPError as e:
        logger.warning(f"Password reset failed for project {context.project_id}: {e}")
        return ActionResult.fail(f"Error inesperado: {describe_error(e)}")

    return ActionResult.ok(
        f"Se ha enviado un email de recuperación a {email}. Revisa tu bandeja de entrada.",
        {"email": email}
    )

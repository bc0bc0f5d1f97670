"""Deployment platform actions: cache purge, restart (redeploy), logs."""

import time
from datetime import datetime, timezone
from typing import Any, Dict, Optional

import httpx

from .base import ActionContext, ActionResult, describe_error, http_session
from ..errors import IntegrationError
from ..integrations.vercel import VercelClient
from ..utils.logger import get_app_logger

NO_PLATFORM_REFERENCE = "No hay información de Vercel configurada para este proyecto."


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def _missing_prerequisite(context: ActionContext, service_label: str) -> Optional[ActionResult]:
    """Fail explicitly when the project reference or the token is absent."""
    if not context.vercel_project_id:
        return ActionResult.fail(NO_PLATFORM_REFERENCE)
    if not context.settings.vercel_token:
        return ActionResult.fail(f"El servicio de {service_label} no está configurado.")
    return None


def _vercel(context: ActionContext, http: httpx.AsyncClient) -> VercelClient:
    settings = context.settings
    return VercelClient(
        http,
        token=settings.vercel_token,
        team_id=settings.vercel_team_id,
        base_url=settings.vercel_api_base
    )


async def clear_cache(context: ActionContext, params: Dict[str, Any]) -> ActionResult:
    """Purge the project's edge cache for every path."""
    missing = _missing_prerequisite(context, "caché")
    if missing:
        return missing

    try:
        async with http_session(context) as http:
            await _vercel(context, http).purge_cache(context.vercel_project_id)
    except IntegrationError as e:
        return ActionResult.fail(f"Error al limpiar caché: {e.detail or e}")
    except httpx.HTTPError as e:
        return ActionResult.fail(f"Error al conectar con Vercel: {describe_error(e)}")

    return ActionResult.ok(
        "La caché ha sido limpiada exitosamente. Los cambios deberían verse reflejados en unos minutos.",
        {"purgedAt": _now_iso()}
    )


async def restart_service(context: ActionContext, params: Dict[str, Any]) -> ActionResult:
    """
    Restart by redeploying the latest build.

    The current artifact is reused; nothing is rebuilt from source.
    """
    missing = _missing_prerequisite(context, "deployment")
    if missing:
        return missing

    logger = get_app_logger()
    try:
        async with http_session(context) as http:
            vercel = _vercel(context, http)

            try:
                latest = await vercel.latest_deployment(context.vercel_project_id)
            except IntegrationError as e:
                logger.warning(f"Could not list deployments for {context.vercel_project_id}: {e}")
                return ActionResult.fail(
                    f"No se pudo obtener información del deployment actual: {e.detail or e}"
                )

            if not latest:
                return ActionResult.fail("No hay deployments anteriores para reiniciar.")

            redeploy = await vercel.redeploy(latest.get("uid") or latest.get("id"))
    except IntegrationError as e:
        return ActionResult.fail(f"Error al reiniciar: {e.detail or e}")
    except httpx.HTTPError as e:
        return ActionResult.fail(f"Error al reiniciar: {describe_error(e)}")

    return ActionResult.ok(
        "El servicio se está reiniciando. Puede tomar 1-3 minutos en estar listo.",
        {
            "deploymentId": redeploy.get("id"),
            "url": redeploy.get("url"),
            "startedAt": _now_iso(),
        }
    )


def _line_cap(params: Dict[str, Any], default: int) -> int:
    try:
        lines = int(params.get("lines") or default)
    except (TypeError, ValueError):
        return default
    return lines if lines > 0 else default


def _format_log(entry: Dict[str, Any]) -> Dict[str, Any]:
    timestamp = entry.get("timestamp")
    if isinstance(timestamp, (int, float)):
        timestamp = datetime.fromtimestamp(timestamp / 1000, tz=timezone.utc).isoformat()
    return {
        "time": timestamp,
        "level": entry.get("level"),
        "message": entry.get("message"),
    }


async def view_logs(context: ActionContext, params: Dict[str, Any]) -> ActionResult:
    """
    Fetch recent runtime logs.

    An empty window counts as success: no logs means no errors.
    """
    missing = _missing_prerequisite(context, "logs")
    if missing:
        return missing

    settings = context.settings
    lines = _line_cap(params, settings.default_log_lines)
    since_ms = int(time.time() * 1000) - settings.logs_window_minutes * 60 * 1000

    try:
        async with http_session(context) as http:
            logs = await _vercel(context, http).recent_logs(context.vercel_project_id, since_ms, lines)
    except IntegrationError as e:
        return ActionResult.fail(f"No se pudieron obtener los logs: {e.detail or e}")
    except httpx.HTTPError as e:
        return ActionResult.fail(f"Error al obtener logs: {describe_error(e)}")

    if not logs:
        return ActionResult.ok(
            f"No hay logs recientes (últimos {settings.logs_window_minutes} minutos). "
            "Esto es buena señal - no hay errores.",
            {"logs": []}
        )

    formatted = [_format_log(entry) for entry in logs[:lines]]
    return ActionResult.ok(f"Mostrando últimos {len(formatted)} logs:", {"logs": formatted})

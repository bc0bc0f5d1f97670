"""Multi-point health check action."""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

import httpx

from .base import ActionContext, ActionResult, describe_error, http_session
from ..db.database_models.project import ProjectDO
from ..errors import IntegrationError
from ..integrations.vercel import VercelClient
from ..utils.logger import get_app_logger


def _check(name: str, ok: bool, message: str) -> Dict[str, str]:
    return {"name": name, "status": "ok" if ok else "error", "message": message}


def _check_database(context: ActionContext) -> Tuple[Dict[str, str], Optional[ProjectDO]]:
    if context.projects is None:
        return _check("Base de datos", False, "Almacén de datos no disponible"), None
    try:
        project = context.projects.lookup(context.project_id)
    except Exception as e:
        get_app_logger().warning(f"Health check database probe failed: {e}")
        return _check("Base de datos", False, "No se pudo conectar"), None
    if project is None:
        return _check("Base de datos", False, "Error: proyecto no encontrado"), None
    return _check("Base de datos", True, "Conectada correctamente"), project


async def _check_website(http: httpx.AsyncClient, url: str, timeout: float) -> Dict[str, str]:
    try:
        response = await http.head(url, timeout=timeout, follow_redirects=True)
    except httpx.HTTPError:
        return _check("Sitio web", False, "No responde o timeout")
    except Exception as e:
        get_app_logger().warning(f"Health check website probe failed: {e}")
        return _check("Sitio web", False, f"No se pudo verificar: {describe_error(e)}")
    if response.is_success:
        return _check("Sitio web", True, f"Respondiendo correctamente ({response.status_code})")
    return _check("Sitio web", False, f"Error HTTP {response.status_code}")


async def _check_deployment(context: ActionContext, http: httpx.AsyncClient) -> Dict[str, str]:
    settings = context.settings
    try:
        vercel = VercelClient(
            http,
            token=settings.vercel_token,
            team_id=settings.vercel_team_id,
            base_url=settings.vercel_api_base
        )
        latest = await vercel.latest_deployment(context.vercel_project_id)
    except (IntegrationError, httpx.HTTPError) as e:
        return _check("Deployment", False, f"No se pudo verificar: {describe_error(e)}")
    except Exception as e:
        get_app_logger().warning(f"Health check deployment probe failed: {e}")
        return _check("Deployment", False, f"No se pudo verificar: {describe_error(e)}")
    if not latest:
        return _check("Deployment", False, "Sin deployments")
    state = latest.get("state") or latest.get("readyState")
    return _check("Deployment", state == "READY", f"Estado: {state}")


async def health_check(context: ActionContext, params: Dict[str, Any]) -> ActionResult:
    """
    Run every applicable sub-check without short-circuiting.

    Sub-checks whose prerequisites are missing (no deployment URL, no
    platform reference or token) are skipped rather than failed. Overall
    success is the conjunction of the checks that ran.
    """
    checks: List[Dict[str, str]] = []

    database_check, project = _check_database(context)
    checks.append(database_check)

    deployment_url = project.deployment_url if project else None
    run_platform_check = bool(context.vercel_project_id and context.settings.vercel_token)

    if deployment_url or run_platform_check:
        async with http_session(context) as http:
            if deployment_url:
                checks.append(await _check_website(http, deployment_url, context.settings.health_probe_timeout))
            if run_platform_check:
                checks.append(await _check_deployment(context, http))

    all_ok = all(c["status"] == "ok" for c in checks)
    return ActionResult(
        success=all_ok,
        message=(
            "Todos los sistemas están funcionando correctamente."
            if all_ok
            else "Algunos sistemas reportan problemas."
        ),
        data={
            "checks": checks,
            "checkedAt": datetime.now(timezone.utc).isoformat(),
        }
    )

"""Vercel REST API client (cache purge, deployments, logs)."""

from typing import Any, Dict, List, Optional

import httpx

from ..errors import IntegrationError
from ..utils.logger import get_app_logger


class VercelClient:
    """Thin async wrapper over the Vercel endpoints the assistant uses."""

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        token: str,
        team_id: Optional[str] = None,
        base_url: str = "https://api.vercel.com"
    ):
        if not token:
            raise ValueError("Vercel token is required")
        self.http = http_client
        self.token = token
        self.team_id = team_id
        self.base_url = base_url.rstrip("/")
        self.logger = get_app_logger()

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json_body: Optional[Dict[str, Any]] = None
    ) -> Any:
        query = dict(params or {})
        if self.team_id:
            query["teamId"] = self.team_id

        response = await self.http.request(
            method,
            f"{self.base_url}{path}",
            params=query,
            json=json_body,
            headers={"Authorization": f"Bearer {self.token}"}
        )
        if response.status_code >= 400:
            self.logger.warning(f"[Vercel] {method} {path} -> {response.status_code}")
            raise IntegrationError("Vercel", response.status_code, response.text)

        if not response.content:
            return {}
        try:
            body = response.json()
        except ValueError:
            self.logger.warning(f"[Vercel] {method} {path} returned a non-JSON body")
            raise IntegrationError("Vercel", response.status_code, "invalid JSON response")
        if not isinstance(body, dict):
            raise IntegrationError("Vercel", response.status_code, "unexpected response shape")
        return body

    async def purge_cache(self, project_id: str, path: str = "/*") -> None:
        """Purge edge cache entries matching path for a project."""
        await self._request("POST", f"/v1/projects/{project_id}/purge-cache", json_body={"path": path})

    async def latest_deployment(self, project_id: str) -> Optional[Dict[str, Any]]:
        """Return the most recent deployment of a project, or None."""
        data = await self._request("GET", "/v6/deployments", params={"projectId": project_id, "limit": 1})
        deployments = data.get("deployments") or []
        if not isinstance(deployments, list):
            raise IntegrationError("Vercel", 200, "unexpected deployments payload")
        if not deployments:
            return None
        if not isinstance(deployments[0], dict):
            raise IntegrationError("Vercel", 200, "unexpected deployments payload")
        return deployments[0]

    async def redeploy(self, deployment_id: str) -> Dict[str, Any]:
        """Redeploy an existing build as-is."""
        return await self._request("POST", f"/v13/deployments/{deployment_id}/redeploy")

    async def recent_logs(self, project_id: str, since_ms: int, limit: int) -> List[Dict[str, Any]]:
        """Fetch runtime log entries newer than since_ms (epoch milliseconds)."""
        data = await self._request(
            "GET",
            "/v2/deployments/logs",
            params={"projectId": project_id, "since": since_ms, "limit": limit}
        )
        logs = data.get("logs") or []
        if not isinstance(logs, list):
            raise IntegrationError("Vercel", 200, "unexpected logs payload")
        return [entry for entry in logs if isinstance(entry, dict)]

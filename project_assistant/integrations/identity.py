"""Supabase Auth client used for password resets."""

from typing import Optional

import httpx

from ..errors import IntegrationError


class IdentityClient:
    """Talks to the Supabase Auth (GoTrue) REST API with the service role key."""

    def __init__(self, http_client: httpx.AsyncClient, supabase_url: str, service_role_key: str):
        if not supabase_url or not service_role_key:
            raise ValueError("Supabase URL and service role key are required")
        self.http = http_client
        self.base_url = supabase_url.rstrip("/")
        self.service_role_key = service_role_key

    @property
    def _headers(self):
        return {
            "apikey": self.service_role_key,
            "Authorization": f"Bearer {self.service_role_key}",
        }

    async def get_user_email(self, user_id: str) -> Optional[str]:
        """
        Look up a user's email address.

        Args:
            user_id: Auth user ID

        Returns:
            The email, or None if the user does not exist or has none
        """
        response = await self.http.get(
            f"{self.base_url}/auth/v1/admin/users/{user_id}",
            headers=self._headers
        )
        if response.status_code == 404:
            return None
        if response.status_code >= 400:
            raise IntegrationError("Supabase", response.status_code, response.text)
        try:
            body = response.json()
        except ValueError:
            raise IntegrationError("Supabase", response.status_code, "invalid JSON response")
        if not isinstance(body, dict):
            raise IntegrationError("Supabase", response.status_code, "unexpected response shape")
        return body.get("email") or None

    async def send_password_reset(self, email: str, redirect_to: str) -> None:
        """Trigger a password recovery email."""
        response = await self.http.post(
            f"{self.base_url}/auth/v1/recover",
            params={"redirect_to": redirect_to},
            json={"email": email},
            headers=self._headers
        )
        if response.status_code >= 400:
            raise IntegrationError("Supabase", response.status_code, _error_text(response))


def _error_text(response: httpx.Response) -> str:
    """Prefer the GoTrue error message over the raw body."""
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict):
        return body.get("msg") or body.get("error_description") or body.get("message") or response.text
    return response.text

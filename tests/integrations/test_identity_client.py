"""Tests for IdentityClient."""

import json

import httpx
import pytest

from project_assistant.errors import IntegrationError
from project_assistant.integrations.identity import IdentityClient


def _client(handler):
    http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return http, IdentityClient(http, "https://auth.example.com/", "service-key")


class TestIdentityClient:
    """Tests for IdentityClient."""

    def test_requires_configuration(self):
        with pytest.raises(ValueError):
            IdentityClient(httpx.AsyncClient(), "", "key")

    class TestGetUserEmail:
        """SUT: IdentityClient.get_user_email"""

        async def test_found(self):
            def handler(request):
                assert request.url.path == "/auth/v1/admin/users/u1"
                assert request.headers["apikey"] == "service-key"
                assert request.headers["Authorization"] == "Bearer service-key"
                return httpx.Response(200, json={"id": "u1", "email": "ana@example.com"})

            http, client = _client(handler)
            async with http:
                assert await client.get_user_email("u1") == "ana@example.com"

        async def test_missing_user(self):
            http, client = _client(lambda request: httpx.Response(404, json={"msg": "User not found"}))
            async with http:
                assert await client.get_user_email("ghost") is None

        async def test_server_error(self):
            http, client = _client(lambda request: httpx.Response(500, text="down"))
            async with http:
                with pytest.raises(IntegrationError):
                    await client.get_user_email("u1")

        async def test_non_json_body(self):
            http, client = _client(lambda request: httpx.Response(200, text="<html>"))
            async with http:
                with pytest.raises(IntegrationError) as exc_info:
                    await client.get_user_email("u1")
            assert exc_info.value.detail == "invalid JSON response"

        async def test_list_body(self):
            http, client = _client(lambda request: httpx.Response(200, json=[]))
            async with http:
                with pytest.raises(IntegrationError):
                    await client.get_user_email("u1")

    class TestSendPasswordReset:
        """SUT: IdentityClient.send_password_reset"""

        async def test_request_shape(self):
            seen = []

            def handler(request):
                seen.append(request)
                return httpx.Response(200, json={})

            http, client = _client(handler)
            async with http:
                await client.send_password_reset("ana@example.com", "https://app.example.com/auth/reset-password")

            [request] = seen
            assert request.url.path == "/auth/v1/recover"
            assert request.url.params["redirect_to"] == "https://app.example.com/auth/reset-password"
            assert json.loads(request.content) == {"email": "ana@example.com"}

        async def test_error_message_extracted(self):
            http, client = _client(
                lambda request: httpx.Response(429, json={"msg": "For security purposes, wait 60 seconds"})
            )
            async with http:
                with pytest.raises(IntegrationError) as exc_info:
                    await client.send_password_reset("ana@example.com", "https://x")
            assert exc_info.value.detail == "For security purposes, wait 60 seconds"

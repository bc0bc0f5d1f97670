"""Fixtures for action tests."""

import httpx
import pytest

from project_assistant.actions.base import ActionContext, ActionSettings


@pytest.fixture
def action_settings():
    return ActionSettings(
        vercel_token="tok_abc",
        vercel_team_id=None,
        supabase_url="https://auth.example.com",
        supabase_service_role_key="service-key",
        app_url="https://app.example.com"
    )


@pytest.fixture
async def make_context(action_settings):
    """Build an ActionContext whose HTTP traffic goes to the given handler."""
    clients = []

    def _make(handler=None, **overrides):
        if handler is not None:
            http = httpx.AsyncClient(transport=httpx.MockTransport(handler))
            clients.append(http)
            overrides.setdefault("http_client", http)
        defaults = dict(
            project_id="p1",
            requester_id="u1",
            vercel_project_id="prj_123",
            assistant_id="a1",
            settings=action_settings
        )
        defaults.update(overrides)
        return ActionContext(**defaults)

    yield _make

    for http in clients:
        await http.aclose()

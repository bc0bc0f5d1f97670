"""Pytest fixtures for API testing."""

import httpx
import pytest
from httpx import AsyncClient, ASGITransport
from fastapi import FastAPI

from project_assistant.actions import ActionExecutor, ActionSettings
from project_assistant.api.v1 import assistant, projects
from project_assistant.db import (
    ActionLogRepository,
    AssistantRepository,
    ConversationRepository,
    MessageRepository,
    ProjectRepository
)
from project_assistant.services import ChatOrchestrator


def _vercel_ok(request):
    return httpx.Response(200, json={})


@pytest.fixture(scope="function")
async def client(db_conn, model_client):
    """Create async HTTP client over a test app with a fresh database."""
    outbound = httpx.AsyncClient(transport=httpx.MockTransport(_vercel_ok))
    orchestrator = ChatOrchestrator(
        assistants=AssistantRepository(db_conn.conn),
        conversations=ConversationRepository(db_conn.conn),
        messages=MessageRepository(db_conn.conn),
        projects=ProjectRepository(db_conn.conn),
        model_client=model_client,
        executor=ActionExecutor(ActionLogRepository(db_conn.conn)),
        action_settings=ActionSettings(vercel_token="tok_abc"),
        http_client=outbound
    )

    # Inject dependencies into routers
    assistant.db_conn = db_conn
    assistant.orchestrator = orchestrator
    projects.db_conn = db_conn

    # Create a test app without lifespan (to avoid conflicts)
    test_app = FastAPI(title="Project Assistant Test")
    test_app.include_router(assistant.router)
    test_app.include_router(projects.router)

    transport = ASGITransport(app=test_app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    # Cleanup
    assistant.db_conn = None
    assistant.orchestrator = None
    projects.db_conn = None
    await outbound.aclose()

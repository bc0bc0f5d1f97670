"""Shared pytest fixtures."""

from typing import Dict, List, Optional

import pytest

from project_assistant.db import (
    DatabaseConnection,
    ActionLogRepository,
    AssistantRepository,
    ConversationRepository,
    MessageRepository,
    ProjectRepository
)
from project_assistant.db.database_models import AssistantDO, ProjectDO
from project_assistant.errors import ModelCallError
from project_assistant.services.model_client import ModelClient


class StubModelClient(ModelClient):
    """Model client returning scripted replies and recording every call."""

    def __init__(self, replies: Optional[List[str]] = None, error: Optional[Exception] = None):
        self.replies = list(replies or [])
        self.error = error
        self.calls: List[Dict] = []

    async def complete(self, system, messages, model, max_tokens) -> str:
        self.calls.append({
            "system": system,
            "messages": [dict(m) for m in messages],
            "model": model,
            "max_tokens": max_tokens,
        })
        if self.error:
            raise self.error
        return self.replies.pop(0) if self.replies else ""


@pytest.fixture
def db_conn(tmp_path):
    """Provide a fresh database connection."""
    db = DatabaseConnection(str(tmp_path / "test.db"))
    yield db
    db.close()


@pytest.fixture
def project_repo(db_conn):
    return ProjectRepository(db_conn.conn)


@pytest.fixture
def assistant_repo(db_conn):
    return AssistantRepository(db_conn.conn)


@pytest.fixture
def conversation_repo(db_conn):
    return ConversationRepository(db_conn.conn)


@pytest.fixture
def message_repo(db_conn):
    return MessageRepository(db_conn.conn)


@pytest.fixture
def action_log_repo(db_conn):
    return ActionLogRepository(db_conn.conn)


@pytest.fixture
def model_client():
    """Scripted model; append replies before driving a turn."""
    return StubModelClient()


@pytest.fixture
def failing_model_client():
    return StubModelClient(error=ModelCallError("upstream overloaded"))


def _make_project(**overrides) -> ProjectDO:
    """Factory for ProjectDO with sensible defaults."""
    defaults = dict(
        id="p1",
        name="Tienda Aurora",
        project_type="ecommerce",
        status="deployed",
        deployment_url="https://aurora.example.com",
        tech_stack=["Next.js", "Supabase"],
        features=[{"name": "Carrito", "description": "Compra de productos"}]
    )
    defaults.update(overrides)
    return ProjectDO(**defaults)


def _make_assistant(**overrides) -> AssistantDO:
    """Factory for AssistantDO with sensible defaults."""
    defaults = dict(
        id="a1",
        project_id="p1",
        assistant_name="Asistente de Tienda Aurora",
        system_prompt="Eres el asistente.",
        vercel_project_id="prj_123"
    )
    defaults.update(overrides)
    return AssistantDO(**defaults)


@pytest.fixture
def seeded_project(project_repo, assistant_repo):
    """A deployed project with its assistant."""
    project = _make_project()
    assistant = _make_assistant()
    project_repo.create(project)
    assistant_repo.create(assistant)
    return project, assistant


@pytest.fixture
def make_project():
    return _make_project


@pytest.fixture
def make_assistant():
    return _make_assistant

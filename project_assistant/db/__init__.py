"""Database package - connection, models, and repositories."""

from .connection import DatabaseConnection
from .repositories.project import ProjectRepository
from .repositories.assistant import AssistantRepository
from .repositories.conversation import ConversationRepository
from .repositories.message import MessageRepository
from .repositories.action_log import ActionLogRepository

__all__ = [
    "DatabaseConnection",
    "ProjectRepository",
    "AssistantRepository",
    "ConversationRepository",
    "MessageRepository",
    "ActionLogRepository",
]

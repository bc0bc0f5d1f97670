"""Repository layer for data access."""

from .project import ProjectRepository
from .assistant import AssistantRepository
from .conversation import ConversationRepository
from .message import MessageRepository
from .action_log import ActionLogRepository

__all__ = [
    "ProjectRepository",
    "AssistantRepository",
    "ConversationRepository",
    "MessageRepository",
    "ActionLogRepository",
]

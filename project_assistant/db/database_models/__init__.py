"""Database models (Data Objects) - map to database tables."""

from .project import ProjectDO
from .assistant import AssistantDO
from .conversation import ConversationDO
from .message import MessageDO
from .action_log import ActionLogDO

__all__ = ["ProjectDO", "AssistantDO", "ConversationDO", "MessageDO", "ActionLogDO"]

"""Conversation database model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from ...utils.clock import utc_now


@dataclass
class ConversationDO:
    """Conversation data object - maps to assistant_conversations table."""

    id: str
    project_id: str
    assistant_id: str
    user_id: str
    title: Optional[str] = None
    actions_requested: List[str] = field(default_factory=list)
    actions_executed: List[str] = field(default_factory=list)
    message_count: int = 0
    started_at: datetime = field(default_factory=utc_now)
    last_message_at: Optional[datetime] = None
    is_archived: bool = False

"""Project assistant database model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ...utils.clock import utc_now


@dataclass
class AssistantDO:
    """Assistant configuration data object - maps to project_assistants table."""

    id: str
    project_id: str
    assistant_name: str
    system_prompt: str
    model: str = "claude-sonnet-4-20250514"
    max_tokens: int = 4096
    vercel_project_id: Optional[str] = None
    supabase_project_ref: Optional[str] = None
    total_messages: int = 0
    total_actions_executed: int = 0
    last_interaction: Optional[datetime] = None
    created_at: datetime = field(default_factory=utc_now)

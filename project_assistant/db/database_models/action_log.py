"""Action audit log database model."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional


@dataclass
class ActionLogDO:
    """One action execution attempt - maps to assistant_action_logs table."""

    user_id: str
    project_id: str
    action_type: str
    success: bool
    started_at: datetime
    completed_at: datetime
    duration_ms: int
    assistant_id: Optional[str] = None
    action_params: Optional[Dict[str, Any]] = None
    result_data: Optional[Dict[str, Any]] = None
    error_message: Optional[str] = None
    id: Optional[int] = None

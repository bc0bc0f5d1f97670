"""Message database model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Optional

from ...utils.clock import utc_now


@dataclass
class MessageDO:
    """Message data object - maps to assistant_messages table."""

    conversation_id: str
    role: str
    content: str
    timestamp: datetime = field(default_factory=utc_now)
    action: Optional[Dict[str, Any]] = None
    id: Optional[int] = None

"""Conversation API models."""

from datetime import datetime
from typing import Any, Dict, List, Optional
from pydantic import Field

from .base import ApiModel


class MessageResponse(ApiModel):
    """Response model for a single message."""

    id: Optional[int] = Field(None, description="Message ID")
    role: str = Field(description="Message role (user/assistant)")
    content: str = Field(description="Message content")
    timestamp: datetime = Field(description="Message timestamp")
    action: Optional[Dict[str, Any]] = Field(None, description="Action outcome attached to the message")


class ConversationSummary(ApiModel):
    """Conversation list entry."""

    id: str = Field(description="Conversation ID")
    title: Optional[str] = Field(None, description="Conversation title")
    started_at: datetime = Field(description="Creation timestamp")
    last_message_at: Optional[datetime] = Field(None, description="Last message timestamp")
    message_count: int = Field(default=0, description="Number of stored messages")


class ConversationListResponse(ApiModel):
    """Response model for listing conversations."""

    conversations: List[ConversationSummary] = Field(description="Conversations, most recent first")
    total: int = Field(description="Total number of conversations")


class ConversationResponse(ConversationSummary):
    """Full conversation with its messages."""

    project_id: str = Field(description="Project ID")
    actions_requested: List[str] = Field(default_factory=list, description="Action names ever requested")
    actions_executed: List[str] = Field(default_factory=list, description="Action names that ever succeeded")
    messages: List[MessageResponse] = Field(default_factory=list, description="Messages in order")

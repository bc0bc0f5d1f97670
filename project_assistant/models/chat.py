"""Chat API models."""

from typing import Any, Dict, Optional
from pydantic import Field, field_validator

from .base import ApiModel


class ChatRequest(ApiModel):
    """Request model for one chat turn."""

    message: str = Field(description="User message", min_length=1)
    conversation_id: Optional[str] = Field(None, description="Conversation to continue")
    requester_id: str = Field(description="Authenticated requester ID", min_length=1)

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("message must not be blank")
        return v


class ActionSummary(ApiModel):
    """Outcome of the action executed during a turn."""

    type: str = Field(description="Action name")
    success: bool = Field(description="Whether the action succeeded")
    message: str = Field(description="Human-readable outcome")
    data: Optional[Dict[str, Any]] = Field(None, description="Action-specific payload")


class ChatResponse(ApiModel):
    """Response model for one chat turn."""

    conversation_id: str = Field(description="Conversation the turn belongs to")
    response: str = Field(description="Assistant reply")
    action: Optional[ActionSummary] = Field(None, description="Executed action, if any")

"""Pydantic models for API request/response."""

from .chat import ChatRequest, ChatResponse, ActionSummary
from .conversation import (
    MessageResponse,
    ConversationSummary,
    ConversationListResponse,
    ConversationResponse
)
from .assistant import ProvisionAssistantRequest, AssistantResponse

__all__ = [
    "ChatRequest",
    "ChatResponse",
    "ActionSummary",
    "MessageResponse",
    "ConversationSummary",
    "ConversationListResponse",
    "ConversationResponse",
    "ProvisionAssistantRequest",
    "AssistantResponse",
]

"""Assistant configuration API models."""

from datetime import datetime
from typing import Optional
from pydantic import Field

from .base import ApiModel


class ProvisionAssistantRequest(ApiModel):
    """Request model for creating a project's assistant."""

    vercel_project_id: Optional[str] = Field(None, description="Deployment platform project ID")
    supabase_project_ref: Optional[str] = Field(None, description="Identity provider project reference")


class AssistantResponse(ApiModel):
    """Response model for an assistant configuration."""

    id: str = Field(description="Assistant ID")
    project_id: str = Field(description="Project ID")
    assistant_name: str = Field(description="Display name")
    system_prompt: str = Field(description="System prompt sent with every turn")
    model: str = Field(description="Model identifier")
    max_tokens: int = Field(description="Reply token budget")
    vercel_project_id: Optional[str] = Field(None, description="Deployment platform project ID")
    supabase_project_ref: Optional[str] = Field(None, description="Identity provider project reference")
    total_messages: int = Field(default=0, description="Messages exchanged")
    total_actions_executed: int = Field(default=0, description="Successful actions")
    last_interaction: Optional[datetime] = Field(None, description="Last turn timestamp")
    created_at: datetime = Field(description="Creation timestamp")

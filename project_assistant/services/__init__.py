"""Services package."""

from .model_client import ModelClient, AnthropicModelClient
from .chat_orchestrator import ChatOrchestrator, TurnResult
from .assistant_provisioner import AssistantProvisioner
from .prompt_builder import build_assistant_prompt

__all__ = [
    "ModelClient",
    "AnthropicModelClient",
    "ChatOrchestrator",
    "TurnResult",
    "AssistantProvisioner",
    "build_assistant_prompt",
]

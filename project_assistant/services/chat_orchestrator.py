"""Chat Orchestrator - one assistant turn from user message to persisted reply."""

import uuid
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

from .model_client import ModelClient
from ..actions.base import ActionContext, ActionResult, ActionSettings
from ..actions.executor import ActionExecutor
from ..actions.parser import parse_action, strip_directives
from ..db.database_models.assistant import AssistantDO
from ..db.database_models.conversation import ConversationDO
from ..db.database_models.message import MessageDO
from ..db.repositories.assistant import AssistantRepository
from ..db.repositories.conversation import ConversationRepository
from ..db.repositories.message import MessageRepository
from ..db.repositories.project import ProjectRepository
from ..errors import AssistantNotFoundError, ConversationCreateError, ModelCallError
from ..utils.clock import utc_now
from ..utils.logger import get_app_logger
from ..utils.masking import mask_sensitive

FALLBACK_REPLY = "Lo siento, no pude procesar tu solicitud."
TITLE_MAX_LENGTH = 80


@dataclass
class TurnResult:
    """What the caller gets back from a turn."""

    conversation_id: str
    response: str
    action: Optional[Dict[str, Any]] = None


def compose_reply(text: str, result: Optional[ActionResult]) -> str:
    """
    Build the user-facing reply.

    Args:
        text: Model text with directives already stripped
        result: Outcome of the executed action, if any

    Returns:
        Reply text with the action annotation appended
    """
    if result is None:
        return text
    if result.success:
        annotation = f"✅ Acción ejecutada: {result.message}"
    else:
        annotation = f"❌ Error: {result.message}"
    return f"{text}\n\n{annotation}" if text else annotation


def conversation_title(message: str) -> str:
    """Title a new conversation after the first line of its opening message."""
    lines = message.strip().splitlines()
    first_line = lines[0].strip() if lines else ""
    return first_line[:TITLE_MAX_LENGTH]


class ChatOrchestrator:
    """
    Runs assistant turns.

    A turn resolves the conversation, asks the model, runs at most one
    requested action, composes the reply and persists the exchange. The
    model call is the only failure that aborts a turn; persistence is
    best-effort and never erases a reply.
    """

    def __init__(
        self,
        assistants: AssistantRepository,
        conversations: ConversationRepository,
        messages: MessageRepository,
        projects: ProjectRepository,
        model_client: ModelClient,
        executor: ActionExecutor,
        action_settings: Optional[ActionSettings] = None,
        http_client: Optional[httpx.AsyncClient] = None,
        default_model: str = "claude-sonnet-4-20250514",
        default_max_tokens: int = 4096,
        max_history_messages: int = 40
    ):
        """
        Initialize the orchestrator.

        Args:
            assistants: Assistant configuration store
            conversations: Conversation store
            messages: Message store
            projects: Project store, handed to actions
            model_client: Language model client
            executor: Action executor
            action_settings: Credentials and limits for actions
            http_client: Shared outbound HTTP client for actions
            default_model: Model used when the assistant has none
            default_max_tokens: Token budget used when the assistant has none
            max_history_messages: Past messages sent to the model (0 for all)
        """
        self.assistants = assistants
        self.conversations = conversations
        self.messages = messages
        self.projects = projects
        self.model_client = model_client
        self.executor = executor
        self.action_settings = action_settings or ActionSettings()
        self.http_client = http_client
        self.default_model = default_model
        self.default_max_tokens = default_max_tokens
        self.max_history_messages = max_history_messages
        self.logger = get_app_logger()

    async def handle_turn(
        self,
        project_id: str,
        message: str,
        requester_id: str,
        conversation_id: Optional[str] = None
    ) -> TurnResult:
        """
        Process one user message.

        Args:
            project_id: Project the assistant serves
            message: User message (non-empty)
            requester_id: Authenticated requester
            conversation_id: Conversation to continue, if any

        Returns:
            TurnResult

        Raises:
            AssistantNotFoundError: if the project has no assistant
            ConversationCreateError: if a new conversation could not be stored
            ModelCallError: if the model call failed
        """
        assistant = self.assistants.get_by_project(project_id)
        if not assistant:
            raise AssistantNotFoundError(project_id)

        conversation = self._resolve_conversation(assistant, requester_id, message, conversation_id)
        user_message = MessageDO(
            conversation_id=conversation.id,
            role="user",
            content=message,
            timestamp=utc_now()
        )

        history = self._history(conversation.id)
        history.append({"role": "user", "content": message})

        try:
            raw_reply = await self.model_client.complete(
                system=assistant.system_prompt,
                messages=history,
                model=assistant.model or self.default_model,
                max_tokens=assistant.max_tokens or self.default_max_tokens
            )
        except ModelCallError:
            self.logger.error(f"Model call failed for conversation {conversation.id}")
            raise

        directive = parse_action(raw_reply, self.executor.registry)
        result: Optional[ActionResult] = None
        if directive:
            context = ActionContext(
                project_id=project_id,
                requester_id=requester_id,
                vercel_project_id=assistant.vercel_project_id,
                supabase_project_ref=assistant.supabase_project_ref,
                assistant_id=assistant.id,
                settings=self.action_settings,
                http_client=self.http_client,
                projects=self.projects
            )
            result = await self.executor.execute(directive.action, context, directive.params)

        text = strip_directives(raw_reply)
        if not text and result is None:
            text = FALLBACK_REPLY
        response = compose_reply(text, result)

        outcome = None
        if directive and result:
            outcome = {
                "type": directive.action,
                "params": mask_sensitive(directive.params or {}),
                "success": result.success,
                "message": result.message,
                "data": result.data,
            }

        assistant_message = MessageDO(
            conversation_id=conversation.id,
            role="assistant",
            content=response,
            timestamp=utc_now(),
            action=outcome
        )
        self._persist(assistant, conversation, [user_message, assistant_message], directive.action if directive else None, result)

        action = None
        if outcome:
            action = {k: outcome[k] for k in ("type", "success", "message", "data")}
        return TurnResult(conversation_id=conversation.id, response=response, action=action)

    def _resolve_conversation(
        self,
        assistant: AssistantDO,
        requester_id: str,
        message: str,
        conversation_id: Optional[str]
    ) -> ConversationDO:
        if conversation_id:
            existing = self.conversations.get_for_user(conversation_id, requester_id)
            if existing and existing.project_id == assistant.project_id and not existing.is_archived:
                return existing
            self.logger.info(
                f"Conversation {conversation_id} not usable by {requester_id}, starting a new one"
            )

        conversation = ConversationDO(
            id=str(uuid.uuid4()),
            project_id=assistant.project_id,
            assistant_id=assistant.id,
            user_id=requester_id,
            title=conversation_title(message)
        )
        if not self.conversations.create(conversation):
            raise ConversationCreateError(f"Could not create conversation for project {assistant.project_id}")
        return conversation

    def _history(self, conversation_id: str) -> List[Dict[str, str]]:
        limit = self.max_history_messages if self.max_history_messages > 0 else None
        stored = self.messages.get_by_conversation(conversation_id, limit=limit)

        # The window may open on an assistant message; the model expects a user turn first
        while stored and stored[0].role != "user":
            stored.pop(0)
        return [{"role": m.role, "content": m.content} for m in stored]

    def _persist(
        self,
        assistant: AssistantDO,
        conversation: ConversationDO,
        new_messages: List[MessageDO],
        action_name: Optional[str],
        result: Optional[ActionResult]
    ) -> None:
        # Each step is independent; a failed write is logged and the turn goes on
        try:
            if self.messages.add_batch(new_messages) != len(new_messages):
                self.logger.warning(f"Messages for conversation {conversation.id} were not saved")
        except Exception as e:
            self.logger.warning(f"Messages for conversation {conversation.id} were not saved: {e}")

        requested = list(conversation.actions_requested)
        executed = list(conversation.actions_executed)
        if action_name and action_name not in requested:
            requested.append(action_name)
        if action_name and result and result.success and action_name not in executed:
            executed.append(action_name)

        try:
            if not self.conversations.record_turn(conversation.id, requested, executed):
                self.logger.warning(f"Conversation {conversation.id} bookkeeping was not updated")
        except Exception as e:
            self.logger.warning(f"Conversation {conversation.id} bookkeeping was not updated: {e}")

        succeeded = 1 if result and result.success else 0
        try:
            if not self.assistants.record_interaction(assistant.id, len(new_messages), succeeded):
                self.logger.warning(f"Usage counters for assistant {assistant.id} were not updated")
        except Exception as e:
            self.logger.warning(f"Usage counters for assistant {assistant.id} were not updated: {e}")

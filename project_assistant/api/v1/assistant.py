"""Assistant chat REST API routes - V1."""

from fastapi import APIRouter, HTTPException, Depends, Query

from ...models.chat import ChatRequest, ChatResponse
from ...models.conversation import (
    ConversationListResponse,
    ConversationResponse,
    ConversationSummary,
    MessageResponse
)
from ...db import DatabaseConnection, ConversationRepository, MessageRepository
from ...db.database_models import ConversationDO
from ...errors import AssistantNotFoundError, ConversationCreateError, ModelCallError
from ...services import ChatOrchestrator
from ...utils.logger import get_app_logger

router = APIRouter(prefix="/api/v1/projects/{project_id}/assistant", tags=["Assistant"])

# Database connection (set by main.py)
db_conn: DatabaseConnection = None
# Chat orchestrator (set by main.py)
orchestrator: ChatOrchestrator = None

logger = get_app_logger()


def get_orchestrator() -> ChatOrchestrator:
    """Dependency to get the chat orchestrator."""
    if orchestrator is None:
        raise HTTPException(status_code=500, detail="Chat orchestrator not initialized")
    return orchestrator


def get_conversation_repo() -> ConversationRepository:
    """Dependency to get conversation repository."""
    if db_conn is None:
        raise HTTPException(status_code=500, detail="Database not initialized")
    return ConversationRepository(db_conn.conn)


def get_message_repo() -> MessageRepository:
    """Dependency to get message repository."""
    if db_conn is None:
        raise HTTPException(status_code=500, detail="Database not initialized")
    return MessageRepository(db_conn.conn)


def _to_summary(conv: ConversationDO) -> ConversationSummary:
    """Convert ConversationDO to ConversationSummary."""
    return ConversationSummary(
        id=conv.id,
        title=conv.title,
        started_at=conv.started_at,
        last_message_at=conv.last_message_at,
        message_count=conv.message_count
    )


def _get_owned_conversation(
    repo: ConversationRepository,
    project_id: str,
    conversation_id: str,
    requester_id: str
) -> ConversationDO:
    conversation = repo.get_for_user(conversation_id, requester_id)
    if not conversation or conversation.project_id != project_id or conversation.is_archived:
        raise HTTPException(status_code=404, detail=f"Conversation not found: {conversation_id}")
    return conversation


@router.post("/chat", response_model=ChatResponse)
async def chat(
    project_id: str,
    request: ChatRequest,
    chat_orchestrator: ChatOrchestrator = Depends(get_orchestrator)
):
    """Send a message to the project's assistant."""
    try:
        turn = await chat_orchestrator.handle_turn(
            project_id=project_id,
            message=request.message,
            requester_id=request.requester_id,
            conversation_id=request.conversation_id
        )
    except AssistantNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConversationCreateError:
        raise HTTPException(status_code=500, detail="Failed to create conversation")
    except ModelCallError:
        raise HTTPException(status_code=502, detail="The assistant could not generate a reply")

    return ChatResponse(
        conversation_id=turn.conversation_id,
        response=turn.response,
        action=turn.action
    )


@router.get("/conversations", response_model=ConversationListResponse)
async def list_conversations(
    project_id: str,
    requester_id: str = Query(..., alias="requesterId", description="Requester ID"),
    repo: ConversationRepository = Depends(get_conversation_repo)
):
    """List the requester's conversations in a project, most recent first."""
    conversations = repo.list_by_user(project_id, requester_id)
    return ConversationListResponse(
        conversations=[_to_summary(c) for c in conversations],
        total=len(conversations)
    )


@router.get("/conversations/{conversation_id}", response_model=ConversationResponse)
async def get_conversation(
    project_id: str,
    conversation_id: str,
    requester_id: str = Query(..., alias="requesterId", description="Requester ID"),
    conv_repo: ConversationRepository = Depends(get_conversation_repo),
    msg_repo: MessageRepository = Depends(get_message_repo)
):
    """Get a conversation with all of its messages."""
    conversation = _get_owned_conversation(conv_repo, project_id, conversation_id, requester_id)
    messages = msg_repo.get_by_conversation(conversation_id)

    return ConversationResponse(
        id=conversation.id,
        project_id=conversation.project_id,
        title=conversation.title,
        started_at=conversation.started_at,
        last_message_at=conversation.last_message_at,
        message_count=conversation.message_count,
        actions_requested=conversation.actions_requested,
        actions_executed=conversation.actions_executed,
        messages=[
            MessageResponse(
                id=m.id,
                role=m.role,
                content=m.content,
                timestamp=m.timestamp,
                action=m.action
            )
            for m in messages
        ]
    )


@router.delete("/conversations/{conversation_id}", response_model=dict)
async def archive_conversation(
    project_id: str,
    conversation_id: str,
    requester_id: str = Query(..., alias="requesterId", description="Requester ID"),
    repo: ConversationRepository = Depends(get_conversation_repo)
):
    """Archive a conversation. It disappears from listings and cannot be continued."""
    _get_owned_conversation(repo, project_id, conversation_id, requester_id)

    if not repo.archive(conversation_id):
        raise HTTPException(status_code=500, detail="Failed to archive conversation")

    logger.info(f"Conversation {conversation_id} archived by {requester_id}")
    return {
        "status": "archived",
        "message": f"Conversation {conversation_id} archived successfully"
    }

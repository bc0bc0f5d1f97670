"""Project assistant provisioning REST API routes - V1."""

from fastapi import APIRouter, HTTPException, Depends
from typing import Optional

from ...models.assistant import AssistantResponse, ProvisionAssistantRequest
from ...db import DatabaseConnection, AssistantRepository, ProjectRepository
from ...db.database_models import AssistantDO
from ...errors import ProjectNotFoundError, ProjectNotReadyError
from ...services import AssistantProvisioner

router = APIRouter(prefix="/api/v1/projects", tags=["Projects"])

# Database connection (set by main.py)
db_conn: DatabaseConnection = None


def get_assistant_repo() -> AssistantRepository:
    """Dependency to get assistant repository."""
    if db_conn is None:
        raise HTTPException(status_code=500, detail="Database not initialized")
    return AssistantRepository(db_conn.conn)


def get_provisioner(assistants: AssistantRepository = Depends(get_assistant_repo)) -> AssistantProvisioner:
    """Dependency to get the assistant provisioner."""
    return AssistantProvisioner(ProjectRepository(db_conn.conn), assistants)


def _to_response(assistant: AssistantDO) -> AssistantResponse:
    """Convert AssistantDO to AssistantResponse."""
    return AssistantResponse(
        id=assistant.id,
        project_id=assistant.project_id,
        assistant_name=assistant.assistant_name,
        system_prompt=assistant.system_prompt,
        model=assistant.model,
        max_tokens=assistant.max_tokens,
        vercel_project_id=assistant.vercel_project_id,
        supabase_project_ref=assistant.supabase_project_ref,
        total_messages=assistant.total_messages,
        total_actions_executed=assistant.total_actions_executed,
        last_interaction=assistant.last_interaction,
        created_at=assistant.created_at
    )


@router.post("/{project_id}/assistant", response_model=AssistantResponse, status_code=201)
async def provision_assistant(
    project_id: str,
    request: Optional[ProvisionAssistantRequest] = None,
    provisioner: AssistantProvisioner = Depends(get_provisioner)
):
    """Create the assistant for a finished project (returns the existing one if present)."""
    request = request or ProvisionAssistantRequest()
    try:
        assistant = provisioner.provision(
            project_id,
            vercel_project_id=request.vercel_project_id,
            supabase_project_ref=request.supabase_project_ref
        )
    except ProjectNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ProjectNotReadyError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except RuntimeError as e:
        raise HTTPException(status_code=500, detail=str(e))

    return _to_response(assistant)


@router.get("/{project_id}/assistant", response_model=AssistantResponse)
async def get_assistant(
    project_id: str,
    repo: AssistantRepository = Depends(get_assistant_repo)
):
    """Get the assistant configuration of a project."""
    assistant = repo.get_by_project(project_id)

    if not assistant:
        raise HTTPException(status_code=404, detail=f"No assistant found for project: {project_id}")

    return _to_response(assistant)

"""Assistant provisioning for finished projects."""

import uuid
from typing import Optional

from .prompt_builder import build_assistant_prompt
from ..db.database_models.assistant import AssistantDO
from ..db.repositories.assistant import AssistantRepository
from ..db.repositories.project import ProjectRepository
from ..errors import ProjectNotFoundError, ProjectNotReadyError
from ..utils.logger import get_app_logger

READY_STATUSES = ("ready", "completed", "deployed")
DEFAULT_ASSISTANT_MODEL = "claude-sonnet-4-20250514"
DEFAULT_ASSISTANT_MAX_TOKENS = 4096


class AssistantProvisioner:
    """Creates the assistant configuration bound to a project."""

    def __init__(self, projects: ProjectRepository, assistants: AssistantRepository):
        self.projects = projects
        self.assistants = assistants
        self.logger = get_app_logger()

    def provision(
        self,
        project_id: str,
        vercel_project_id: Optional[str] = None,
        supabase_project_ref: Optional[str] = None
    ) -> AssistantDO:
        """
        Create the assistant for a project, or return the existing one.

        Args:
            project_id: Project ID
            vercel_project_id: Deployment platform project reference
            supabase_project_ref: Identity provider project reference

        Returns:
            AssistantDO instance

        Raises:
            ProjectNotFoundError: if the project does not exist
            ProjectNotReadyError: if the project is not in a ready state
            RuntimeError: if the assistant could not be stored
        """
        existing = self.assistants.get_by_project(project_id)
        if existing:
            self.logger.info(f"Assistant already exists for project {project_id}")
            return existing

        project = self.projects.get(project_id)
        if not project:
            raise ProjectNotFoundError(project_id)
        if project.status not in READY_STATUSES:
            raise ProjectNotReadyError(project_id, project.status)

        assistant = AssistantDO(
            id=str(uuid.uuid4()),
            project_id=project_id,
            assistant_name=f"Asistente de {project.name}",
            system_prompt=build_assistant_prompt(project),
            model=DEFAULT_ASSISTANT_MODEL,
            max_tokens=DEFAULT_ASSISTANT_MAX_TOKENS,
            vercel_project_id=vercel_project_id,
            supabase_project_ref=supabase_project_ref
        )
        if not self.assistants.create(assistant):
            # Lost a race with a concurrent provision; the unique project_id wins
            winner = self.assistants.get_by_project(project_id)
            if winner:
                return winner
            raise RuntimeError(f"Failed to create assistant for project {project_id}")

        self.logger.info(f"Provisioned assistant {assistant.id} for project {project_id}")
        return assistant

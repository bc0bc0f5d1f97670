"""Domain exceptions."""

from typing import Optional


class IntegrationError(Exception):
    """An external API answered with a non-2xx status."""

    def __init__(self, service: str, status_code: int, detail: str = ""):
        self.service = service
        self.status_code = status_code
        self.detail = detail
        if detail:
            super().__init__(f"{service} API error {status_code}: {detail}")
        else:
            super().__init__(f"{service} API error {status_code}")


class ModelCallError(Exception):
    """The language model call failed; the turn cannot produce a reply."""


class AssistantNotFoundError(Exception):
    """No assistant configuration exists for the project."""

    def __init__(self, project_id: str):
        self.project_id = project_id
        super().__init__(f"No assistant found for project: {project_id}")


class ConversationCreateError(Exception):
    """A new conversation could not be stored."""


class ProjectNotFoundError(Exception):
    """The project does not exist."""

    def __init__(self, project_id: str):
        self.project_id = project_id
        super().__init__(f"Project not found: {project_id}")


class ProjectNotReadyError(Exception):
    """The project has not reached a state where an assistant can be created."""

    def __init__(self, project_id: str, status: Optional[str] = None):
        self.project_id = project_id
        self.status = status
        super().__init__(f"Project {project_id} is not ready (status: {status})")

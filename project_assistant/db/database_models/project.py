"""Project database model."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from ...utils.clock import utc_now


@dataclass
class ProjectDO:
    """Project data object - maps to projects table."""

    id: str
    name: str
    project_type: str = "custom"
    status: str = "in_progress"
    description: Optional[str] = None
    deployment_url: Optional[str] = None
    repository_url: Optional[str] = None
    tech_stack: List[str] = field(default_factory=list)
    features: List[Dict[str, str]] = field(default_factory=list)
    created_at: datetime = field(default_factory=utc_now)

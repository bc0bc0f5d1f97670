"""Project repository for database operations."""

from typing import Optional
from .base import BaseRepository
from ..database_models.project import ProjectDO

_COLUMNS = "id, name, project_type, status, description, deployment_url, repository_url, tech_stack, features, created_at"


class ProjectRepository(BaseRepository):
    """Repository for Project CRUD operations."""

    def _row_to_do(self, row) -> ProjectDO:
        return ProjectDO(
            id=row[0],
            name=row[1],
            project_type=row[2],
            status=row[3],
            description=row[4],
            deployment_url=row[5],
            repository_url=row[6],
            tech_stack=self._load_json(row[7], []),
            features=self._load_json(row[8], []),
            created_at=row[9]
        )

    def create(self, project: ProjectDO) -> bool:
        """
        Create a new project record.

        Args:
            project: ProjectDO instance

        Returns:
            True if successful, False otherwise
        """
        try:
            self.conn.execute(f"""
                INSERT INTO projects ({_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """, [
                project.id,
                project.name,
                project.project_type,
                project.status,
                project.description,
                project.deployment_url,
                project.repository_url,
                self._dump_json(project.tech_stack),
                self._dump_json(project.features),
                project.created_at
            ])
            self.conn.commit()
            self.logger.info(f"Created project record: {project.id}")
            return True
        except Exception as e:
            self.logger.error(f"Failed to create project: {e}")
            return False

    def lookup(self, project_id: str) -> Optional[ProjectDO]:
        """
        Get project by ID, letting database errors propagate.

        Used where "store unreachable" must be told apart from "not found".
        """
        result = self.conn.execute(
            f"SELECT {_COLUMNS} FROM projects WHERE id = ?", [project_id]
        ).fetchone()
        return self._row_to_do(result) if result else None

    def get(self, project_id: str) -> Optional[ProjectDO]:
        """
        Get project by ID.

        Args:
            project_id: Project ID

        Returns:
            ProjectDO instance or None
        """
        try:
            return self.lookup(project_id)
        except Exception as e:
            self.logger.error(f"Failed to get project {project_id}: {e}")
            return None

    def update_status(self, project_id: str, status: str) -> bool:
        """Set the project status."""
        try:
            self.conn.execute("UPDATE projects SET status = ? WHERE id = ?", [status, project_id])
            self.conn.commit()
            return True
        except Exception as e:
            self.logger.error(f"Failed to update project status: {e}")
            return False

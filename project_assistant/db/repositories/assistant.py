"""Assistant configuration repository."""

from typing import Optional
from .base import BaseRepository
from ..database_models.assistant import AssistantDO
from ...utils.clock import utc_now

_COLUMNS = (
    "id, project_id, assistant_name, system_prompt, model, max_tokens, "
    "vercel_project_id, supabase_project_ref, total_messages, "
    "total_actions_executed, last_interaction, created_at"
)


class AssistantRepository(BaseRepository):
    """Repository for project assistant configurations."""

    def _row_to_do(self, row) -> AssistantDO:
        return AssistantDO(
            id=row[0],
            project_id=row[1],
            assistant_name=row[2],
            system_prompt=row[3],
            model=row[4],
            max_tokens=row[5],
            vercel_project_id=row[6],
            supabase_project_ref=row[7],
            total_messages=row[8] or 0,
            total_actions_executed=row[9] or 0,
            last_interaction=row[10],
            created_at=row[11]
        )

    def create(self, assistant: AssistantDO) -> bool:
        """
        Create a new assistant configuration.

        Args:
            assistant: AssistantDO instance

        Returns:
            True if successful, False otherwise
        """
        try:
            self.conn.execute(f"""
                INSERT INTO project_assistants ({_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """, [
                assistant.id,
                assistant.project_id,
                assistant.assistant_name,
                assistant.system_prompt,
                assistant.model,
                assistant.max_tokens,
                assistant.vercel_project_id,
                assistant.supabase_project_ref,
                assistant.total_messages,
                assistant.total_actions_executed,
                assistant.last_interaction,
                assistant.created_at
            ])
            self.conn.commit()
            self.logger.info(f"Created assistant {assistant.id} for project {assistant.project_id}")
            return True
        except Exception as e:
            self.logger.error(f"Failed to create assistant: {e}")
            return False

    def get_by_project(self, project_id: str) -> Optional[AssistantDO]:
        """
        Get the assistant bound to a project.

        Args:
            project_id: Project ID

        Returns:
            AssistantDO instance or None
        """
        try:
            result = self.conn.execute(
                f"SELECT {_COLUMNS} FROM project_assistants WHERE project_id = ?",
                [project_id]
            ).fetchone()
            return self._row_to_do(result) if result else None
        except Exception as e:
            self.logger.error(f"Failed to get assistant for project {project_id}: {e}")
            return None

    def record_interaction(self, assistant_id: str, messages: int, actions_executed: int) -> bool:
        """
        Bump usage counters and the last-interaction timestamp.

        Counters are incremented in SQL so concurrent turns do not overwrite
        each other.

        Args:
            assistant_id: Assistant ID
            messages: Number of messages to add
            actions_executed: Number of successful actions to add

        Returns:
            True if successful, False otherwise
        """
        try:
            self.conn.execute("""
                UPDATE project_assistants
                SET total_messages = total_messages + ?,
                    total_actions_executed = total_actions_executed + ?,
                    last_interaction = ?
                WHERE id = ?
            """, [messages, actions_executed, utc_now(), assistant_id])
            self.conn.commit()
            return True
        except Exception as e:
            self.logger.error(f"Failed to update assistant stats: {e}")
            return False

"""Action audit log repository."""

from typing import List
from .base import BaseRepository
from ..database_models.action_log import ActionLogDO

_COLUMNS = (
    "id, assistant_id, project_id, user_id, action_type, action_params, success, "
    "result_data, error_message, started_at, completed_at, duration_ms"
)


class ActionLogRepository(BaseRepository):
    """
    Append-only audit trail of action execution attempts.

    Unlike the other repositories, ``add`` lets failures propagate: the
    caller decides how to escalate a lost audit record.
    """

    def _row_to_do(self, row) -> ActionLogDO:
        return ActionLogDO(
            id=row[0],
            assistant_id=row[1],
            project_id=row[2],
            user_id=row[3],
            action_type=row[4],
            action_params=self._load_json(row[5]),
            success=bool(row[6]),
            result_data=self._load_json(row[7]),
            error_message=row[8],
            started_at=row[9],
            completed_at=row[10],
            duration_ms=row[11]
        )

    def add(self, record: ActionLogDO) -> int:
        """
        Insert one audit record.

        Args:
            record: ActionLogDO instance

        Returns:
            The new record ID

        Raises:
            duckdb.Error: if the record could not be written
        """
        result = self.conn.execute(f"""
            INSERT INTO assistant_action_logs ({_COLUMNS})
            VALUES (nextval('assistant_action_logs_id_seq'), ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            RETURNING id
        """, [
            record.assistant_id,
            record.project_id,
            record.user_id,
            record.action_type,
            self._dump_json(record.action_params) if record.action_params is not None else None,
            record.success,
            self._dump_json(record.result_data) if record.result_data is not None else None,
            record.error_message,
            record.started_at,
            record.completed_at,
            record.duration_ms
        ]).fetchone()
        self.conn.commit()
        self.logger.debug(f"Audited action {record.action_type} for user {record.user_id} (id={result[0]})")
        return result[0]

    def list_by_project(self, project_id: str, limit: int = 100) -> List[ActionLogDO]:
        """
        List recent audit records for a project.

        Args:
            project_id: Project ID
            limit: Maximum number of records

        Returns:
            List of ActionLogDO instances, newest first
        """
        try:
            results = self.conn.execute(f"""
                SELECT {_COLUMNS}
                FROM assistant_action_logs
                WHERE project_id = ?
                ORDER BY id DESC
                LIMIT ?
            """, [project_id, limit]).fetchall()
            return [self._row_to_do(row) for row in results]
        except Exception as e:
            self.logger.error(f"Failed to list action logs: {e}")
            return []

"""Conversation repository for database operations."""

from typing import Optional, List
from .base import BaseRepository
from ..database_models.conversation import ConversationDO
from ...utils.clock import utc_now

_COLUMNS = (
    "id, project_id, assistant_id, user_id, title, actions_requested, "
    "actions_executed, message_count, started_at, last_message_at, is_archived"
)


class ConversationRepository(BaseRepository):
    """Repository for Conversation CRUD operations."""

    def _row_to_do(self, row) -> ConversationDO:
        return ConversationDO(
            id=row[0],
            project_id=row[1],
            assistant_id=row[2],
            user_id=row[3],
            title=row[4],
            actions_requested=self._load_json(row[5], []),
            actions_executed=self._load_json(row[6], []),
            message_count=row[7] or 0,
            started_at=row[8],
            last_message_at=row[9],
            is_archived=bool(row[10])
        )

    def create(self, conversation: ConversationDO) -> bool:
        """
        Create a new conversation record.

        Args:
            conversation: ConversationDO instance

        Returns:
            True if successful, False otherwise
        """
        try:
            self.conn.execute(f"""
                INSERT INTO assistant_conversations ({_COLUMNS})
                VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            """, [
                conversation.id,
                conversation.project_id,
                conversation.assistant_id,
                conversation.user_id,
                conversation.title,
                self._dump_json(conversation.actions_requested),
                self._dump_json(conversation.actions_executed),
                conversation.message_count,
                conversation.started_at,
                conversation.last_message_at,
                conversation.is_archived
            ])
            self.conn.commit()
            self.logger.info(f"Created conversation record: {conversation.id}")
            return True
        except Exception as e:
            self.logger.error(f"Failed to create conversation: {e}")
            return False

    def get(self, conversation_id: str) -> Optional[ConversationDO]:
        """
        Get conversation by ID.

        Args:
            conversation_id: Conversation ID

        Returns:
            ConversationDO instance or None
        """
        try:
            result = self.conn.execute(
                f"SELECT {_COLUMNS} FROM assistant_conversations WHERE id = ?",
                [conversation_id]
            ).fetchone()
            return self._row_to_do(result) if result else None
        except Exception as e:
            self.logger.error(f"Failed to get conversation {conversation_id}: {e}")
            return None

    def get_for_user(self, conversation_id: str, user_id: str) -> Optional[ConversationDO]:
        """
        Get a conversation only if it belongs to the given requester.

        Args:
            conversation_id: Conversation ID
            user_id: Requester ID

        Returns:
            ConversationDO instance or None
        """
        try:
            result = self.conn.execute(
                f"SELECT {_COLUMNS} FROM assistant_conversations WHERE id = ? AND user_id = ?",
                [conversation_id, user_id]
            ).fetchone()
            return self._row_to_do(result) if result else None
        except Exception as e:
            self.logger.error(f"Failed to get conversation {conversation_id}: {e}")
            return None

    def list_by_user(self, project_id: str, user_id: str) -> List[ConversationDO]:
        """
        List non-archived conversations of a requester within a project.

        Args:
            project_id: Project ID
            user_id: Requester ID

        Returns:
            List of ConversationDO instances, most recent first
        """
        try:
            results = self.conn.execute(f"""
                SELECT {_COLUMNS}
                FROM assistant_conversations
                WHERE project_id = ? AND user_id = ? AND is_archived = FALSE
                ORDER BY COALESCE(last_message_at, started_at) DESC
            """, [project_id, user_id]).fetchall()

            return [self._row_to_do(row) for row in results]
        except Exception as e:
            self.logger.error(f"Failed to list conversations: {e}")
            return []

    def record_turn(
        self,
        conversation_id: str,
        actions_requested: List[str],
        actions_executed: List[str]
    ) -> bool:
        """
        Refresh turn bookkeeping after messages were appended.

        The message count is recomputed from the message rows rather than
        incremented, so it always matches what is stored.

        Args:
            conversation_id: Conversation ID
            actions_requested: Distinct action names ever requested
            actions_executed: Distinct action names that ever succeeded

        Returns:
            True if successful, False otherwise
        """
        try:
            self.conn.execute("""
                UPDATE assistant_conversations
                SET actions_requested = ?,
                    actions_executed = ?,
                    message_count = (
                        SELECT COUNT(*) FROM assistant_messages WHERE conversation_id = ?
                    ),
                    last_message_at = ?
                WHERE id = ?
            """, [
                self._dump_json(actions_requested),
                self._dump_json(actions_executed),
                conversation_id,
                utc_now(),
                conversation_id
            ])
            self.conn.commit()
            return True
        except Exception as e:
            self.logger.error(f"Failed to update conversation {conversation_id}: {e}")
            return False

    def archive(self, conversation_id: str) -> bool:
        """
        Archive a conversation. Records are never physically deleted.

        Args:
            conversation_id: Conversation ID

        Returns:
            True if successful, False otherwise
        """
        try:
            self.conn.execute(
                "UPDATE assistant_conversations SET is_archived = TRUE WHERE id = ?",
                [conversation_id]
            )
            self.conn.commit()
            self.logger.info(f"Archived conversation: {conversation_id}")
            return True
        except Exception as e:
            self.logger.error(f"Failed to archive conversation: {e}")
            return False

"""Message repository for database operations."""

from typing import Optional, List
from .base import BaseRepository
from ..database_models.message import MessageDO


class MessageRepository(BaseRepository):
    """Append-only storage for conversation messages."""

    def _row_to_do(self, row) -> MessageDO:
        return MessageDO(
            id=row[0],
            conversation_id=row[1],
            role=row[2],
            content=row[3],
            action=self._load_json(row[4]),
            timestamp=row[5]
        )

    def add(self, message: MessageDO) -> Optional[int]:
        """
        Append a message.

        Args:
            message: MessageDO instance

        Returns:
            Message ID if successful, None otherwise
        """
        try:
            result = self.conn.execute("""
                INSERT INTO assistant_messages (id, conversation_id, role, content, action, timestamp)
                VALUES (nextval('assistant_messages_id_seq'), ?, ?, ?, ?, ?)
                RETURNING id
            """, [
                message.conversation_id,
                message.role,
                message.content,
                self._dump_json(message.action) if message.action is not None else None,
                message.timestamp
            ]).fetchone()

            message_id = result[0] if result else None
            if message_id:
                self.conn.commit()
                self.logger.debug(f"Added message {message_id} to conversation {message.conversation_id}")
            return message_id
        except Exception as e:
            self.logger.error(f"Failed to add message: {e}")
            return None

    def add_batch(self, messages: List[MessageDO]) -> int:
        """
        Append several messages in one transaction, in order.

        Args:
            messages: List of MessageDO instances

        Returns:
            Number of messages added (all or nothing)
        """
        if not messages:
            return 0
        try:
            self.conn.execute("BEGIN TRANSACTION")
            for message in messages:
                self.conn.execute("""
                    INSERT INTO assistant_messages (id, conversation_id, role, content, action, timestamp)
                    VALUES (nextval('assistant_messages_id_seq'), ?, ?, ?, ?, ?)
                """, [
                    message.conversation_id,
                    message.role,
                    message.content,
                    self._dump_json(message.action) if message.action is not None else None,
                    message.timestamp
                ])
            self.conn.execute("COMMIT")
            self.logger.debug(f"Added {len(messages)} messages to conversation {messages[0].conversation_id}")
            return len(messages)
        except Exception as e:
            self.logger.error(f"Failed to add messages: {e}")
            try:
                self.conn.execute("ROLLBACK")
            except Exception as rollback_error:
                self.logger.debug(f"Rollback after failed insert also failed: {rollback_error}")
            return 0

    def get_by_conversation(self, conversation_id: str, limit: Optional[int] = None) -> List[MessageDO]:
        """
        Get messages for a conversation.

        Args:
            conversation_id: Conversation ID
            limit: Keep only the most recent N messages (None for all)

        Returns:
            List of MessageDO instances (chronological order)
        """
        try:
            if limit is None:
                results = self.conn.execute("""
                    SELECT id, conversation_id, role, content, action, timestamp
                    FROM assistant_messages
                    WHERE conversation_id = ?
                    ORDER BY id ASC
                """, [conversation_id]).fetchall()
                return [self._row_to_do(row) for row in results]

            results = self.conn.execute("""
                SELECT id, conversation_id, role, content, action, timestamp
                FROM assistant_messages
                WHERE conversation_id = ?
                ORDER BY id DESC
                LIMIT ?
            """, [conversation_id, limit]).fetchall()

            messages = [self._row_to_do(row) for row in results]
            # Reverse to get chronological order
            messages.reverse()
            return messages
        except Exception as e:
            self.logger.error(f"Failed to get conversation messages: {e}")
            return []

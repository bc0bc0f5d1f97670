"""Database connection and schema management."""

import duckdb
from typing import Optional
from pathlib import Path
from ..utils.logger import get_app_logger


class DatabaseConnection:
    """DuckDB connection manager."""

    def __init__(self, db_path: str = "./data/project_assistant.db"):
        """
        Initialize database connection.

        Args:
            db_path: Path to DuckDB database file, or ":memory:"
        """
        self.db_path = db_path
        self.logger = get_app_logger()
        self.conn: Optional[duckdb.DuckDBPyConnection] = None

        if db_path != ":memory:":
            Path(db_path).parent.mkdir(parents=True, exist_ok=True)

        self._connect()
        self._init_schema()

    def _connect(self):
        """Connect to DuckDB database."""
        try:
            self.conn = duckdb.connect(self.db_path)
            self.logger.info(f"Connected to DuckDB at {self.db_path}")
        except Exception as e:
            self.logger.error(f"Failed to connect to DuckDB: {e}")
            raise

    def _init_schema(self):
        """Initialize database schema."""
        try:
            self.conn.execute("""
                CREATE TABLE IF NOT EXISTS projects (
                    id VARCHAR PRIMARY KEY,
                    name VARCHAR NOT NULL,
                    project_type VARCHAR NOT NULL,
                    status VARCHAR NOT NULL,
                    description VARCHAR,
                    deployment_url VARCHAR,
                    repository_url VARCHAR,
                    tech_stack JSON,
                    features JSON,
                    created_at TIMESTAMP NOT NULL
                )
            """)

            # One assistant per project
            self.conn.execute("""
                CREATE TABLE IF NOT EXISTS project_assistants (
                    id VARCHAR PRIMARY KEY,
                    project_id VARCHAR NOT NULL UNIQUE,
                    assistant_name VARCHAR NOT NULL,
                    system_prompt VARCHAR NOT NULL,
                    model VARCHAR NOT NULL,
                    max_tokens INTEGER NOT NULL,
                    vercel_project_id VARCHAR,
                    supabase_project_ref VARCHAR,
                    total_messages INTEGER DEFAULT 0,
                    total_actions_executed INTEGER DEFAULT 0,
                    last_interaction TIMESTAMP,
                    created_at TIMESTAMP NOT NULL
                )
            """)

            self.conn.execute("""
                CREATE TABLE IF NOT EXISTS assistant_conversations (
                    id VARCHAR PRIMARY KEY,
                    project_id VARCHAR NOT NULL,
                    assistant_id VARCHAR NOT NULL,
                    user_id VARCHAR NOT NULL,
                    title VARCHAR,
                    actions_requested JSON,
                    actions_executed JSON,
                    message_count INTEGER DEFAULT 0,
                    started_at TIMESTAMP NOT NULL,
                    last_message_at TIMESTAMP,
                    is_archived BOOLEAN DEFAULT FALSE
                )
            """)

            # Append-only: rows are inserted, never updated
            self.conn.execute("""
                CREATE TABLE IF NOT EXISTS assistant_messages (
                    id BIGINT PRIMARY KEY,
                    conversation_id VARCHAR NOT NULL,
                    role VARCHAR NOT NULL,
                    content VARCHAR NOT NULL,
                    action JSON,
                    timestamp TIMESTAMP NOT NULL
                )
            """)

            # Audit trail: one row per action execution attempt
            self.conn.execute("""
                CREATE TABLE IF NOT EXISTS assistant_action_logs (
                    id BIGINT PRIMARY KEY,
                    assistant_id VARCHAR,
                    project_id VARCHAR NOT NULL,
                    user_id VARCHAR NOT NULL,
                    action_type VARCHAR NOT NULL,
                    action_params JSON,
                    success BOOLEAN NOT NULL,
                    result_data JSON,
                    error_message VARCHAR,
                    started_at TIMESTAMP NOT NULL,
                    completed_at TIMESTAMP NOT NULL,
                    duration_ms INTEGER NOT NULL
                )
            """)

            self.conn.execute("CREATE INDEX IF NOT EXISTS idx_conversations_project_user ON assistant_conversations(project_id, user_id)")
            self.conn.execute("CREATE INDEX IF NOT EXISTS idx_messages_conversation ON assistant_messages(conversation_id)")
            self.conn.execute("CREATE INDEX IF NOT EXISTS idx_action_logs_project ON assistant_action_logs(project_id)")
            self.conn.execute("CREATE INDEX IF NOT EXISTS idx_action_logs_user ON assistant_action_logs(user_id)")

            self.conn.execute("CREATE SEQUENCE IF NOT EXISTS assistant_messages_id_seq START 1")
            self.conn.execute("CREATE SEQUENCE IF NOT EXISTS assistant_action_logs_id_seq START 1")

            self.logger.info("Database schema initialized successfully")

        except Exception as e:
            self.logger.error(f"Failed to initialize database schema: {e}")
            raise

    def close(self):
        """Close database connection."""
        if self.conn:
            self.conn.close()
            self.logger.info("Database connection closed")

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()

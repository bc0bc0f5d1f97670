"""Base repository class."""

import json
from typing import Any

import duckdb
from ...utils.logger import get_app_logger


class BaseRepository:
    """Base class for all repositories."""

    def __init__(self, conn: duckdb.DuckDBPyConnection):
        """
        Initialize repository with database connection.

        Args:
            conn: DuckDB connection instance
        """
        self.conn = conn
        self.logger = get_app_logger()

    @staticmethod
    def _dump_json(value: Any) -> str:
        """Serialize a JSON column value."""
        return json.dumps(value, ensure_ascii=False, default=str)

    @staticmethod
    def _load_json(value: Any, default: Any = None) -> Any:
        """Deserialize a JSON column value (DuckDB returns JSON as text)."""
        if value is None:
            return default
        if isinstance(value, str):
            return json.loads(value)
        return value

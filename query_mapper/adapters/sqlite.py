"""SQLite adapter using stdlib sqlite3."""

from __future__ import annotations

import sqlite3
from typing import Any

from query_mapper.core.connection import ConnectionConfig
from query_mapper.core.exceptions import ExecutionError
from query_mapper.core.params import Parameter


class SqliteAdapter:
    """SQLite adapter using stdlib sqlite3."""

    @property
    def paramstyle(self) -> str:
        return "named"

    def connect(self, config: ConnectionConfig) -> sqlite3.Connection:
        """Open a SQLite database file (or ``:memory:``)."""
        kwargs: dict[str, Any] = dict(config.extra)
        if config.timeout is not None:
            kwargs["timeout"] = config.timeout
        uri = config.database.startswith("file:")
        return sqlite3.connect(config.database, uri=uri, **kwargs)

    def close(self, connection: sqlite3.Connection) -> None:
        connection.close()

    def execute(
        self,
        connection: sqlite3.Connection,
        sql: str,
        params: dict[str, Any] | None = None,
    ) -> sqlite3.Cursor:
        """Execute SQL and return a cursor."""
        cursor = connection.cursor()
        try:
            cursor.execute(sql, params or {})
        except Exception:
            cursor.close()
            raise
        return cursor

    def call_procedure(
        self,
        connection: sqlite3.Connection,
        name: str,
        parameters: list[Parameter],
    ) -> sqlite3.Cursor:
        raise ExecutionError(f"SQLite does not support stored procedures: '{name}'")

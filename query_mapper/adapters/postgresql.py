"""PostgreSQL adapter using psycopg (v3+)."""

from __future__ import annotations

from typing import Any

from query_mapper.core.connection import ConnectionConfig
from query_mapper.core.exceptions import ParameterBindingError
from query_mapper.core.params import Parameter, parameter_values


def _build_conninfo(config: ConnectionConfig) -> str:
    """Build a libpq connection string from config fields."""
    parts: list[str] = []
    if config.host is not None:
        parts.append(f"host={config.host}")
    if config.port is not None:
        parts.append(f"port={config.port}")
    if config.user is not None:
        parts.append(f"user={config.user}")
    if config.password is not None:
        parts.append(f"password={config.password}")
    if config.timeout is not None:
        parts.append(f"connect_timeout={int(config.timeout)}")
    parts.append(f"dbname={config.database}")
    return " ".join(parts)


def _procedure_sql(name: str, parameters: list[Parameter]) -> str:
    """Build ``SELECT * FROM name(arg => %(arg)s, ...)`` for a set-returning function."""
    args = ", ".join(f"{p.name} => %({p.name})s" for p in parameters)
    return f"SELECT * FROM {name}({args})"


class PostgresqlAdapter:
    """PostgreSQL adapter using psycopg (v3+).

    Stored procedures are called as set-returning functions with named
    arguments; output parameters come back as result columns instead.
    """

    @property
    def paramstyle(self) -> str:
        return "pyformat"

    def connect(self, config: ConnectionConfig) -> Any:
        import psycopg

        return psycopg.connect(_build_conninfo(config), **config.extra)

    def close(self, connection: Any) -> None:
        connection.close()

    def execute(
        self,
        connection: Any,
        sql: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        cursor = connection.cursor()
        try:
            cursor.execute(sql, params or {})
        except Exception:
            cursor.close()
            raise
        return cursor

    def call_procedure(
        self,
        connection: Any,
        name: str,
        parameters: list[Parameter],
    ) -> Any:
        for p in parameters:
            if not p.direction.is_input:
                raise ParameterBindingError(
                    p.name, "PostgreSQL functions return output values as result columns"
                )
        return self.execute(
            connection, _procedure_sql(name, parameters), parameter_values(parameters)
        )

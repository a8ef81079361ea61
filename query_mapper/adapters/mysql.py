"""MySQL adapter using mysql-connector-python."""

from __future__ import annotations

from typing import Any

from query_mapper.adapters.results import ProcedureResult
from query_mapper.core.connection import ConnectionConfig
from query_mapper.core.enums import ParameterDirection
from query_mapper.core.exceptions import ParameterBindingError
from query_mapper.core.params import Parameter


class MysqlAdapter:
    """MySQL adapter using mysql-connector-python.

    Procedure arguments are passed positionally in binding order; output and
    input-output values are written back to their Parameters.
    """

    @property
    def paramstyle(self) -> str:
        return "pyformat"

    def connect(self, config: ConnectionConfig) -> Any:
        import mysql.connector

        kwargs: dict[str, Any] = dict(config.extra)
        if config.timeout is not None:
            kwargs["connection_timeout"] = int(config.timeout)
        return mysql.connector.connect(
            host=config.host,
            port=config.port,
            user=config.user,
            password=config.password,
            database=config.database,
            **kwargs,
        )

    def close(self, connection: Any) -> None:
        connection.close()

    def execute(
        self,
        connection: Any,
        sql: str,
        params: dict[str, Any] | None = None,
    ) -> Any:
        """Execute SQL and return a buffered cursor."""
        cursor = connection.cursor(buffered=True)
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
            if p.direction is ParameterDirection.RETURN_VALUE:
                raise ParameterBindingError(p.name, "MySQL procedures have no return value")

        cursor = connection.cursor(buffered=True)
        try:
            returned = cursor.callproc(name, tuple(p.value for p in parameters))
            for p, value in zip(parameters, returned, strict=True):
                if p.direction.is_output:
                    p.value = value
            first = next(iter(cursor.stored_results()), None)
        except Exception:
            cursor.close()
            raise
        return ProcedureResult(cursor, first)

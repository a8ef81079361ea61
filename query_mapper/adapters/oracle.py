"""Oracle adapter using oracledb."""

from __future__ import annotations

from typing import Any

from query_mapper.adapters.results import ProcedureResult
from query_mapper.core.connection import ConnectionConfig
from query_mapper.core.enums import DbType, ParameterDirection
from query_mapper.core.exceptions import ParameterBindingError
from query_mapper.core.params import Parameter


def _build_dsn(config: ConnectionConfig) -> str:
    """Build an Oracle DSN string from config fields (host:port/database)."""
    return f"{config.host}:{config.port}/{config.database}"


def _db_type(oracledb: Any, db_type: DbType) -> Any:
    """Map a parameter type tag to an oracledb database type."""
    return {
        DbType.STRING: oracledb.DB_TYPE_VARCHAR,
        DbType.INT32: oracledb.DB_TYPE_NUMBER,
        DbType.INT64: oracledb.DB_TYPE_NUMBER,
        DbType.DECIMAL: oracledb.DB_TYPE_NUMBER,
        DbType.DOUBLE: oracledb.DB_TYPE_BINARY_DOUBLE,
        DbType.BOOLEAN: oracledb.DB_TYPE_BOOLEAN,
        DbType.DATE: oracledb.DB_TYPE_DATE,
        DbType.DATETIME: oracledb.DB_TYPE_TIMESTAMP,
        DbType.BINARY: oracledb.DB_TYPE_RAW,
    }[db_type]


class OracleAdapter:
    """Oracle adapter using oracledb.

    Output parameters are bound as cursor variables typed by ``db_type`` and
    ``size``. A RETURN_VALUE parameter turns the call into a function call.
    Procedures return their first implicit result set.
    """

    @property
    def paramstyle(self) -> str:
        return "named"

    def connect(self, config: ConnectionConfig) -> Any:
        import oracledb

        kwargs: dict[str, Any] = dict(config.extra)
        if config.timeout is not None:
            kwargs["tcp_connect_timeout"] = config.timeout
        return oracledb.connect(
            user=config.user, password=config.password, dsn=_build_dsn(config), **kwargs
        )

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
        import oracledb

        returns = [p for p in parameters if p.direction is ParameterDirection.RETURN_VALUE]
        if len(returns) > 1:
            raise ParameterBindingError(returns[1].name, "only one return value is allowed")

        cursor = connection.cursor()
        try:
            arguments: dict[str, Any] = {}
            variables: dict[str, Any] = {}
            for p in parameters:
                if p.direction is ParameterDirection.RETURN_VALUE:
                    continue
                if p.direction.is_output:
                    var = cursor.var(_db_type(oracledb, p.db_type), size=p.size or 0)
                    if p.direction.is_input:
                        var.setvalue(0, p.value)
                    variables[p.name] = var
                    arguments[p.name] = var
                else:
                    arguments[p.name] = p.value

            if returns:
                returns[0].value = cursor.callfunc(
                    name, _db_type(oracledb, returns[0].db_type), keyword_parameters=arguments
                )
            else:
                cursor.callproc(name, keyword_parameters=arguments)

            for p in parameters:
                if p.name in variables:
                    p.value = variables[p.name].getvalue()
            results = cursor.getimplicitresults()
        except Exception:
            cursor.close()
            raise
        return ProcedureResult(cursor, results[0] if results else None)

"""Executable commands.

A Command holds one statement, its kind and its ordered parameters, and
executes them through the connection's adapter.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import TYPE_CHECKING, Any

from query_mapper.core.enums import CommandType, DbType, ParameterDirection
from query_mapper.core.exceptions import (
    ConnectionError,  # noqa: A004
    ExecutionError,
    InvalidStateError,
    ParameterBindingError,
    QueryMapperError,
)
from query_mapper.core.params import Parameter, normalize_params, parameter_values
from query_mapper.core.reader import DataReader

if TYPE_CHECKING:
    from query_mapper.core.connection import Connection

logger = logging.getLogger(__name__)


class Command:
    """A statement bound to a connection."""

    def __init__(
        self,
        connection: Connection,
        sql: str,
        command_type: CommandType = CommandType.TEXT,
    ) -> None:
        self._connection = connection
        self.sql = sql
        self.command_type = command_type
        self.parameters: list[Parameter] = []
        self._readers: list[DataReader] = []
        self._closed = False

    @property
    def connection(self) -> Connection:
        return self._connection

    @property
    def closed(self) -> bool:
        return self._closed

    def add_parameter(
        self,
        parameter: Parameter | str,
        value: Any = None,
        direction: ParameterDirection = ParameterDirection.INPUT,
        db_type: DbType = DbType.STRING,
        size: int | None = None,
    ) -> Parameter:
        """Append a parameter, given either as a Parameter or by its fields."""
        if not isinstance(parameter, Parameter):
            parameter = Parameter(parameter, value, direction, db_type, size)
        self.parameters.append(parameter)
        return parameter

    def copy(self) -> Command:
        """Return a new command with the same statement, kind and parameters.

        Parameters are copied, so output values written while the clone runs
        do not reach this command.
        """
        clone = Command(self._connection, self.sql, self.command_type)
        clone.parameters = [dataclasses.replace(p) for p in self.parameters]
        return clone

    def execute_reader(self) -> DataReader:
        """Execute the statement and return a reader over its result set."""
        reader = DataReader(self._execute())
        self._readers.append(reader)
        return reader

    def execute_non_query(self) -> int:
        """Execute the statement and return the number of affected rows."""
        cursor = self._execute()
        try:
            return int(cursor.rowcount)
        finally:
            cursor.close()

    def close(self) -> None:
        """Release every reader this command created. Safe to call repeatedly."""
        if self._closed:
            return
        self._closed = True
        for reader in self._readers:
            reader.close()
        self._readers.clear()

    def _execute(self) -> Any:
        if self._closed:
            raise InvalidStateError("Command is closed")
        raw = self._connection.raw
        if raw is None:
            raise ConnectionError("Connection is not open")
        adapter = self._connection.adapter

        try:
            if self.command_type is CommandType.STORED_PROCEDURE:
                logger.debug(
                    "Calling procedure %s with %d parameter(s)", self.sql, len(self.parameters)
                )
                return adapter.call_procedure(raw, self.sql, self.parameters)

            for p in self.parameters:
                if not p.direction.is_input:
                    raise ParameterBindingError(
                        p.name, f"{p.direction.value} parameters require a stored procedure"
                    )
            sql = normalize_params(self.sql, adapter.paramstyle)
            logger.debug("Executing statement with %d parameter(s): %s", len(self.parameters), sql)
            return adapter.execute(raw, sql, parameter_values(self.parameters))
        except QueryMapperError:
            raise
        except Exception as e:
            raise ExecutionError(f"Statement failed: {e}") from e

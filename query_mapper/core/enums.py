"""Command, parameter and backend enumerations."""

from __future__ import annotations

from enum import Enum


class CommandType(Enum):
    """How a command's text is interpreted."""

    TEXT = "text"
    STORED_PROCEDURE = "stored_procedure"


class ParameterDirection(Enum):
    """Direction of a bound parameter."""

    INPUT = "input"
    OUTPUT = "output"
    INPUT_OUTPUT = "input_output"
    RETURN_VALUE = "return_value"

    @property
    def is_input(self) -> bool:
        return self in (ParameterDirection.INPUT, ParameterDirection.INPUT_OUTPUT)

    @property
    def is_output(self) -> bool:
        return self is not ParameterDirection.INPUT


class DbType(Enum):
    """Declared type tag of a parameter."""

    STRING = "string"
    INT32 = "int32"
    INT64 = "int64"
    DECIMAL = "decimal"
    DOUBLE = "double"
    BOOLEAN = "boolean"
    DATE = "date"
    DATETIME = "datetime"
    BINARY = "binary"


class DatabaseBackend(Enum):
    """Supported database backends."""

    SQLITE = "sqlite"
    POSTGRESQL = "postgresql"
    MYSQL = "mysql"
    ORACLE = "oracle"

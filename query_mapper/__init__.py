"""QueryMapper - map SQL result sets to records and typed objects."""

from __future__ import annotations

import logging

from query_mapper.core.command import Command
from query_mapper.core.connection import Connection, ConnectionConfig
from query_mapper.core.enums import (
    CommandType,
    DatabaseBackend,
    DbType,
    ParameterDirection,
)
from query_mapper.core.exceptions import (
    AdapterError,
    BindingError,
    ConnectionError,  # noqa: A004
    ExecutionError,
    InvalidStateError,
    MappingError,
    ParameterBindingError,
    QueryMapperError,
    TargetConstructionError,
)
from query_mapper.core.mapper import QueryMapper
from query_mapper.core.params import Parameter
from query_mapper.core.reader import DataReader
from query_mapper.core.table import DataTable
from query_mapper.mapping.record import Record

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("query_mapper").addHandler(logging.NullHandler())

__all__ = [
    # Connection
    "ConnectionConfig",
    "Connection",
    # Execution
    "Command",
    "DataReader",
    "Parameter",
    # Mapping
    "QueryMapper",
    "Record",
    "DataTable",
    # Enums
    "CommandType",
    "ParameterDirection",
    "DbType",
    "DatabaseBackend",
    # Exceptions
    "QueryMapperError",
    "InvalidStateError",
    "ExecutionError",
    "ParameterBindingError",
    "MappingError",
    "BindingError",
    "TargetConstructionError",
    "AdapterError",
    "ConnectionError",
]

"""Query result mapper.

A QueryMapper executes one statement on a borrowed connection and maps the
rows either to loosely-typed Records or to instances of a target class whose
attributes are matched to column names.

Usage::

    with QueryMapper(conn, "SELECT id, name FROM users WHERE active = :active") as qm:
        for user in qm.with_parameters({"active": 1}).skip(10).take_typed(User, 20):
            ...
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any, TypeVar

from query_mapper.core.command import Command
from query_mapper.core.connection import Connection
from query_mapper.core.enums import CommandType, DbType, ParameterDirection
from query_mapper.core.exceptions import (
    BindingError,
    InvalidStateError,
    TargetConstructionError,
)
from query_mapper.core.params import Parameter, parameters_from_object
from query_mapper.core.reader import DataReader
from query_mapper.core.table import DataTable
from query_mapper.mapping.binding import ColumnBinding, bind_columns, writable_fields
from query_mapper.mapping.record import Record

T = TypeVar("T")

logger = logging.getLogger(__name__)


class QueryMapper:
    """Maps the result set of a single statement to records or typed objects.

    The mapper owns its command and, once created, its reader. The connection
    is borrowed: it is opened if needed but never closed by the mapper.

    Args:
        connection: Connection to execute on.
        sql: Statement text, or the procedure name for stored procedures.
        command_type: How *sql* is interpreted.
    """

    def __init__(
        self,
        connection: Connection,
        sql: str,
        command_type: CommandType = CommandType.TEXT,
    ) -> None:
        if not connection.is_open:
            connection.open()
        self._connection = connection
        self._command = connection.create_command(sql, command_type)
        self._reader: DataReader | None = None
        self._bindings: dict[type, list[ColumnBinding]] = {}
        self._rows_read = 0
        self._closed = False

    @property
    def connection(self) -> Connection:
        return self._connection

    @property
    def command(self) -> Command:
        return self._command

    @property
    def reader(self) -> DataReader:
        """The reader over the result set, executing the command on first access."""
        if self._reader is None:
            self._check_open()
            self._reader = self._command.execute_reader()
        return self._reader

    # --- Parameters ---

    def with_parameters(
        self,
        parameters: Any,
        prefix: str = "",
        suffix: str = "",
    ) -> QueryMapper:
        """Bind every name/value pair of *parameters* as an input parameter.

        Args:
            parameters: A mapping, dataclass, pydantic model or plain object.
            prefix: Prepended to each parameter name.
            suffix: Appended to each parameter name.
        """
        self._assert_no_reader()
        for name, value in parameters_from_object(parameters).items():
            self._command.add_parameter(prefix + name + suffix, value)
        return self

    def with_parameter(
        self,
        parameter: Parameter | str,
        value: Any = None,
        direction: ParameterDirection = ParameterDirection.INPUT,
        db_type: DbType = DbType.STRING,
        size: int | None = None,
    ) -> QueryMapper:
        """Bind a single parameter, given either as a Parameter or by its fields."""
        self._assert_no_reader()
        self._command.add_parameter(parameter, value, direction, db_type, size)
        return self

    # --- Reading ---

    def skip(self, count: int) -> QueryMapper:
        """Move past up to *count* rows, stopping quietly at the end of the result set."""
        reader = self.reader
        for _ in range(count):
            if not reader.read():
                break
            self._rows_read += 1
        return self

    def take_all(self) -> Iterator[Record]:
        """Map all remaining rows to Records."""
        return self._take_records(None)

    def take(self, count: int) -> Iterator[Record]:
        """Map up to *count* rows to Records."""
        return self._take_records(count)

    def take_all_typed(self, target_class: type[T]) -> Iterator[T]:
        """Map all remaining rows to instances of *target_class*.

        Numerical column names map to the class's ``__setitem__``.
        """
        return self._take_typed(target_class, None)

    def take_typed(self, target_class: type[T], count: int) -> Iterator[T]:
        """Map up to *count* rows to instances of *target_class*.

        Numerical column names map to the class's ``__setitem__``.
        """
        return self._take_typed(target_class, count)

    def _take_records(self, count: int | None) -> Iterator[Record]:
        reader = self.reader
        fields = reader.column_names
        taken = 0
        while count is None or taken < count:
            if not reader.read():
                break
            self._rows_read += 1
            taken += 1
            record = Record()
            for ordinal, name in enumerate(fields):
                record[name] = reader.get_value(ordinal)
            yield record

    def _take_typed(self, target_class: type[T], count: int | None) -> Iterator[T]:
        reader = self.reader
        bindings = self._bindings.get(target_class)
        if bindings is None:
            bindings = self.map_columns(target_class, reader)
            self._bindings[target_class] = bindings
        taken = 0
        while count is None or taken < count:
            if not reader.read():
                break
            self._rows_read += 1
            taken += 1
            obj = _construct(target_class)
            for binding in bindings:
                if reader.is_null(binding.ordinal):
                    continue
                try:
                    binding.assign(obj, reader.get_value(binding.ordinal))
                except (TypeError, ValueError, AttributeError) as e:
                    raise BindingError(target_class.__name__, binding.column, str(e)) from e
            yield obj

    # --- Binding hooks ---

    def map_columns(self, target_class: type, reader: DataReader) -> list[ColumnBinding]:
        """Bind the reader's columns to attributes of *target_class*.

        By default columns bind by case-insensitive name and numerical
        column names bind to the class's indexer. Override to customize.
        """
        sample = _construct(target_class)
        fields = self.get_fields_map(target_class, sample)
        bindings = bind_columns(target_class, reader.column_names, fields)
        logger.debug(
            "Bound %d of %d column(s) to %s",
            len(bindings),
            reader.field_count,
            target_class.__name__,
        )
        return bindings

    def get_fields_map(self, target_class: type, sample: Any) -> dict[str, str]:
        """Return the lowercased-name -> attribute-name map used to match columns."""
        return writable_fields(target_class, sample)

    # --- Buffering ---

    def fill_table(self, table: DataTable | None = None) -> DataTable:
        """Execute the statement again and load every row into a table.

        Fills *table* when given, otherwise a new DataTable. Runs on a copy of
        the command, so it does not disturb an open reader, and output
        parameters of a procedure are not written back to this mapper. If
        fetching fails partway, the rows loaded so far stay in *table* and the
        error propagates.
        """
        if table is None:
            table = DataTable()
        command = self._command.copy()
        try:
            added = table.load(command.execute_reader())
        finally:
            command.close()
        logger.debug("Filled table with %d row(s)", added)
        return table

    # --- Lifecycle ---

    def close(self) -> None:
        """Release the reader and command. The connection stays open."""
        if self._closed:
            return
        self._closed = True
        try:
            if self._reader is not None:
                self._reader.close()
        finally:
            self._command.close()
        logger.debug("Closed query mapper after %d row(s)", self._rows_read)

    def _assert_no_reader(self) -> None:
        self._check_open()
        if self._reader is not None:
            raise InvalidStateError("Cannot bind parameters once the reader is created")

    def _check_open(self) -> None:
        if self._closed:
            raise InvalidStateError("QueryMapper is closed")

    def __enter__(self) -> QueryMapper:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        self.close()


def _construct(target_class: type[T]) -> T:
    try:
        return target_class()
    except (TypeError, ValueError) as e:
        raise TargetConstructionError(target_class.__name__, str(e)) from e

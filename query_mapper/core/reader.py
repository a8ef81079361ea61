"""Forward-only reader over a DB-API cursor."""

from __future__ import annotations

from typing import Any

from query_mapper.core.exceptions import ExecutionError, InvalidStateError


class DataReader:
    """Reads a result set one row at a time.

    Rows are positional; column names may repeat. A statement without a
    result set has no fields and no rows.
    """

    def __init__(self, cursor: Any) -> None:
        self._cursor = cursor
        description = cursor.description
        self._names: list[str] = [desc[0] for desc in description] if description else []
        self._row: Any = None
        self._closed = False

    @property
    def field_count(self) -> int:
        return len(self._names)

    @property
    def column_names(self) -> list[str]:
        return list(self._names)

    @property
    def closed(self) -> bool:
        return self._closed

    def get_name(self, ordinal: int) -> str:
        return self._names[ordinal]

    def read(self) -> bool:
        """Advance to the next row. Returns False once the result set is exhausted."""
        if self._closed:
            raise InvalidStateError("Reader is closed")
        if not self._names:
            return False
        try:
            row = self._cursor.fetchone()
        except Exception as e:
            raise ExecutionError(f"Fetching the next row failed: {e}") from e
        self._row = row
        return row is not None

    def is_null(self, ordinal: int) -> bool:
        return self.get_value(ordinal) is None

    def get_value(self, ordinal: int) -> Any:
        if self._row is None:
            raise InvalidStateError("No current row; call read() first")
        return self._row[ordinal]

    def get_values(self) -> tuple[Any, ...]:
        if self._row is None:
            raise InvalidStateError("No current row; call read() first")
        return tuple(self._row)

    def close(self) -> None:
        """Close the underlying cursor. Safe to call repeatedly."""
        if self._closed:
            return
        self._closed = True
        self._row = None
        self._cursor.close()

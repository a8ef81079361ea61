"""Cursor wrapper for procedure calls whose rows come from a secondary cursor."""

from __future__ import annotations

from typing import Any


class ProcedureResult:
    """Reads the first result set of a procedure call.

    Closing it closes both the result cursor and the cursor that made the call.
    """

    def __init__(self, call_cursor: Any, result: Any) -> None:
        self._call_cursor = call_cursor
        self._result = result

    @property
    def description(self) -> Any:
        return self._result.description if self._result is not None else None

    @property
    def rowcount(self) -> int:
        return int(self._call_cursor.rowcount)

    def fetchone(self) -> Any:
        return self._result.fetchone() if self._result is not None else None

    def close(self) -> None:
        try:
            if self._result is not None:
                self._result.close()
        finally:
            self._call_cursor.close()

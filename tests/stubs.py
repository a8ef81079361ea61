"""Stub adapter and cursor for resource accounting without a database."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from query_mapper.core.connection import ConnectionConfig
from query_mapper.core.params import Parameter


class StubCursor:
    """DB-API cursor over canned rows that counts close() calls."""

    def __init__(
        self,
        columns: list[str] | None,
        rows: list[tuple[Any, ...]],
        fail_after: int | None = None,
    ) -> None:
        self.description = (
            [(c, None, None, None, None, None, None) for c in columns] if columns else None
        )
        self.rowcount = len(rows)
        self._rows = list(rows)
        self._fetched = 0
        self._fail_after = fail_after
        self.close_calls = 0

    def fetchone(self) -> tuple[Any, ...] | None:
        if self._fail_after is not None and self._fetched >= self._fail_after:
            raise RuntimeError("connection reset by peer")
        if not self._rows:
            return None
        self._fetched += 1
        return self._rows.pop(0)

    def close(self) -> None:
        self.close_calls += 1


class StubAdapter:
    """Adapter returning StubCursors and recording every execution."""

    def __init__(
        self,
        columns: list[str] | None = None,
        rows: list[tuple[Any, ...]] | None = None,
        *,
        fail_after: int | None = None,
        connect_error: Exception | None = None,
        paramstyle: str = "named",
    ) -> None:
        self.columns = columns
        self.rows = rows or []
        self.fail_after = fail_after
        self.connect_error = connect_error
        self._paramstyle = paramstyle
        self.connect_calls = 0
        self.close_calls = 0
        self.executions: list[tuple[str, dict[str, Any] | None]] = []
        self.procedure_calls: list[tuple[str, list[Parameter]]] = []
        self.cursors: list[StubCursor] = []

    @property
    def paramstyle(self) -> str:
        return self._paramstyle

    def connect(self, config: ConnectionConfig) -> Any:
        self.connect_calls += 1
        if self.connect_error is not None:
            raise self.connect_error
        return object()

    def close(self, connection: Any) -> None:
        self.close_calls += 1

    def execute(
        self,
        connection: Any,
        sql: str,
        params: dict[str, Any] | None = None,
    ) -> StubCursor:
        self.executions.append((sql, params))
        return self._cursor()

    def call_procedure(
        self,
        connection: Any,
        name: str,
        parameters: list[Parameter],
    ) -> StubCursor:
        self.procedure_calls.append((name, list(parameters)))
        return self._cursor()

    def _cursor(self) -> StubCursor:
        cursor = StubCursor(self.columns, self.rows, self.fail_after)
        self.cursors.append(cursor)
        return cursor


class StubVar:
    """Oracle-style bind variable that remembers every value set on it."""

    def __init__(self, db_type: Any, size: int) -> None:
        self.db_type = db_type
        self.size = size
        self.values: list[Any] = []

    def setvalue(self, pos: int, value: Any) -> None:
        self.values.append(value)

    def getvalue(self, pos: int = 0) -> Any:
        return self.values[-1] if self.values else None


class StubProcedureCursor:
    """Driver cursor for procedure calls, in both the MySQL and Oracle shapes.

    ``returned`` is what MySQL's ``callproc`` hands back; ``outputs`` are
    written into Oracle bind variables by name during the call.
    """

    def __init__(
        self,
        results: list[StubCursor] | None = None,
        *,
        returned: tuple[Any, ...] | None = None,
        outputs: dict[str, Any] | None = None,
        return_value: Any = None,
        error: Exception | None = None,
    ) -> None:
        self.results = list(results or [])
        self.returned = returned
        self.outputs = outputs or {}
        self.return_value = return_value
        self.error = error
        self.rowcount = -1
        self.calls: list[tuple[Any, ...]] = []
        self.vars: list[StubVar] = []
        self.close_calls = 0

    def var(self, db_type: Any, size: int = 0) -> StubVar:
        var = StubVar(db_type, size)
        self.vars.append(var)
        return var

    def callproc(
        self,
        name: str,
        args: tuple[Any, ...] = (),
        keyword_parameters: dict[str, Any] | None = None,
    ) -> tuple[Any, ...]:
        if keyword_parameters is None:
            self.calls.append(("callproc", name, args))
        else:
            self.calls.append(("callproc", name, dict(keyword_parameters)))
        self._run(keyword_parameters)
        return self.returned if self.returned is not None else args

    def callfunc(
        self,
        name: str,
        return_type: Any,
        keyword_parameters: dict[str, Any] | None = None,
    ) -> Any:
        self.calls.append(("callfunc", name, return_type, dict(keyword_parameters or {})))
        self._run(keyword_parameters)
        return self.return_value

    def stored_results(self) -> Iterator[StubCursor]:
        return iter(self.results)

    def getimplicitresults(self) -> list[StubCursor]:
        return list(self.results)

    def close(self) -> None:
        self.close_calls += 1

    def _run(self, keyword_parameters: dict[str, Any] | None) -> None:
        if self.error is not None:
            raise self.error
        for name, value in self.outputs.items():
            keyword_parameters[name].setvalue(0, value)  # type: ignore[index]


class StubProcedureConnection:
    """Driver connection handing out one StubProcedureCursor."""

    def __init__(self, cursor: StubProcedureCursor) -> None:
        self._cursor = cursor
        self.cursor_calls: list[dict[str, Any]] = []

    def cursor(self, **kwargs: Any) -> StubProcedureCursor:
        self.cursor_calls.append(kwargs)
        return self._cursor

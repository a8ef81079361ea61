"""In-memory tabular buffer filled from a reader."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from query_mapper.core.reader import DataReader
from query_mapper.mapping.record import Record


def _unique_names(names: list[str]) -> list[str]:
    """Suffix repeated column names with 1, 2, ... keeping the first as-is."""
    seen: set[str] = set()
    result: list[str] = []
    for name in names:
        candidate = name
        counter = 1
        while candidate in seen:
            candidate = f"{name}{counter}"
            counter += 1
        seen.add(candidate)
        result.append(candidate)
    return result


class DataTable:
    """Rows of values under named columns.

    A table can be loaded several times; later loads append rows and add
    columns that are not yet present.
    """

    def __init__(self, columns: list[str] | None = None) -> None:
        self.columns: list[str] = _unique_names(list(columns or []))
        self.rows: list[list[Any]] = []

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[list[Any]]:
        return iter(self.rows)

    def column(self, name: str) -> list[Any]:
        """Return all values of one column."""
        ordinal = self.columns.index(name)
        return [row[ordinal] for row in self.rows]

    def records(self) -> list[Record]:
        return [Record(zip(self.columns, row)) for row in self.rows]

    def load(self, reader: DataReader) -> int:
        """Append every remaining row of *reader*. Returns the number of rows added."""
        ordinals = [self._ensure_column(name) for name in _unique_names(reader.column_names)]
        width = len(self.columns)
        added = 0
        while reader.read():
            row: list[Any] = [None] * width
            for source, target in enumerate(ordinals):
                row[target] = reader.get_value(source)
            self.rows.append(row)
            added += 1
        return added

    def _ensure_column(self, name: str) -> int:
        if name in self.columns:
            return self.columns.index(name)
        self.columns.append(name)
        for row in self.rows:
            row.append(None)
        return len(self.columns) - 1

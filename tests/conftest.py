"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

import pytest
from stubs import StubAdapter

from query_mapper.core.connection import Connection, ConnectionConfig


@pytest.fixture
def sqlite_config() -> ConnectionConfig:
    """SQLite in-memory connection config."""
    return ConnectionConfig(driver="sqlite", database=":memory:")


@pytest.fixture
def connection(sqlite_config: ConnectionConfig) -> Iterator[Connection]:
    """Open in-memory SQLite connection with a seeded users table."""
    conn = Connection(sqlite_config)
    conn.open()
    conn.create_command(
        "CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT NOT NULL, "
        "email TEXT, score REAL)"
    ).execute_non_query()
    insert = "INSERT INTO users (id, name, email, score) VALUES (:id, :name, :email, :score)"
    for row in [
        {"id": 1, "name": "Alice", "email": "alice@example.com", "score": 9.5},
        {"id": 2, "name": "Bob", "email": None, "score": 7.0},
        {"id": 3, "name": "Charlie", "email": "charlie@example.com", "score": None},
        {"id": 4, "name": "Dana", "email": "dana@example.com", "score": 8.25},
    ]:
        command = conn.create_command(insert)
        for name, value in row.items():
            command.add_parameter(name, value)
        command.execute_non_query()
    conn.commit()
    yield conn
    conn.close()


@pytest.fixture
def stub_config() -> ConnectionConfig:
    return ConnectionConfig(driver="stub", database="stub")


@pytest.fixture
def make_connection(stub_config: ConnectionConfig) -> Callable[..., Connection]:
    """Build a Connection over a StubAdapter.

    Usage:
        conn = make_connection(["id", "name"], [(1, "A"), (2, "B")])
        conn.adapter.cursors  # every cursor handed out
    """

    def _make(
        columns: list[str] | None = None,
        rows: list[tuple[Any, ...]] | None = None,
        **kwargs: Any,
    ) -> Connection:
        return Connection(stub_config, adapter=StubAdapter(columns, rows, **kwargs))

    return _make

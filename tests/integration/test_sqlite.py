"""Integration test for SQLite full workflow.

Covers: connection lifecycle, parameter binding, record and typed mapping,
skipping, table buffering and disposal against a real SQLite in-memory
database.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import pytest
from pydantic import BaseModel

from query_mapper.core.connection import Connection, ConnectionConfig
from query_mapper.core.enums import CommandType
from query_mapper.core.exceptions import ExecutionError, InvalidStateError
from query_mapper.core.mapper import QueryMapper
from query_mapper.core.table import DataTable

# --- Test models ---


@dataclass
class User:
    id: int = 0
    name: str = ""
    email: str = "unknown"
    score: float = 0.0


class UserModel(BaseModel):
    id: int = 0
    name: str = ""
    email: str | None = None


class Scores:
    """Indexer-only target: numbered columns land in slots."""

    def __init__(self) -> None:
        self.slots: list[Any] = [None] * 5

    def __setitem__(self, index: int, value: Any) -> None:
        self.slots[index] = value


# --- Tests ---


class TestRecords:
    def test_take_all(self, connection: Connection) -> None:
        with QueryMapper(connection, "SELECT id, name, email FROM users ORDER BY id") as qm:
            users = list(qm.take_all())
        assert len(users) == 4
        assert users[0] == {"id": 1, "name": "Alice", "email": "alice@example.com"}
        assert users[1].email is None

    def test_parameters(self, connection: Connection) -> None:
        sql = "SELECT name FROM users WHERE score >= :min_score ORDER BY id"
        with QueryMapper(connection, sql) as qm:
            names = [r.name for r in qm.with_parameters({"min_score": 8}).take_all()]
        assert names == ["Alice", "Dana"]

    def test_duplicate_column_names(self, connection: Connection) -> None:
        with QueryMapper(connection, "SELECT id, name AS id FROM users WHERE id = 1") as qm:
            assert list(qm.take_all()) == [{"id": "Alice"}]

    def test_skip_and_take(self, connection: Connection) -> None:
        with QueryMapper(connection, "SELECT id FROM users ORDER BY id") as qm:
            page = [r.id for r in qm.skip(1).take(2)]
        assert page == [2, 3]

    def test_skip_past_end(self, connection: Connection) -> None:
        with QueryMapper(connection, "SELECT id FROM users") as qm:
            assert list(qm.skip(10).take_all()) == []


class TestTypedMapping:
    def test_example_rows(self, connection: Connection) -> None:
        sql = "SELECT id, name FROM users WHERE id <= 2 ORDER BY id"
        with QueryMapper(connection, sql) as qm:
            users = list(qm.take_all_typed(User))
        assert [(u.id, u.name) for u in users] == [(1, "Alice"), (2, "Bob")]

    def test_null_keeps_default(self, connection: Connection) -> None:
        sql = "SELECT id, email, score FROM users WHERE id IN (2, 3) ORDER BY id"
        with QueryMapper(connection, sql) as qm:
            bob, charlie = qm.take_all_typed(User)
        assert bob.email == "unknown"
        assert charlie.score == 0.0

    def test_case_insensitive_columns(self, connection: Connection) -> None:
        with QueryMapper(connection, 'SELECT id AS "ID", name AS "NAME" FROM users') as qm:
            first = next(qm.take_all_typed(User))
        assert (first.id, first.name) == (1, "Alice")

    def test_pydantic_target(self, connection: Connection) -> None:
        with QueryMapper(connection, "SELECT * FROM users WHERE id = :id") as qm:
            users = list(qm.with_parameter("id", 4).take_all_typed(UserModel))
        assert users == [UserModel(id=4, name="Dana", email="dana@example.com")]

    def test_numeric_columns_to_indexer(self, connection: Connection) -> None:
        sql = 'SELECT 10 AS "1", 30 AS "3", 99 AS other'
        with QueryMapper(connection, sql) as qm:
            scores = next(qm.take_all_typed(Scores))
        assert scores.slots == [None, 10, None, 30, None]


class TestFillTable:
    def test_fill_twice(self, connection: Connection) -> None:
        with QueryMapper(connection, "SELECT id, name FROM users") as qm:
            first = qm.fill_table()
            second = qm.fill_table()
        assert len(first) == len(second) == 4
        assert first.rows == second.rows

    def test_fill_while_reading(self, connection: Connection) -> None:
        with QueryMapper(connection, "SELECT id FROM users ORDER BY id") as qm:
            rows = qm.take_all()
            assert next(rows).id == 1
            table = qm.fill_table(DataTable())
            assert table.column("id") == [1, 2, 3, 4]
            assert [r.id for r in rows] == [2, 3, 4]

    def test_fill_with_parameters(self, connection: Connection) -> None:
        sql = "SELECT id, name, name FROM users WHERE id > :id"
        with QueryMapper(connection, sql) as qm:
            table = qm.with_parameter("id", 2).fill_table()
        assert table.columns == ["id", "name", "name1"]
        assert table.rows == [[3, "Charlie", "Charlie"], [4, "Dana", "Dana"]]


class TestLifecycle:
    def test_opens_connection_and_leaves_it_open(self, sqlite_config: ConnectionConfig) -> None:
        conn = Connection(sqlite_config)
        with QueryMapper(conn, "SELECT 1 AS one") as qm:
            assert conn.is_open
            assert next(qm.take_all()).one == 1
        assert conn.is_open
        conn.close()

    def test_file_database(self, tmp_path: Path) -> None:
        config = ConnectionConfig(driver="sqlite", database=str(tmp_path / "app.db"))
        with Connection(config) as conn:
            conn.create_command("CREATE TABLE t (id INTEGER)").execute_non_query()
            conn.create_command("INSERT INTO t VALUES (1), (2)").execute_non_query()
            conn.commit()
        with Connection(config) as conn, QueryMapper(conn, "SELECT COUNT(*) AS n FROM t") as qm:
            assert next(qm.take_all()).n == 2

    def test_bind_after_read(self, connection: Connection) -> None:
        with QueryMapper(connection, "SELECT id FROM users WHERE id > :id") as qm:
            rows = qm.with_parameter("id", 0).take_all()
            next(rows)
            with pytest.raises(InvalidStateError):
                qm.with_parameter("other", 1)

    def test_invalid_sql(self, connection: Connection) -> None:
        with QueryMapper(connection, "SELECT * FROM missing_table") as qm:
            with pytest.raises(ExecutionError, match="missing_table"):
                list(qm.take_all())

    def test_stored_procedure_unsupported(self, connection: Connection) -> None:
        with QueryMapper(connection, "list_users", CommandType.STORED_PROCEDURE) as qm:
            with pytest.raises(ExecutionError, match="stored procedures"):
                qm.fill_table()

"""
Example 02: Typed Mapping

This example maps rows to dataclasses, Pydantic models and an indexer class.
Columns match attributes case-insensitively; numerical column names go to
the class's __setitem__.
"""

from dataclasses import dataclass

from pydantic import BaseModel

from query_mapper import Connection, ConnectionConfig, QueryMapper


@dataclass
class User:
    id: int = 0
    name: str = ""
    email: str = "n/a"


class UserModel(BaseModel):
    id: int = 0
    name: str = ""


class Quarters:
    def __init__(self):
        self.totals = [0, 0, 0, 0, 0]

    def __setitem__(self, quarter, value):
        self.totals[quarter] = value


def main():
    config = ConnectionConfig(driver="sqlite", database=":memory:")

    with Connection(config) as conn:
        conn.create_command(
            "CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT, email TEXT)"
        ).execute_non_query()
        conn.create_command(
            "INSERT INTO users (name, email) VALUES ('Alice', 'alice@example.com'), ('Bob', NULL)"
        ).execute_non_query()

        print("=== Typed Mapping ===\n")

        # NULL cells leave the attribute's default in place
        with QueryMapper(conn, 'SELECT id AS "ID", name AS "Name", email FROM users') as qm:
            for user in qm.take_all_typed(User):
                print(f"  {user}")
        print()

        with QueryMapper(conn, "SELECT * FROM users WHERE id = :id") as qm:
            print(f"Pydantic: {list(qm.with_parameter('id', 1).take_all_typed(UserModel))}\n")

        sql = 'SELECT 120 AS "1", 80 AS "2", 95 AS "3", 130 AS "4"'
        with QueryMapper(conn, sql) as qm:
            quarters = next(qm.take_all_typed(Quarters))
            print(f"Indexer: {quarters.totals}")


if __name__ == "__main__":
    main()

"""
Example 01: Basic Query Mapping

This example maps rows to loosely-typed Records with QueryMapper.
"""

from query_mapper import Connection, ConnectionConfig, QueryMapper


def main():
    config = ConnectionConfig(driver="sqlite", database=":memory:")

    with Connection(config) as conn:
        conn.create_command("""
            CREATE TABLE users (
                id INTEGER PRIMARY KEY,
                name TEXT NOT NULL,
                email TEXT,
                active INTEGER DEFAULT 1
            )
        """).execute_non_query()
        conn.create_command("""
            INSERT INTO users (name, email, active) VALUES
                ('Alice', 'alice@example.com', 1),
                ('Bob', NULL, 1),
                ('Charlie', 'charlie@example.com', 0)
        """).execute_non_query()
        conn.commit()

        print("=== Basic Query Mapping ===\n")

        # take_all: every row as a Record
        with QueryMapper(conn, "SELECT * FROM users") as qm:
            for user in qm.take_all():
                print(f"  {user.id}: {user.name} <{user.email}>")
        print()

        # Parameters are bound before the first row is read
        with QueryMapper(conn, "SELECT name FROM users WHERE active = :active") as qm:
            active = [r.name for r in qm.with_parameters({"active": 1}).take_all()]
            print(f"Active users: {active}\n")

        # skip + take for paging
        with QueryMapper(conn, "SELECT id, name FROM users ORDER BY id") as qm:
            page = list(qm.skip(1).take(1))
            print(f"Second page (size 1): {page}")


if __name__ == "__main__":
    main()

"""
Example 03: Buffering into a DataTable

fill_table() runs the statement again on its own command and loads every
row into memory, independently of any reader already in use.
"""

import logging

from query_mapper import Connection, ConnectionConfig, DataTable, QueryMapper


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    config = ConnectionConfig(driver="sqlite", database=":memory:")

    with Connection(config) as conn:
        conn.create_command("CREATE TABLE orders (id INTEGER, amount REAL)").execute_non_query()
        conn.create_command(
            "INSERT INTO orders VALUES (1, 9.5), (2, 12.0), (3, 4.25)"
        ).execute_non_query()

        print("=== Buffering ===\n")

        with QueryMapper(conn, "SELECT id, amount FROM orders WHERE amount > :min") as qm:
            qm.with_parameter("min", 5)

            rows = qm.take_all()
            print(f"First streamed row: {next(rows)}")

            table = qm.fill_table()
            print(f"Buffered {len(table)} rows: columns={table.columns}")
            for record in table.records():
                print(f"  {record}")

            # Fill an existing table: rows are appended
            existing = DataTable(["id", "amount"])
            qm.fill_table(existing)
            qm.fill_table(existing)
            print(f"Existing table after two fills: {len(existing)} rows")

            print(f"Remaining streamed rows: {list(rows)}")


if __name__ == "__main__":
    main()

"""
Example 01: Basic Query Execution

This example demonstrates running queries and updates with dbutil's Engine
and converting results to generic rows.
"""

import tempfile
from pathlib import Path

from dbutil import Engine, close_cursor


def main():
    # Create a temporary database
    db_file = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
    db_path = db_file.name
    db_file.close()

    engine = Engine.from_url(f"sqlite:///{db_path}")

    # Set up the database with some test data
    engine.execute("""
        CREATE TABLE users (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            email TEXT
        )
    """)
    engine.execute("INSERT INTO users (name, email) VALUES ('Alice', 'alice@example.com')")
    engine.execute("INSERT INTO users (name, email) VALUES ('Bob', NULL)")

    print("=== Basic Query Execution ===\n")

    # fetch_rows: list of dicts keyed by column name
    users = engine.fetch_rows("SELECT id, name, email FROM users ORDER BY id")
    print(f"fetch_rows result ({len(users)} rows):")
    for user in users:
        print(f"  - {user}")
    print()

    # fetch_pairs: ordered (column, value) pairs, duplicate names preserved
    pairs = engine.fetch_pairs("SELECT id AS key, name AS key FROM users WHERE id = 1")
    print(f"fetch_pairs result: {pairs}\n")

    # execute: affected row count
    updated = engine.execute("UPDATE users SET email = 'bob@example.com' WHERE email IS NULL")
    print(f"execute result: {updated} row(s) updated\n")

    # execute_query: live cursor on a connection you manage
    with engine.connect() as conn:
        cursor = engine.execute_query(conn, "SELECT name FROM users ORDER BY name")
        try:
            print(f"Cursor rows: {[row[0] for row in cursor]}\n")
        finally:
            close_cursor(cursor)

    # Clean up
    Path(db_path).unlink()


if __name__ == "__main__":
    main()

"""
Example 03: Transactions

This example demonstrates transaction management with automatic rollback
on errors, and manual commit/rollback that restore auto-commit.
"""

import tempfile
from pathlib import Path

from dbutil import Engine, QueryExecutionError


def main():
    db_file = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
    db_path = db_file.name
    db_file.close()

    engine = Engine.from_url(f"sqlite:///{db_path}")
    engine.execute("CREATE TABLE users (id INTEGER PRIMARY KEY, email TEXT NOT NULL UNIQUE)")
    engine.execute("CREATE TABLE audit_log (id INTEGER PRIMARY KEY, action TEXT NOT NULL)")

    print("=== Transaction Management ===\n")

    # Example 1: Successful transaction
    print("1. Successful transaction:")
    with engine.transaction() as tx:
        tx.execute("INSERT INTO users (email) VALUES ('alice@example.com')")
        tx.execute("INSERT INTO audit_log (action) VALUES ('user_created')")
    count = engine.fetch_rows("SELECT COUNT(*) AS n FROM users")[0]["n"]
    print(f"   Users after commit: {count}\n")

    # Example 2: Transaction with rollback on error
    print("2. Transaction with error (automatic rollback):")
    try:
        with engine.transaction() as tx:
            tx.execute("INSERT INTO users (email) VALUES ('bob@example.com')")
            # This will fail due to duplicate email
            tx.execute("INSERT INTO users (email) VALUES ('alice@example.com')")
    except QueryExecutionError as e:
        print(f"   Error occurred: {e}")
    count = engine.fetch_rows("SELECT COUNT(*) AS n FROM users")[0]["n"]
    print(f"   Users after rollback: {count} (Bob was not added)\n")

    # Example 3: Manual control on a connection you hold
    print("3. Manual commit:")
    with engine.connect() as conn:
        engine.begin(conn)
        engine.execute_update(conn, "INSERT INTO users (email) VALUES ('carol@example.com')")
        engine.commit(conn)
        print(f"   Auto-commit after commit: {engine.adapter.get_autocommit(conn)}\n")

    Path(db_path).unlink()


if __name__ == "__main__":
    main()

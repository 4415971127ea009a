"""
Example 02: Record Mapping

This example demonstrates mapping query results onto dataclasses, Pydantic
models and classes with property setters, and reading mapping diagnostics.
"""

import logging
import tempfile
from dataclasses import dataclass
from pathlib import Path

from pydantic import BaseModel

from dbutil import Engine, RecordMapper


@dataclass
class User:
    id: int = 0
    name: str = ""
    email: str | None = None


class UserModel(BaseModel):
    id: int = 0
    name: str = ""


class Account:
    def __init__(self):
        self._owner = ""

    @property
    def owner(self) -> str:
        return self._owner

    @owner.setter
    def owner(self, value: str) -> None:
        self._owner = value.title()


def main():
    logging.basicConfig(level=logging.WARNING, format="%(levelname)s %(name)s: %(message)s")

    db_file = tempfile.NamedTemporaryFile(delete=False, suffix=".db")
    db_path = db_file.name
    db_file.close()

    engine = Engine.from_url(f"sqlite:///{db_path}")
    engine.execute("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT, email TEXT)")
    engine.execute("INSERT INTO users VALUES (1, 'alice', 'alice@example.com')")
    engine.execute("INSERT INTO users VALUES (2, 'bob', NULL)")

    print("=== Record Mapping ===\n")

    users = engine.fetch_records("SELECT id, name, email FROM users ORDER BY id", User)
    print(f"Dataclass records: {users}\n")

    models = engine.fetch_records("SELECT id, name FROM users ORDER BY id", UserModel)
    print(f"Pydantic records: {models}\n")

    accounts = engine.fetch_records("SELECT name AS owner FROM users ORDER BY id", Account)
    print(f"Property setters: {[a.owner for a in accounts]}\n")

    # Columns without a matching field are skipped and reported
    result = engine.fetch_result("SELECT id, name, 'vip' AS tier FROM users ORDER BY id")
    report = RecordMapper(User).map_report(result)
    print(f"Records: {report.records}")
    for diagnostic in report.diagnostics:
        print(f"  skipped {diagnostic.column!r} in row {diagnostic.row_index}: {diagnostic.reason}")

    Path(db_path).unlink()


if __name__ == "__main__":
    main()

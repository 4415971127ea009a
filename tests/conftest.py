"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Any

import pytest

from dbutil.core.connection import ConnectionConfig
from dbutil.core.engine import Engine


class FakeCursor:
    """Minimal DB-API cursor over canned rows."""

    def __init__(
        self,
        description: Sequence[tuple[Any, ...]] | None,
        rows: Sequence[tuple[Any, ...]] = (),
    ) -> None:
        self.description = description
        self._rows = list(rows)
        self.closed = False

    def fetchall(self) -> list[tuple[Any, ...]]:
        rows, self._rows = self._rows, []
        return rows

    def close(self) -> None:
        self.closed = True


@pytest.fixture
def make_cursor():
    """Build a FakeCursor from column names and row tuples.

    Usage:
        make_cursor(["id", "name"], [(1, "Ann")])
    """

    def _make(columns: Sequence[str] | None, rows: Sequence[tuple[Any, ...]] = ()) -> FakeCursor:
        description = None if columns is None else [(name, None) for name in columns]
        return FakeCursor(description, rows)

    return _make


@pytest.fixture
def db_path(tmp_path: Path) -> Path:
    """Path of a fresh SQLite database file."""
    return tmp_path / "test.db"


@pytest.fixture
def sqlite_config(db_path: Path) -> ConnectionConfig:
    """SQLite file-backed connection config."""
    return ConnectionConfig(driver="sqlite", database=str(db_path))


@pytest.fixture
def engine(sqlite_config: ConnectionConfig) -> Engine:
    """Engine over a SQLite database holding a small users table."""
    eng = Engine.from_config(sqlite_config)
    eng.execute("CREATE TABLE users (id INTEGER PRIMARY KEY, name TEXT NOT NULL, email TEXT)")
    eng.execute("INSERT INTO users (id, name, email) VALUES (1, 'Ann', 'ann@example.com')")
    eng.execute("INSERT INTO users (id, name, email) VALUES (2, 'Bob', NULL)")
    return eng

"""SQLite adapter - stdlib sqlite3."""

from __future__ import annotations

import sqlite3
from typing import Any

from dbutil.adapters.dbapi import execute_statement
from dbutil.adapters.options import coerce_options
from dbutil.core.connection import ConnectionConfig
from dbutil.core.enums import DatabaseBackend

# sqlite3.connect keyword arguments that are not strings
_OPTION_TYPES: dict[str, Any] = {
    "timeout": float,
    "detect_types": int,
    "check_same_thread": bool,
    "cached_statements": int,
    "uri": bool,
}


class SqliteAdapter:
    """SQLite adapter using stdlib sqlite3.

    Auto-commit is expressed through ``isolation_level``: ``None`` means
    auto-commit, anything else lets sqlite3 open transactions implicitly.
    """

    @property
    def backend(self) -> DatabaseBackend:
        return DatabaseBackend.SQLITE

    def connect(self, config: ConnectionConfig) -> sqlite3.Connection:
        options = coerce_options(config.extra, _OPTION_TYPES)
        return sqlite3.connect(config.database or ":memory:", **options)

    def execute(
        self,
        connection: sqlite3.Connection,
        sql: str,
        params: Any = None,
    ) -> sqlite3.Cursor:
        return execute_statement(connection, sql, params)

    def set_autocommit(self, connection: sqlite3.Connection, enabled: bool) -> None:
        connection.isolation_level = None if enabled else "DEFERRED"

    def get_autocommit(self, connection: sqlite3.Connection) -> bool:
        return connection.isolation_level is None

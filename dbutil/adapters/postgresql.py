"""PostgreSQL adapter using psycopg (v3+)."""

from __future__ import annotations

from typing import Any

from dbutil.adapters.dbapi import execute_statement
from dbutil.core.connection import ConnectionConfig
from dbutil.core.enums import DatabaseBackend


def _build_conninfo(config: ConnectionConfig) -> str:
    """Build a libpq connection string from config fields.

    Values are quoted by ``psycopg.conninfo.make_conninfo``, so passwords with
    spaces or quotes survive intact.
    """
    if config.dsn is not None:
        return config.dsn
    from psycopg.conninfo import make_conninfo

    fields: dict[str, Any] = {
        "host": config.host,
        "port": config.port,
        "user": config.user,
        "password": config.password,
        "dbname": config.database,
    }
    fields = {key: value for key, value in fields.items() if value is not None}
    fields.update(config.extra)
    return make_conninfo(**fields)


class PostgresqlAdapter:
    """PostgreSQL adapter using psycopg (v3+) with plain tuple rows."""

    @property
    def backend(self) -> DatabaseBackend:
        return DatabaseBackend.POSTGRESQL

    def connect(self, config: ConnectionConfig) -> Any:
        import psycopg

        return psycopg.connect(_build_conninfo(config))

    def execute(
        self,
        connection: Any,
        sql: str,
        params: Any = None,
    ) -> Any:
        return execute_statement(connection, sql, params)

    def set_autocommit(self, connection: Any, enabled: bool) -> None:
        connection.autocommit = enabled

    def get_autocommit(self, connection: Any) -> bool:
        return bool(connection.autocommit)

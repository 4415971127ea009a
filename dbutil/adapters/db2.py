"""IBM DB2 adapter using ibm_db_dbi (from the ibm-db package)."""

from __future__ import annotations

from typing import Any

from dbutil.adapters.dbapi import execute_statement
from dbutil.adapters.options import quote_value
from dbutil.core.connection import ConnectionConfig
from dbutil.core.enums import DatabaseBackend


def _build_dsn(config: ConnectionConfig) -> str:
    """Build a DB2 CLI connection string from config fields.

    Values holding separators are wrapped in braces.
    """
    if config.dsn is not None:
        return config.dsn
    parts = [
        f"DATABASE={quote_value(config.database or '')}",
        f"HOSTNAME={quote_value(config.host or 'localhost')}",
        f"PORT={config.port if config.port is not None else 50000}",
        "PROTOCOL=TCPIP",
    ]
    if config.user is not None:
        parts.append(f"UID={quote_value(config.user)}")
    if config.password is not None:
        parts.append(f"PWD={quote_value(config.password)}")
    for key, value in config.extra.items():
        parts.append(f"{key}={quote_value(value)}")
    return ";".join(parts) + ";"


class Db2Adapter:
    """DB2 adapter using the DB-API layer of ibm-db."""

    @property
    def backend(self) -> DatabaseBackend:
        return DatabaseBackend.DB2

    def connect(self, config: ConnectionConfig) -> Any:
        import ibm_db_dbi

        return ibm_db_dbi.connect(_build_dsn(config), "", "")

    def execute(
        self,
        connection: Any,
        sql: str,
        params: Any = None,
    ) -> Any:
        return execute_statement(connection, sql, params)

    def set_autocommit(self, connection: Any, enabled: bool) -> None:
        connection.set_autocommit(enabled)

    def get_autocommit(self, connection: Any) -> bool:
        import ibm_db

        return bool(ibm_db.autocommit(connection.conn_handler) == ibm_db.SQL_AUTOCOMMIT_ON)

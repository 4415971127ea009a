"""Microsoft SQL Server / Azure SQL adapter using pyodbc."""

from __future__ import annotations

import re
from typing import Any

from dbutil.adapters.dbapi import execute_statement
from dbutil.adapters.options import quote_value
from dbutil.core.connection import ConnectionConfig
from dbutil.core.enums import DatabaseBackend

DEFAULT_ODBC_DRIVER = "ODBC Driver 18 for SQL Server"
LOGIN_TIMEOUT = 30


def _has_key(conn_str: str, key: str) -> bool:
    return re.search(rf"(?:^|;)\s*{re.escape(key)}\s*=", conn_str, re.IGNORECASE) is not None


def _build_connection_string(config: ConnectionConfig) -> str:
    """Build an ODBC connection string.

    Encryption settings required by Azure SQL Database are appended unless
    the caller already chose them. Values holding separators are wrapped in
    braces.
    """
    if config.dsn is not None:
        parts = [config.dsn.strip().rstrip(";")]
    else:
        odbc_driver = config.extra.get("odbc_driver", DEFAULT_ODBC_DRIVER)
        server = config.host or "localhost"
        if config.port is not None:
            server = f"{server},{config.port}"
        parts = [f"DRIVER={{{odbc_driver}}}", f"SERVER={quote_value(server)}"]
        if config.database is not None:
            parts.append(f"DATABASE={quote_value(config.database)}")
        for key, value in config.extra.items():
            if key != "odbc_driver":
                parts.append(f"{key}={quote_value(value)}")

    # keys are looked up before credentials are appended
    base = ";".join(parts)
    conn_str = base
    if config.user is not None and not _has_key(base, "UID"):
        conn_str += f";UID={quote_value(config.user)}"
    if config.password is not None and not _has_key(base, "PWD"):
        conn_str += f";PWD={quote_value(config.password)}"
    if not _has_key(base, "Encrypt"):
        conn_str += ";Encrypt=yes"
    if not _has_key(base, "TrustServerCertificate"):
        conn_str += ";TrustServerCertificate=no"
    return conn_str


class MssqlAdapter:
    """SQL Server adapter using pyodbc."""

    @property
    def backend(self) -> DatabaseBackend:
        return DatabaseBackend.MSSQL

    def connect(self, config: ConnectionConfig) -> Any:
        import pyodbc

        return pyodbc.connect(_build_connection_string(config), timeout=LOGIN_TIMEOUT)

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

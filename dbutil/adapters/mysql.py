"""MySQL adapter using mysql-connector-python."""

from __future__ import annotations

from typing import Any

from dbutil.adapters.dbapi import execute_statement
from dbutil.adapters.options import coerce_options
from dbutil.core.connection import ConnectionConfig
from dbutil.core.enums import DatabaseBackend

_OPTION_TYPES: dict[str, Any] = {
    "connection_timeout": int,
    "read_timeout": int,
    "write_timeout": int,
    "pool_size": int,
    "autocommit": bool,
    "buffered": bool,
    "raw": bool,
    "compress": bool,
    "use_pure": bool,
    "use_unicode": bool,
    "get_warnings": bool,
    "raise_on_warnings": bool,
    "consume_results": bool,
    "ssl_disabled": bool,
    "ssl_verify_cert": bool,
    "ssl_verify_identity": bool,
    "allow_local_infile": bool,
}


class MysqlAdapter:
    """MySQL adapter using mysql-connector-python.

    mysql-connector has no connection-string form, so ``dsn`` is not used;
    vendor options go through ``extra`` as keyword arguments.
    """

    @property
    def backend(self) -> DatabaseBackend:
        return DatabaseBackend.MYSQL

    def connect(self, config: ConnectionConfig) -> Any:
        import mysql.connector

        kwargs: dict[str, Any] = {
            "host": config.host,
            "port": config.port,
            "user": config.user,
            "password": config.password,
            "database": config.database,
        }
        kwargs = {key: value for key, value in kwargs.items() if value is not None}
        kwargs.update(coerce_options(config.extra, _OPTION_TYPES))
        return mysql.connector.connect(**kwargs)

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

"""Oracle adapter using oracledb."""

from __future__ import annotations

from typing import Any

from dbutil.adapters.dbapi import execute_statement
from dbutil.adapters.options import coerce_options
from dbutil.core.connection import ConnectionConfig
from dbutil.core.enums import DatabaseBackend

_OPTION_TYPES: dict[str, Any] = {
    "tcp_connect_timeout": float,
    "retry_count": int,
    "retry_delay": int,
    "expire_time": int,
    "sdu": int,
    "stmtcachesize": int,
    "https_proxy_port": int,
    "ssl_server_dn_match": bool,
    "disable_oob": bool,
    "events": bool,
}


def _build_dsn(config: ConnectionConfig) -> str:
    """Oracle DSN: the configured dsn, else host:port/service_name."""
    if config.dsn is not None:
        return config.dsn
    port = config.port if config.port is not None else 1521
    return f"{config.host or 'localhost'}:{port}/{config.database or ''}"


class OracleAdapter:
    """Oracle adapter using oracledb (thin mode by default).

    Column names come back as Oracle reports them, usually upper case.
    """

    @property
    def backend(self) -> DatabaseBackend:
        return DatabaseBackend.ORACLE

    def connect(self, config: ConnectionConfig) -> Any:
        import oracledb

        return oracledb.connect(
            user=config.user,
            password=config.password,
            dsn=_build_dsn(config),
            **coerce_options(config.extra, _OPTION_TYPES),
        )

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

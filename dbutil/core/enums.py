"""Database backend enumeration."""

from __future__ import annotations

from enum import Enum


class DatabaseBackend(Enum):
    """Supported database backends."""

    MSSQL = "mssql"
    ORACLE = "oracle"
    MYSQL = "mysql"
    POSTGRESQL = "postgresql"
    DB2 = "db2"
    SQLITE = "sqlite"

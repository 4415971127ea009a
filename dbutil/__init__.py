"""dbutil - one database utility for MSSQL, Oracle, MySQL, PostgreSQL, DB2 and SQLite."""

from __future__ import annotations

from dbutil.core.connection import (
    ConnectionConfig,
    ConnectionManager,
    close_connection,
    close_cursor,
)
from dbutil.core.engine import Engine
from dbutil.core.enums import DatabaseBackend
from dbutil.core.exceptions import (
    AdapterError,
    ConnectionError,  # noqa: A004
    DbUtilError,
    ExecutionError,
    MappingError,
    QueryExecutionError,
    RecordInstantiationError,
    SchemaReadError,
    TransactionError,
    TransactionStateError,
)
from dbutil.core.transaction import (
    TransactionManager,
    begin_transaction,
    commit_transaction,
    rollback_transaction,
)
from dbutil.mapping.model import MappingDiagnostic, MappingReport, RecordMapper
from dbutil.mapping.rows import DictRowMapper, PairRowMapper, ResultSet

__all__ = [
    # Connection
    "ConnectionConfig",
    "ConnectionManager",
    "close_connection",
    "close_cursor",
    # Engine
    "Engine",
    # Transaction
    "TransactionManager",
    "begin_transaction",
    "commit_transaction",
    "rollback_transaction",
    # Mapping
    "ResultSet",
    "DictRowMapper",
    "PairRowMapper",
    "RecordMapper",
    "MappingReport",
    "MappingDiagnostic",
    # Enums
    "DatabaseBackend",
    # Exceptions
    "DbUtilError",
    "AdapterError",
    "ConnectionError",
    "ExecutionError",
    "QueryExecutionError",
    "MappingError",
    "SchemaReadError",
    "RecordInstantiationError",
    "TransactionError",
    "TransactionStateError",
]

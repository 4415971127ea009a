"""Query execution engine.

The Engine runs SQL text verbatim through the vendor adapter, materializes
results and optionally applies a mapper to them. One engine serves every
supported backend; only the adapter differs.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from dbutil.core.connection import ConnectionConfig, ConnectionManager
from dbutil.core.statement import execute_query, execute_update, fetch_result
from dbutil.core.transaction import (
    TransactionManager,
    begin_transaction,
    commit_transaction,
    rollback_transaction,
)
from dbutil.mapping.model import as_mapper
from dbutil.mapping.rows import DictRowMapper, PairRow, PairRowMapper, ResultSet, Row


class Engine:
    """Synchronous query execution engine.

    Methods taking an optional ``connection`` run on that connection when one
    is given, otherwise on a fresh connection that is closed before returning.
    """

    def __init__(self, connection_manager: ConnectionManager) -> None:
        self._connection_manager = connection_manager

    @classmethod
    def from_config(cls, config: ConnectionConfig) -> Engine:
        """Create an Engine from a ConnectionConfig."""
        return cls(ConnectionManager(config))

    @classmethod
    def from_url(
        cls,
        url: str,
        user: str | None = None,
        password: str | None = None,
    ) -> Engine:
        """Create an Engine from a connection URL plus optional credentials."""
        return cls.from_config(ConnectionConfig.from_url(url, user=user, password=password))

    @property
    def connection_manager(self) -> ConnectionManager:
        return self._connection_manager

    @property
    def adapter(self) -> Any:
        return self._connection_manager.adapter

    def connect(self):  # type: ignore[no-untyped-def]
        """Open a connection as a context manager."""
        return self._connection_manager.connect()

    @contextmanager
    def _scoped(self, connection: Any) -> Iterator[Any]:
        if connection is not None:
            yield connection
            return
        with self._connection_manager.connect() as conn:
            yield conn

    def execute_query(self, connection: Any, sql: str, params: Any = None) -> Any:
        """Execute a query and return the live cursor.

        The caller owns the cursor and must close it (see ``close_cursor``).
        """
        return execute_query(self.adapter, connection, sql, params)

    def execute_update(self, connection: Any, sql: str, params: Any = None) -> int:
        """Execute a write statement. Returns the affected row count."""
        return execute_update(self.adapter, connection, sql, params)

    def execute(self, sql: str, params: Any = None, *, connection: Any = None) -> int:
        """Execute a write statement, opening a connection if none is given."""
        with self._scoped(connection) as conn:
            return execute_update(self.adapter, conn, sql, params)

    def fetch_result(self, sql: str, params: Any = None, *, connection: Any = None) -> ResultSet:
        """Execute a query and return its fully materialized result.

        The statement runs before its result schema is read. A write statement
        passed here therefore takes effect (and is auto-committed on a scoped
        connection) before ``SchemaReadError`` is raised.
        """
        with self._scoped(connection) as conn:
            return fetch_result(self.adapter, conn, sql, params)

    def fetch_rows(self, sql: str, params: Any = None, *, connection: Any = None) -> list[Row]:
        """Fetch all rows as dicts keyed by column name."""
        return DictRowMapper().map_result(self.fetch_result(sql, params, connection=connection))

    def fetch_pairs(
        self,
        sql: str,
        params: Any = None,
        *,
        connection: Any = None,
    ) -> list[PairRow]:
        """Fetch all rows as ordered (column, value) pairs."""
        return PairRowMapper().map_result(self.fetch_result(sql, params, connection=connection))

    def fetch_records(
        self,
        sql: str,
        target: Any,
        params: Any = None,
        *,
        connection: Any = None,
    ) -> list[Any]:
        """Fetch all rows mapped onto ``target``.

        ``target`` is a record class (mapped with RecordMapper) or any object
        implementing the Mapper protocol.
        """
        mapper = as_mapper(target)
        result = self.fetch_result(sql, params, connection=connection)
        return mapper.map_result(result)  # type: ignore[no-any-return]

    def begin(self, connection: Any) -> None:
        """Turn auto-commit off on ``connection``."""
        begin_transaction(connection, self.adapter)

    def commit(self, connection: Any) -> None:
        """Commit ``connection`` and restore auto-commit."""
        commit_transaction(connection, self.adapter)

    def rollback(self, connection: Any) -> None:
        """Roll back ``connection`` and restore auto-commit."""
        rollback_transaction(connection, self.adapter)

    def transaction(self, connection: Any = None) -> TransactionManager:
        """Create a new transaction context manager.

        Without ``connection`` a new one is opened on entering the ``with``
        block and closed when the transaction ends.
        """
        if connection is not None:
            return TransactionManager(connection, self.adapter, owns_connection=False)
        return TransactionManager(None, self.adapter, opener=self._connection_manager.open)

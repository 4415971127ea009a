"""Transaction management.

Connections normally run in auto-commit mode. A transaction switches
auto-commit off; commit and rollback both switch it back on afterwards, so a
connection is never left in manual-commit mode once a transaction ends.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from typing import Any

from dbutil.core.connection import close_connection
from dbutil.core.exceptions import TransactionStateError
from dbutil.core.statement import execute_update, fetch_result
from dbutil.mapping.model import as_mapper
from dbutil.mapping.rows import DictRowMapper, PairRow, PairRowMapper, ResultSet, Row

logger = logging.getLogger(__name__)


def begin_transaction(connection: Any, adapter: Any) -> None:
    """Turn auto-commit off so following statements share one transaction."""
    logger.info("Beginning transaction")
    adapter.set_autocommit(connection, False)


def commit_transaction(connection: Any, adapter: Any) -> None:
    """Commit, then restore auto-commit.

    If the commit raises, the error propagates and auto-commit is not touched.
    """
    logger.info("Committing transaction")
    connection.commit()
    adapter.set_autocommit(connection, True)


def rollback_transaction(connection: Any, adapter: Any) -> None:
    """Roll back, then restore auto-commit.

    If the rollback raises, the error propagates and auto-commit is not touched.
    """
    logger.info("Rolling back transaction")
    connection.rollback()
    adapter.set_autocommit(connection, True)


class _TxState(Enum):
    IDLE = "idle"
    ACTIVE = "active"
    COMMITTED = "committed"
    ROLLED_BACK = "rolled_back"


class TransactionManager:
    """Synchronous transaction context manager.

    Commits on a clean exit, rolls back when the block raises. When
    ``owns_connection`` is true the connection is closed on exit.

    With ``connection=None`` an ``opener`` callable supplies the connection
    when the ``with`` block is entered, so a manager that is never entered
    holds no connection.
    """

    def __init__(
        self,
        connection: Any,
        adapter: Any,
        *,
        owns_connection: bool = True,
        opener: Callable[[], Any] | None = None,
    ) -> None:
        if connection is None and opener is None:
            raise ValueError("TransactionManager needs a connection or an opener")
        self._connection = connection
        self._adapter = adapter
        self._owns_connection = owns_connection
        self._opener = opener
        self._state = _TxState.IDLE

    @property
    def connection(self) -> Any:
        return self._connection

    @property
    def state(self) -> str:
        return self._state.value

    def __enter__(self) -> TransactionManager:
        if self._state != _TxState.IDLE:
            raise TransactionStateError(self._state.value, "begin")
        if self._connection is None:
            self._connection = self._opener()  # type: ignore[misc]
        try:
            begin_transaction(self._connection, self._adapter)
        except Exception:
            if self._owns_connection:
                close_connection(self._connection)
            raise
        self._state = _TxState.ACTIVE
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        try:
            if self._state == _TxState.ACTIVE:
                if exc_type is not None:
                    rollback_transaction(self._connection, self._adapter)
                    self._state = _TxState.ROLLED_BACK
                else:
                    commit_transaction(self._connection, self._adapter)
                    self._state = _TxState.COMMITTED
        finally:
            if self._owns_connection:
                close_connection(self._connection)

    def execute(self, sql: str, params: Any = None) -> int:
        """Execute a write statement within this transaction."""
        self._check_active()
        return execute_update(self._adapter, self._connection, sql, params)

    def fetch_result(self, sql: str, params: Any = None) -> ResultSet:
        """Fetch a materialized result within this transaction."""
        self._check_active()
        return fetch_result(self._adapter, self._connection, sql, params)

    def fetch_rows(self, sql: str, params: Any = None) -> list[Row]:
        return DictRowMapper().map_result(self.fetch_result(sql, params))

    def fetch_pairs(self, sql: str, params: Any = None) -> list[PairRow]:
        return PairRowMapper().map_result(self.fetch_result(sql, params))

    def fetch_records(self, sql: str, target: Any, params: Any = None) -> list[Any]:
        """Fetch rows mapped onto a record class (or through a given mapper)."""
        mapper = as_mapper(target)
        return mapper.map_result(self.fetch_result(sql, params))  # type: ignore[no-any-return]

    def commit(self) -> None:
        """Explicitly commit the transaction."""
        if self._state != _TxState.ACTIVE:
            raise TransactionStateError(self._state.value, "commit")
        commit_transaction(self._connection, self._adapter)
        self._state = _TxState.COMMITTED

    def rollback(self) -> None:
        """Explicitly roll back the transaction."""
        if self._state != _TxState.ACTIVE:
            raise TransactionStateError(self._state.value, "rollback")
        rollback_transaction(self._connection, self._adapter)
        self._state = _TxState.ROLLED_BACK

    def _check_active(self) -> None:
        if self._state != _TxState.ACTIVE:
            raise TransactionStateError(self._state.value, "execute")

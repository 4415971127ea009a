"""Statement helpers shared by Engine and TransactionManager.

Driver exceptions raised while executing a statement or reading its result
are translated to QueryExecutionError here, keeping the driver's message.
"""

from __future__ import annotations

import logging
from typing import Any

from dbutil.core.connection import close_cursor
from dbutil.core.exceptions import DbUtilError, QueryExecutionError
from dbutil.mapping.rows import ResultSet

logger = logging.getLogger(__name__)


def execute_query(adapter: Any, connection: Any, sql: str, params: Any = None) -> Any:
    """Execute a query and return the live cursor. The caller closes it."""
    logger.debug(f"Executing query: {sql}")
    try:
        return adapter.execute(connection, sql, params)
    except Exception as e:
        raise QueryExecutionError(sql, str(e)) from e


def execute_update(adapter: Any, connection: Any, sql: str, params: Any = None) -> int:
    """Execute a write statement and return the affected row count (never negative)."""
    logger.debug(f"Executing update: {sql}")
    try:
        cursor = adapter.execute(connection, sql, params)
    except Exception as e:
        raise QueryExecutionError(sql, str(e)) from e

    try:
        rowcount = cursor.rowcount
        # DB-API reports -1 when the count is unknown (DDL, some drivers)
        return int(rowcount) if rowcount is not None and rowcount > 0 else 0
    finally:
        close_cursor(cursor)


def fetch_result(adapter: Any, connection: Any, sql: str, params: Any = None) -> ResultSet:
    """Execute a query and materialize its full result."""
    cursor = execute_query(adapter, connection, sql, params)
    try:
        return ResultSet.from_cursor(cursor)
    except DbUtilError:
        raise
    except Exception as e:
        raise QueryExecutionError(sql, str(e)) from e
    finally:
        close_cursor(cursor)

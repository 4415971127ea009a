"""Statement execution shared by every DB-API 2.0 adapter."""

from __future__ import annotations

from typing import Any

from dbutil.core.connection import close_cursor


def execute_statement(connection: Any, sql: str, params: Any = None) -> Any:
    """Run ``sql`` on a fresh cursor and return the cursor.

    ``params`` is only forwarded when given, so SQL without placeholders is
    never run through the driver's parameter substitution. The cursor is
    closed if execution fails.
    """
    cursor = connection.cursor()
    try:
        if params is None:
            cursor.execute(sql)
        else:
            cursor.execute(sql, params)
    except Exception:
        close_cursor(cursor)
        raise
    return cursor

"""Materialized results and generic row mappers."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from dbutil.core.exceptions import SchemaReadError

Row = dict[str, Any]
PairRow = list[tuple[str, Any]]


@dataclass(frozen=True)
class ResultSet:
    """A fully materialized query result.

    ``columns`` holds the column names in schema order, exactly as the driver
    reports them (duplicates included). ``rows`` holds one value tuple per
    record, in the order the database returned them.
    """

    columns: tuple[str, ...]
    rows: list[tuple[Any, ...]]

    @classmethod
    def from_cursor(cls, cursor: Any) -> ResultSet:
        """Read the schema and every remaining row from a DB-API cursor.

        Raises:
            SchemaReadError: If the cursor has no result schema (the statement
                produced no result set) or the schema cannot be read.
        """
        try:
            description = cursor.description
        except Exception as e:
            raise SchemaReadError(str(e)) from e
        if description is None:
            raise SchemaReadError("statement did not produce a result set")

        try:
            columns = tuple(str(desc[0]) for desc in description)
        except Exception as e:
            raise SchemaReadError(str(e)) from e

        return cls(columns=columns, rows=[tuple(row) for row in cursor.fetchall()])

    def __len__(self) -> int:
        return len(self.rows)


class DictRowMapper:
    """Maps each row to a dict keyed by column name, in schema order.

    Known lossy behavior: when two columns share a name, the later column's
    value overwrites the earlier one. Use PairRowMapper to keep both.
    """

    def map_result(self, result: ResultSet) -> list[Row]:
        return [dict(zip(result.columns, row, strict=True)) for row in result.rows]


class PairRowMapper:
    """Maps each row to an ordered list of (column, value) pairs."""

    def map_result(self, result: ResultSet) -> list[PairRow]:
        return [list(zip(result.columns, row, strict=True)) for row in result.rows]

"""Mapper protocol.

All mappers implement this interface. The Engine materializes a ResultSet
and hands it to ``map_result``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, TypeVar

if TYPE_CHECKING:
    from dbutil.mapping.rows import ResultSet

T_co = TypeVar("T_co", covariant=True)


class Mapper(Protocol[T_co]):
    """Base mapper protocol."""

    def map_result(self, result: ResultSet) -> list[T_co]:
        """Map every row of a materialized result."""
        ...

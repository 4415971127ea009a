"""Database adapter protocol.

Every adapter module MUST implement this protocol. The adapter is the only
place where vendor drivers are touched; everything above it works on plain
DB-API connections and cursors.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from dbutil.core.connection import ConnectionConfig
from dbutil.core.enums import DatabaseBackend


@runtime_checkable
class DriverAdapter(Protocol):
    """Thin binding between dbutil and one vendor's DB-API driver."""

    @property
    def backend(self) -> DatabaseBackend:
        """The backend this adapter binds."""
        ...

    def connect(self, config: ConnectionConfig) -> Any:
        """Open a new driver connection."""
        ...

    def execute(
        self,
        connection: Any,
        sql: str,
        params: Any = None,
    ) -> Any:
        """Execute SQL verbatim and return the open cursor."""
        ...

    def set_autocommit(self, connection: Any, enabled: bool) -> None:
        """Switch the connection's auto-commit mode."""
        ...

    def get_autocommit(self, connection: Any) -> bool:
        """Report the connection's auto-commit mode."""
        ...

"""dbutil exception hierarchy.

Driver exceptions are translated at the engine boundary and chained as
``__cause__``; callers only need to catch ``DbUtilError`` subclasses.
"""

from __future__ import annotations


class DbUtilError(Exception):
    """Base exception for all dbutil errors."""


# --- Adapter ---


class AdapterError(DbUtilError):
    """Raised for unknown drivers or driver packages that cannot be imported."""


class ConnectionError(AdapterError):  # noqa: A001
    """Raised when a connection cannot be opened (network or authentication)."""

    def __init__(self, driver: str, detail: str) -> None:
        self.driver = driver
        super().__init__(f"Failed to connect using '{driver}': {detail}")


# --- Execution ---


class ExecutionError(DbUtilError):
    """Base for statement execution errors."""


class QueryExecutionError(ExecutionError):
    """Raised when the database rejects a statement.

    The message is the driver's message, unchanged.
    """

    def __init__(self, sql: str, detail: str) -> None:
        self.sql = sql
        super().__init__(detail)


# --- Mapping ---


class MappingError(DbUtilError):
    """Base for result mapping errors."""


class SchemaReadError(MappingError):
    """Raised when the column schema of a result cannot be read."""

    def __init__(self, detail: str) -> None:
        super().__init__(f"Cannot read result schema: {detail}")


class RecordInstantiationError(MappingError):
    """Raised when a target record instance cannot be created."""

    def __init__(self, target_class: str, detail: str) -> None:
        self.target_class = target_class
        super().__init__(f"Cannot instantiate {target_class}: {detail}")


# --- Transaction ---


class TransactionError(DbUtilError):
    """Base for transaction errors."""


class TransactionStateError(TransactionError):
    """Raised on invalid transaction state transitions."""

    def __init__(self, current_state: str, attempted_action: str) -> None:
        self.current_state = current_state
        self.attempted_action = attempted_action
        super().__init__(f"Cannot {attempted_action} transaction in state '{current_state}'")

"""Row-to-record mapper.

Supports dataclasses, Pydantic models, plain annotated classes and classes
exposing property setters. Records are created with no arguments and filled
column by column through the record type's binding table.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from dbutil.core.exceptions import MappingError, RecordInstantiationError
from dbutil.mapping.binding import BindingTable
from dbutil.mapping.rows import ResultSet

logger = logging.getLogger(__name__)

T = TypeVar("T")

NO_SETTER = "no_setter"
TYPE_MISMATCH = "type_mismatch"


@dataclass(frozen=True)
class MappingDiagnostic:
    """A column that was skipped while mapping one row."""

    row_index: int
    column: str
    reason: str
    detail: str


@dataclass(frozen=True)
class MappingReport(Generic[T]):
    """Records produced by a mapping call plus the columns it skipped."""

    records: list[T]
    diagnostics: list[MappingDiagnostic]


class RecordMapper(Generic[T]):
    """Maps result rows onto instances of ``target_class``.

    For every row a record is created with ``target_class()``, then each column
    is applied in schema order. A column without a matching field, or whose
    value type the field does not accept, is skipped and reported as a
    diagnostic; the rest of the row is still applied.

    Args:
        target_class: The class to construct for each row.
        aliases: Optional column-name to field-name mapping.
    """

    def __init__(
        self,
        target_class: type[T],
        aliases: Mapping[str, str] | None = None,
    ) -> None:
        self._target_class = target_class
        self._bindings = BindingTable.for_type(target_class, aliases)

    @property
    def target_class(self) -> type[T]:
        return self._target_class

    @property
    def bindings(self) -> BindingTable:
        return self._bindings

    def _instantiate(self) -> T:
        try:
            return self._target_class()
        except Exception as e:
            raise RecordInstantiationError(self._target_class.__name__, str(e)) from e

    def map_report(self, result: ResultSet) -> MappingReport[T]:
        """Map every row and return the records with their diagnostics.

        Raises:
            RecordInstantiationError: If a record cannot be created; no
                partial result is returned.
            MappingError: If assigning an accepted value raises.
        """
        name = self._target_class.__name__
        logger.info(f"Mapping {len(result)} row(s) to {name}")

        resolved = [self._bindings.resolve(column) for column in result.columns]
        records: list[T] = []
        diagnostics: list[MappingDiagnostic] = []

        for row_index, row in enumerate(result.rows):
            record = self._instantiate()
            for column, binding, value in zip(result.columns, resolved, row, strict=True):
                if binding is None:
                    diagnostic = MappingDiagnostic(
                        row_index, column, NO_SETTER, f"no field of {name} matches column"
                    )
                elif not binding.accepts_value(value):
                    diagnostic = MappingDiagnostic(
                        row_index,
                        column,
                        TYPE_MISMATCH,
                        f"{type(value).__name__} not accepted by {name}.{binding.attribute}",
                    )
                else:
                    try:
                        setattr(record, binding.attribute, value)
                    except Exception as e:
                        raise MappingError(
                            f"Cannot assign column '{column}' to {name}.{binding.attribute}: {e}"
                        ) from e
                    continue

                logger.warning(
                    f"Skipping column '{column}' of row {row_index}: {diagnostic.detail}"
                )
                diagnostics.append(diagnostic)
            records.append(record)

        logger.info(f"Mapped {len(records)} {name} record(s)")
        return MappingReport(records=records, diagnostics=diagnostics)

    def map_result(self, result: ResultSet) -> list[T]:
        """Map every row, returning only the records."""
        return self.map_report(result).records


def as_mapper(target: Any) -> Any:
    """Accept either a mapper or a record class and return a mapper."""
    if isinstance(target, type):
        return RecordMapper(target)
    if hasattr(target, "map_result"):
        return target
    raise TypeError(f"Expected a record class or a mapper, got {target!r}")

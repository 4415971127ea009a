"""Mapping layer - transform materialized results into rows or typed records."""

from __future__ import annotations

from dbutil.mapping.binding import BindingTable, FieldBinding, setter_key
from dbutil.mapping.model import (
    NO_SETTER,
    TYPE_MISMATCH,
    MappingDiagnostic,
    MappingReport,
    RecordMapper,
)
from dbutil.mapping.protocol import Mapper
from dbutil.mapping.rows import DictRowMapper, PairRowMapper, ResultSet

__all__ = [
    "Mapper",
    "ResultSet",
    "DictRowMapper",
    "PairRowMapper",
    "RecordMapper",
    "MappingReport",
    "MappingDiagnostic",
    "NO_SETTER",
    "TYPE_MISMATCH",
    "BindingTable",
    "FieldBinding",
    "setter_key",
]

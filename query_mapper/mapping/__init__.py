"""Mapping layer - bind result columns to records and typed objects."""

from __future__ import annotations

from query_mapper.mapping.binding import (
    ColumnBinding,
    bind_columns,
    has_indexer,
    writable_fields,
)
from query_mapper.mapping.record import Record

__all__ = [
    "Record",
    "ColumnBinding",
    "bind_columns",
    "has_indexer",
    "writable_fields",
]

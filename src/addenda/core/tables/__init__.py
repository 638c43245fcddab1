"""
Frozen table descriptors for tabular extender and record batches.

Notes:
    - Descriptors declare column names/dtypes and required/nullable columns.
    - Column names are lower_snake.
    - Core is zero-IO (stdlib only); addenda.io materializes and validates frames.
"""

from __future__ import annotations

from ..grammar import ExtenderKind, TableDescriptor, TableName
from .annotations import ANNOTATIONS_DESC
from .metadata import METADATA_DESC
from .records import RECORDS_DESC

__all__ = [
    "TableDescriptor",
    "ANNOTATIONS_DESC",
    "METADATA_DESC",
    "RECORDS_DESC",
    "get_table",
    "list_tables",
    "table_for_kind",
]


# Registry
_TABLES: dict[TableName, TableDescriptor] = {
    ANNOTATIONS_DESC.name: ANNOTATIONS_DESC,
    METADATA_DESC.name: METADATA_DESC,
    RECORDS_DESC.name: RECORDS_DESC,
}

_KIND_TABLES: dict[ExtenderKind, TableName] = {
    ExtenderKind.ANNOTATION: TableName.ANNOTATIONS,
    ExtenderKind.METADATA: TableName.METADATA,
}


def get_table(name: TableName) -> TableDescriptor:
    """Look up a table descriptor by canonical name."""
    return _TABLES[name]


def list_tables() -> list[TableDescriptor]:
    """Return all registered table descriptors in registry order."""
    return list(_TABLES.values())


def table_for_kind(kind: ExtenderKind) -> TableDescriptor:
    """Descriptor of the table that holds extenders of the given kind."""
    return _TABLES[_KIND_TABLES[kind]]

"""
Canonical descriptor for the 'annotations' table.

Purpose:
- A batch of annotation extenders, one row per annotation, in bag field order.

Schema:
- columns:
    id i64, entity_guid i64, owner_guid i64, name str, value str, value_type str,
    time_created i64
- required:
    ["entity_guid","owner_guid","name","value","value_type"]
- nullable:
    ["id","time_created"]

Notes:
- `value` is always carried as text; `value_type` says how to read it back.
- Unsaved extenders have no id yet, hence nullable.
"""

from __future__ import annotations

from ..grammar import TableDescriptor, TableName

ANNOTATIONS_DESC = TableDescriptor(
    name=TableName.ANNOTATIONS,
    columns={
        "id": "i64",
        "entity_guid": "i64",
        "owner_guid": "i64",
        "name": "str",
        "value": "str",
        "value_type": "str",
        "time_created": "i64",
    },
    required=[
        "entity_guid",
        "owner_guid",
        "name",
        "value",
        "value_type",
    ],
    nullable=[
        "id",
        "time_created",
    ],
)

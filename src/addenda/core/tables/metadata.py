"""
Canonical descriptor for the 'metadata' table.

Purpose:
- A batch of metadata extenders. Same shape as 'annotations'; the two kinds differ
  only in where the host persists them.

Schema:
- columns:
    id i64, entity_guid i64, owner_guid i64, name str, value str, value_type str,
    time_created i64
- required:
    ["entity_guid","owner_guid","name","value","value_type"]
- nullable:
    ["id","time_created"]
"""

from __future__ import annotations

from ..grammar import TableDescriptor, TableName

METADATA_DESC = TableDescriptor(
    name=TableName.METADATA,
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

"""
Canonical descriptor for the 'records' table.

Purpose:
- A batch of external records awaiting import, one row per record.

Schema:
- columns:
    uuid str, entity_uuid str, name str, body str, type str, owner_uuid str, published str
- required:
    ["entity_uuid","name"]
- nullable:
    ["uuid","body","type","owner_uuid","published"]

Notes:
- A null `type` imports as a plain entity attribute.
"""

from __future__ import annotations

from ..grammar import TableDescriptor, TableName

RECORDS_DESC = TableDescriptor(
    name=TableName.RECORDS,
    columns={
        "uuid": "str",
        "entity_uuid": "str",
        "name": "str",
        "body": "str",
        "type": "str",
        "owner_uuid": "str",
        "published": "str",
    },
    required=[
        "entity_uuid",
        "name",
    ],
    nullable=[
        "uuid",
        "body",
        "type",
        "owner_uuid",
        "published",
    ],
)

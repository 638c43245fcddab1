"""
Apply an external record to a live entity, in memory.

| record.type      | Effect on the entity                                  |
|------------------|-------------------------------------------------------|
| volatile         | nothing (transient data is never kept)                |
| annotation       | entity.annotate(name, body)                           |
| metadata         | entity.set_metadata(name, body, "", True)             |
| anything / none  | entity.set(name, body) as a plain attribute           |

When the record carries `published`, the entity's time_updated is set to the parsed
timestamp as well.

The entity is never saved here: callers may apply several records and save once, or
discard the in-memory entity to drop the whole batch.
"""

from __future__ import annotations

from .grammar import RecordKind, record_kind_from_value
from .protocols import Entity
from .schema import ExternalRecord
from .timestamps import parse_published

__all__ = [
    "record_to_extender",
]


def record_to_extender(entity: Entity, record: ExternalRecord) -> bool:
    """
    Reconcile one record onto an entity without persisting.

    Args:
        entity (Entity): Target host entity.
        record (ExternalRecord): Incoming record.

    Returns:
        bool: Always True.

    Raises:
        addenda.core.errors.SchemaError: If `published` is present but unparseable.
    """
    kind = record_kind_from_value(record.type)
    name = record.name
    body = record.body
    # Parsed up front so a bad timestamp leaves the entity untouched.
    updated = parse_published(record.published) if record.published else None

    if kind is RecordKind.VOLATILE:
        pass
    elif kind is RecordKind.ANNOTATION:
        entity.annotate(name, body)
    elif kind is RecordKind.METADATA:
        entity.set_metadata(name, body, "", True)
    else:
        entity.set(name, body)

    if updated is not None:
        entity.set("time_updated", updated)

    return True

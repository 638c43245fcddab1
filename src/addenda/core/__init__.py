"""
Core package aggregator for addenda contracts (grammar, extender model, records, permissions).

## Contracts (single source of truth)
- Grammar — enums (ValueType, ExtenderKind, RecordKind, TableName) and value-type coercion.
- Extender — the attribute bag with typed get/set, cursor and indexed views, export.
- Schema — the ExternalRecord pydantic model.
- Reconcile — applying a record to a live entity in memory.
- Permissions/Hooks — layered edit decision with a pluggable policy chain.
- Tables — descriptors for tabular batches (materialized by addenda.io).

## Notes
- Zero-IO policy: stdlib + pydantic only; no file/network IO.
- Collaborators (entity store, identity store, extender stores) are Protocols in
  `protocols`; the host system provides them.
- Enum `.value` and field/column names are lower_snake.

## Examples
```python
from addenda.core import annotation, record_to_extender

note = annotation(id=7, entity_guid=42, owner_guid=3, name="rating", value="5", time_created=0)
note.value            # 5 (value_type "integer", raw "5" kept in the bag)
rec = note.export()   # ExternalRecord(uuid="http://localhost/export/opendd/42/annotation/7/", ...)
record_to_extender(entity, rec)  # entity.annotate("rating", "5"); no save
```
"""

from __future__ import annotations

from .errors import ExtenderError, GrammarError, SchemaError, StoreNotConfigured, UnsupportedValueType
from .extender import Extender, annotation, metadata
from .grammar import ExtenderKind, RecordKind, ValueType, detect_value_type
from .hooks import HookChain
from .permissions import PermissionContext, can_edit_extender
from .protocols import Session
from .reconcile import record_to_extender
from .schema import ExternalRecord

__all__ = [
    "Extender",
    "annotation",
    "metadata",
    "ExternalRecord",
    "ExtenderKind",
    "RecordKind",
    "ValueType",
    "detect_value_type",
    "record_to_extender",
    "HookChain",
    "PermissionContext",
    "Session",
    "can_edit_extender",
    "ExtenderError",
    "GrammarError",
    "SchemaError",
    "StoreNotConfigured",
    "UnsupportedValueType",
]

"""
addenda.io — boundary layer for extender records.

## Responsibilities
- Load runtime settings (env > TOML > defaults).
- Import external records into host entities through the "import" hook chain,
  one unit of work per record.
- Materialize batches of extenders and records as Polars frames validated against
  addenda.core.tables descriptors.

## Public API
- Settings — configuration (site url, hook priority, frame strictness, timestamp style).
- ExtenderImporter — the import hook handler and batch runner.
- extenders_to_frame / frame_to_extenders / records_to_frame / frame_to_records.
- export_records / export_frame — export under the configured site url and timestamp style.

## Import DAG discipline
- Depends only on stdlib, polars, and addenda.core.*.
- addenda.core MUST NOT import this package.

## Examples
```python
from addenda.core import HookChain, metadata
from addenda.io import ExtenderImporter, Settings, export_records, extenders_to_frame

settings = Settings.load()
hooks = HookChain()
ExtenderImporter(entity_store, settings).register(hooks)  # doctest: +SKIP

m = metadata(id=1, entity_guid=42, owner_guid=3, name="color", value="blue", time_created=0)
(record,) = export_records([m], settings)
hooks.trigger("import", "all", {"element": record})  # doctest: +SKIP
extenders_to_frame([m])  # doctest: +SKIP
```
"""

from __future__ import annotations

from .config import Settings
from .errors import EntityNotFound, FrameSchemaError, ImportFailure, InvalidRecord, PersistError
from .export import export_frame, export_records
from .frame import extenders_to_frame, frame_to_extenders, frame_to_records, records_to_frame
from .importer import ExtenderImporter

__all__ = [
    "Settings",
    "ExtenderImporter",
    "export_records",
    "export_frame",
    "extenders_to_frame",
    "frame_to_extenders",
    "records_to_frame",
    "frame_to_records",
    "ImportFailure",
    "EntityNotFound",
    "PersistError",
    "InvalidRecord",
    "FrameSchemaError",
]

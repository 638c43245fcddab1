"""
Hook-driven import of external records into host entities.

One import unit is one record: resolve the host entity from the record's
entity_uuid, reconcile the record onto it in memory, then save the entity once.
Any failure raises an ImportFailure and nothing from that unit is saved.

Overview
- ExtenderImporter is a hook handler: register it on a HookChain for ("import", "all")
  and trigger the chain with params={"element": record}.
- import_records / import_frame run batches; the first failing unit propagates to the
  caller and later units are not attempted.

Source of truth
- Reconciliation semantics: addenda.core.reconcile.record_to_extender.
- Errors: addenda.io.errors (EntityNotFound, PersistError, InvalidRecord).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

import polars as pl

from addenda.core.constants import ALL, IMPORT_EVENT
from addenda.core.errors import SchemaError
from addenda.core.hooks import HookChain
from addenda.core.protocols import EntityStore
from addenda.core.reconcile import record_to_extender
from addenda.core.schema import ExternalRecord

from .config import Settings
from .errors import EntityNotFound, InvalidRecord, PersistError
from .frame import frame_to_records

__all__ = [
    "ExtenderImporter",
]

logger = logging.getLogger(__name__)


class ExtenderImporter:
    """
    Import handler bound to an entity store.

    Args:
        entities (EntityStore): Resolves host entities by universal identifier.
        settings (Settings | None): Hook priority and frame strictness; defaults when None.

    Examples:
        >>> hooks = HookChain()                                    # doctest: +SKIP
        >>> ExtenderImporter(store).register(hooks)                # doctest: +SKIP
        >>> hooks.trigger("import", "all", {"element": record})    # doctest: +SKIP
        True
    """

    def __init__(self, entities: EntityStore, settings: Settings | None = None) -> None:
        self.entities = entities
        self.settings = settings or Settings()

    def register(self, hooks: HookChain) -> None:
        hooks.register(IMPORT_EVENT, ALL, self, priority=self.settings.import_hook_priority)

    def __call__(self, event: str, kind: str, result: Any, params: Mapping[str, Any]) -> Any:
        element = params.get("element")
        if not isinstance(element, ExternalRecord):
            return None
        return self.import_record(element)

    def import_record(self, record: ExternalRecord) -> bool:
        """
        Apply one record to its entity and save it.

        Raises:
            EntityNotFound: entity_uuid does not resolve.
            InvalidRecord: the record cannot be applied (e.g., unparseable published).
            PersistError: the entity refused to save.
        """
        entity_uuid = record.entity_uuid
        entity = self.entities.get_entity_from_uuid(entity_uuid) if entity_uuid else None
        if entity is None:
            raise EntityNotFound(f"entity {entity_uuid!r} not found", uuid=entity_uuid)

        try:
            record_to_extender(entity, record)
        except SchemaError as exc:
            raise InvalidRecord(str(exc), uuid=entity_uuid) from exc

        if not entity.save():
            raise PersistError(
                f"problem updating {record.name!r} on {entity_uuid!r}", uuid=entity_uuid
            )

        logger.debug("imported %s %r onto %s", record.type or "attribute", record.name, entity_uuid)
        return True

    def import_records(self, records: Iterable[ExternalRecord]) -> int:
        """Import records in order; returns how many units completed."""
        done = 0
        for record in records:
            self.import_record(record)
            done += 1
        logger.info("imported %d record(s)", done)
        return done

    def import_frame(self, df: pl.DataFrame) -> int:
        """Validate a 'records' frame and import each row."""
        return self.import_records(frame_to_records(df, strict=self.settings.strict_schema))

"""
Custom exceptions for the addenda.io layer.

Purpose
- Give the import boundary its own error types; addenda.core errors stay the source
  of truth for value and record validation.

Source of truth and boundaries
- addenda.core.errors.SchemaError is raised by core parsing (e.g., a bad published
  timestamp); the importer re-raises it as InvalidRecord.
- addenda.io raises:
  - EntityNotFound: the record's entity_uuid does not resolve.
  - PersistError: the entity refused to save after reconciliation.
  - InvalidRecord: the record could not be applied.
  - FrameSchemaError: a polars frame fails its table descriptor.

Notes
- Every ImportFailure aborts its import unit; nothing from that record is saved.
"""

from __future__ import annotations

__all__ = [
    "ImportFailure",
    "EntityNotFound",
    "PersistError",
    "InvalidRecord",
    "FrameSchemaError",
]


class ImportFailure(Exception):
    """
    Base class for failures of one import unit.

    Attributes:
        uuid (str | None): Universal identifier of the entity involved, when known.
    """

    def __init__(self, message: str, uuid: str | None = None) -> None:
        super().__init__(message)
        self.uuid = uuid


class EntityNotFound(ImportFailure):
    """The record's host entity could not be resolved from its universal identifier."""


class PersistError(ImportFailure):
    """The host entity failed to save after the record was applied."""


class InvalidRecord(ImportFailure):
    """The record is malformed and cannot be applied."""


class FrameSchemaError(ValueError):
    """
    A DataFrame fails validation against its addenda.core.tables descriptor.

    Notes:
        Scalar columns ("i64", "str") may be safely cast prior to raising.
    """

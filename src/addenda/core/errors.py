"""
Core exception types raised by value coercion, grammar normalization, and record parsing.

Provides typed exceptions for core-domain failures:
- ExtenderError as the base for extender model failures.
- UnsupportedValueType when a stored value_type is outside {integer, text} at read time.
- StoreNotConfigured when save()/delete() is called on an extender without a store.
- GrammarError for unknown kind/value-type tokens.
- SchemaError for record-level constraints (e.g., an unparseable published timestamp).

Notes:
    - This module uses only the Python standard library and has no side effects.
    - Import-unit failures (EntityNotFound, PersistError) belong to the boundary layer;
      see addenda.io.errors.

Examples:
    Skip an attribute whose value type is unknown.

    >>> from addenda.core.errors import UnsupportedValueType
    >>> try:
    ...     raise UnsupportedValueType("tag")
    ... except UnsupportedValueType as e:
    ...     e.value_type
    'tag'
"""

from __future__ import annotations

__all__ = [
    "ExtenderError",
    "UnsupportedValueType",
    "StoreNotConfigured",
    "GrammarError",
    "SchemaError",
]


class ExtenderError(Exception):
    """Base class for extender model failures."""


class UnsupportedValueType(ExtenderError, TypeError):
    """
    Stored value_type is not one the read path knows how to convert.

    Attributes:
        value_type (object): The offending value_type as stored in the bag.
    """

    def __init__(self, value_type: object) -> None:
        self.value_type = value_type
        super().__init__(f"value type {value_type!r} is not supported")


class StoreNotConfigured(ExtenderError):
    """save() or delete() was called on an extender that has no backing store."""


class GrammarError(ValueError):
    """Unknown or malformed kind/value-type token."""


class SchemaError(ValueError):
    """Record-level validation failure (shape, unparseable fields)."""

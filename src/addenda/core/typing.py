"""
Lightweight typing aliases used across the extender model and its records.

This module contains no runtime logic and is zero-IO.

Examples:
    >>> from addenda.core.typing import Guid, Timestamp
    >>> def bump(t: Timestamp) -> Timestamp:
    ...     return Timestamp(int(t) + 1)
    >>> bump(Timestamp(10))
    11
"""

from __future__ import annotations

from typing import Any, NewType

__all__ = [
    "Guid",
    "ExtenderId",
    "Timestamp",
    "Uuid",
    "JsonDict",
]

# Entity and identity identifiers handed out by the host system.
Guid = NewType("Guid", int)
ExtenderId = NewType("ExtenderId", int)
# Epoch seconds.
Timestamp = NewType("Timestamp", int)
# Universal identifiers used in exported records (URL-shaped).
Uuid = NewType("Uuid", str)

JsonDict = dict[str, Any]

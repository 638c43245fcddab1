"""
Collaborator interfaces consumed by the extender core.

The host system supplies these: entity persistence, identity lookup, delegated
entity permissions and extender persistence. The core only calls them
synchronously and never retries.

Notes:
    - Session replaces any global "current user": the request layer builds one
      and passes it to permission checks explicitly.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from .extender import Extender

__all__ = [
    "Entity",
    "EntityStore",
    "Identity",
    "IdentityStore",
    "ExtenderStore",
    "ExtenderLookup",
    "EntityPermission",
    "Session",
]


class Entity(Protocol):
    """Host entity that extenders attach to."""

    guid: int

    def annotate(self, name: str, value: Any) -> Any:
        """Append a new annotation to the entity."""
        ...

    def set_metadata(self, name: str, value: Any, name_space: str = "", multiple: bool = False) -> Any:
        """Upsert metadata; `multiple` allows several values under one name."""
        ...

    def set(self, name: str, value: Any) -> Any:
        """Set a plain attribute on the entity."""
        ...

    def save(self) -> bool:
        """Persist the entity. Returns False on failure."""
        ...


class EntityStore(Protocol):
    """Entity resolution by local guid or universal identifier."""

    def get_entity(self, guid: int) -> Entity | None:
        ...

    def get_entity_from_uuid(self, uuid: str) -> Entity | None:
        ...


class Identity(Protocol):
    """An acting identity (usually a user)."""

    guid: int


class IdentityStore(Protocol):
    def get_identity(self, guid: int) -> Identity | None:
        ...


class ExtenderStore(Protocol):
    """Kind-specific persistence for extenders (the annotations or the metadata table)."""

    def save(self, extender: Extender) -> int | None:
        """Persist the extender and return its id, or None on failure."""
        ...

    def delete(self, extender: Extender) -> bool:
        ...


# Kind-specific lookup: extender id -> extender, or None when unknown.
ExtenderLookup = Callable[[int], Any]

# Delegated check: (entity_guid, user_guid) -> may edit the entity.
EntityPermission = Callable[[int, int], bool]


@dataclass(frozen=True)
class Session:
    """
    Request-scoped authentication state.

    Attributes:
        identity (Identity | None): Identity bound to the session.
        is_authenticated (bool): Whether the request is logged in.
    """

    identity: Identity | None = None
    is_authenticated: bool = False

    @classmethod
    def for_identity(cls, identity: Identity) -> Session:
        return cls(identity=identity, is_authenticated=True)

    @classmethod
    def anonymous(cls) -> Session:
        return cls()

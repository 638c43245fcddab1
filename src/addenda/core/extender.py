"""
The extender model: one named, typed value attached to a host entity.

Responsibilities
- Hold the attribute bag (insertion-ordered dict) with the reserved fields
  id, entity_guid, owner_guid, name, value, value_type, time_created, type.
- Typed get/set: set re-derives value_type; reading `value` converts by value_type.
- Expose the cursor protocol (rewind/valid/current/key/next) and the indexed
  protocol (exists/read/write/clear, plus the Python item protocol).
- Export to an ExternalRecord; delegate save/delete to a kind-specific store;
  delegate edit permission to addenda.core.permissions.

Notes
- Variants form a closed set selected by the `type` tag (ExtenderKind); use the
  annotation() and metadata() factories rather than subclassing.
- Storage is raw: a numeric-looking string is tagged "integer" but kept as a string,
  and export() publishes the raw representation.
- Not safe for concurrent mutation; confine an instance to one request.

Examples:
    >>> from addenda.core.extender import metadata
    >>> m = metadata(entity_guid=10, owner_guid=3, name="age", value="42")
    >>> m.get("value_type"), m.value, m.read("value")
    ('integer', 42, '42')
    >>> del m["value"]
    >>> "value" in m, m.read("value")
    (True, '')
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import TYPE_CHECKING, Any

from .constants import DEFAULT_SITE_URL, RESERVED_ATTRIBUTES
from .errors import StoreNotConfigured, UnsupportedValueType
from .grammar import ExtenderKind, ValueType, detect_value_type, extender_kind_from_value, integer_value
from .ids import extender_uuid, guid_to_uuid
from .schema import ExternalRecord
from .timestamps import PublishedFormat, format_published
from .views import BagCursor, IndexedView

if TYPE_CHECKING:
    from .permissions import PermissionContext
    from .protocols import Entity, EntityStore, ExtenderStore, Identity, IdentityStore, Session

__all__ = [
    "Extender",
    "annotation",
    "metadata",
]


class Extender:
    """
    Named, typed value attached to exactly one host entity.

    Args:
        kind (ExtenderKind | str): "annotation" or "metadata".
        store (ExtenderStore | None): Persistence for this kind; required by save()/delete().
        **attributes: Initial bag contents. Unknown names are kept after the reserved ones.
            When `value` is given without a non-empty `value_type`, the type is detected.

    Raises:
        addenda.core.errors.GrammarError: If kind is not a known extender kind.
    """

    def __init__(
        self,
        kind: ExtenderKind | str,
        *,
        store: ExtenderStore | None = None,
        **attributes: Any,
    ) -> None:
        k = extender_kind_from_value(kind)
        bag: dict[str, Any] = dict.fromkeys(RESERVED_ATTRIBUTES)
        bag.update(attributes)
        bag["type"] = k.value
        if "value" in attributes:
            # An empty override means "detect".
            bag["value_type"] = detect_value_type(
                attributes["value"], attributes.get("value_type") or ""
            )
        self._attributes = bag
        self._store = store
        self._cursor = BagCursor(bag)
        self._view = IndexedView(bag)

    # ------------------------------------------------------------------
    # Attribute bag
    # ------------------------------------------------------------------

    def get(self, name: str) -> Any:
        """
        Read an attribute.

        Returns:
            Any: None when the attribute is absent or unset. For `value`, the raw value
            converted by the current value_type.

        Raises:
            UnsupportedValueType: Reading `value` while value_type is outside {integer, text}.
        """
        raw = self._attributes.get(name)
        if raw is None:
            return None
        if name != "value":
            return raw

        value_type = self._attributes.get("value_type")
        if value_type == ValueType.INTEGER.value:
            return integer_value(raw)
        if value_type == ValueType.TEXT.value:
            return raw
        raise UnsupportedValueType(value_type)

    def set(self, name: str, value: Any, value_type: str = "") -> bool:
        """Store an attribute and re-derive value_type (explicit value_type wins)."""
        self._attributes[name] = value
        self._attributes["value_type"] = detect_value_type(value, value_type)
        return True

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        attributes = self.__dict__.get("_attributes")
        if attributes is not None and name in attributes:
            return self.get(name)
        raise AttributeError(f"{type(self).__name__!s} has no attribute {name!r}")

    @property
    def kind(self) -> ExtenderKind:
        return extender_kind_from_value(self._attributes["type"])

    def as_dict(self) -> dict[str, Any]:
        """Shallow copy of the raw bag, in bag order."""
        return dict(self._attributes)

    # ------------------------------------------------------------------
    # Cursor protocol
    # ------------------------------------------------------------------

    def rewind(self) -> None:
        self._cursor.rewind()

    def valid(self) -> bool:
        return self._cursor.valid()

    def current(self) -> Any:
        return self._cursor.current()

    def key(self) -> str | None:
        return self._cursor.key()

    def next(self) -> None:
        self._cursor.next()

    def __iter__(self) -> Iterator[tuple[str, Any]]:
        # Fresh cursor so nested loops do not share a position.
        return iter(BagCursor(self._attributes))

    # ------------------------------------------------------------------
    # Indexed protocol
    # ------------------------------------------------------------------

    def exists(self, key: str) -> bool:
        return self._view.exists(key)

    def read(self, key: str) -> Any:
        return self._view.read(key)

    def write(self, key: str, value: Any) -> None:
        self._view.write(key, value)

    def clear(self, key: str) -> None:
        self._view.clear(key)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self._view.exists(key)

    def __getitem__(self, key: str) -> Any:
        return self._view.read(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self._view.write(key, value)

    def __delitem__(self, key: str) -> None:
        self._view.clear(key)

    def __len__(self) -> int:
        return len(self._attributes)

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export(
        self,
        site_url: str = DEFAULT_SITE_URL,
        published_format: PublishedFormat = "rfc2822",
    ) -> ExternalRecord:
        """
        Serialize to an ExternalRecord.

        Args:
            site_url (str): Root used to mint universal identifiers.
            published_format (PublishedFormat): Rendering of time_created.

        Returns:
            ExternalRecord: uuid "<entity-uuid><type>/<id>/", entity/owner uuids, name,
            raw value as body, type, and published when time_created is set.
        """
        bag = self._attributes
        kind = bag["type"]
        entity_guid = bag["entity_guid"]
        time_created = bag["time_created"]
        return ExternalRecord(
            uuid=extender_uuid(entity_guid, kind, bag["id"], site_url),
            entity_uuid=guid_to_uuid(entity_guid, site_url),
            name=bag["name"],
            body=bag["value"],
            type=kind,
            owner_uuid=guid_to_uuid(bag["owner_guid"], site_url),
            published=(
                format_published(time_created, published_format) if time_created is not None else None
            ),
        )

    # ------------------------------------------------------------------
    # Persistence hooks
    # ------------------------------------------------------------------

    def save(self) -> bool:
        """Persist through the kind's store; records the id the store hands back."""
        if self._store is None:
            raise StoreNotConfigured(f"no store configured for {self.class_name}")
        new_id = self._store.save(self)
        if not new_id:
            return False
        self._attributes["id"] = new_id
        return True

    def delete(self) -> bool:
        if self._store is None:
            raise StoreNotConfigured(f"no store configured for {self.class_name}")
        return bool(self._store.delete(self))

    # ------------------------------------------------------------------
    # Relations and permissions
    # ------------------------------------------------------------------

    def owner(self, identities: IdentityStore) -> Identity | None:
        return identities.get_identity(self._attributes["owner_guid"])

    def entity(self, entities: EntityStore) -> Entity | None:
        return entities.get_entity(self._attributes["entity_guid"])

    def can_edit(
        self,
        context: PermissionContext,
        user_guid: int = 0,
        session: Session | None = None,
    ) -> bool:
        """Whether the given (or session) identity may edit this extender."""
        from .permissions import can_edit_extender

        return can_edit_extender(context, self._attributes["id"], self.kind, user_guid, session)

    # System log identification.

    @property
    def system_log_id(self) -> int | None:
        return self._attributes["id"]

    @property
    def class_name(self) -> str:
        return str(self._attributes["type"] or "extender").title()

    @property
    def object_owner_guid(self) -> int | None:
        return self._attributes["owner_guid"]

    def __repr__(self) -> str:
        bag = self._attributes
        return f"{self.class_name}(id={bag['id']!r}, entity_guid={bag['entity_guid']!r}, name={bag['name']!r})"


def annotation(*, store: ExtenderStore | None = None, **attributes: Any) -> Extender:
    """Build an annotation extender."""
    return Extender(ExtenderKind.ANNOTATION, store=store, **attributes)


def metadata(*, store: ExtenderStore | None = None, **attributes: Any) -> Extender:
    """Build a metadata extender."""
    return Extender(ExtenderKind.METADATA, store=store, **attributes)

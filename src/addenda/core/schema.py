"""
Pydantic v2 model for the external record an extender exports to and imports from.

Responsibilities
- Define ExternalRecord: string-keyed attributes (uuid, entity_uuid, name, type,
  owner_uuid, published, and any others the sender adds) plus a body holding the
  literal value.
- Strip surrounding whitespace from `type`; kind matching stays exact.
- Provide canonical JSON round-trips via addenda.core.serde.

Style
- Zero-IO (stdlib + pydantic only).
- The outer envelope a record travels in is not modelled here.

References
- grammar: src/addenda/core/grammar.py (RecordKind)
- serializer: src/addenda/core/extender.py (Extender.export)
- reconciler: src/addenda/core/reconcile.py
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

from .serde import json_dumps_canonical, json_loads
from .typing import JsonDict

__all__ = [
    "ExternalRecord",
]

_ATTRIBUTE_NAMES: frozenset[str] = frozenset(
    {"uuid", "entity_uuid", "name", "type", "owner_uuid", "published"}
)


class ExternalRecord(BaseModel):
    """
    Serialized form of one extender.

    Attributes:
        uuid (str | None): Universal identifier of the extender itself.
        entity_uuid (str | None): Universal identifier of the host entity.
        name (str): Attribute key.
        body (Any): The literal value, kept in its raw representation.
        type (str | None): Declared kind ("annotation", "metadata", "volatile"), matched
            exactly; any other value, or None, means a plain entity attribute.
        owner_uuid (str | None): Universal identifier of the owning identity.
        published (str | None): Human-readable timestamp of creation.

    Any other keyword is kept as an additional string-keyed attribute.

    Examples:
        >>> from addenda.core.schema import ExternalRecord
        >>> rec = ExternalRecord(name="color", body="blue", type=" metadata ", subtype="blog")
        >>> rec.type
        'metadata'
        >>> rec.get_attribute("subtype")
        'blog'
    """

    model_config = ConfigDict(extra="allow")

    uuid: str | None = None
    entity_uuid: str | None = None
    name: str
    body: Any = None
    type: str | None = None
    owner_uuid: str | None = None
    published: str | None = None

    @field_validator("type")
    @classmethod
    def _normalize_type(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None

    def get_attribute(self, name: str) -> Any:
        """Look up a string-keyed attribute; the body is not an attribute."""
        if name in _ATTRIBUTE_NAMES:
            return getattr(self, name)
        return (self.model_extra or {}).get(name)

    @property
    def attributes(self) -> dict[str, Any]:
        """All attributes that are set, keyed by name."""
        found = {k: v for k in _ATTRIBUTE_NAMES if (v := getattr(self, k)) is not None}
        found.update((k, v) for k, v in (self.model_extra or {}).items() if v is not None)
        return dict(sorted(found.items()))

    def to_dict(self) -> JsonDict:
        return self.model_dump(exclude_none=True)

    def to_json(self) -> str:
        """Canonical JSON text for this record."""
        return json_dumps_canonical(self.to_dict())

    @classmethod
    def from_json(cls, s: str) -> ExternalRecord:
        return cls.model_validate(json_loads(s))

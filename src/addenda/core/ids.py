"""
Universal identifiers for exported entities.

A local guid maps to a URL-shaped uuid under the site root, e.g.
``http://localhost/export/opendd/42/``. Extender record uuids append the
extender type and id: ``http://localhost/export/opendd/42/annotation/7/``.

Examples:
    >>> from addenda.core.ids import guid_to_uuid, uuid_to_guid, extender_uuid
    >>> guid_to_uuid(42)
    'http://localhost/export/opendd/42/'
    >>> uuid_to_guid("http://localhost/export/opendd/42/")
    42
    >>> extender_uuid(42, "metadata", 7)
    'http://localhost/export/opendd/42/metadata/7/'
"""

from __future__ import annotations

import re

from .constants import DEFAULT_SITE_URL, UUID_EXPORT_PATH
from .typing import ExtenderId, Guid, Uuid

__all__ = [
    "guid_to_uuid",
    "extender_uuid",
    "is_uuid_this_domain",
    "uuid_to_guid",
]

_GUID_TAIL_RE = re.compile(r"^(\d+)/")


def guid_to_uuid(guid: int, site_url: str = DEFAULT_SITE_URL) -> Uuid:
    """Return the universal identifier for a local guid."""
    return Uuid(f"{site_url}{UUID_EXPORT_PATH}{guid}/")


def extender_uuid(
    entity_guid: int,
    kind: str,
    extender_id: ExtenderId | int | None,
    site_url: str = DEFAULT_SITE_URL,
) -> Uuid:
    """Return the universal identifier for one extender attached to an entity."""
    return Uuid(f"{guid_to_uuid(entity_guid, site_url)}{kind}/{extender_id}/")


def is_uuid_this_domain(uuid: str, site_url: str = DEFAULT_SITE_URL) -> bool:
    """True when the uuid was minted under this site's root."""
    return bool(uuid) and uuid.startswith(site_url)


def uuid_to_guid(uuid: str, site_url: str = DEFAULT_SITE_URL) -> Guid | None:
    """
    Recover the local guid from a uuid minted by guid_to_uuid.

    Returns:
        Guid | None: None for foreign or malformed uuids.
    """
    prefix = f"{site_url}{UUID_EXPORT_PATH}"
    if not uuid or not uuid.startswith(prefix):
        return None
    m = _GUID_TAIL_RE.match(uuid[len(prefix):])
    if not m:
        return None
    return Guid(int(m.group(1)))

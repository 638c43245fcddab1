"""
Core defaults shared by the extender model, the serializer and the importer.

This module is zero-IO and uses only the Python standard library.

Notes:
    - RESERVED_ATTRIBUTES is the fixed shape of every extender bag; the indexed
      view can update these keys but never introduce or remove them.
    - Event names are the ones handlers register against in addenda.core.hooks.
"""

from __future__ import annotations

from typing import Final

__all__ = [
    "RESERVED_ATTRIBUTES",
    "DEFAULT_SITE_URL",
    "UUID_EXPORT_PATH",
    "IMPORT_EVENT",
    "PERMISSIONS_CHECK_EVENT",
    "ALL",
    "IMPORT_HOOK_PRIORITY",
    "DEFAULT_HOOK_PRIORITY",
]

# Order matters: a freshly built extender iterates its fields in this order.
RESERVED_ATTRIBUTES: Final[tuple[str, ...]] = (
    "id",
    "entity_guid",
    "owner_guid",
    "name",
    "value",
    "value_type",
    "time_created",
    "type",
)

# Base for universal identifiers handed out in exported records.
DEFAULT_SITE_URL: Final[str] = "http://localhost/"
UUID_EXPORT_PATH: Final[str] = "export/opendd/"

IMPORT_EVENT: Final[str] = "import"
PERMISSIONS_CHECK_EVENT: Final[str] = "permissions_check"

# Wildcard for hook event/kind registration.
ALL: Final[str] = "all"

# The importer runs early in the "import" chain so later handlers see the entity updated.
IMPORT_HOOK_PRIORITY: Final[int] = 2
DEFAULT_HOOK_PRIORITY: Final[int] = 500

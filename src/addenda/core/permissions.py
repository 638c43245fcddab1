"""
Edit permission for a single extender.

Decision order, stopping at the first conclusive step:
    1. No authenticated session: deny.
    2. Resolve the acting identity (explicit guid, else the session's identity): deny if none.
    3. Resolve the extender through the kind-specific lookup: deny if unknown.
    4. The acting identity owns the extender: allow.
    5. The acting identity may edit the host entity: allow.
    6. Otherwise the "permissions_check" hook chain for the kind decides (default deny).

Evaluation never raises for unresolvable inputs; a LookupError from a collaborator
is logged and treated as "not found".

Examples:
    >>> from addenda.core.extender import metadata
    >>> from addenda.core.grammar import ExtenderKind
    >>> from addenda.core.permissions import PermissionContext, can_edit_extender
    >>> from addenda.core.protocols import Session
    >>> class User:
    ...     def __init__(self, guid): self.guid = guid
    >>> users = {1: User(1), 2: User(2)}
    >>> class Users:
    ...     def get_identity(self, guid): return users.get(guid)
    >>> m = metadata(id=5, entity_guid=10, owner_guid=1, name="color", value="blue")
    >>> ctx = PermissionContext(
    ...     identities=Users(),
    ...     lookups={ExtenderKind.METADATA: {5: m}.get},
    ...     can_edit_entity=lambda entity_guid, user_guid: False,
    ... )
    >>> can_edit_extender(ctx, 5, "metadata", session=Session.for_identity(users[1]))
    True
    >>> can_edit_extender(ctx, 5, "metadata", session=Session.for_identity(users[2]))
    False
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

from .constants import PERMISSIONS_CHECK_EVENT
from .errors import GrammarError
from .extender import Extender
from .grammar import ExtenderKind, extender_kind_from_value
from .hooks import HookChain
from .protocols import EntityPermission, EntityStore, ExtenderLookup, Identity, IdentityStore, Session

__all__ = [
    "PermissionContext",
    "can_edit_extender",
]

logger = logging.getLogger(__name__)


@dataclass
class PermissionContext:
    """
    Collaborators consulted by can_edit_extender.

    Attributes:
        identities (IdentityStore): Resolves explicit user guids.
        lookups (Mapping[ExtenderKind, ExtenderLookup]): Kind-specific extender lookups.
        can_edit_entity (EntityPermission): Delegated edit check on the host entity.
        hooks (HookChain): Policy handlers registered under "permissions_check".
        entities (EntityStore | None): Resolves the host entity passed to policy handlers.
    """

    identities: IdentityStore
    lookups: Mapping[ExtenderKind, ExtenderLookup]
    can_edit_entity: EntityPermission
    hooks: HookChain = field(default_factory=HookChain)
    entities: EntityStore | None = None


def _resolve_identity(
    context: PermissionContext, user_guid: int, session: Session
) -> Identity | None:
    if not user_guid:
        return session.identity
    try:
        return context.identities.get_identity(user_guid)
    except LookupError:
        logger.warning("identity %s could not be resolved", user_guid)
        return None


def _resolve_extender(
    context: PermissionContext, extender_id: int, kind: ExtenderKind | str
) -> tuple[ExtenderKind, Extender] | None:
    try:
        k = extender_kind_from_value(kind)
    except GrammarError:
        logger.debug("unknown extender kind %r", kind)
        return None
    lookup = context.lookups.get(k)
    if lookup is None:
        return None
    try:
        found = lookup(extender_id)
    except LookupError:
        logger.warning("%s %s could not be resolved", k.value, extender_id)
        return None
    if not isinstance(found, Extender):
        return None
    return k, found


def _delegated(context: PermissionContext, extender: Extender, user: Identity) -> bool:
    try:
        return bool(context.can_edit_entity(extender.entity_guid, user.guid))
    except LookupError:
        logger.warning("entity %s could not be resolved for delegation", extender.entity_guid)
        return False


def can_edit_extender(
    context: PermissionContext,
    extender_id: int,
    kind: ExtenderKind | str,
    user_guid: int = 0,
    session: Session | None = None,
) -> bool:
    """
    Determine whether an identity may edit an extender.

    Args:
        context (PermissionContext): Collaborators.
        extender_id (int): Id of the annotation or metadata row.
        kind (ExtenderKind | str): "annotation" or "metadata".
        user_guid (int): Acting identity; 0 means the session's identity.
        session (Session | None): Request authentication state; None is anonymous.

    Returns:
        bool: True if allowed.
    """
    if session is None or not session.is_authenticated:
        return False

    user = _resolve_identity(context, user_guid, session)
    if user is None:
        return False

    resolved = _resolve_extender(context, extender_id, kind)
    if resolved is None:
        return False
    # The requested kind names the policy chain; the extender's own tag may be blank.
    k, extender = resolved

    if extender.owner_guid == user.guid:
        return True

    if _delegated(context, extender, user):
        return True

    entity = None
    if context.entities is not None:
        try:
            entity = extender.entity(context.entities)
        except LookupError:
            entity = None

    params = {"entity": entity, "user": user, "extender": extender}
    allowed = context.hooks.trigger(PERMISSIONS_CHECK_EVENT, k.value, params, False)
    logger.debug("permissions_check for %s %s by %s: %s", k.value, extender_id, user.guid, allowed)
    return bool(allowed)

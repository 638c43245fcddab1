import pytest

from addenda.core.extender import annotation, metadata
from addenda.core.grammar import ExtenderKind
from addenda.core.permissions import can_edit_extender
from addenda.core.protocols import Session


@pytest.fixture
def color(extenders):
    m = metadata(id=5, entity_guid=42, owner_guid=1, name="color", value="blue")
    extenders[ExtenderKind.METADATA][5] = m
    return m


def test_owner_may_edit(permission_context, color, owner) -> None:
    session = Session.for_identity(owner)
    assert can_edit_extender(permission_context, 5, "metadata", session=session) is True
    assert color.can_edit(permission_context, session=session) is True


def test_stranger_without_delegation_is_denied(permission_context, color, stranger) -> None:
    session = Session.for_identity(stranger)
    assert can_edit_extender(permission_context, 5, "metadata", session=session) is False


def test_entity_delegation_flips_to_allowed(permission_context, color, stranger, delegations) -> None:
    session = Session.for_identity(stranger)
    assert can_edit_extender(permission_context, 5, ExtenderKind.METADATA, session=session) is False
    delegations.grants.add((42, stranger.guid))
    assert can_edit_extender(permission_context, 5, ExtenderKind.METADATA, session=session) is True
    assert color.owner_guid == 1


def test_anonymous_session_is_denied(permission_context, color, owner) -> None:
    assert can_edit_extender(permission_context, 5, "metadata", owner.guid) is False
    assert can_edit_extender(permission_context, 5, "metadata", owner.guid, Session.anonymous()) is False


def test_authenticated_session_without_identity_is_denied(permission_context, color) -> None:
    session = Session(identity=None, is_authenticated=True)
    assert can_edit_extender(permission_context, 5, "metadata", session=session) is False


def test_explicit_user_guid_overrides_session_identity(permission_context, color, owner, stranger) -> None:
    session = Session.for_identity(stranger)
    assert can_edit_extender(permission_context, 5, "metadata", owner.guid, session) is True
    assert color.can_edit(permission_context, owner.guid, session) is True


def test_unresolvable_user_guid_is_denied(permission_context, color, owner) -> None:
    session = Session.for_identity(owner)
    assert can_edit_extender(permission_context, 5, "metadata", 999, session) is False


@pytest.mark.parametrize("kind", ["annotation", "volatile", "", "Metadata_"])
def test_wrong_or_unknown_kind_is_denied(permission_context, color, owner, kind) -> None:
    session = Session.for_identity(owner)
    assert can_edit_extender(permission_context, 5, kind, session=session) is False


def test_unknown_extender_id_is_denied(permission_context, color, owner) -> None:
    session = Session.for_identity(owner)
    assert can_edit_extender(permission_context, 6, "metadata", session=session) is False


def test_lookup_returning_non_extender_is_denied(permission_context, extenders, owner) -> None:
    extenders[ExtenderKind.ANNOTATION][8] = {"owner_guid": owner.guid}
    session = Session.for_identity(owner)
    assert can_edit_extender(permission_context, 8, "annotation", session=session) is False


def test_lookup_raising_lookup_error_is_denied(permission_context, owner) -> None:
    def boom(extender_id):
        raise KeyError(extender_id)

    permission_context.lookups = {ExtenderKind.METADATA: boom}
    session = Session.for_identity(owner)
    assert can_edit_extender(permission_context, 5, "metadata", session=session) is False


def test_policy_hook_can_allow_stranger(permission_context, color, stranger, entity) -> None:
    seen = {}

    def allow_all(event, kind, result, params):
        seen.update(params)
        return True

    permission_context.hooks.register("permissions_check", "metadata", allow_all)
    session = Session.for_identity(stranger)
    assert can_edit_extender(permission_context, 5, "metadata", session=session) is True
    assert seen["user"] == stranger
    assert seen["entity"] is entity
    assert seen["extender"] is color


def test_policy_hook_for_other_kind_is_not_consulted(permission_context, color, stranger) -> None:
    permission_context.hooks.register("permissions_check", "annotation", lambda e, k, r, p: True)
    session = Session.for_identity(stranger)
    assert can_edit_extender(permission_context, 5, "metadata", session=session) is False


def test_policy_hook_is_not_consulted_for_owner(permission_context, color, owner) -> None:
    permission_context.hooks.register("permissions_check", "all", lambda e, k, r, p: False)
    session = Session.for_identity(owner)
    assert can_edit_extender(permission_context, 5, "metadata", session=session) is True


def test_annotation_lookup_is_kind_specific(permission_context, extenders, owner, stranger) -> None:
    extenders[ExtenderKind.ANNOTATION][5] = annotation(id=5, entity_guid=42, owner_guid=stranger.guid)
    extenders[ExtenderKind.METADATA][5] = metadata(id=5, entity_guid=42, owner_guid=owner.guid)
    session = Session.for_identity(stranger)
    assert can_edit_extender(permission_context, 5, "annotation", session=session) is True
    assert can_edit_extender(permission_context, 5, "metadata", session=session) is False


def test_unresolvable_delegation_falls_through_to_policy(permission_context, color, stranger) -> None:
    def unresolvable(entity_guid, user_guid):
        raise KeyError(entity_guid)

    permission_context.can_edit_entity = unresolvable
    session = Session.for_identity(stranger)
    assert can_edit_extender(permission_context, 5, "metadata", session=session) is False

    permission_context.hooks.register("permissions_check", "metadata", lambda e, k, r, p: True)
    assert can_edit_extender(permission_context, 5, "metadata", session=session) is True


def test_cleared_type_tag_uses_requested_kind(permission_context, color, owner, stranger) -> None:
    color.clear("type")
    session = Session.for_identity(stranger)
    assert can_edit_extender(permission_context, 5, "metadata", session=session) is False

    permission_context.hooks.register("permissions_check", "metadata", lambda e, k, r, p: True)
    assert can_edit_extender(permission_context, 5, "metadata", session=session) is True
    assert can_edit_extender(permission_context, 5, "metadata", session=Session.for_identity(owner)) is True

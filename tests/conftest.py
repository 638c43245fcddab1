from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import pytest

from addenda.core.extender import Extender
from addenda.core.grammar import ExtenderKind
from addenda.core.hooks import HookChain
from addenda.core.ids import guid_to_uuid
from addenda.core.permissions import PermissionContext


@dataclass
class FakeEntity:
    guid: int
    attributes: dict[str, Any] = field(default_factory=dict)
    annotations: list[tuple[str, Any]] = field(default_factory=list)
    metadata: dict[str, list[Any]] = field(default_factory=dict)
    save_result: bool = True
    save_calls: int = 0

    def annotate(self, name: str, value: Any) -> int:
        self.annotations.append((name, value))
        return len(self.annotations)

    def set_metadata(self, name: str, value: Any, name_space: str = "", multiple: bool = False) -> bool:
        if multiple:
            self.metadata.setdefault(name, []).append(value)
        else:
            self.metadata[name] = [value]
        return True

    def set(self, name: str, value: Any) -> bool:
        self.attributes[name] = value
        return True

    def save(self) -> bool:
        self.save_calls += 1
        return self.save_result


class FakeEntityStore:
    def __init__(self, *entities: FakeEntity) -> None:
        self.by_guid = {e.guid: e for e in entities}

    def add(self, entity: FakeEntity) -> FakeEntity:
        self.by_guid[entity.guid] = entity
        return entity

    def get_entity(self, guid: int) -> FakeEntity | None:
        return self.by_guid.get(guid)

    def get_entity_from_uuid(self, uuid: str) -> FakeEntity | None:
        for guid, entity in self.by_guid.items():
            if guid_to_uuid(guid) == uuid:
                return entity
        return None


@dataclass(frozen=True)
class User:
    guid: int


class FakeIdentityStore:
    def __init__(self, *users: User) -> None:
        self.users = {u.guid: u for u in users}

    def get_identity(self, guid: int) -> User | None:
        return self.users.get(guid)


class FakeExtenderStore:
    def __init__(self, next_id: int = 100, fail: bool = False) -> None:
        self.next_id = next_id
        self.fail = fail
        self.saved: list[Extender] = []
        self.deleted: list[Extender] = []

    def save(self, extender: Extender) -> int | None:
        if self.fail:
            return None
        self.saved.append(extender)
        new_id = extender.id or self.next_id
        self.next_id += 1
        return new_id

    def delete(self, extender: Extender) -> bool:
        self.deleted.append(extender)
        return not self.fail


@dataclass
class Delegations:
    """Entity-edit grants: (entity_guid, user_guid) pairs."""

    grants: set[tuple[int, int]] = field(default_factory=set)

    def __call__(self, entity_guid: int, user_guid: int) -> bool:
        return (entity_guid, user_guid) in self.grants


@pytest.fixture
def entity() -> FakeEntity:
    return FakeEntity(guid=42)


@pytest.fixture
def entity_store(entity: FakeEntity) -> FakeEntityStore:
    return FakeEntityStore(entity)


@pytest.fixture
def owner() -> User:
    return User(guid=1)


@pytest.fixture
def stranger() -> User:
    return User(guid=2)


@pytest.fixture
def identities(owner: User, stranger: User) -> FakeIdentityStore:
    return FakeIdentityStore(owner, stranger)


@pytest.fixture
def delegations() -> Delegations:
    return Delegations()


@pytest.fixture
def extenders() -> dict[ExtenderKind, dict[int, Extender]]:
    return {ExtenderKind.ANNOTATION: {}, ExtenderKind.METADATA: {}}


@pytest.fixture
def permission_context(
    identities: FakeIdentityStore,
    extenders: dict[ExtenderKind, dict[int, Extender]],
    delegations: Delegations,
    entity_store: FakeEntityStore,
) -> PermissionContext:
    return PermissionContext(
        identities=identities,
        lookups={kind: table.get for kind, table in extenders.items()},
        can_edit_entity=delegations,
        hooks=HookChain(),
        entities=entity_store,
    )


@pytest.fixture
def extender_store() -> FakeExtenderStore:
    return FakeExtenderStore(next_id=55)


@pytest.fixture
def failing_store() -> FakeExtenderStore:
    return FakeExtenderStore(fail=True)

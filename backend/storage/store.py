"""Keyed entity storage.

``EntityStore`` is the capability the query and mutation layer is built on.
``MemoryEntityStore`` keeps everything in process memory and is lost on
restart; ``backend.storage.database_store.DatabaseEntityStore`` keeps the same
contract on top of SQLAlchemy.
"""

from abc import ABC, abstractmethod
from enum import Enum

from backend.schemas.common import EntityModel
from backend.schemas.kanban import KanbanItem
from backend.schemas.session import Session
from backend.schemas.user import User


class EntityKind(str, Enum):
    USER = 'user'
    SESSION = 'session'
    KANBAN_ITEM = 'kanbanItem'


ENTITY_TYPES: dict[EntityKind, type[EntityModel]] = {
    EntityKind.USER: User,
    EntityKind.SESSION: Session,
    EntityKind.KANBAN_ITEM: KanbanItem,
}


def resolve_kind(kind: EntityKind | str) -> EntityKind:
    try:
        return EntityKind(kind)
    except ValueError as exc:
        raise ValueError(f'Unknown entity kind: {kind!r}') from exc


class EntityStore(ABC):

    @abstractmethod
    def get(self, kind: EntityKind, entity_id: str) -> EntityModel | None:
        """Return the entity, or None when the id is unknown."""

    @abstractmethod
    def put(self, kind: EntityKind, entity: EntityModel) -> None:
        """Insert the entity or overwrite the one with the same id."""

    @abstractmethod
    def delete(self, kind: EntityKind, entity_id: str) -> bool:
        """Remove the entity. Returns True if it existed."""

    @abstractmethod
    def all(self, kind: EntityKind) -> list[EntityModel]:
        """Snapshot of every entity of a kind. Order is not guaranteed."""


class MemoryEntityStore(EntityStore):
    def __init__(self) -> None:
        self._entities: dict[EntityKind, dict[str, EntityModel]] = {kind: {} for kind in EntityKind}

    def _bucket(self, kind: EntityKind | str) -> dict[str, EntityModel]:
        return self._entities[resolve_kind(kind)]

    def get(self, kind: EntityKind, entity_id: str) -> EntityModel | None:
        return self._bucket(kind).get(entity_id)

    def put(self, kind: EntityKind, entity: EntityModel) -> None:
        expected_type = ENTITY_TYPES[resolve_kind(kind)]
        if not isinstance(entity, expected_type):
            raise TypeError(f'Expected {expected_type.__name__}, got {type(entity).__name__}.')
        self._bucket(kind)[entity.id] = entity

    def delete(self, kind: EntityKind, entity_id: str) -> bool:
        return self._bucket(kind).pop(entity_id, None) is not None

    def all(self, kind: EntityKind) -> list[EntityModel]:
        return list(self._bucket(kind).values())

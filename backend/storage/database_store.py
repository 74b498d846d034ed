import logging
from datetime import datetime

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from backend.models.kanban_item import KanbanItemRecord
from backend.models.mentoring_session import SessionRecord
from backend.models.user import UserRecord
from backend.schemas.common import EntityModel, as_utc
from backend.storage.errors import ConflictError
from backend.storage.store import ENTITY_TYPES, EntityKind, EntityStore, resolve_kind

logger = logging.getLogger(__name__)

RECORD_TYPES = {
    EntityKind.USER: UserRecord,
    EntityKind.SESSION: SessionRecord,
    EntityKind.KANBAN_ITEM: KanbanItemRecord,
}


def _column_names(record_type) -> list[str]:
    return [column.name for column in record_type.__table__.columns]


def record_to_entity(kind: EntityKind, record) -> EntityModel:
    values = {}
    for name in _column_names(RECORD_TYPES[kind]):
        value = getattr(record, name)
        # SQLite drops tzinfo on the way back out.
        if isinstance(value, datetime):
            value = as_utc(value)
        values[name] = value
    return ENTITY_TYPES[kind].model_validate(values)


def entity_to_record(kind: EntityKind, entity: EntityModel):
    record_type = RECORD_TYPES[kind]
    # Read attributes directly: model_dump() leaves out excluded fields such as password_hash.
    return record_type(**{name: getattr(entity, name) for name in _column_names(record_type)})


class DatabaseEntityStore(EntityStore):
    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    def get(self, kind: EntityKind, entity_id: str) -> EntityModel | None:
        kind = resolve_kind(kind)
        db = self._session_factory()
        try:
            record = db.get(RECORD_TYPES[kind], entity_id)
            if record is None:
                return None
            return record_to_entity(kind, record)
        finally:
            db.close()

    def put(self, kind: EntityKind, entity: EntityModel) -> None:
        kind = resolve_kind(kind)
        db = self._session_factory()
        try:
            db.merge(entity_to_record(kind, entity))
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            logger.warning('Rejected %s %s: %s', kind.value, entity.id, exc.orig)
            raise ConflictError(f'{kind.value} {entity.id} violates a uniqueness constraint.') from exc
        finally:
            db.close()

    def delete(self, kind: EntityKind, entity_id: str) -> bool:
        kind = resolve_kind(kind)
        db = self._session_factory()
        try:
            record = db.get(RECORD_TYPES[kind], entity_id)
            if record is None:
                return False
            db.delete(record)
            db.commit()
            return True
        finally:
            db.close()

    def all(self, kind: EntityKind) -> list[EntityModel]:
        kind = resolve_kind(kind)
        db = self._session_factory()
        try:
            return [record_to_entity(kind, record) for record in db.query(RECORD_TYPES[kind]).all()]
        finally:
            db.close()

"""Query and mutation operations over an ``EntityStore``.

Every query re-scans the relevant collection; collections are demo sized.
Callers validate input shape before calling in. Lookups and updates on an
unknown id return None instead of raising.

Writes that read before they write (registration, updates) hold one lock so
concurrent requests on the worker thread pool cannot interleave.
"""

import logging
import math
import uuid
from collections.abc import Callable
from datetime import datetime
from threading import Lock
from typing import Any

from backend.schemas.common import utc_now
from backend.schemas.dashboard import DashboardStats
from backend.schemas.kanban import (
    DEFAULT_KANBAN_PRIORITY,
    DEFAULT_KANBAN_STATUS,
    KanbanItem,
    KanbanItemCreate,
)
from backend.schemas.session import (
    CANCELLED_STATUS,
    COMPLETED_STATUS,
    DEFAULT_SESSION_STATUS,
    Session,
    SessionCreate,
    SessionStatus,
)
from backend.schemas.user import User, UserCreate
from backend.storage.errors import EmailAlreadyRegisteredError
from backend.storage.store import EntityKind, EntityStore

logger = logging.getLogger(__name__)

DEFAULT_AVERAGE_RATING = 4.8
IMMUTABLE_FIELDS = frozenset({'id', 'created_at'})


def _new_id() -> str:
    return str(uuid.uuid4())


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def mentor_matches(mentor: User, area: str | None, search: str | None) -> bool:
    if area and mentor.area != area:
        return False
    if not search:
        return True

    needle = search.strip().lower()
    haystack = [mentor.first_name, mentor.last_name, mentor.bio or '', *mentor.skills]
    return any(needle in value.lower() for value in haystack)


class Storage:
    def __init__(
        self,
        store: EntityStore,
        clock: Callable[[], datetime] = utc_now,
        id_factory: Callable[[], str] = _new_id,
        average_rating: float = DEFAULT_AVERAGE_RATING,
    ) -> None:
        self.store = store
        self.clock = clock
        self._id_factory = id_factory
        self._average_rating = average_rating
        self._write_lock = Lock()

    def _merge(self, kind: EntityKind, entity_id: str, changes: dict[str, Any]):
        allowed = {key: value for key, value in changes.items() if key not in IMMUTABLE_FIELDS}
        with self._write_lock:
            entity = self.store.get(kind, entity_id)
            if entity is None:
                return None

            updated = entity.model_copy(update=allowed)
            self.store.put(kind, updated)
        return updated

    # Users

    def get_user(self, user_id: str) -> User | None:
        return self.store.get(EntityKind.USER, user_id)

    def get_user_by_email(self, email: str) -> User | None:
        normalized = email.strip().lower()
        for user in self.store.all(EntityKind.USER):
            if user.email == normalized:
                return user
        return None

    def ensure_email_available(self, email: str) -> None:
        if self.get_user_by_email(email) is not None:
            raise EmailAlreadyRegisteredError(email.strip().lower())

    def get_mentors(self, area: str | None = None, search: str | None = None) -> list[User]:
        return [
            user
            for user in self.store.all(EntityKind.USER)
            if user.user_type == 'mentor' and mentor_matches(user, area, search)
        ]

    def get_students(self) -> list[User]:
        return [user for user in self.store.all(EntityKind.USER) if user.user_type == 'student']

    def create_user(self, data: UserCreate, password_hash: str) -> User:
        with self._write_lock:
            self.ensure_email_available(data.email)
            user = User(
                id=self._id_factory(),
                email=data.email.strip().lower(),
                password_hash=password_hash,
                first_name=data.first_name,
                last_name=data.last_name,
                user_type=data.user_type,
                area=data.area,
                bio=data.bio,
                skills=list(data.skills or []),
                hourly_rate=data.hourly_rate,
                rating=0,
                review_count=0,
                avatar_url=data.avatar_url,
                created_at=self.clock(),
            )
            self.store.put(EntityKind.USER, user)

        logger.info('Registered %s %s', user.user_type, user.id)
        return user

    def update_user(self, user_id: str, changes: dict[str, Any]) -> User | None:
        return self._merge(EntityKind.USER, user_id, changes)

    # Sessions

    def get_session(self, session_id: str) -> Session | None:
        return self.store.get(EntityKind.SESSION, session_id)

    def create_session(self, data: SessionCreate) -> Session:
        session = Session(
            id=self._id_factory(),
            student_id=data.student_id,
            mentor_id=data.mentor_id,
            topic=data.topic,
            description=data.description,
            scheduled_at=data.scheduled_at,
            duration=data.duration,
            status=data.status or DEFAULT_SESSION_STATUS,
            created_at=self.clock(),
        )
        self.store.put(EntityKind.SESSION, session)
        logger.info('Scheduled session %s between %s and %s', session.id, session.student_id, session.mentor_id)
        return session

    def get_user_sessions(self, user_id: str) -> list[Session]:
        return [session for session in self.store.all(EntityKind.SESSION) if session.involves(user_id)]

    def get_upcoming_sessions(self, user_id: str) -> list[Session]:
        now = self.clock()
        return [
            session
            for session in self.get_user_sessions(user_id)
            if session.scheduled_at > now and session.status != CANCELLED_STATUS
        ]

    def update_session_status(self, session_id: str, status: SessionStatus) -> Session | None:
        session = self._merge(EntityKind.SESSION, session_id, {'status': status})
        if session is not None:
            logger.info('Session %s is now %s', session_id, status)
        return session

    def compute_dashboard_stats(self, user_id: str) -> DashboardStats:
        sessions = self.get_user_sessions(user_id)
        completed_hours = sum(
            session.duration / 60 for session in sessions if session.status == COMPLETED_STATUS
        )
        return DashboardStats(
            scheduled_sessions=len(self.get_upcoming_sessions(user_id)),
            connected_mentors=len({session.mentor_id for session in sessions}),
            mentoring_hours=round_half_up(completed_hours),
            average_rating=self._average_rating,
        )

    # Kanban

    def get_kanban_items(self) -> list[KanbanItem]:
        return self.store.all(EntityKind.KANBAN_ITEM)

    def get_kanban_item(self, item_id: str) -> KanbanItem | None:
        return self.store.get(EntityKind.KANBAN_ITEM, item_id)

    def create_kanban_item(self, data: KanbanItemCreate) -> KanbanItem:
        item = KanbanItem(
            id=self._id_factory(),
            title=data.title,
            description=data.description,
            type=data.type,
            status=data.status or DEFAULT_KANBAN_STATUS,
            points=data.points if data.points is not None else 0,
            assignee=data.assignee,
            priority=data.priority or DEFAULT_KANBAN_PRIORITY,
            progress=data.progress if data.progress is not None else 0,
            created_at=self.clock(),
        )
        self.store.put(EntityKind.KANBAN_ITEM, item)
        logger.info('Created kanban item %s in %s', item.id, item.status)
        return item

    def update_kanban_item(self, item_id: str, changes: dict[str, Any]) -> KanbanItem | None:
        return self._merge(EntityKind.KANBAN_ITEM, item_id, changes)

    def delete_kanban_item(self, item_id: str) -> bool:
        deleted = self.store.delete(EntityKind.KANBAN_ITEM, item_id)
        if deleted:
            logger.info('Deleted kanban item %s', item_id)
        return deleted

import threading
import time
from datetime import datetime, timedelta

import pytest

from backend.schemas.kanban import KanbanItemCreate
from backend.schemas.session import SessionCreate
from backend.schemas.user import UserCreate
from backend.storage.errors import ConflictError, EmailAlreadyRegisteredError
from backend.storage.storage import Storage, round_half_up
from backend.storage.store import EntityKind, MemoryEntityStore


def _schedule(storage: Storage, student_id: str, mentor_id: str, **overrides):
    return storage.create_session(
        SessionCreate(
            student_id=student_id,
            mentor_id=mentor_id,
            topic=overrides.pop('topic', 'Career planning'),
            scheduled_at=overrides.pop('scheduled_at'),
            duration=overrides.pop('duration', 60),
            **overrides,
        )
    )


def test_create_user_populates_server_defaults(storage: Storage, fixed_now: datetime) -> None:
    user = storage.create_user(
        UserCreate(
            email=' Joao@Student.com ',
            password='password123',
            first_name='João',
            last_name='Silva',
            user_type='student',
            area='Tecnologia',
        ),
        password_hash='stored-hash',
    )

    assert user.id
    assert user.email == 'joao@student.com'
    assert user.password_hash == 'stored-hash'
    assert user.rating == 0
    assert user.review_count == 0
    assert user.bio is None
    assert user.skills == []
    assert user.hourly_rate is None
    assert user.avatar_url is None
    assert user.created_at == fixed_now
    assert storage.store.get(EntityKind.USER, user.id) == user


def test_create_user_keeps_zero_hourly_rate(make_user) -> None:
    user = make_user('free@example.com', user_type='mentor', hourly_rate=0)

    assert user.hourly_rate == 0


def test_create_user_assigns_unique_ids(make_user) -> None:
    first = make_user('one@example.com')
    second = make_user('two@example.com')

    assert first.id != second.id


def test_ensure_email_available_rejects_registered_email(storage: Storage, make_user) -> None:
    make_user('ana@example.com')

    with pytest.raises(EmailAlreadyRegisteredError):
        storage.ensure_email_available('ANA@example.com ')

    storage.ensure_email_available('other@example.com')


def test_second_registration_with_same_email_is_rejected(storage: Storage, make_user) -> None:
    make_user('ana@example.com')

    with pytest.raises(ConflictError):
        make_user('ana@example.com', user_type='mentor')

    assert len(storage.store.all(EntityKind.USER)) == 1


def test_get_user_by_email_is_case_insensitive(storage: Storage, make_user) -> None:
    user = make_user('ana@example.com')

    assert storage.get_user_by_email('ANA@EXAMPLE.COM') == user
    assert storage.get_user_by_email('missing@example.com') is None


def test_get_mentors_filters_role(storage: Storage, make_user) -> None:
    mentor = make_user('mentor@example.com', user_type='mentor')
    make_user('student@example.com')

    assert storage.get_mentors() == [mentor]
    assert [student.email for student in storage.get_students()] == ['student@example.com']


def test_get_mentors_applies_area_and_search_filters(storage: Storage, make_user) -> None:
    ana = make_user('ana@example.com', user_type='mentor', first_name='Ana', skills=['React', 'CSS'])
    marina = make_user(
        'marina@example.com',
        user_type='mentor',
        first_name='Marina',
        area='Design',
        bio='UX researcher',
    )

    assert storage.get_mentors(area='Design') == [marina]
    assert storage.get_mentors(search='react') == [ana]
    assert storage.get_mentors(search='ux') == [marina]
    assert storage.get_mentors(area='Design', search='react') == []


def test_update_user_merges_changes_and_keeps_identity(storage: Storage, make_user) -> None:
    user = make_user('ana@example.com', user_type='mentor')

    updated = storage.update_user(user.id, {'bio': 'Frontend mentor', 'id': 'hijacked', 'created_at': None})

    assert updated.id == user.id
    assert updated.created_at == user.created_at
    assert updated.bio == 'Frontend mentor'
    assert updated.email == user.email
    assert storage.get_user(user.id) == updated


def test_update_user_returns_none_for_unknown_id(storage: Storage) -> None:
    assert storage.update_user('missing', {'bio': 'x'}) is None


def test_create_session_defaults(storage: Storage, fixed_now: datetime) -> None:
    session = _schedule(storage, 'student', 'mentor', scheduled_at=fixed_now + timedelta(days=1))

    assert session.status == 'pending'
    assert session.description is None
    assert session.created_at == fixed_now
    assert storage.get_session(session.id) == session


def test_get_user_sessions_matches_either_participant(storage: Storage, fixed_now: datetime) -> None:
    as_student = _schedule(storage, 'alice', 'mentor-a', scheduled_at=fixed_now)
    as_mentor = _schedule(storage, 'bob', 'alice', scheduled_at=fixed_now)
    _schedule(storage, 'bob', 'mentor-a', scheduled_at=fixed_now)

    sessions = storage.get_user_sessions('alice')

    assert {session.id for session in sessions} == {as_student.id, as_mentor.id}


@pytest.mark.parametrize('status', ['pending', 'confirmed', 'completed', 'cancelled'])
@pytest.mark.parametrize(
    ('offset', 'is_future'),
    [
        (timedelta(hours=-1), False),
        (timedelta(0), False),
        (timedelta(minutes=1), True),
        (timedelta(days=7), True),
    ],
)
def test_upcoming_sessions_exclude_past_and_cancelled(
    storage: Storage,
    fixed_now: datetime,
    status: str,
    offset: timedelta,
    is_future: bool,
) -> None:
    session = _schedule(storage, 'alice', 'mentor-a', scheduled_at=fixed_now + offset, status=status)

    upcoming = storage.get_upcoming_sessions('alice')

    expected = is_future and status != 'cancelled'
    assert (session in upcoming) is expected


def test_upcoming_sessions_use_the_injected_clock(fixed_now: datetime) -> None:
    current = {'now': fixed_now}
    storage = Storage(MemoryEntityStore(), clock=lambda: current['now'])
    _schedule(storage, 'alice', 'mentor-a', scheduled_at=fixed_now + timedelta(hours=2))

    assert len(storage.get_upcoming_sessions('alice')) == 1

    current['now'] = fixed_now + timedelta(hours=3)

    assert storage.get_upcoming_sessions('alice') == []


def test_update_session_status(storage: Storage, fixed_now: datetime) -> None:
    session = _schedule(storage, 'alice', 'mentor-a', scheduled_at=fixed_now)

    updated = storage.update_session_status(session.id, 'confirmed')

    assert updated.status == 'confirmed'
    assert updated.topic == session.topic
    assert storage.get_session(session.id).status == 'confirmed'
    assert storage.update_session_status('missing', 'confirmed') is None


def test_dashboard_stats(storage: Storage, fixed_now: datetime) -> None:
    past = fixed_now - timedelta(days=3)
    _schedule(storage, 'alice', 'mentor-a', scheduled_at=past, duration=60, status='completed')
    _schedule(storage, 'alice', 'mentor-b', scheduled_at=past, duration=90, status='completed')
    _schedule(storage, 'alice', 'mentor-a', scheduled_at=fixed_now + timedelta(days=1), duration=30)

    stats = storage.compute_dashboard_stats('alice')

    assert stats.connected_mentors == 2
    assert stats.mentoring_hours == 3
    assert stats.scheduled_sessions == 1
    assert stats.average_rating == 4.8


def test_dashboard_stats_for_user_without_sessions(storage: Storage) -> None:
    stats = storage.compute_dashboard_stats('nobody')

    assert stats.scheduled_sessions == 0
    assert stats.connected_mentors == 0
    assert stats.mentoring_hours == 0


def test_dashboard_average_rating_is_configurable(fixed_now: datetime) -> None:
    storage = Storage(MemoryEntityStore(), clock=lambda: fixed_now, average_rating=4.2)

    assert storage.compute_dashboard_stats('alice').average_rating == 4.2


@pytest.mark.parametrize(('value', 'expected'), [(0.0, 0), (0.49, 0), (0.5, 1), (2.5, 3), (3.25, 3)])
def test_round_half_up(value: float, expected: int) -> None:
    assert round_half_up(value) == expected


def test_create_kanban_item_defaults(storage: Storage, fixed_now: datetime) -> None:
    item = storage.create_kanban_item(KanbanItemCreate(title='Landing page', type='story'))

    assert item.status == 'backlog'
    assert item.points == 0
    assert item.progress == 0
    assert item.priority == 'medium'
    assert item.description is None
    assert item.assignee is None
    assert item.created_at == fixed_now
    assert storage.get_kanban_item(item.id) == item


def test_create_kanban_item_keeps_explicit_values(storage: Storage) -> None:
    item = storage.create_kanban_item(
        KanbanItemCreate(
            title='API de autenticação',
            type='story',
            status='in_progress',
            points=5,
            assignee='João Silva',
            priority='urgent',
            progress=70,
        )
    )

    assert (item.status, item.points, item.assignee, item.priority, item.progress) == (
        'in_progress',
        5,
        'João Silva',
        'urgent',
        70,
    )


def test_update_kanban_item(storage: Storage) -> None:
    item = storage.create_kanban_item(KanbanItemCreate(title='Landing page', type='story'))

    updated = storage.update_kanban_item(item.id, {'status': 'done', 'progress': 100})

    assert updated.status == 'done'
    assert updated.progress == 100
    assert updated.title == 'Landing page'


def test_update_kanban_item_returns_none_for_unknown_id(storage: Storage) -> None:
    assert storage.update_kanban_item('missing', {'status': 'done'}) is None


def test_delete_kanban_item_succeeds_once(storage: Storage) -> None:
    item = storage.create_kanban_item(KanbanItemCreate(title='Landing page', type='story'))

    assert storage.delete_kanban_item(item.id) is True
    assert storage.delete_kanban_item(item.id) is False
    assert storage.get_kanban_items() == []


class SlowMemoryEntityStore(MemoryEntityStore):
    """Widens the gap between a read and the write that follows it."""

    delay = 0.05

    def get(self, kind, entity_id):
        entity = super().get(kind, entity_id)
        time.sleep(self.delay)
        return entity

    def all(self, kind):
        entities = super().all(kind)
        time.sleep(self.delay)
        return entities


def _run_together(*calls) -> list:
    barrier = threading.Barrier(len(calls))
    outcomes = [None] * len(calls)

    def run(index, call):
        barrier.wait()
        try:
            outcomes[index] = call()
        except Exception as exc:
            outcomes[index] = exc

    threads = [threading.Thread(target=run, args=(index, call)) for index, call in enumerate(calls)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    return outcomes


def test_concurrent_updates_to_one_item_keep_both_changes(fixed_now: datetime) -> None:
    storage = Storage(SlowMemoryEntityStore(), clock=lambda: fixed_now)
    item = storage.create_kanban_item(KanbanItemCreate(title='Landing page', type='story'))

    _run_together(
        lambda: storage.update_kanban_item(item.id, {'status': 'done'}),
        lambda: storage.update_kanban_item(item.id, {'progress': 100}),
    )

    final = storage.get_kanban_item(item.id)
    assert (final.status, final.progress) == ('done', 100)


def test_concurrent_registrations_with_one_email_store_one_user(fixed_now: datetime) -> None:
    storage = Storage(SlowMemoryEntityStore(), clock=lambda: fixed_now)

    def register(first_name: str):
        return lambda: storage.create_user(
            UserCreate(
                email='ana@example.com',
                password='password123',
                first_name=first_name,
                last_name='Rodrigues',
                user_type='mentor',
                area='Tecnologia',
            ),
            password_hash='unused-hash',
        )

    outcomes = _run_together(register('Ana'), register('Anna'))

    rejected = [outcome for outcome in outcomes if isinstance(outcome, EmailAlreadyRegisteredError)]
    assert len(rejected) == 1
    assert len(storage.store.all(EntityKind.USER)) == 1

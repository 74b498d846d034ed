from fastapi import APIRouter, Depends, HTTPException, status

from backend.auth.dependencies import get_storage
from backend.schemas.session import Session, SessionCreate, SessionStatusUpdate
from backend.storage.storage import Storage

router = APIRouter(tags=['sessions'])


def sort_by_schedule(sessions: list[Session]) -> list[Session]:
    return sorted(sessions, key=lambda session: session.scheduled_at)


def validate_participants(data: SessionCreate, storage: Storage) -> None:
    if data.student_id == data.mentor_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='A session needs two different participants.',
        )

    if storage.get_user(data.student_id) is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Student not found.',
        )

    mentor = storage.get_user(data.mentor_id)
    if mentor is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Mentor not found.',
        )
    if mentor.user_type != 'mentor':
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail='Sessions can only be booked with mentors.',
        )


@router.post('', response_model=Session, status_code=status.HTTP_201_CREATED)
def create_session(data: SessionCreate, storage: Storage = Depends(get_storage)):
    validate_participants(data, storage)
    return storage.create_session(data)


@router.get('/user/{user_id}', response_model=list[Session])
def list_user_sessions(user_id: str, storage: Storage = Depends(get_storage)):
    return sort_by_schedule(storage.get_user_sessions(user_id))


@router.get('/upcoming/{user_id}', response_model=list[Session])
def list_upcoming_sessions(user_id: str, storage: Storage = Depends(get_storage)):
    return sort_by_schedule(storage.get_upcoming_sessions(user_id))


@router.patch('/{session_id}/status', response_model=Session)
def update_session_status(
    session_id: str,
    data: SessionStatusUpdate,
    storage: Storage = Depends(get_storage),
):
    session = storage.update_session_status(session_id, data.status)
    if session is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='Session not found.',
        )
    return session

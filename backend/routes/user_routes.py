from fastapi import APIRouter, Depends, HTTPException, status

from backend.auth.dependencies import get_current_user, get_storage
from backend.schemas.user import User, UserProfile, UserUpdate
from backend.storage.storage import Storage

router = APIRouter(tags=['users'])


def sort_by_name(users: list[User]) -> list[User]:
    return sorted(users, key=lambda user: (user.first_name.lower(), user.last_name.lower()))


@router.get('/mentors', response_model=list[UserProfile])
def list_mentors(
    area: str | None = None,
    search: str | None = None,
    storage: Storage = Depends(get_storage),
):
    normalized_area = (area or '').strip()
    if normalized_area.lower() == 'all':
        normalized_area = ''

    return sort_by_name(storage.get_mentors(area=normalized_area or None, search=search))


@router.get('/students', response_model=list[UserProfile])
def list_students(storage: Storage = Depends(get_storage)):
    return sort_by_name(storage.get_students())


@router.get('/{user_id}', response_model=UserProfile)
def get_user(user_id: str, storage: Storage = Depends(get_storage)):
    user = storage.get_user(user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='User not found.',
        )
    return user


@router.patch('/{user_id}', response_model=UserProfile)
def update_user(
    user_id: str,
    data: UserUpdate,
    storage: Storage = Depends(get_storage),
    current_user: User = Depends(get_current_user),
):
    if current_user.id != user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail='Users can only update their own profile.',
        )

    user = storage.update_user(user_id, data.model_dump(exclude_unset=True))
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail='User not found.',
        )
    return user

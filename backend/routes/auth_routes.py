import logging

from fastapi import APIRouter, Depends, HTTPException, status

from backend.auth.dependencies import get_current_user, get_storage, get_token_issuer
from backend.auth.jwt_handler import TokenIssuer
from backend.auth.passwords import dummy_verify, hash_password, verify_password
from backend.schemas.user import AuthResponse, LoginRequest, User, UserCreate, UserProfile
from backend.storage.errors import ConflictError
from backend.storage.storage import Storage

router = APIRouter(tags=['auth'])

logger = logging.getLogger(__name__)


@router.post('/login', response_model=AuthResponse)
def login(
    credentials: LoginRequest,
    storage: Storage = Depends(get_storage),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
):
    user = storage.get_user_by_email(credentials.email)
    if user is None:
        dummy_verify()
    if user is None or not verify_password(credentials.password, user.password_hash):
        logger.warning('Failed login for %s', credentials.email)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail='Incorrect email or password.',
        )

    return AuthResponse(user=user, token=token_issuer.issue(user.id))


@router.post('/register', response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    data: UserCreate,
    storage: Storage = Depends(get_storage),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
):
    try:
        user = storage.create_user(data, password_hash=hash_password(data.password))
    except ConflictError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail='Email is already in use.',
        ) from exc

    return AuthResponse(user=user, token=token_issuer.issue(user.id))


@router.get('/me', response_model=UserProfile)
def me(current_user: User = Depends(get_current_user)):
    return current_user

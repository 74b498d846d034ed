from datetime import datetime, timezone

import pytest

from backend.auth.jwt_handler import JwtTokenIssuer
from backend.schemas.user import User, UserCreate
from backend.storage.storage import Storage
from backend.storage.store import MemoryEntityStore


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 1, 5, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def storage(fixed_now: datetime) -> Storage:
    return Storage(MemoryEntityStore(), clock=lambda: fixed_now)


@pytest.fixture
def token_issuer() -> JwtTokenIssuer:
    return JwtTokenIssuer(secret_key='test-secret-key-that-is-long-enough-for-hs256', expires_minutes=5)


@pytest.fixture
def make_user(storage: Storage):
    def _make_user(email: str, user_type: str = 'student', **overrides) -> User:
        data = UserCreate(
            email=email,
            password='password123',
            first_name=overrides.pop('first_name', 'Test'),
            last_name=overrides.pop('last_name', 'User'),
            user_type=user_type,
            area=overrides.pop('area', 'Tecnologia'),
            **overrides,
        )
        return storage.create_user(data, password_hash='unused-hash')

    return _make_user

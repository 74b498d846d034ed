from datetime import datetime, timedelta, timezone
from typing import Protocol

import jwt

from backend.core import config


def create_access_token(
    subject: str,
    expires_minutes: int | None = None,
    secret_key: str | None = None,
    algorithm: str | None = None,
) -> str:
    expire_minutes = expires_minutes or config.JWT_EXPIRES_MINUTES
    issued_at = datetime.now(timezone.utc)
    payload = {"sub": subject, "exp": issued_at + timedelta(minutes=expire_minutes), "iat": issued_at}
    return jwt.encode(
        payload,
        secret_key or config.JWT_SECRET_KEY,
        algorithm=algorithm or config.JWT_ALGORITHM,
    )


def decode_access_token(token: str, secret_key: str | None = None, algorithm: str | None = None) -> dict:
    return jwt.decode(
        token,
        secret_key or config.JWT_SECRET_KEY,
        algorithms=[algorithm or config.JWT_ALGORITHM],
    )


class TokenIssuer(Protocol):
    """Issues bearer credentials for authenticated users."""

    def issue(self, user_id: str) -> str: ...

    def resolve(self, token: str) -> str | None:
        """Return the user id a token was issued for, or None if it is not valid."""


class JwtTokenIssuer:
    def __init__(
        self,
        secret_key: str = config.JWT_SECRET_KEY,
        algorithm: str = config.JWT_ALGORITHM,
        expires_minutes: int = config.JWT_EXPIRES_MINUTES,
    ) -> None:
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expires_minutes = expires_minutes

    def issue(self, user_id: str) -> str:
        return create_access_token(
            subject=user_id,
            expires_minutes=self.expires_minutes,
            secret_key=self.secret_key,
            algorithm=self.algorithm,
        )

    def resolve(self, token: str) -> str | None:
        try:
            payload = decode_access_token(token, secret_key=self.secret_key, algorithm=self.algorithm)
        except jwt.PyJWTError:
            return None
        return payload.get("sub") or None

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from backend.auth.jwt_handler import TokenIssuer
from backend.schemas.user import User
from backend.storage.storage import Storage

security = HTTPBearer(auto_error=False)


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_token_issuer(request: Request) -> TokenIssuer:
    return request.app.state.token_issuer


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    storage: Storage = Depends(get_storage),
    token_issuer: TokenIssuer = Depends(get_token_issuer),
) -> User:
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )

    user_id = token_issuer.resolve(credentials.credentials)
    if not user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    user = storage.get_user(user_id)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    return user

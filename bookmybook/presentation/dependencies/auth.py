"""
Authentication Dependency for FastAPI.

- Extracts the Firebase ID token from the Authorization header (Bearer scheme)
- Resolves it to a User through the AuthService from the request container
- Raises HTTPException 401 if the token is missing or not valid
"""

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from bookmybook.domain.entities.user import User
from bookmybook.domain.exceptions import AuthError
from bookmybook.domain.ports.auth_service import AuthService

security = HTTPBearer(auto_error=False)


async def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> str:
    if credentials is None or not credentials.credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )
    return credentials.credentials


async def get_current_user(
    request: Request,
    token: str = Depends(get_bearer_token),
) -> User:
    """
    Resolve the signed-in user.

    Raises:
        HTTPException 401 if the token is invalid, expired, or revoked
    """
    auth_service = await request.state.dishka_container.get(AuthService)
    try:
        return await auth_service.verify(token)
    except AuthError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=e.message,
        ) from e

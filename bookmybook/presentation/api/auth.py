"""
Auth API Router - sign-in, sign-up, sign-out and the current session.

The client keeps the returned ID token and sends it as
``Authorization: Bearer <id_token>`` on every other request.
"""

from logging import getLogger
from typing import Optional

from dishka.integrations.fastapi import FromDishka, inject
from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from bookmybook.application.commands.auth import (
    SignInCommand,
    SignInHandler,
    SignOutCommand,
    SignOutHandler,
    SignUpCommand,
    SignUpHandler,
)
from bookmybook.domain.entities.user import User
from bookmybook.domain.ports.auth_service import AuthSession
from bookmybook.presentation.dependencies.auth import get_bearer_token, get_current_user

logger = getLogger(__name__)


# ==================== REQUEST/RESPONSE MODELS ====================


class SignInRequest(BaseModel):
    email: str
    password: str


class SignUpRequest(BaseModel):
    email: str
    password: str
    display_name: Optional[str] = None


class UserResponse(BaseModel):
    id: str
    email: Optional[str] = None
    display_name: Optional[str] = None

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(id=user.id.value, email=user.email, display_name=user.display_name)


class SessionResponse(BaseModel):
    user: UserResponse
    id_token: str
    refresh_token: str = ""
    expires_in: int


class SignOutResponse(BaseModel):
    success: bool


def _session_response(session: AuthSession) -> SessionResponse:
    return SessionResponse(
        user=UserResponse.from_user(session.user),
        id_token=session.id_token,
        refresh_token=session.refresh_token,
        expires_in=session.expires_in,
    )


# ==================== ROUTER ====================

router = APIRouter(prefix="/auth", tags=["auth"])


# ==================== ENDPOINTS ====================


@router.post("/sign-in", response_model=SessionResponse)
@inject
async def sign_in(request: SignInRequest, handler: FromDishka[SignInHandler]):
    session = await handler.execute(
        SignInCommand(email=request.email, password=request.password)
    )
    return _session_response(session)


@router.post(
    "/sign-up",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
)
@inject
async def sign_up(request: SignUpRequest, handler: FromDishka[SignUpHandler]):
    session = await handler.execute(
        SignUpCommand(
            email=request.email,
            password=request.password,
            display_name=request.display_name,
        )
    )
    return _session_response(session)


@router.post("/sign-out", response_model=SignOutResponse)
@inject
async def sign_out(
    handler: FromDishka[SignOutHandler],
    token: str = Depends(get_bearer_token),
):
    await handler.execute(SignOutCommand(id_token=token))
    return SignOutResponse(success=True)


@router.get("/session", response_model=UserResponse)
async def session(current_user: User = Depends(get_current_user)):
    """Return the user behind the bearer token (401 when signed out)."""
    return UserResponse.from_user(current_user)

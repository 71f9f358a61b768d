"""
Firebase Auth Service - AuthService port over the Identity Toolkit REST API.

Endpoints (POST, ?key=<FIREBASE_API_KEY>):
- accounts:signInWithPassword  → sign in with email/password
- accounts:signUp              → create an email/password account
- accounts:update              → set the display name after sign-up

Firebase reports failures as HTTP 400 with {"error": {"message": "<CODE>"}};
codes are translated into user-facing AuthError messages.
"""

import logging
from typing import Any, Optional

import httpx

from bookmybook.config.settings import Config
from bookmybook.domain.entities.user import User
from bookmybook.domain.exceptions import AuthError
from bookmybook.domain.ports.auth_service import AuthService, AuthSession
from bookmybook.domain.value_objects.user_id import UserId
from bookmybook.infrastructure.firebase.token_verifier import FirebaseTokenVerifier

logger = logging.getLogger(__name__)

ERROR_MESSAGES = {
    "EMAIL_NOT_FOUND": "No account found for this email.",
    "INVALID_PASSWORD": "Incorrect password.",
    "INVALID_LOGIN_CREDENTIALS": "Invalid email or password.",
    "INVALID_EMAIL": "The email address is badly formatted.",
    "USER_DISABLED": "This account has been disabled.",
    "EMAIL_EXISTS": "An account with this email already exists.",
    "WEAK_PASSWORD": "Password should be at least 6 characters.",
    "MISSING_PASSWORD": "Password is required.",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "Too many attempts. Please try again later.",
    "OPERATION_NOT_ALLOWED": "Email/password sign-in is disabled for this project.",
}


def _error_code(response: httpx.Response) -> str:
    try:
        message = response.json()["error"]["message"]
    except (ValueError, KeyError, TypeError):
        return f"HTTP_{response.status_code}"
    # e.g. "WEAK_PASSWORD : Password should be at least 6 characters"
    return message.split(":", 1)[0].strip()


class FirebaseAuthService(AuthService):
    def __init__(
        self,
        http_client: httpx.AsyncClient,
        token_verifier: FirebaseTokenVerifier,
        api_key: str = Config.FIREBASE_API_KEY,
        base_url: str = Config.FIREBASE_AUTH_URL,
    ):
        self._http = http_client
        self._verifier = token_verifier
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")

    async def _call(self, method: str, payload: dict[str, Any]) -> dict[str, Any]:
        if not self._api_key:
            raise AuthError(
                "Firebase credentials not configured.", code="NOT_CONFIGURED"
            )
        try:
            response = await self._http.post(
                f"{self._base_url}/accounts:{method}",
                params={"key": self._api_key},
                json=payload,
            )
        except httpx.HTTPError as e:
            logger.error(f"[FirebaseAuth] {method} request failed: {e}")
            raise AuthError(
                "Authentication service unavailable. Please try again.",
                code="SERVICE_UNAVAILABLE",
            ) from e

        if response.status_code != 200:
            code = _error_code(response)
            logger.info(f"[FirebaseAuth] {method} rejected: {code}")
            raise AuthError(ERROR_MESSAGES.get(code, "Authentication failed."), code=code)
        return response.json()

    def _session(self, data: dict[str, Any], display_name: Optional[str] = None) -> AuthSession:
        return AuthSession(
            user=User(
                id=UserId(data["localId"]),
                email=data.get("email"),
                display_name=display_name or data.get("displayName") or None,
            ),
            id_token=data["idToken"],
            refresh_token=data.get("refreshToken", ""),
            expires_in=int(data.get("expiresIn", 3600)),
        )

    async def sign_in(self, email: str, password: str) -> AuthSession:
        data = await self._call(
            "signInWithPassword",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        logger.info(f"[FirebaseAuth] User {data.get('localId')} signed in")
        return self._session(data)

    async def sign_up(
        self, email: str, password: str, display_name: Optional[str] = None
    ) -> AuthSession:
        data = await self._call(
            "signUp",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        if display_name:
            updated = await self._call(
                "update",
                {
                    "idToken": data["idToken"],
                    "displayName": display_name,
                    "returnSecureToken": True,
                },
            )
            # update returns a fresh token carrying the name claim
            data = {**data, **{k: v for k, v in updated.items() if v}}
        logger.info(f"[FirebaseAuth] User {data.get('localId')} signed up")
        return self._session(data, display_name)

    async def sign_out(self, id_token: str) -> None:
        # ID tokens are stateless; the client discards its token
        claims = await self._verifier.verify(id_token)
        logger.info(f"[FirebaseAuth] User {claims.get('sub')} signed out")

    async def verify(self, id_token: str) -> User:
        claims = await self._verifier.verify(id_token)
        return User(
            id=UserId(claims["sub"]),
            email=claims.get("email"),
            display_name=claims.get("name"),
        )

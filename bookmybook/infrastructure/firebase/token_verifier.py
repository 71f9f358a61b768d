"""
Firebase ID token verification with PyJWT.

Firebase ID tokens are RS256 JWTs signed by Google's securetoken service.
Signing keys are fetched (and cached) from the public JWKS endpoint.
Claims required: exp, iat, aud (= project id), iss, sub (= uid).
"""

import asyncio
import logging

import jwt

from bookmybook.config.settings import Config
from bookmybook.domain.exceptions import AuthError

logger = logging.getLogger(__name__)


class FirebaseTokenVerifier:
    def __init__(
        self,
        project_id: str = Config.FIREBASE_PROJECT_ID,
        jwks_url: str = Config.FIREBASE_JWKS_URL,
    ):
        self._project_id = project_id
        self._issuer = f"https://securetoken.google.com/{project_id}"
        self._jwks_client = jwt.PyJWKClient(jwks_url, cache_keys=True)

    def _decode(self, token: str) -> dict:
        signing_key = self._jwks_client.get_signing_key_from_jwt(token)
        return jwt.decode(
            token,
            signing_key.key,
            algorithms=["RS256"],
            audience=self._project_id,
            issuer=self._issuer,
            options={"require": ["exp", "iat", "aud", "iss", "sub"]},
        )

    async def verify(self, token: str) -> dict:
        """Return the token claims. Raises AuthError if the token is not valid."""
        try:
            # Key fetch is blocking I/O on a cache miss
            return await asyncio.to_thread(self._decode, token)
        except jwt.ExpiredSignatureError:
            raise AuthError("Token has expired", code="TOKEN_EXPIRED")
        except jwt.PyJWTError as e:
            logger.info(f"Rejected ID token: {e}")
            raise AuthError(f"Invalid token: {str(e)}", code="INVALID_TOKEN")

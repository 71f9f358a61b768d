"""Firebase Auth and Cloudinary adapters against httpx.MockTransport."""

import asyncio
import json
import time

import httpx
import jwt
import pytest
from cryptography.hazmat.primitives.asymmetric import rsa

from bookmybook.domain.exceptions import AuthError, UploadError
from bookmybook.infrastructure.cloudinary import CloudinaryMediaUploader
from bookmybook.infrastructure.firebase import FirebaseAuthService, FirebaseTokenVerifier

PROJECT_ID = "bookmybook-test"


class StubVerifier:
    def __init__(self, claims=None, error=None):
        self.claims = claims or {"sub": "uid1", "email": "a@example.com", "name": "A"}
        self.error = error

    async def verify(self, token):
        if self.error:
            raise self.error
        return self.claims


def _run_with(handler, coro_factory):
    async def scenario():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await coro_factory(client)

    return asyncio.run(scenario())


# ==================== FIREBASE AUTH ====================


def test_sign_in_posts_to_identity_toolkit():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = json.loads(request.content)
        return httpx.Response(
            200,
            json={
                "localId": "uid1",
                "email": "a@example.com",
                "displayName": "",
                "idToken": "id-token",
                "refreshToken": "refresh",
                "expiresIn": "3600",
            },
        )

    session = _run_with(
        handler,
        lambda client: FirebaseAuthService(
            client, StubVerifier(), api_key="key123", base_url="https://auth.test/v1"
        ).sign_in("a@example.com", "pw"),
    )
    assert seen["url"] == "https://auth.test/v1/accounts:signInWithPassword?key=key123"
    assert seen["body"]["returnSecureToken"] is True
    assert session.user.id.value == "uid1"
    assert session.user.display_name is None
    assert session.id_token == "id-token"
    assert session.expires_in == 3600


@pytest.mark.parametrize(
    "code, message",
    [
        ("INVALID_LOGIN_CREDENTIALS", "Invalid email or password."),
        ("WEAK_PASSWORD : Password should be at least 6 characters", "Password should be at least 6 characters."),
        ("SOMETHING_NEW", "Authentication failed."),
    ],
)
def test_firebase_errors_become_auth_errors(code, message):
    def handler(request):
        return httpx.Response(400, json={"error": {"code": 400, "message": code}})

    with pytest.raises(AuthError) as excinfo:
        _run_with(
            handler,
            lambda client: FirebaseAuthService(client, StubVerifier(), api_key="k").sign_in(
                "a@example.com", "pw"
            ),
        )
    assert excinfo.value.message == message


def test_transport_failure_is_service_unavailable():
    def handler(request):
        raise httpx.ConnectError("boom", request=request)

    with pytest.raises(AuthError) as excinfo:
        _run_with(
            handler,
            lambda client: FirebaseAuthService(client, StubVerifier(), api_key="k").sign_in(
                "a@example.com", "pw"
            ),
        )
    assert excinfo.value.code == "SERVICE_UNAVAILABLE"


def test_missing_api_key_fails_without_request():
    def handler(request):
        raise AssertionError("no request expected")

    with pytest.raises(AuthError) as excinfo:
        _run_with(
            handler,
            lambda client: FirebaseAuthService(client, StubVerifier(), api_key="").sign_in(
                "a@example.com", "pw"
            ),
        )
    assert excinfo.value.code == "NOT_CONFIGURED"


def test_sign_up_sets_display_name():
    methods = []

    def handler(request: httpx.Request) -> httpx.Response:
        method = request.url.path.rsplit(":", 1)[-1]
        methods.append(method)
        if method == "signUp":
            return httpx.Response(
                200, json={"localId": "uid9", "email": "n@example.com", "idToken": "t1"}
            )
        body = json.loads(request.content)
        assert body["idToken"] == "t1"
        assert body["displayName"] == "Nina"
        return httpx.Response(200, json={"localId": "uid9", "idToken": "t2", "displayName": "Nina"})

    session = _run_with(
        handler,
        lambda client: FirebaseAuthService(client, StubVerifier(), api_key="k").sign_up(
            "n@example.com", "secret1", "Nina"
        ),
    )
    assert methods == ["signUp", "update"]
    assert session.id_token == "t2"
    assert session.user.display_name == "Nina"
    assert session.user.email == "n@example.com"


def test_verify_maps_claims_to_user():
    async def scenario():
        async with httpx.AsyncClient() as client:
            service = FirebaseAuthService(client, StubVerifier(), api_key="k")
            return await service.verify("token")

    user = asyncio.run(scenario())
    assert user.id.value == "uid1"
    assert user.label == "A"


# ==================== TOKEN VERIFIER ====================


class _StaticJwksClient:
    def __init__(self, public_key):
        self.key = public_key

    def get_signing_key_from_jwt(self, token):
        return self


@pytest.fixture(scope="module")
def rsa_key():
    return rsa.generate_private_key(public_exponent=65537, key_size=2048)


def _verifier(rsa_key):
    verifier = FirebaseTokenVerifier(PROJECT_ID, "https://jwks.test/keys")
    verifier._jwks_client = _StaticJwksClient(rsa_key.public_key())
    return verifier


def _token(rsa_key, **overrides):
    now = int(time.time())
    claims = {
        "sub": "uid1",
        "email": "a@example.com",
        "iat": now,
        "exp": now + 300,
        "aud": PROJECT_ID,
        "iss": f"https://securetoken.google.com/{PROJECT_ID}",
    }
    claims.update(overrides)
    return jwt.encode(claims, rsa_key, algorithm="RS256")


def test_token_verifier_accepts_firebase_token(rsa_key):
    claims = asyncio.run(_verifier(rsa_key).verify(_token(rsa_key)))
    assert claims["sub"] == "uid1"


@pytest.mark.parametrize(
    "overrides, code",
    [
        ({"exp": int(time.time()) - 10}, "TOKEN_EXPIRED"),
        ({"aud": "another-project"}, "INVALID_TOKEN"),
        ({"iss": "https://evil.example"}, "INVALID_TOKEN"),
    ],
)
def test_token_verifier_rejects(rsa_key, overrides, code):
    with pytest.raises(AuthError) as excinfo:
        asyncio.run(_verifier(rsa_key).verify(_token(rsa_key, **overrides)))
    assert excinfo.value.code == code


# ==================== CLOUDINARY ====================


def test_cloudinary_upload_returns_secure_url():
    seen = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["url"] = str(request.url)
        seen["body"] = request.content
        return httpx.Response(200, json={"secure_url": "https://res.cloudinary.com/demo/x.jpg"})

    url = _run_with(
        handler,
        lambda client: CloudinaryMediaUploader(
            client, cloud_name="demo", upload_preset="books"
        ).upload("cover.jpg", b"\xff\xd8data", "image/jpeg"),
    )
    assert url == "https://res.cloudinary.com/demo/x.jpg"
    assert seen["url"] == "https://api.cloudinary.com/v1_1/demo/image/upload"
    assert b'name="upload_preset"' in seen["body"]
    assert b"books" in seen["body"]
    assert b'filename="cover.jpg"' in seen["body"]


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(400, json={"error": {"message": "Upload preset not found"}}),
        httpx.Response(200, json={"public_id": "x"}),
        httpx.Response(500, text="oops"),
    ],
)
def test_cloudinary_failures_raise_upload_error(response):
    with pytest.raises(UploadError):
        _run_with(
            lambda request: response,
            lambda client: CloudinaryMediaUploader(
                client, cloud_name="demo", upload_preset="books"
            ).upload("cover.jpg", b"data", "image/jpeg"),
        )


def test_cloudinary_not_configured():
    with pytest.raises(UploadError):
        _run_with(
            lambda request: httpx.Response(200, json={}),
            lambda client: CloudinaryMediaUploader(client, cloud_name="", upload_preset="").upload(
                "cover.jpg", b"data", "image/jpeg"
            ),
        )

"""Tests for JWT authentication adapter."""

from datetime import UTC, datetime, timedelta
from uuid import uuid4

import jwt
import pytest

from diyshare.auth.adapters.base import AuthenticationError
from diyshare.auth.adapters.jwt import JWTAuthAdapter


@pytest.fixture
def secret_key():
    return "test-secret-key-for-testing-only"


@pytest.fixture
def jwt_adapter(secret_key):
    return JWTAuthAdapter(
        secret_key=secret_key,
        algorithm="HS256",
        issuer="test-diyshare",
        audience="test-api",
    )


@pytest.fixture
def expired_token(secret_key):
    past_time = datetime.now(UTC) - timedelta(hours=3)
    payload = {
        "iss": "test-diyshare",
        "aud": "test-api",
        "sub": str(uuid4()),
        "iat": past_time,
        "nbf": past_time,
        "exp": past_time + timedelta(hours=2),
    }
    return jwt.encode(payload, secret_key, algorithm="HS256")


class TestJWTAdapter:
    """Test JWT authentication adapter."""

    @pytest.mark.asyncio
    async def test_issue_and_verify_token(self, jwt_adapter):
        """A token issued by the adapter verifies with its user claims."""
        user_id = uuid4()
        token = await jwt_adapter.issue_token(
            user_id=user_id, claims={"username": "maker", "email": "maker@example.com"}
        )

        principal = await jwt_adapter.verify_token(token)

        assert principal["provider"] == "jwt"
        assert principal["subject"] == str(user_id)
        assert principal["username"] == "maker"
        assert principal["email"] == "maker@example.com"
        assert principal["claims"]["iss"] == "test-diyshare"

    @pytest.mark.asyncio
    async def test_issued_token_expires_after_configured_hours(self, secret_key):
        adapter = JWTAuthAdapter(
            secret_key=secret_key, issuer="test-diyshare", audience="test-api", token_expiry_hours=2
        )
        token = await adapter.issue_token(user_id=uuid4())

        payload = jwt.decode(
            token, secret_key, algorithms=["HS256"], audience="test-api", issuer="test-diyshare"
        )

        assert payload["exp"] - payload["iat"] == 2 * 60 * 60

    @pytest.mark.asyncio
    async def test_verify_expired_token(self, jwt_adapter, expired_token):
        """Test verifying an expired JWT token fails."""
        with pytest.raises(AuthenticationError, match="Invalid token"):
            await jwt_adapter.verify_token(expired_token)

    @pytest.mark.asyncio
    async def test_verify_invalid_signature(self, jwt_adapter):
        other = JWTAuthAdapter(
            secret_key="wrong-secret-key", issuer="test-diyshare", audience="test-api"
        )
        token = await other.issue_token(user_id=uuid4())

        with pytest.raises(AuthenticationError, match="Invalid token"):
            await jwt_adapter.verify_token(token)

    @pytest.mark.asyncio
    async def test_verify_wrong_audience(self, jwt_adapter, secret_key):
        other = JWTAuthAdapter(secret_key=secret_key, issuer="test-diyshare", audience="elsewhere")
        token = await other.issue_token(user_id=uuid4())

        with pytest.raises(AuthenticationError, match="Invalid token"):
            await jwt_adapter.verify_token(token)

    @pytest.mark.asyncio
    async def test_verify_token_without_subject(self, jwt_adapter):
        token = await jwt_adapter.issue_token(claims={"username": "nobody"})

        with pytest.raises(AuthenticationError, match="Missing 'sub' claim"):
            await jwt_adapter.verify_token(token)

    @pytest.mark.asyncio
    async def test_verify_garbage_token(self, jwt_adapter):
        with pytest.raises(AuthenticationError):
            await jwt_adapter.verify_token("not-a-jwt")

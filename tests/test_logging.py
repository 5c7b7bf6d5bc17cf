"""
Tests for structured logging helpers
"""

import re
from datetime import UTC, datetime, timedelta
from unittest.mock import MagicMock
from uuid import uuid4

import jwt

from diyshare.config import settings
from diyshare.logging import (
    add_request_context,
    clear_request_context,
    extract_user_id_from_request,
    generate_request_id,
    get_request_id,
    get_user_id,
    set_request_context,
)


def request_with(authorization: str | None):
    request = MagicMock()
    request.headers = {"authorization": authorization} if authorization else {}
    return request


def test_request_ids_are_short_and_unique():
    ids = {generate_request_id() for _ in range(50)}

    assert len(ids) == 50
    assert all(re.fullmatch(r"[0-9a-f]+-[0-9a-f]{8}", request_id) for request_id in ids)


def test_request_context_round_trip():
    set_request_context(request_id="req-123", user_id="user-456")
    try:
        assert get_request_id() == "req-123"
        assert get_user_id() == "user-456"

        event = add_request_context(None, "info", {"event": "hello"})
        assert event["request_id"] == "req-123"
        assert event["user_id"] == "user-456"
    finally:
        clear_request_context()

    assert get_request_id() is None
    assert get_user_id() is None


def test_set_request_context_generates_id():
    set_request_context()
    try:
        assert get_request_id() is not None
    finally:
        clear_request_context()


def test_extract_user_id_from_valid_token():
    user_id = str(uuid4())
    now = datetime.now(UTC)
    token = jwt.encode(
        {
            "sub": user_id,
            "iss": settings.jwt_issuer,
            "aud": settings.jwt_audience,
            "iat": now,
            "exp": now + timedelta(minutes=5),
        },
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
    )

    assert extract_user_id_from_request(request_with(f"Bearer {token}")) == user_id


def test_extract_user_id_ignores_bad_tokens():
    assert extract_user_id_from_request(request_with("Bearer garbage")) is None
    assert extract_user_id_from_request(request_with("Basic abc")) is None
    assert extract_user_id_from_request(request_with(None)) is None

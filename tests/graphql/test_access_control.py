"""
Unit tests for resolver access control helpers
"""

import uuid
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
import strawberry

from diyshare.graphql.access_control import (
    get_auth_context_from_info,
    is_author,
    require_user_id,
)
from diyshare.graphql.errors import AuthenticationError


class TestRequireUserId:
    def test_returns_user_id(self, auth_context):
        assert require_user_id(auth_context, "nope") == auth_context.user_id

    def test_anonymous(self, anonymous_context):
        with pytest.raises(AuthenticationError, match="Not logged in"):
            require_user_id(anonymous_context, "Not logged in")

    def test_missing_context(self):
        with pytest.raises(AuthenticationError):
            require_user_id(None, "You need to be logged in!")


class TestIsAuthor:
    def test_author(self, auth_context):
        assert is_author(SimpleNamespace(user_id=auth_context.user_id), auth_context) is True

    def test_someone_else(self, auth_context):
        assert is_author(SimpleNamespace(user_id=uuid.uuid4()), auth_context) is False

    def test_anonymous(self, anonymous_context):
        assert is_author(SimpleNamespace(user_id=None), anonymous_context) is False


class TestGetAuthContextFromInfo:
    @pytest.mark.asyncio
    async def test_no_request(self):
        info = MagicMock(spec=strawberry.Info)
        info.context = {}

        assert await get_auth_context_from_info(info) is None

    @pytest.mark.asyncio
    async def test_invalid_token_is_anonymous(self, info_factory):
        context = await get_auth_context_from_info(info_factory("Bearer garbage"))

        assert context is not None
        assert context.is_authenticated is False

    @pytest.mark.asyncio
    async def test_no_header_is_anonymous(self, info_factory):
        context = await get_auth_context_from_info(info_factory(None))

        assert context is not None
        assert context.user_id is None

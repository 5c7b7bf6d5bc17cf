"""
Unit tests for user queries and the saved DIY list
"""

import uuid
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from diyshare.dbmodels import SavedDiys, Users
from diyshare.graphql.errors import AuthenticationError, UserInputError
from diyshare.graphql.resolvers.user import (
    resolve_user_by_username,
    resolve_users,
    save_diy,
    unsave_diy,
)


def make_user(user_id=None, username="maker"):
    user = MagicMock(spec=Users)
    user.id = user_id or uuid.uuid4()
    user.username = username
    user.email = f"{username}@example.com"
    user.created_at = datetime.now(UTC)
    return user


def result_returning(value):
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


@pytest.fixture
def mock_session():
    with patch("diyshare.graphql.resolvers.user.get_async_session") as mock_get_session:
        session = AsyncMock(spec=AsyncSession)
        session.add = MagicMock()
        mock_get_session.return_value.__aenter__.return_value = session
        yield session


@pytest.fixture
def mock_auth(auth_context):
    with patch("diyshare.graphql.resolvers.user.get_auth_context_from_info") as mock_get_auth:
        mock_get_auth.return_value = auth_context
        yield mock_get_auth


class TestUserQueries:
    @pytest.mark.asyncio
    async def test_user_by_username(self, mock_info, mock_session):
        user = make_user()
        mock_session.execute.return_value = result_returning(user)

        result = await resolve_user_by_username(mock_info, "maker")

        assert result is not None
        assert result.username == "maker"
        assert result.email == "maker@example.com"
        assert not hasattr(result, "password_hash")

    @pytest.mark.asyncio
    async def test_unknown_username(self, mock_info, mock_session):
        mock_session.execute.return_value = result_returning(None)

        assert await resolve_user_by_username(mock_info, "ghost") is None

    @pytest.mark.asyncio
    async def test_users(self, mock_info, mock_session):
        mock_result = MagicMock()
        mock_result.scalars().all.return_value = [make_user(), make_user(username="builder")]
        mock_session.execute.return_value = mock_result

        results = await resolve_users(mock_info)

        assert [u.username for u in results] == ["maker", "builder"]

    @pytest.mark.asyncio
    async def test_users_wraps_failures(self, mock_info, mock_session):
        mock_session.execute.side_effect = Exception("connection lost")

        with pytest.raises(RuntimeError, match="Unable to fetch users data"):
            await resolve_users(mock_info)


class TestSaveDIY:
    @pytest.mark.asyncio
    async def test_requires_login(self, mock_info, anonymous_context):
        with patch("diyshare.graphql.resolvers.user.get_auth_context_from_info") as mock_get_auth:
            mock_get_auth.return_value = anonymous_context

            with pytest.raises(AuthenticationError, match="You need to be logged in!"):
                await save_diy(mock_info, uuid.uuid4())

    @pytest.mark.asyncio
    async def test_saves_once(self, mock_info, mock_auth, mock_session, auth_context):
        user = make_user(user_id=auth_context.user_id)
        diy_id = uuid.uuid4()
        mock_session.execute.side_effect = [
            result_returning(user),
            result_returning(diy_id),
            result_returning(None),
        ]

        result = await save_diy(mock_info, diy_id)

        added = mock_session.add.call_args[0][0]
        assert isinstance(added, SavedDiys)
        assert added.user_id == auth_context.user_id
        assert added.diy_id == diy_id
        assert result.id == auth_context.user_id

    @pytest.mark.asyncio
    async def test_already_saved_is_a_no_op(self, mock_info, mock_auth, mock_session, auth_context):
        user = make_user(user_id=auth_context.user_id)
        diy_id = uuid.uuid4()
        mock_session.execute.side_effect = [
            result_returning(user),
            result_returning(diy_id),
            result_returning(MagicMock(spec=SavedDiys)),
        ]

        await save_diy(mock_info, diy_id)

        mock_session.add.assert_not_called()
        mock_session.commit.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_diy(self, mock_info, mock_auth, mock_session, auth_context):
        mock_session.execute.side_effect = [
            result_returning(make_user(user_id=auth_context.user_id)),
            result_returning(None),
        ]

        with pytest.raises(UserInputError, match="DIY not found"):
            await save_diy(mock_info, uuid.uuid4())


class TestRemoveSavedDIY:
    @pytest.mark.asyncio
    async def test_removes_from_saved_list(self, mock_info, mock_auth, mock_session, auth_context):
        user = make_user(user_id=auth_context.user_id)
        mock_session.execute.side_effect = [result_returning(user), MagicMock()]

        result = await unsave_diy(mock_info, uuid.uuid4())

        assert result.username == "maker"
        delete_stmt = mock_session.execute.call_args_list[1][0][0]
        assert str(delete_stmt).startswith("DELETE FROM saved_diys")
        mock_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_requires_login(self, mock_info, anonymous_context):
        with patch("diyshare.graphql.resolvers.user.get_auth_context_from_info") as mock_get_auth:
            mock_get_auth.return_value = anonymous_context

            with pytest.raises(AuthenticationError):
                await unsave_diy(mock_info, uuid.uuid4())

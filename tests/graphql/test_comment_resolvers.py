"""
Unit tests for comment mutations
"""

import uuid
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from diyshare.dbmodels import Comments, Diys
from diyshare.graphql.errors import AuthenticationError, AuthorizationError, UserInputError
from diyshare.graphql.resolvers.comment import add_comment, remove_comment, resolve_comment_diy
from diyshare.graphql.types.comment import Comment


def make_comment(user_id=None, diy_id=None):
    comment = MagicMock(spec=Comments)
    comment.id = uuid.uuid4()
    comment.content = "Nice build!"
    comment.user_id = user_id or uuid.uuid4()
    comment.diy_id = diy_id or uuid.uuid4()
    comment.created_at = datetime.now(UTC)
    return comment


def result_returning(value):
    result = MagicMock()
    result.scalar_one_or_none.return_value = value
    return result


@pytest.fixture
def mock_session():
    with patch("diyshare.graphql.resolvers.comment.get_async_session") as mock_get_session:
        session = AsyncMock(spec=AsyncSession)
        session.add = MagicMock()
        mock_get_session.return_value.__aenter__.return_value = session
        yield session


@pytest.fixture
def mock_auth(auth_context):
    with patch("diyshare.graphql.resolvers.comment.get_auth_context_from_info") as mock_get_auth:
        mock_get_auth.return_value = auth_context
        yield mock_get_auth


class TestAddComment:
    @pytest.mark.asyncio
    async def test_adds_comment(self, mock_info, mock_auth, mock_session, auth_context):
        diy_id = uuid.uuid4()
        mock_session.execute.return_value = result_returning(diy_id)

        result = await add_comment(mock_info, diy_id, "  Love it  ")

        added = mock_session.add.call_args[0][0]
        assert isinstance(added, Comments)
        assert added.content == "Love it"
        assert added.user_id == auth_context.user_id
        assert added.diy_id == diy_id
        assert result.content == "Love it"
        mock_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_requires_login(self, mock_info, anonymous_context):
        with patch("diyshare.graphql.resolvers.comment.get_auth_context_from_info") as mock_get_auth:
            mock_get_auth.return_value = anonymous_context

            with pytest.raises(AuthenticationError, match="logged in to add a comment"):
                await add_comment(mock_info, uuid.uuid4(), "Hi")

    @pytest.mark.asyncio
    async def test_missing_diy(self, mock_info, mock_auth, mock_session):
        mock_session.execute.return_value = result_returning(None)

        with pytest.raises(UserInputError, match="Failed to add the comment."):
            await add_comment(mock_info, uuid.uuid4(), "Hi")

        mock_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_empty_content(self, mock_info, mock_auth, mock_session):
        with pytest.raises(UserInputError, match="Failed to add the comment."):
            await add_comment(mock_info, uuid.uuid4(), "   ")

        mock_session.execute.assert_not_awaited()


class TestRemoveComment:
    @pytest.mark.asyncio
    async def test_author_removes(self, mock_info, mock_auth, mock_session, auth_context):
        comment = make_comment(user_id=auth_context.user_id)
        mock_session.execute.return_value = result_returning(comment)

        result = await remove_comment(mock_info, comment.id)

        assert result.id == comment.id
        assert result.content == "Nice build!"
        mock_session.delete.assert_awaited_once_with(comment)
        mock_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_non_author_rejected(self, mock_info, mock_auth, mock_session):
        comment = make_comment()
        mock_session.execute.return_value = result_returning(comment)

        with pytest.raises(
            AuthorizationError, match="You are not authorized to remove this comment."
        ):
            await remove_comment(mock_info, comment.id)

        mock_session.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_missing_comment(self, mock_info, mock_auth, mock_session):
        mock_session.execute.return_value = result_returning(None)

        with pytest.raises(UserInputError, match="Failed to remove the comment."):
            await remove_comment(mock_info, uuid.uuid4())


class TestCommentFieldResolvers:
    @pytest.mark.asyncio
    async def test_deleted_diy_resolves_to_none(self, mock_info):
        mock_info.context["loaders"].diy_loader.load = AsyncMock(return_value=None)

        comment = Comment.from_model(make_comment())

        assert await resolve_comment_diy(comment, mock_info) is None

    @pytest.mark.asyncio
    async def test_diy_comes_from_loader(self, mock_info):
        diy = MagicMock(spec=Diys)
        diy.id = uuid.uuid4()
        diy.user_id = uuid.uuid4()
        diy.title = "Lamp"
        diy.description = "A lamp"
        diy.materials_used = []
        diy.instructions = "Wire it"
        diy.images = []
        diy.created_at = datetime.now(UTC)
        diy.updated_at = datetime.now(UTC)
        mock_info.context["loaders"].diy_loader.load = AsyncMock(return_value=diy)

        result = await resolve_comment_diy(Comment.from_model(make_comment(diy_id=diy.id)), mock_info)

        assert result is not None
        assert result.id == diy.id

from __future__ import annotations

from uuid import UUID

import strawberry
from sqlalchemy import select

from ...database.connection import get_async_session
from ...dbmodels import Comments, Diys
from ...logging import get_logger
from ..access_control import get_auth_context_from_info, is_author, require_user_id
from ..errors import AuthorizationError, UserInputError
from ..types.comment import Comment as CommentType
from ..types.diy import DIY as DIYType
from ..types.user import User as UserType

logger = get_logger(__name__)


# Comment field resolvers
async def resolve_comment_user(comment: CommentType, info: strawberry.Info) -> UserType:
    user = await info.context["loaders"].user_loader.load(comment.user_id)
    if not user:
        raise RuntimeError("Comment author not found")
    return UserType.from_model(user)


async def resolve_comment_diy(comment: CommentType, info: strawberry.Info) -> DIYType | None:
    """Resolve the parent DIY; None once the DIY has been deleted."""
    diy = await info.context["loaders"].diy_loader.load(comment.diy_id)
    return DIYType.from_model(diy) if diy else None


# Mutation resolvers
async def add_comment(info: strawberry.Info, diy_id: UUID, content: str) -> CommentType:
    """
    Add a comment to a DIY as the logged-in user.
    """
    auth_context = await get_auth_context_from_info(info)
    user_id = require_user_id(auth_context, "You need to be logged in to add a comment.")

    content = (content or "").strip()
    if not content:
        logger.info("Rejected empty comment", diy_id=str(diy_id), user_id=str(user_id))
        raise UserInputError("Failed to add the comment.")

    async with get_async_session() as session:
        diy = (await session.execute(select(Diys.id).where(Diys.id == diy_id))).scalar_one_or_none()
        if diy is None:
            logger.info("Comment target DIY not found", diy_id=str(diy_id))
            raise UserInputError("Failed to add the comment.")

        new_comment = Comments(content=content, user_id=user_id, diy_id=diy_id)
        session.add(new_comment)
        await session.commit()

    logger.info(
        "Comment added",
        comment_id=str(new_comment.id),
        diy_id=str(diy_id),
        user_id=str(user_id),
    )

    return CommentType.from_model(new_comment)


async def remove_comment(info: strawberry.Info, comment_id: UUID) -> CommentType:
    """
    Remove a comment.

    Only the comment's author can remove it. Returns the removed comment.
    """
    auth_context = await get_auth_context_from_info(info)
    user_id = require_user_id(auth_context, "You need to be logged in to remove a comment.")

    async with get_async_session() as session:
        stmt = select(Comments).where(Comments.id == comment_id)
        comment = (await session.execute(stmt)).scalar_one_or_none()

        if not comment:
            logger.info("Comment not found", comment_id=str(comment_id))
            raise UserInputError("Failed to remove the comment.")

        if not is_author(comment, auth_context):
            raise AuthorizationError("You are not authorized to remove this comment.")

        removed = CommentType.from_model(comment)

        await session.delete(comment)
        await session.commit()

    logger.info(
        "Comment removed",
        comment_id=str(comment_id),
        diy_id=str(removed.diy_id),
        user_id=str(user_id),
    )

    return removed

from __future__ import annotations

from uuid import UUID

import strawberry
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ...database.connection import get_async_session
from ...dbmodels import Diys, Likes
from ...logging import get_logger
from ..access_control import get_auth_context_from_info, require_user_id
from ..errors import UserInputError
from ..types.diy import DIY as DIYType
from ..types.like import Like as LikeType
from ..types.user import User as UserType

logger = get_logger(__name__)


# Like field resolvers
async def resolve_like_user(like: LikeType, info: strawberry.Info) -> UserType:
    user = await info.context["loaders"].user_loader.load(like.user_id)
    if not user:
        raise RuntimeError("Like author not found")
    return UserType.from_model(user)


async def resolve_like_diy(like: LikeType, info: strawberry.Info) -> DIYType | None:
    diy = await info.context["loaders"].diy_loader.load(like.diy_id)
    return DIYType.from_model(diy) if diy else None


# Mutation resolvers
async def find_like(session: AsyncSession, user_id: UUID, diy_id: UUID) -> Likes | None:
    stmt = select(Likes).where(Likes.user_id == user_id, Likes.diy_id == diy_id)
    return (await session.execute(stmt)).scalar_one_or_none()


async def add_like(info: strawberry.Info, diy_id: UUID) -> DIYType:
    """
    Like a DIY as the logged-in user.

    A user likes a DIY at most once; liking again changes nothing.
    Returns the liked DIY.
    """
    auth_context = await get_auth_context_from_info(info)
    user_id = require_user_id(auth_context, "You need to be logged in!")

    async with get_async_session() as session:
        diy = (await session.execute(select(Diys).where(Diys.id == diy_id))).scalar_one_or_none()
        if not diy:
            raise UserInputError("DIY not found")

        existing = await find_like(session, user_id, diy_id)

        liked = DIYType.from_model(diy)

        if existing:
            logger.debug("DIY already liked", diy_id=str(diy_id), user_id=str(user_id))
            return liked

        session.add(Likes(user_id=user_id, diy_id=diy_id))
        try:
            await session.commit()
        except IntegrityError:
            await session.rollback()
            # Re-raise unless a concurrent request recorded the same like
            if await find_like(session, user_id, diy_id) is None:
                raise
            logger.debug("Concurrent like ignored", diy_id=str(diy_id), user_id=str(user_id))
        else:
            logger.info("DIY liked", diy_id=str(diy_id), user_id=str(user_id))

        return liked


async def remove_like(info: strawberry.Info, diy_id: UUID) -> DIYType | None:
    """Remove the logged-in user's like from a DIY. Returns the DIY, if it exists."""
    auth_context = await get_auth_context_from_info(info)
    user_id = require_user_id(auth_context, "You need to be logged in!")

    async with get_async_session() as session:
        await session.execute(
            delete(Likes).where(Likes.user_id == user_id, Likes.diy_id == diy_id)
        )
        await session.commit()

        diy = (await session.execute(select(Diys).where(Diys.id == diy_id))).scalar_one_or_none()

    logger.info("DIY unliked", diy_id=str(diy_id), user_id=str(user_id))

    return DIYType.from_model(diy) if diy else None

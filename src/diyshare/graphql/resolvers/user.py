from __future__ import annotations

from uuid import UUID

import strawberry
from sqlalchemy import delete, func, select

from ...database.connection import get_async_session
from ...dbmodels import Comments, Diys, Likes, SavedDiys, Users
from ...logging import get_logger
from ..access_control import get_auth_context_from_info, require_user_id
from ..errors import UserInputError
from ..types.comment import Comment as CommentType
from ..types.diy import DIY as DIYType
from ..types.like import Like as LikeType
from ..types.user import User as UserType

logger = get_logger(__name__)


# Query resolvers
async def resolve_user_by_username(info: strawberry.Info, username: str) -> UserType | None:
    _ = info
    async with get_async_session() as session:
        stmt = select(Users).where(Users.username == username.strip())
        result = await session.execute(stmt)
        user = result.scalar_one_or_none()

        return UserType.from_model(user) if user else None


async def resolve_users(info: strawberry.Info) -> list[UserType]:
    """Resolve every registered user."""
    _ = info
    try:
        async with get_async_session() as session:
            result = await session.execute(select(Users).order_by(Users.created_at.asc()))
            users = result.scalars().all()
    except Exception as e:
        logger.error("Error fetching users data", error=str(e))
        raise RuntimeError("Unable to fetch users data") from e

    return [UserType.from_model(user) for user in users]


# User field resolvers
async def resolve_user_diys(user: UserType, info: strawberry.Info) -> list[DIYType]:
    _ = info
    async with get_async_session() as session:
        stmt = select(Diys).where(Diys.user_id == user.id).order_by(Diys.created_at.desc())
        result = await session.execute(stmt)
        return [DIYType.from_model(diy) for diy in result.scalars().all()]


async def resolve_user_comments(user: UserType, info: strawberry.Info) -> list[CommentType]:
    _ = info
    async with get_async_session() as session:
        stmt = (
            select(Comments)
            .where(Comments.user_id == user.id)
            .order_by(Comments.created_at.desc())
        )
        result = await session.execute(stmt)
        return [CommentType.from_model(comment) for comment in result.scalars().all()]


async def resolve_user_likes(user: UserType, info: strawberry.Info) -> list[LikeType]:
    _ = info
    async with get_async_session() as session:
        stmt = select(Likes).where(Likes.user_id == user.id).order_by(Likes.created_at.desc())
        result = await session.execute(stmt)
        return [LikeType.from_model(like) for like in result.scalars().all()]


async def resolve_user_saved_diys(user: UserType, info: strawberry.Info) -> list[DIYType]:
    """Resolve saved DIYs in the order they were saved."""
    _ = info
    async with get_async_session() as session:
        stmt = (
            select(Diys)
            .join(SavedDiys, SavedDiys.diy_id == Diys.id)
            .where(SavedDiys.user_id == user.id)
            .order_by(SavedDiys.created_at.asc())
        )
        result = await session.execute(stmt)
        return [DIYType.from_model(diy) for diy in result.scalars().all()]


async def resolve_user_diy_count(user: UserType, info: strawberry.Info) -> int:
    _ = info
    async with get_async_session() as session:
        count_stmt = select(func.count(Diys.id)).where(Diys.user_id == user.id)
        result = await session.execute(count_stmt)
        return result.scalar() or 0


# Mutation resolvers
async def save_diy(info: strawberry.Info, diy_id: UUID) -> UserType:
    """
    Add a DIY to the current user's saved list.

    Saving an already saved DIY leaves a single entry.
    """
    auth_context = await get_auth_context_from_info(info)
    user_id = require_user_id(auth_context, "You need to be logged in!")

    async with get_async_session() as session:
        user = (await session.execute(select(Users).where(Users.id == user_id))).scalar_one_or_none()
        if not user:
            raise UserInputError("User not found")

        diy = (await session.execute(select(Diys.id).where(Diys.id == diy_id))).scalar_one_or_none()
        if diy is None:
            raise UserInputError("DIY not found")

        existing_stmt = select(SavedDiys).where(
            SavedDiys.user_id == user_id, SavedDiys.diy_id == diy_id
        )
        existing = (await session.execute(existing_stmt)).scalar_one_or_none()

        if existing:
            logger.debug("DIY already saved", diy_id=str(diy_id), user_id=str(user_id))
        else:
            session.add(SavedDiys(user_id=user_id, diy_id=diy_id))
            await session.commit()
            logger.info("DIY saved", diy_id=str(diy_id), user_id=str(user_id))

        return UserType.from_model(user)


async def unsave_diy(info: strawberry.Info, diy_id: UUID) -> UserType:
    """Remove a DIY from the current user's saved list."""
    auth_context = await get_auth_context_from_info(info)
    user_id = require_user_id(auth_context, "You need to be logged in!")

    async with get_async_session() as session:
        user = (await session.execute(select(Users).where(Users.id == user_id))).scalar_one_or_none()
        if not user:
            raise UserInputError("User not found")

        await session.execute(
            delete(SavedDiys).where(SavedDiys.user_id == user_id, SavedDiys.diy_id == diy_id)
        )
        await session.commit()

    logger.info("DIY removed from saved list", diy_id=str(diy_id), user_id=str(user_id))

    return UserType.from_model(user)

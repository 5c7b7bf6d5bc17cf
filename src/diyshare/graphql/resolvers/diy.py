from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

import strawberry
from sqlalchemy import func, or_, select

from ...database.connection import get_async_session
from ...dbmodels import Comments, Diys, Likes, Users
from ...logging import get_logger
from ..access_control import get_auth_context_from_info, is_author, require_user_id
from ..errors import AuthorizationError, UserInputError
from ..types.comment import Comment as CommentType
from ..types.diy import DIY as DIYType
from ..types.like import Like as LikeType
from ..types.user import User as UserType

if TYPE_CHECKING:
    from ..mutations.root import UpdateDIYInput

logger = get_logger(__name__)

LIKE_ESCAPE = "\\"


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so a search term matches literally."""
    return (
        term.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", LIKE_ESCAPE + "%")
        .replace("_", LIKE_ESCAPE + "_")
    )


def _clean_list(values: list[str] | None) -> list[str]:
    return [value.strip() for value in values or [] if value and value.strip()]


def _require_text(value: str | None, field: str) -> str:
    if value is None or not value.strip():
        raise UserInputError(f"{field} is required")
    return value.strip()


# Query resolvers
async def resolve_diy_by_id(info: strawberry.Info, id: UUID) -> DIYType | None:
    """Resolve a single DIY by its ID, or None when it does not exist."""
    _ = info
    async with get_async_session() as session:
        stmt = select(Diys).where(Diys.id == id)
        result = await session.execute(stmt)
        diy = result.scalar_one_or_none()

        if not diy:
            logger.info("DIY not found", diy_id=str(id))
            return None

        return DIYType.from_model(diy)


async def resolve_diys(info: strawberry.Info, username: str | None = None) -> list[DIYType]:
    """
    Resolve DIYs newest first, filtered by the author's username when given.
    """
    _ = info
    async with get_async_session() as session:
        stmt = select(Diys)
        if username:
            stmt = stmt.join(Users, Users.id == Diys.user_id).where(Users.username == username)
        stmt = stmt.order_by(Diys.created_at.desc())

        result = await session.execute(stmt)
        return [DIYType.from_model(diy) for diy in result.scalars().all()]


async def resolve_all_diys(info: strawberry.Info) -> list[DIYType]:
    """Resolve every DIY regardless of author."""
    _ = info
    try:
        async with get_async_session() as session:
            result = await session.execute(select(Diys).order_by(Diys.created_at.desc()))
            diys = result.scalars().all()
    except Exception as e:
        logger.error("Error fetching all DIYs", error=str(e))
        raise RuntimeError("Unable to fetch DIYs data") from e

    return [DIYType.from_model(diy) for diy in diys]


async def search_diys(info: strawberry.Info, search_term: str | None) -> list[DIYType]:
    """
    Search DIYs by title or description.

    Matching is a case-insensitive substring match on the term exactly as
    typed, surrounding spaces included; an empty term returns every DIY.
    Results are newest first.
    """
    _ = info

    async with get_async_session() as session:
        stmt = select(Diys)
        if search_term:
            search_pattern = f"%{escape_like(search_term)}%"
            stmt = stmt.where(
                or_(
                    Diys.title.ilike(search_pattern, escape=LIKE_ESCAPE),
                    Diys.description.ilike(search_pattern, escape=LIKE_ESCAPE),
                )
            )
        stmt = stmt.order_by(Diys.created_at.desc())

        result = await session.execute(stmt)
        diys = result.scalars().all()

    logger.debug("DIY search", search_term=search_term, results=len(diys))
    return [DIYType.from_model(diy) for diy in diys]


# DIY field resolvers
async def resolve_diy_user(diy: DIYType, info: strawberry.Info) -> UserType:
    """Resolve the author of a DIY through the request's user loader."""
    user = await info.context["loaders"].user_loader.load(diy.user_id)
    if not user:
        raise RuntimeError("DIY author not found")
    return UserType.from_model(user)


async def resolve_diy_comments(diy: DIYType, info: strawberry.Info) -> list[CommentType]:
    _ = info
    async with get_async_session() as session:
        stmt = (
            select(Comments)
            .where(Comments.diy_id == diy.id)
            .order_by(Comments.created_at.asc())
        )
        result = await session.execute(stmt)
        return [CommentType.from_model(comment) for comment in result.scalars().all()]


async def resolve_diy_likes(diy: DIYType, info: strawberry.Info) -> list[LikeType]:
    _ = info
    async with get_async_session() as session:
        stmt = select(Likes).where(Likes.diy_id == diy.id).order_by(Likes.created_at.asc())
        result = await session.execute(stmt)
        return [LikeType.from_model(like) for like in result.scalars().all()]


async def resolve_diy_like_count(diy: DIYType, info: strawberry.Info) -> int:
    """Count likes without loading them."""
    _ = info
    async with get_async_session() as session:
        count_stmt = select(func.count(Likes.id)).where(Likes.diy_id == diy.id)
        result = await session.execute(count_stmt)
        return result.scalar() or 0


async def resolve_diy_comment_count(diy: DIYType, info: strawberry.Info) -> int:
    _ = info
    async with get_async_session() as session:
        count_stmt = select(func.count(Comments.id)).where(Comments.diy_id == diy.id)
        result = await session.execute(count_stmt)
        return result.scalar() or 0


# Mutation resolvers
async def add_diy(
    info: strawberry.Info,
    title: str,
    description: str,
    instructions: str,
    materials_used: list[str] | None = None,
    images: list[str] | None = None,
) -> DIYType:
    """
    Create a new DIY.

    The authenticated user becomes its author.
    """
    auth_context = await get_auth_context_from_info(info)
    user_id = require_user_id(auth_context, "You need to be logged in!")

    new_diy = Diys(
        user_id=user_id,
        title=_require_text(title, "Title"),
        description=_require_text(description, "Description"),
        instructions=_require_text(instructions, "Instructions"),
        materials_used=_clean_list(materials_used),
        images=_clean_list(images),
    )

    async with get_async_session() as session:
        author = await session.execute(select(Users.id).where(Users.id == user_id))
        if author.scalar_one_or_none() is None:
            raise UserInputError("User not found")

        session.add(new_diy)
        await session.commit()

    logger.info("DIY created", diy_id=str(new_diy.id), user_id=str(user_id), title=new_diy.title)

    return DIYType.from_model(new_diy)


async def update_diy(info: strawberry.Info, input: UpdateDIYInput) -> DIYType:
    """
    Update an existing DIY.

    Only the author can update a DIY; omitted fields are left unchanged.
    """
    auth_context = await get_auth_context_from_info(info)
    user_id = require_user_id(auth_context, "You need to be logged in!")

    async with get_async_session() as session:
        stmt = select(Diys).where(Diys.id == input.id)
        result = await session.execute(stmt)
        diy = result.scalar_one_or_none()

        if not diy:
            raise UserInputError("DIY not found")

        if not is_author(diy, auth_context):
            raise AuthorizationError("You are not authorized to update this DIY.")

        updated_fields = []
        if input.title is not None:
            diy.title = _require_text(input.title, "Title")
            updated_fields.append("title")
        if input.description is not None:
            diy.description = _require_text(input.description, "Description")
            updated_fields.append("description")
        if input.instructions is not None:
            diy.instructions = _require_text(input.instructions, "Instructions")
            updated_fields.append("instructions")
        if input.materials_used is not None:
            diy.materials_used = _clean_list(input.materials_used)
            updated_fields.append("materials_used")
        if input.images is not None:
            diy.images = _clean_list(input.images)
            updated_fields.append("images")

        await session.commit()

    logger.info(
        "DIY updated",
        diy_id=str(diy.id),
        user_id=str(user_id),
        updated_fields=updated_fields,
    )

    return DIYType.from_model(diy)


async def delete_diy(info: strawberry.Info, id: UUID) -> bool:
    """
    Delete a DIY together with its comments, likes and saves.

    Only the author can delete a DIY.
    """
    auth_context = await get_auth_context_from_info(info)
    user_id = require_user_id(auth_context, "You need to be logged in!")

    async with get_async_session() as session:
        stmt = select(Diys).where(Diys.id == id)
        result = await session.execute(stmt)
        diy = result.scalar_one_or_none()

        if not diy:
            raise UserInputError("DIY not found")

        if not is_author(diy, auth_context):
            raise AuthorizationError("You are not authorized to delete this DIY.")

        # Comments, likes and saves go with it through ON DELETE CASCADE
        await session.delete(diy)
        await session.commit()

    logger.info("DIY deleted", diy_id=str(id), user_id=str(user_id))

    return True

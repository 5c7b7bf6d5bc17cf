"""
DIY GraphQL type definitions
"""

from datetime import datetime
from typing import TYPE_CHECKING, Annotated
from uuid import UUID

import strawberry

if TYPE_CHECKING:
    from ...dbmodels import Diys
    from .comment import Comment
    from .like import Like
    from .user import User


@strawberry.type(name="DIY")
class DIY:
    """DIY project write-up."""

    id: UUID = strawberry.field(name="_id")
    title: str
    description: str
    materials_used: list[str]
    instructions: str
    images: list[str]
    created_at: datetime
    updated_at: datetime
    user_id: strawberry.Private[UUID]

    @classmethod
    def from_model(cls, diy: "Diys") -> "DIY":
        return cls(
            id=diy.id,
            title=diy.title,
            description=diy.description,
            materials_used=list(diy.materials_used or []),
            instructions=diy.instructions,
            images=list(diy.images or []),
            created_at=diy.created_at,
            updated_at=diy.updated_at,
            user_id=diy.user_id,
        )

    @strawberry.field
    async def user(self, info: strawberry.Info) -> Annotated["User", strawberry.lazy(".user")]:
        """Get the author of this DIY."""
        from ..resolvers.diy import resolve_diy_user

        return await resolve_diy_user(self, info)

    @strawberry.field
    async def comments(
        self, info: strawberry.Info
    ) -> list[Annotated["Comment", strawberry.lazy(".comment")]]:
        """Get the comments on this DIY, oldest first."""
        from ..resolvers.diy import resolve_diy_comments

        return await resolve_diy_comments(self, info)

    @strawberry.field
    async def likes(self, info: strawberry.Info) -> list[Annotated["Like", strawberry.lazy(".like")]]:
        """Get the likes on this DIY."""
        from ..resolvers.diy import resolve_diy_likes

        return await resolve_diy_likes(self, info)

    @strawberry.field
    async def like_count(self, info: strawberry.Info) -> int:
        from ..resolvers.diy import resolve_diy_like_count

        return await resolve_diy_like_count(self, info)

    @strawberry.field
    async def comment_count(self, info: strawberry.Info) -> int:
        from ..resolvers.diy import resolve_diy_comment_count

        return await resolve_diy_comment_count(self, info)

"""
User GraphQL type definitions
"""

from datetime import datetime
from typing import TYPE_CHECKING, Annotated
from uuid import UUID

import strawberry

if TYPE_CHECKING:
    from ...dbmodels import Users
    from .comment import Comment
    from .diy import DIY
    from .like import Like


@strawberry.type
class User:
    """User type for GraphQL API. The password hash is never exposed."""

    id: UUID = strawberry.field(name="_id")
    username: str
    email: str
    created_at: datetime

    @classmethod
    def from_model(cls, user: "Users") -> "User":
        return cls(
            id=user.id,
            username=user.username,
            email=user.email,
            created_at=user.created_at,
        )

    @strawberry.field(name="DIYs")
    async def diys(
        self, info: strawberry.Info
    ) -> list[Annotated["DIY", strawberry.lazy(".diy")]]:
        """DIYs authored by this user, newest first."""
        from ..resolvers.user import resolve_user_diys

        return await resolve_user_diys(self, info)

    @strawberry.field
    async def comments(
        self, info: strawberry.Info
    ) -> list[Annotated["Comment", strawberry.lazy(".comment")]]:
        """Comments written by this user."""
        from ..resolvers.user import resolve_user_comments

        return await resolve_user_comments(self, info)

    @strawberry.field
    async def likes(self, info: strawberry.Info) -> list[Annotated["Like", strawberry.lazy(".like")]]:
        """Likes given by this user."""
        from ..resolvers.user import resolve_user_likes

        return await resolve_user_likes(self, info)

    @strawberry.field(name="savedDIYs")
    async def saved_diys(
        self, info: strawberry.Info
    ) -> list[Annotated["DIY", strawberry.lazy(".diy")]]:
        """DIYs this user has saved."""
        from ..resolvers.user import resolve_user_saved_diys

        return await resolve_user_saved_diys(self, info)

    @strawberry.field(name="diyCount")
    async def diy_count(self, info: strawberry.Info) -> int:
        from ..resolvers.user import resolve_user_diy_count

        return await resolve_user_diy_count(self, info)

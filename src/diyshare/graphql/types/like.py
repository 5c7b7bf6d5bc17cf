"""
Like GraphQL type definitions
"""

from datetime import datetime
from typing import TYPE_CHECKING, Annotated
from uuid import UUID

import strawberry

if TYPE_CHECKING:
    from ...dbmodels import Likes
    from .diy import DIY
    from .user import User


@strawberry.type
class Like:
    id: UUID = strawberry.field(name="_id")
    created_at: datetime
    user_id: strawberry.Private[UUID]
    diy_id: strawberry.Private[UUID]

    @classmethod
    def from_model(cls, like: "Likes") -> "Like":
        return cls(
            id=like.id,
            created_at=like.created_at,
            user_id=like.user_id,
            diy_id=like.diy_id,
        )

    @strawberry.field
    async def user(self, info: strawberry.Info) -> Annotated["User", strawberry.lazy(".user")]:
        """Get the user who gave this like."""
        from ..resolvers.like import resolve_like_user

        return await resolve_like_user(self, info)

    @strawberry.field(name="DIY")
    async def diy(
        self, info: strawberry.Info
    ) -> Annotated["DIY", strawberry.lazy(".diy")] | None:
        """Get the liked DIY."""
        from ..resolvers.like import resolve_like_diy

        return await resolve_like_diy(self, info)

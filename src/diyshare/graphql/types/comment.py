"""
Comment GraphQL type definitions
"""

from datetime import datetime
from typing import TYPE_CHECKING, Annotated
from uuid import UUID

import strawberry

if TYPE_CHECKING:
    from ...dbmodels import Comments
    from .diy import DIY
    from .user import User


@strawberry.type
class Comment:
    id: UUID = strawberry.field(name="_id")
    content: str
    created_at: datetime
    user_id: strawberry.Private[UUID]
    diy_id: strawberry.Private[UUID]

    @classmethod
    def from_model(cls, comment: "Comments") -> "Comment":
        return cls(
            id=comment.id,
            content=comment.content,
            created_at=comment.created_at,
            user_id=comment.user_id,
            diy_id=comment.diy_id,
        )

    @strawberry.field
    async def user(self, info: strawberry.Info) -> Annotated["User", strawberry.lazy(".user")]:
        """Get the author of this comment."""
        from ..resolvers.comment import resolve_comment_user

        return await resolve_comment_user(self, info)

    @strawberry.field(name="DIY")
    async def diy(
        self, info: strawberry.Info
    ) -> Annotated["DIY", strawberry.lazy(".diy")] | None:
        """Get the DIY this comment belongs to."""
        from ..resolvers.comment import resolve_comment_diy

        return await resolve_comment_diy(self, info)

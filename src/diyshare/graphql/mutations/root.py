"""
Root GraphQL mutation definitions
"""

from typing import Annotated
from uuid import UUID

import strawberry

from ..types.auth import Auth
from ..types.comment import Comment
from ..types.diy import DIY
from ..types.user import User

DIYId = Annotated[UUID, strawberry.argument(name="DIYId")]


# Input types for mutations
@strawberry.input
class UpdateDIYInput:
    """Input for updating a DIY."""

    id: UUID = strawberry.field(name="DIYId")
    title: str | None = None
    description: str | None = None
    instructions: str | None = None
    materials_used: list[str] | None = None
    images: list[str] | None = None


@strawberry.type
class Mutation:
    """Root GraphQL mutation type."""

    # Account mutations
    @strawberry.mutation(name="addUser")
    async def add_user(
        self, info: strawberry.Info, username: str, email: str, password: str
    ) -> Auth:
        """Register a new user."""
        from ..resolvers.auth import add_user

        return await add_user(info, username, email, password)

    @strawberry.mutation
    async def login(self, info: strawberry.Info, email: str, password: str) -> Auth:
        """Log in with email and password."""
        from ..resolvers.auth import login

        return await login(info, email, password)

    # DIY mutations
    @strawberry.mutation(name="addDIY")
    async def add_diy(
        self,
        info: strawberry.Info,
        title: str,
        description: str,
        instructions: str,
        materials_used: list[str] | None = None,
        images: list[str] | None = None,
    ) -> DIY:
        """Create a new DIY."""
        from ..resolvers.diy import add_diy

        return await add_diy(info, title, description, instructions, materials_used, images)

    @strawberry.mutation(name="updateDIY")
    async def update_diy(self, info: strawberry.Info, input: UpdateDIYInput) -> DIY:
        """Update an existing DIY."""
        from ..resolvers.diy import update_diy

        return await update_diy(info, input)

    @strawberry.mutation(name="deleteDIY")
    async def delete_diy(self, info: strawberry.Info, diy_id: DIYId) -> bool:
        """Delete a DIY."""
        from ..resolvers.diy import delete_diy

        return await delete_diy(info, diy_id)

    # Comment mutations
    @strawberry.mutation(name="addComment")
    async def add_comment(self, info: strawberry.Info, diy_id: DIYId, content: str) -> Comment:
        """Comment on a DIY."""
        from ..resolvers.comment import add_comment

        return await add_comment(info, diy_id, content)

    @strawberry.mutation(name="removeComment")
    async def remove_comment(self, info: strawberry.Info, comment_id: UUID) -> Comment:
        """Remove one of your comments."""
        from ..resolvers.comment import remove_comment

        return await remove_comment(info, comment_id)

    # Saved list mutations
    @strawberry.mutation(name="saveDIY")
    async def save_diy(self, info: strawberry.Info, diy_id: DIYId) -> User:
        """Add a DIY to your saved list."""
        from ..resolvers.user import save_diy

        return await save_diy(info, diy_id)

    @strawberry.mutation(name="removeDIY")
    async def remove_diy(self, info: strawberry.Info, diy_id: DIYId) -> User:
        """Remove a DIY from your saved list."""
        from ..resolvers.user import unsave_diy

        return await unsave_diy(info, diy_id)

    # Like mutations
    @strawberry.mutation(name="addLike")
    async def add_like(self, info: strawberry.Info, diy_id: DIYId) -> DIY:
        """Like a DIY."""
        from ..resolvers.like import add_like

        return await add_like(info, diy_id)

    @strawberry.mutation(name="removeLike")
    async def remove_like(self, info: strawberry.Info, diy_id: DIYId) -> DIY | None:
        """Take back a like."""
        from ..resolvers.like import remove_like

        return await remove_like(info, diy_id)

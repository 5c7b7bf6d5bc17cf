"""
Root GraphQL query definitions
"""

from typing import Annotated
from uuid import UUID

import strawberry

from ..types.diy import DIY
from ..types.user import User


@strawberry.type
class Query:
    """Root GraphQL query type."""

    @strawberry.field
    async def me(self, info: strawberry.Info) -> User | None:
        """Get the current authenticated user."""
        from ..resolvers.auth import resolve_current_user

        return await resolve_current_user(info)

    @strawberry.field
    async def user(self, info: strawberry.Info, username: str) -> User | None:
        """Get a user by username."""
        from ..resolvers.user import resolve_user_by_username

        return await resolve_user_by_username(info, username)

    @strawberry.field
    async def users(self, info: strawberry.Info) -> list[User]:
        """Get all users."""
        from ..resolvers.user import resolve_users

        return await resolve_users(info)

    @strawberry.field(name="DIY")
    async def diy(
        self,
        info: strawberry.Info,
        id: Annotated[UUID, strawberry.argument(name="_id")],
    ) -> DIY | None:
        """Get a DIY by ID."""
        from ..resolvers.diy import resolve_diy_by_id

        return await resolve_diy_by_id(info, id)

    @strawberry.field(name="DIYs")
    async def diys(self, info: strawberry.Info, username: str | None = None) -> list[DIY]:
        """Get DIYs newest first, optionally only those by one author."""
        from ..resolvers.diy import resolve_diys

        return await resolve_diys(info, username)

    @strawberry.field(name="allDIYs")
    async def all_diys(self, info: strawberry.Info) -> list[DIY]:
        """Get every DIY."""
        from ..resolvers.diy import resolve_all_diys

        return await resolve_all_diys(info)

    @strawberry.field(name="searchDIYs")
    async def search_diys(
        self,
        info: strawberry.Info,
        search_term: Annotated[str | None, strawberry.argument(name="searchTerm")] = None,
    ) -> list[DIY]:
        """Search DIYs by title or description."""
        from ..resolvers.diy import search_diys

        return await search_diys(info, search_term)

"""Token identities and the errors raised around them."""

from __future__ import annotations

from typing import Literal, NotRequired, Protocol, TypedDict
from uuid import UUID


class Principal(TypedDict):
    """Who a verified token says the caller is."""

    provider: Literal["jwt"]
    subject: str  # Users.id as a string
    username: NotRequired[str]
    email: NotRequired[str]
    claims: NotRequired[dict]


class AuthAdapter(Protocol):
    async def verify_token(self, token: str) -> Principal: ...

    async def issue_token(self, user_id: UUID | None = None, claims: dict | None = None) -> str: ...


class AuthenticationError(Exception):
    """The caller is not logged in, or their token or credentials were rejected."""


class AuthorizationError(Exception):
    """The caller is logged in but does not own the DIY or comment they tried to change."""

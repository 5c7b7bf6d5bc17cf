"""
Who is calling, and may they touch this row
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol
from uuid import UUID

import strawberry

from ..auth.middleware import get_auth_context_optional
from ..logging import get_logger
from .errors import AuthenticationError

if TYPE_CHECKING:
    from ..auth.context import AuthContext

logger = get_logger(__name__)


class Authored(Protocol):
    user_id: UUID


async def get_auth_context_from_info(info: strawberry.Info) -> AuthContext | None:
    """Caller of the current GraphQL operation; a bad token counts as anonymous."""
    request = info.context.get("request")
    if request is None:
        logger.error("GraphQL context carries no request")
        return None

    return await get_auth_context_optional(authorization=request.headers.get("authorization"))


def require_user_id(auth_context: AuthContext | None, message: str) -> UUID:
    """The logged-in user's id, or AuthenticationError carrying ``message``."""
    user_id = auth_context.user_id if auth_context and auth_context.is_authenticated else None
    if user_id is None:
        raise AuthenticationError(message)
    return user_id


def is_author(record: Authored, auth_context: AuthContext | None) -> bool:
    """True when the logged-in user wrote ``record`` (a DIY or a comment)."""
    if not auth_context or not auth_context.is_authenticated:
        return False
    return record.user_id == auth_context.user_id

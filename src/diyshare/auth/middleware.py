"""FastAPI dependencies turning an Authorization header into an AuthContext."""

from __future__ import annotations

from uuid import UUID

from fastapi import Header, HTTPException

from ..logging import get_logger
from .adapters.base import AuthenticationError
from .context import AuthContext
from .factory import get_auth_adapter

logger = get_logger(__name__)

BEARER_PREFIX = "Bearer "


def unauthorized(detail: str) -> HTTPException:
    return HTTPException(status_code=401, detail=detail, headers={"WWW-Authenticate": "Bearer"})


def bearer_token(authorization: str) -> str:
    """Pull the token out of ``Bearer <token>``; 401 when the header is malformed or empty."""
    if not authorization.startswith(BEARER_PREFIX):
        logger.warning("Authorization header is not a bearer token")
        raise unauthorized("Invalid authorization format. Expected: Bearer <token>")

    token = authorization.removeprefix(BEARER_PREFIX).strip()
    if not token:
        logger.warning("Bearer token is empty")
        raise unauthorized("Empty token")
    return token


async def get_auth_context(authorization: str | None = Header(None)) -> AuthContext:
    """
    Resolve the caller of a request.

    No header means an anonymous visitor. A header that is present must carry
    a valid token whose subject is a user id, otherwise the request gets a 401.
    """
    if not authorization:
        return AuthContext.anonymous()

    token = bearer_token(authorization)
    adapter = get_auth_adapter()

    try:
        principal = await adapter.verify_token(token)
    except AuthenticationError as e:
        logger.warning("Bearer token rejected", error=str(e))
        raise unauthorized(str(e)) from e

    try:
        user_id = UUID(principal["subject"])
    except ValueError as e:
        logger.warning("Token subject is not a user id", subject=principal["subject"])
        raise unauthorized("Invalid token subject") from e

    logger.debug("Request authenticated", user_id=str(user_id))
    return AuthContext(user_id=user_id, principal=principal, token=token)


async def get_auth_context_optional(authorization: str | None = Header(None)) -> AuthContext:
    """Like ``get_auth_context`` but a bad token downgrades to anonymous instead of a 401."""
    try:
        return await get_auth_context(authorization)
    except HTTPException:
        return AuthContext.anonymous()

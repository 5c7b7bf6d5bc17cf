"""Factory for creating the auth adapter from configuration."""

from __future__ import annotations

from ..config import DEFAULT_JWT_SECRET, is_production, settings
from .adapters.base import AuthAdapter
from .adapters.jwt import JWTAuthAdapter


def get_auth_adapter() -> AuthAdapter:
    """Create and return the configured auth adapter."""
    if not settings.jwt_secret:
        raise ValueError("JWT secret key is required. Set DIYSHARE_JWT_SECRET.")

    if is_production() and settings.jwt_secret == DEFAULT_JWT_SECRET:
        raise ValueError(
            "The development JWT secret cannot be used in production. Set DIYSHARE_JWT_SECRET."
        )

    return JWTAuthAdapter(
        secret_key=settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        issuer=settings.jwt_issuer,
        audience=settings.jwt_audience,
        token_expiry_hours=settings.jwt_expiry_hours,
    )


async def sign_token(user) -> str:
    """Issue a token identifying a user row (id, username and email claims)."""
    adapter = get_auth_adapter()
    return await adapter.issue_token(
        user_id=user.id,
        claims={"username": user.username, "email": user.email},
    )

"""Signs and checks the bearer tokens handed out by ``addUser`` and ``login``."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import UUID

import jwt

from ...logging import get_logger
from .base import AuthenticationError, Principal

logger = get_logger(__name__)

# Claims copied from the token onto the principal when present
PROFILE_CLAIMS = ("username", "email")


class JWTAuthAdapter:
    """HMAC-signed tokens scoped to one issuer and audience."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        issuer: str = "diyshare",
        audience: str = "diyshare-api",
        token_expiry_hours: int = 2,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.issuer = issuer
        self.audience = audience
        self.lifetime = timedelta(hours=token_expiry_hours)

    @property
    def token_expiry_hours(self) -> int:
        return int(self.lifetime.total_seconds() // 3600)

    async def issue_token(self, user_id: UUID | None = None, claims: dict | None = None) -> str:
        issued_at = datetime.now(UTC)
        payload: dict[str, Any] = {
            "iss": self.issuer,
            "aud": self.audience,
            "iat": issued_at,
            "nbf": issued_at,
            "exp": issued_at + self.lifetime,
        }
        if user_id:
            payload["sub"] = str(user_id)
        payload.update(claims or {})

        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    async def verify_token(self, token: str) -> Principal:
        """Check signature, audience, issuer and lifetime, then build the principal.

        Raises:
            AuthenticationError: "Invalid token" for anything PyJWT rejects,
                or when the token names no subject
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                audience=self.audience,
                issuer=self.issuer,
                options={"require": ["exp", "iat"]},
            )
        except jwt.InvalidTokenError as e:
            logger.warning("Rejected bearer token", reason=str(e))
            raise AuthenticationError("Invalid token") from e

        return self._principal_from(payload)

    @staticmethod
    def _principal_from(payload: dict[str, Any]) -> Principal:
        subject = payload.get("sub")
        if not subject:
            raise AuthenticationError("Missing 'sub' claim in token")

        principal = Principal(provider="jwt", subject=subject, claims=payload)
        for claim in PROFILE_CLAIMS:
            if value := payload.get(claim):
                principal[claim] = value
        return principal

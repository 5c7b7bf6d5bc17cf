from __future__ import annotations

from dataclasses import dataclass
from uuid import UUID

from .adapters.base import Principal


@dataclass(frozen=True)
class AuthContext:
    """The caller of one request: a logged-in user, or nobody."""

    user_id: UUID | None
    principal: Principal | None
    token: str | None

    @classmethod
    def anonymous(cls) -> AuthContext:
        return cls(user_id=None, principal=None, token=None)

    @property
    def is_authenticated(self) -> bool:
        return self.user_id is not None and self.principal is not None

    @property
    def username(self) -> str | None:
        return self.principal.get("username") if self.principal else None

"""Authentication and authorization system for DIY Share."""

from .adapters.base import AuthAdapter, AuthenticationError, AuthorizationError, Principal
from .context import AuthContext
from .factory import get_auth_adapter, sign_token
from .middleware import get_auth_context, get_auth_context_optional
from .passwords import hash_password, verify_password

__all__ = [
    "AuthAdapter",
    "AuthContext",
    "AuthenticationError",
    "AuthorizationError",
    "Principal",
    "get_auth_adapter",
    "get_auth_context",
    "get_auth_context_optional",
    "hash_password",
    "sign_token",
    "verify_password",
]

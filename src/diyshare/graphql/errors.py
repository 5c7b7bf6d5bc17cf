"""
Errors raised by GraphQL resolvers
"""

from ..auth.adapters.base import AuthenticationError, AuthorizationError


class UserInputError(Exception):
    """Raised when a mutation gets invalid input or points at a missing record."""

    pass


__all__ = ["AuthenticationError", "AuthorizationError", "UserInputError"]

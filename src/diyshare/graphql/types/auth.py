"""
Auth payload GraphQL type
"""

import strawberry

from .user import User


@strawberry.type
class Auth:
    """Signed token plus the user it identifies."""

    token: str
    user: User

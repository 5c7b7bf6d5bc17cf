from __future__ import annotations

import re

import strawberry
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError

from ...auth.factory import sign_token
from ...auth.passwords import hash_password, verify_password
from ...database.connection import get_async_session
from ...dbmodels import Users
from ...logging import get_logger
from ..access_control import get_auth_context_from_info, require_user_id
from ..errors import AuthenticationError, UserInputError
from ..types.auth import Auth
from ..types.user import User as UserType

logger = get_logger(__name__)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
MIN_PASSWORD_LENGTH = 5


def normalize_email(email: str) -> str:
    return email.strip().lower()


async def resolve_current_user(info: strawberry.Info) -> UserType | None:
    """Resolve the logged-in user; None when the account no longer exists."""
    auth_context = await get_auth_context_from_info(info)
    user_id = require_user_id(auth_context, "Not logged in")

    async with get_async_session() as session:
        result = await session.execute(select(Users).where(Users.id == user_id))
        user = result.scalar_one_or_none()

        if not user:
            logger.info("Token refers to a missing user", user_id=str(user_id))
            return None

        return UserType.from_model(user)


async def add_user(info: strawberry.Info, username: str, email: str, password: str) -> Auth:
    """
    Register a new user and sign a token for them.

    Raises:
        UserInputError: On invalid fields or an already used username/email
    """
    _ = info
    username = username.strip()
    email = normalize_email(email)

    if not username:
        raise UserInputError("Username is required")
    if not EMAIL_PATTERN.match(email):
        raise UserInputError("Must match an email address!")
    if len(password) < MIN_PASSWORD_LENGTH:
        raise UserInputError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters long")

    async with get_async_session() as session:
        stmt = select(Users).where(or_(Users.username == username, Users.email == email))
        existing = (await session.execute(stmt)).scalars().first()
        if existing:
            if existing.username == username:
                raise UserInputError("Username is already taken")
            raise UserInputError("Email is already registered")

        user = Users(username=username, email=email, password_hash=hash_password(password))
        session.add(user)
        try:
            await session.commit()
        except IntegrityError as e:
            # Lost a race with a concurrent registration
            raise UserInputError("Username or email is already registered") from e

    logger.info("User registered", user_id=str(user.id), username=username)

    token = await sign_token(user)
    return Auth(token=token, user=UserType.from_model(user))


async def login(info: strawberry.Info, email: str, password: str) -> Auth:
    """Check credentials and sign a token."""
    _ = info
    async with get_async_session() as session:
        stmt = select(Users).where(Users.email == normalize_email(email))
        user = (await session.execute(stmt)).scalar_one_or_none()

    if not user:
        raise AuthenticationError("No user found with this email address")

    if not verify_password(password, user.password_hash):
        logger.info("Login rejected", user_id=str(user.id))
        raise AuthenticationError("Incorrect credentials")

    logger.info("User logged in", user_id=str(user.id))

    token = await sign_token(user)
    return Auth(token=token, user=UserType.from_model(user))

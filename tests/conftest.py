"""
Shared pytest fixtures and configuration for all tests.
"""

import os
import uuid
from collections.abc import AsyncGenerator, Generator
from pathlib import Path
from typing import Any
from unittest.mock import MagicMock

import pytest
import pytest_asyncio
import strawberry

TEST_JWT_SECRET = "test-secret-key-for-testing-only"

os.environ.setdefault("DIYSHARE_JWT_SECRET", TEST_JWT_SECRET)
os.environ.setdefault("DIYSHARE_DEBUG", "false")

from diyshare.auth.context import AuthContext  # noqa: E402


def make_info(authorization: str | None = "Bearer test-token") -> Any:
    """Build a GraphQL info object whose request carries an Authorization header."""
    info = MagicMock(spec=strawberry.Info)
    info.context = {
        "request": MagicMock(
            headers=MagicMock(
                get=MagicMock(side_effect=lambda key: {"authorization": authorization}.get(key))
            )
        ),
        "loaders": MagicMock(),
    }
    return info


@pytest.fixture
def info_factory():
    return make_info


@pytest.fixture
def mock_info():
    """Create a mock GraphQL info object with request context."""
    return make_info()


@pytest.fixture
def auth_context():
    """Create an authenticated context."""
    return AuthContext(
        user_id=uuid.uuid4(),
        principal={"provider": "jwt", "subject": "test-user", "username": "tester"},
        token="test-token",
    )


@pytest.fixture
def anonymous_context():
    return AuthContext(user_id=None, principal=None, token=None)


@pytest_asyncio.fixture(scope="function")
async def sqlite_database(tmp_path: Path) -> AsyncGenerator[str, None]:
    """Point the shared engine at a fresh SQLite file with every table created."""
    from diyshare.database.connection import (
        create_all_tables,
        dispose_database,
        init_database,
        reset_database,
    )

    dsn = f"sqlite:///{tmp_path / 'diyshare_test.db'}"

    reset_database()
    init_database(dsn, force_reinit=True)
    await create_all_tables()

    yield dsn

    await dispose_database()


@pytest.fixture(autouse=True)
def reset_environment() -> Generator[None, None, None]:
    """Reset environment variables for each test."""
    original_env = os.environ.copy()
    yield
    os.environ.clear()
    os.environ.update(original_env)

"""
Async engine and session lifecycle
"""

import os
import threading
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from sqlalchemy import event, text
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from ..config import settings
from ..logging import get_logger

logger = get_logger(__name__)

ASYNC_DRIVERS = {
    "postgresql://": "postgresql+asyncpg://",
    "sqlite://": "sqlite+aiosqlite://",
}

# Substring of a driver error -> hint appended to the connection check result
CONNECTION_HINTS = (
    ("Connection refused", "The database server appears to be down or unreachable."),
    ("could not connect", "The database server appears to be down or unreachable."),
    ("password authentication failed", "Please check your database credentials."),
    ("does not exist", "Check that the database exists and migrations have been run."),
    ("no such table", "Run `diyshare-migrate upgrade` to create the tables."),
)

_engine: AsyncEngine | None = None
_sessionmaker: async_sessionmaker[AsyncSession] | None = None
_lock = threading.Lock()


def get_database_url() -> str:
    """``DIYSHARE_DATABASE_URL`` from the live environment, else the loaded settings."""
    return os.getenv("DIYSHARE_DATABASE_URL") or settings.database_url


def to_async_url(database_url: str) -> str:
    for plain, driver in ASYNC_DRIVERS.items():
        if database_url.startswith(plain):
            return driver + database_url[len(plain) :]
    return database_url


def _sqlite_foreign_keys_on(dbapi_connection, connection_record) -> None:
    _ = connection_record
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_engine_for_url(database_url: str, **kwargs) -> AsyncEngine:
    async_url = to_async_url(database_url)
    kwargs.setdefault("echo", settings.sql_echo)

    if make_url(async_url).get_backend_name() == "sqlite":
        engine = create_async_engine(async_url, **kwargs)
        # SQLite ignores ON DELETE CASCADE unless enabled per connection
        event.listen(engine.sync_engine, "connect", _sqlite_foreign_keys_on)
        return engine

    kwargs.setdefault("pool_size", settings.database_pool_size)
    kwargs.setdefault("max_overflow", settings.database_max_overflow)
    kwargs.setdefault("pool_pre_ping", True)
    return create_async_engine(async_url, **kwargs)


def init_database(database_url: str | None = None, force_reinit: bool = False) -> None:
    """Build the shared engine and session factory once per process.

    Passing ``database_url`` or ``force_reinit`` replaces an existing engine.
    """
    global _engine, _sessionmaker

    rebuild = force_reinit or database_url is not None
    if _engine is not None and not rebuild:
        return

    with _lock:
        if _engine is not None and not rebuild:
            return

        url = database_url or get_database_url()
        _engine = create_engine_for_url(url)
        # Resolvers read columns after commit
        _sessionmaker = async_sessionmaker(_engine, autoflush=False, expire_on_commit=False)

    logger.info("Database initialized", database=make_url(url).render_as_string(hide_password=True))


def reset_database() -> None:
    """Forget the shared engine without disposing it."""
    global _engine, _sessionmaker
    _engine = None
    _sessionmaker = None


async def dispose_database() -> None:
    if _engine is not None:
        await _engine.dispose()
    reset_database()


def get_async_engine() -> AsyncEngine:
    if _engine is None:
        init_database()
    if _engine is None:
        raise RuntimeError("Database not initialized")
    return _engine


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """Session that commits when the block exits cleanly and rolls back otherwise."""
    if _sessionmaker is None:
        init_database()
    if _sessionmaker is None:
        raise RuntimeError("Database not initialized")

    async with _sessionmaker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def test_database_connection() -> tuple[bool, str | None]:
    """Run ``SELECT 1``; returns (ok, message with a hint when one applies)."""
    if _engine is None:
        return False, "Database engine not initialized"

    try:
        async with _engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        detail = f"Database connection error ({type(e).__name__}): {e}"
        hint = next((hint for marker, hint in CONNECTION_HINTS if marker in str(e)), None)
        return False, f"{detail}\n{hint}" if hint else detail

    return True, None


async def create_all_tables() -> None:
    """Create the schema straight from the ORM metadata (tests, throwaway SQLite files)."""
    from ..dbmodels import Base

    async with get_async_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


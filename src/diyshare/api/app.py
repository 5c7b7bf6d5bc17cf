"""
FastAPI application serving the DIY Share GraphQL API
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..auth.factory import get_auth_adapter
from ..config import is_production, settings
from ..database import init_database
from ..database.connection import dispose_database
from ..database.connection import test_database_connection as ping_database
from ..logging import configure_logging, get_logger
from ..middleware import LoggingContextMiddleware

configure_logging(debug=settings.debug)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    _ = app
    logger.info("DIY Share API starting", environment=settings.environment)

    # Raises on a missing secret, or the development secret in production
    get_auth_adapter()

    init_database()
    ok, error = await ping_database()
    if not ok:
        logger.error("Database unreachable at startup", error=error)
        if is_production():
            raise RuntimeError(error)

    try:
        yield
    finally:
        logger.info("DIY Share API stopping")
        await dispose_database()


def mount_graphql(app: FastAPI) -> None:
    """Validate the schema, then serve it at /graphql. A broken schema stops startup."""
    from ..graphql.schema import create_graphql_router, validate_schema

    validate_schema()
    app.include_router(create_graphql_router())
    logger.info("GraphQL endpoint mounted", endpoint="/graphql")


def create_app() -> FastAPI:
    app = FastAPI(
        title="DIY Share API",
        description="Share, discover and discuss DIY projects",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.add_middleware(LoggingContextMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():  # pyright: ignore [reportUnusedFunction]
        return {"status": "healthy", "version": __version__}

    mount_graphql(app)
    return app


app = create_app()

"""
Structured logging for DIY Share.

Console output when debugging, one JSON object per line otherwise. Every
event logged while a request is in flight carries that request's id and,
when the caller sent a valid token, the user's id.
"""

import logging
import secrets
import sys
import time
from contextvars import ContextVar
from typing import Any

import jwt
import structlog
from fastapi import Request

request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
user_id_ctx: ContextVar[str | None] = ContextVar("user_id", default=None)

# Third-party loggers that are too chatty at INFO
NOISY_LOGGERS = ("sqlalchemy.engine", "httpx", "httpcore", "aiosqlite")


def add_request_context(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """structlog processor: attach the current request and user ids."""
    _ = logger, method_name

    if request_id := request_id_ctx.get():
        event_dict.setdefault("request_id", request_id)
    if user_id := user_id_ctx.get():
        event_dict.setdefault("user_id", user_id)

    return event_dict


def configure_logging(debug: bool = False, level: str | None = None) -> None:
    """Configure stdlib logging and structlog.

    Args:
        debug: Human-readable console output at DEBUG level instead of JSON
        level: Explicit level name; defaults to ``settings.log_level``
    """
    from .config import settings

    if debug:
        log_level = logging.DEBUG
    else:
        log_level = logging.getLevelName((level or settings.log_level).upper())
        if not isinstance(log_level, int):
            log_level = logging.INFO

    logging.basicConfig(level=log_level, stream=sys.stdout, format="%(message)s", force=True)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    renderer = (
        structlog.dev.ConsoleRenderer(colors=True)
        if debug
        else structlog.processors.JSONRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            add_request_context,
            structlog.processors.TimeStamper(fmt="ISO", utc=True),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    return structlog.get_logger(name)


def generate_request_id() -> str:
    """Short sortable request id: millisecond timestamp in hex, a dash, 8 random hex digits."""
    return f"{int(time.time() * 1000):x}-{secrets.token_hex(4)}"


def set_request_context(request_id: str | None = None, user_id: str | None = None) -> None:
    """Bind ids for the current request, generating a request id when none is given."""
    request_id_ctx.set(request_id or generate_request_id())
    if user_id is not None:
        user_id_ctx.set(user_id)


def clear_request_context() -> None:
    request_id_ctx.set(None)
    user_id_ctx.set(None)


def get_request_id() -> str | None:
    return request_id_ctx.get()


def get_user_id() -> str | None:
    return user_id_ctx.get()


def extract_user_id_from_request(request: Request) -> str | None:
    """Read the user id from a request's bearer token for log correlation.

    Only the signature is checked here; authorization decisions are made by
    the auth middleware, never from this value.
    """
    from .config import settings

    auth_header = request.headers.get("authorization")
    if not auth_header or not auth_header.startswith("Bearer "):
        return None

    try:
        payload = jwt.decode(
            auth_header[7:],
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            audience=settings.jwt_audience,
            issuer=settings.jwt_issuer,
        )
    except jwt.InvalidTokenError:
        return None

    return payload.get("sub")

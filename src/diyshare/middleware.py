"""
Per-request logging: binds a request id, then logs start, finish and duration
"""

import json
import re
import time
from collections.abc import Callable
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from .logging import (
    clear_request_context,
    extract_user_id_from_request,
    get_logger,
    set_request_context,
)

logger = get_logger(__name__)

GRAPHQL_PATH = "/graphql"
REDACTED = "[REDACTED]"

# Substrings of query parameter names whose values never reach the logs
SENSITIVE_KEYS = frozenset(
    {"password", "token", "secret", "auth", "jwt", "session", "cookie", "credentials"}
)

# GraphQL documents travel in these parameters on GET requests
GRAPHQL_PARAMS = ("query", "variables", "extensions")

OPERATION_PATTERN = re.compile(r"^\s*(query|mutation)\s+(\w+)")


def sanitize_query_params(params: dict[str, Any]) -> dict[str, Any]:
    """Copy of ``params`` with sensitive values replaced by a marker."""
    return {
        key: REDACTED if any(word in key.lower() for word in SENSITIVE_KEYS) else value
        for key, value in params.items()
    }


def _operation_from_document(query: Any) -> str | None:
    """Name a GraphQL document for the logs; mutations get a ``mutation:`` prefix."""
    if not isinstance(query, str) or not query:
        return None
    if "__schema" in query or "IntrospectionQuery" in query:
        return "__introspection"

    match = OPERATION_PATTERN.match(query)
    if not match:
        return "unnamed_operation"

    kind, name = match.groups()
    return f"mutation:{name}" if kind == "mutation" else name


async def _graphql_payload(request: Request) -> dict[str, Any] | None:
    if request.method == "GET":
        return dict(request.query_params)
    if request.method != "POST":
        return None

    body = await request.body()
    if not body:
        return None
    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None
    return data if isinstance(data, dict) else None


async def extract_graphql_operation_name(request: Request) -> str | None:
    """Operation name of a /graphql request, preferring an explicit ``operationName``."""
    if request.url.path != GRAPHQL_PATH:
        return None

    payload = await _graphql_payload(request)
    if payload is None:
        return None

    explicit = payload.get("operationName")
    if isinstance(explicit, str) and explicit:
        return explicit
    return _operation_from_document(payload.get("query"))


def loggable_query_params(request: Request) -> dict[str, Any] | None:
    if not request.query_params:
        return None

    params = sanitize_query_params(dict(request.query_params))
    if request.url.path == GRAPHQL_PATH:
        params.update({key: REDACTED for key in GRAPHQL_PARAMS if key in params})
    return params


class LoggingContextMiddleware(BaseHTTPMiddleware):
    """Bind request context for the lifetime of each request and log its outcome."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        set_request_context(user_id=extract_user_id_from_request(request))
        started = time.perf_counter()

        try:
            operation = await extract_graphql_operation_name(request)
            request_fields: dict[str, Any] = {"method": request.method, "path": request.url.path}
            if operation:
                request_fields["graphql_operation"] = operation

            logger.info(
                "Request started",
                query_params=loggable_query_params(request),
                user_agent=request.headers.get("user-agent"),
                remote_addr=request.client.host if request.client else None,
                **request_fields,
            )

            try:
                response = await call_next(request)
            except Exception as e:
                logger.error("Request failed", error=str(e), **request_fields)
                raise

            logger.info(
                "Request completed",
                status_code=response.status_code,
                duration_ms=round((time.perf_counter() - started) * 1000, 1),
                **request_fields,
            )
            return response

        finally:
            clear_request_context()

"""
Tests for the request logging middleware
"""

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from diyshare.logging import get_request_id
from diyshare.middleware import (
    LoggingContextMiddleware,
    _operation_from_document,
    sanitize_query_params,
)


@pytest.fixture
def client():
    app = FastAPI()
    app.add_middleware(LoggingContextMiddleware)

    @app.get("/ping")
    async def ping():  # pyright: ignore [reportUnusedFunction]
        return {"request_id": get_request_id()}

    @app.post("/graphql")
    async def graphql_echo():  # pyright: ignore [reportUnusedFunction]
        return {"data": None}

    return TestClient(app)


class TestSanitizeQueryParams:
    def test_redacts_sensitive_keys(self):
        params = {"password": "hunter2", "access_token": "abc", "search": "lamp"}

        assert sanitize_query_params(params) == {
            "password": "[REDACTED]",
            "access_token": "[REDACTED]",
            "search": "lamp",
        }


class TestOperationFromDocument:
    def test_named_query(self):
        assert _operation_from_document("query searchDIYs($t: String!) { x }") == "searchDIYs"

    def test_named_mutation(self):
        assert _operation_from_document("mutation addDIY { x }") == "mutation:addDIY"

    def test_anonymous(self):
        assert _operation_from_document("{ allDIYs { _id } }") == "unnamed_operation"

    def test_introspection(self):
        assert _operation_from_document("query IntrospectionQuery { __schema { types { name } } }") == "__introspection"

    def test_not_a_document(self):
        assert _operation_from_document(None) is None


class TestLoggingContextMiddleware:
    def test_request_id_bound_during_request(self, client):
        response = client.get("/ping")

        assert response.status_code == 200
        assert response.json()["request_id"]

    def test_context_cleared_after_request(self, client):
        client.get("/ping")

        assert get_request_id() is None

    def test_graphql_post_passes_through(self, client):
        response = client.post(
            "/graphql", json={"query": "query searchDIYs { searchDIYs { _id } }"}
        )

        assert response.status_code == 200
        assert response.json() == {"data": None}

"""
GraphQL schema and FastAPI router
"""

from typing import Any

import strawberry
from fastapi import Request
from graphql import GraphQLSchema, get_introspection_query, graphql_sync
from graphql import validate_schema as gql_validate_schema
from graphql.validation import NoSchemaIntrospectionCustomRule
from strawberry.extensions import AddValidationRules, QueryDepthLimiter
from strawberry.fastapi import GraphQLRouter

from ..config import is_production, settings
from ..logging import get_logger
from .loaders import Loaders
from .mutations.root import Mutation
from .queries.root import Query

logger = get_logger(__name__)

# User -> DIYs -> comments -> user ... cycles forever without a cap
MAX_QUERY_DEPTH = 10


def build_extensions() -> list:
    extensions: list = [QueryDepthLimiter(max_depth=MAX_QUERY_DEPTH)]
    if is_production():
        extensions.append(AddValidationRules([NoSchemaIntrospectionCustomRule]))
    return extensions


schema = strawberry.Schema(query=Query, mutation=Mutation, extensions=build_extensions())


def schema_problems(graphql_schema: GraphQLSchema) -> list[str]:
    """Structural errors plus anything that breaks a full introspection run."""
    problems = [str(e) for e in gql_validate_schema(graphql_schema)]
    if problems:
        return problems

    result = graphql_sync(graphql_schema, get_introspection_query())
    return [str(e) for e in result.errors or []]


def validate_schema() -> None:
    """Resolve every lazy type reference at startup.

    Raises:
        RuntimeError: If the schema is invalid or a type cannot be resolved
    """
    problems = schema_problems(schema._schema)
    if problems:
        logger.error("GraphQL schema validation failed", problems=problems)
        raise RuntimeError(f"GraphQL schema validation failed: {'; '.join(problems)}")

    logger.info("GraphQL schema validation successful")


def create_graphql_router() -> GraphQLRouter[dict[str, Any], None]:
    """Create the /graphql router; every request gets fresh data loaders."""

    async def get_context(request: Request) -> dict[str, Any]:
        return {
            "request": request,
            "loaders": Loaders(),
        }

    return GraphQLRouter(
        schema,
        path="/graphql",
        graphql_ide="graphiql" if settings.debug else None,
        context_getter=get_context,
    )

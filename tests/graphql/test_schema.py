"""
Schema shape tests: the public field and argument names clients rely on
"""

from unittest.mock import patch

import pytest

from diyshare.graphql.schema import create_graphql_router, schema, validate_schema


def sdl() -> str:
    return schema.as_str()


def test_schema_validates():
    validate_schema()


def test_query_fields():
    text = sdl()

    assert "me: User" in text
    assert "user(username: String!): User" in text
    assert "users: [User!]!" in text
    assert "DIY(_id: UUID!): DIY" in text
    assert "DIYs(username: String = null): [DIY!]!" in text
    assert "allDIYs: [DIY!]!" in text
    assert "searchDIYs(searchTerm: String = null): [DIY!]!" in text


def test_mutation_fields():
    text = sdl()

    for name in (
        "addUser(",
        "login(",
        "addDIY(",
        "updateDIY(input: UpdateDIYInput!)",
        "deleteDIY(DIYId: UUID!)",
        "addComment(DIYId: UUID!, content: String!)",
        "removeComment(commentId: UUID!)",
        "saveDIY(DIYId: UUID!): User!",
        "removeDIY(DIYId: UUID!): User!",
        "addLike(DIYId: UUID!): DIY!",
        "removeLike(DIYId: UUID!): DIY",
    ):
        assert name in text, name


def test_diy_type_fields():
    text = sdl()

    for field in (
        "_id: UUID!",
        "materialsUsed: [String!]!",
        "likeCount: Int!",
        "commentCount: Int!",
        "savedDIYs: [DIY!]!",
        "diyCount: Int!",
    ):
        assert field in text, field


def test_password_hash_not_exposed():
    assert "password" not in sdl().split("type User", 1)[1].split("}", 1)[0]


@pytest.mark.parametrize(("debug", "ide"), [(True, "graphiql"), (False, None)])
def test_router_serves_graphql(debug, ide):
    with patch("diyshare.graphql.schema.settings") as mock_settings:
        mock_settings.debug = debug
        router = create_graphql_router()

    assert router.graphql_ide == ide
    assert "/graphql" in {route.path for route in router.routes}

"""Unit tests for the list item and operation response nullability rules."""

import pytest

from gqlint.core.type_refs import parse_type_ref, type_to_string
from gqlint.validation import (
    ListNonNullItems,
    MutationResponseNullable,
    QueryResponseNullable,
)
from gqlint.validation.rules.nullability import with_non_null_items


@pytest.fixture
def messages(load_schema):
    """Run one rule against SDL text and return the finding messages."""

    def _messages(rule, sdl: str) -> list[str]:
        return [finding.message for finding in rule.check(load_schema(sdl))]

    return _messages


class TestWithNonNullItems:
    """Test the suggested replacement type."""

    @pytest.mark.parametrize(
        "given,expected",
        [
            ("[String]", "[String!]"),
            ("[String]!", "[String!]!"),
            ("[[Int]]", "[[Int!]!]"),
            ("[[Int]!]!", "[[Int!]!]!"),
            ("String", "String"),
        ],
    )
    def test_suggestion(self, given, expected):
        assert type_to_string(with_non_null_items(parse_type_ref(given))) == expected


class TestListNonNullItems:
    """Test the list-non-null-items rule."""

    def test_nullable_items_at_any_depth(self, messages):
        sdl = (
            "type Query {\n"
            "  tags: [String]\n"
            "  ids: [ID!]\n"
            "  matrix: [[Int!]]\n"
            "  grid: [[Int]!]!\n"
            "  name: String\n"
            "}"
        )

        assert messages(ListNonNullItems(), sdl) == [
            "List field `Query.tags` contains nullable items. Use `[String!]` instead "
            "to prevent null pointer issues.",
            "List field `Query.matrix` contains nullable items. Use `[[Int!]!]` "
            "instead to prevent null pointer issues.",
            "List field `Query.grid` contains nullable items. Use `[[Int!]!]!` "
            "instead to prevent null pointer issues.",
        ]

    def test_input_objects_are_checked(self, messages):
        assert messages(ListNonNullItems(), "input Filter { ids: [ID] }") == [
            "List field `Filter.ids` contains nullable items. Use `[ID!]` instead to "
            "prevent null pointer issues."
        ]

    def test_connection_types_are_skipped(self, messages):
        sdl = "type UserConnection { edges: [UserEdge] }\ntype UserEdge { cursor: String }"

        assert messages(ListNonNullItems(), sdl) == []


class TestQueryResponseNullable:
    """Test the query-response-nullable rule."""

    def test_non_null_root_fields(self, messages):
        sdl = (
            "type Query { user: User! users: [User!]! me: User }\n"
            "type User { id: ID! }"
        )

        assert messages(QueryResponseNullable(), sdl) == [
            "Query root field `user` should be nullable (`User` instead of `User!`) "
            "to prevent nulling out entire query response due to missing data.",
            "Query root field `users` should be nullable (`[User!]` instead of "
            "`[User!]!`) to prevent nulling out entire query response due to "
            "missing data.",
        ]

    def test_declared_query_root_is_used(self, messages):
        sdl = "schema { query: Root }\ntype Root { a: Int! }\ntype Query { b: Int! }"

        assert messages(QueryResponseNullable(), sdl) == [
            "Query root field `a` should be nullable (`Int` instead of `Int!`) to "
            "prevent nulling out entire query response due to missing data."
        ]

    def test_no_query_type(self, messages):
        assert messages(QueryResponseNullable(), "type User { id: ID! }") == []


class TestMutationResponseNullable:
    """Test the mutation-response-nullable rule."""

    def test_payload_fields_must_be_nullable(self, messages):
        sdl = (
            "type Query { a: Int }\n"
            "type Mutation {\n"
            "  createUser: CreateUserPayload!\n"
            "  updateUser: CreateUserPayload\n"
            "  count: Int!\n"
            "}\n"
            "type CreateUserPayload { user: User! errors: [String!]! message: String }\n"
            "type User { id: ID! }"
        )

        assert messages(MutationResponseNullable(), sdl) == [
            "Mutation response field `CreateUserPayload.user` should be nullable "
            "(`User` instead of `User!`) to prevent breaking changes when evolving "
            "the schema."
        ]

    def test_no_mutation_type(self, messages):
        assert messages(MutationResponseNullable(), "type Query { a: Int! }") == []

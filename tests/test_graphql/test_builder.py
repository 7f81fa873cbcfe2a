"""
Tests for the GraphQL operation builder.
"""

import pytest

from gql_fetch.exceptions import QueryBuildError
from gql_fetch.graphql import (
    Field,
    OperationDescriptor,
    OperationKind,
    Selection,
    Variable,
    build_operation_string,
)
from gql_fetch.graphql.builder import format_value, graphql_type_of, query_arguments


def repository_descriptor() -> OperationDescriptor:
    return OperationDescriptor(
        Selection(
            Field(
                "repository",
                "Repository",
                arguments={"owner": "$owner", "name": "$name"},
                selection=Selection(
                    Field("description", "String"),
                    Field(
                        "issues",
                        "IssueConnection",
                        nullable=False,
                        arguments={"first": 2, "states": ["OPEN"]},
                        selection=Selection(
                            Field("totalCount", "Int", nullable=False),
                        ),
                    ),
                ),
            ),
        )
    )


class TestQueryBuilding:
    """Test query rendering."""

    def test_query_without_variables(self, viewer_descriptor):
        """Test that a query without variables is the bare selection set."""
        assert build_operation_string(OperationKind.QUERY, viewer_descriptor) == "{viewer{login}}"

    def test_query_with_variables(self):
        query = build_operation_string(
            OperationKind.QUERY,
            repository_descriptor(),
            {"owner": "octocat", "name": "Hello-World"},
        )

        assert query == (
            'query($name:String!$owner:String!)'
            '{repository(owner:$owner,name:$name)'
            '{description,issues(first:2,states:["OPEN"]){totalCount}}}'
        )

    def test_kind_accepts_string_value(self, viewer_descriptor):
        assert build_operation_string("query", viewer_descriptor) == "{viewer{login}}"

    def test_unknown_kind(self, viewer_descriptor):
        with pytest.raises(QueryBuildError):
            build_operation_string("subscription", viewer_descriptor)

    def test_aliases(self):
        descriptor = OperationDescriptor(
            Selection(
                Field("user", "User", alias="first", arguments={"login": "a"},
                      selection=Selection(Field("id", "ID"))),
                Field("user", "User", alias="second", arguments={"login": "b"},
                      selection=Selection(Field("id", "ID"))),
            )
        )

        assert build_operation_string(OperationKind.QUERY, descriptor) == (
            '{first:user(login:"a"){id},second:user(login:"b"){id}}'
        )

    def test_empty_selection_rejected(self):
        descriptor = OperationDescriptor(Selection())

        with pytest.raises(QueryBuildError):
            build_operation_string(OperationKind.QUERY, descriptor)


class TestMutationBuilding:
    """Test mutation rendering."""

    def test_mutation_without_variables(self):
        descriptor = OperationDescriptor(
            Selection(Field("logout", "Boolean"))
        )

        assert build_operation_string(OperationKind.MUTATION, descriptor) == "mutation{logout}"

    def test_mutation_with_variables(self):
        descriptor = OperationDescriptor(
            Selection(
                Field(
                    "addReaction",
                    "AddReactionPayload",
                    arguments={"input": "$input"},
                    selection=Selection(Field("clientMutationId", "String")),
                ),
            )
        )

        query = build_operation_string(
            OperationKind.MUTATION,
            descriptor,
            {"input": Variable("AddReactionInput!", {"subjectId": "X", "content": "HOORAY"})},
        )

        assert query == (
            "mutation($input:AddReactionInput!)"
            "{addReaction(input:$input){clientMutationId}}"
        )


class TestVariableTypes:
    """Test GraphQL type inference for variables."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (True, "Boolean!"),
            (3, "Int!"),
            (2.5, "Float!"),
            ("x", "String!"),
            (["a", "b"], "[String!]!"),
            ([[1], [2]], "[[Int!]!]!"),
            (Variable("ID", None), "ID"),
        ],
    )
    def test_inferred_types(self, value, expected):
        assert graphql_type_of("v", value) == expected

    @pytest.mark.parametrize("value", [None, {"a": 1}, object(), [], [1, "a"]])
    def test_uninferable_types(self, value):
        with pytest.raises(QueryBuildError):
            graphql_type_of("v", value)

    def test_empty_variable_type(self):
        with pytest.raises(QueryBuildError):
            graphql_type_of("v", Variable("", 1))

    def test_arguments_sorted_by_name(self):
        assert query_arguments({"b": 1, "a": "x", "c": True}) == "$a:String!$b:Int!$c:Boolean!"


class TestFormatValue:
    """Test argument literal formatting."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            ("$id", "$id"),
            ("plain", '"plain"'),
            ('say "hi"', '"say \\"hi\\""'),
            (False, "false"),
            (10, "10"),
            (None, "null"),
            ([1, "a"], '[1,"a"]'),
            ({"field": "NAME", "direction": "$dir"}, '{field:"NAME",direction:$dir}'),
        ],
    )
    def test_literals(self, value, expected):
        assert format_value(value) == expected

    def test_unsupported_literal(self):
        with pytest.raises(QueryBuildError):
            format_value(object())


class TestSelection:
    """Test descriptor construction rules."""

    def test_duplicate_response_keys_rejected(self):
        with pytest.raises(ValueError):
            Selection(Field("id", "ID"), Field("id", "ID"))

    def test_alias_allows_same_field_twice(self):
        selection = Selection(Field("id", "ID"), Field("id", "ID", alias="otherId"))

        assert len(selection) == 2
        assert selection.get("otherId").name == "id"

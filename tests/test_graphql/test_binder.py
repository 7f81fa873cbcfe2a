"""
Tests for the response binder.
"""

import pytest

from gql_fetch.exceptions import BindError
from gql_fetch.graphql import Field, OperationDescriptor, Selection, bind


def repository_descriptor() -> OperationDescriptor:
    return OperationDescriptor(
        Selection(
            Field(
                "repository",
                "Repository",
                selection=Selection(
                    Field("id", "ID", nullable=False),
                    Field("stargazerCount", "Int", nullable=False),
                    Field("isPrivate", "Boolean", nullable=False),
                    Field("score", "Float"),
                    Field("visibility", "RepositoryVisibility"),
                    Field("topics", "String", is_list=True),
                    Field(
                        "languages",
                        "Language",
                        is_list=True,
                        nullable=False,
                        selection=Selection(Field("name", "String", nullable=False)),
                    ),
                ),
            ),
        )
    )


class TestBindSuccess:
    """Test successful binding."""

    def test_scalar_fields(self, viewer_descriptor):
        bind({"viewer": {"login": "octocat"}}, viewer_descriptor)

        assert viewer_descriptor.is_bound
        assert viewer_descriptor["viewer"]["login"] == "octocat"

    def test_nested_lists_and_scalars(self):
        descriptor = repository_descriptor()

        bind(
            {
                "repository": {
                    "id": 42,
                    "stargazerCount": 1500,
                    "isPrivate": False,
                    "score": 3,
                    "visibility": "PUBLIC",
                    "topics": ["graphql", None],
                    "languages": [{"name": "Go"}, {"name": "Python"}],
                }
            },
            descriptor,
        )

        repo = descriptor["repository"]
        assert repo["id"] == "42"
        assert repo["score"] == 3.0
        assert isinstance(repo["score"], float)
        assert repo["visibility"] == "PUBLIC"
        assert repo["topics"] == ["graphql", None]
        assert [lang["name"] for lang in repo["languages"]] == ["Go", "Python"]

    def test_nullable_object_null(self):
        descriptor = repository_descriptor()

        bind({"repository": None}, descriptor)

        assert descriptor["repository"] is None

    def test_missing_nullable_field(self):
        descriptor = OperationDescriptor(Selection(Field("a", "Int"), Field("b", "Int")))

        bind({"a": 1}, descriptor)

        assert descriptor.data == {"a": 1, "b": None}

    def test_alias_key(self):
        descriptor = OperationDescriptor(
            Selection(Field("login", "String", alias="handle"))
        )

        bind({"handle": "octocat"}, descriptor)

        assert descriptor["handle"] == "octocat"

    def test_get_defaults_before_binding(self, viewer_descriptor):
        assert viewer_descriptor.get("viewer") is None
        with pytest.raises(KeyError):
            viewer_descriptor["viewer"]


class TestBindFailures:
    """Test binding failures and state preservation."""

    @pytest.mark.parametrize(
        "raw, path",
        [
            ("not an object", "data"),
            ({"viewer": None}, "data.viewer"),
            ({}, "data.viewer"),
            ({"viewer": {"login": None}}, "data.viewer.login"),
            ({"viewer": {"login": 12}}, "data.viewer.login"),
            ({"viewer": {"login": {"nested": 1}}}, "data.viewer.login"),
            ({"viewer": ["octocat"]}, "data.viewer"),
            ({"viewer": {"login": "a", "email": "x"}}, "data.viewer.email"),
        ],
    )
    def test_shape_errors(self, viewer_descriptor, raw, path):
        with pytest.raises(BindError) as exc_info:
            bind(raw, viewer_descriptor)

        assert exc_info.value.path == path
        assert not viewer_descriptor.is_bound

    @pytest.mark.parametrize(
        "field_type, value",
        [
            ("Int", True),
            ("Int", 1.5),
            ("Int", "1"),
            ("Float", "1.0"),
            ("Float", False),
            ("Boolean", 1),
            ("ID", True),
            ("ID", 1.5),
        ],
    )
    def test_scalar_type_mismatch(self, field_type, value):
        descriptor = OperationDescriptor(Selection(Field("value", field_type)))

        with pytest.raises(BindError):
            bind({"value": value}, descriptor)

    def test_list_expected(self):
        descriptor = repository_descriptor()

        with pytest.raises(BindError, match="expected list"):
            bind(
                {
                    "repository": {
                        "id": "1",
                        "stargazerCount": 1,
                        "isPrivate": True,
                        "languages": {"name": "Go"},
                    }
                },
                descriptor,
            )

    def test_list_element_path(self):
        descriptor = repository_descriptor()

        with pytest.raises(BindError) as exc_info:
            bind(
                {
                    "repository": {
                        "id": "1",
                        "stargazerCount": 1,
                        "isPrivate": True,
                        "languages": [{"name": "Go"}, {"name": 5}],
                    }
                },
                descriptor,
            )

        assert exc_info.value.path == "data.repository.languages[1].name"

    def test_failed_bind_keeps_previous_data(self, viewer_descriptor):
        bind({"viewer": {"login": "octocat"}}, viewer_descriptor)

        with pytest.raises(BindError):
            bind({"viewer": {"login": None}}, viewer_descriptor)

        assert viewer_descriptor["viewer"]["login"] == "octocat"

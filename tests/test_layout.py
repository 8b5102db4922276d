"""Tests for duet.api — layout nodes, operators, and endpoint walking."""

from dataclasses import dataclass

import pytest

from duet.api import Alt, Get, Leaf, Post, Segment, alt, describe_kind, iter_endpoints, path
from duet.errors import ConfigurationError


@dataclass(frozen=True)
class User:
    name: str


class TestLeaves:
    def test_get_method_and_status(self) -> None:
        leaf = Get(list[User])
        assert leaf.method == "GET"
        assert leaf.success_status == 200
        assert leaf.result == list[User]
        assert leaf.name is None

    def test_post_method_and_status(self) -> None:
        leaf = Post(User, body=User, name="create")
        assert leaf.method == "POST"
        assert leaf.success_status == 201
        assert leaf.body is User
        assert leaf.name == "create"

    def test_leaves_are_values(self) -> None:
        assert Get(int) == Get(int)
        assert Get(int) != Post(int)
        assert hash(Get(int, name="a")) == hash(Get(int, name="a"))

    def test_bare_leaf_rejected(self) -> None:
        with pytest.raises(ConfigurationError, match="use Get or Post"):
            Leaf(int)

    def test_leaves_are_frozen(self) -> None:
        leaf = Get(int)
        with pytest.raises(AttributeError):
            leaf.result = str  # type: ignore[misc]


class TestSegment:
    def test_slash_operator_builds_segment(self) -> None:
        assert "users" / Get(int) == Segment("users", Get(int))

    def test_slash_operator_nests(self) -> None:
        layout = "api" / ("v1" / Get(int))
        assert layout == Segment("api", Segment("v1", Get(int)))

    def test_rejects_empty_label(self) -> None:
        with pytest.raises(ConfigurationError, match="non-empty"):
            Segment("", Get(int))

    def test_rejects_label_with_slash(self) -> None:
        with pytest.raises(ConfigurationError, match="path\\(\\)"):
            Segment("a/b", Get(int))

    @pytest.mark.parametrize("label", [".", ".."])
    def test_rejects_dot_segments(self, label: str) -> None:
        with pytest.raises(ConfigurationError, match="dot segment"):
            Segment(label, Get(int))

    def test_dot_inside_label_allowed(self) -> None:
        assert Segment("v1.json", Get(int)).label == "v1.json"

    def test_rejects_non_layout_inner(self) -> None:
        with pytest.raises(ConfigurationError, match="layout node"):
            Segment("users", "oops")  # type: ignore[arg-type]


class TestAlt:
    def test_pipe_operator_builds_alt(self) -> None:
        assert (Get(int) | Post(int)) == Alt(Get(int), Post(int))

    def test_pipe_is_left_nested(self) -> None:
        a, b, c = Get(int, name="a"), Get(int, name="b"), Get(int, name="c")
        assert (a | b | c) == Alt(Alt(a, b), c)

    def test_alt_function_is_right_nested(self) -> None:
        a, b, c = Get(int, name="a"), Get(int, name="b"), Get(int, name="c")
        assert alt(a, b, c) == Alt(a, Alt(b, c))

    def test_alt_single_branch(self) -> None:
        assert alt(Get(int)) == Get(int)

    def test_alt_needs_a_branch(self) -> None:
        with pytest.raises(ConfigurationError):
            alt()

    def test_rejects_non_layout_branch(self) -> None:
        with pytest.raises(ConfigurationError):
            Alt(Get(int), 42)  # type: ignore[arg-type]

    def test_pipe_with_non_layout_is_type_error(self) -> None:
        with pytest.raises(TypeError):
            Get(int) | 42  # type: ignore[operator]


class TestPath:
    def test_expands_components(self) -> None:
        assert path("api/v1", Get(int)) == Segment("api", Segment("v1", Get(int)))

    def test_ignores_extra_slashes(self) -> None:
        assert path("/api//v1/", Get(int)) == path("api/v1", Get(int))

    def test_empty_prefix_is_identity(self) -> None:
        assert path("", Get(int)) == Get(int)


class TestIterEndpoints:
    def test_order_and_paths(self) -> None:
        layout = alt(
            "users" / (Get(list[User], name="list") | Post(User, body=User, name="create")),
            path("health/live", Get(str, name="live")),
            Get(str, name="root"),
        )
        endpoints = list(iter_endpoints(layout))

        assert [(e.method, e.path, e.leaf.name) for e in endpoints] == [
            ("GET", "/users", "list"),
            ("POST", "/users", "create"),
            ("GET", "/health/live", "live"),
            ("GET", "/", "root"),
        ]
        assert endpoints[2].segments == ("health", "live")


class TestDescribeKind:
    def test_plain_types(self) -> None:
        assert describe_kind(int) == "int"
        assert describe_kind(User) == "User"
        assert describe_kind(None) == "None"

    def test_generic_types(self) -> None:
        assert describe_kind(list[int]) == "list[int]"

    def test_generic_arguments_unqualified(self) -> None:
        assert describe_kind(list[User]) == "list[User]"
        assert describe_kind(dict[str, User]) == "dict[str, User]"
        assert describe_kind(tuple[int, ...]) == "tuple[int, ...]"

    def test_unions(self) -> None:
        assert describe_kind(User | None) == "User | None"

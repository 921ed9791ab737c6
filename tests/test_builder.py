"""
Tests for URL building.
"""

import pytest

from namedroutes.compiler.ast_nodes import PlaceholderNode, RouteNode, StaticNode
from namedroutes.compiler.builder import UrlBuilder, build_url, has_value
from namedroutes.compiler.compiler import compile_matcher
from namedroutes.compiler.parser import parse_pattern


def build(pattern, params=None):
    return build_url(parse_pattern(pattern), params)


class TestBuildUrl:
    """Test filling placeholders."""

    def test_static_only(self):
        """Test a pattern without placeholders."""
        assert build("/users/profile") == "/users/profile"

    def test_required_placeholders(self):
        """Test replacing several placeholders."""
        assert build("/users/{id}/posts/{postId}", {"id": "123", "postId": "456"}) == "/users/123/posts/456"

    def test_numbers(self):
        """Test that numbers, including zero, are values."""
        assert build("/users/{id}", {"id": 5}) == "/users/5"
        assert build("/users/{id}", {"id": 0}) == "/users/0"

    def test_values_are_encoded(self):
        """Test that placeholder values are percent-encoded."""
        assert build("/files/{name}", {"name": "a b/c"}) == "/files/a%20b%2Fc"

    def test_slash_kept_when_constraint_allows_it(self):
        """Test that "/" stays literal when the constraint accepts the value."""
        ast = parse_pattern("/files/{path:.+}")
        url = build_url(ast, {"path": "docs/a b.txt"})
        assert url == "/files/docs/a%20b.txt"
        assert compile_matcher(ast).match(url).params == {"path": "docs/a b.txt"}

    def test_slash_encoded_with_empty_segment(self):
        assert build("/files/{path:.+}", {"path": "a//b"}) == "/files/a%2F%2Fb"
        assert build("/files/{path:.+}", {"path": "/a"}) == "/files/%2Fa"

    def test_slash_encoded_when_constraint_rejects_it(self):
        assert build(r"/files/{path:[a-z/]+}", {"path": "a/B"}) == "/files/a%2FB"

    def test_root(self):
        assert build("/") == "/"
        assert build_url(RouteNode(())) == "/"

    def test_missing_required_placeholder_is_skipped(self):
        """Test that a missing value renders as nothing."""
        assert build("/users/{id}/edit") == "/users/edit"

    def test_builder_object(self):
        """Test using UrlBuilder directly."""
        builder = UrlBuilder(parse_pattern("/users/{id}"))
        assert builder.build({"id": 1}) == "/users/1"
        assert builder.build({"id": 2}) == "/users/2"


class TestOptionalSegments:
    """Test all-or-nothing optional rendering."""

    def test_nested_all_values(self):
        assert build("/users[/{id}[/{name}]]", {"id": "123", "name": "john"}) == "/users/123/john"

    def test_nested_outer_only(self):
        assert build("/users[/{id}[/{name}]]", {"id": "123"}) == "/users/123"

    def test_nested_no_values(self):
        assert build("/users[/{id}[/{name}]]", {}) == "/users"

    def test_inner_without_outer(self):
        """Test that an inner group cannot render without its parent."""
        assert build("/users[/{id}[/{name}]]", {"name": "john"}) == "/users?name=john"

    def test_partial_group_collapses(self):
        """Test that a group with a missing value renders nothing."""
        assert build("/a[/{x}-{y}]", {"x": 1}) == "/a?x=1"
        assert build("/a[/{x}-{y}]", {"x": 1, "y": 2}) == "/a/1-2"

    @pytest.mark.parametrize("value", [None, False, ""])
    def test_empty_values_are_missing(self, value):
        assert build("/users[/{id}]", {"id": value}).startswith("/users")
        assert not build("/users[/{id}]", {"id": value}).startswith("/users/")

    def test_mixed_required_and_optional(self):
        result = build(
            "/users/{userId}/posts[/{postId}[/comments/{commentId}]]",
            {"userId": "123", "postId": "456", "commentId": "789", "extra": "param"},
        )
        assert result == "/users/123/posts/456/comments/789?extra=param"

    def test_mid_route_optional(self):
        assert build("/a[/{b}]/c", {"b": "x"}) == "/a/x/c"
        assert build("/a[/{b}]/c") == "/a/c"


class TestSlashesAndQuery:
    """Test slash normalization and the query string."""

    def test_double_slashes_collapse(self):
        ast = RouteNode((
            StaticNode("/users/"),
            PlaceholderNode("id"),
            StaticNode("//posts/"),
            PlaceholderNode("postId"),
        ))
        assert build_url(ast, {"id": "123", "postId": "456"}) == "/users/123/posts/456"

    def test_trailing_slash_from_collapsed_group(self):
        """Test that a slash left by a collapsed group is dropped."""
        assert build("/users/[{id}]") == "/users"

    def test_literal_trailing_slash_kept(self):
        """Test that a pattern ending in a literal "/" keeps it."""
        assert build_url(RouteNode((StaticNode("/users/"),))) == "/users/"

    def test_extra_params_become_query(self):
        result = build("/users/{id}", {"id": "123", "query": "search", "page": "2"})
        assert result == "/users/123?query=search&page=2"

    def test_consumed_params_not_repeated(self):
        assert build("/users/{id}", {"id": 1}) == "/users/1"

    def test_query_encoding(self):
        assert build("/search", {"q": "a&b c"}) == "/search?q=a%26b%20c"

    def test_query_lists_repeat_key(self):
        assert build("/search", {"tag": ["a", "b"]}) == "/search?tag=a&tag=b"

    def test_query_skips_none(self):
        assert build("/search", {"q": None, "page": 2}) == "/search?page=2"

    def test_query_booleans(self):
        assert build("/search", {"all": True}) == "/search?all=true"

    def test_existing_query_in_pattern(self):
        ast = RouteNode((StaticNode("/search?x=1"),))
        assert build_url(ast, {"q": "a"}) == "/search?x=1&q=a"


class TestHasValue:
    """Test what counts as a value."""

    @pytest.mark.parametrize("value,expected", [
        (None, False),
        (False, False),
        ("", False),
        (0, True),
        ("0", True),
        ("x", True),
        (True, True),
    ])
    def test_has_value(self, value, expected):
        assert has_value(value) is expected

"""
Tests for the Route facade.
"""

import pytest

from namedroutes import PatternCache, Route
from namedroutes.diagnostics.errors import DuplicatePlaceholder, UnterminatedPlaceholder


class TestRouteCompile:
    """Test building URLs from a route."""

    def test_compile(self):
        route = Route("test.route", "/users/{id}/profile")
        assert route.compile({"id": 123}) == "/users/123/profile"

    def test_compile_optional(self):
        route = Route("user.profile", "users/{id}[/{action}]")
        assert route.compile({"id": 123, "action": "edit"}) == "/users/123/edit"
        assert route.compile({"id": 123}) == "/users/123"

    def test_compile_query(self):
        route = Route("user.profile", "users/{id}")
        assert route.compile({"id": 1, "tab": "posts"}) == "/users/1?tab=posts"

    def test_template_is_normalized(self):
        assert Route("a", "users/{id}/").template == "/users/{id}"
        assert Route("root", "").template == "/"

    def test_parameter_names(self):
        assert Route("a", "users/{id}[/{action}]").parameter_names == ["id", "action"]


class TestRouteMatching:
    """Test matching URLs against a route."""

    def test_matches_url_with_query(self):
        result = Route("test.route", "users/{id}").matches_url("/users/123?page=2&sort=name")
        assert result.params == {"id": "123"}
        assert result.query == {"page": "2", "sort": "name"}

    def test_matches_optional(self):
        route = Route("user.profile", "users/{id}[/{action}]")
        assert route.matches_url("/users/123/edit").params == {"id": "123", "action": "edit"}
        assert route.matches_url("/users/123").params == {"id": "123", "action": None}

    def test_decodes_params(self):
        route = Route("test.route", "users/{id}/posts/{postId}")
        assert route.matches_url("/users/123/posts/abc%20def").params["postId"] == "abc def"

    def test_no_match(self):
        assert Route("test.route", "users/{id}").matches_url("/posts/1") is None

    @pytest.mark.parametrize("methods", [["POST"], ["PUT", "DELETE"]])
    def test_write_only_routes_never_match(self, methods):
        route = Route("users.store", "users", methods=methods)
        assert route.is_readable is False
        assert route.matches_url("/users") is None

    @pytest.mark.parametrize("methods", [["get"], ["HEAD"], ["POST", "GET"]])
    def test_readable_routes(self, methods):
        route = Route("users.index", "users", methods=methods)
        assert route.is_readable is True
        assert route.matches_url("/users") is not None

    def test_default_method_is_get(self):
        assert Route("a", "a").methods == ("GET",)

    def test_empty_methods_never_match(self):
        """Test that an explicitly empty method list is not turned into GET."""
        route = Route("x", "users", methods=[])
        assert route.methods == ()
        assert route.is_readable is False
        assert route.matches_url("/users") is None


class TestRouteValidation:
    """Test pattern errors surfacing from routes."""

    def test_validate_returns_route(self):
        route = Route("a", "users/{id}")
        assert route.validate() is route

    def test_validate_raises(self):
        with pytest.raises(DuplicatePlaceholder):
            Route("a", "/a/{id}/{id}").validate()

    def test_compile_raises(self):
        with pytest.raises(UnterminatedPlaceholder):
            Route("a", "/a/{id").compile({"id": 1})

    def test_shared_cache(self):
        cache = PatternCache()
        first = Route("a", "users/{id}", cache=cache)
        second = Route("b", "/users/{id}/", cache=cache)
        assert first.matcher is second.matcher
        assert len(cache) == 1

    def test_repr(self):
        assert repr(Route("a", "users")) == "Route(name='a', uri='users', methods=['GET'])"

"""
Route facade: one named pattern plus the methods it answers to.
"""

from typing import Any, Iterable, List, Mapping, Optional, Tuple

from .cache import PatternCache
from .compiler.ast_nodes import RouteNode
from .compiler.builder import build_url
from .compiler.compiler import CompiledPattern
from .compiler.parser import OptionalPolicy, normalize_pattern
from .grammar import READ_METHODS
from .matcher import MatchResult


class Route:
    """A named route definition.

    The pattern is parsed on first use (through the shared cache when one
    is given) and reused afterwards.

    Example::

        route = Route("user.profile", "users/{id}[/{action}]")
        route.compile({"id": 123})          # "/users/123"
        route.matches_url("/users/123/edit").params
        # {"id": "123", "action": "edit"}
    """

    def __init__(
        self,
        name: str,
        uri: str,
        methods: Optional[Iterable[str]] = None,
        policy: OptionalPolicy = OptionalPolicy.NESTED,
        cache: Optional[PatternCache] = None,
    ):
        self.name = name
        self.uri = uri
        if methods is None:
            methods = ("GET",)
        self.methods: Tuple[str, ...] = tuple(m.upper() for m in methods)
        self.policy = OptionalPolicy(policy)
        self._cache = cache or PatternCache(max_size=1, enable_stats=False)

    def __repr__(self) -> str:
        return f"Route(name={self.name!r}, uri={self.uri!r}, methods={list(self.methods)!r})"

    @property
    def template(self) -> str:
        """Normalized pattern: leading "/" and no trailing "/"."""
        return normalize_pattern(self.uri)

    @property
    def ast(self) -> RouteNode:
        return self._cache.get_ast(self.template, self.policy)

    @property
    def matcher(self) -> CompiledPattern:
        return self._cache.get_matcher(self.template, self.policy)

    @property
    def parameter_names(self) -> List[str]:
        return self.ast.placeholder_names()

    @property
    def is_readable(self) -> bool:
        """Whether the route answers to a read method (GET/HEAD)."""
        return any(method in READ_METHODS for method in self.methods)

    def compile(self, params: Optional[Mapping[str, Any]] = None) -> str:
        """Build the URL path for these params."""
        return build_url(self.ast, params)

    def matches_url(self, url: str) -> Optional[MatchResult]:
        """Match a URL against this route.

        Routes without a read method never match.
        """
        if not self.is_readable:
            return None
        return self.matcher.match(url)

    def validate(self) -> "Route":
        """Parse now so pattern errors surface at table construction."""
        self._cache.get_ast(self.template, self.policy)
        return self

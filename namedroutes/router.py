"""
Named route table.

A Router is built from an explicit RouterConfig; there is no global route
registry. All routes share one PatternCache, so each distinct pattern is
parsed and compiled once.
"""

import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Mapping, Optional, Union

from .cache import PatternCache
from .config import RouterConfig
from .diagnostics.errors import UnknownRouteError
from .matcher import MatchResult, split_url, strip_origin
from .route import Route

logger = logging.getLogger("namedroutes.router")

_SLASHES = re.compile(r"/{2,}")


@dataclass(frozen=True)
class ResolvedRoute:
    """A route name together with the result of matching a URL."""
    name: str
    route: Route
    match: MatchResult

    @property
    def params(self) -> Dict[str, Optional[str]]:
        return self.match.params

    @property
    def query(self) -> Dict[str, Any]:
        return self.match.query


def _name_matches(pattern: str, name: str) -> bool:
    """Route name glob: "*" matches anything, everything else is literal."""
    regex = re.escape(pattern).replace(r"\*", ".*")
    return re.fullmatch(regex, name) is not None


def _contains(expected: Any, actual: Any) -> bool:
    """Whether the expected filter value is satisfied by the actual value."""
    if isinstance(expected, Mapping):
        return isinstance(actual, Mapping) and all(
            key in actual and _contains(value, actual[key])
            for key, value in expected.items()
        )
    if isinstance(expected, (list, tuple)):
        if not isinstance(actual, (list, tuple)):
            actual = [actual]
        actual_values = [str(item) for item in actual]
        return all(str(item) in actual_values for item in expected)
    if actual is None or expected is None:
        return actual is expected
    return str(expected) == str(actual)


class Router:
    """Named routes over a RouterConfig.

    Usage::

        router = Router(RouterConfig.from_dict({
            "url": "https://example.com",
            "routes": {"users.show": {"uri": "users/{id}", "methods": ["GET"]}},
        }))
        router.url("users.show", {"id": 5})         # "https://example.com/users/5"
        router.resolve("/users/5?tab=posts").name   # "users.show"
    """

    def __init__(self, config: Optional[RouterConfig] = None):
        self.config = config or RouterConfig()
        self._cache = PatternCache(max_size=self.config.cache_size)
        self._routes: Dict[str, Route] = {
            name: Route(
                name,
                definition.uri,
                methods=definition.methods,
                policy=self.config.optional_policy,
                cache=self._cache,
            )
            for name, definition in self.config.routes.items()
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Router":
        return cls(RouterConfig.from_dict(data))

    def __contains__(self, name: str) -> bool:
        return self.has(name)

    def __iter__(self) -> Iterator[Route]:
        return iter(self._routes.values())

    def __len__(self) -> int:
        return len(self._routes)

    @property
    def cache(self) -> PatternCache:
        return self._cache

    def has(self, name: str) -> bool:
        return name in self._routes

    def route(self, name: str) -> Route:
        """Look up a route by name."""
        try:
            return self._routes[name]
        except KeyError:
            raise UnknownRouteError(name) from None

    def routes(self) -> List[Route]:
        return list(self._routes.values())

    def validate(self) -> "Router":
        """Parse every pattern so authoring errors surface immediately."""
        for route in self._routes.values():
            route.validate()
        logger.debug(f"Validated {len(self._routes)} routes")
        return self

    def url(self, name: str, params: Optional[Mapping[str, Any]] = None) -> str:
        """Absolute URL (prefixed with the configured base url) for a route."""
        path = self.route(name).compile(params)
        base = self.config.url
        origin = base[:len(base) - len(strip_origin(base))]
        return origin + _SLASHES.sub("/", f"{base[len(origin):]}/{path}")

    def matches_url(self, name: str, url: str) -> Optional[MatchResult]:
        return self.route(name).matches_url(url)

    def _relative(self, url: str) -> str:
        """Strip origin and the base url path so route patterns apply."""
        location, query = split_url(url)
        base_path = strip_origin(self.config.url).rstrip("/")
        if base_path and (location == base_path or location.startswith(base_path + "/")):
            location = location[len(base_path):]
        location = "/" + location.lstrip("/")
        return f"{location}?{query}" if query else location

    def resolve(self, url: str) -> Optional[ResolvedRoute]:
        """Find the first route, in table order, that matches a URL."""
        relative = self._relative(url)
        for name, route in self._routes.items():
            match = route.matches_url(relative)
            if match is not None:
                logger.debug(f"Resolved {url!r} to route '{name}'")
                return ResolvedRoute(name=name, route=route, match=match)
        logger.debug(f"No route matches {url!r}")
        return None

    def current(
        self,
        url: str,
        name: Optional[str] = None,
        params: Optional[Mapping[str, Any]] = None,
    ) -> Union[Optional[str], bool]:
        """Inspect which route a URL belongs to.

        Without a name, returns the resolved route name (or None). With a
        name (which may contain "*" wildcards), returns whether the URL
        resolves to a matching route and, when params are given, whether
        those params agree with the URL's path params and query.
        """
        resolved = self.resolve(url)

        if name is None:
            return resolved.name if resolved else None
        if resolved is None or not _name_matches(name, resolved.name):
            return False
        if params is None:
            return True

        actual: Dict[str, Any] = {**resolved.params, **resolved.query}
        expected = {key: value for key, value in params.items() if value is not None}
        return _contains(expected, actual)

"""
URL builder: renders a parsed pattern plus parameter values into a URL.
"""

import re
from typing import Any, Dict, Mapping, Optional, Set, Tuple

from .ast_nodes import Node, OptionalNode, PlaceholderNode, RouteNode, StaticNode
from .constraints import to_python_regex
from ..query import encode_component, encode_query

_SLASHES = re.compile(r"/{2,}")


def has_value(value: Any) -> bool:
    """Whether a parameter value fills a placeholder.

    None, False and values that render as "" are missing; numbers
    (including 0) are present.
    """
    if value is None or value is False:
        return False
    return str(value) != ""


def encode_value(node: PlaceholderNode, value: Any) -> str:
    """Percent-encode a placeholder value.

    "/" stays literal when the constraint accepts the whole value and no
    segment is empty, so the built URL still matches the pattern.
    """
    text = str(value).lower() if isinstance(value, bool) else str(value)
    if node.explicit and "/" in text and all(text.split("/")):
        constraint = f"(?:{to_python_regex(node.constraint)})"
        if re.fullmatch(constraint, text, re.ASCII):
            return encode_component(text, safe="/")
    return encode_component(text)


class UrlBuilder:
    """Renders a RouteNode with parameter values."""

    def __init__(self, ast: RouteNode):
        self.ast = ast

    def build(self, params: Optional[Mapping[str, Any]] = None) -> str:
        params = dict(params or {})
        path, consumed = self._render(self.ast.children, params)
        path = self._normalize_slashes(path)

        remaining = {key: value for key, value in params.items() if key not in consumed}
        query = encode_query(remaining)
        if query:
            path += ("&" if "?" in path else "?") + query
        return path

    def _render(
        self,
        children: Tuple[Node, ...],
        params: Dict[str, Any],
    ) -> Tuple[str, Set[str]]:
        parts = []
        consumed: Set[str] = set()

        for node in children:
            if isinstance(node, StaticNode):
                parts.append(node.value)
            elif isinstance(node, PlaceholderNode):
                value = params.get(node.name)
                if has_value(value):
                    parts.append(encode_value(node, value))
                    consumed.add(node.name)
            elif isinstance(node, OptionalNode):
                text, used = self._render_optional(node, params)
                parts.append(text)
                consumed |= used

        return "".join(parts), consumed

    def _render_optional(self, node: OptionalNode, params: Dict[str, Any]) -> Tuple[str, Set[str]]:
        # all-or-nothing: a partially filled group collapses and consumes nothing
        if not all(has_value(params.get(name)) for name in node.required_names()):
            return "", set()
        return self._render(node.children, params)

    def _normalize_slashes(self, path: str) -> str:
        path = _SLASHES.sub("/", path)

        last = self.ast.last
        keep_trailing = isinstance(last, StaticNode) and last.value.endswith("/")
        if path.endswith("/") and not keep_trailing:
            path = path[:-1]

        return path or "/"


def build_url(ast: RouteNode, params: Optional[Mapping[str, Any]] = None) -> str:
    """Render a URL for the pattern, appending unused params as a query string."""
    return UrlBuilder(ast).build(params)

"""
AST node definitions for named route patterns.

These nodes represent the parsed structure of a URL pattern. They are
immutable once built; the builder and the matcher compiler only read them.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union
from enum import Enum

from ..grammar import DEFAULT_CONSTRAINT


class NodeKind(str, Enum):
    """Kind of pattern node."""
    ROUTE = "route"
    STATIC = "static"
    PLACEHOLDER = "placeholder"
    OPTIONAL = "optional"


@dataclass(frozen=True)
class Span:
    """Source span for diagnostics."""
    start: int
    end: int
    line: int = 1
    column: int = 1

    def __repr__(self) -> str:
        return f"Line {self.line}:{self.column} (pos {self.start}-{self.end})"


@dataclass(frozen=True)
class StaticNode:
    """Literal text."""
    value: str
    span: Optional[Span] = field(default=None, compare=False)

    kind = NodeKind.STATIC

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.kind.value, "value": self.value}


@dataclass(frozen=True)
class PlaceholderNode:
    """Named parameter with a regex constraint."""
    name: str
    constraint: str = DEFAULT_CONSTRAINT
    explicit: bool = False
    span: Optional[Span] = field(default=None, compare=False)

    kind = NodeKind.PLACEHOLDER

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.kind.value,
            "name": self.name,
            "pattern": self.constraint,
        }


@dataclass(frozen=True)
class OptionalNode:
    """Optional group [...], rendered all-or-nothing."""
    children: Tuple["Node", ...] = ()
    span: Optional[Span] = field(default=None, compare=False)

    kind = NodeKind.OPTIONAL

    def to_dict(self) -> Dict[str, Any]:
        return {
            "type": self.kind.value,
            "children": [child.to_dict() for child in self.children],
        }

    def required_names(self) -> List[str]:
        """Placeholders that must all have values for this group to render.

        Nested optionals are excluded: they decide for themselves.
        """
        return [
            child.name for child in self.children
            if isinstance(child, PlaceholderNode)
        ]


Node = Union[StaticNode, PlaceholderNode, OptionalNode]


@dataclass(frozen=True)
class RouteNode:
    """Root of a parsed pattern."""
    children: Tuple[Node, ...] = ()
    raw: str = field(default="", compare=False)
    file: Optional[str] = field(default=None, compare=False)

    kind = NodeKind.ROUTE

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "type": self.kind.value,
            "children": [child.to_dict() for child in self.children],
        }

    def walk(self) -> Iterator[Node]:
        """Pre-order iteration over every node below the root."""

        def visit(children: Tuple[Node, ...]) -> Iterator[Node]:
            for child in children:
                yield child
                if isinstance(child, OptionalNode):
                    yield from visit(child.children)

        return visit(self.children)

    def placeholders(self) -> List[PlaceholderNode]:
        return [node for node in self.walk() if isinstance(node, PlaceholderNode)]

    def placeholder_names(self) -> List[str]:
        """Get all placeholder names (including nested optionals)."""
        return [node.name for node in self.placeholders()]

    def get_static_prefix(self) -> str:
        """Literal text before the first placeholder or optional group."""
        if self.children and isinstance(self.children[0], StaticNode):
            return self.children[0].value
        return ""

    @property
    def last(self) -> Optional[Node]:
        return self.children[-1] if self.children else None

"""
Parser for named route patterns.

Scans the pattern once, left to right, keeping an explicit stack of open
optional groups. The finished tree then goes through a validation pass
(duplicate names, constraint checks) before it is returned.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Type

from .ast_nodes import (
    Node,
    OptionalNode,
    PlaceholderNode,
    RouteNode,
    Span,
    StaticNode,
)
from .constraints import find_capturing_group, named_groups, to_python_regex
from ..grammar import (
    CONSTRAINT_SEPARATOR,
    DEFAULT_CONSTRAINT,
    NAME_RE,
    OPTIONAL_CLOSE,
    OPTIONAL_OPEN,
    PLACEHOLDER_CLOSE,
    PLACEHOLDER_OPEN,
)
from ..diagnostics.errors import (
    CapturingGroupInConstraint,
    DuplicatePlaceholder,
    EmptyOptionalSegment,
    InvalidConstraint,
    InvalidPlaceholderName,
    MismatchedBrackets,
    OptionalMisplaced,
    PatternDiagnostic,
    UnterminatedPlaceholder,
)

logger = logging.getLogger("namedroutes.parser")


class OptionalPolicy(str, Enum):
    """Where optional segments may appear.

    NESTED:   anywhere, as long as brackets balance.
    TRAILING: only at the end of the route ("/a[/b[/c]]" but not "/a[/b]/c").
    """
    NESTED = "nested"
    TRAILING = "trailing"


@dataclass
class _Frame:
    """An open optional group (or the route root) while scanning."""
    start: int
    children: List[Node] = field(default_factory=list)


class PatternParser:
    """Character-scanning parser producing a RouteNode."""

    def __init__(
        self,
        source: str,
        policy: OptionalPolicy = OptionalPolicy.NESTED,
        filename: Optional[str] = None,
    ):
        self.source = source
        self.policy = OptionalPolicy(policy)
        self.filename = filename
        self.pos = 0
        self._buffer: List[str] = []
        self._buffer_start = 0
        self._stack: List[_Frame] = []

    def error(
        self,
        error_cls: Type[PatternDiagnostic],
        message: str,
        start: Optional[int] = None,
        end: Optional[int] = None,
        span: Optional[Span] = None,
        **kwargs,
    ) -> PatternDiagnostic:
        """Create a diagnostic pointing into the source."""
        if span is None:
            start = self.pos if start is None else start
            end = start + 1 if end is None else end
            span = Span(start, end, 1, start + 1)
        return error_cls(
            message,
            span=span,
            pattern=self.source,
            file=self.filename,
            **kwargs,
        )

    def parse(self) -> RouteNode:
        """Parse the source into a validated RouteNode."""
        self.pos = 0
        self._buffer = []
        self._stack = [_Frame(start=0)]
        length = len(self.source)

        while self.pos < length:
            ch = self.source[self.pos]

            if ch == PLACEHOLDER_OPEN:
                self._flush_static()
                self._stack[-1].children.append(self._read_placeholder())
            elif ch == OPTIONAL_OPEN:
                self._flush_static()
                self._stack.append(_Frame(start=self.pos))
                self.pos += 1
            elif ch == OPTIONAL_CLOSE:
                self._close_optional()
            else:
                if not self._buffer:
                    self._buffer_start = self.pos
                self._buffer.append(ch)
                self.pos += 1

        self._flush_static()

        if len(self._stack) > 1:
            raise self.error(
                MismatchedBrackets,
                "Number of opening '[' and closing ']' does not match",
                start=self._stack[-1].start,
                suggestions=["Close the optional segment with ']'"],
            )

        route = RouteNode(
            children=tuple(self._stack[0].children),
            raw=self.source,
            file=self.filename,
        )
        self.validate(route)

        logger.debug(f"Parsed pattern {self.source!r} ({len(route.children)} top-level nodes)")
        return route

    def _flush_static(self):
        """Turn pending text into a StaticNode on the current group."""
        if not self._buffer:
            return
        value = "".join(self._buffer)
        self._stack[-1].children.append(StaticNode(
            value=value,
            span=Span(self._buffer_start, self.pos, 1, self._buffer_start + 1),
        ))
        self._buffer = []

    def _read_placeholder(self) -> PlaceholderNode:
        """Read "{name[:constraint]}" starting at the current "{".

        The closing brace is the one that balances the opening brace, so
        quantifiers like {1,3} stay inside the constraint. Escaped braces and
        braces inside a character class do not count.
        """
        source = self.source
        length = len(source)
        start = self.pos
        i = start + 1
        depth = 0
        in_class = False

        while i < length:
            ch = source[i]
            if ch == "\\":
                i += 2
                continue
            if in_class:
                if ch == "]":
                    in_class = False
            elif ch == "[":
                in_class = True
                if source.startswith("^", i + 1):
                    i += 1
                if source.startswith("]", i + 1):
                    i += 1
            elif ch == PLACEHOLDER_OPEN:
                depth += 1
            elif ch == PLACEHOLDER_CLOSE:
                if depth == 0:
                    break
                depth -= 1
            i += 1
        else:
            raise self.error(
                UnterminatedPlaceholder,
                "Placeholder is never closed",
                start=start,
                end=length,
                suggestions=["Add a closing '}'"],
            )

        body = source[start + 1:i]
        span = Span(start, i + 1, 1, start + 1)
        self.pos = i + 1

        name, _, constraint = body.partition(CONSTRAINT_SEPARATOR)
        name = name.strip()
        constraint = constraint.strip()

        if not NAME_RE.fullmatch(name):
            raise self.error(
                InvalidPlaceholderName,
                f"Invalid placeholder name '{name}'",
                span=span,
                suggestions=["Names must match [a-zA-Z_][a-zA-Z0-9_-]*"],
            )

        return PlaceholderNode(
            name=name,
            constraint=constraint or DEFAULT_CONSTRAINT,
            explicit=bool(constraint),
            span=span,
        )

    def _close_optional(self):
        """Handle "]" at the current position."""
        if len(self._stack) == 1:
            raise self.error(
                MismatchedBrackets,
                "Number of opening '[' and closing ']' does not match",
            )

        if self.policy is OptionalPolicy.TRAILING:
            rest = self.source[self.pos + 1:]
            if rest.strip(OPTIONAL_CLOSE):
                raise self.error(
                    OptionalMisplaced,
                    "Optional segments can only occur at the end of a route",
                )

        self._flush_static()
        frame = self._stack.pop()
        span = Span(frame.start, self.pos + 1, 1, frame.start + 1)

        if not frame.children:
            raise self.error(EmptyOptionalSegment, "Empty optional segment", span=span)

        self._stack[-1].children.append(OptionalNode(children=tuple(frame.children), span=span))
        self.pos += 1

    def validate(self, route: RouteNode):
        """Reject duplicate placeholders and unusable constraints."""
        seen = set()
        # named groups defined inside constraints -> owning placeholder
        user_groups: Dict[str, str] = {}

        for node in route.placeholders():
            if node.name in seen:
                raise self.error(
                    DuplicatePlaceholder,
                    f"Placeholder '{node.name}' is already defined",
                    span=node.span,
                    name=node.name,
                )
            seen.add(node.name)

            if node.explicit:
                self._check_constraint(node, user_groups)

    def _check_constraint(self, node: PlaceholderNode, user_groups: Dict[str, str]):
        constraint = node.constraint

        if find_capturing_group(constraint) is not None:
            raise self.error(
                CapturingGroupInConstraint,
                f"Constraint of placeholder '{node.name}' contains a capturing group",
                span=node.span,
                name=node.name,
                constraint=constraint,
                suggestions=["Use a non-capturing group '(?:...)' instead"],
            )

        for group in named_groups(constraint):
            if group in user_groups:
                raise self.error(
                    InvalidConstraint,
                    f"Group '{group}' in placeholder '{node.name}' is already "
                    f"defined by placeholder '{user_groups[group]}'",
                    span=node.span,
                    name=node.name,
                    constraint=constraint,
                )
            user_groups[group] = node.name

        try:
            re.compile(f"(?:{to_python_regex(constraint)})", re.ASCII)
        except re.error as exc:
            raise self.error(
                InvalidConstraint,
                f"Constraint of placeholder '{node.name}' is not a valid regex: {exc}",
                span=node.span,
                name=node.name,
                constraint=constraint,
            ) from exc


def normalize_pattern(uri: str) -> str:
    """Imply the leading "/" and drop trailing ones; "" becomes "/"."""
    template = ("/" + uri.lstrip("/")).rstrip("/")
    return template or "/"


def parse_pattern(
    source: str,
    policy: OptionalPolicy = OptionalPolicy.NESTED,
    filename: Optional[str] = None,
) -> RouteNode:
    """Parse a URL pattern into an AST."""
    return PatternParser(source, policy=policy, filename=filename).parse()

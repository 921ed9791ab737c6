"""
Diagnostic errors for named route patterns.

Every structural problem in a pattern is reported at parse time. A pattern
that parses can always be built and matched afterwards.
"""

from dataclasses import dataclass
from typing import Optional, List
from ..compiler.ast_nodes import Span


@dataclass(eq=False)
class PatternDiagnostic:
    """Base class for all pattern diagnostics."""
    message: str
    span: Optional[Span] = None
    pattern: Optional[str] = None
    file: Optional[str] = None
    suggestions: List[str] = None

    def __post_init__(self):
        if self.suggestions is None:
            self.suggestions = []

    def __str__(self) -> str:
        return self.message

    def format(self) -> str:
        """Format diagnostic for display."""
        parts = []

        error_type = self.__class__.__name__
        parts.append(f"{error_type}: {self.message}")
        if self.file and self.span:
            parts.append(f"  --> {self.file}:{self.span.line}:{self.span.column}")
        elif self.span:
            parts.append(f"  --> {self.span}")

        # Caret under the offending position
        if self.pattern is not None and self.span:
            parts.append(f"   | {self.pattern}")
            width = max(1, self.span.end - self.span.start)
            parts.append("   | " + " " * self.span.start + "^" * width)

        if self.suggestions:
            parts.append("\nSuggestions:")
            for i, suggestion in enumerate(self.suggestions, 1):
                parts.append(f"  {i}) {suggestion}")

        return "\n".join(parts)


class PatternSyntaxError(PatternDiagnostic, Exception):
    """Syntax error in pattern."""
    pass


class PatternSemanticError(PatternDiagnostic, Exception):
    """Pattern is well formed but inconsistent."""
    pass


class UnterminatedPlaceholder(PatternSyntaxError):
    """A "{" is never closed."""


class MismatchedBrackets(PatternSyntaxError):
    """Opening "[" and closing "]" do not pair up."""


class OptionalMisplaced(PatternSyntaxError):
    """An optional segment closes where the placement policy forbids it."""


class EmptyOptionalSegment(PatternSyntaxError):
    """"[]" with nothing inside."""


class InvalidPlaceholderName(PatternSyntaxError):
    """Placeholder name is not [a-zA-Z_][a-zA-Z0-9_-]*."""


class DuplicatePlaceholder(PatternSemanticError):
    """The same placeholder name appears twice in one pattern."""

    def __init__(self, message: str, name: str, **kwargs):
        super().__init__(message, **kwargs)
        self.name = name


class CapturingGroupInConstraint(PatternSemanticError):
    """A custom constraint contains a plain capturing group."""

    def __init__(self, message: str, name: str, constraint: str, **kwargs):
        super().__init__(message, **kwargs)
        self.name = name
        self.constraint = constraint


class InvalidConstraint(PatternSemanticError):
    """A custom constraint is not a usable regular expression."""

    def __init__(self, message: str, name: str, constraint: str, **kwargs):
        super().__init__(message, **kwargs)
        self.name = name
        self.constraint = constraint


class RoutingError(Exception):
    """Base for route table errors."""


class UnknownRouteError(RoutingError, KeyError):
    """No route is registered under the requested name."""

    def __init__(self, name: str):
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"Route '{self.name}' is not in the route list"

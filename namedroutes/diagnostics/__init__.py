"""Diagnostics package."""

from .errors import (
    PatternDiagnostic,
    PatternSyntaxError,
    PatternSemanticError,
    UnterminatedPlaceholder,
    MismatchedBrackets,
    OptionalMisplaced,
    EmptyOptionalSegment,
    InvalidPlaceholderName,
    DuplicatePlaceholder,
    CapturingGroupInConstraint,
    InvalidConstraint,
    RoutingError,
    UnknownRouteError,
)

__all__ = [
    "PatternDiagnostic",
    "PatternSyntaxError",
    "PatternSemanticError",
    "UnterminatedPlaceholder",
    "MismatchedBrackets",
    "OptionalMisplaced",
    "EmptyOptionalSegment",
    "InvalidPlaceholderName",
    "DuplicatePlaceholder",
    "CapturingGroupInConstraint",
    "InvalidConstraint",
    "RoutingError",
    "UnknownRouteError",
]

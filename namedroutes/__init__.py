"""
namedroutes - URL route patterns with placeholders and optional segments.

This package provides:
- A pattern parser with validation (brackets, duplicate names, constraints)
- A URL builder that fills placeholders and appends leftover params as a query
- A regex matcher that extracts decoded params and the query from a URL
- Named routes and a route table driven by explicit configuration
"""

from .compiler.parser import OptionalPolicy, PatternParser, normalize_pattern, parse_pattern
from .compiler.ast_nodes import (
    NodeKind,
    RouteNode,
    StaticNode,
    PlaceholderNode,
    OptionalNode,
    Span,
)
from .compiler.builder import UrlBuilder, build_url
from .compiler.compiler import PatternCompiler, CompiledPattern, compile_matcher
from .compiler.constraints import find_capturing_group
from .diagnostics.errors import (
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
from .matcher import MatchResult, split_url
from .query import encode_query, parse_query
from .cache import PatternCache, CacheStats
from .config import ConfigError, ConfigLoader, RouteDefinition, RouterConfig
from .route import Route
from .router import ResolvedRoute, Router

__version__ = "0.3.0"

__all__ = [
    # Parser
    "OptionalPolicy",
    "PatternParser",
    "normalize_pattern",
    "parse_pattern",
    # AST
    "NodeKind",
    "RouteNode",
    "StaticNode",
    "PlaceholderNode",
    "OptionalNode",
    "Span",
    # Builder / compiler
    "UrlBuilder",
    "build_url",
    "PatternCompiler",
    "CompiledPattern",
    "compile_matcher",
    "find_capturing_group",
    # Diagnostics
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
    # Matching
    "MatchResult",
    "split_url",
    "encode_query",
    "parse_query",
    # Caching
    "PatternCache",
    "CacheStats",
    # Routes
    "ConfigError",
    "ConfigLoader",
    "RouteDefinition",
    "RouterConfig",
    "Route",
    "ResolvedRoute",
    "Router",
]

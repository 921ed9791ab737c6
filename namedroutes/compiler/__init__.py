"""Compiler package for named route patterns."""

from .parser import OptionalPolicy, PatternParser, normalize_pattern, parse_pattern
from .ast_nodes import *
from .builder import UrlBuilder, build_url
from .compiler import PatternCompiler, CompiledPattern, compile_matcher

__all__ = [
    "OptionalPolicy",
    "PatternParser",
    "normalize_pattern",
    "parse_pattern",
    "UrlBuilder",
    "build_url",
    "PatternCompiler",
    "CompiledPattern",
    "compile_matcher",
]

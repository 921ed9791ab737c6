"""
Cache for parsed and compiled patterns.

Parsing is pure, so identical pattern strings can share one AST and one
compiled matcher. The cache is a thread-safe LRU; entries are immutable
and safe to hand out to concurrent readers.
"""

import logging
import threading
import time
from collections import OrderedDict
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .compiler.ast_nodes import RouteNode
from .compiler.compiler import CompiledPattern, compile_matcher
from .compiler.parser import OptionalPolicy, parse_pattern

logger = logging.getLogger("namedroutes.cache")

CacheKey = Tuple[str, OptionalPolicy]


@dataclass
class CacheStats:
    """Cache statistics for monitoring."""
    hits: int = 0
    misses: int = 0
    evictions: int = 0
    errors: int = 0
    total_compile_time: float = 0.0

    @property
    def hit_rate(self) -> float:
        """Calculate cache hit rate."""
        total = self.hits + self.misses
        return self.hits / total if total > 0 else 0.0

    def to_dict(self) -> Dict[str, Any]:
        """Export stats as dictionary."""
        return {
            "hits": self.hits,
            "misses": self.misses,
            "evictions": self.evictions,
            "errors": self.errors,
            "total_compile_time": self.total_compile_time,
            "hit_rate": self.hit_rate,
        }


@dataclass
class CacheEntry:
    """Parsed pattern and its lazily compiled matcher."""
    ast: RouteNode
    matcher: Optional[CompiledPattern] = None


class PatternCache:
    """Thread-safe LRU cache of parsed patterns."""

    def __init__(self, max_size: int = 256, enable_stats: bool = True):
        """
        Initialize pattern cache.

        Args:
            max_size: Maximum number of patterns to keep (0 disables caching)
            enable_stats: Enable statistics collection
        """
        self.max_size = max_size
        self.enable_stats = enable_stats

        self._cache: "OrderedDict[CacheKey, CacheEntry]" = OrderedDict()
        self._lock = threading.RLock()
        self._stats = CacheStats()

    def _entry(self, pattern: str, policy: OptionalPolicy) -> CacheEntry:
        key = (pattern, OptionalPolicy(policy))

        with self._lock:
            entry = self._cache.get(key)
            if entry is not None:
                self._cache.move_to_end(key)
                if self.enable_stats:
                    self._stats.hits += 1
                return entry
            if self.enable_stats:
                self._stats.misses += 1

        start_time = time.perf_counter()
        try:
            ast = parse_pattern(pattern, policy=key[1])
        except Exception:
            if self.enable_stats:
                with self._lock:
                    self._stats.errors += 1
            raise
        elapsed = time.perf_counter() - start_time

        entry = CacheEntry(ast=ast)
        with self._lock:
            if self.enable_stats:
                self._stats.total_compile_time += elapsed
            if self.max_size <= 0:
                return entry
            # another thread may have stored it meanwhile
            existing = self._cache.get(key)
            if existing is not None:
                return existing
            if len(self._cache) >= self.max_size:
                evicted, _ = self._cache.popitem(last=False)
                logger.debug(f"Evicted pattern {evicted[0]!r} from cache")
                if self.enable_stats:
                    self._stats.evictions += 1
            self._cache[key] = entry
        return entry

    def get_ast(self, pattern: str, policy: OptionalPolicy = OptionalPolicy.NESTED) -> RouteNode:
        """Parse a pattern, reusing a cached AST when possible.

        Raises:
            PatternSyntaxError: Invalid pattern syntax
            PatternSemanticError: Invalid pattern semantics
        """
        return self._entry(pattern, policy).ast

    def get_matcher(self, pattern: str, policy: OptionalPolicy = OptionalPolicy.NESTED) -> CompiledPattern:
        """Parse and compile a pattern, reusing cached results."""
        entry = self._entry(pattern, policy)
        matcher = entry.matcher
        if matcher is None:
            matcher = compile_matcher(entry.ast)
            with self._lock:
                if entry.matcher is None:
                    entry.matcher = matcher
                matcher = entry.matcher
        return matcher

    def invalidate(self, pattern: Optional[str] = None):
        """
        Invalidate cache entries.

        Args:
            pattern: Specific pattern to invalidate (None = clear all)
        """
        with self._lock:
            if pattern is None:
                self._cache.clear()
                return
            for key in [key for key in self._cache if key[0] == pattern]:
                del self._cache[key]

    def get_stats(self) -> CacheStats:
        """Get a snapshot of cache statistics."""
        with self._lock:
            return CacheStats(
                hits=self._stats.hits,
                misses=self._stats.misses,
                evictions=self._stats.evictions,
                errors=self._stats.errors,
                total_compile_time=self._stats.total_compile_time,
            )

    def reset_stats(self):
        """Reset statistics counters."""
        with self._lock:
            self._stats = CacheStats()

    @contextmanager
    def disabled(self):
        """Context manager to temporarily disable caching."""
        old_size = self.max_size
        self.max_size = 0
        try:
            yield
        finally:
            self.max_size = old_size

    def __len__(self) -> int:
        with self._lock:
            return len(self._cache)

    def __contains__(self, pattern: str) -> bool:
        """Check if pattern is cached under any policy."""
        with self._lock:
            return any(key[0] == pattern for key in self._cache)

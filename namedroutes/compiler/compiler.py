"""
Compiler that turns a parsed pattern into a matching regex.
"""

import json
import logging
import re
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Pattern, Set, Tuple

from .ast_nodes import Node, OptionalNode, PlaceholderNode, RouteNode, StaticNode
from .constraints import named_groups, to_python_regex
from ..matcher import MatchResult, build_result, match_location, split_url

logger = logging.getLogger("namedroutes.compiler")


@dataclass(frozen=True)
class CompiledPattern:
    """Regex form of a pattern, ready for matching."""
    raw: str
    source: str
    regex: Pattern[str]
    # regex group id -> placeholder name
    groups: Dict[str, str]
    static_prefix: str
    ast: RouteNode

    def match(self, url: str) -> Optional[MatchResult]:
        """Match a URL; returns None when it does not fit the pattern."""
        location, query = split_url(url)
        match = match_location(self.regex, location)
        if match is None:
            return None
        return build_result(match, self.groups, query, pattern=self.raw)

    @property
    def param_names(self) -> List[str]:
        return list(self.groups.values())

    def to_dict(self) -> Dict[str, Any]:
        """Convert to JSON-serializable dict."""
        return {
            "raw": self.raw,
            "regex": self.source,
            "groups": self.groups,
            "static_prefix": self.static_prefix,
            "ast": self.ast.to_dict(),
        }

    def to_json(self, indent: Optional[int] = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)


class PatternCompiler:
    """Compiles a RouteNode into a CompiledPattern."""

    GROUP_PREFIX = "_p"

    def compile(self, ast: RouteNode) -> CompiledPattern:
        taken = self._user_group_names(ast)
        groups: Dict[str, str] = {}

        def group_id() -> str:
            index = len(groups)
            candidate = f"{self.GROUP_PREFIX}{index}"
            while candidate in taken:
                index += 1
                candidate = f"{self.GROUP_PREFIX}{index}"
            taken.add(candidate)
            return candidate

        def fragment(children: Tuple[Node, ...]) -> str:
            parts = []
            for node in children:
                if isinstance(node, StaticNode):
                    parts.append(re.escape(node.value))
                elif isinstance(node, PlaceholderNode):
                    gid = group_id()
                    groups[gid] = node.name
                    parts.append(f"(?P<{gid}>{to_python_regex(node.constraint)})")
                elif isinstance(node, OptionalNode):
                    parts.append(f"(?:{fragment(node.children)})?")
            return "".join(parts)

        source = fragment(ast.children) + "/?"
        regex = re.compile(source, re.ASCII)

        logger.debug(f"Compiled pattern {ast.raw!r} to {source!r}")

        return CompiledPattern(
            raw=ast.raw,
            source=source,
            regex=regex,
            groups=groups,
            static_prefix=ast.get_static_prefix(),
            ast=ast,
        )

    def _user_group_names(self, ast: RouteNode) -> Set[str]:
        names: Set[str] = set()
        for node in ast.placeholders():
            if node.explicit:
                names.update(named_groups(node.constraint))
        return names


def compile_matcher(ast: RouteNode) -> CompiledPattern:
    """Compile a parsed pattern into a matcher."""
    return PatternCompiler().compile(ast)

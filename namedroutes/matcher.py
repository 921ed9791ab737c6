"""
URL matching helpers and the match result type.

Matching is path-relative: a "scheme://host" prefix and a "#fragment" are
ignored, and the query string is decoded separately from the path.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Pattern, Tuple
from urllib.parse import unquote

from .query import QueryValue, parse_query

_ORIGIN = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.-]*://[^/?#]*")


@dataclass(frozen=True)
class MatchResult:
    """Result of a successful match."""
    params: Dict[str, Optional[str]]
    query: Dict[str, QueryValue] = field(default_factory=dict)
    pattern: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "pattern": self.pattern,
            "params": self.params,
            "query": self.query,
        }

    @property
    def values(self) -> Dict[str, Any]:
        """Path params and query merged, path params winning."""
        merged: Dict[str, Any] = dict(self.query)
        merged.update({key: value for key, value in self.params.items() if value is not None})
        return merged


def strip_origin(url: str) -> str:
    """Remove a leading "scheme://host" from a URL."""
    return _ORIGIN.sub("", url, count=1)


def split_url(url: str) -> Tuple[str, str]:
    """Split a URL into (location, query), dropping origin and fragment."""
    url = url.split("#", 1)[0]
    location, _, query = url.partition("?")
    return strip_origin(location), query


def match_location(regex: Pattern[str], location: str) -> Optional["re.Match[str]"]:
    """Match the raw location, then its percent-decoded form."""
    match = regex.fullmatch(location)
    if match is None:
        decoded = unquote(location)
        if decoded != location:
            match = regex.fullmatch(decoded)
    return match


def decode_params(match: "re.Match[str]", groups: Mapping[str, str]) -> Dict[str, Optional[str]]:
    """Percent-decode captured values; unmatched optional groups stay None."""
    params: Dict[str, Optional[str]] = {}
    for group, name in groups.items():
        value = match.group(group)
        params[name] = unquote(value) if isinstance(value, str) else value
    return params


def build_result(
    match: "re.Match[str]",
    groups: Mapping[str, str],
    query: str,
    pattern: str = "",
) -> MatchResult:
    return MatchResult(
        params=decode_params(match, groups),
        query=parse_query(query),
        pattern=pattern,
    )

"""
Tokenizer for placeholder constraints.

Constraints are embedded inside a generated named group, so they must not
open capturing groups of their own. This module scans a constraint the way
the regex engine would (escapes, character classes, group prefixes) instead
of guessing with another regex.
"""

import re
from typing import Iterator, List, Optional

_NAMED_GROUP = re.compile(r"\?P?<([a-zA-Z_][a-zA-Z0-9_]*)>")


def _group_openings(constraint: str) -> Iterator[int]:
    """Yield the index of every "(" that opens a group.

    Escaped parentheses and parentheses inside a character class are skipped.
    """
    i = 0
    n = len(constraint)
    in_class = False

    while i < n:
        ch = constraint[i]

        if ch == "\\":
            i += 2
            continue

        if in_class:
            if ch == "]":
                in_class = False
            i += 1
            continue

        if ch == "[":
            in_class = True
            i += 1
            # "]" right after "[" or "[^" is a literal member
            if i < n and constraint[i] == "^":
                i += 1
            if i < n and constraint[i] == "]":
                i += 1
            continue

        if ch == "(":
            yield i

        i += 1


def find_capturing_group(constraint: str) -> Optional[int]:
    """Return the position of the first plain capturing group, or None.

    Anything starting with "(?" is accepted: non-capturing groups,
    lookarounds, named groups, atomic groups, inline flags and comments.
    "(*" verbs and possessive markers do not capture either.
    """
    if "(" not in constraint:
        return None

    for index in _group_openings(constraint):
        if not constraint.startswith(("?", "*"), index + 1):
            return index
    return None


def named_groups(constraint: str) -> List[str]:
    """Names of the named groups a constraint defines."""
    names = []
    for index in _group_openings(constraint):
        match = _NAMED_GROUP.match(constraint, index + 1)
        if match:
            names.append(match.group(1))
    return names


def to_python_regex(constraint: str) -> str:
    """Rewrite "(?<name>" groups into Python's "(?P<name>" spelling."""
    positions = [
        index for index in _group_openings(constraint)
        if constraint.startswith("?<", index + 1)
        and not constraint.startswith(("?<=", "?<!"), index + 1)
    ]
    if not positions:
        return constraint

    parts = []
    last = 0
    for index in positions:
        parts.append(constraint[last:index + 2])
        parts.append("P")
        last = index + 2
    parts.append(constraint[last:])
    return "".join(parts)

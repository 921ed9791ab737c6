"""
Tests for the constraint tokenizer.
"""

import pytest

from namedroutes.compiler.constraints import (
    find_capturing_group,
    named_groups,
    to_python_regex,
)


class TestFindCapturingGroup:
    """Test detection of plain capturing groups."""

    @pytest.mark.parametrize("constraint,position", [
        ("(foo)", 0),
        ("a(b)", 1),
        ("(?:a)(b)", 5),
        (r"\\(a)", 2),
    ])
    def test_capturing(self, constraint, position):
        assert find_capturing_group(constraint) == position

    @pytest.mark.parametrize("constraint", [
        "[0-9]+",
        "(?:foo)",
        "(?=a)",
        "(?!a)",
        "(?<=a)",
        "(?<!a)",
        "(?P<n>a)",
        "(?<n>a)",
        "(?i:a)",
        r"\(x\)",
        "[a(b]",
        "[]()]",
        "[^]()]",
        "(*ATOMIC)a",
        "a(*+)",
    ])
    def test_not_capturing(self, constraint):
        assert find_capturing_group(constraint) is None


class TestNamedGroups:
    """Test collection of named groups."""

    def test_both_spellings(self):
        assert named_groups("(?P<x>a)(?<y>b)(?<=c)") == ["x", "y"]

    def test_escaped_and_class(self):
        assert named_groups(r"\(?<x>a\)[(?<y>)]") == []


class TestToPythonRegex:
    """Test rewriting of named group syntax."""

    def test_rewrites_angle_groups(self):
        assert to_python_regex(r"(?<year>\d{4})-(?<m>\d\d)") == r"(?P<year>\d{4})-(?P<m>\d\d)"

    @pytest.mark.parametrize("constraint", [
        "(?<=a)b",
        "(?<!a)b",
        "(?P<x>a)",
        "[(?<x>)]",
        "[0-9]+",
    ])
    def test_leaves_others_alone(self, constraint):
        assert to_python_regex(constraint) == constraint

"""Unit tests for :mod:`hashenv.wildcard`."""

from __future__ import annotations

import re

import pytest

from hashenv.errors import PatternCompileError
from hashenv.wildcard import (
    REGEX_WILDCARD_SEGMENT,
    PatternKind,
    WildcardPattern,
    compile_alternation,
    split_patterns,
    wildcard_to_regex_pattern,
)


def _matches(pattern: str, name: str) -> bool:
    """Return ``True`` when *name* fully matches the compiled *pattern*."""
    regex = compile_alternation([wildcard_to_regex_pattern(pattern)])
    return regex.match(name) is not None


@pytest.mark.parametrize(
    ("pattern", "expected"),
    [
        ("LITERAL_\\*", "LITERAL_\\*"),
        ("FOO", "FOO"),
        ("*", ".*"),
        ("", ""),
        ("FOO_*", "FOO_.*"),
        ("A**B", "A.*B"),
        ("A*B*C", "A.*B.*C"),
        ("\\**", "\\*.*"),
        ("A.B", "A\\.B"),
    ],
    ids=[
        "literal-asterisk",
        "plain",
        "only-wildcard",
        "empty",
        "trailing-wildcard",
        "adjacent-wildcards-collapse",
        "two-wildcards",
        "literal-then-wildcard",
        "metacharacter",
    ],
)
def test_wildcard_to_regex_pattern(pattern: str, expected: str) -> None:
    """Patterns translate to the expected regex fragments."""
    assert wildcard_to_regex_pattern(pattern) == expected


@pytest.mark.parametrize(
    "pattern",
    ["FOO", "NEXT_PUBLIC_URL", "a.b", "x+y", "(PAREN)", "[A-Z]", "^$|?{2}"],
)
def test_literal_pattern_matches_only_itself(pattern: str) -> None:
    """Patterns without ``*`` match their literal text and nothing else."""
    assert _matches(pattern, pattern)
    assert not _matches(pattern, pattern + "X")
    assert not _matches(pattern, "X" + pattern)
    assert not _matches(pattern, pattern[:-1])


@pytest.mark.parametrize("name", ["", "ANYTHING", "with spaces", "multi\nline"])
def test_bare_wildcard_matches_everything(name: str) -> None:
    """A lone ``*`` matches any name, including the empty string."""
    assert _matches("*", name)


def test_empty_pattern_matches_only_empty_string() -> None:
    """An empty pattern selects nothing but the empty name."""
    assert _matches("", "")
    assert not _matches("", "A")


def test_escaped_asterisk_is_literal() -> None:
    """``\\*`` matches an asterisk and nothing else."""
    assert _matches("A\\*B", "A*B")
    assert not _matches("A\\*B", "AXB")
    assert not _matches("A\\*B", "AB")


def test_wildcards_require_literal_boundaries() -> None:
    """Literal runs between wildcards must all be present."""
    fragment = wildcard_to_regex_pattern("A*B*C")
    assert REGEX_WILDCARD_SEGMENT * 2 not in fragment
    assert _matches("A*B*C", "ABC")
    assert _matches("A*B*C", "A_x_B_y_C")
    assert not _matches("A*B*C", "AXC")


def test_wildcard_spans_newlines() -> None:
    """A ``*`` wildcard matches across embedded newline characters."""
    assert _matches("A*", "A\nB")
    assert _matches("A*C", "A\n\nC")


def test_trailing_newline_is_not_ignored() -> None:
    """Anchors reject a name that only matches up to a trailing newline."""
    assert not _matches("FOO", "FOO\n")


def test_multibyte_characters_next_to_wildcards() -> None:
    """Literal runs stay aligned with multi-byte characters."""
    assert wildcard_to_regex_pattern("É*ü") == "É.*ü"
    assert _matches("É*ü", "Éxyzü")
    assert _matches("日本\\*", "日本*")
    assert not _matches("日本\\*", "日本")


@pytest.mark.parametrize(
    ("raw", "kind", "body"),
    [
        ("FOO", PatternKind.INCLUDE, "FOO"),
        ("!FOO", PatternKind.EXCLUDE, "FOO"),
        ("\\!FOO", PatternKind.ESCAPED_INCLUDE, "!FOO"),
        ("!", PatternKind.EXCLUDE, ""),
        ("\\FOO", PatternKind.INCLUDE, "\\FOO"),
    ],
)
def test_pattern_parse(raw: str, kind: PatternKind, body: str) -> None:
    """Leading characters decide the pattern kind and body."""
    parsed = WildcardPattern.parse(raw)
    assert parsed.kind is kind
    assert parsed.body == body
    assert parsed.is_exclusion is (kind is PatternKind.EXCLUDE)


def test_escaped_inclusion_matches_leading_bang() -> None:
    """``\\!`` selects names that really start with ``!``."""
    assert _matches(WildcardPattern.parse("\\!FOO").body, "!FOO")


def test_split_patterns_separates_exclusions() -> None:
    """Exclusions and inclusions land in separate fragment lists."""
    include, exclude = split_patterns(["FOO*", "!BAR", "\\!BAZ"])
    assert include == ["FOO.*", "!BAZ"]
    assert exclude == ["BAR"]


def test_compile_alternation_is_anchored() -> None:
    """Partial matches never count against the compiled alternation."""
    regex = compile_alternation(["FOO", "BAR"])
    assert regex.match("FOO")
    assert regex.match("BAR")
    assert not regex.match("FOOBAR")
    assert not regex.match("XFOO")


def test_compile_alternation_reports_invalid_regex() -> None:
    """An invalid fragment surfaces as :class:`PatternCompileError`."""
    with pytest.raises(PatternCompileError) as excinfo:
        compile_alternation(["(unclosed"])

    assert "(unclosed" in excinfo.value.pattern
    assert isinstance(excinfo.value.__cause__, re.error)
    assert isinstance(excinfo.value, ValueError)

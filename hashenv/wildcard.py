"""Wildcard pattern parsing and translation to anchored regular expressions.

Patterns select environment variable names with a small glob dialect:

* ``*`` matches any run of characters (including none).
* ``\\*`` matches a literal asterisk.
* every other character matches itself.

A leading ``!`` turns the pattern into an exclusion. A leading ``\\!`` is an
inclusion whose body starts with a literal ``!``.
"""

from __future__ import annotations

import dataclasses as dc
import enum
import logging
import re
import typing as t

from .errors import PatternCompileError

logger = logging.getLogger(__name__)

WILDCARD: t.Final[str] = "*"
WILDCARD_ESCAPE: t.Final[str] = "\\"
EXCLUSION_PREFIX: t.Final[str] = "!"
REGEX_WILDCARD_SEGMENT: t.Final[str] = ".*"


class PatternKind(enum.StrEnum):
    """How a wildcard pattern participates in selection."""

    INCLUDE = "include"
    ESCAPED_INCLUDE = "escaped_include"
    EXCLUDE = "exclude"


@dc.dataclass(frozen=True, slots=True)
class WildcardPattern:
    """A wildcard pattern split into its kind and glob body."""

    kind: PatternKind
    body: str

    @classmethod
    def parse(cls, raw: str) -> WildcardPattern:
        """Classify *raw* by its leading characters."""
        if raw.startswith(EXCLUSION_PREFIX):
            return cls(PatternKind.EXCLUDE, raw[1:])
        if raw.startswith(WILDCARD_ESCAPE + EXCLUSION_PREFIX):
            return cls(PatternKind.ESCAPED_INCLUDE, raw[1:])
        return cls(PatternKind.INCLUDE, raw)

    @property
    def is_exclusion(self) -> bool:
        """Return ``True`` when matches should be removed, not added."""
        return self.kind is PatternKind.EXCLUDE

    def to_regex(self) -> str:
        """Return the unanchored regex fragment for this pattern's body."""
        return wildcard_to_regex_pattern(self.body)


def wildcard_to_regex_pattern(pattern: str) -> str:
    """Translate a glob *pattern* body into an unanchored regex fragment.

    Literal runs are escaped with :func:`re.escape`. Consecutive wildcards
    collapse into a single ``.*`` segment.
    """
    segments: list[str] = []
    previous_index = 0
    previous_char: str | None = None

    for index, char in enumerate(pattern):
        if char == WILDCARD:
            if previous_char == WILDCARD_ESCAPE:
                # Drop the escape and keep the asterisk as part of the literal.
                segments.append(re.escape(f"{pattern[previous_index : index - 1]}*"))
            else:
                static = pattern[previous_index:index]
                if static:
                    segments.append(re.escape(static))
                if not segments or segments[-1] != REGEX_WILDCARD_SEGMENT:
                    segments.append(REGEX_WILDCARD_SEGMENT)
            previous_index = index + 1
        previous_char = char

    tail = pattern[previous_index:]
    if tail:
        segments.append(re.escape(tail))

    return "".join(segments)


def compile_alternation(fragments: t.Sequence[str]) -> re.Pattern[str]:
    """Join *fragments* into one fully anchored alternation and compile it.

    The expression is compiled with :data:`re.DOTALL`, so a ``*`` wildcard
    also spans newline characters. A name such as ``"A\\nB"`` matches
    ``A*``. A ``.*`` that stops at line breaks would reject it.

    Raises
    ------
    PatternCompileError
        If the combined expression is not a valid regular expression.
    """
    source = rf"\A(?:{'|'.join(fragments)})\Z"
    try:
        compiled = re.compile(source, re.DOTALL)
    except re.error as exc:
        raise PatternCompileError(source, str(exc)) from exc
    logger.debug("Compiled wildcard alternation %s", source)
    return compiled


def split_patterns(
    patterns: t.Iterable[str],
) -> tuple[list[str], list[str]]:
    """Return ``(inclusion_fragments, exclusion_fragments)`` for *patterns*."""
    include: list[str] = []
    exclude: list[str] = []
    for raw in patterns:
        parsed = WildcardPattern.parse(raw)
        target = exclude if parsed.is_exclusion else include
        target.append(parsed.to_regex())
    return include, exclude


__all__ = [
    "REGEX_WILDCARD_SEGMENT",
    "WILDCARD",
    "WILDCARD_ESCAPE",
    "PatternKind",
    "WildcardPattern",
    "compile_alternation",
    "split_patterns",
    "wildcard_to_regex_pattern",
]

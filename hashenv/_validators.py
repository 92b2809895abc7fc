"""Shared validation helpers."""

from __future__ import annotations

import typing as t

from .errors import InvalidPatternListError


def validate_pattern_list(patterns: t.Iterable[str], *, name: str) -> list[str]:
    """Return *patterns* as a list after checking every entry is a string.

    A bare ``str`` is rejected; iterating it would treat each character as
    a separate pattern.
    """
    if isinstance(patterns, str | bytes):
        msg = f"{name} must be a sequence of strings, not a single string"
        raise InvalidPatternListError(msg)

    try:
        items = list(patterns)
    except TypeError:
        msg = f"{name} must be a sequence of strings"
        raise InvalidPatternListError(msg) from None

    for index, item in enumerate(items):
        if not isinstance(item, str):
            msg = f"{name}[{index}] must be a string, got {type(item).__name__}"
            raise InvalidPatternListError(msg)
    return items

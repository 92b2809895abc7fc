"""Exception types raised by hashenv."""

from __future__ import annotations


class HashEnvError(Exception):
    """Base class for all hashenv errors."""


class PatternCompileError(HashEnvError, ValueError):
    """Raised when a compiled wildcard alternation is not a valid regex.

    Correctly escaped literal runs always compile, so seeing this error
    points at a defect in the escaping rather than at user input.
    """

    def __init__(self, pattern: str, reason: str) -> None:
        msg = f"Could not compile wildcard alternation {pattern!r}: {reason}"
        super().__init__(msg)
        self.pattern = pattern
        self.reason = reason


class InvalidPatternListError(HashEnvError, TypeError):
    """Raised when a wildcard pattern list is not a sequence of strings."""


class InvalidConfigError(HashEnvError, ValueError):
    """Raised when a global environment configuration value is not recognised."""


__all__ = [
    "HashEnvError",
    "InvalidConfigError",
    "InvalidPatternListError",
    "PatternCompileError",
]

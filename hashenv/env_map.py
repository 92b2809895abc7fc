"""Environment variable maps and wildcard-driven selection.

An :class:`EnvironmentVariableMap` is a snapshot of ``name -> value`` pairs.
It is built once per hash computation and mutated only by its owner:
``union``, ``difference`` and ``insert`` change ``self`` and treat their
argument as read-only.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import hashlib
import logging
import os
import typing as t

from ._validators import validate_pattern_list
from .wildcard import compile_alternation, split_patterns

logger = logging.getLogger(__name__)

# A list of "name=value" strings, sorted for deterministic hashing.
EnvironmentVariablePairs: t.TypeAlias = list[str]


class EnvironmentVariableMap(cabc.MutableMapping[str, str]):
    """A mutable ``name -> value`` mapping of environment variables."""

    __slots__ = ("_vars",)

    def __init__(self, initial: t.Mapping[str, str] | None = None) -> None:
        self._vars: dict[str, str] = dict(initial) if initial else {}

    @classmethod
    def infer(cls, environ: t.Mapping[str, str] | None = None) -> EnvironmentVariableMap:
        """Snapshot *environ* (default: ``os.environ``) into a new map."""
        source = os.environ if environ is None else environ
        return cls(dict(source))

    def __getitem__(self, key: str) -> str:
        return self._vars[key]

    def __setitem__(self, key: str, value: str) -> None:
        self._vars[key] = value

    def __delitem__(self, key: str) -> None:
        del self._vars[key]

    def __iter__(self) -> t.Iterator[str]:
        return iter(self._vars)

    def __len__(self) -> int:
        return len(self._vars)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, EnvironmentVariableMap):
            return self._vars == other._vars
        if isinstance(other, cabc.Mapping):
            return self._vars == dict(other)
        return NotImplemented

    def __repr__(self) -> str:
        # Values may be secrets; only names are shown.
        return f"EnvironmentVariableMap(names={self.names()!r})"

    def copy(self) -> EnvironmentVariableMap:
        """Return an independent copy of this map."""
        return EnvironmentVariableMap(self._vars)

    def insert(self, key: str, value: str) -> None:
        """Set *key* to *value*, overwriting any existing value."""
        self._vars[key] = value

    def union(self, another: t.Mapping[str, str]) -> None:
        """Merge *another* into ``self``; values from *another* win."""
        for key, value in another.items():
            self._vars[key] = value

    def difference(self, another: t.Mapping[str, str]) -> None:
        """Remove every key of *another* from ``self``, whatever its value."""
        for key in another:
            self._vars.pop(key, None)

    def names(self) -> list[str]:
        """Return the variable names in sorted order."""
        return sorted(self._vars)

    def map_to_pairs(
        self, transformer: t.Callable[[str, str], str]
    ) -> EnvironmentVariablePairs:
        """Apply *transformer* to every entry and sort the formatted strings.

        Sorting happens after formatting, so the order depends on the full
        ``name=value`` text rather than on the name alone.
        """
        pairs = [transformer(key, value) for key, value in self._vars.items()]
        pairs.sort()
        return pairs

    def to_hashable(self) -> EnvironmentVariablePairs:
        """Return sorted raw ``name=value`` pairs for use as hash input."""
        return self.map_to_pairs(lambda key, value: f"{key}={value}")

    def to_secret_hashable(self) -> EnvironmentVariablePairs:
        """Return sorted pairs with every non-empty value replaced by its SHA-256.

        Empty values stay empty so a set-but-blank variable is still
        distinguishable from a hashed secret.
        """
        return self.map_to_pairs(_secret_pair)

    def _wildcard_maps(self, wildcard_patterns: t.Iterable[str]) -> WildcardMaps:
        """Partition ``self`` into inclusions and exclusions.

        A name may match both an inclusion and an exclusion pattern; it is
        then placed in both maps and :meth:`WildcardMaps.resolve` drops it.
        """
        include, exclude = split_patterns(wildcard_patterns)
        output = WildcardMaps()

        include_regex = compile_alternation(include) if include else None
        exclude_regex = compile_alternation(exclude) if exclude else None

        for name, value in self._vars.items():
            if include_regex is not None and include_regex.match(name):
                output.inclusions.insert(name, value)
            if exclude_regex is not None and exclude_regex.match(name):
                output.exclusions.insert(name, value)

        logger.debug(
            "Wildcard partition: %d inclusion(s), %d exclusion(s) from %d variable(s)",
            len(output.inclusions),
            len(output.exclusions),
            len(self._vars),
        )
        return output

    def from_wildcards(self, wildcard_patterns: t.Iterable[str]) -> EnvironmentVariableMap:
        """Return the variables selected by *wildcard_patterns*.

        Exclusions always win over inclusions. An empty pattern list selects
        nothing and compiles no regex.

        Raises
        ------
        PatternCompileError
            If the combined inclusion or exclusion alternation fails to
            compile.
        """
        patterns = validate_pattern_list(wildcard_patterns, name="wildcard_patterns")
        if not patterns:
            return EnvironmentVariableMap()
        return self._wildcard_maps(patterns).resolve()

    def from_wildcards_unresolved(
        self, wildcard_patterns: t.Iterable[str]
    ) -> WildcardMaps:
        """Return the inclusion/exclusion partition without resolving it.

        Callers use this to let user exclusions take precedence over
        inclusions computed from other sources.
        """
        patterns = validate_pattern_list(wildcard_patterns, name="wildcard_patterns")
        if not patterns:
            return WildcardMaps()
        return self._wildcard_maps(patterns)


def _secret_pair(key: str, value: str) -> str:
    """Format *key* with a SHA-256 digest of *value*, or blank when empty."""
    if not value:
        return f"{key}="
    digest = hashlib.sha256(value.encode("utf-8", "surrogateescape")).hexdigest()
    return f"{key}={digest}"


@dc.dataclass(slots=True)
class WildcardMaps:
    """The inclusion and exclusion maps produced by wildcard partitioning."""

    inclusions: EnvironmentVariableMap = dc.field(default_factory=EnvironmentVariableMap)
    exclusions: EnvironmentVariableMap = dc.field(default_factory=EnvironmentVariableMap)

    def resolve(self) -> EnvironmentVariableMap:
        """Return a copy of ``inclusions`` with every excluded key removed."""
        output = self.inclusions.copy()
        output.difference(self.exclusions)
        return output


__all__ = ["EnvironmentVariableMap", "EnvironmentVariablePairs", "WildcardMaps"]

"""Composite environment variable maps broken down by source."""

from __future__ import annotations

import dataclasses as dc
import typing as t

from .env_map import EnvironmentVariableMap, EnvironmentVariablePairs


class BySourceSummary(t.TypedDict):
    """Redacted, display-safe shape of :class:`BySource`."""

    explicit: EnvironmentVariablePairs
    matching: EnvironmentVariablePairs


@dc.dataclass(slots=True)
class BySource:
    """Variables split by why they were selected.

    ``explicit`` holds variables named by user patterns; ``matching`` holds
    variables picked up from the default allow-list.
    """

    explicit: EnvironmentVariableMap = dc.field(default_factory=EnvironmentVariableMap)
    matching: EnvironmentVariableMap = dc.field(default_factory=EnvironmentVariableMap)


@dc.dataclass(slots=True)
class DetailedMap:
    """The composite map used for hashing plus its per-source breakdown.

    ``all`` feeds the task hash. ``by_source`` is only ever shown to people,
    so it is rendered through :meth:`to_summary`.
    """

    all: EnvironmentVariableMap = dc.field(default_factory=EnvironmentVariableMap)
    by_source: BySource = dc.field(default_factory=BySource)

    def to_hashable(self) -> EnvironmentVariablePairs:
        """Return the raw sorted pairs of ``all`` for the task hash."""
        return self.all.to_hashable()

    def to_summary(self) -> BySourceSummary:
        """Return the secret-hashable pairs of each source for display."""
        return BySourceSummary(
            explicit=self.by_source.explicit.to_secret_hashable(),
            matching=self.by_source.matching.to_secret_hashable(),
        )


__all__ = ["BySource", "BySourceSummary", "DetailedMap"]

"""Select and serialise the environment variables that feed a task's cache key.

Wildcard patterns pick variable names from an environment snapshot; the
selection is rendered as sorted ``name=value`` pairs for hashing and as
digest-redacted pairs for display.
"""

from __future__ import annotations

from .detailed import BySource, BySourceSummary, DetailedMap
from .env_map import EnvironmentVariableMap, EnvironmentVariablePairs, WildcardMaps
from .errors import (
    HashEnvError,
    InvalidConfigError,
    InvalidPatternListError,
    PatternCompileError,
)
from .global_hash import (
    DEFAULT_ENV_VARS,
    EnvMode,
    GlobalEnvConfig,
    GlobalHashableInputs,
    get_global_hash_inputs,
    get_global_hashable_env_vars,
)
from .wildcard import PatternKind, WildcardPattern, wildcard_to_regex_pattern

__all__ = [
    "DEFAULT_ENV_VARS",
    "BySource",
    "BySourceSummary",
    "DetailedMap",
    "EnvMode",
    "EnvironmentVariableMap",
    "EnvironmentVariablePairs",
    "GlobalEnvConfig",
    "GlobalHashableInputs",
    "HashEnvError",
    "InvalidConfigError",
    "InvalidPatternListError",
    "PatternCompileError",
    "PatternKind",
    "WildcardMaps",
    "WildcardPattern",
    "get_global_hash_inputs",
    "get_global_hashable_env_vars",
    "wildcard_to_regex_pattern",
]

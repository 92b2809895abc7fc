"""Environment inputs for the global (repository-wide) hash.

User-declared ``globalEnv`` patterns are combined with a fixed allow-list of
default variables. User exclusions take precedence over both sources, which
is why the user patterns are partitioned but not resolved before merging.
"""

from __future__ import annotations

import dataclasses as dc
import enum
import logging
import typing as t

from ._validators import validate_pattern_list
from .detailed import BySource, DetailedMap
from .env_map import EnvironmentVariableMap
from .errors import InvalidConfigError

logger = logging.getLogger(__name__)

# Variables that always participate in the global hash when set.
DEFAULT_ENV_VARS: t.Final[tuple[str, ...]] = ("VERCEL_ANALYTICS_ID",)

GLOBAL_ENV_KEY: t.Final[str] = "globalEnv"
GLOBAL_PASS_THROUGH_ENV_KEY: t.Final[str] = "globalPassThroughEnv"
ENV_MODE_KEY: t.Final[str] = "envMode"


class EnvMode(enum.StrEnum):
    """How strictly task processes are limited to declared variables."""

    INFER = "infer"
    LOOSE = "loose"
    STRICT = "strict"


@dc.dataclass(frozen=True, slots=True)
class GlobalEnvConfig:
    """The environment-related slice of the repository configuration."""

    global_env: tuple[str, ...] = ()
    global_pass_through_env: tuple[str, ...] = ()
    env_mode: EnvMode = EnvMode.INFER

    @classmethod
    def from_dict(cls, data: t.Mapping[str, t.Any]) -> GlobalEnvConfig:
        """Build a config from a ``turbo.json``-style mapping.

        Missing keys fall back to empty pattern lists and :attr:`EnvMode.INFER`.
        """
        global_env = validate_pattern_list(
            data.get(GLOBAL_ENV_KEY, ()), name=GLOBAL_ENV_KEY
        )
        pass_through = validate_pattern_list(
            data.get(GLOBAL_PASS_THROUGH_ENV_KEY, ()),
            name=GLOBAL_PASS_THROUGH_ENV_KEY,
        )
        mode_raw = data.get(ENV_MODE_KEY, EnvMode.INFER)
        try:
            env_mode = EnvMode(mode_raw)
        except ValueError:
            choices = ", ".join(mode.value for mode in EnvMode)
            msg = f"{ENV_MODE_KEY} must be one of {choices}; got {mode_raw!r}"
            raise InvalidConfigError(msg) from None
        return cls(
            global_env=tuple(global_env),
            global_pass_through_env=tuple(pass_through),
            env_mode=env_mode,
        )


@dc.dataclass(slots=True)
class GlobalHashableInputs:
    """Environment contribution to the global hash.

    ``pass_through_env`` patterns are carried for the task runner; they do
    not affect the hash.
    """

    env: list[str] = dc.field(default_factory=list)
    resolved_env_vars: DetailedMap = dc.field(default_factory=DetailedMap)
    pass_through_env: list[str] = dc.field(default_factory=list)
    env_mode: EnvMode = EnvMode.INFER


def get_global_hashable_env_vars(
    env_at_execution_start: EnvironmentVariableMap,
    global_env: t.Iterable[str],
    default_env_vars: t.Iterable[str] = DEFAULT_ENV_VARS,
) -> DetailedMap:
    """Compute the ``all``/``explicit``/``matching`` breakdown for the global hash.

    *env_at_execution_start* is read but never modified.

    Raises
    ------
    PatternCompileError
        If the user or default patterns fail to compile.
    InvalidPatternListError
        If either pattern list is not a sequence of strings.
    """
    default_env_var_map = env_at_execution_start.from_wildcards(default_env_vars)
    user_env_var_set = env_at_execution_start.from_wildcards_unresolved(global_env)

    all_env_var_map = EnvironmentVariableMap()
    all_env_var_map.union(user_env_var_set.inclusions)
    all_env_var_map.union(default_env_var_map)
    all_env_var_map.difference(user_env_var_set.exclusions)

    explicit_env_var_map = EnvironmentVariableMap()
    explicit_env_var_map.union(user_env_var_set.inclusions)
    explicit_env_var_map.difference(user_env_var_set.exclusions)

    matching_env_var_map = EnvironmentVariableMap()
    matching_env_var_map.union(default_env_var_map)
    matching_env_var_map.difference(user_env_var_set.exclusions)

    logger.debug(
        "Global env: %d hashed variable(s) (%d explicit, %d matching)",
        len(all_env_var_map),
        len(explicit_env_var_map),
        len(matching_env_var_map),
    )
    return DetailedMap(
        all=all_env_var_map,
        by_source=BySource(
            explicit=explicit_env_var_map,
            matching=matching_env_var_map,
        ),
    )


def get_global_hash_inputs(
    env_at_execution_start: EnvironmentVariableMap,
    config: GlobalEnvConfig,
    *,
    default_env_vars: t.Iterable[str] = DEFAULT_ENV_VARS,
) -> GlobalHashableInputs:
    """Collect the environment part of the global hash inputs for *config*."""
    resolved = get_global_hashable_env_vars(
        env_at_execution_start,
        config.global_env,
        default_env_vars,
    )
    return GlobalHashableInputs(
        env=list(config.global_env),
        resolved_env_vars=resolved,
        pass_through_env=list(config.global_pass_through_env),
        env_mode=config.env_mode,
    )


__all__ = [
    "DEFAULT_ENV_VARS",
    "EnvMode",
    "GlobalEnvConfig",
    "GlobalHashableInputs",
    "get_global_hash_inputs",
    "get_global_hashable_env_vars",
]

"""Global test configuration and shared fixtures."""

from __future__ import annotations

import pytest

from hashenv import EnvironmentVariableMap


@pytest.fixture
def env_at_start() -> EnvironmentVariableMap:
    """Return an environment snapshot with one user and one default variable."""
    return EnvironmentVariableMap(
        {"FOO": "1", "BAR": "2", "VERCEL_ANALYTICS_ID": "x"},
    )

"""
Shared fixtures for gpo tests.
"""

import pytest

from gpo.core.random import RandomSource


class ScriptedRandom:
    """Random source returning pre-scripted draws."""

    def __init__(self, ints=(), reals=()):
        self.ints = list(ints)
        self.reals = list(reals)

    def uniform_int(self, low, high):
        value = self.ints.pop(0)
        assert low <= value < high
        return value

    def uniform_real(self, low, high):
        return self.reals.pop(0)


@pytest.fixture
def rng():
    """Seeded random source."""
    return RandomSource(seed=12345)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep GPO_* environment variables from leaking into tests."""
    for name in ("GPO_SEED", "GPO_LOG_LEVEL", "GPO_POPULATION_SIZE",
                 "GPO_GENERATIONS", "GPO_SWARM_SIZE", "GPO_ITERATIONS"):
        monkeypatch.delenv(name, raising=False)

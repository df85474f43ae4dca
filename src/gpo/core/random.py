"""
Random source shared by the evolutionary and swarm engines.

Author: Nik Jois <nikjois@llamasearch.ai>
"""

import numpy as np
from typing import Optional

from .exceptions import ConfigurationError


class RandomSource:
    """Uniform random draws backed by a NumPy ``Generator``.

    The engines only consume draws from this object; seeding is left to the
    caller so that runs can be reproduced by passing the same seed.
    """

    def __init__(self, seed: Optional[int] = None, generator: Optional[np.random.Generator] = None):
        if generator is not None and seed is not None:
            raise ConfigurationError("Pass either a seed or a generator, not both")
        self._seed = seed
        self._generator = generator if generator is not None else np.random.default_rng(seed)

    @property
    def seed(self) -> Optional[int]:
        """Seed used to build the generator, if any."""
        return self._seed

    @property
    def generator(self) -> np.random.Generator:
        return self._generator

    def uniform_real(self, low: float, high: float) -> float:
        """Draw a real number from ``[low, high)``."""
        if high < low:
            raise ConfigurationError(f"Invalid real range [{low}, {high})")
        return float(self._generator.uniform(low, high))

    def uniform_int(self, low: int, high: int) -> int:
        """Draw an integer from ``[low, high)``."""
        if high <= low:
            raise ConfigurationError(f"Invalid integer range [{low}, {high})")
        return int(self._generator.integers(low, high))

    def uniform_reals(self, low, high, size: int) -> np.ndarray:
        """Draw ``size`` reals; ``low`` and ``high`` may be scalars or arrays."""
        low = np.asarray(low, dtype=float)
        high = np.asarray(high, dtype=float)
        if np.any(high < low):
            raise ConfigurationError("Invalid real range: high is below low")
        return self._generator.uniform(low, high, size=size)

    def __repr__(self) -> str:
        return f"RandomSource(seed={self._seed!r})"

"""
Reference candidates and objective functions.

``VectorIndividual`` is a fixed-length real vector minimized by its sum of
squares; subclasses change the length, bounds or mutation step through class
attributes.
"""

import numpy as np
from typing import List, Sequence

from .core.random import RandomSource
from .core.types import Individual


class VectorIndividual(Individual):
    """Real-valued gene vector with sum-of-squares cost."""

    length = 2
    bounds = (-10.0, 10.0)
    mutation_step = 0.5

    def __init__(self, genes: Sequence[float]):
        self.genes = np.asarray(genes, dtype=float)

    @classmethod
    def new_random(cls, rng: RandomSource) -> "VectorIndividual":
        low, high = cls.bounds
        return cls(rng.uniform_reals(low, high, cls.length))

    def fitness(self) -> float:
        return float(np.sum(self.genes ** 2))

    def mutate(self, rng: RandomSource) -> None:
        """Shift one randomly chosen gene by up to ``mutation_step``."""
        index = rng.uniform_int(0, len(self.genes))
        self.genes[index] += rng.uniform_real(-self.mutation_step, self.mutation_step)

    def crossover(self, other: "VectorIndividual", rng: RandomSource) -> List["VectorIndividual"]:
        """One-point crossover producing two children."""
        point = rng.uniform_int(0, len(self.genes))
        child1 = np.concatenate([self.genes[:point], other.genes[point:]])
        child2 = np.concatenate([other.genes[:point], self.genes[point:]])
        return [type(self)(child1), type(self)(child2)]

    def clone(self) -> "VectorIndividual":
        return type(self)(self.genes.copy())

    def __eq__(self, other):
        if not isinstance(other, VectorIndividual):
            return NotImplemented
        return np.array_equal(self.genes, other.genes)

    __hash__ = None

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.genes.tolist()})"


class ScalarIndividual(VectorIndividual):
    """Single gene; cost is the gene squared."""

    length = 1

    @property
    def value(self) -> float:
        return float(self.genes[0])


def sphere(position: np.ndarray) -> float:
    """Sum of squares, minimum 0 at the origin."""
    position = np.asarray(position, dtype=float)
    return float(np.sum(position ** 2))


def rastrigin(position: np.ndarray, a: float = 10.0) -> float:
    """Rastrigin function, minimum 0 at the origin."""
    position = np.asarray(position, dtype=float)
    return float(a * position.size + np.sum(position ** 2 - a * np.cos(2 * np.pi * position)))


OBJECTIVES = {
    "sphere": sphere,
    "rastrigin": rastrigin,
}

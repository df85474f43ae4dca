"""Parent selection strategies for the genetic algorithm.

A strategy is any callable taking the current (sorted) population and the
random source and returning the index of the chosen parent.

Author: Nik Jois <nikjois@llamasearch.ai>
"""

from typing import Sequence

from ..core.exceptions import ConfigurationError
from ..core.random import RandomSource
from ..core.types import Individual, SelectionStrategy


def tournament_selection(k: int = 3) -> SelectionStrategy:
    """Build a k-way tournament strategy.

    Draws ``k`` indices uniformly with replacement and returns the one with
    the lowest fitness. On ties the earliest draw wins.
    """
    if k < 1:
        raise ConfigurationError(f"Tournament size must be at least 1, got {k}")

    def select(population: Sequence[Individual], rng: RandomSource) -> int:
        n = len(population)
        best_index = rng.uniform_int(0, n)
        best_fitness = population[best_index].fitness()
        for _ in range(k - 1):
            index = rng.uniform_int(0, n)
            fitness = population[index].fitness()
            if fitness < best_fitness:
                best_index, best_fitness = index, fitness
        return best_index

    select.__name__ = f"tournament_{k}"
    return select


def random_selection() -> SelectionStrategy:
    """Uniform random parent selection."""

    def select(population: Sequence[Individual], rng: RandomSource) -> int:
        return rng.uniform_int(0, len(population))

    select.__name__ = "random"
    return select

"""Genetic Algorithm implementation for gpo optimization.

Author: Nik Jois <nikjois@llamasearch.ai>
"""

import math
import operator
import numpy as np
from typing import Dict, Any, Optional, List, Iterator, Tuple, Type
import logging

from ..core.config import GAConfig
from ..core.exceptions import ConfigurationError, ContractViolationError
from ..core.random import RandomSource
from ..core.types import Individual, OptimizationResult, SelectionStrategy
from .selection import tournament_selection

logger = logging.getLogger(__name__)


class Population:
    """Fixed-size population evolved generation by generation.

    Each generation the population is sorted by fitness, the top
    ``elitism_fraction`` is copied forward unchanged and the rest is filled
    with mutated offspring of parents picked by ``selection_strategy``.
    """

    def __init__(
        self,
        individual_type: Type[Individual],
        size: int,
        elitism_fraction: float = 0.0,
        selection_strategy: Optional[SelectionStrategy] = None,
        rng: Optional[RandomSource] = None,
    ):
        if size <= 0:
            raise ConfigurationError("Population size must be positive", details={"size": size})

        if math.isnan(float(elitism_fraction)):
            raise ConfigurationError("elitism_fraction must not be NaN")
        clamped = min(max(float(elitism_fraction), 0.0), 1.0)
        if clamped != elitism_fraction:
            logger.warning(f"elitism_fraction {elitism_fraction} outside [0, 1], using {clamped}")

        self.individual_type = individual_type
        self.elitism_fraction = clamped
        self.selection_strategy = selection_strategy or tournament_selection(3)
        self.rng = rng or RandomSource()
        self.generation = 0

        self._size = size
        self._individuals: List[Individual] = [
            individual_type.new_random(self.rng) for _ in range(size)
        ]

        logger.info(
            f"Population initialized with {size} {individual_type.__name__} individuals "
            f"(elitism={self.elitism_fraction})"
        )

    @property
    def size(self) -> int:
        return self._size

    @property
    def num_elite(self) -> int:
        return int(math.floor(self._size * self.elitism_fraction))

    @property
    def individuals(self) -> Tuple[Individual, ...]:
        """Snapshot of the current individuals in their current order."""
        return tuple(self._individuals)

    def __len__(self) -> int:
        return len(self._individuals)

    def __getitem__(self, index: int) -> Individual:
        return self._individuals[index]

    def __iter__(self) -> Iterator[Individual]:
        return iter(self._individuals)

    def sort(self) -> None:
        """Sort ascending by fitness; equal fitness keeps its relative order."""
        if not self._individuals:
            raise ContractViolationError("Population is empty")
        keyed = [(_checked_fitness(ind), ind) for ind in self._individuals]
        keyed.sort(key=operator.itemgetter(0))
        self._individuals = [ind for _, ind in keyed]

    def run_generation(self) -> None:
        """Replace the population with the next generation."""
        self.sort()
        current = self._individuals
        next_generation: List[Individual] = [ind.clone() for ind in current[:self.num_elite]]

        while len(next_generation) < self._size:
            parent1 = current[self._select(current)].clone()
            parent2 = current[self._select(current)].clone()

            children = list(parent1.crossover(parent2, self.rng))
            if not children:
                raise ContractViolationError(
                    f"{self.individual_type.__name__}.crossover produced no offspring"
                )

            for child in children:
                child.mutate(self.rng)

            next_generation.extend(children[:self._size - len(next_generation)])

        self._individuals = next_generation
        self.generation += 1

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"Generation {self.generation}: best fitness "
                f"{min(ind.fitness() for ind in self._individuals):.6g}, "
                f"carried over {self.num_elite} elites"
            )

    def run(self, generations: int) -> None:
        """Run exactly ``generations`` generations."""
        if generations < 0:
            raise ConfigurationError("generations must not be negative")
        for _ in range(generations):
            self.run_generation()

    def best(self) -> Individual:
        """Return the fittest individual."""
        self.sort()
        return self._individuals[0]

    def get_statistics(self) -> Dict[str, Any]:
        """Get fitness statistics for the current population."""
        fitness = np.array([_checked_fitness(ind) for ind in self._individuals])
        return {
            "generation": self.generation,
            "size": len(self._individuals),
            "num_elite": self.num_elite,
            "best_fitness": float(fitness.min()),
            "mean_fitness": float(fitness.mean()),
            "worst_fitness": float(fitness.max()),
        }

    def _select(self, population: List[Individual]) -> int:
        index = self.selection_strategy(population, self.rng)
        try:
            index = operator.index(index)
        except TypeError as e:
            raise ContractViolationError(
                f"Selection strategy returned non-integer index {index!r}"
            ) from e
        if not 0 <= index < len(population):
            raise ContractViolationError(
                f"Selection strategy returned index {index} for population of {len(population)}",
                details={"index": index, "size": len(population)}
            )
        return index


def _checked_fitness(individual: Individual) -> float:
    fitness = individual.fitness()
    if math.isnan(fitness):
        raise ContractViolationError(f"Fitness of {individual!r} is NaN")
    return fitness


class GeneticAlgorithm:
    """Genetic Algorithm optimizer driven by a ``GAConfig``."""

    def __init__(
        self,
        config: GAConfig,
        individual_type: Type[Individual],
        selection_strategy: Optional[SelectionStrategy] = None,
        rng: Optional[RandomSource] = None,
    ):
        self.config = config.validate()
        self.population = Population(
            individual_type,
            size=config.population_size,
            elitism_fraction=config.elitism_fraction,
            selection_strategy=selection_strategy or tournament_selection(config.tournament_size),
            rng=rng,
        )

        logger.info("Genetic Algorithm initialized")

    def optimize(self, generations: Optional[int] = None) -> OptimizationResult:
        """Run the genetic algorithm and report the best individual."""
        if generations is None:
            generations = self.config.generations
        if generations < 0:
            raise ConfigurationError("generations must not be negative")

        history = [self.population.best().fitness()]
        for _ in range(generations):
            self.population.run_generation()
            history.append(self.population.best().fitness())

        best = self.population.best()
        result = OptimizationResult(
            x=best,
            fun=best.fitness(),
            nit=generations,
            message=f"GA completed {generations} generations",
            history=history,
        )

        logger.info(f"GA optimization completed: best fitness {result.fun:.6g}")
        return result

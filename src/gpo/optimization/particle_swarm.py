"""Particle Swarm Optimization implementation for gpo.

Author: Nik Jois <nikjois@llamasearch.ai>
"""

import math
import numpy as np
from typing import Dict, Any, Optional, List, Sequence
import logging

from ..core.config import PSOConfig
from ..core.exceptions import ConfigurationError, ContractViolationError
from ..core.random import RandomSource
from ..core.types import Dimension, Objective, OptimizationResult, Particle

logger = logging.getLogger(__name__)


class ParticleSwarmOptimizer:
    """Particle Swarm Optimizer over a box of named dimensions.

    Every iteration first evaluates the whole swarm, then moves each particle:

        v = inertia * v + cognitive * r1 * (p_best - x) + social * r2 * (g_best - x) + bias(x)
        x = clamp(x + v)

    Positions are hard-clamped to the dimension bounds; velocity is left as
    computed. The global best lives only for the duration of one run.
    """

    def __init__(self, config: PSOConfig, rng: Optional[RandomSource] = None):
        self.config = config.validate()
        self.rng = rng or RandomSource()
        self.iteration_count = 0

        self._lower = np.array([d.min for d in config.dimensions])
        self._upper = np.array([d.max for d in config.dimensions])
        self._search = list(config.search) if config.search_enabled else None

        self.particles: List[Particle] = [
            self._new_particle() for _ in range(config.swarm_size)
        ]

        logger.info(
            f"Particle Swarm Optimizer initialized with {config.swarm_size} particles "
            f"over {len(config.dimensions)} dimensions"
        )

    @property
    def dimensions(self) -> List[Dimension]:
        return list(self.config.dimensions)

    @property
    def dimension_count(self) -> int:
        return len(self.config.dimensions)

    def run(self, iterations: Optional[int] = None) -> np.ndarray:
        """Run the swarm and return the best position found.

        Returns the zero vector when no evaluation improved on an infinite
        cost, which is always the case for ``iterations == 0``.
        """
        return self.optimize(iterations).x

    def optimize(self, iterations: Optional[int] = None) -> OptimizationResult:
        """Run particle swarm optimization."""
        if iterations is None:
            iterations = self.config.iterations
        if iterations < 0:
            raise ConfigurationError("iterations must not be negative")

        best_position = np.zeros(self.dimension_count)
        best_fitness = math.inf
        history = []

        for _ in range(iterations):
            for particle in self.particles:
                fitness = self._evaluate(particle.position)
                if fitness < particle.best_fitness:
                    particle.best_fitness = fitness
                    particle.best_position = particle.position.copy()
                if fitness < best_fitness:
                    best_fitness = fitness
                    best_position = particle.position.copy()

            history.append(best_fitness)

            for particle in self.particles:
                self._move(particle, best_position)

            self.iteration_count += 1

        result = OptimizationResult(
            x=best_position,
            fun=best_fitness,
            nit=iterations,
            success=math.isfinite(best_fitness),
            message=(
                f"PSO completed {iterations} iterations"
                if math.isfinite(best_fitness)
                else "No evaluation improved on the initial cost"
            ),
            history=history,
        )

        logger.info(f"PSO optimization completed: best cost {best_fitness:.6g}")
        return result

    def get_statistics(self) -> Dict[str, Any]:
        """Get swarm statistics."""
        personal_bests = [p.best_fitness for p in self.particles]
        return {
            "iterations": self.iteration_count,
            "swarm_size": len(self.particles),
            "dimensions": [d.name for d in self.config.dimensions],
            "best_personal_fitness": min(personal_bests),
            "search_enabled": self._search is not None,
        }

    def _new_particle(self) -> Particle:
        n = self.dimension_count
        low, high = self.config.velocity_range
        position = self.rng.uniform_reals(self._lower, self._upper, n)
        velocity = self.rng.uniform_reals(low, high, n)
        return Particle(position=position, velocity=velocity)

    def _evaluate(self, position: np.ndarray) -> float:
        fitness = float(self.config.objective(position))
        if math.isnan(fitness):
            raise ContractViolationError(
                f"Objective returned NaN at {position.tolist()}",
                details={"position": position.tolist()}
            )
        return fitness

    def _move(self, particle: Particle, global_best: np.ndarray) -> None:
        n = self.dimension_count
        r1 = self.rng.uniform_reals(0.0, 1.0, n)
        r2 = self.rng.uniform_reals(0.0, 1.0, n)
        position = particle.position

        velocity = (
            self.config.inertia * particle.velocity
            + self.config.cognitive * r1 * (particle.best_position - position)
            + self.config.social * r2 * (global_best - position)
        )
        if self._search is not None:
            velocity += np.array([bias(x) for bias, x in zip(self._search, position)], dtype=float)

        particle.velocity = velocity
        particle.position = np.clip(position + velocity, self._lower, self._upper)


def particle_swarm(
    objective: Objective,
    dimensions: Optional[Sequence[Any]] = None,
    rng: Optional[RandomSource] = None,
    **options: Any,
) -> ParticleSwarmOptimizer:
    """Assemble a ``PSOConfig`` from keyword options and build an optimizer.

    ``dimensions`` accepts ``Dimension`` objects or ``(name, min, max)`` tuples;
    the remaining options are the ``PSOConfig`` fields.
    """
    if dimensions is not None:
        options["dimensions"] = [Dimension.from_value(d) for d in dimensions]
    config = PSOConfig(objective=objective, **options)
    return ParticleSwarmOptimizer(config, rng=rng)

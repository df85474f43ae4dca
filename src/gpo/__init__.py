"""
gpo - General Population Optimizers
===================================

Two interchangeable population-based engines for black-box minimization:

- a generational genetic algorithm over any ``Individual`` representation,
  with elitism and pluggable parent selection (k-way tournament by default)
- a particle swarm optimizer over real vectors bounded by named dimensions

Example Usage:
    from gpo import Population, RandomSource, particle_swarm
    from gpo.problems import VectorIndividual, sphere

    rng = RandomSource(seed=42)

    population = Population(VectorIndividual, size=200, elitism_fraction=0.1, rng=rng)
    population.run(200)
    print(population.best())

    swarm = particle_swarm(
        sphere,
        dimensions=[("x", -10, 10), ("y", -10, 10)],
        swarm_size=50, inertia=0.5, cognitive=1.0, social=1.0,
        rng=rng,
    )
    print(swarm.run(1000))
"""

import logging

from .core import (
    Config,
    GAConfig,
    PSOConfig,
    load_config,
    OptimizationError,
    ConfigurationError,
    ContractViolationError,
    RandomSource,
    Individual,
    Dimension,
    Particle,
    OptimizationResult,
)
from .optimization import (
    GeneticAlgorithm,
    Population,
    ParticleSwarmOptimizer,
    particle_swarm,
    tournament_selection,
    random_selection,
)

__version__ = "1.0.0"
__author__ = "Nik Jois"
__email__ = "nikjois@llamasearch.ai"

__all__ = [
    # Configuration
    "Config",
    "GAConfig",
    "PSOConfig",
    "load_config",

    # Errors
    "OptimizationError",
    "ConfigurationError",
    "ContractViolationError",

    # Core types
    "RandomSource",
    "Individual",
    "Dimension",
    "Particle",
    "OptimizationResult",

    # Engines
    "GeneticAlgorithm",
    "Population",
    "ParticleSwarmOptimizer",
    "particle_swarm",
    "tournament_selection",
    "random_selection",

    "configure_logging",
    "__version__",
]


def configure_logging(level="INFO", format_string=None):
    """Configure logging for gpo components."""
    if format_string is None:
        format_string = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=format_string,
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    for logger_name in ("gpo.core", "gpo.optimization"):
        logging.getLogger(logger_name).setLevel(getattr(logging, level.upper()))

"""
Population-based optimization algorithms.

Author: Nik Jois <nikjois@llamasearch.ai>
"""

from .genetic_algorithm import GeneticAlgorithm, Population
from .particle_swarm import ParticleSwarmOptimizer, particle_swarm
from .selection import tournament_selection, random_selection

__all__ = [
    "GeneticAlgorithm",
    "Population",
    "ParticleSwarmOptimizer",
    "particle_swarm",
    "tournament_selection",
    "random_selection",
]

"""
Core components shared by the optimization engines.
"""

from .config import Config, GAConfig, PSOConfig, load_config
from .exceptions import OptimizationError, ConfigurationError, ContractViolationError
from .random import RandomSource
from .types import (
    Individual,
    Dimension,
    Particle,
    OptimizationResult,
    SelectionStrategy,
    Objective,
    SearchFunction,
)

__all__ = [
    'Config', 'GAConfig', 'PSOConfig', 'load_config',
    'OptimizationError', 'ConfigurationError', 'ContractViolationError',
    'RandomSource',
    'Individual', 'Dimension', 'Particle', 'OptimizationResult',
    'SelectionStrategy', 'Objective', 'SearchFunction',
]

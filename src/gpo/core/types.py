"""Core data types for the optimization engines."""

import copy
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, TypeVar

import numpy as np

from .exceptions import ConfigurationError
from .random import RandomSource


T = TypeVar("T", bound="Individual")


class Individual(ABC):
    """Candidate solution for the evolutionary engine.

    Lower fitness is better. Mutation happens in place; crossover returns
    fresh offspring and leaves both parents untouched.
    """

    @classmethod
    @abstractmethod
    def new_random(cls, rng: RandomSource) -> "Individual":
        """Create a randomly initialized individual."""
        pass

    @abstractmethod
    def fitness(self) -> float:
        """Scalar cost of this individual."""
        pass

    @abstractmethod
    def mutate(self, rng: RandomSource) -> None:
        """Mutate this individual in place."""
        pass

    @abstractmethod
    def crossover(self: T, other: T, rng: RandomSource) -> List[T]:
        """Recombine with ``other``, returning at least one offspring."""
        pass

    def clone(self: T) -> T:
        return copy.deepcopy(self)


SelectionStrategy = Callable[[Sequence[Individual], RandomSource], int]
Objective = Callable[[np.ndarray], float]
SearchFunction = Callable[[float], float]


@dataclass
class Dimension:
    """Named search axis with inclusive bounds."""
    name: str
    min: float
    max: float

    def __post_init__(self):
        self.min = float(self.min)
        self.max = float(self.max)
        if math.isnan(self.min) or math.isnan(self.max):
            raise ConfigurationError(f"Dimension '{self.name}' has NaN bounds")
        if self.min > self.max:
            raise ConfigurationError(
                f"Dimension '{self.name}' has min {self.min} greater than max {self.max}"
            )

    @classmethod
    def from_value(cls, value: Any) -> "Dimension":
        """Build a dimension from a Dimension, a (name, min, max) tuple or a mapping."""
        if isinstance(value, Dimension):
            return value
        if isinstance(value, Mapping):
            try:
                return cls(value["name"], value["min"], value["max"])
            except KeyError as e:
                raise ConfigurationError(f"Dimension mapping is missing key {e}") from e
        if isinstance(value, (tuple, list)) and len(value) == 3:
            return cls(*value)
        raise ConfigurationError(f"Cannot interpret {value!r} as a dimension")

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "min": self.min, "max": self.max}


@dataclass
class Particle:
    """Swarm member with its personal best."""
    position: np.ndarray
    velocity: np.ndarray
    best_position: Optional[np.ndarray] = None
    best_fitness: float = math.inf

    def __post_init__(self):
        self.position = np.asarray(self.position, dtype=float)
        self.velocity = np.asarray(self.velocity, dtype=float)
        if self.best_position is None:
            self.best_position = self.position.copy()
        else:
            self.best_position = np.asarray(self.best_position, dtype=float)

        if self.position.shape != self.velocity.shape:
            raise ConfigurationError(
                f"Position length {self.position.shape} does not match velocity length {self.velocity.shape}"
            )
        if self.best_position.shape != self.position.shape:
            raise ConfigurationError("Best position length does not match position length")


@dataclass
class OptimizationResult:
    """Outcome of an optimization run."""
    x: Any
    fun: float
    nit: int
    success: bool = True
    message: str = ""
    history: List[float] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary representation."""
        x = self.x
        if isinstance(x, np.ndarray):
            x = x.tolist()
        return {
            "x": x,
            "fun": self.fun,
            "nit": self.nit,
            "success": self.success,
            "message": self.message,
            "history": list(self.history),
        }

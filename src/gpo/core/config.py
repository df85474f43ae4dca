"""
Configuration management for the optimization engines.
"""

import os
import math
import yaml
import logging
from typing import Dict, Any, Optional, Union, List, Tuple
from dataclasses import dataclass, field, fields
from pathlib import Path

from .exceptions import ConfigurationError
from .types import Dimension, Objective, SearchFunction


logger = logging.getLogger(__name__)


@dataclass
class GAConfig:
    """Configuration for the genetic algorithm."""
    population_size: int = 100
    generations: int = 100
    elitism_fraction: float = 0.1
    tournament_size: int = 3

    def validate(self) -> "GAConfig":
        """Validate settings, clamping the elitism fraction into [0, 1]."""
        if self.population_size <= 0:
            raise ConfigurationError(
                "population_size must be positive",
                details={"population_size": self.population_size}
            )
        if self.generations < 0:
            raise ConfigurationError("generations must not be negative")
        if self.tournament_size < 1:
            raise ConfigurationError("tournament_size must be at least 1")

        if math.isnan(float(self.elitism_fraction)):
            raise ConfigurationError("elitism_fraction must not be NaN")
        clamped = min(max(float(self.elitism_fraction), 0.0), 1.0)
        if clamped != self.elitism_fraction:
            logger.warning(
                f"elitism_fraction {self.elitism_fraction} outside [0, 1], using {clamped}"
            )
        self.elitism_fraction = clamped
        return self


@dataclass
class PSOConfig:
    """Configuration for particle swarm optimization.

    ``objective`` has no default and must be supplied before an optimizer is
    built. ``search`` holds one bias function per dimension; a list of any
    other length leaves the bias term disabled.
    """
    dimensions: List[Dimension] = field(default_factory=lambda: [Dimension("x", -10.0, 10.0)])
    swarm_size: int = 100
    iterations: int = 1000
    inertia: float = 0.0
    cognitive: float = 0.0
    social: float = 0.0
    velocity_range: Tuple[float, float] = (-1.0, 1.0)
    objective: Optional[Objective] = None
    search: Optional[List[SearchFunction]] = None

    def validate(self) -> "PSOConfig":
        """Validate settings and normalise dimension entries."""
        if self.objective is None:
            raise ConfigurationError("An objective function is required")
        if not callable(self.objective):
            raise ConfigurationError("objective must be callable")

        self.dimensions = [Dimension.from_value(d) for d in self.dimensions]
        if not self.dimensions:
            raise ConfigurationError("At least one dimension is required")
        names = [d.name for d in self.dimensions]
        if len(set(names)) != len(names):
            raise ConfigurationError(f"Dimension names must be unique: {names}")

        if self.swarm_size <= 0:
            raise ConfigurationError(
                "swarm_size must be positive",
                details={"swarm_size": self.swarm_size}
            )
        if self.iterations < 0:
            raise ConfigurationError("iterations must not be negative")

        low, high = self.velocity_range
        if high < low:
            raise ConfigurationError(f"Invalid velocity range {self.velocity_range}")
        self.velocity_range = (float(low), float(high))

        if self.search is not None and not self.search_enabled:
            logger.debug(
                f"search list has {len(self.search)} entries for "
                f"{len(self.dimensions)} dimensions, bias disabled"
            )
        return self

    @property
    def search_enabled(self) -> bool:
        return self.search is not None and len(self.search) == len(self.dimensions)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary, leaving out the function fields."""
        return {
            "dimensions": [Dimension.from_value(d).to_dict() for d in self.dimensions],
            "swarm_size": self.swarm_size,
            "iterations": self.iterations,
            "inertia": self.inertia,
            "cognitive": self.cognitive,
            "social": self.social,
            "velocity_range": list(self.velocity_range),
        }


@dataclass
class Config:
    """Top-level configuration."""

    ga: GAConfig = field(default_factory=GAConfig)
    pso: PSOConfig = field(default_factory=PSOConfig)

    seed: Optional[int] = field(default_factory=lambda: _int_or_none(os.getenv("GPO_SEED")))
    log_level: str = field(default_factory=lambda: os.getenv("GPO_LOG_LEVEL", "INFO"))

    def __post_init__(self):
        self.log_level = self.log_level.upper()
        if self.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ConfigurationError(f"Unknown log level: {self.log_level}")

    @classmethod
    def from_file(cls, config_path: Union[str, Path]) -> "Config":
        """Load configuration from YAML file."""
        config_path = Path(config_path)

        if not config_path.exists():
            logger.warning(f"Config file {config_path} not found, using defaults")
            return cls()

        try:
            with open(config_path, 'r') as f:
                config_data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Failed to parse config {config_path}: {e}") from e

        if not config_data:
            logger.warning("Empty config file, using defaults")
            return cls()
        if not isinstance(config_data, dict):
            raise ConfigurationError(f"Config {config_path} must contain a mapping")

        return cls.from_dict(config_data)

    @classmethod
    def from_dict(cls, config_data: Dict[str, Any]) -> "Config":
        config_data = dict(config_data)
        seed = config_data.get("seed")
        if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
            config_data["seed"] = _int_or_none(str(seed))
        try:
            ga_config = GAConfig(**(config_data.pop("ga", None) or {}))

            pso_data = dict(config_data.pop("pso", None) or {})
            if "dimensions" in pso_data:
                pso_data["dimensions"] = [Dimension.from_value(d) for d in pso_data["dimensions"]]
            if "velocity_range" in pso_data:
                pso_data["velocity_range"] = tuple(pso_data["velocity_range"])
            for name in ("objective", "search"):
                if name in pso_data:
                    raise ConfigurationError(f"'{name}' cannot be set from a config file")
            pso_config = PSOConfig(**pso_data)

            return cls(ga=ga_config, pso=pso_config, **config_data)
        except TypeError as e:
            raise ConfigurationError(f"Invalid configuration: {e}") from e

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {
            "ga": {f.name: getattr(self.ga, f.name) for f in fields(self.ga)},
            "pso": self.pso.to_dict(),
            "seed": self.seed,
            "log_level": self.log_level,
        }

    def to_file(self, config_path: Union[str, Path]):
        """Save configuration to YAML file."""
        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, 'w') as f:
            yaml.safe_dump(self.to_dict(), f, default_flow_style=False, indent=2)

        logger.info(f"Configuration saved to {config_path}")

    def update_from_env(self):
        """Update configuration from environment variables."""
        env_mappings = {
            "GPO_SEED": ("seed", int),
            "GPO_LOG_LEVEL": ("log_level", lambda x: x.upper()),
            "GPO_POPULATION_SIZE": ("ga.population_size", int),
            "GPO_GENERATIONS": ("ga.generations", int),
            "GPO_SWARM_SIZE": ("pso.swarm_size", int),
            "GPO_ITERATIONS": ("pso.iterations", int),
        }

        for env_var, (attr_path, converter) in env_mappings.items():
            value = os.getenv(env_var)
            if value is None:
                continue
            try:
                value = converter(value)
            except ValueError as e:
                raise ConfigurationError(f"Invalid value for {env_var}: {value!r}") from e

            if "." in attr_path:
                obj_name, attr_name = attr_path.split(".", 1)
                setattr(getattr(self, obj_name), attr_name, value)
            else:
                setattr(self, attr_path, value)

            logger.info(f"Updated {attr_path} from environment variable {env_var}")


def _int_or_none(value: Optional[str]) -> Optional[int]:
    if value is None or value == "":
        return None
    try:
        return int(value)
    except ValueError as e:
        raise ConfigurationError(f"Invalid integer value: {value!r}") from e


def load_config(config_path: Optional[Union[str, Path]] = None) -> Config:
    """
    Load configuration from file or environment.

    Args:
        config_path: Path to configuration file (optional)

    Returns:
        Loaded configuration object
    """
    if config_path:
        config = Config.from_file(config_path)
    else:
        # Look for config file in standard locations
        possible_paths = [
            "gpo.yaml",
            "config/gpo.yaml",
            os.path.expanduser("~/.gpo/config.yaml"),
        ]

        config = None
        for path in possible_paths:
            if os.path.exists(path):
                config = Config.from_file(path)
                break

        if config is None:
            config = Config()

    config.update_from_env()

    return config

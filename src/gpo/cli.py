"""
Command Line Interface for the gpo optimization engines.
Author: Nik Jois <nikjois@llamasearch.ai>
"""

import sys
import json
from typing import Optional
import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from . import configure_logging
from .core.config import Config, load_config
from .core.exceptions import OptimizationError
from .core.random import RandomSource
from .optimization.genetic_algorithm import GeneticAlgorithm
from .optimization.particle_swarm import ParticleSwarmOptimizer
from .problems import OBJECTIVES, VectorIndividual


console = Console()


def _load(config: Optional[str], seed: Optional[int]) -> Config:
    gpo_config = Config.from_file(config) if config else load_config()
    if seed is not None:
        gpo_config.seed = seed
    configure_logging(gpo_config.log_level)
    return gpo_config


@click.group()
@click.version_option(version="1.0.0")
def cli():
    """gpo population-based optimizers CLI"""
    pass


@cli.command()
@click.option("--config", "-c", type=click.Path(), help="Configuration file path")
@click.option("--seed", "-s", type=int, help="Random seed")
@click.option("--generations", "-g", type=int, help="Number of generations")
@click.option("--population-size", "-p", type=int, help="Population size")
@click.option("--dimensions", "-d", type=int, default=2, show_default=True, help="Gene vector length")
def ga(config: Optional[str], seed: Optional[int], generations: Optional[int],
       population_size: Optional[int], dimensions: int):
    """Minimize a sum of squares with the genetic algorithm."""
    try:
        gpo_config = _load(config, seed)
        if generations is not None:
            gpo_config.ga.generations = generations
        if population_size is not None:
            gpo_config.ga.population_size = population_size
        if dimensions < 1:
            raise click.BadParameter("must be at least 1", param_hint="--dimensions")

        individual_type = type("VectorIndividual", (VectorIndividual,), {"length": dimensions})
        algorithm = GeneticAlgorithm(
            gpo_config.ga, individual_type, rng=RandomSource(seed=gpo_config.seed)
        )
        result = algorithm.optimize()

    except OptimizationError as e:
        console.print(f"[red]Error: {e}")
        sys.exit(1)

    table = Table(title="Best Individual")
    table.add_column("Gene", style="cyan")
    table.add_column("Value", style="white")
    for i, value in enumerate(result.x.genes):
        table.add_row(str(i), f"{value:.6f}")
    console.print(table)
    console.print(f"[green]Fitness: {result.fun:.6g}[/green] after {result.nit} generations")


@cli.command()
@click.option("--config", "-c", type=click.Path(), help="Configuration file path")
@click.option("--seed", "-s", type=int, help="Random seed")
@click.option("--iterations", "-n", type=int, help="Number of iterations")
@click.option("--swarm-size", "-p", type=int, help="Number of particles")
@click.option("--objective", "-o", type=click.Choice(sorted(OBJECTIVES)), default="sphere",
              show_default=True, help="Objective function")
def pso(config: Optional[str], seed: Optional[int], iterations: Optional[int],
        swarm_size: Optional[int], objective: str):
    """Minimize a benchmark function with the particle swarm optimizer."""
    try:
        gpo_config = _load(config, seed)
        if iterations is not None:
            gpo_config.pso.iterations = iterations
        if swarm_size is not None:
            gpo_config.pso.swarm_size = swarm_size
        gpo_config.pso.objective = OBJECTIVES[objective]

        optimizer = ParticleSwarmOptimizer(gpo_config.pso, rng=RandomSource(seed=gpo_config.seed))
        result = optimizer.optimize()

    except OptimizationError as e:
        console.print(f"[red]Error: {e}")
        sys.exit(1)

    table = Table(title="Global Best Position")
    table.add_column("Dimension", style="cyan")
    table.add_column("Bounds", style="dim")
    table.add_column("Value", style="white")
    for dimension, value in zip(optimizer.dimensions, result.x):
        table.add_row(dimension.name, f"[{dimension.min:g}, {dimension.max:g}]", f"{value:.6f}")
    console.print(table)
    console.print(f"[green]Cost: {result.fun:.6g}[/green] after {result.nit} iterations")


@cli.command()
@click.option("--config", "-c", type=click.Path(), help="Configuration file path")
def config_show(config: Optional[str]):
    """Show current configuration."""
    try:
        gpo_config = Config.from_file(config) if config else load_config()
    except OptimizationError as e:
        console.print(f"[red]Error loading configuration: {e}")
        sys.exit(1)

    console.print(Panel(
        json.dumps(gpo_config.to_dict(), indent=2),
        title="[bold blue]gpo Configuration[/bold blue]",
        expand=False
    ))


if __name__ == "__main__":
    cli()

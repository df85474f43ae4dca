"""
Tests for the genetic algorithm.
"""

import math

import numpy as np
import pytest

from gpo.core.config import GAConfig
from gpo.core.exceptions import ConfigurationError, ContractViolationError
from gpo.core.random import RandomSource
from gpo.optimization.genetic_algorithm import GeneticAlgorithm, Population
from gpo.optimization.selection import tournament_selection
from gpo.problems import ScalarIndividual, VectorIndividual


class ChildlessIndividual(VectorIndividual):
    def crossover(self, other, rng):
        return []


class TripletIndividual(VectorIndividual):
    def crossover(self, other, rng):
        return [self.clone(), other.clone(), self.clone()]


class NaNIndividual(VectorIndividual):
    def fitness(self):
        return math.nan


class FrozenIndividual(VectorIndividual):
    """Individual whose genes never change."""

    def mutate(self, rng):
        pass


class TestPopulation:
    """Tests for Population class."""

    def test_population_initialization(self, rng):
        """Test population construction."""
        population = Population(VectorIndividual, size=10, elitism_fraction=0.2, rng=rng)

        assert population.size == 10
        assert len(population) == 10
        assert population.num_elite == 2
        assert population.generation == 0
        assert all(isinstance(ind, VectorIndividual) for ind in population)

    def test_zero_size_rejected(self, rng):
        """Test an empty population is a configuration error."""
        with pytest.raises(ConfigurationError):
            Population(VectorIndividual, size=0, rng=rng)

    @pytest.mark.parametrize("fraction,expected", [(1.5, 1.0), (-0.3, 0.0), (0.5, 0.5)])
    def test_elitism_fraction_clamped(self, rng, fraction, expected):
        """Test out-of-range elitism fractions are truncated."""
        population = Population(VectorIndividual, size=4, elitism_fraction=fraction, rng=rng)

        assert population.elitism_fraction == expected

    def test_nan_elitism_fraction_rejected(self, rng):
        """Test a NaN elitism fraction fails at construction."""
        with pytest.raises(ConfigurationError):
            Population(VectorIndividual, size=4, elitism_fraction=math.nan, rng=rng)

    def test_sort_ascending(self, rng):
        """Test sort puts the minimum fitness first."""
        population = Population(VectorIndividual, size=30, rng=rng)
        population.sort()

        fitness = [ind.fitness() for ind in population]
        assert fitness == sorted(fitness)

    def test_sort_is_stable(self, rng):
        """Test equal fitness keeps the original order."""
        population = Population(FrozenIndividual, size=6, rng=rng)
        population._individuals = [
            FrozenIndividual([1.0, 0.0]),
            FrozenIndividual([0.0, 1.0]),
            FrozenIndividual([0.0, 0.5]),
            FrozenIndividual([-1.0, 0.0]),
            FrozenIndividual([0.0, -1.0]),
            FrozenIndividual([0.5, 0.0]),
        ]
        before = population.individuals

        population.sort()

        assert population.individuals == (before[2], before[5], before[0], before[1], before[3], before[4])
        assert population[2] is before[0]
        assert population[3] is before[1]

    @pytest.mark.parametrize("size", [1, 2, 3, 7, 20])
    @pytest.mark.parametrize("generations", [0, 1, 5])
    def test_size_is_preserved(self, rng, size, generations):
        """Test every generation has exactly the configured size."""
        population = Population(VectorIndividual, size=size, elitism_fraction=0.3, rng=rng)
        population.run(generations)

        assert len(population) == size
        assert population.generation == generations

    def test_overshooting_crossover_truncated(self, rng):
        """Test surplus offspring are dropped."""
        population = Population(TripletIndividual, size=10, rng=rng)
        population.run(3)

        assert len(population) == 10

    def test_elites_carried_forward(self, rng):
        """Test the top individuals survive unchanged as copies."""
        population = Population(VectorIndividual, size=20, elitism_fraction=0.25, rng=rng)
        population.sort()
        elites = population.individuals[:5]

        population.run_generation()

        for old, new in zip(elites, population.individuals[:5]):
            assert np.array_equal(old.genes, new.genes)
            assert old is not new

    def test_best_fitness_never_regresses_with_elitism(self, rng):
        """Test elitism keeps the best fitness monotone."""
        population = Population(VectorIndividual, size=30, elitism_fraction=0.1, rng=rng)
        previous = population.best().fitness()

        for _ in range(40):
            population.run_generation()
            current = population.best().fitness()
            assert current <= previous
            previous = current

    def test_run_zero_leaves_population_untouched(self, rng):
        """Test run(0) neither mutates nor reorders."""
        population = Population(VectorIndividual, size=8, elitism_fraction=0.5, rng=rng)
        before = population.individuals
        genes = [ind.genes.copy() for ind in before]

        population.run(0)

        assert all(a is b for a, b in zip(population.individuals, before))
        assert all(np.array_equal(g, ind.genes) for g, ind in zip(genes, population))

    def test_negative_generations_rejected(self, rng):
        """Test run refuses a negative generation count."""
        population = Population(VectorIndividual, size=4, rng=rng)

        with pytest.raises(ConfigurationError):
            population.run(-1)

    def test_best_returns_minimum(self, rng):
        """Test best() returns the minimum-fitness individual."""
        population = Population(VectorIndividual, size=25, rng=rng)
        minimum = min(ind.fitness() for ind in population)

        assert population.best().fitness() == minimum
        assert population[0] is population.best()

    def test_custom_selection_strategy(self, rng):
        """Test a supplied strategy replaces the tournament."""
        calls = []

        def always_best(population, source):
            calls.append(len(population))
            return 0

        population = Population(VectorIndividual, size=6, selection_strategy=always_best, rng=rng)
        population.run_generation()

        assert calls
        assert all(n == 6 for n in calls)

    @pytest.mark.parametrize("index", [6, -1, 100])
    def test_out_of_range_selection_fails(self, rng, index):
        """Test an invalid selection index is a contract violation."""
        population = Population(
            VectorIndividual, size=6, selection_strategy=lambda pop, source: index, rng=rng
        )

        with pytest.raises(ContractViolationError):
            population.run_generation()

    def test_non_integer_selection_fails(self, rng):
        """Test a non-integer selection result is rejected."""
        population = Population(
            VectorIndividual, size=6, selection_strategy=lambda pop, source: 1.5, rng=rng
        )

        with pytest.raises(ContractViolationError):
            population.run_generation()

    def test_empty_crossover_fails(self, rng):
        """Test crossover must produce offspring."""
        population = Population(ChildlessIndividual, size=4, rng=rng)

        with pytest.raises(ContractViolationError):
            population.run_generation()

    def test_nan_fitness_fails(self, rng):
        """Test NaN fitness aborts sorting."""
        population = Population(NaNIndividual, size=4, rng=rng)

        with pytest.raises(ContractViolationError):
            population.sort()

    def test_full_elitism_keeps_population(self, rng):
        """Test elitism 1.0 copies the whole sorted population."""
        population = Population(VectorIndividual, size=5, elitism_fraction=1.0, rng=rng)
        population.sort()
        genes = [ind.genes.copy() for ind in population]

        population.run(3)

        assert all(np.array_equal(g, ind.genes) for g, ind in zip(genes, population))

    def test_same_seed_same_result(self):
        """Test runs are reproducible given the same random source seed."""
        results = []
        for _ in range(2):
            population = Population(
                VectorIndividual, size=20, elitism_fraction=0.1, rng=RandomSource(seed=3)
            )
            population.run(10)
            results.append(population.best().genes.copy())

        assert np.array_equal(results[0], results[1])

    def test_statistics(self, rng):
        """Test fitness statistics."""
        population = Population(VectorIndividual, size=10, rng=rng)
        stats = population.get_statistics()

        assert stats["size"] == 10
        assert stats["best_fitness"] <= stats["mean_fitness"] <= stats["worst_fitness"]

    def test_scalar_gene_converges_to_zero(self):
        """Test the single-gene squared cost scenario reaches the origin."""
        population = Population(
            ScalarIndividual,
            size=200,
            elitism_fraction=0.1,
            selection_strategy=tournament_selection(3),
            rng=RandomSource(seed=2024),
        )
        population.run(200)

        best = population.best()
        assert abs(best.value) < 0.1
        assert best.fitness() < 0.01


class TestGeneticAlgorithm:
    """Tests for GeneticAlgorithm class."""

    def test_optimize(self):
        """Test config-driven optimization."""
        config = GAConfig(population_size=40, generations=30, elitism_fraction=0.1, tournament_size=3)
        algorithm = GeneticAlgorithm(config, VectorIndividual, rng=RandomSource(seed=11))

        result = algorithm.optimize()

        assert result.success is True
        assert result.nit == 30
        assert len(result.history) == 31
        assert result.fun == result.x.fitness()
        assert result.history[-1] <= result.history[0]
        assert len(algorithm.population) == 40

    def test_generations_override(self, rng):
        """Test an explicit generation count wins over the config."""
        algorithm = GeneticAlgorithm(GAConfig(population_size=10, generations=50), VectorIndividual, rng=rng)

        result = algorithm.optimize(generations=2)

        assert result.nit == 2
        assert algorithm.population.generation == 2

    def test_invalid_config(self, rng):
        """Test invalid settings fail at construction."""
        with pytest.raises(ConfigurationError):
            GeneticAlgorithm(GAConfig(population_size=0), VectorIndividual, rng=rng)
        with pytest.raises(ConfigurationError):
            GeneticAlgorithm(GAConfig(tournament_size=0), VectorIndividual, rng=rng)
        with pytest.raises(ConfigurationError):
            GeneticAlgorithm(GAConfig(elitism_fraction=math.nan), VectorIndividual, rng=rng)

    def test_negative_generations_rejected(self, rng):
        """Test optimize refuses a negative generation count."""
        algorithm = GeneticAlgorithm(GAConfig(population_size=4), VectorIndividual, rng=rng)

        with pytest.raises(ConfigurationError):
            algorithm.optimize(generations=-3)

        assert algorithm.population.generation == 0

"""A generational genetic algorithm: selection, crossover, mutation, reinsertion."""

from __future__ import annotations

import abc
import math
import random
import time
from dataclasses import dataclass
from typing import Any, Callable, Iterator, Sequence

from polyevolve.genome import Vertex, breeder_mutated, jittered_breeder_mutated

Genome = Any
Evaluated = Sequence[tuple[Genome, int]]


class FitnessFunction(abc.ABC):
    """Scores a genome with a non-negative integer; higher is better."""

    @abc.abstractmethod
    def fitness_of(self, genome: Genome) -> int:
        """Return the fitness of ``genome``."""

    def average(self, values: Sequence[int]) -> int:
        """Mean of ``values`` rounded half up; 0 for no values."""
        if not values:
            return 0
        return math.floor(sum(values) / len(values) + 0.5)

    @abc.abstractmethod
    def highest_possible_fitness(self) -> int:
        """Return the best fitness any genome can reach."""

    def lowest_possible_fitness(self) -> int:
        return 0


def _as_unsigned(value: float) -> int:
    """Truncate toward zero, saturating negatives and NaN at 0."""
    if math.isnan(value) or value <= 0:
        return 0
    return int(value)


class VertexSumFitness(FitnessFunction):
    """Fitness as the sum of every position and colour component."""

    def fitness_of(self, genome: Sequence[Vertex]) -> int:
        return _as_unsigned(sum(sum(vertex.as_floats()) for vertex in genome))

    def highest_possible_fitness(self) -> int:
        return 100


class MaximizeSelector:
    """Pick parents from the fittest individuals, cycling through them."""

    def __init__(self, selection_ratio: float, num_individuals_per_parents: int) -> None:
        if not selection_ratio > 0:
            raise ValueError("selection_ratio must be positive")
        if num_individuals_per_parents < 1:
            raise ValueError("num_individuals_per_parents must be at least 1")
        self.selection_ratio = selection_ratio
        self.num_individuals_per_parents = num_individuals_per_parents

    def select(self, evaluated: Evaluated, rng: random.Random) -> list[tuple[Genome, ...]]:
        ranked = [genome for genome, _ in sorted(evaluated, key=lambda item: item[1], reverse=True)]
        num_parents = math.floor(len(ranked) * self.selection_ratio + 0.5)
        if not ranked:
            return []
        pool = _cycle(ranked)
        return [
            tuple(next(pool) for _ in range(self.num_individuals_per_parents))
            for _ in range(num_parents)
        ]


def _cycle(items: Sequence[Genome]) -> Iterator[Genome]:
    while True:
        yield from items


class UniformCrossBreeder:
    """Each child takes every gene from a randomly chosen parent."""

    def breed(self, parents: Sequence[Sequence[Any]], rng: random.Random) -> list[list[Any]]:
        if not parents:
            raise ValueError("at least one parent is needed")
        length = len(parents[0])
        if any(len(parent) != length for parent in parents):
            raise ValueError("parents must have genomes of equal length")
        return [
            [rng.choice(parents)[locus] for locus in range(length)]
            for _ in parents
        ]


class BreederValueMutator:
    """Breeder-style value mutation of vertex genomes, clamped to bounds.

    With ``jitter`` every component is shifted by its own random amount
    and sign; otherwise one sign and adjustment apply to the whole vertex.
    """

    def __init__(
        self,
        mutation_rate: float,
        spread: Vertex,
        precision: int,
        min_value: Vertex,
        max_value: Vertex,
        jitter: bool = False,
    ) -> None:
        if mutation_rate < 0:
            raise ValueError("mutation_rate must not be negative")
        if precision < 1:
            raise ValueError("precision must be at least 1")
        if min_value > max_value:
            raise ValueError("min_value must not exceed max_value")
        self.mutation_rate = mutation_rate
        self.spread = spread
        self.precision = precision
        self.min_value = min_value
        self.max_value = max_value
        self.jitter = jitter

    def _mutate_one(self, value: Vertex, rng: random.Random) -> Vertex:
        adjustment = 2.0 ** -(rng.random() * self.precision)
        if self.jitter:
            mutated = jittered_breeder_mutated(value, self.spread, adjustment, rng)
        else:
            sign = 1 if rng.random() >= 0.5 else -1
            mutated = breeder_mutated(value, self.spread, adjustment, sign)
        if mutated < self.min_value:
            return self.min_value
        if mutated > self.max_value:
            return self.max_value
        return mutated

    def mutate(self, genome: Sequence[Vertex], rng: random.Random) -> list[Vertex]:
        mutated = list(genome)
        if not mutated:
            return mutated
        num_mutations = math.floor(len(mutated) * self.mutation_rate + rng.random())
        for _ in range(num_mutations):
            index = rng.randrange(len(mutated))
            mutated[index] = self._mutate_one(mutated[index], rng)
        return mutated


class ElitistReinserter:
    """Form the next generation from the best offspring and the best old individuals."""

    def __init__(
        self, fitness: FitnessFunction, offspring_has_precedence: bool, replace_ratio: float
    ) -> None:
        if not 0 <= replace_ratio <= 1:
            raise ValueError("replace_ratio must lie in [0, 1]")
        self.fitness = fitness
        self.offspring_has_precedence = offspring_has_precedence
        self.replace_ratio = replace_ratio

    def combine(
        self, offspring: Sequence[Genome], evaluated: Evaluated, rng: random.Random
    ) -> list[Genome]:
        size = len(evaluated)
        if self.offspring_has_precedence:
            num_offspring = min(len(offspring), size)
        else:
            num_offspring = min(len(offspring), math.floor(size * self.replace_ratio + 0.5))
        best_offspring = sorted(offspring, key=self.fitness.fitness_of, reverse=True)
        population = list(best_offspring[:num_offspring])
        best_old = [genome for genome, _ in sorted(evaluated, key=lambda item: item[1], reverse=True)]
        population.extend(best_old[: size - len(population)])
        return population


@dataclass(frozen=True)
class StepResult:
    """The outcome of one generation."""

    iteration: int
    population: tuple[Genome, ...]
    fitness_values: tuple[int, ...]
    average_fitness: int
    best_genome: Genome
    best_fitness: int
    best_generation: int
    duration: float


@dataclass(frozen=True)
class FinalResult:
    """The last generation together with why the run stopped."""

    step: StepResult
    stop_reason: str
    duration: float


class Simulation:
    """Steps a population through generations until a limit is reached."""

    def __init__(
        self,
        *,
        fitness: FitnessFunction,
        selector: MaximizeSelector,
        breeder: UniformCrossBreeder,
        mutator: BreederValueMutator,
        reinserter: ElitistReinserter,
        initial_population: Sequence[Genome],
        rng: random.Random | None = None,
        fitness_limit: int | None = None,
        generation_limit: int | None = None,
    ) -> None:
        if fitness_limit is None and generation_limit is None:
            raise ValueError("a fitness limit or a generation limit is required")
        if not initial_population:
            raise ValueError("the initial population is empty")
        self.fitness = fitness
        self.selector = selector
        self.breeder = breeder
        self.mutator = mutator
        self.reinserter = reinserter
        self.population = list(initial_population)
        self.rng = rng if rng is not None else random.Random()
        self.fitness_limit = fitness_limit
        self.generation_limit = generation_limit
        self.iteration = 0
        self.finished = False
        self._best: tuple[Genome, int, int] | None = None
        self._started = time.perf_counter()

    def _stop_reason(self, best_fitness: int) -> str | None:
        if self.fitness_limit is not None and best_fitness >= self.fitness_limit:
            return f"Fitness limit of {self.fitness_limit} reached"
        if self.generation_limit is not None and self.iteration >= self.generation_limit:
            return f"Generation limit of {self.generation_limit} reached"
        return None

    def step(self) -> StepResult | FinalResult:
        """Run one generation; return a FinalResult once a limit is met."""
        if self.finished:
            raise RuntimeError("the simulation has already finished")
        started = time.perf_counter()
        self.iteration += 1
        values = [self.fitness.fitness_of(genome) for genome in self.population]
        evaluated = list(zip(self.population, values))
        best_index = max(range(len(values)), key=values.__getitem__)
        if self._best is None or values[best_index] > self._best[1]:
            self._best = (self.population[best_index], values[best_index], self.iteration)
        best_genome, best_fitness, best_generation = self._best

        parents = self.selector.select(evaluated, self.rng)
        offspring = [
            self.mutator.mutate(child, self.rng)
            for group in parents
            for child in self.breeder.breed(group, self.rng)
        ]
        next_population = self.reinserter.combine(offspring, evaluated, self.rng)

        result = StepResult(
            iteration=self.iteration,
            population=tuple(self.population),
            fitness_values=tuple(values),
            average_fitness=self.fitness.average(values),
            best_genome=best_genome,
            best_fitness=best_fitness,
            best_generation=best_generation,
            duration=time.perf_counter() - started,
        )
        self.population = next_population
        reason = self._stop_reason(best_fitness)
        if reason is None:
            return result
        self.finished = True
        return FinalResult(result, reason, time.perf_counter() - self._started)

    def __iter__(self) -> Iterator[StepResult | FinalResult]:
        while not self.finished:
            yield self.step()

    def run(self) -> FinalResult:
        """Step until the simulation finishes and return the final result."""
        result: StepResult | FinalResult | None = None
        for result in self:
            pass
        if not isinstance(result, FinalResult):
            raise RuntimeError("the simulation has already finished")
        return result


def build_population(
    builder: Callable[[int, random.Random], Genome], size: int, rng: random.Random
) -> list[Genome]:
    """Build ``size`` genomes by calling ``builder(index, rng)``."""
    if size < 0:
        raise ValueError("size must not be negative")
    return [builder(index, rng) for index in range(size)]
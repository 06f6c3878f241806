"""Evolve vertex genomes towards a high sum of their components."""

from __future__ import annotations

import argparse
import random
from typing import Sequence

from polyevolve.evolution import (
    BreederValueMutator,
    ElitistReinserter,
    FinalResult,
    MaximizeSelector,
    Simulation,
    UniformCrossBreeder,
    VertexSumFitness,
    build_population,
)
from polyevolve.genome import Vertex, build_genome

NUM_VERTICES = 34
POPULATION_SIZE = 100
GENERATION_LIMIT = 10000


def _initial_population(rng: random.Random, population_size: int) -> list[list[Vertex]]:
    return build_population(
        lambda _index, r: build_genome(NUM_VERTICES, r), population_size, rng
    )


def _simulation(
    population: list[list[Vertex]], rng: random.Random, generation_limit: int
) -> Simulation:
    fitness = VertexSumFitness()
    mutator = BreederValueMutator(
        0.5,
        Vertex((0.05, 0.05, 0.05), (0.05, 0.05, 0.05, 0.0)),
        3,
        Vertex((-1.0, -1.0, -1.0), (0.0, 0.0, 0.0, 0.0)),
        Vertex((1.0, 1.0, 1.0), (1.0, 1.0, 1.0, 1.0)),
    )
    return Simulation(
        fitness=fitness,
        selector=MaximizeSelector(0.7, 2),
        breeder=UniformCrossBreeder(),
        mutator=mutator,
        reinserter=ElitistReinserter(VertexSumFitness(), False, 0.7),
        initial_population=population,
        rng=rng,
        fitness_limit=fitness.highest_possible_fitness(),
        generation_limit=generation_limit,
    )


def build_simulation(
    rng: random.Random,
    population_size: int = POPULATION_SIZE,
    generation_limit: int = GENERATION_LIMIT,
) -> Simulation:
    """A simulation over a fresh random population of vertex genomes."""
    return _simulation(_initial_population(rng, population_size), rng, generation_limit)


def _millis(seconds: float) -> str:
    return f"{seconds * 1000:.3f}ms"


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="genevoalgo", description="Evolve vertex genomes towards a high component sum."
    )
    parser.add_argument("--population-size", type=int, default=POPULATION_SIZE)
    parser.add_argument("--generations", type=int, default=GENERATION_LIMIT)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)
    if args.population_size < 1:
        parser.error("--population-size must be at least 1")
    if args.generations < 1:
        parser.error("--generations must be at least 1")

    rng = random.Random(args.seed)
    print("Running genevoalgo")
    print("Making initial population")
    population = _initial_population(rng, args.population_size)
    print("Initial population done")
    print(population)

    simulation = _simulation(population, rng, args.generations)
    for result in simulation:
        if isinstance(result, FinalResult):
            step = result.step
            print(result.stop_reason)
            print(
                f"Final result after {_millis(result.duration)}: generation: {step.iteration}, "
                f"best solution with fitness {step.best_fitness} found in generation "
                f"{step.best_generation}, processing_time: {_millis(step.duration)}"
            )
            print(f"Best solution:     {step.best_genome}")
        else:
            print(
                f"Step: generation: {result.iteration}, average_fitness: {result.average_fitness}, "
                f"best fitness: {result.best_fitness}, duration: {_millis(result.duration)}, "
                f"processing_time: {_millis(result.duration)}"
            )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
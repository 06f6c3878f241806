"""Evolve a set of coloured triangles to resemble a goal image."""

from __future__ import annotations

import argparse
import random
from pathlib import Path
from typing import Sequence

import numpy as np

from polyevolve.evolution import (
    BreederValueMutator,
    ElitistReinserter,
    FinalResult,
    MaximizeSelector,
    Simulation,
    UniformCrossBreeder,
    build_population,
)
from polyevolve.genome import Vertex, build_genome
from polyevolve.imagefit import ImageFitness, load_goal
from polyevolve.raster import BLACK, render_triangles, save_png

NUM_VERTICES = 450
POPULATION_SIZE = 200
GENERATION_LIMIT = 10000
TEXTURE_SIZE = 512
ADJUSTMENT_SIZE = 0.2
DEFAULT_GOAL = "goal.png"
DEFAULT_OUTPUT_DIR = "triangles"


def build_simulation(
    goal: np.ndarray,
    rng: random.Random,
    population_size: int = POPULATION_SIZE,
    num_vertices: int = NUM_VERTICES,
    generation_limit: int | None = None,
) -> Simulation:
    """A simulation that stops once a genome renders exactly as ``goal``.

    With ``generation_limit`` it also stops after that many generations.
    """
    population = build_population(
        lambda _index, r: build_genome(num_vertices, r), population_size, rng
    )
    fitness = ImageFitness(goal)
    spread = ADJUSTMENT_SIZE
    mutator = BreederValueMutator(
        0.1,
        Vertex((spread, spread, spread), (spread, spread, spread, spread)),
        3,
        Vertex((-1.0, -1.0, -1.0), (0.0, 0.0, 0.0, 0.0)),
        Vertex((1.0, 1.0, 1.0), (1.0, 1.0, 1.0, 1.0)),
        jitter=True,
    )
    return Simulation(
        fitness=fitness,
        selector=MaximizeSelector(0.8, 1),
        breeder=UniformCrossBreeder(),
        mutator=mutator,
        reinserter=ElitistReinserter(fitness, False, 0.7),
        initial_population=population,
        rng=rng,
        fitness_limit=fitness.highest_possible_fitness(),
        generation_limit=generation_limit,
    )


def _millis(seconds: float) -> str:
    return f"{seconds * 1000:.3f}ms"


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="polygenvo", description="Evolve triangles towards a goal image."
    )
    parser.add_argument("--goal", default=DEFAULT_GOAL, help="goal image")
    parser.add_argument("--output-dir", default=DEFAULT_OUTPUT_DIR, help="where improvements go")
    parser.add_argument("--size", type=int, default=TEXTURE_SIZE, help="render size in pixels")
    parser.add_argument("--population-size", type=int, default=POPULATION_SIZE)
    parser.add_argument("--vertices", type=int, default=NUM_VERTICES)
    parser.add_argument("--generations", type=int, default=None)
    parser.add_argument("--seed", type=int, default=None)
    args = parser.parse_args(argv)
    if args.population_size < 1:
        parser.error("--population-size must be at least 1")
    if args.vertices < 0:
        parser.error("--vertices must not be negative")
    if args.generations is not None and args.generations < 1:
        parser.error("--generations must be at least 1")

    try:
        goal = load_goal(args.goal, args.size)
    except (OSError, ValueError) as error:
        parser.error(f"cannot use goal image {args.goal}: {error}")

    rng = random.Random(args.seed)
    output_dir = Path(args.output_dir)
    print("Running genevoalgo")
    print("Making initial population")
    simulation = build_simulation(
        goal, rng, args.population_size, args.vertices, args.generations
    )
    print("Initial population done")

    best_so_far = 0
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
            continue
        print(
            f"Step: generation: {result.iteration}, average_fitness: {result.average_fitness}, "
            f"best fitness: {result.best_fitness}, duration: {_millis(result.duration)}, "
            f"processing_time: {_millis(result.duration)}"
        )
        if result.best_fitness > best_so_far:
            best_so_far = result.best_fitness
            output_dir.mkdir(parents=True, exist_ok=True)
            pixels = render_triangles(result.best_genome, args.size, clear_color=BLACK)
            save_png(pixels, output_dir / f"image{result.iteration}.png")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
import random

import pytest

from polyevolve.evolution import FinalResult, StepResult
from polyevolve.genevoalgo import NUM_VERTICES, build_simulation, main


def test_initial_population_has_requested_shape():
    simulation = build_simulation(random.Random(3), population_size=6, generation_limit=2)
    assert len(simulation.population) == 6
    assert all(len(genome) == NUM_VERTICES for genome in simulation.population)


def test_run_stops_at_generation_limit():
    simulation = build_simulation(random.Random(7), population_size=10, generation_limit=3)
    result = simulation.run()
    assert isinstance(result, FinalResult)
    assert result.step.iteration == 3
    assert result.stop_reason == "Generation limit of 3 reached"


def test_steps_before_limit_are_intermediate():
    simulation = build_simulation(random.Random(1), population_size=8, generation_limit=5)
    first = simulation.step()
    assert isinstance(first, StepResult)
    assert first.iteration == 1
    assert first.best_fitness == max(first.fitness_values)


def test_same_seed_gives_same_result():
    a = build_simulation(random.Random(42), population_size=6, generation_limit=2).run()
    b = build_simulation(random.Random(42), population_size=6, generation_limit=2).run()
    assert a.step.best_fitness == b.step.best_fitness
    assert a.step.best_genome == b.step.best_genome


def test_population_size_is_kept_across_generations():
    simulation = build_simulation(random.Random(5), population_size=9, generation_limit=4)
    simulation.run()
    assert len(simulation.population) == 9


def test_main_reports_progress_and_final_result(capsys):
    assert main(["--population-size", "4", "--generations", "2", "--seed", "1"]) == 0
    out = capsys.readouterr().out
    assert "Running genevoalgo" in out
    assert "Step: generation: 1" in out
    assert "Generation limit of 2 reached" in out
    assert "Best solution:" in out


def test_main_rejects_empty_population():
    with pytest.raises(SystemExit):
        main(["--population-size", "0"])
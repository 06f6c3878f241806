import random

import numpy as np
import pytest

from polyevolve.evolution import FinalResult
from polyevolve.imagefit import HIGHEST_FITNESS
from polyevolve.polygenvo import build_simulation, main
from polyevolve.raster import save_png


def _solid(size, rgba):
    image = np.empty((size, size, 4), dtype=np.uint8)
    image[:] = rgba
    return image


def test_empty_genomes_match_black_goal_immediately():
    simulation = build_simulation(
        _solid(8, (0, 0, 0, 255)), random.Random(0), population_size=4, num_vertices=0
    )
    result = simulation.step()
    assert isinstance(result, FinalResult)
    assert result.step.best_fitness == HIGHEST_FITNESS
    assert result.stop_reason == f"Fitness limit of {HIGHEST_FITNESS} reached"


def test_generation_limit_stops_run():
    simulation = build_simulation(
        _solid(8, (255, 255, 255, 0)),
        random.Random(2),
        population_size=4,
        num_vertices=3,
        generation_limit=2,
    )
    result = simulation.run()
    assert result.step.iteration == 2
    assert result.stop_reason == "Generation limit of 2 reached"
    assert len(simulation.population) == 4


def test_genomes_have_requested_vertex_count():
    simulation = build_simulation(
        _solid(4, (0, 0, 0, 255)), random.Random(9), population_size=3, num_vertices=6,
        generation_limit=1,
    )
    assert all(len(genome) == 6 for genome in simulation.population)


def test_non_square_goal_is_rejected():
    with pytest.raises(ValueError):
        build_simulation(np.zeros((4, 6, 4), dtype=np.uint8), random.Random(0), 2, 3, 1)


def test_main_saves_improvements(tmp_path, capsys):
    goal = save_png(_solid(8, (0, 0, 0, 255)), tmp_path / "goal.png")
    out_dir = tmp_path / "triangles"
    code = main(
        [
            "--goal", str(goal),
            "--output-dir", str(out_dir),
            "--size", "8",
            "--population-size", "4",
            "--vertices", "3",
            "--generations", "2",
            "--seed", "4",
        ]
    )
    assert code == 0
    assert (out_dir / "image1.png").is_file()
    out = capsys.readouterr().out
    assert "Generation limit of 2 reached" in out


def test_main_rejects_missing_goal(tmp_path):
    with pytest.raises(SystemExit):
        main(["--goal", str(tmp_path / "missing.png"), "--size", "8"])
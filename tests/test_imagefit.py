import numpy as np
import pytest

from polyevolve.genome import Vertex
from polyevolve.imagefit import (
    HIGHEST_FITNESS,
    ImageFitness,
    image_difference,
    load_goal,
    subtract_rgba,
)
from polyevolve.raster import save_png


def _solid(size, rgba):
    image = np.empty((size, size, 4), dtype=np.uint8)
    image[:] = rgba
    return image


def test_subtract_rgba_of_equal_pixels_is_zero():
    assert subtract_rgba((12, 200, 3, 255), (12, 200, 3, 255)) == 0


def test_subtract_rgba_is_symmetric():
    a = (10, 20, 30, 40)
    b = (40, 30, 20, 10)
    assert subtract_rgba(a, b) == subtract_rgba(b, a)


def test_subtract_rgba_extremes():
    assert subtract_rgba((0, 0, 0, 0), (255, 255, 255, 255)) == 1020


def test_subtract_rgba_rejects_wrong_channel_count():
    with pytest.raises(ValueError):
        subtract_rgba((1, 2, 3), (1, 2, 3, 4))


def test_image_difference_of_identical_images_is_zero():
    image = _solid(4, (9, 8, 7, 6))
    assert image_difference(image, image.copy()) == 0


def test_image_difference_is_symmetric_and_positive():
    a = _solid(3, (0, 0, 0, 255))
    b = _solid(3, (50, 0, 0, 255))
    assert image_difference(a, b) == image_difference(b, a)
    assert image_difference(a, b) > 0


def test_image_difference_rejects_shape_mismatch():
    with pytest.raises(ValueError):
        image_difference(_solid(2, (0, 0, 0, 0)), _solid(3, (0, 0, 0, 0)))


def test_load_goal_round_trip(tmp_path):
    image = _solid(5, (1, 2, 3, 4))
    image[0, 0] = (200, 100, 50, 255)
    path = save_png(image, tmp_path / "goal.png")
    loaded = load_goal(path)
    assert np.array_equal(loaded, image)


def test_load_goal_crops_to_size(tmp_path):
    image = _solid(6, (0, 0, 0, 255))
    image[1, 2] = (255, 255, 255, 255)
    path = save_png(image, tmp_path / "goal.png")
    loaded = load_goal(path, 3)
    assert loaded.shape == (3, 3, 4)
    assert np.array_equal(loaded, image[:3, :3])


def test_load_goal_too_small_raises(tmp_path):
    path = save_png(_solid(2, (0, 0, 0, 255)), tmp_path / "goal.png")
    with pytest.raises(ValueError):
        load_goal(path, 4)


def test_perfect_match_reaches_highest_fitness():
    fitness = ImageFitness(_solid(8, (0, 0, 0, 255)))
    assert fitness.fitness_of([]) == HIGHEST_FITNESS
    assert fitness.highest_possible_fitness() == HIGHEST_FITNESS


def test_opposite_image_scores_lowest_fitness():
    fitness = ImageFitness(_solid(8, (255, 255, 255, 0)))
    assert fitness.fitness_of([]) == fitness.lowest_possible_fitness()


def test_partial_match_lies_between_bounds():
    fitness = ImageFitness(_solid(8, (0, 0, 0, 255)))
    triangle = [
        Vertex((-1.0, -1.0, 0.0), (1.0, 1.0, 1.0, 1.0)),
        Vertex((1.0, -1.0, 0.0), (1.0, 1.0, 1.0, 1.0)),
        Vertex((-1.0, 1.0, 0.0), (1.0, 1.0, 1.0, 1.0)),
    ]
    score = fitness.fitness_of(triangle)
    assert 0 < score < HIGHEST_FITNESS


def test_image_fitness_rejects_non_square_goal():
    with pytest.raises(ValueError):
        ImageFitness(np.zeros((4, 5, 4), dtype=np.uint8))


def test_image_fitness_rejects_size_mismatch():
    with pytest.raises(ValueError):
        ImageFitness(_solid(4, (0, 0, 0, 255)), size=8)
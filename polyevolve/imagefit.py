"""Fitness of a triangle genome measured against a goal image."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import numpy as np
from PIL import Image

from polyevolve.evolution import FitnessFunction
from polyevolve.genome import Vertex
from polyevolve.raster import BLACK, render_triangles

HIGHEST_FITNESS = 10_000_000
_CHANNEL_MAX = 255
_CHANNELS = 4


def subtract_rgba(first: Sequence[int], second: Sequence[int]) -> int:
    """Sum of the absolute per-channel differences of two RGBA pixels."""
    if len(first) != _CHANNELS or len(second) != _CHANNELS:
        raise ValueError("RGBA pixels need exactly 4 channels")
    return sum(abs(int(a) - int(b)) for a, b in zip(first, second))


def image_difference(goal: np.ndarray, rendered: np.ndarray) -> int:
    """Sum of :func:`subtract_rgba` over every pixel of two equally sized images."""
    goal_array = np.asarray(goal)
    rendered_array = np.asarray(rendered)
    if goal_array.shape != rendered_array.shape:
        raise ValueError(
            f"images differ in shape: {goal_array.shape} and {rendered_array.shape}"
        )
    if goal_array.ndim != 3 or goal_array.shape[2] != _CHANNELS:
        raise ValueError(f"expected RGBA images, got shape {goal_array.shape}")
    diff = np.abs(goal_array.astype(np.int64) - rendered_array.astype(np.int64))
    return int(diff.sum())


def load_goal(path: str | Path, size: int | None = None) -> np.ndarray:
    """Load an image as an RGBA ``uint8`` array.

    With ``size`` the top-left ``size`` by ``size`` region is kept; the
    image must be at least that large.
    """
    with Image.open(path) as image:
        array = np.asarray(image.convert("RGBA"), dtype=np.uint8)
    if size is not None:
        if size < 1:
            raise ValueError("size must be at least 1")
        height, width = array.shape[:2]
        if height < size or width < size:
            raise ValueError(
                f"goal image is {width}x{height}, smaller than {size}x{size}"
            )
        array = array[:size, :size]
    return np.ascontiguousarray(array)


def _as_unsigned(value: float) -> int:
    if np.isnan(value) or value <= 0:
        return 0
    return int(value)


class ImageFitness(FitnessFunction):
    """Renders a genome and scores how closely it matches the goal image.

    A perfect match scores 10,000,000; the largest possible difference
    scores 0.
    """

    def __init__(self, goal: np.ndarray, size: int | None = None) -> None:
        array = np.asarray(goal)
        if array.ndim != 3 or array.shape[2] != _CHANNELS:
            raise ValueError(f"goal must have shape (size, size, 4), got {array.shape}")
        if array.shape[0] != array.shape[1]:
            raise ValueError(f"goal must be square, got {array.shape[1]}x{array.shape[0]}")
        if size is not None and size != array.shape[0]:
            raise ValueError(f"goal is {array.shape[0]} pixels wide, expected {size}")
        self.goal = array.astype(np.uint8)
        self.size = array.shape[0]
        self._max_difference = self.size * self.size * _CHANNEL_MAX * _CHANNELS

    def fitness_of(self, genome: Sequence[Vertex]) -> int:
        rendered = render_triangles(genome, self.size, clear_color=BLACK)
        difference = np.float32(image_difference(self.goal, rendered))
        top = np.float32(HIGHEST_FITNESS)
        score = top - (difference / np.float32(self._max_difference)) * top
        return _as_unsigned(float(score))

    def highest_possible_fitness(self) -> int:
        return HIGHEST_FITNESS
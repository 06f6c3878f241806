"""Vertex genomes: triangles of coloured vertices and the ways they mutate."""

from __future__ import annotations

import random
from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class Vertex:
    """A vertex in clip space with an RGBA colour.

    Vertices order lexicographically by position, then by colour.
    """

    position: tuple[float, float, float]
    color: tuple[float, float, float, float]

    def __post_init__(self) -> None:
        position = tuple(float(v) for v in self.position)
        color = tuple(float(v) for v in self.color)
        if len(position) != 3:
            raise ValueError(f"position needs 3 components, got {len(position)}")
        if len(color) != 4:
            raise ValueError(f"color needs 4 components, got {len(color)}")
        object.__setattr__(self, "position", position)
        object.__setattr__(self, "color", color)

    def as_floats(self) -> tuple[float, ...]:
        """Return position followed by colour as seven floats."""
        return self.position + self.color


def random_vertex(rng: random.Random) -> Vertex:
    """A vertex with x, y in [-1, 1), z = 0 and colour channels in [0, 1)."""
    x = rng.uniform(-1.0, 1.0)
    y = rng.uniform(-1.0, 1.0)
    color = tuple(rng.random() for _ in range(4))
    return Vertex((x, y, 0.0), color)


def build_genome(num_vertices: int, rng: random.Random) -> list[Vertex]:
    """A genome of ``num_vertices`` random vertices."""
    if num_vertices < 0:
        raise ValueError("num_vertices must not be negative")
    return [random_vertex(rng) for _ in range(num_vertices)]


def random_sign(rng: random.Random) -> int:
    """Return 1 or -1 with equal probability, drawn from ``rng``."""
    draw = rng.random()
    if draw >= 0.5:
        return 1
    return -1


def breeder_mutated(value: Vertex, spread: Vertex, adjustment: float, sign: int) -> Vertex:
    """Shift every component by ``spread * adjustment * sign``; z is reset to 0."""
    step = adjustment * sign
    x, y, _ = value.position
    return Vertex(
        (x + spread.position[0] * step, y + spread.position[1] * step, 0.0),
        tuple(c + s * step for c, s in zip(value.color, spread.color)),
    )


def jittered_breeder_mutated(
    value: Vertex, spread: Vertex, adjustment: float, rng: random.Random
) -> Vertex:
    """Shift every component by its own random amount in [0, adjustment) and sign."""
    if not adjustment > 0:
        raise ValueError("adjustment must be positive")

    def shift(component: float, width: float) -> float:
        return component + width * rng.uniform(0.0, adjustment) * random_sign(rng)

    x, y, _ = value.position
    position = (shift(x, spread.position[0]), shift(y, spread.position[1]), 0.0)
    color = tuple(shift(c, s) for c, s in zip(value.color, spread.color))
    return Vertex(position, color)


def random_mutated(
    value: Vertex, min_value: Vertex, max_value: Vertex, rng: random.Random
) -> Vertex:
    """Replace the vertex with a fresh random one; the bounds are not consulted."""
    return random_vertex(rng)
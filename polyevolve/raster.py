"""Software rasterisation of coloured triangle lists into RGBA pixel arrays.

Vertices are in clip space: x and y run from -1 to 1, with y pointing up.
Every three consecutive vertices form a triangle. Counter-clockwise
triangles are front-facing; clockwise ones are culled. Colours are
interpolated across each triangle and blended "over" what is already
drawn, in linear space. The result is stored sRGB-encoded, eight bits
per channel, the way an ``Rgba8UnormSrgb`` render target holds it.
"""

from __future__ import annotations

import math
from pathlib import Path
from typing import Iterable, Sequence

import numpy as np
from PIL import Image

from polyevolve.genome import Vertex

BLACK = (0.0, 0.0, 0.0, 1.0)


def _srgb_encode(linear: np.ndarray) -> np.ndarray:
    return np.where(
        linear <= 0.0031308,
        linear * 12.92,
        1.055 * np.power(linear, 1.0 / 2.4) - 0.055,
    )


def _to_bytes(buffer: np.ndarray) -> np.ndarray:
    encoded = np.empty_like(buffer)
    encoded[..., :3] = _srgb_encode(buffer[..., :3])
    encoded[..., 3] = buffer[..., 3]
    return np.rint(np.clip(encoded, 0.0, 1.0) * 255.0).astype(np.uint8)


def _edge(ax: float, ay: float, bx: float, by: float, px, py):
    return (bx - ax) * (py - ay) - (by - ay) * (px - ax)


def _pixel_span(coords: Sequence[float], limit: int) -> tuple[int, int]:
    low = max(0, math.floor(min(coords)))
    high = min(limit - 1, math.ceil(max(coords)))
    return low, high


def _draw_triangle(buffer: np.ndarray, a: Vertex, b: Vertex, c: Vertex) -> None:
    height, width = buffer.shape[:2]
    (x0, y0, _), (x1, y1, _), (x2, y2, _) = a.position, b.position, c.position
    area = _edge(x0, y0, x1, y1, x2, y2)
    if not area > 0:
        return

    col_lo, col_hi = _pixel_span([(x + 1.0) / 2.0 * width - 0.5 for x in (x0, x1, x2)], width)
    row_lo, row_hi = _pixel_span([(1.0 - y) / 2.0 * height - 0.5 for y in (y0, y1, y2)], height)
    if col_lo > col_hi or row_lo > row_hi:
        return

    px = (np.arange(col_lo, col_hi + 1) + 0.5) / width * 2.0 - 1.0
    py = 1.0 - (np.arange(row_lo, row_hi + 1) + 0.5) / height * 2.0
    grid_x, grid_y = np.meshgrid(px, py)

    w0 = _edge(x1, y1, x2, y2, grid_x, grid_y) / area
    w1 = _edge(x2, y2, x0, y0, grid_x, grid_y) / area
    w2 = _edge(x0, y0, x1, y1, grid_x, grid_y) / area
    inside = (w0 >= 0) & (w1 >= 0) & (w2 >= 0)
    if not inside.any():
        return

    colors = np.clip(np.array([a.color, b.color, c.color], dtype=np.float64), 0.0, 1.0)
    src = w0[..., None] * colors[0] + w1[..., None] * colors[1] + w2[..., None] * colors[2]
    src = np.clip(src, 0.0, 1.0)
    src_alpha = src[..., 3:4]

    region = buffer[row_lo : row_hi + 1, col_lo : col_hi + 1]
    blended = np.empty_like(region)
    blended[..., :3] = src[..., :3] * src_alpha + region[..., :3] * (1.0 - src_alpha)
    blended[..., 3:4] = src_alpha + region[..., 3:4] * (1.0 - src_alpha)
    region[inside] = blended[inside]


def render_triangles(
    vertices: Iterable[Vertex],
    size: int,
    clear_color: Sequence[float] = BLACK,
) -> np.ndarray:
    """Render a triangle list onto a ``size`` by ``size`` target.

    Returns a ``(size, size, 4)`` array of ``uint8`` RGBA values, row 0
    at the top. Vertices left over after the last full triangle are
    ignored.
    """
    if size < 1:
        raise ValueError("size must be at least 1")
    clear = tuple(float(v) for v in clear_color)
    if len(clear) != 4:
        raise ValueError(f"clear_color needs 4 components, got {len(clear)}")

    buffer = np.empty((size, size, 4), dtype=np.float64)
    buffer[:] = np.clip(np.array(clear), 0.0, 1.0)

    corners = list(vertices)
    usable = len(corners) - len(corners) % 3
    triangles = iter(corners[:usable])
    for a, b, c in zip(triangles, triangles, triangles):
        _draw_triangle(buffer, a, b, c)
    return _to_bytes(buffer)


def to_image(pixels: np.ndarray) -> Image.Image:
    """Wrap an ``(height, width, 4)`` ``uint8`` array as an RGBA image."""
    array = np.asarray(pixels)
    if array.ndim != 3 or array.shape[2] != 4:
        raise ValueError(f"expected an array of shape (height, width, 4), got {array.shape}")
    if array.dtype != np.uint8:
        raise ValueError(f"expected uint8 pixels, got {array.dtype}")
    image = Image.fromarray(np.ascontiguousarray(array))
    if image.mode != "RGBA":
        image = image.convert("RGBA")
    return image


def save_png(pixels: np.ndarray, path: str | Path) -> Path:
    """Write the pixels to ``path`` as a PNG file and return the path."""
    target = Path(path)
    to_image(pixels).save(target, format="PNG")
    return target
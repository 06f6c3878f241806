"""Render an empty scene over a blue-grey background and save it as a PNG."""

from __future__ import annotations

import argparse
from typing import Sequence

import numpy as np

from polyevolve.raster import render_triangles, save_png

BACKGROUND = (0.1, 0.2, 0.3, 1.0)
DEFAULT_SIZE = 256
DEFAULT_OUTPUT = "image.png"


def render_blank(size: int = DEFAULT_SIZE) -> np.ndarray:
    """Render a ``size`` by ``size`` target with no triangles on the background."""
    return render_triangles([], size, clear_color=BACKGROUND)


def main(argv: Sequence[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="polygen", description="Render an empty scene and save it as a PNG."
    )
    parser.add_argument("--size", type=int, default=DEFAULT_SIZE, help="width and height in pixels")
    parser.add_argument("--output", default=DEFAULT_OUTPUT, help="path of the PNG to write")
    args = parser.parse_args(argv)
    if args.size < 1:
        parser.error("--size must be at least 1")

    pixels = render_blank(args.size)
    path = save_png(pixels, args.output)
    print(f"Wrote {args.size}x{args.size} image to {path}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
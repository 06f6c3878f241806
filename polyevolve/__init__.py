"""Evolve coloured triangles towards a goal image with a genetic algorithm and a software rasterizer."""

__version__ = "0.1.0"
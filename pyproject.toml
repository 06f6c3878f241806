[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "polyevolve"
version = "0.1.0"
description = "Evolve sets of coloured triangles towards a goal image with a genetic algorithm"
requires-python = ">=3.10"
keywords = ["genetic-algorithm", "evolution", "triangles", "image-approximation", "rasterizer"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering :: Artificial Intelligence",
    "Topic :: Multimedia :: Graphics",
]
dependencies = [
    "numpy",
    "pillow",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
polygen = "polyevolve.polygen:main"
genevoalgo = "polyevolve.genevoalgo:main"
polygenvo = "polyevolve.polygenvo:main"

[tool.hatch.build.targets.wheel]
packages = ["polyevolve"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"

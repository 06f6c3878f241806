# polyevolve

polyevolve evolves genomes of coloured vertices with a genetic algorithm.
Each three consecutive vertices form a triangle. A small software rasterizer
draws the triangles, and a genome can be scored by how closely its render
matches a goal image.

## Installation

```
pip install .
```

To run the tests:

```
pip install .[test]
pytest
```

## Commands

### polygen

Renders a frame with no triangles, cleared to a dark blue-grey
(`0.1, 0.2, 0.3`), and saves it as a PNG.

- `--size N`: width and height in pixels (default 256)
- `--output PATH`: file to write (default `image.png`)

### genevoalgo

Evolves a population of genomes. Each genome holds 34 random vertices, and
its fitness is the sum of all vertex position and colour components. One
line is printed per generation. The run stops once the best fitness reaches
100 or the generation limit is hit.

- `--population-size N` (default 100)
- `--generations N`: generation limit (default 10000)
- `--seed N`: seed for the random generator

### polygenvo

Evolves genomes of vertices whose render should match a goal image. The goal
is cropped to its top-left `size`×`size` region, so it must be at least that
large. Fitness runs from 0 to 10,000,000, and an exact match scores the
maximum. Whenever the best fitness improves, the current best render is
written to `<output-dir>/image<generation>.png`. The directory is created
if it does not exist. With no generation limit, the run goes on until the
render matches the goal exactly.

- `--goal PATH`: goal image (default `goal.png`)
- `--output-dir DIR` (default `triangles`)
- `--size N`: render size in pixels (default 512)
- `--population-size N` (default 200)
- `--vertices N`: vertices per genome (default 450)
- `--generations N`: optional generation limit
- `--seed N`: seed for the random generator

## Library use

- `polyevolve.genome`
  - `Vertex` holds a position in clip space and an RGBA colour.
  - `random_vertex` and `build_genome` create random vertices and genomes.
  - `random_sign` returns 1 or -1.
  - The mutation helpers are `breeder_mutated`, `jittered_breeder_mutated`
    and `random_mutated`.
- `polyevolve.evolution`
  - `FitnessFunction` is the base class for fitness measures, and
    `VertexSumFitness` is the component-sum fitness.
  - The genetic operators are `MaximizeSelector`, `UniformCrossBreeder`,
    `BreederValueMutator` and `ElitistReinserter`.
  - `build_population` creates a starting population.
  - `Simulation` runs the algorithm. Advance it with `step()`, iterate over
    it, or call `run()` to get the `FinalResult`.
- `polyevolve.raster`
  - `render_triangles` draws a triangle list into a `uint8` RGBA array. Only
    counter-clockwise triangles are drawn, and colours blend "over" one
    another in sRGB output.
  - `to_image` and `save_png` turn the array into an image or a PNG file.
- `polyevolve.imagefit`
  - `subtract_rgba`, `image_difference` and `load_goal` compare pixels and
    load a goal image.
  - `ImageFitness` scores a genome against a goal image.

```python
import random
from polyevolve.genevoalgo import build_simulation

sim = build_simulation(random.Random(1), population_size=20, generation_limit=50)
final = sim.run()
print(final.step.best_fitness, final.stop_reason)
```

## What it does not do

All rendering is done on the CPU into numpy arrays. There is no GPU
rendering and no window. To see progress, look at the printed lines and
the PNG files that are written.
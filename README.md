# asciigenetic

Turn a picture into ASCII art by evolving it. A population of candidate
character grids is rendered to pixels and scored against a grayscale,
resized copy of your image. The best grids breed and mutate, generation
after generation, until the run ends or you stop it.

## Installation

```
pip install .
```

To run the tests as well:

```
pip install ".[test]"
pytest
```

The package needs Pillow and NumPy. The full-screen progress display uses
the standard `curses` module, which is available on Unix-like systems.

Glyphs are drawn with the `DejaVuSansMono.ttf` font if Pillow can find it;
otherwise Pillow's built-in default font is used.

## Command line

Give an image and either a width or a height in characters (not both).
The other dimension is worked out from the image's aspect ratio, allowing
for characters being about twice as tall as they are wide.

```
asciigen photo.png --width 80
asciigen photo.png -H 30 --generations 500 --population 200
```

Options:

| Option | Default | Meaning |
| --- | --- | --- |
| `-w`, `--width` | | Width in characters |
| `-H`, `--height` | | Height in characters |
| `-g`, `--generations` | 100 | Number of generations; 0 runs until stopped |
| `-j`, `--jobs` | 4 | Worker threads used to evaluate fitness |
| `-i`, `--init-char` | | Seed every grid with this single character (about 95% of cells, the rest random) |
| `-o`, `--output` | | Write the final ASCII art to this file |
| `-d`, `--debug` | off | Save the prepared input and the rendered result as PNG files |
| `-v`, `--verbose` | off | Print the current best art with each console progress line |
| `-W`, `--white-background` | off | White background when counting background pixels and in the debug image |
| `-s`, `--status-interval` | 1.0 | Seconds between progress updates |
| `-p`, `--population` | 80 | Population size, from 20 to 1000 |
| `--no-ui` | off | Plain console output instead of the full-screen display |

An init character outside the allowed character set is replaced by a space.
Missing or conflicting width/height, or a population outside 20–1000,
is reported as an error with exit status 1; so is an image that cannot be
read.

By default progress is shown in a full-screen terminal display with the
generation count, progress or fitness bar, best fitness, elapsed time,
generations per second, an estimated time to finish and the current best
art. Press `q` to stop early. If the display cannot be started, console
output is used instead. With `--no-ui`, progress lines are printed to the
console; in continuous mode (`--generations 0`) the run then goes on until
interrupted.

At the end the best art is printed, together with its size, fitness and
the time taken.

With `--debug`, two files are written to the current directory:
`debug_input_<name>.png` (the resized grayscale target) and
`debug_ascii_<name>.png` (the final art rendered at the same size).

## How fitness works

A target pixel brighter than the background threshold (50, or 200 with
`--white-background`) counts as lit. A rendered pixel within 30 grey levels
of a lit target pixel scores a point; a lit rendered pixel over an unlit
target pixel costs 0.005. The score is divided by the number of
non-background target pixels and never drops below zero.

Each generation keeps the top 10% as elites and fills the rest by
tournament selection (best of three), uniform crossover (rate 0.8) and
mutation (rate 0.01). New random characters are spaces with a probability
equal to the share of background pixels in the target. Characters come from
a fixed set of punctuation, symbols, `O`, `X` and `8`.

## Library use

```python
from asciigenetic.ascii_generator import AsciiGenerator
from asciigenetic.image_processor import ImageProcessor
from asciigenetic.genetic_algorithm import GeneticAlgorithm

processor = ImageProcessor()
image = processor.load_image("photo.png")

generator = AsciiGenerator()
char_width, char_height = generator.char_dimensions()

columns, rows = 40, 15
target = processor.prepare_target_image(image, columns * char_width, rows * char_height)

ga = GeneticAlgorithm(columns, rows, 80, generator, target, 4, None, False)
best, elapsed = ga.evolve(200, False, 1.0, None)

print(generator.individual_to_string(best, columns))
```

The modules:

- `asciigenetic.ascii_generator` — `AsciiGenerator` renders character grids
  to grayscale Pillow images (`generate_ascii_image`,
  `generate_ascii_image_with_background`, and a three-times-larger
  `generate_debug_ascii_image_with_background`) and lays an individual out
  as text with `individual_to_string`.
- `asciigenetic.image_processor` — `ImageProcessor` loads an image, resizes
  it with Lanczos filtering and converts it to grayscale.
- `asciigenetic.individual` — `Individual`, a grid of character codes with
  a fitness, with `random`, `with_init_char`, `crossover` and `mutate`.
- `asciigenetic.genetic_algorithm` — `GeneticAlgorithm` and the
  `EvolutionStats` record passed to a progress callback. A callback given to
  `evolve` receives an `EvolutionStats` and returns `False` to stop.
- `asciigenetic.ui` — `CursesUI`, the full-screen display, usable as a
  context manager.
- `asciigenetic.cli` — `main`, the `asciigen` command, and
  `calculate_dimensions`.

## What it does not do

The footer of the full-screen display mentions `p` to pause, but pausing
is not implemented; only `q` has an effect. Output is plain grayscale: there
is no colour ASCII art.
"""Command-line entry point: turn an image into ASCII art by genetic search."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Optional, Sequence

import numpy as np

from .ascii_generator import AsciiGenerator
from .genetic_algorithm import EvolutionStats, GeneticAlgorithm
from .image_processor import ImageProcessor
from .ui import CursesUI

MIN_POPULATION = 20
MAX_POPULATION = 1000


def calculate_dimensions(
    img_width: int, img_height: int, width: Optional[int], height: Optional[int]
) -> tuple[int, int]:
    """Grid size in characters for an image, given exactly one of width or height.

    Characters are about twice as tall as wide, which the result accounts for.
    """
    if (width is None) == (height is None):
        raise ValueError("exactly one of width or height must be given")
    aspect_ratio = np.float32(img_width) / np.float32(img_height)
    if width is not None:
        rows = int(np.float32(width) / aspect_ratio * np.float32(0.5))
        return width, max(rows, 1)
    cols = int(np.float32(height) * aspect_ratio * np.float32(2.0))
    return max(cols, 1), height


def _single_char(value: str) -> str:
    if len(value) != 1:
        raise argparse.ArgumentTypeError("expected a single character")
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="asciigen",
        description="Generate ASCII art from images using genetic algorithms",
    )
    parser.add_argument("input", type=Path, help="Input image file path")
    parser.add_argument("-w", "--width", type=int, help="Width in characters")
    parser.add_argument("-H", "--height", type=int, help="Height in characters")
    parser.add_argument(
        "-g", "--generations", type=int, default=100,
        help="Number of generations (0 = continuous mode)",
    )
    parser.add_argument(
        "-j", "--jobs", type=int, default=4,
        help="Number of threads for parallel fitness evaluation",
    )
    parser.add_argument(
        "-i", "--init-char", type=_single_char, default=None,
        help="Character to initialize art buffers with (95%% of characters, 5%% random)",
    )
    parser.add_argument("-o", "--output", type=Path, help="Output file path (optional)")
    parser.add_argument(
        "-d", "--debug", action="store_true",
        help="Save debug images (converted input and final ASCII art as PNG files)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Verbose output: display fittest ASCII art after each progress update",
    )
    parser.add_argument(
        "-W", "--white-background", action="store_true",
        help="Use white background (default is black background with white characters)",
    )
    parser.add_argument(
        "-s", "--status-interval", type=float, default=1.0,
        help="Status update interval in seconds",
    )
    parser.add_argument(
        "-p", "--population", type=int, default=80, help="Population size (20-1000)"
    )
    parser.add_argument(
        "--no-ui", action="store_true",
        help="Disable interactive curses UI and use console output instead",
    )
    return parser


def _validate(args: argparse.Namespace) -> Optional[str]:
    if args.width is None and args.height is None:
        return "Must specify either width or height"
    if args.width is not None and args.height is not None:
        return "Specify only width OR height, not both"
    if not MIN_POPULATION <= args.population <= MAX_POPULATION:
        return f"Population size must be between {MIN_POPULATION} and {MAX_POPULATION}"
    return None


def _evolve_with_ui(ga: GeneticAlgorithm, args: argparse.Namespace):
    try:
        ui = CursesUI()
    except RuntimeError as exc:
        print(
            f"Failed to initialize curses UI: {exc}. Falling back to console output.",
            file=sys.stderr,
        )
        return ga.evolve(args.generations, args.verbose, args.status_interval, None)

    with ui:
        def on_progress(stats: EvolutionStats) -> bool:
            ui.update(stats)
            key = ui.check_input()
            return key not in ("q", "Q")

        result = ga.evolve(
            args.generations, args.verbose, args.status_interval, on_progress
        )
        ui.show_message("Evolution complete! Press any key to continue...")
        ui.check_input()
    return result


def _run(args: argparse.Namespace) -> None:
    print(f'Loading image: "{args.input}"')
    processor = ImageProcessor()
    original = processor.load_image(args.input)
    print(f"Input image size: {original.width}x{original.height}")

    target_width, target_height = calculate_dimensions(
        original.width, original.height, args.width, args.height
    )
    print(f"Target ASCII dimensions: {target_width}x{target_height}")

    ascii_gen = AsciiGenerator()
    char_width, char_height = ascii_gen.char_dimensions()
    pixel_width = target_width * char_width
    pixel_height = target_height * char_height
    print(f"Character dimensions: {char_width}x{char_height}")
    print(f"Target pixel dimensions: {pixel_width}x{pixel_height}")

    target = processor.prepare_target_image(original, pixel_width, pixel_height)
    print(f"Post-processed input image size: {target.width}x{target.height}")

    ga = GeneticAlgorithm(
        target_width,
        target_height,
        args.population,
        ascii_gen,
        target,
        args.jobs,
        args.init_char,
        args.white_background,
    )

    if args.generations == 0:
        print(
            "Running genetic algorithm in continuous mode with population size "
            f"{args.population} (press 'q' in UI to stop)..."
        )
    else:
        print(
            f"Running genetic algorithm for {args.generations} generations "
            f"with population size {args.population}..."
        )

    if args.no_ui:
        best, total_elapsed = ga.evolve(
            args.generations, args.verbose, args.status_interval, None
        )
    else:
        best, total_elapsed = _evolve_with_ui(ga, args)

    output_image = ascii_gen.generate_ascii_image(best.chars, target_width, target_height)
    print(f"Output ASCII image buffer size: {output_image.width}x{output_image.height}")

    ascii_art = ascii_gen.individual_to_string(best, target_width)
    print(
        f"\nBest ASCII art ({target_width}x{target_height} characters, "
        f"fitness: {best.fitness * 100.0:.2f}%, elapsed: {total_elapsed:.1f}s):\n{ascii_art}"
    )

    if args.output is not None:
        args.output.write_text(ascii_art, encoding="latin-1")
        print(f'ASCII art saved to: "{args.output}"')

    if args.debug:
        stem = args.input.stem
        input_debug_path = f"debug_input_{stem}.png"
        target.save(input_debug_path)
        print(f"Debug input image saved to: {input_debug_path}")

        ascii_image = ascii_gen.generate_ascii_image_with_background(
            best.chars, target_width, target_height, args.white_background
        )
        ascii_debug_path = f"debug_ascii_{stem}.png"
        ascii_image.save(ascii_debug_path)
        print(f"Debug ASCII image saved to: {ascii_debug_path}")


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the command line; returns the process exit status."""
    args = _build_parser().parse_args(argv)

    problem = _validate(args)
    if problem is not None:
        print(f"Error: {problem}", file=sys.stderr)
        return 1

    try:
        _run(args)
    except (OSError, ValueError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
"""Genetic search for the character grid whose rendering best matches a target image."""

from __future__ import annotations

import random as _random
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from operator import attrgetter
from typing import Callable, Optional, Union

import numpy as np

from .ascii_generator import AsciiGenerator
from .individual import Individual

BLACK_BACKGROUND_THRESHOLD = 50
WHITE_BACKGROUND_THRESHOLD = 200
MATCH_TOLERANCE = 30
FALSE_POSITIVE_PENALTY = 0.005
TOURNAMENT_SIZE = 3
DEFAULT_MUTATION_RATE = 0.01
DEFAULT_CROSSOVER_RATE = 0.8


@dataclass(frozen=True)
class EvolutionStats:
    """Progress report handed to the UI callback during evolution."""

    generation: int
    total_generations: int
    best_fitness: float
    elapsed_time: float
    population_size: int
    thread_count: int
    width: int
    height: int
    ascii_art: Optional[str] = None


UICallback = Callable[[EvolutionStats], bool]


def count_non_background_pixels(
    target_image, background_threshold: int, white_background: bool
) -> float:
    """Count pixels darker (white mode) or brighter (black mode) than the threshold."""
    pixels = np.asarray(target_image, dtype=np.uint8)
    if white_background:
        mask = pixels < background_threshold
    else:
        mask = pixels > background_threshold
    return float(np.count_nonzero(mask))


def _copy(individual: Individual) -> Individual:
    return Individual(bytearray(individual.chars), individual.fitness)


class GeneticAlgorithm:
    """Evolves a population of character grids towards a grayscale target image."""

    def __init__(
        self,
        width: int,
        height: int,
        population_size: int,
        ascii_generator: AsciiGenerator,
        target_image,
        thread_count: int = 1,
        init_char: Optional[Union[str, int]] = None,
        white_background: bool = False,
    ):
        if width <= 0 or height <= 0:
            raise ValueError("grid width and height must be positive")
        if population_size < 1:
            raise ValueError("population size must be at least 1")
        if thread_count < 0:
            raise ValueError("thread count must not be negative")

        self.width = width
        self.height = height
        self.population_size = population_size
        self.ascii_generator = ascii_generator
        self.target = np.asarray(target_image, dtype=np.uint8)
        self.thread_count = thread_count
        self.mutation_rate = DEFAULT_MUTATION_RATE
        self.crossover_rate = DEFAULT_CROSSOVER_RATE
        self.elite_size = population_size // 10

        self.background_threshold = (
            WHITE_BACKGROUND_THRESHOLD if white_background else BLACK_BACKGROUND_THRESHOLD
        )
        self.total_non_background_pixels = count_non_background_pixels(
            self.target, self.background_threshold, white_background
        )
        total_pixels = float(self.target.size)
        self.background_prob = (
            (total_pixels - self.total_non_background_pixels) / total_pixels
            if total_pixels
            else 0.0
        )

        size = width * height
        if init_char is None:
            self.population = [
                Individual.random(size, self.background_prob)
                for _ in range(population_size)
            ]
        else:
            self.population = [
                Individual.with_init_char(size, init_char) for _ in range(population_size)
            ]

        print(
            f"Background threshold: {self.background_threshold}, "
            f"Total non-background pixels: {self.total_non_background_pixels:g}, "
            f"Background probability: {self.background_prob * 100.0:.1f}%"
        )

    def evolve(
        self,
        generations: int,
        verbose: bool = False,
        status_interval: float = 1.0,
        ui_callback: Optional[UICallback] = None,
    ) -> tuple[Individual, float]:
        """Run the search and return the best individual and the time taken.

        With ``generations`` equal to 0 the search runs until the callback
        returns False (or forever without one).
        """
        start = time.monotonic()
        last_update = start
        continuous = generations == 0
        generation = 0

        while continuous or generation < generations:
            self.evaluate_population()

            now = time.monotonic()
            if now - last_update >= status_interval:
                best = self.population[0]
                elapsed = now - start
                art = (
                    self.ascii_generator.individual_to_string(best, self.width)
                    if verbose or ui_callback is not None
                    else None
                )

                if ui_callback is not None:
                    stats = EvolutionStats(
                        generation=generation,
                        total_generations=generations,
                        best_fitness=best.fitness,
                        elapsed_time=elapsed,
                        population_size=self.population_size,
                        thread_count=self.thread_count,
                        width=self.width,
                        height=self.height,
                        ascii_art=art,
                    )
                    if not ui_callback(stats):
                        print("Evolution stopped by user")
                        break
                else:
                    suffix = " [Continuous mode - press Ctrl+C to stop]" if continuous else ""
                    print(
                        f"Generation {generation}: Best fitness = "
                        f"{best.fitness * 100.0:.2f}% (elapsed: {elapsed:.1f}s){suffix}"
                    )
                    if verbose and art is not None:
                        print(f"Current best ASCII art:\n{art}\n")

                last_update = now

            self.create_new_generation()
            generation += 1

        self.evaluate_population()
        total_elapsed = time.monotonic() - start
        final_generation = (generation if continuous else generations) - 1
        print(
            f"Final generation {final_generation}: Best fitness = "
            f"{self.population[0].fitness * 100.0:.2f}% (total time: {total_elapsed:.1f}s)"
        )
        return _copy(self.population[0]), total_elapsed

    def evaluate_population(self) -> None:
        """Score every individual and sort the population best first."""
        chars_list = [bytes(individual.chars) for individual in self.population]
        if self.thread_count == 1 or len(chars_list) <= 1:
            scores = [self.calculate_fitness(chars) for chars in chars_list]
        else:
            workers = self.thread_count or None
            with ThreadPoolExecutor(max_workers=workers) as pool:
                scores = list(pool.map(self.calculate_fitness, chars_list))

        for individual, score in zip(self.population, scores):
            individual.fitness = score
        self.population.sort(key=attrgetter("fitness"), reverse=True)

    def calculate_fitness(self, chars) -> float:
        """Share of lit target pixels matched by the rendered ``chars``, never below 0."""
        rendered = np.asarray(
            self.ascii_generator.generate_ascii_image(chars, self.width, self.height),
            dtype=np.uint8,
        )
        if self.total_non_background_pixels == 0.0:
            return 0.0

        rows = min(rendered.shape[0], self.target.shape[0])
        cols = min(rendered.shape[1], self.target.shape[1])
        ascii_px = rendered[:rows, :cols].astype(np.int32)
        target_px = self.target[:rows, :cols].astype(np.int32)

        threshold = self.background_threshold
        target_lit = target_px > threshold
        ascii_lit = ascii_px > threshold
        close = np.abs(ascii_px - target_px) < MATCH_TOLERANCE

        matches = np.count_nonzero(target_lit & close)
        false_positives = np.count_nonzero(~target_lit & ascii_lit)
        score = matches - FALSE_POSITIVE_PENALTY * false_positives
        return max(score / self.total_non_background_pixels, 0.0)

    def create_new_generation(self) -> None:
        """Replace the population with the elite plus mutated offspring."""
        new_population = [_copy(ind) for ind in self.population[: self.elite_size]]

        while len(new_population) < self.population_size:
            first_parent = self.tournament_selection()
            second_parent = self.tournament_selection()
            first_child, second_child = first_parent.crossover(
                second_parent, self.crossover_rate
            )
            first_child.mutate(self.mutation_rate, self.background_prob)
            second_child.mutate(self.mutation_rate, self.background_prob)

            new_population.append(first_child)
            if len(new_population) < self.population_size:
                new_population.append(second_child)

        self.population = new_population

    def tournament_selection(self) -> Individual:
        """Pick the fittest of three randomly drawn individuals (a copy)."""
        best = _random.choice(self.population)
        for _ in range(TOURNAMENT_SIZE - 1):
            candidate = _random.choice(self.population)
            if candidate.fitness > best.fitness:
                best = candidate
        return _copy(best)
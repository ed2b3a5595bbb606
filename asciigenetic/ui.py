"""Interactive curses display of the genetic search's progress."""

from __future__ import annotations

import curses
import time
from typing import Optional

from .genetic_algorithm import EvolutionStats

PAIR_GOOD = 1
PAIR_WARN = 2
PAIR_BAD = 3
PAIR_HEADER = 4
PAIR_NORMAL = 5

TITLE = "ASCIIGen - Genetic Algorithm ASCII Art Generator"
RULE = "=" * len(TITLE)
STATS_ROW = 3
BAR_ROW = 9
BAR_LEFT = 11
BAR_WIDTH = 60
ART_ROW = 11


def generations_per_second(
    current_generation: int, start_time: float, last_update_time: float
) -> float:
    """Average generation rate between two monotonic timestamps; 0.0 when undefined."""
    if current_generation == 0:
        return 0.0
    elapsed = last_update_time - start_time
    if elapsed > 0.0:
        return current_generation / elapsed
    return 0.0


def _level_pair(value: float, low: float, high: float) -> int:
    """Red below ``low``, yellow below ``high``, green otherwise."""
    if value < low:
        return PAIR_BAD
    if value < high:
        return PAIR_WARN
    return PAIR_GOOD


class CursesUI:
    """Full-screen terminal view of generation, fitness and the current best art."""

    def __init__(self):
        try:
            self._screen = curses.initscr()
        except curses.error as exc:
            raise RuntimeError("Failed to initialize curses") from exc

        self._closed = False
        curses.cbreak()
        curses.noecho()
        try:
            curses.curs_set(0)
        except curses.error:
            pass
        self._screen.timeout(0)

        self._colors = bool(curses.has_colors())
        if self._colors:
            curses.start_color()
            curses.init_pair(PAIR_GOOD, curses.COLOR_GREEN, curses.COLOR_BLACK)
            curses.init_pair(PAIR_WARN, curses.COLOR_YELLOW, curses.COLOR_BLACK)
            curses.init_pair(PAIR_BAD, curses.COLOR_RED, curses.COLOR_BLACK)
            curses.init_pair(PAIR_HEADER, curses.COLOR_CYAN, curses.COLOR_BLACK)
            curses.init_pair(PAIR_NORMAL, curses.COLOR_WHITE, curses.COLOR_BLACK)

        self._screen.clear()
        self._screen.refresh()

        self.start_time = time.monotonic()
        self.last_update_time = self.start_time
        self.last_generation = 0

    def __enter__(self) -> "CursesUI":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _attr(self, pair: int) -> int:
        return curses.color_pair(pair) if self._colors else 0

    def _put(self, y: int, x: int, text: str, pair: int = PAIR_NORMAL) -> None:
        if y < 0 or x < 0:
            return
        try:
            self._screen.addstr(y, x, text, self._attr(pair))
        except curses.error:
            pass

    def update(self, stats: EvolutionStats) -> None:
        """Redraw the whole screen from ``stats``."""
        self.last_generation = stats.generation
        self.last_update_time = time.monotonic()

        self._screen.clear()
        self._draw_header()
        self._draw_stats(stats)
        if stats.total_generations == 0:
            self._draw_bar(stats.best_fitness, "Fitness:  [", "=", ".",
                           _level_pair(stats.best_fitness, 0.3, 0.7))
        else:
            self._draw_bar(stats.generation / stats.total_generations,
                           "Progress: [", "#", "-", PAIR_GOOD)
        if stats.ascii_art is not None:
            self._draw_ascii_art(stats.ascii_art)
        self._draw_footer()
        self._screen.refresh()

    def _draw_header(self) -> None:
        self._put(0, 0, TITLE, PAIR_HEADER)
        self._put(1, 0, RULE, PAIR_HEADER)

    def _draw_stats(self, stats: EvolutionStats) -> None:
        y = STATS_ROW
        continuous = stats.total_generations == 0

        self._put(y, 0, "Generation:")
        if continuous:
            self._put(y, 15, f"{stats.generation} (continuous)", PAIR_GOOD)
            progress = stats.best_fitness * 100.0
            self._put(y, 35, "Fitness:")
        else:
            self._put(y, 15, f"{stats.generation}/{stats.total_generations}", PAIR_GOOD)
            progress = stats.generation / stats.total_generations * 100.0
            self._put(y, 35, "Progress:")
        self._put(y, 45, f"{progress:.1f}%", _level_pair(progress, 25.0, 75.0))

        self._put(y + 1, 0, "Best Fitness:")
        self._put(y + 1, 15, f"{stats.best_fitness * 100.0:.2f}%",
                  _level_pair(stats.best_fitness, 0.3, 0.7))
        self._put(y + 1, 35, "Population:")
        self._put(y + 1, 47, str(stats.population_size), PAIR_GOOD)

        self._put(y + 2, 0, "Elapsed Time:")
        self._put(y + 2, 15, f"{stats.elapsed_time:.1f}s", PAIR_GOOD)
        self._put(y + 2, 35, "Threads:")
        self._put(y + 2, 44, str(stats.thread_count), PAIR_GOOD)

        rate = generations_per_second(
            stats.generation, self.start_time, self.last_update_time
        )
        self._put(y + 2, 55, "Gen/s:")
        self._put(y + 2, 62, f"{rate:.2f}", PAIR_GOOD)

        self._put(y + 3, 0, "ASCII Size:")
        self._put(y + 3, 15, f"{stats.width}x{stats.height} chars", PAIR_GOOD)

        if not continuous and stats.generation > 0 and rate > 0.0:
            remaining = stats.total_generations - stats.generation
            self._put(y + 3, 35, "ETA:")
            self._put(y + 3, 40, f"{remaining / rate:.1f}s", PAIR_WARN)
        elif continuous:
            self._put(y + 3, 35, "Press 'q' to stop", PAIR_HEADER)

    def _draw_bar(self, fraction: float, label: str, full: str, empty: str,
                  fill_pair: int) -> None:
        filled = max(0, int(BAR_WIDTH * fraction))
        self._put(BAR_ROW, 0, label)
        if filled:
            self._put(BAR_ROW, BAR_LEFT, full * filled, fill_pair)
        if filled < BAR_WIDTH:
            self._put(BAR_ROW, BAR_LEFT + filled, empty * (BAR_WIDTH - filled))
        self._put(BAR_ROW, BAR_LEFT + BAR_WIDTH, "]")

    def _draw_ascii_art(self, art: str) -> None:
        max_y, max_x = self._screen.getmaxyx()
        self._put(ART_ROW, 0, "Current Best ASCII Art:", PAIR_HEADER)
        limit = max(max_x - 1, 0)
        for offset, line in enumerate(art.splitlines()):
            y = ART_ROW + 2 + offset
            if y < max_y - 3:
                self._put(y, 0, line[:limit])

    def _draw_footer(self) -> None:
        max_y, _ = self._screen.getmaxyx()
        self._put(max_y - 2, 0, "Controls: 'q' to quit, 'p' to pause/resume", PAIR_HEADER)
        self._put(max_y - 1, 0, "Press any key to continue...", PAIR_HEADER)

    def check_input(self) -> Optional[str]:
        """Return a pending key as a character, or None when no key is waiting."""
        key = self._screen.getch()
        if key == -1:
            return None
        return chr(key & 0xFF)

    def show_message(self, message: str) -> None:
        """Show ``message`` just above the footer."""
        max_y, _ = self._screen.getmaxyx()
        self._put(max_y - 3, 0, message, PAIR_WARN)
        self._screen.refresh()

    def close(self) -> None:
        """Restore the terminal; safe to call more than once."""
        if not self._closed:
            self._closed = True
            curses.endwin()
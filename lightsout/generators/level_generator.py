"""
Random level generator for Lights Out.

Levels are scrambled from the solved board with random presses. Every press
is its own inverse, so the scramble sequence replayed on the result is always
a solution and no solver is needed.
"""

import random
from dataclasses import dataclass
from typing import List, Optional

import config
from ..core.grid import Grid, Coordinate, create_solved, toggle, is_win
from ..core.utils import setup_logger, timer


class LevelGeneratorConfig:
    """Configuration for the level generator"""

    def __init__(self, **kwargs):
        self.difficulty_factor: int = kwargs.get('difficulty_factor', config.DIFFICULTY_FACTOR)
        self.difficulty_jitter: int = kwargs.get('difficulty_jitter', config.DIFFICULTY_JITTER)
        self.random_seed: Optional[int] = kwargs.get('random_seed', None)
        self.log_level: str = kwargs.get('log_level', config.LOG_LEVEL)


@dataclass
class GeneratedLevel:
    """A scrambled board and the presses that produced it"""
    grid: Grid
    toggles: List[Coordinate]

    @property
    def difficulty(self) -> int:
        return len(self.toggles)


class LevelGenerator:
    """Generate solvable Lights Out levels"""

    def __init__(self, config: Optional[LevelGeneratorConfig] = None,
                 rng: Optional[random.Random] = None):
        self.config = config or LevelGeneratorConfig()
        self.logger = setup_logger(self.__class__.__name__, level=self.config.log_level)
        self.rng = rng or random.Random(self.config.random_seed)

    def difficulty_for(self, size: int) -> int:
        """Default number of scramble presses for a board: proportional to its area"""
        jitter = self.rng.randint(0, self.config.difficulty_jitter) if self.config.difficulty_jitter > 0 else 0
        return self.config.difficulty_factor * size * size + jitter

    @timer
    def generate(self, size: int, difficulty: Optional[int] = None) -> Optional[GeneratedLevel]:
        """
        Generate a level.

        Args:
            size: Board size N (N x N)
            difficulty: Number of random presses; defaults to difficulty_for(size)

        Returns:
            GeneratedLevel whose grid is never already solved, or None when
            size is below 1 and there is no board to scramble
        """
        if size < 1:
            self.logger.debug(f"No board of size {size}, nothing generated")
            return None

        if difficulty is None:
            difficulty = self.difficulty_for(size)
        if difficulty < 0:
            raise ValueError(f"Difficulty must be non-negative, got {difficulty}")

        self.logger.debug(f"Generating {size}x{size} level with {difficulty} presses")

        grid = create_solved(size)
        toggles: List[Coordinate] = []
        for _ in range(difficulty):
            grid = self._press_random(grid, toggles)

        # Presses can cancel out; never hand back a solved board
        if is_win(grid):
            self.logger.info(f"Scramble of {size}x{size} cancelled out, applying one extra press")
            grid = self._press_random(grid, toggles)

        return GeneratedLevel(grid, toggles)

    def _press_random(self, grid: Grid, toggles: List[Coordinate]) -> Grid:
        row = self.rng.randrange(grid.size)
        col = self.rng.randrange(grid.size)
        toggles.append((row, col))
        return toggle(grid, row, col)


def generate_random(n: int, difficulty: int, rng: Optional[random.Random] = None) -> Optional[Grid]:
    """
    Scramble a solved n x n board with `difficulty` random presses.

    Args:
        n: Board size
        difficulty: Number of random presses
        rng: Optional random source for reproducible levels

    Returns:
        A solvable, not-yet-solved grid, or None when n < 1
    """
    level = LevelGenerator(rng=rng).generate(n, difficulty)
    return level.grid if level is not None else None

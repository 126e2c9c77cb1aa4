import random

import pytest

from lightsout.core.grid import Grid, create_solved, is_win, apply_toggles
from lightsout.generators.level_generator import (
    LevelGenerator, LevelGeneratorConfig, generate_random
)


def test_generated_level_is_never_solved():
    for seed in range(20):
        generator = LevelGenerator(rng=random.Random(seed))
        for n in range(1, 6):
            for difficulty in range(0, 8):
                level = generator.generate(n, difficulty)
                assert not is_win(level.grid)


def test_generated_level_is_solvable_by_replaying_presses():
    generator = LevelGenerator(LevelGeneratorConfig(random_seed=3))
    for n in (1, 2, 3, 5, 8):
        level = generator.generate(n)
        assert apply_toggles(level.grid, reversed(level.toggles)) == create_solved(n)
        assert apply_toggles(create_solved(n), level.toggles) == level.grid


def test_zero_difficulty_gets_one_corrective_press():
    level = LevelGenerator(rng=random.Random(0)).generate(3, 0)
    assert level.difficulty == 1
    assert not is_win(level.grid)


def test_cancelling_presses_are_corrected():
    # Two presses on a 1x1 board always cancel
    level = LevelGenerator(rng=random.Random(1)).generate(1, 2)
    assert level.difficulty == 3
    assert level.grid.off_cells() == [(0, 0)]


def test_same_seed_same_level():
    a = LevelGenerator(LevelGeneratorConfig(random_seed=42)).generate(6)
    b = LevelGenerator(LevelGeneratorConfig(random_seed=42)).generate(6)
    assert a.grid == b.grid
    assert a.toggles == b.toggles


def test_presses_are_in_range():
    level = LevelGenerator(rng=random.Random(9)).generate(4, 200)
    assert all(0 <= r < 4 and 0 <= c < 4 for r, c in level.toggles)


def test_default_difficulty_scales_with_area():
    generator = LevelGenerator(LevelGeneratorConfig(difficulty_factor=3, difficulty_jitter=5,
                                                    random_seed=1))
    for n in (3, 5, 10):
        difficulty = generator.difficulty_for(n)
        assert 3 * n * n <= difficulty <= 3 * n * n + 5

    no_jitter = LevelGenerator(LevelGeneratorConfig(difficulty_factor=2, difficulty_jitter=0))
    assert no_jitter.difficulty_for(4) == 32


def test_negative_difficulty_rejected():
    with pytest.raises(ValueError):
        LevelGenerator().generate(3, -1)


def test_generate_random_function():
    grid = generate_random(5, 75, rng=random.Random(11))
    assert isinstance(grid, Grid)
    assert grid.size == 5
    assert not is_win(grid)
    assert generate_random(5, 75, rng=random.Random(11)) == grid


def test_no_board_below_one_generates_nothing():
    assert generate_random(0, 5) is None
    assert generate_random(-2, 0, rng=random.Random(1)) is None
    assert LevelGenerator(rng=random.Random(0)).generate(0) is None

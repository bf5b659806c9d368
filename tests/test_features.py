import random

import pytest

from symbolnet.features import (
    create_features,
    horizontal_feature,
    left_slope_feature,
    right_slope_feature,
    vertical_feature,
)

SIZE = 8


def empty_grid():
    return [[0.0] * SIZE for _ in range(SIZE)]


def random_grid(seed):
    rng = random.Random(seed)
    return [[float(rng.random() < 0.5) for _ in range(SIZE)] for _ in range(SIZE)]


def transpose(grid):
    return [list(col) for col in zip(*grid)]


def test_empty_grid_has_no_features():
    assert create_features(empty_grid()) == [0.0, 0.0, 0.0, 0.0]


def test_isolated_pixels_form_no_runs():
    grid = empty_grid()
    for y in range(0, SIZE, 2):
        for x in range(0, SIZE, 2):
            grid[y][x] = 1.0
    assert create_features(grid) == [0.0, 0.0, 0.0, 0.0]


def test_single_row_counts_one_vertical_run():
    grid = empty_grid()
    grid[3] = [1.0] * SIZE
    assert vertical_feature(grid) == 1
    assert horizontal_feature(grid) == 0
    assert right_slope_feature(grid) == 0
    assert left_slope_feature(grid) == 0


def test_anti_diagonal_counts_one_right_slope_run():
    grid = empty_grid()
    for y in range(SIZE):
        grid[y][SIZE - 1 - y] = 1.0
    assert right_slope_feature(grid) == 1
    assert left_slope_feature(grid) == 0
    assert vertical_feature(grid) == 0
    assert horizontal_feature(grid) == 0


def test_main_diagonal_is_scanned_twice_by_left_slope():
    grid = empty_grid()
    for y in range(SIZE):
        grid[y][y] = 1.0
    assert left_slope_feature(grid) == 2
    assert right_slope_feature(grid) == 0


def test_bottom_right_corner_diagonal_is_not_scanned():
    grid = empty_grid()
    grid[SIZE - 2][SIZE - 1] = 1.0
    grid[SIZE - 1][SIZE - 2] = 1.0
    assert right_slope_feature(grid) == 0


@pytest.mark.parametrize("seed", range(10))
def test_transposition_swaps_rows_and_columns(seed):
    grid = random_grid(seed)
    assert vertical_feature(grid) == horizontal_feature(transpose(grid))
    assert horizontal_feature(grid) == vertical_feature(transpose(grid))


@pytest.mark.parametrize("seed", range(5))
def test_create_features_collects_each_feature(seed):
    grid = random_grid(seed)
    assert create_features(grid) == [
        vertical_feature(grid),
        horizontal_feature(grid),
        right_slope_feature(grid),
        left_slope_feature(grid),
    ]


@pytest.mark.parametrize("seed", range(5))
def test_features_ignore_values_other_than_one(seed):
    grid = random_grid(seed)
    dimmed = [[0.5 if cell == 0.0 else cell for cell in row] for row in grid]
    assert create_features(dimmed) == create_features(grid)
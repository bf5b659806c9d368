"""Line-segment features extracted from a square binary pixel grid.

Each feature counts the runs of two or more consecutive lit pixels
(cells equal to 1.0) along one family of lines through the grid.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

Grid = Sequence[Sequence[float]]


def _count_runs(cells: Iterable[float]) -> int:
    """Count the runs of at least two consecutive lit cells."""
    runs = 0
    length = 0
    for cell in cells:
        if cell == 1.0:
            length += 1
        else:
            if length > 1:
                runs += 1
            length = 0
    if length > 1:
        runs += 1
    return runs


def _right_slope_line(grid: Grid, start: int):
    """Yield cells of the up-right diagonal numbered ``start``."""
    size = len(grid)
    y = start if start < size else size - 1
    x = 0 if start < size else start - size + 1
    while 0 <= y < size and x < size:
        yield grid[y][x]
        y -= 1
        x += 1


def _left_slope_line(grid: Grid, start: int):
    """Yield cells of the up-left diagonal numbered ``start``."""
    size = len(grid)
    y = start if start < size else size - 1
    x = size - 1 if start < size else 2 * size - 1 - start
    while 0 <= y < size and 0 <= x < size:
        yield grid[y][x]
        y -= 1
        x -= 1


def vertical_feature(grid: Grid) -> int:
    """Count runs of lit pixels along each row of the grid."""
    size = len(grid)
    return sum(_count_runs(row[:size]) for row in grid)


def horizontal_feature(grid: Grid) -> int:
    """Count runs of lit pixels along each column of the grid."""
    size = len(grid)
    return sum(
        _count_runs(row[col] for row in grid) for col in range(size)
    )


def right_slope_feature(grid: Grid) -> int:
    """Count runs of lit pixels along the rising (up-right) diagonals.

    The two diagonals nearest the bottom-right corner are not scanned.
    """
    size = len(grid)
    return sum(
        _count_runs(_right_slope_line(grid, start))
        for start in range(max(0, 2 * size - 3))
    )


def left_slope_feature(grid: Grid) -> int:
    """Count runs of lit pixels along the up-left diagonals.

    The main diagonal is scanned twice, and the diagonals that start in
    the three leftmost cells of the bottom row are not scanned.
    """
    size = len(grid)
    return sum(
        _count_runs(_left_slope_line(grid, start))
        for start in range(max(0, 2 * size - 3))
    )


def create_features(grid: Grid) -> list[float]:
    """Return the four line features of ``grid`` as floats."""
    return [
        float(vertical_feature(grid)),
        float(horizontal_feature(grid)),
        float(right_slope_feature(grid)),
        float(left_slope_feature(grid)),
    ]
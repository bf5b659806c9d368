"""A square grid of on/off pixels that a symbol is drawn on."""

from __future__ import annotations


class PixelGrid:
    """An ``size`` x ``size`` grid of pixels, all off to start with."""

    def __init__(self, size: int = 8) -> None:
        if size < 1:
            raise ValueError("grid size must be positive")
        self.size = size
        self._cells = [[False] * size for _ in range(size)]

    def _check(self, row: int, col: int) -> None:
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise IndexError(f"pixel ({row}, {col}) is outside a {self.size}x{self.size} grid")

    def toggle(self, row: int, col: int) -> int:
        """Flip one pixel and return its new value."""
        self._check(row, col)
        self._cells[row][col] = not self._cells[row][col]
        return self.value(row, col)

    def value(self, row: int, col: int) -> int:
        """Return 1 for a lit pixel and 0 otherwise."""
        self._check(row, col)
        return int(self._cells[row][col])

    def clear(self) -> None:
        """Turn every pixel off."""
        for row in self._cells:
            row[:] = [False] * self.size

    def rows(self) -> list[list[float]]:
        """Return the grid as rows of 0.0 and 1.0."""
        return [[float(cell) for cell in row] for row in self._cells]

    def to_string(self) -> str:
        """Return the pixel values row by row, each followed by a space."""
        return "".join(f"{int(cell)} " for row in self._cells for cell in row)
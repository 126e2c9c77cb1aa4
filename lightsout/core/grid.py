"""
Core grid data structure and toggle rules for Lights Out.
"""

from typing import Iterable, List, Optional, Sequence, Tuple
import numpy as np


Coordinate = Tuple[int, int]
ToggleSet = Sequence[Coordinate]

# Target cell plus its four orthogonal neighbours
TOGGLE_OFFSETS: Tuple[Coordinate, ...] = ((0, 0), (-1, 0), (1, 0), (0, -1), (0, 1))


class Grid:
    """Immutable N x N board of lights (True = on)"""

    __slots__ = ('_cells',)

    def __init__(self, cells: np.ndarray):
        """
        Wrap a square boolean array.

        Args:
            cells: 2D array; it is copied and frozen, so later changes to
                the caller's array do not leak into the grid
        """
        cells = np.array(cells, dtype=bool)
        if cells.ndim != 2 or cells.shape[0] != cells.shape[1] or cells.shape[0] < 1:
            raise ValueError(f"Grid must be a non-empty square matrix, got shape {cells.shape}")
        cells.flags.writeable = False
        self._cells = cells

    @property
    def size(self) -> int:
        return self._cells.shape[0]

    @property
    def cells(self) -> np.ndarray:
        """Read-only view of the underlying array"""
        return self._cells

    def cell(self, row: int, col: int) -> bool:
        self._check_bounds(row, col)
        return bool(self._cells[row, col])

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def _check_bounds(self, row: int, col: int):
        if not self.in_bounds(row, col):
            raise IndexError(f"Cell ({row}, {col}) is outside a {self.size}x{self.size} grid")

    def count_off(self) -> int:
        """Number of lights that are still off"""
        return int(self._cells.size - np.count_nonzero(self._cells))

    def off_cells(self) -> List[Coordinate]:
        return [(int(r), int(c)) for r, c in np.argwhere(~self._cells)]

    def to_list(self) -> List[List[bool]]:
        """Convert to nested lists (JSON friendly)"""
        return self._cells.tolist()

    @classmethod
    def from_list(cls, rows: Sequence[Sequence[bool]]) -> 'Grid':
        """Create a grid from nested lists, rejecting ragged or non-square input"""
        if not rows:
            raise ValueError("Grid must have at least one row")
        n = len(rows)
        for i, row in enumerate(rows):
            if len(row) != n:
                raise ValueError(f"Row {i} has length {len(row)}, expected {n}")
        return cls(np.array(rows, dtype=bool))

    def __eq__(self, other):
        if isinstance(other, Grid):
            return np.array_equal(self._cells, other._cells)
        return NotImplemented

    def __hash__(self):
        return hash((self.size, self._cells.tobytes()))

    def __str__(self):
        """String representation: 'O' for on, '.' for off"""
        return '\n'.join(''.join('O' if on else '.' for on in row) for row in self._cells)

    def __repr__(self):
        return f"Grid({self.size}x{self.size}, {self.count_off()} off)"


def create_solved(n: int) -> Optional[Grid]:
    """Create an n x n grid with every light on. There is no board below 1x1: returns None."""
    if n < 1:
        return None
    return Grid(np.ones((n, n), dtype=bool))


def toggle(grid: Grid, row: int, col: int) -> Grid:
    """
    Press a cell: flip it and every in-bounds orthogonal neighbour.

    Args:
        grid: Current grid (left untouched)
        row: Row of the pressed cell
        col: Column of the pressed cell

    Returns:
        A new grid with the flips applied

    Raises:
        IndexError: If (row, col) is outside the grid
    """
    grid._check_bounds(row, col)

    cells = grid.cells.copy()
    size = grid.size
    for dr, dc in TOGGLE_OFFSETS:
        r, c = row + dr, col + dc
        if 0 <= r < size and 0 <= c < size:
            cells[r, c] = not cells[r, c]

    return Grid(cells)


def is_win(grid: Grid) -> bool:
    """True when every light is on."""
    return bool(grid.cells.all())


def apply_toggles(grid: Grid, toggles: Iterable[Coordinate]) -> Grid:
    """Apply a sequence of presses in order."""
    for row, col in toggles:
        grid = toggle(grid, row, col)
    return grid

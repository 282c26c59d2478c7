"""Board representation for the polyomino playfield.

The board is a copy-on-write value: its numpy grid is read-only and every
operation that changes cells returns a new :class:`Board`.  A caller can keep
an old board as a snapshot (for rendering the previous frame, say) without any
risk of it changing underneath.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from .config import HEIGHT, WIDTH


Grid = NDArray[np.uint8]


def create_empty_grid(width: int = WIDTH, height: int = HEIGHT) -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((height, width), dtype=np.uint8)


class Board:
    """Grid of settled cells; ``0`` is empty and ``1`` is filled."""

    __slots__ = ("grid",)

    def __init__(self, width: int = WIDTH, height: int = HEIGHT, grid: Grid | None = None) -> None:
        if grid is None:
            grid = create_empty_grid(width, height)
        elif grid.shape != (height, width):
            raise ValueError(f"Grid shape {grid.shape} does not match {height}x{width}")
        grid = np.array(grid, dtype=np.uint8)
        grid.setflags(write=False)
        self.grid: Grid = grid

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Board":
        """Build a board from a list of rows of 0/1 values.

        Raises:
            ValueError: If the rows are empty or not all the same width.
        """

        if not rows or not rows[0]:
            raise ValueError("Board needs at least one row and one column")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise ValueError("Grid width mismatch")
        grid = (np.asarray(rows) != 0).astype(np.uint8)
        return cls(width, len(rows), grid)

    @property
    def width(self) -> int:
        return int(self.grid.shape[1])

    @property
    def height(self) -> int:
        return int(self.grid.shape[0])

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.height and 0 <= col < self.width

    def get_cell(self, row: int, col: int) -> int:
        """Safely return the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if self.in_bounds(row, col):
            return int(self.grid[row, col])
        raise IndexError("Cell out of bounds")

    def is_filled(self, row: int, col: int) -> bool:
        """Return ``True`` if the in-bounds cell at ``(row, col)`` is filled.

        Coordinates outside the board are reported as not filled; boundary
        handling belongs to the collision checks.
        """

        return self.in_bounds(row, col) and bool(self.grid[row, col])

    def with_cells(self, cells: Iterable[Tuple[int, int]], value: int = 1) -> "Board":
        """Return a copy with every in-bounds ``(x, y)`` cell set to ``value``.

        Cells outside the board are ignored.
        """

        grid = self.grid.copy()
        for x, y in cells:
            if self.in_bounds(y, x):
                grid[y, x] = np.uint8(value)
        return Board(self.width, self.height, grid)

    def full_rows(self) -> List[int]:
        """Return the indices of completely filled rows, top to bottom."""

        return [int(row) for row in np.flatnonzero(np.all(self.grid != 0, axis=1))]

    def clear_rows(self, rows: Sequence[int]) -> "Board":
        """Return a board with ``rows`` removed and empty rows added on top.

        The board is returned unchanged when ``rows`` is empty.
        """

        if not rows:
            return self
        keep = np.ones(self.height, dtype=bool)
        keep[list(rows)] = False
        cleared = self.height - int(np.count_nonzero(keep))
        new_rows = np.zeros((cleared, self.width), dtype=self.grid.dtype)
        return Board(self.width, self.height, np.vstack((new_rows, self.grid[keep])))

    def clear_full_rows(self) -> Tuple["Board", List[int]]:
        """Clear completed rows and return the new board and their indices."""

        rows = self.full_rows()
        return self.clear_rows(rows), rows

    def occupied_cells(self) -> List[Tuple[int, int]]:
        """Return ``(x, y)`` for every filled cell."""

        return [(int(col), int(row)) for row, col in np.argwhere(self.grid)]

    def to_rows(self) -> List[List[int]]:
        return self.grid.tolist()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self.grid.shape == other.grid.shape and bool(np.array_equal(self.grid, other.grid))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Board(width={self.width}, height={self.height}, filled={int(self.grid.sum())})"

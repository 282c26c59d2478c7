"""Polyomino piece definition and grid geometry.

A :class:`Piece` is an immutable polyomino drawn inside a small square grid
(4x4 by default).  All four clockwise rotation states are computed once when
the piece is built so the collision code can index them directly.  Grids are
numpy ``uint8`` arrays marked read-only; a piece shared between the engine and
a renderer can never be altered by either.
"""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from enum import Enum
from typing import List, Sequence, Tuple

import numpy as np
from numpy.typing import NDArray

from .config import DEFAULT_GENERATION_CONFIG, GenerationConfig


Grid = NDArray[np.uint8]
Cell = Tuple[int, int]  # (x, y)

ROTATION_COUNT = 4

# 4-neighbourhood used for growth and connectivity: up, right, down, left.
NEIGHBOUR_OFFSETS: Tuple[Cell, ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))


class RotationDirection(str, Enum):
    """Direction of a rotation request."""

    CLOCKWISE = "clockwise"
    COUNTERCLOCKWISE = "counterclockwise"


@dataclass(frozen=True)
class Position:
    """Board-relative coordinates of a piece's grid origin.

    ``x`` is the column and ``y`` the row; ``y`` grows downward and may be
    negative while a piece is above the visible board.
    """

    x: int
    y: int

    def shifted(self, dx: int, dy: int) -> "Position":
        return Position(self.x + dx, self.y + dy)


def freeze(grid: Sequence[Sequence[int]] | Grid) -> Grid:
    """Return a read-only ``uint8`` copy of ``grid``."""

    frozen = np.array(grid, dtype=np.uint8)
    frozen.setflags(write=False)
    return frozen


def rotate_grid(grid: Grid) -> Grid:
    """Return ``grid`` rotated 90 degrees clockwise.

    For an ``N x N`` grid the cell at ``(x, y)`` moves to ``(N - 1 - y, x)``.
    """

    return freeze(np.rot90(grid, k=-1))


def generate_rotations(grid: Grid) -> Tuple[Grid, ...]:
    """Return the 0, 90, 180 and 270 degree clockwise states of ``grid``."""

    rotations = [freeze(grid)]
    for _ in range(ROTATION_COUNT - 1):
        rotations.append(rotate_grid(rotations[-1]))
    return tuple(rotations)


def filled_cells(grid: Grid) -> List[Cell]:
    """Return the ``(x, y)`` coordinates of filled cells in row-major order."""

    return [(int(col), int(row)) for row, col in np.argwhere(grid)]


def is_connected(cells: Sequence[Cell]) -> bool:
    """Return ``True`` if ``cells`` form one 4-connected component.

    Diagonal contact does not count.  A flood fill is started from the first
    cell and must reach every other one.
    """

    if not cells:
        return False
    remaining = set(cells)
    start = cells[0]
    visited = {start}
    queue = deque([start])
    while queue:
        x, y = queue.popleft()
        for dx, dy in NEIGHBOUR_OFFSETS:
            neighbour = (x + dx, y + dy)
            if neighbour in remaining and neighbour not in visited:
                visited.add(neighbour)
                queue.append(neighbour)
    return len(visited) == len(remaining)


def bounding_box(grid: Grid) -> Tuple[int, int]:
    """Return ``(width, height)`` of the smallest rectangle around filled cells."""

    cells = filled_cells(grid)
    if not cells:
        return (0, 0)
    xs = [x for x, _ in cells]
    ys = [y for _, y in cells]
    return (max(xs) - min(xs) + 1, max(ys) - min(ys) + 1)


@dataclass(frozen=True, eq=False)
class Piece:
    """Immutable generated polyomino with its precomputed rotations."""

    id: str
    shape: Grid
    color: str
    size: int
    rotations: Tuple[Grid, ...]
    bounding_box: Tuple[int, int]

    @classmethod
    def from_grid(cls, piece_id: str, grid: Sequence[Sequence[int]] | Grid, color: str) -> "Piece":
        """Build a piece from its canonical grid, deriving the rest."""

        shape = freeze(grid)
        return cls(
            id=piece_id,
            shape=shape,
            color=color,
            size=int(np.count_nonzero(shape)),
            rotations=generate_rotations(shape),
            bounding_box=bounding_box(shape),
        )

    def grid(self, rotation: int) -> Grid:
        """Return the occupancy grid for ``rotation``.

        Raises:
            ValueError: If ``rotation`` is not a valid rotation index.
        """

        if not 0 <= rotation < len(self.rotations):
            raise ValueError(f"Invalid rotation index: {rotation}")
        return self.rotations[rotation]

    def cells(self, rotation: int) -> List[Cell]:
        """Return the relative ``(dx, dy)`` offsets of filled cells."""

        return filled_cells(self.grid(rotation))


def next_rotation(rotation: int, direction: RotationDirection) -> int:
    """Return the rotation index reached by turning once in ``direction``."""

    if direction == RotationDirection.CLOCKWISE:
        return (rotation + 1) % ROTATION_COUNT
    return (rotation + ROTATION_COUNT - 1) % ROTATION_COUNT


def validate_piece(piece: Piece, config: GenerationConfig = DEFAULT_GENERATION_CONFIG) -> bool:
    """Return ``True`` if ``piece`` satisfies the generation constraints."""

    if not config.min_size <= piece.size <= config.max_size:
        return False
    expected = (config.grid_size, config.grid_size)
    if piece.shape.shape != expected:
        return False
    if len(piece.rotations) != ROTATION_COUNT:
        return False
    for grid in piece.rotations:
        if grid.shape != expected:
            return False
        cells = filled_cells(grid)
        if len(cells) != piece.size or not is_connected(cells):
            return False
    return True

"""Geometric collision checks for pieces against the board.

Every function here is pure: it reads a piece, a position, a rotation index
and a board and reports whether the placement is legal.  Rows above the board
(``y < 0``) are legal so that pieces can spawn partially hidden.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple

from .board import Board
from .piece import Cell, Piece, Position


# Rows counted as the spawn area when checking for game over.
SPAWN_ROWS = 2


class CollisionType(str, Enum):
    NONE = "none"
    BOUNDARY = "boundary"
    PIECE = "piece"


class Direction(str, Enum):
    """Unit translations a piece may attempt."""

    LEFT = "left"
    RIGHT = "right"
    DOWN = "down"


DIRECTION_OFFSETS: Dict[Direction, Tuple[int, int]] = {
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
    Direction.DOWN: (0, 1),
}


@dataclass(frozen=True)
class CollisionResult:
    """Outcome of a collision check and the offending cell, if any."""

    type: CollisionType = CollisionType.NONE
    position: Optional[Position] = None

    @property
    def has_collision(self) -> bool:
        return self.type != CollisionType.NONE


NO_COLLISION = CollisionResult()


def piece_cells(piece: Piece, position: Position, rotation: int) -> List[Cell]:
    """Return the absolute ``(x, y)`` cells covered by ``piece``."""

    return [(position.x + dx, position.y + dy) for dx, dy in piece.cells(rotation)]


def check_boundary(cells: List[Cell], board: Board) -> CollisionResult:
    """Report the first cell outside the side walls or below the floor."""

    for x, y in cells:
        # Horizontal escape is always illegal, so columns are tested first.
        if x < 0 or x >= board.width or y >= board.height:
            return CollisionResult(CollisionType.BOUNDARY, Position(x, y))
    return NO_COLLISION


def check_overlap(cells: List[Cell], board: Board) -> CollisionResult:
    """Report the first in-bounds cell that is already filled on ``board``."""

    for x, y in cells:
        if board.is_filled(y, x):
            return CollisionResult(CollisionType.PIECE, Position(x, y))
    return NO_COLLISION


def check_collision(piece: Piece, position: Position, rotation: int, board: Board) -> CollisionResult:
    """Return how ``piece`` at ``position``/``rotation`` collides with ``board``.

    Boundary violations take precedence over overlaps with settled cells.
    """

    cells = piece_cells(piece, position, rotation)
    result = check_boundary(cells, board)
    if result.has_collision:
        return result
    return check_overlap(cells, board)


def can_place(piece: Piece, position: Position, rotation: int, board: Board) -> bool:
    return not check_collision(piece, position, rotation, board).has_collision


def can_move(
    piece: Piece,
    position: Position,
    direction: Direction,
    rotation: int,
    board: Board,
) -> bool:
    """Return ``True`` if ``piece`` can shift one cell in ``direction``."""

    dx, dy = DIRECTION_OFFSETS[Direction(direction)]
    return can_place(piece, position.shifted(dx, dy), rotation, board)


def is_above_board(piece: Piece, position: Position, rotation: int) -> bool:
    """Return ``True`` if every filled cell lies above row ``0``."""

    return all(y < 0 for _, y in piece_cells(piece, position, rotation))


def would_cause_game_over(piece: Piece, position: Position, rotation: int, board: Board) -> bool:
    """Return ``True`` if the piece overlaps settled cells in the spawn rows."""

    for x, y in piece_cells(piece, position, rotation):
        if 0 <= y < SPAWN_ROWS and board.is_filled(y, x):
            return True
    return False

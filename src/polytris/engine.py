"""Move, rotate, drop, lock and scoring operations.

These functions form the boundary used by the session layer and by any other
front-end.  None of them hold state: the current piece, position, rotation and
board are passed in, and a new value is returned.  A move or rotation that is
not possible returns ``None`` instead of raising.
"""

from __future__ import annotations

import logging
from typing import List, NamedTuple, Optional, Tuple

from .board import Board
from .collision import (
    DIRECTION_OFFSETS,
    Direction,
    can_move,
    can_place,
    piece_cells,
    would_cause_game_over,
)
from .config import DEFAULT_CONFIG, GameConfig
from .generator import generate_piece
from .piece import Piece, Position, RotationDirection, next_rotation


LOGGER = logging.getLogger(__name__)

# Positional compensation tried, in order, when an in-place rotation collides.
# The first collision-free offset wins; there is no distance ranking.
WALL_KICK_OFFSETS: Tuple[Tuple[int, int], ...] = (
    (-1, 0),  # left
    (1, 0),  # right
    (0, -1),  # up
    (-2, 0),
    (2, 0),
    (-1, -1),  # up-left
    (1, -1),  # up-right
    (0, 1),  # down, last resort
)

# Rows at or above which a blocked piece is checked for game over.
GAME_OVER_ROW = 1


class InconsistentLockError(RuntimeError):
    """Raised when a lock is requested without the pieces it needs."""


class LineClearResult(NamedTuple):
    board: Board
    lines_cleared: int
    points: int


class TickResult(NamedTuple):
    position: Position
    should_lock: bool
    game_over: bool


def move_piece(
    piece: Piece,
    position: Position,
    direction: Direction,
    rotation: int,
    board: Board,
) -> Optional[Position]:
    """Return the position one step in ``direction`` or ``None`` if blocked."""

    if not can_move(piece, position, direction, rotation, board):
        return None
    dx, dy = DIRECTION_OFFSETS[Direction(direction)]
    return position.shifted(dx, dy)


def rotate_piece(
    piece: Piece,
    position: Position,
    rotation: int,
    direction: RotationDirection,
    board: Board,
) -> Optional[Tuple[Position, int]]:
    """Rotate ``piece`` once, applying wall kicks when needed.

    The rotation is tried in place first and then at each of
    :data:`WALL_KICK_OFFSETS` in order.  Returns the first legal
    ``(position, rotation)`` pair, or ``None`` if none fits.
    """

    target = next_rotation(rotation, RotationDirection(direction))
    if can_place(piece, position, target, board):
        return position, target
    for dx, dy in WALL_KICK_OFFSETS:
        candidate = position.shifted(dx, dy)
        if can_place(piece, candidate, target, board):
            return candidate, target
    return None


def hard_drop(piece: Piece, position: Position, rotation: int, board: Board) -> Position:
    """Return the lowest position reachable by falling straight down."""

    while can_move(piece, position, Direction.DOWN, rotation, board):
        position = position.shifted(0, 1)
    return position


def ghost_position(piece: Piece, position: Position, rotation: int, board: Board) -> Position:
    """Return where the piece would land, for the renderer's preview."""

    return hard_drop(piece, position, rotation, board)


def should_lock(piece: Piece, position: Position, rotation: int, board: Board) -> bool:
    """Return ``True`` once the piece can no longer fall."""

    return not can_move(piece, position, Direction.DOWN, rotation, board)


def lock_piece_to_board(piece: Piece, position: Position, rotation: int, board: Board) -> Board:
    """Return a new board with the piece's in-bounds cells filled."""

    return board.with_cells(piece_cells(piece, position, rotation))


def completed_lines(board: Board) -> List[int]:
    """Return indices of complete rows, scanning top to bottom."""

    return board.full_rows()


def detect_and_clear_lines(
    board: Board,
    level: int,
    config: GameConfig = DEFAULT_CONFIG,
) -> LineClearResult:
    """Clear every complete row and compute the points awarded at ``level``."""

    new_board, rows = board.clear_full_rows()
    points = config.score_for_lines(len(rows), level)
    if rows:
        LOGGER.debug("Rows %s complete; %d point(s) at level %d", rows, points, level)
    return LineClearResult(new_board, len(rows), points)


def is_game_over(piece: Piece, position: Position, rotation: int, board: Board) -> bool:
    return would_cause_game_over(piece, position, rotation, board)


def spawn_position(board_width: int) -> Position:
    """Return the fixed spawn coordinate, near the top centre."""

    return Position(board_width // 2 - 2, 0)


def process_tick(piece: Piece, position: Position, rotation: int, board: Board) -> TickResult:
    """Advance the piece by one gravity step.

    The piece falls if it can.  Otherwise it must lock, and a piece still in
    the top rows is checked for overlapping the settled stack, which ends the
    game.
    """

    down = move_piece(piece, position, Direction.DOWN, rotation, board)
    if down is not None:
        return TickResult(down, False, False)
    game_over = False
    if position.y <= GAME_OVER_ROW:
        game_over = would_cause_game_over(piece, position, rotation, board)
    return TickResult(position, True, game_over)


__all__ = [
    "WALL_KICK_OFFSETS",
    "InconsistentLockError",
    "LineClearResult",
    "TickResult",
    "generate_piece",
    "move_piece",
    "rotate_piece",
    "hard_drop",
    "ghost_position",
    "should_lock",
    "lock_piece_to_board",
    "completed_lines",
    "detect_and_clear_lines",
    "is_game_over",
    "spawn_position",
    "process_tick",
]

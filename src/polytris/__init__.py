"""Rules engine for a falling-block puzzle with random polyomino pieces."""

from .board import Board
from .collision import (
    CollisionResult,
    CollisionType,
    Direction,
    can_move,
    check_collision,
    is_above_board,
    would_cause_game_over,
)
from .config import GameConfig, GenerationConfig
from .engine import (
    InconsistentLockError,
    LineClearResult,
    TickResult,
    detect_and_clear_lines,
    hard_drop,
    is_game_over,
    lock_piece_to_board,
    move_piece,
    process_tick,
    rotate_piece,
)
from .game_state import GameState, GameStatus
from .generator import PieceGenerator, generate_piece
from .piece import Piece, Position, RotationDirection, validate_piece
from .utils import render_grid

__all__ = [
    "Board",
    "CollisionResult",
    "CollisionType",
    "Direction",
    "GameConfig",
    "GenerationConfig",
    "GameState",
    "GameStatus",
    "InconsistentLockError",
    "LineClearResult",
    "Piece",
    "PieceGenerator",
    "Position",
    "RotationDirection",
    "TickResult",
    "can_move",
    "check_collision",
    "detect_and_clear_lines",
    "generate_piece",
    "hard_drop",
    "is_above_board",
    "is_game_over",
    "lock_piece_to_board",
    "move_piece",
    "process_tick",
    "render_grid",
    "rotate_piece",
    "validate_piece",
    "would_cause_game_over",
]

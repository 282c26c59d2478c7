"""High level game session container.

:class:`GameState` owns the one mutable copy of a session's board, pieces and
counters.  Every transition is delegated to the pure functions in
:mod:`polytris.engine`; this class only stores their results and tracks the
session status.  Callers are expected to serialize access to a session.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .board import Board
from .collision import Direction
from .config import GameConfig
from .engine import (
    InconsistentLockError,
    LineClearResult,
    detect_and_clear_lines,
    ghost_position,
    hard_drop,
    is_game_over,
    lock_piece_to_board,
    move_piece,
    process_tick,
    rotate_piece,
    spawn_position,
)
from .generator import PieceGenerator
from .piece import Piece, Position, RotationDirection


LOGGER = logging.getLogger(__name__)


class GameStatus(str, Enum):
    READY = "ready"
    PLAYING = "playing"
    PAUSED = "paused"
    GAME_OVER = "gameOver"


@dataclass
class GameState:
    """Mutable state for a single game session."""

    config: GameConfig = field(default_factory=GameConfig)
    generator: PieceGenerator = field(default_factory=PieceGenerator, repr=False)
    board: Optional[Board] = None
    current: Optional[Piece] = None
    upcoming: Optional[Piece] = None
    position: Optional[Position] = None
    rotation: int = 0
    score: int = 0
    level: int = 1
    lines_cleared: int = 0
    pieces: int = 0
    fall_interval_ms: float = 0.0
    status: GameStatus = GameStatus.READY

    def __post_init__(self) -> None:
        if self.board is None:
            self.board = Board(self.config.width, self.config.height)
        if not self.fall_interval_ms:
            self.fall_interval_ms = self.config.fall_interval_ms(self.level)
        if self.position is None:
            self.position = spawn_position(self.config.width)

    # ------------------------------------------------------------------
    # Session lifecycle
    # ------------------------------------------------------------------
    @property
    def is_playing(self) -> bool:
        return self.status == GameStatus.PLAYING

    @property
    def is_game_over(self) -> bool:
        return self.status == GameStatus.GAME_OVER

    @property
    def next_level_progress(self) -> float:
        """Fraction of the lines needed for the next level already cleared."""

        per_level = self.config.lines_per_level
        return (self.lines_cleared % per_level) / per_level

    def reset_game(self, seed: Optional[int] = None) -> None:
        """Reset the entire session and spawn the first piece.

        Passing ``seed`` reseeds the piece generator for a reproducible game.
        """

        if seed is not None:
            self.generator.reset(seed)
        self.board = Board(self.config.width, self.config.height)
        self.score = 0
        self.level = 1
        self.lines_cleared = 0
        self.pieces = 0
        self.fall_interval_ms = self.config.fall_interval_ms(self.level)
        self.current = None
        self.upcoming = None
        self.status = GameStatus.READY
        self.spawn_piece()

    def spawn_piece(self) -> Piece:
        """Make the upcoming piece current and draw a new upcoming one.

        The new current piece is placed at the spawn coordinate with rotation
        ``0``.
        """

        self.current = self.upcoming or self.generator.generate()
        self.position = spawn_position(self.config.width)
        self.rotation = 0
        self.upcoming = self.generator.generate()
        return self.current

    def start(self) -> None:
        if self.status == GameStatus.GAME_OVER:
            self.reset_game()
        elif self.current is None:
            self.spawn_piece()
        self.status = GameStatus.PLAYING
        LOGGER.info("Game started")

    def pause(self) -> None:
        if self.status != GameStatus.PLAYING:
            LOGGER.debug("Pause ignored: game not running")
            return
        self.status = GameStatus.PAUSED
        LOGGER.info("Paused")

    def resume(self) -> None:
        if self.status != GameStatus.PAUSED:
            LOGGER.debug("Resume ignored: game not paused")
            return
        self.status = GameStatus.PLAYING
        LOGGER.info("Resumed")

    def end_game(self) -> None:
        """Declare game over; only a restart leaves this state."""

        self.status = GameStatus.GAME_OVER
        LOGGER.info(
            "Game over. Score: %d, level: %d, lines: %d", self.score, self.level, self.lines_cleared
        )

    def restart(self) -> None:
        self.reset_game()
        self.start()

    def toggle_pause(self) -> None:
        """Start, pause, resume or restart depending on the current status."""

        if self.status == GameStatus.READY:
            self.start()
        elif self.status == GameStatus.PLAYING:
            self.pause()
        elif self.status == GameStatus.PAUSED:
            self.resume()
        else:
            self.restart()

    # ------------------------------------------------------------------
    # Piece control
    # ------------------------------------------------------------------
    def move(self, direction: Direction) -> bool:
        """Shift the current piece one cell; return ``True`` if it moved."""

        if not self.is_playing or self.current is None:
            return False
        new_position = move_piece(self.current, self.position, direction, self.rotation, self.board)
        if new_position is None:
            return False
        self.position = new_position
        return True

    def move_left(self) -> bool:
        return self.move(Direction.LEFT)

    def move_right(self) -> bool:
        return self.move(Direction.RIGHT)

    def move_down(self) -> bool:
        return self.move(Direction.DOWN)

    def rotate(self, direction: RotationDirection = RotationDirection.CLOCKWISE) -> bool:
        """Rotate the current piece with wall kicks; return ``True`` on success."""

        if not self.is_playing or self.current is None:
            return False
        result = rotate_piece(self.current, self.position, self.rotation, direction, self.board)
        if result is None:
            return False
        self.position, self.rotation = result
        return True

    def hard_drop(self) -> None:
        """Drop the current piece to its landing row and lock it immediately."""

        if not self.is_playing or self.current is None:
            return
        self.position = hard_drop(self.current, self.position, self.rotation, self.board)
        self.lock_current_piece()

    def ghost_position(self) -> Optional[Position]:
        if self.current is None:
            return None
        return ghost_position(self.current, self.position, self.rotation, self.board)

    def tick(self) -> None:
        """Apply one gravity step: fall, lock, or end the game."""

        if not self.is_playing:
            return
        if self.current is None:
            LOGGER.error("Tick with no current piece")
            self.end_game()
            return
        result = process_tick(self.current, self.position, self.rotation, self.board)
        if not result.should_lock:
            self.position = result.position
        elif result.game_over:
            self.end_game()
        else:
            self.lock_current_piece()

    # ------------------------------------------------------------------
    # Locking
    # ------------------------------------------------------------------
    def lock_current_piece(self) -> None:
        """Lock the current piece, clear rows and promote the next piece.

        Any failure leaves the session unusable, so it is logged and the game
        is ended instead of continuing from an inconsistent state.
        """

        try:
            self._lock()
        except Exception:
            LOGGER.exception("Error locking piece")
            self.end_game()

    def _lock(self) -> None:
        if self.current is None:
            raise InconsistentLockError("No current piece to lock")
        board = lock_piece_to_board(self.current, self.position, self.rotation, self.board)
        result = detect_and_clear_lines(board, self.level, self.config)
        self.board = result.board
        self.pieces += 1
        LOGGER.debug("Locked %s at (%d, %d)", self.current.id, self.position.x, self.position.y)
        self._apply_line_clear(result)

        if self.upcoming is None:
            raise InconsistentLockError("No next piece to promote")
        self.spawn_piece()
        if is_game_over(self.current, self.position, self.rotation, self.board):
            self.end_game()

    def _apply_line_clear(self, result: LineClearResult) -> None:
        if not result.lines_cleared:
            return
        self.score += result.points
        self.lines_cleared += result.lines_cleared
        LOGGER.info("Cleared %d row(s). Score: %d", result.lines_cleared, self.score)
        new_level = self.config.level_for_lines(self.lines_cleared)
        if new_level > self.level:
            self.level = new_level
            self.fall_interval_ms = self.config.fall_interval_ms(new_level)
            LOGGER.info("Level %d, fall interval %.0f ms", new_level, self.fall_interval_ms)

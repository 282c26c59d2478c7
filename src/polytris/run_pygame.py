"""Simple pygame front-end for the polyomino engine.

A minimal playable version of the game: pygame handles the window, drawing
and keyboard, while every rule is applied through :class:`GameState`.  Install
with the ``pygame`` extra and run ``python -m polytris.run_pygame``.

Controls: arrows move, up rotates clockwise, ``Z`` rotates counterclockwise,
space hard-drops, ``P`` starts/pauses/resumes/restarts.
"""

from __future__ import annotations

import logging
from typing import Optional

import pygame

from .board import Board
from .collision import piece_cells
from .game_state import GameState, GameStatus
from .piece import Piece, Position, RotationDirection


LOGGER = logging.getLogger(__name__)

# Size of a single board cell in pixels
CELL_SIZE = 30
# Frames per second to run the game loop at
FPS = 60

BACKGROUND = (0, 0, 0)
GRID_LINE = (50, 50, 50)
LOCKED_COLOR = (110, 110, 110)
GHOST_COLOR = (60, 60, 60)


def draw_board(screen: pygame.Surface, board: Board) -> None:
    """Render the settled cells."""

    for r in range(board.height):
        for c in range(board.width):
            color = LOCKED_COLOR if board.grid[r, c] else BACKGROUND
            rect = pygame.Rect(c * CELL_SIZE, r * CELL_SIZE, CELL_SIZE, CELL_SIZE)
            pygame.draw.rect(screen, color, rect)
            pygame.draw.rect(screen, GRID_LINE, rect, 1)


def draw_piece(
    screen: pygame.Surface,
    board: Board,
    piece: Piece,
    position: Position,
    rotation: int,
    color,
) -> None:
    """Render ``piece``; cells above the board are not drawn."""

    for x, y in piece_cells(piece, position, rotation):
        if not board.in_bounds(y, x):
            continue
        rect = pygame.Rect(x * CELL_SIZE, y * CELL_SIZE, CELL_SIZE, CELL_SIZE)
        pygame.draw.rect(screen, color, rect)
        pygame.draw.rect(screen, GRID_LINE, rect, 1)


def handle_key(event: pygame.event.Event, state: GameState) -> bool:
    """Map a key press to a session operation.

    Returns ``True`` when the gravity timer should restart: after a successful
    soft drop or when a piece was locked.
    """

    pieces = state.pieces
    soft_dropped = False
    if event.key == pygame.K_p:
        state.toggle_pause()
    elif event.key == pygame.K_LEFT:
        state.move_left()
    elif event.key == pygame.K_RIGHT:
        state.move_right()
    elif event.key == pygame.K_DOWN:
        soft_dropped = state.move_down()
    elif event.key == pygame.K_UP:
        state.rotate(RotationDirection.CLOCKWISE)
    elif event.key == pygame.K_z:
        state.rotate(RotationDirection.COUNTERCLOCKWISE)
    elif event.key == pygame.K_SPACE:
        state.hard_drop()
    return soft_dropped or state.pieces != pieces


class GameRunner:
    """Own the pygame window and drive ``GameState.tick`` from a timer."""

    def __init__(self, state: Optional[GameState] = None) -> None:
        self.state = state or GameState()
        self._drop_timer = 0.0
        self._running = False
        self._screen: Optional[pygame.Surface] = None

    @property
    def running(self) -> bool:
        return self._running

    def advance(self, dt: float) -> None:
        """Accumulate ``dt`` milliseconds and tick once the fall interval passes."""

        if not self.state.is_playing:
            self._drop_timer = 0.0
            return
        self._drop_timer += dt
        if self._drop_timer >= self.state.fall_interval_ms:
            self._drop_timer = 0.0
            self.state.tick()

    def on_key(self, event: pygame.event.Event) -> None:
        if handle_key(event, self.state):
            self._drop_timer = 0.0

    def draw(self) -> None:
        if self._screen is None:
            return
        state = self.state
        self._screen.fill(BACKGROUND)
        draw_board(self._screen, state.board)
        if state.current is not None and state.status != GameStatus.GAME_OVER:
            ghost = state.ghost_position()
            if ghost is not None:
                draw_piece(self._screen, state.board, state.current, ghost, state.rotation, GHOST_COLOR)
            color = pygame.Color(state.current.color)
            draw_piece(self._screen, state.board, state.current, state.position, state.rotation, color)
        pygame.display.set_caption(
            f"Polytris - {state.status.value} - Score: {state.score} - Level: {state.level}"
        )
        pygame.display.flip()

    def run(self) -> None:
        pygame.init()
        board = self.state.board
        self._screen = pygame.display.set_mode((board.width * CELL_SIZE, board.height * CELL_SIZE))
        clock = pygame.time.Clock()
        self.state.reset_game()
        self.state.start()
        self._running = True
        try:
            while self._running:
                dt = clock.tick(FPS)
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self._running = False
                    elif event.type == pygame.KEYDOWN:
                        self.on_key(event)
                self.advance(dt)
                self.draw()
        finally:
            pygame.quit()
            LOGGER.info("Window closed")


def main() -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    GameRunner().run()


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()

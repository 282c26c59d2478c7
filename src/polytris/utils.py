"""Utility helpers for presenting the engine state."""

from __future__ import annotations

from typing import List, Optional

from .board import Board
from .collision import piece_cells
from .engine import ghost_position
from .piece import Piece, Position


EMPTY = 0
LOCKED = 1
ACTIVE = 2
GHOST = 3

CELL_CHARS = {EMPTY: ".", LOCKED: "#", ACTIVE: "@", GHOST: "+"}


def render_grid(
    board: Board,
    piece: Optional[Piece] = None,
    position: Optional[Position] = None,
    rotation: int = 0,
    *,
    ghost: bool = False,
) -> List[List[int]]:
    """Return a copy of the board grid with the active piece overlaid.

    This is a convenience for renderers that want a single 2D array to draw
    without locking the piece.  Active cells receive ``ACTIVE``; with
    ``ghost=True`` the landing preview is drawn as ``GHOST`` underneath.
    Cells above the board are skipped.
    """

    grid = board.to_rows()
    if piece is None or position is None:
        return grid
    if ghost:
        landing = ghost_position(piece, position, rotation, board)
        for x, y in piece_cells(piece, landing, rotation):
            if board.in_bounds(y, x) and grid[y][x] == EMPTY:
                grid[y][x] = GHOST
    for x, y in piece_cells(piece, position, rotation):
        if board.in_bounds(y, x):
            grid[y][x] = ACTIVE
    return grid


def format_grid(grid: List[List[int]]) -> str:
    """Return ``grid`` as lines of ASCII characters."""

    return "\n".join("".join(CELL_CHARS.get(cell, "?") for cell in row) for row in grid)

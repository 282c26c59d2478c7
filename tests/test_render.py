from __future__ import annotations

import random

from polytris.__main__ import play
from polytris.board import Board
from polytris.game_state import GameState
from polytris.piece import Position
from polytris.utils import ACTIVE, GHOST, LOCKED, format_grid, render_grid


def test_render_grid_overlays_piece_without_locking(bar):
    board = Board(6, 4).with_cells([(0, 3)])
    grid = render_grid(board, bar, Position(1, 0), 0)
    assert grid[0] == [0, ACTIVE, ACTIVE, ACTIVE, ACTIVE, 0]
    assert grid[3][0] == LOCKED
    assert not board.grid[0].any()


def test_render_grid_draws_ghost_and_skips_hidden_cells(bar):
    board = Board(6, 4)
    grid = render_grid(board, bar, Position(0, -2), 1, ghost=True)
    # rotation 1 fills column 3; two cells are still above the board
    assert [row[3] for row in grid] == [ACTIVE, ACTIVE, GHOST, GHOST]


def test_render_grid_without_piece_is_board_copy():
    board = Board(3, 2).with_cells([(1, 1)])
    grid = render_grid(board)
    grid[0][0] = 9
    assert grid[1] == [0, 1, 0]
    assert board.get_cell(0, 0) == 0


def test_format_grid():
    assert format_grid([[0, 1], [2, 3]]) == ".#\n@+"


def test_demo_play_drops_pieces():
    state = GameState()
    state.reset_game(seed=21)
    play(state, 15, random.Random(21))
    assert state.pieces >= 1
    assert (state.board.width, state.board.height) == (10, 20)

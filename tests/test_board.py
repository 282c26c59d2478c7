from __future__ import annotations

import pytest

from polytris.board import Board


def test_default_dimensions():
    board = Board()
    assert (board.width, board.height) == (10, 20)
    assert board.grid.shape == (20, 10)
    assert not board.grid.any()


def test_grid_is_read_only():
    board = Board()
    with pytest.raises(ValueError):
        board.grid[0, 0] = 1


def test_with_cells_copies_and_ignores_out_of_bounds():
    board = Board(4, 3)
    updated = board.with_cells([(0, 0), (3, 2), (-1, 0), (4, 1), (1, -5)])
    assert updated.occupied_cells() == [(0, 0), (3, 2)]
    assert board.occupied_cells() == []


def test_get_cell_bounds():
    board = Board(4, 3).with_cells([(2, 1)])
    assert board.get_cell(1, 2) == 1
    assert board.get_cell(0, 0) == 0
    with pytest.raises(IndexError):
        board.get_cell(3, 0)
    assert not board.is_filled(-1, 2)


def test_from_rows_validates_shape():
    board = Board.from_rows([[1, 0, 2], [0, 0, 0]])
    assert board.to_rows() == [[1, 0, 1], [0, 0, 0]]
    with pytest.raises(ValueError):
        Board.from_rows([[1, 0], [0]])
    with pytest.raises(ValueError):
        Board.from_rows([])


def test_clear_preserves_dimensions():
    rows = [[1, 1, 1]] * 4 + [[0, 1, 0]]
    board = Board.from_rows(rows)
    cleared, indices = board.clear_full_rows()
    assert indices == [0, 1, 2, 3]
    assert (cleared.width, cleared.height) == (3, 5)
    assert cleared.to_rows() == [[0, 0, 0]] * 4 + [[0, 1, 0]]
    # the snapshot is untouched
    assert board.to_rows() == rows


def test_equality_compares_cells():
    assert Board(3, 2) == Board(3, 2)
    assert Board(3, 2) != Board(3, 2).with_cells([(0, 0)])
    assert Board(3, 2) != Board(2, 3)

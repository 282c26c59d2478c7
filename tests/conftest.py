from __future__ import annotations

import pytest

from polytris.board import Board
from polytris.generator import FALLBACK_SHAPE
from polytris.piece import Piece


BAR_SHAPE = (
    (1, 1, 1, 1),
    (0, 0, 0, 0),
    (0, 0, 0, 0),
    (0, 0, 0, 0),
)


@pytest.fixture
def bar():
    """Straight 4-cell piece; rotation 0 is the top row, rotation 1 column 3."""

    return Piece.from_grid("bar", BAR_SHAPE, "#45B7D1")


@pytest.fixture
def l_piece():
    return Piece.from_grid("ell", FALLBACK_SHAPE, "#FF6B6B")


@pytest.fixture
def empty_board():
    return Board()

from __future__ import annotations

import logging

import pytest

from polytris.board import Board
from polytris.game_state import GameState, GameStatus
from polytris.piece import Position, RotationDirection


def _playing_state(seed=1):
    state = GameState()
    state.reset_game(seed=seed)
    state.start()
    return state


def _bottom_row_with_gap(gap):
    return Board().with_cells([(x, 19) for x in range(10) if x not in gap])


def test_reset_spawns_current_and_upcoming():
    state = GameState()
    state.reset_game(seed=5)
    assert state.status == GameStatus.READY
    assert state.current is not None and state.upcoming is not None
    assert state.position == Position(3, 0)
    assert state.rotation == 0
    assert (state.score, state.level, state.lines_cleared, state.pieces) == (0, 1, 0, 0)
    assert state.fall_interval_ms == pytest.approx(1000)


def test_input_ignored_unless_playing(bar):
    state = GameState()
    state.reset_game(seed=2)
    state.current = bar
    assert not state.move_left()
    assert not state.rotate()
    state.start()
    state.pause()
    assert not state.move_down()
    state.hard_drop()
    assert state.pieces == 0
    state.resume()
    assert state.move_down()
    assert state.position == Position(3, 1)


def test_rotate_updates_position_and_rotation(bar):
    state = _playing_state()
    state.current = bar
    assert state.rotate(RotationDirection.COUNTERCLOCKWISE)
    assert state.rotation == 3
    assert state.position == Position(3, 0)


def test_tick_moves_piece_down():
    state = _playing_state()
    state.tick()
    assert state.position == Position(3, 1)


def test_hard_drop_clears_line_and_promotes_next(bar):
    state = _playing_state()
    state.board = _bottom_row_with_gap(range(3, 7))
    state.current = bar
    upcoming = state.upcoming

    state.hard_drop()

    assert state.lines_cleared == 1
    assert state.score == 100
    assert state.pieces == 1
    assert not state.board.grid.any()
    assert state.current is upcoming
    assert state.upcoming is not upcoming
    assert state.position == Position(3, 0)
    assert state.rotation == 0
    assert state.status == GameStatus.PLAYING


def test_ten_lines_reach_level_two(bar, caplog):
    state = _playing_state()
    state.lines_cleared = 9
    state.score = 900
    state.board = _bottom_row_with_gap(range(3, 7))
    state.current = bar

    with caplog.at_level(logging.INFO, logger="polytris.game_state"):
        state.hard_drop()

    assert state.lines_cleared == 10
    assert state.level == 2
    assert state.score == 1000  # scored at the level before the clear
    assert state.fall_interval_ms == pytest.approx(900)
    assert state.next_level_progress == 0
    assert "Level 2" in caplog.text


def test_no_clear_leaves_counters(bar):
    state = _playing_state()
    state.current = bar
    state.hard_drop()
    assert (state.score, state.level, state.lines_cleared) == (0, 1, 0)
    assert state.pieces == 1
    assert state.board.to_rows()[19] == [0, 0, 0, 1, 1, 1, 1, 0, 0, 0]


def test_blocked_spawn_ends_game(bar):
    state = _playing_state()
    state.board = Board().with_cells([(x, 0) for x in range(3, 7)])
    state.current = bar
    state.position = Position(0, 5)
    state.upcoming = bar

    state.hard_drop()

    assert state.status == GameStatus.GAME_OVER
    assert state.is_game_over
    # no further processing once the game is over
    position = state.position
    state.tick()
    assert not state.move_left()
    assert state.position == position


def test_tick_game_over_when_overlapping_in_top_rows(bar):
    state = _playing_state()
    state.board = Board().with_cells([(3, 0), (3, 1)])
    state.current = bar
    state.tick()
    assert state.status == GameStatus.GAME_OVER
    assert state.pieces == 0


def test_tick_locks_piece_at_floor(bar):
    state = _playing_state()
    state.current = bar
    state.position = Position(3, 19)
    state.tick()
    assert state.pieces == 1
    assert state.board.get_cell(19, 3) == 1
    assert state.position == Position(3, 0)


def test_missing_current_piece_forces_game_over(caplog):
    state = _playing_state()
    state.current = None
    with caplog.at_level(logging.ERROR, logger="polytris.game_state"):
        state.lock_current_piece()
    assert state.status == GameStatus.GAME_OVER
    assert "Error locking piece" in caplog.text
    assert "No current piece" in caplog.text


def test_missing_next_piece_forces_game_over(bar):
    state = _playing_state()
    state.current = bar
    state.upcoming = None
    state.hard_drop()
    assert state.status == GameStatus.GAME_OVER


def test_toggle_pause_cycle():
    state = GameState()
    state.reset_game(seed=4)
    state.toggle_pause()
    assert state.status == GameStatus.PLAYING
    state.toggle_pause()
    assert state.status == GameStatus.PAUSED
    state.toggle_pause()
    assert state.status == GameStatus.PLAYING

    state.score = 500
    state.end_game()
    state.toggle_pause()
    assert state.status == GameStatus.PLAYING
    assert state.score == 0


def test_old_board_snapshot_survives_lock(bar):
    state = _playing_state()
    state.current = bar
    before = state.board
    state.hard_drop()
    assert before is not state.board
    assert not before.grid.any()


def test_seeded_sessions_match():
    first = _playing_state(seed=11)
    second = _playing_state(seed=11)
    for _ in range(10):
        first.hard_drop()
        second.hard_drop()
    assert first.board == second.board
    assert first.pieces == second.pieces


def test_ghost_position_matches_landing(bar):
    state = _playing_state()
    state.current = bar
    assert state.ghost_position() == Position(3, 19)
    state.current = None
    assert state.ghost_position() is None

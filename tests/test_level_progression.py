from __future__ import annotations

import pytest

from polytris.config import GameConfig


def test_level_advances_every_ten_lines():
    config = GameConfig()
    assert config.level_for_lines(0) == 1
    assert config.level_for_lines(9) == 1
    assert config.level_for_lines(10) == 2
    assert config.level_for_lines(25) == 3


def test_fall_interval_decays_per_level():
    config = GameConfig()
    assert config.fall_interval_ms(1) == pytest.approx(1000)
    assert config.fall_interval_ms(2) == pytest.approx(900)
    assert config.fall_interval_ms(3) == pytest.approx(810)
    assert config.fall_interval_ms(3) < config.fall_interval_ms(2)


def test_fall_interval_has_floor():
    config = GameConfig()
    assert config.fall_interval_ms(100) == 50


def test_custom_scoring_table():
    config = GameConfig(line_clear_scores=(40, 100, 300, 1200), lines_per_level=5)
    assert config.score_for_lines(4, 1) == 1200
    assert config.score_for_lines(6, 2) == 2400
    assert config.score_for_lines(0, 9) == 0
    assert config.level_for_lines(5) == 2

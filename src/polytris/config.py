"""Configuration constants for the polyomino engine.

Module-level constants hold the default values.  They are grouped into two
frozen dataclasses so a session can be configured without touching globals:
:class:`GameConfig` covers the board, scoring and fall speed, while
:class:`GenerationConfig` covers random piece generation.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


# Dimensions of the default playfield.
WIDTH = 10
HEIGHT = 20

BASE_FALL_INTERVAL_MS = 1000
SPEED_MULTIPLIER = 0.9  # 10% faster each level
MIN_FALL_INTERVAL_MS = 50
LINES_PER_LEVEL = 10

# Points for clearing 1, 2, 3 and 4 rows at once (multiplied by the level).
LINE_CLEAR_SCORES: Tuple[int, ...] = (100, 300, 500, 800)

MIN_PIECE_SIZE = 4
MAX_PIECE_SIZE = 7
GENERATION_GRID_SIZE = 4
MAX_GENERATION_ATTEMPTS = 100

PIECE_COLORS: Tuple[str, ...] = (
    "#FF6B6B",  # red
    "#4ECDC4",  # teal
    "#45B7D1",  # blue
    "#96CEB4",  # green
    "#FFEAA7",  # yellow
    "#DDA0DD",  # plum
    "#98D8C8",  # mint
    "#F7DC6F",  # light yellow
    "#BB8FCE",  # light purple
    "#85C1E9",  # light blue
)


@dataclass(frozen=True)
class GameConfig:
    """Board dimensions, scoring table and fall speed settings."""

    width: int = WIDTH
    height: int = HEIGHT
    base_fall_interval_ms: float = BASE_FALL_INTERVAL_MS
    speed_multiplier: float = SPEED_MULTIPLIER
    min_fall_interval_ms: float = MIN_FALL_INTERVAL_MS
    line_clear_scores: Tuple[int, ...] = LINE_CLEAR_SCORES
    lines_per_level: int = LINES_PER_LEVEL

    def score_for_lines(self, lines: int, level: int) -> int:
        """Return the points awarded for clearing ``lines`` rows at ``level``.

        Clearing more rows than the table covers (possible with the larger
        generated pieces) is capped at the last entry.
        """

        if lines <= 0:
            return 0
        index = min(lines, len(self.line_clear_scores)) - 1
        return self.line_clear_scores[index] * level

    def level_for_lines(self, total_lines: int) -> int:
        """Return the level reached after ``total_lines`` cleared rows."""

        return total_lines // self.lines_per_level + 1

    def fall_interval_ms(self, level: int) -> float:
        """Return the gravity interval in milliseconds for ``level``.

        The delay decays exponentially per level but never drops below
        ``min_fall_interval_ms``.
        """

        interval = self.base_fall_interval_ms * (self.speed_multiplier ** (level - 1))
        return max(self.min_fall_interval_ms, interval)


@dataclass(frozen=True)
class GenerationConfig:
    """Constraints for random polyomino generation."""

    min_size: int = MIN_PIECE_SIZE
    max_size: int = MAX_PIECE_SIZE
    grid_size: int = GENERATION_GRID_SIZE
    max_attempts: int = MAX_GENERATION_ATTEMPTS
    colors: Tuple[str, ...] = PIECE_COLORS

    def __post_init__(self) -> None:
        if not 1 <= self.min_size <= self.max_size <= self.grid_size ** 2:
            raise ValueError("Piece size bounds do not fit the generation grid")
        if not self.colors:
            raise ValueError("Colour palette must not be empty")


DEFAULT_CONFIG = GameConfig()
DEFAULT_GENERATION_CONFIG = GenerationConfig()

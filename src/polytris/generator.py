"""Random polyomino generation.

Pieces are grown cell by cell inside the generation grid: a random seed cell
is filled, then a random empty neighbour of the filled region is added until
the target size is reached.  Growth can dead-end on a small grid, so the
generator retries a bounded number of times and finally falls back to a fixed
L-shaped piece.  Callers therefore always receive a usable piece.
"""

from __future__ import annotations

import itertools
import logging
import random
from typing import List, Optional

import numpy as np

from .config import DEFAULT_GENERATION_CONFIG, GenerationConfig
from .piece import NEIGHBOUR_OFFSETS, Cell, Grid, Piece, is_connected


LOGGER = logging.getLogger(__name__)

FALLBACK_SHAPE = (
    (1, 0, 0, 0),
    (1, 0, 0, 0),
    (1, 1, 0, 0),
    (0, 0, 0, 0),
)


class PieceGenerator:
    """Produce random pieces from a single source of randomness."""

    def __init__(
        self,
        config: GenerationConfig = DEFAULT_GENERATION_CONFIG,
        *,
        seed: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config
        self._rng = rng or random.Random(seed)
        self._ids = itertools.count(1)

    def reset(self, seed: Optional[int] = None) -> None:
        """Reseed the random source and restart piece numbering."""

        self._rng.seed(seed)
        self._ids = itertools.count(1)

    def generate(self) -> Piece:
        """Return a new random piece, or the fallback shape if growth keeps failing."""

        for attempt in range(1, self.config.max_attempts + 1):
            grid = self._attempt()
            if grid is not None:
                piece = self._package(grid)
                LOGGER.debug(
                    "Generated %s of size %d after %d attempt(s)", piece.id, piece.size, attempt
                )
                return piece
        LOGGER.warning(
            "Piece generation failed after %d attempts; using fallback shape",
            self.config.max_attempts,
        )
        return self.fallback()

    def fallback(self) -> Piece:
        """Return the fixed 4-cell L piece."""

        grid = np.zeros((self.config.grid_size, self.config.grid_size), dtype=np.uint8)
        for y, row in enumerate(FALLBACK_SHAPE[: self.config.grid_size]):
            for x, value in enumerate(row[: self.config.grid_size]):
                grid[y, x] = value
        return self._package(grid)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _attempt(self) -> Optional[Grid]:
        size = self.config.grid_size
        target = self._rng.randint(self.config.min_size, self.config.max_size)
        grid = np.zeros((size, size), dtype=np.uint8)

        seed = (self._rng.randrange(size), self._rng.randrange(size))
        grid[seed[1], seed[0]] = 1
        cells: List[Cell] = [seed]

        while len(cells) < target:
            frontier = self._frontier(cells, grid)
            if not frontier:
                break
            x, y = self._rng.choice(frontier)
            grid[y, x] = 1
            cells.append((x, y))

        if len(cells) >= self.config.min_size and is_connected(cells):
            return grid
        return None

    def _frontier(self, cells: List[Cell], grid: Grid) -> List[Cell]:
        """Return empty cells 4-adjacent to the region, in discovery order."""

        size = self.config.grid_size
        frontier: List[Cell] = []
        seen = set()
        for x, y in cells:
            for dx, dy in NEIGHBOUR_OFFSETS:
                nx, ny = x + dx, y + dy
                if not (0 <= nx < size and 0 <= ny < size):
                    continue
                if grid[ny, nx] or (nx, ny) in seen:
                    continue
                seen.add((nx, ny))
                frontier.append((nx, ny))
        return frontier

    def _package(self, grid: Grid) -> Piece:
        piece_id = f"piece-{next(self._ids)}"
        color = self._rng.choice(self.config.colors)
        return Piece.from_grid(piece_id, grid, color)


_default_generator = PieceGenerator()


def generate_piece() -> Piece:
    """Return a random piece from the module's default generator."""

    return _default_generator.generate()

"""Simple ASCII demo for the polyomino engine.

Run with: `python -m polytris`

Plays a seeded game in which every piece is hard-dropped at a random column
and rotation, then prints the final frame and a short summary.  Useful as a
smoke test of generation, collision, locking and scoring together.
"""

from __future__ import annotations

import argparse
import logging
import random

from .game_state import GameState
from .piece import RotationDirection
from .utils import format_grid, render_grid


LOGGER = logging.getLogger(__name__)


def play(state: GameState, pieces: int, rng: random.Random) -> None:
    """Drop up to ``pieces`` pieces at random columns and rotations."""

    state.start()
    for _ in range(pieces):
        if not state.is_playing:
            break
        for _ in range(rng.randrange(4)):
            state.rotate(RotationDirection.CLOCKWISE)
        shift = rng.randint(-state.config.width // 2, state.config.width // 2)
        step = state.move_right if shift > 0 else state.move_left
        for _ in range(abs(shift)):
            if not step():
                break
        state.hard_drop()


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--pieces", type=int, default=50, help="Number of pieces to drop.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for a reproducible game.")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING), format="%(message)s")

    state = GameState()
    state.reset_game(seed=args.seed)
    play(state, args.pieces, random.Random(args.seed))

    print(format_grid(render_grid(state.board, state.current, state.position, state.rotation)))
    print(
        f"Status: {state.status.value}  Score: {state.score}  Level: {state.level}  "
        f"Lines: {state.lines_cleared}  Pieces: {state.pieces}"
    )
    LOGGER.info("Demo finished after %d piece(s)", state.pieces)


if __name__ == "__main__":
    main()

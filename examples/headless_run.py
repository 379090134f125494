"""Run the simulation without a front-end until the game ends.

Run with::

    PYTHONPATH=src python examples/headless_run.py

Movement keys are replayed from ``--moves`` (one of ``a``, ``d``, ``q``,
``e`` per tick, ``.`` for no move) so runs are fully reproducible.
"""

from __future__ import annotations

import argparse
import logging

from tetris_sim.config import KEY_BINDINGS
from tetris_sim.game_state import Tetris


LOGGER = logging.getLogger(__name__)


def play(moves: str, max_ticks: int) -> Tetris:
    tetris = Tetris()
    for index in range(max_ticks):
        key = moves[index % len(moves)] if moves else "."
        intent = KEY_BINDINGS.get(key)
        if intent is not None:
            tetris.event(intent)
        if not tetris.tick():
            LOGGER.info("Game over after %d ticks", index + 1)
            break
    else:
        LOGGER.info("Stopped after %d ticks", max_ticks)
    return tetris


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--moves", default="", help="Keys to replay, one per tick.")
    parser.add_argument("--max-ticks", type=int, default=10_000, help="Upper bound on ticks.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args()


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")
    tetris = play(args.moves, args.max_ticks)
    print(tetris.dump(), end="")


if __name__ == "__main__":
    main()

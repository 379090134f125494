"""Play the simulation in a terminal or a pygame window.

Run with: `python -m tetris_sim`

Keys: ``a``/``d`` move left/right, ``q``/``e`` rotate counter-clockwise and
clockwise, Esc quits.
"""

from __future__ import annotations

import argparse
import curses
import logging
import threading
import time
from typing import List, Optional

from .config import TICK_MS, DriverConfig
from .driver import Driver, KeyReader, run
from .game_state import Tetris
from .render import CursesRenderer, init_colors


LOGGER = logging.getLogger(__name__)

# Milliseconds the input thread sleeps between polls when no key is waiting.
INPUT_POLL_MS = 100


def curses_key_reader(window, lock: threading.Lock) -> KeyReader:
    """Return a key reader polling ``window`` without blocking.

    ``getch`` refreshes the window, so it runs under the same ``lock`` as the
    renderer.  The idle sleep happens outside the lock.
    """

    window.nodelay(True)

    def read_key() -> Optional[str]:
        with lock:
            ch = window.getch()
        if ch == -1:
            time.sleep(INPUT_POLL_MS / 1000.0)
            return ""
        if 0 <= ch < 256:
            return chr(ch)
        return ""

    return read_key


def play_curses(stdscr, config: DriverConfig) -> int:
    curses.curs_set(0)
    screen_lock = threading.Lock()
    renderer = CursesRenderer(stdscr, init_colors(), screen_lock)
    tetris = Tetris()
    LOGGER.info("Game started")
    with Driver(curses_key_reader(stdscr, screen_lock), config) as driver:
        return run(tetris, driver, renderer)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="tetris_sim", description=__doc__)
    parser.add_argument(
        "--tick-ms",
        type=int,
        default=TICK_MS,
        help="Milliseconds between gravity ticks.",
    )
    parser.add_argument(
        "--frontend",
        choices=("curses", "pygame"),
        default="curses",
        help="Draw in the terminal or in a pygame window.",
    )
    parser.add_argument(
        "--log-file",
        default=None,
        help="Write log records to this file (the terminal front-end shows none).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def configure_logging(args: argparse.Namespace) -> None:
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    fmt = "%(asctime)s %(name)s %(levelname)s %(message)s"
    if args.log_file:
        logging.basicConfig(level=level, format=fmt, filename=args.log_file)
    elif args.frontend == "curses":
        # stderr output would corrupt the curses screen.
        logging.basicConfig(level=level, handlers=[logging.NullHandler()])
    else:
        logging.basicConfig(level=level, format=fmt)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_logging(args)
    config = DriverConfig(tick_ms=args.tick_ms)

    if args.frontend == "pygame":
        from .run_pygame import GameRunner

        ticks = GameRunner(config.tick_ms).run()
    else:
        ticks = curses.wrapper(play_curses, config)
    LOGGER.info("Finished after %d ticks", ticks)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

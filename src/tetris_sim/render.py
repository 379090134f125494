"""Terminal renderer for the simulation grid.

Filled cells are drawn as a fixed white glyph and empty cells as blanks, both
on a black background.  The renderer only reads the grid.
"""

from __future__ import annotations

import curses
import threading
from typing import List, Optional

from .board import HEIGHT, WIDTH, Grid


GLYPH = "□"
BLANK = " "

# curses colour pair used for every cell.
CELL_PAIR = 1


class RenderAreaTooSmall(RuntimeError):
    """Raised when the drawing surface cannot hold the whole grid."""


def render_rows(grid: Grid) -> List[str]:
    """Return one string per grid row; any non-zero cell becomes ``GLYPH``."""

    return ["".join(GLYPH if cell else BLANK for cell in row) for row in grid]


def init_colors() -> int:
    """Register the white-on-black colour pair and return its attribute.

    Requires an initialised screen.
    """

    if not curses.has_colors():
        return curses.A_NORMAL
    curses.start_color()
    curses.init_pair(CELL_PAIR, curses.COLOR_WHITE, curses.COLOR_BLACK)
    return curses.color_pair(CELL_PAIR)


def draw_grid(window, grid: Grid, attr: int = 0) -> None:
    """Draw ``grid`` at the top-left corner of a curses ``window``.

    Raises:
        RenderAreaTooSmall: If ``window`` has fewer than ``HEIGHT`` rows or
            ``WIDTH`` columns.
    """

    height, width = window.getmaxyx()
    if height < HEIGHT or width < WIDTH:
        raise RenderAreaTooSmall(
            f"Terminal area {width}x{height} too small, need {WIDTH}x{HEIGHT}"
        )

    window.erase()
    for row, text in enumerate(render_rows(grid)):
        # Writing the bottom-right cell moves the cursor off-screen and errors.
        if row == height - 1 and len(text) >= width:
            window.insstr(row, 0, text, attr)
        else:
            window.addstr(row, 0, text, attr)
    window.refresh()


class CursesRenderer:
    """Callable renderer bound to one curses window.

    Drawing holds ``lock``; share it with anything else calling into curses.
    """

    def __init__(self, window, attr: int = 0, lock: Optional[threading.Lock] = None) -> None:
        self.window = window
        self.attr = attr
        self.lock = lock or threading.Lock()

    def __call__(self, grid: Grid) -> None:
        with self.lock:
            draw_grid(self.window, grid, self.attr)

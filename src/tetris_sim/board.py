"""Board representation, collision checks and footprint painting."""

from __future__ import annotations

from enum import Enum
from typing import List, Tuple

import numpy as np
from numpy.typing import NDArray

from .tetromino import Piece, offsets


# Dimensions of the playfield.
WIDTH = 10
HEIGHT = 20

EMPTY = 0
FILLED = 1

Grid = NDArray[np.uint8]


class PlacementOutOfBounds(IndexError):
    """Raised when a piece footprint would leave the grid."""


class Placement(Enum):
    """Outcome of testing a candidate piece placement."""

    FITS = "fits"
    BLOCKED = "blocked"
    OUT_OF_BOUNDS = "out_of_bounds"


def create_empty_grid() -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((HEIGHT, WIDTH), dtype=np.uint8)


def footprint(piece: Piece, rotation: int, row: int, col: int) -> List[Tuple[int, int]]:
    """Return the absolute cells covered by ``piece`` anchored at ``(row, col)``."""

    return [(row + dr, col + dc) for dr, dc in offsets(piece, rotation)]


def _in_bounds(cells: List[Tuple[int, int]]) -> bool:
    return all(0 <= r < HEIGHT and 0 <= c < WIDTH for r, c in cells)


def check_placement(grid: Grid, piece: Piece, row: int, col: int, rotation: int) -> Placement:
    """Classify placing ``piece`` at ``(row, col)`` with ``rotation``.

    Bounds are tested before occupancy, so an ``OUT_OF_BOUNDS`` result never
    touches the grid.
    """

    cells = footprint(piece, rotation, row, col)
    if not _in_bounds(cells):
        return Placement.OUT_OF_BOUNDS
    for r, c in cells:
        if grid[r, c] != EMPTY:
            return Placement.BLOCKED
    return Placement.FITS


def fits(grid: Grid, piece: Piece, row: int, col: int, rotation: int) -> bool:
    """Return ``True`` if the placement overlaps no occupied cell.

    Raises:
        PlacementOutOfBounds: If any footprint cell lies outside the grid.
            Callers must only ask about in-bounds placements.
    """

    result = check_placement(grid, piece, row, col, rotation)
    if result is Placement.OUT_OF_BOUNDS:
        raise PlacementOutOfBounds(
            f"{piece.name} rotation {rotation} at ({row}, {col}) leaves the grid"
        )
    return result is Placement.FITS


def paint(grid: Grid, piece: Piece, rotation: int, row: int, col: int, fill: bool) -> None:
    """Set (``fill=True``) or clear the footprint cells of a placement.

    Raises:
        PlacementOutOfBounds: If any footprint cell lies outside the grid.
    """

    cells = footprint(piece, rotation, row, col)
    if not _in_bounds(cells):
        raise PlacementOutOfBounds(
            f"{piece.name} rotation {rotation} at ({row}, {col}) leaves the grid"
        )
    rows, cols = np.asarray(cells, dtype=np.int16).T
    grid[rows, cols] = FILLED if fill else EMPTY


class Board:
    """Fixed-size playfield holding the occupied cells."""

    width: int = WIDTH
    height: int = HEIGHT

    def __init__(self) -> None:
        self.grid: Grid = create_empty_grid()

    def is_empty(self, row: int, col: int) -> bool:
        """Return ``True`` if the cell at ``(row, col)`` is empty.

        Any coordinates outside the board are treated as occupied.
        """

        if 0 <= row < self.height and 0 <= col < self.width:
            return bool(self.grid[row, col] == EMPTY)
        return False

    def is_row_full(self, row: int) -> bool:
        """Return ``True`` if every cell of ``row`` is filled."""

        return int(self.grid[row].sum()) == self.width

    def shift_down(self, row: int) -> None:
        """Drop every row above ``row`` by one, overwriting ``row``.

        Row ``0`` becomes empty afterwards.
        """

        if not 0 <= row < self.height:
            raise IndexError("Row out of bounds")
        self.grid[1 : row + 1] = self.grid[0:row].copy()
        self.grid[0] = EMPTY

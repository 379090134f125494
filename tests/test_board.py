from __future__ import annotations

import numpy as np
import pytest

from tetris_sim.board import (
    HEIGHT,
    WIDTH,
    Board,
    Placement,
    PlacementOutOfBounds,
    check_placement,
    create_empty_grid,
    fits,
    paint,
)
from tetris_sim.tetromino import Piece


def test_empty_grid_has_fixed_dimensions() -> None:
    grid = create_empty_grid()
    assert grid.shape == (HEIGHT, WIDTH) == (20, 10)
    assert grid.dtype == np.uint8
    assert not grid.any()


def test_fits_detects_overlap() -> None:
    grid = create_empty_grid()
    assert fits(grid, Piece.O, 0, 4, 0)
    grid[1, 5] = 1
    assert not fits(grid, Piece.O, 0, 4, 0)


def test_fits_rejects_out_of_bounds_placement() -> None:
    grid = create_empty_grid()
    with pytest.raises(PlacementOutOfBounds):
        fits(grid, Piece.I, 17, 0, 0)
    with pytest.raises(IndexError):
        fits(grid, Piece.O, 0, 9, 0)


def test_check_placement_is_tri_state() -> None:
    grid = create_empty_grid()
    grid[19, 0] = 1
    assert check_placement(grid, Piece.I, 16, 1, 0) is Placement.FITS
    assert check_placement(grid, Piece.I, 16, 0, 0) is Placement.BLOCKED
    assert check_placement(grid, Piece.I, 17, 0, 0) is Placement.OUT_OF_BOUNDS
    assert check_placement(grid, Piece.T, 0, -1, 0) is Placement.OUT_OF_BOUNDS


def test_paint_sets_and_clears_footprint() -> None:
    grid = create_empty_grid()
    paint(grid, Piece.T, 0, 5, 2, True)
    assert {(int(r), int(c)) for r, c in zip(*np.nonzero(grid))} == {
        (5, 2),
        (5, 3),
        (5, 4),
        (6, 3),
    }
    paint(grid, Piece.T, 0, 5, 2, False)
    assert not grid.any()


def test_paint_out_of_bounds_leaves_grid_untouched() -> None:
    grid = create_empty_grid()
    with pytest.raises(PlacementOutOfBounds):
        paint(grid, Piece.I, 1, 0, 7, True)
    assert not grid.any()


def test_off_board_cells_count_as_occupied() -> None:
    board = Board()
    assert board.is_empty(0, 0)
    assert board.is_empty(19, 9)
    assert not board.is_empty(-1, 0)
    assert not board.is_empty(20, 0)
    assert not board.is_empty(0, 10)


def test_shift_down_overwrites_row_and_empties_top() -> None:
    board = Board()
    board.grid[19] = 1
    board.grid[0, 3] = 1
    board.grid[10, 7] = 1
    assert board.is_row_full(19)

    board.shift_down(19)

    assert board.grid[11, 7] == 1
    assert board.grid[10, 7] == 0
    assert board.grid[1, 3] == 1
    assert not board.grid[0].any()
    assert not board.is_row_full(19)
    assert np.count_nonzero(board.grid) == 2

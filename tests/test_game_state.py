from __future__ import annotations

import logging

import numpy as np
import pytest

from tetris_sim.board import Board
from tetris_sim.game_state import SPAWN_COL, SPAWN_ROW, Tetris
from tetris_sim.tetromino import Piece


EMPTY_ROW = "0000000000\n"


def test_init_tetris() -> None:
    t = Tetris()
    expected = (
        "========TETRIS========\n"
        "Piece: O, Rotation: 0, ARow: 0, ACol: 4\n"
        "0000110000\n"
        "0000110000\n" + EMPTY_ROW * 18
    )
    assert t.dump() == expected
    assert str(t) == expected
    assert (t.piece, t.rotation, t.anchor_row, t.anchor_col) == (Piece.O, 0, SPAWN_ROW, SPAWN_COL)
    assert not t.game_over


def test_tick() -> None:
    t = Tetris()
    assert t.tick()
    expected = (
        "========TETRIS========\n"
        "Piece: O, Rotation: 0, ARow: 1, ACol: 4\n"
        + EMPTY_ROW
        + "0000110000\n"
        "0000110000\n" + EMPTY_ROW * 17
    )
    assert t.dump() == expected


def test_tick_until_bottom() -> None:
    t = Tetris()
    for _ in range(19):
        assert t.tick()
    expected = (
        "========TETRIS========\n"
        "Piece: L, Rotation: 0, ARow: 0, ACol: 4\n"
        "0000100000\n"
        "0000100000\n"
        "0000110000\n" + EMPTY_ROW * 15 + "0000110000\n"
        "0000110000\n"
    )
    assert t.dump() == expected


def test_drop_moves_only_the_falling_piece() -> None:
    board = Board()
    board.grid[10, 0] = 1
    t = Tetris(board=board, piece=Piece.T, rotation=1)
    before = t.grid.copy()
    positions = t.falling_piece_positions()

    assert t.can_drop()
    assert t.tick()

    after = t.grid
    assert t.falling_piece_positions() == [(r + 1, c) for r, c in positions]
    expected = before.copy()
    for r, c in positions:
        expected[r, c] = 0
    for r, c in positions:
        expected[r + 1, c] = 1
    assert np.array_equal(after, expected)


def test_start_on_occupied_cells_is_rejected() -> None:
    board = Board()
    board.grid[1, 5] = 1
    with pytest.raises(ValueError):
        Tetris(board=board)
    assert np.count_nonzero(board.grid) == 1


def test_start_off_the_grid_is_rejected() -> None:
    with pytest.raises(IndexError):
        Tetris(piece=Piece.I, anchor_row=17)


def test_grid_view_is_read_only() -> None:
    t = Tetris()
    with pytest.raises(ValueError):
        t.grid[5, 5] = 1
    assert t.board.grid[5, 5] == 0


def test_landing_clears_completed_row() -> None:
    board = Board()
    board.grid[19] = 1
    board.grid[19, 4] = 0
    board.grid[19, 5] = 0
    board.grid[10, 0] = 1
    t = Tetris(board=board)

    for _ in range(18):
        assert t.tick()
    assert t.anchor_row == 18
    assert np.count_nonzero(t.grid) == 8 + 1 + 4

    assert t.tick()

    grid = t.grid
    # The O piece's upper half moved into the cleared row.
    assert grid[19].tolist() == [0, 0, 0, 0, 1, 1, 0, 0, 0, 0]
    assert grid[18].sum() == 0
    assert grid[11, 0] == 1
    assert grid[10, 0] == 0
    # Row 0 was emptied; only the freshly spawned L occupies it.
    assert grid[0].tolist() == [0, 0, 0, 0, 1, 0, 0, 0, 0, 0]
    assert t.piece is Piece.L
    assert np.count_nonzero(t.grid) == 2 + 1 + 4


def test_landing_clears_two_rows_in_one_tick() -> None:
    board = Board()
    board.grid[18:20] = 1
    board.grid[18:20, 4:6] = 0
    board.grid[5, 0] = 1
    t = Tetris(board=board)

    for _ in range(19):
        assert t.tick()

    grid = t.grid
    assert grid[18:20].sum() == 0
    assert grid[7, 0] == 1
    assert grid[5, 0] == 0
    assert np.count_nonzero(t.grid) == 1 + 4
    assert t.piece is Piece.L


def _run_until_game_over(t: Tetris, limit: int = 1000) -> list[Piece]:
    spawned = [t.piece]
    for _ in range(limit):
        lands = not t.can_drop()
        if not t.tick():
            return spawned
        if lands:
            spawned.append(t.piece)
    raise AssertionError("game did not end")


def test_pieces_cycle_in_fixed_order() -> None:
    t = Tetris()
    spawned = _run_until_game_over(t)
    assert spawned == [
        Piece.O,
        Piece.L,
        Piece.J,
        Piece.T,
        Piece.Z,
        Piece.S,
        Piece.I,
        Piece.O,
    ]
    assert t.game_over
    assert (t.piece, t.anchor_row, t.anchor_col) == (Piece.O, 1, 4)


def test_game_over_when_spawn_is_blocked() -> None:
    board = Board()
    # Offset (2, 1) of the L piece at the spawn anchor.
    board.grid[2, 5] = 1
    t = Tetris(board=board, piece=Piece.O, anchor_row=18)
    before = t.grid.copy()

    assert not t.tick()

    assert t.game_over
    assert np.array_equal(t.grid, before)
    assert (t.piece, t.anchor_row, t.anchor_col) == (Piece.O, 18, 4)


def test_tick_after_game_over_is_a_no_op() -> None:
    board = Board()
    board.grid[2, 5] = 1
    t = Tetris(board=board, piece=Piece.O, anchor_row=18)
    assert not t.tick()
    snapshot = t.dump()

    for _ in range(3):
        assert not t.tick()
    assert t.dump() == snapshot


def test_game_over_is_logged(caplog) -> None:
    board = Board()
    board.grid[2, 5] = 1
    t = Tetris(board=board, piece=Piece.O, anchor_row=18)

    with caplog.at_level(logging.DEBUG, logger="tetris_sim.game_state"):
        t.tick()

    messages = caplog.messages
    assert "O landed at (18, 4) rotation 0" in messages
    assert "Game over: L cannot spawn" in messages

"""Falling-block puzzle simulation with terminal and pygame front-ends."""

from .board import Board, Placement, PlacementOutOfBounds, check_placement, fits, paint
from .tetromino import Piece, offsets
from .game_state import Intent, Tetris
from .config import DriverConfig
from .driver import Driver, run

__all__ = [
    "Board",
    "Placement",
    "PlacementOutOfBounds",
    "Piece",
    "Intent",
    "Tetris",
    "DriverConfig",
    "Driver",
    "check_placement",
    "fits",
    "offsets",
    "paint",
    "run",
]

"""Falling-piece simulation state machine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import List, Tuple

from .board import HEIGHT, Board, Grid, Placement, check_placement, fits, footprint, paint
from .tetromino import NUM_ROTATIONS, Piece


LOGGER = logging.getLogger(__name__)

SPAWN_ROW = 0
SPAWN_COL = 4


class Intent(Enum):
    """Movement and rotation requests forwarded by a front-end."""

    LEFT = "left"
    RIGHT = "right"
    CLOCK = "clock"
    COUNTER_CLOCK = "counter_clock"


# (row delta, col delta, rotation delta) for each intent.
_INTENT_DELTAS = {
    Intent.LEFT: (0, -1, 0),
    Intent.RIGHT: (0, 1, 0),
    Intent.CLOCK: (0, 0, 1),
    Intent.COUNTER_CLOCK: (0, 0, -1),
}


@dataclass
class Tetris:
    """Mutable state for one simulation run.

    Between calls the active piece's footprint is always painted into
    ``board``, so the grid alone is enough to render a frame.
    """

    board: Board = field(default_factory=Board)
    piece: Piece = Piece.O
    rotation: int = 0
    anchor_row: int = SPAWN_ROW
    anchor_col: int = SPAWN_COL
    game_over: bool = False

    def __post_init__(self) -> None:
        if not fits(self.board.grid, self.piece, self.anchor_row, self.anchor_col, self.rotation):
            raise ValueError(
                f"{self.piece.name} at ({self.anchor_row}, {self.anchor_col}) "
                f"rotation {self.rotation} overlaps occupied cells"
            )
        self._paint(True)

    @property
    def grid(self) -> Grid:
        """Read-only view of the grid for renderers."""

        view = self.board.grid.view()
        view.flags.writeable = False
        return view

    def _paint(self, fill: bool) -> None:
        paint(self.board.grid, self.piece, self.rotation, self.anchor_row, self.anchor_col, fill)

    def falling_piece_positions(self) -> List[Tuple[int, int]]:
        """Return the grid cells occupied by the falling piece."""

        return footprint(self.piece, self.rotation, self.anchor_row, self.anchor_col)

    def can_drop(self) -> bool:
        """Return ``True`` if the falling piece can move one row down."""

        positions = self.falling_piece_positions()
        for row, col in positions:
            next_row = row + 1
            if next_row == HEIGHT:
                return False
            # The piece's own cells are painted, so only foreign cells block.
            if (next_row, col) not in positions and not self.board.is_empty(next_row, col):
                return False
        return True

    def _clear_rows(self) -> int:
        rows = [row for row, _ in self.falling_piece_positions()]
        cleared = 0
        for row in range(min(rows), max(rows) + 1):
            if self.board.is_row_full(row):
                self.board.shift_down(row)
                cleared += 1
        return cleared

    def tick(self) -> bool:
        """Simulate gravity for one unit of time.

        Returns ``True`` while the game can continue and ``False`` once the
        next piece cannot spawn.  Ticking a finished game does nothing and
        keeps returning ``False``.
        """

        if self.game_over:
            LOGGER.debug("Tick ignored: game already over")
            return False

        if self.can_drop():
            self._paint(False)
            self.anchor_row += 1
            self._paint(True)
            return True

        LOGGER.debug(
            "%s landed at (%d, %d) rotation %d",
            self.piece.name,
            self.anchor_row,
            self.anchor_col,
            self.rotation,
        )
        cleared = self._clear_rows()
        if cleared:
            LOGGER.debug("Cleared %d row(s)", cleared)

        new_piece = self.piece.successor()
        if not fits(self.board.grid, new_piece, SPAWN_ROW, SPAWN_COL, 0):
            self.game_over = True
            LOGGER.info("Game over: %s cannot spawn", new_piece.name)
            return False

        self.piece = new_piece
        self.rotation = 0
        self.anchor_row = SPAWN_ROW
        self.anchor_col = SPAWN_COL
        self._paint(True)
        LOGGER.debug("Spawned %s", new_piece.name)
        return True

    def event(self, intent: Intent) -> bool:
        """Apply a movement or rotation ``intent`` to the falling piece.

        The move is taken only if the resulting placement stays on the grid and
        overlaps no other cell; otherwise the piece is left where it was.
        There are no wall kicks.  Returns whether the piece moved.
        """

        if self.game_over:
            LOGGER.debug("Event %s ignored: game already over", intent.name)
            return False

        d_row, d_col, d_rot = _INTENT_DELTAS[intent]
        row = self.anchor_row + d_row
        col = self.anchor_col + d_col
        rotation = (self.rotation + d_rot) % NUM_ROTATIONS

        self._paint(False)
        result = check_placement(self.board.grid, self.piece, row, col, rotation)
        if result is Placement.FITS:
            self.anchor_row, self.anchor_col, self.rotation = row, col, rotation
        else:
            LOGGER.debug("Event %s rejected: %s", intent.name, result.value)
        self._paint(True)
        return result is Placement.FITS

    def dump(self) -> str:
        """Return a text dump of the piece state followed by the grid."""

        lines = [
            "========TETRIS========",
            f"Piece: {self.piece.name}, Rotation: {self.rotation}, "
            f"ARow: {self.anchor_row}, ACol: {self.anchor_col}",
        ]
        for row in self.board.grid:
            lines.append("".join(str(int(cell)) for cell in row))
        return "\n".join(lines) + "\n"

    def __str__(self) -> str:
        return self.dump()

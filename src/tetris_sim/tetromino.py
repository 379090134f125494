"""Piece catalogue and rotation offset tables.

Every piece is assumed to pseudo-occupy a small bounding square anchored at
its top-left corner.  For each of the four rotation states (0, 90, 180 and 270
degrees clockwise) the table lists the four ``(row, col)`` offsets inside that
square which are actually occupied.  The offsets are hand-tuned literal data
rather than the result of rotating a base shape, because several pieces sit
irregularly inside their square.
"""

from __future__ import annotations

from enum import IntEnum
from typing import Tuple

Offset = Tuple[int, int]
RotationState = Tuple[Offset, Offset, Offset, Offset]

NUM_ROTATIONS = 4


class Piece(IntEnum):
    """The seven piece shapes, in spawn order."""

    O = 0
    L = 1
    J = 2
    T = 3
    Z = 4
    S = 5
    I = 6

    def successor(self) -> "Piece":
        """Return the piece spawned after this one, wrapping after ``I``."""

        return Piece((self + 1) % len(Piece))


# Indexed by ``Piece`` ordinal, then by rotation index.
ROTATION_OFFSETS: Tuple[Tuple[RotationState, ...], ...] = (
    # ##
    # ##
    (
        ((0, 0), (0, 1), (1, 0), (1, 1)),
        ((0, 0), (0, 1), (1, 0), (1, 1)),
        ((0, 0), (0, 1), (1, 0), (1, 1)),
        ((0, 0), (0, 1), (1, 0), (1, 1)),
    ),
    # #        ##
    # #   ###   #    #
    # ##, #  ,  #, ###
    (
        ((0, 0), (1, 0), (2, 0), (2, 1)),
        ((1, 0), (1, 1), (1, 2), (2, 0)),
        ((0, 0), (0, 1), (1, 1), (2, 1)),
        ((2, 0), (2, 1), (2, 2), (1, 1)),
    ),
    #  #       ##
    #  #  #    #   ###
    # ##, ###, # ,   #
    (
        ((2, 0), (2, 1), (0, 1), (1, 1)),
        ((1, 0), (2, 0), (2, 1), (2, 2)),
        ((0, 0), (1, 0), (2, 0), (0, 1)),
        ((1, 0), (1, 1), (1, 2), (2, 2)),
    ),
    # ###   #   #   #
    #  #   ##  ###  ##
    #    ,  #,    , #
    (
        ((0, 0), (0, 1), (0, 2), (1, 1)),
        ((1, 0), (0, 1), (1, 1), (2, 1)),
        ((1, 0), (0, 1), (1, 1), (1, 2)),
        ((0, 0), (1, 0), (2, 0), (1, 1)),
    ),
    # ##     #   ##     #
    #  ##   ##    ##   ##
    #    ,  #  ,     , #
    (
        ((0, 0), (0, 1), (1, 1), (1, 2)),
        ((1, 0), (0, 1), (1, 1), (2, 0)),
        ((0, 0), (0, 1), (1, 1), (1, 2)),
        ((1, 0), (0, 1), (1, 1), (2, 0)),
    ),
    #  ##  #     ##   #
    # ##   ##   ##    ##
    #    ,  # ,     ,  #
    (
        ((1, 0), (0, 1), (1, 1), (0, 2)),
        ((0, 0), (1, 0), (1, 1), (2, 1)),
        ((1, 0), (0, 1), (1, 1), (0, 2)),
        ((0, 0), (1, 0), (1, 1), (2, 1)),
    ),
    # #
    # #  ####  #  ####
    # #        #
    # #,     , #,
    (
        ((0, 0), (1, 0), (2, 0), (3, 0)),
        ((1, 0), (1, 1), (1, 2), (1, 3)),
        ((0, 0), (1, 0), (2, 0), (3, 0)),
        ((1, 0), (1, 1), (1, 2), (1, 3)),
    ),
)


def offsets(piece: Piece, rotation: int) -> RotationState:
    """Return the four cell offsets for ``piece`` at ``rotation``.

    Parameters
    ----------
    piece:
        The :class:`Piece` to query.
    rotation:
        Rotation index in ``[0, 4)``; ``0`` is the spawn orientation and each
        step is a further 90 degrees clockwise.

    Raises:
        ValueError: If ``rotation`` is not a valid rotation index.
    """

    if not 0 <= rotation < NUM_ROTATIONS:
        raise ValueError(f"Invalid rotation: {rotation}")
    return ROTATION_OFFSETS[piece][rotation]

"""Clockwise rotation with a simple horizontal wall-kick table."""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np

from .board import Board
from .tetromino import Piece, Shape
from .utils import is_valid_placement

# Horizontal offsets tried, in order, after rotating.  There are no vertical
# kicks and no per-orientation tables.
KICK_OFFSETS: Tuple[int, ...] = (0, -1, 1, -2, 2)


def rotate_matrix(shape: Shape) -> Shape:
    """Return ``shape`` rotated 90 degrees clockwise.

    Equivalent to transposing the matrix and reversing every row.
    """

    rotated = np.rot90(np.asarray(shape, dtype=np.uint8), k=-1)
    return tuple(tuple(int(v) for v in row) for row in rotated)


def try_rotate(piece: Piece, board: Board) -> Optional[Piece]:
    """Return the rotated piece after the first kick that fits, or ``None``."""

    rotated = piece.with_shape(rotate_matrix(piece.shape))
    for dx in KICK_OFFSETS:
        candidate = rotated.moved(dx, 0)
        if is_valid_placement(candidate, board):
            return candidate
    return None

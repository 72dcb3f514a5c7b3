"""Tetromino definitions and the immutable falling piece.

Each tetromino type owns a canonical square shape matrix.  A :class:`Piece`
couples a type with its *current* matrix (rotations are applied to the matrix
itself, there is no per-orientation index) and the board position of the
matrix's top-left corner.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Tuple

Shape = Tuple[Tuple[int, ...], ...]


class TetrominoType(str, Enum):
    """Enumeration of the seven standard tetromino shapes."""

    I = "I"
    O = "O"
    T = "T"
    S = "S"
    Z = "Z"
    J = "J"
    L = "L"


# Spawn orientation of every tetromino.  Matrices are square so that rotating
# them keeps the bounding box size unchanged.
TETROMINO_SHAPES: Dict[TetrominoType, Shape] = {
    TetrominoType.I: (
        (0, 0, 0, 0),
        (1, 1, 1, 1),
        (0, 0, 0, 0),
        (0, 0, 0, 0),
    ),
    TetrominoType.O: (
        (1, 1),
        (1, 1),
    ),
    TetrominoType.T: (
        (0, 1, 0),
        (1, 1, 1),
        (0, 0, 0),
    ),
    TetrominoType.S: (
        (0, 1, 1),
        (1, 1, 0),
        (0, 0, 0),
    ),
    TetrominoType.Z: (
        (1, 1, 0),
        (0, 1, 1),
        (0, 0, 0),
    ),
    TetrominoType.J: (
        (1, 0, 0),
        (1, 1, 1),
        (0, 0, 0),
    ),
    TetrominoType.L: (
        (0, 0, 1),
        (1, 1, 1),
        (0, 0, 0),
    ),
}


def shape_cells(shape: Shape) -> List[Tuple[int, int]]:
    """Return the ``(row, col)`` offsets of the occupied cells in ``shape``."""

    return [
        (r, c)
        for r, row in enumerate(shape)
        for c, filled in enumerate(row)
        if filled
    ]


@dataclass(frozen=True)
class Piece:
    """Active (or held) piece.

    ``position`` is the ``(row, col)`` of the top-left corner of the shape's
    bounding box.  Rows may be negative while the piece is partially above the
    visible board.
    """

    shape_type: TetrominoType
    shape: Shape
    position: Tuple[int, int] = (0, 0)

    @classmethod
    def spawn(cls, shape_type: TetrominoType, board_width: int) -> "Piece":
        """Create ``shape_type`` in its canonical orientation at the spawn point.

        The piece is centred horizontally on the top row of the board.
        """

        shape = TETROMINO_SHAPES[shape_type]
        col = (board_width - len(shape[0])) // 2
        return cls(shape_type, shape, (0, col))

    @property
    def size(self) -> int:
        return len(self.shape)

    def moved(self, dx: int, dy: int) -> "Piece":
        """Return a copy translated by ``dx`` columns and ``dy`` rows."""

        row, col = self.position
        return Piece(self.shape_type, self.shape, (row + dy, col + dx))

    def with_shape(self, shape: Shape) -> "Piece":
        return Piece(self.shape_type, shape, self.position)

    def blocks(self) -> List[Tuple[int, int]]:
        """Return the global block coordinates for this piece."""

        row, col = self.position
        return [(row + dr, col + dc) for dr, dc in shape_cells(self.shape)]

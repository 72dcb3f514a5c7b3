"""Board representation for the playfield."""

from __future__ import annotations

from typing import Iterable, List, Optional

import numpy as np
from numpy.typing import NDArray

from .tetromino import Piece, TetrominoType


# Dimensions of the standard board.
WIDTH = 10
HEIGHT = 20

Grid = NDArray[np.uint8]

# Mapping from ``TetrominoType`` to the integer stored in the grid.  ``0``
# represents an empty cell.
PIECE_VALUES = {t: i + 1 for i, t in enumerate(TetrominoType)}
VALUE_PIECES = {v: t for t, v in PIECE_VALUES.items()}


def create_empty_grid() -> Grid:
    """Return a new empty board grid filled with zeros."""

    return np.zeros((HEIGHT, WIDTH), dtype=np.uint8)


class Board:
    """Fixed-size grid of locked cells.

    The dimensions never change; only cell contents do.  Row ``0`` is the top
    of the playfield.
    """

    width: int = WIDTH
    height: int = HEIGHT

    def __init__(self, grid: Optional[Grid] = None) -> None:
        if grid is None:
            grid = create_empty_grid()
        elif grid.shape != (self.height, self.width):
            raise ValueError(f"Grid must be {self.height}x{self.width}, got {grid.shape}")
        self.grid: Grid = grid

    def copy(self) -> "Board":
        return Board(self.grid.copy())

    def get_cell(self, row: int, col: int) -> int:
        """Safely return the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            return int(self.grid[row, col])
        raise IndexError("Cell out of bounds")

    def set_cell(self, row: int, col: int, value: int) -> None:
        """Safely set the value at ``(row, col)``.

        Raises:
            IndexError: If the coordinates are outside the board.
        """
        if 0 <= row < self.height and 0 <= col < self.width:
            self.grid[row, col] = np.uint8(value)
        else:
            raise IndexError("Cell out of bounds")

    def cell_type(self, row: int, col: int) -> Optional[TetrominoType]:
        """Return the tetromino type locked at ``(row, col)`` or ``None``."""

        return VALUE_PIECES.get(self.get_cell(row, col))

    def is_empty(self, row: int, col: int) -> bool:
        """Return ``True`` if the cell at ``(row, col)`` is empty.

        Any coordinates outside the board are treated as occupied.
        """

        if 0 <= row < self.height and 0 <= col < self.width:
            return bool(self.grid[row, col] == 0)
        return False

    def lock_piece(self, piece: Piece) -> None:
        """Write the piece's blocks into the grid.

        Blocks still above the top edge are discarded; a piece is only locked
        after passing placement validation so no block can be off the sides or
        below the floor.
        """

        value = np.uint8(PIECE_VALUES[piece.shape_type])
        for row, col in piece.blocks():
            if 0 <= row < self.height and 0 <= col < self.width:
                self.grid[row, col] = value

    def full_rows(self) -> List[int]:
        """Return the indices of completely filled rows, top to bottom."""

        full = np.all(self.grid != 0, axis=1)
        return [int(i) for i in np.flatnonzero(full)]

    def remove_rows(self, rows: Iterable[int]) -> int:
        """Remove ``rows`` in a single collapse and return how many were removed.

        Remaining rows keep their order and drop down; empty rows are added at
        the top so the board height is unchanged.
        """

        indices = sorted(set(rows))
        if not indices:
            return 0
        if indices[0] < 0 or indices[-1] >= self.height:
            raise IndexError("Row out of bounds")
        keep = np.ones(self.height, dtype=bool)
        keep[indices] = False
        new_rows = np.zeros((len(indices), self.width), dtype=self.grid.dtype)
        self.grid = np.vstack((new_rows, self.grid[keep]))
        return len(indices)

"""Utility helpers for the engine: collision, ghost projection and timing."""

from __future__ import annotations

from typing import List, Optional

from .board import Board, PIECE_VALUES
from .config import DEFAULT_CONFIG, GameConfig
from .tetromino import Piece


def gravity_interval_ms(level: int, config: GameConfig = DEFAULT_CONFIG) -> float:
    """Return the fall interval in milliseconds for ``level``.

    The delay shrinks exponentially with each level (levels start at ``1``)
    but never drops below ``config.min_speed_ms``.
    """

    delay = config.base_speed_ms * (config.speed_factor ** (level - 1))
    return max(config.min_speed_ms, delay)


def is_valid_placement(piece: Piece, board: Board) -> bool:
    """Return ``True`` if every block of ``piece`` fits on ``board``.

    Columns must lie inside the board and rows must be above the floor.  Rows
    above the top edge (negative) are allowed so pieces can spawn partially
    hidden; only blocks inside the board are checked against locked cells.
    """

    for row, col in piece.blocks():
        if not 0 <= col < board.width or row >= board.height:
            return False
        if row >= 0 and not board.is_empty(row, col):
            return False
    return True


def can_move(board: Board, piece: Piece, dx: int, dy: int) -> bool:
    """Return ``True`` if ``piece`` can move by ``dx`` and ``dy`` on ``board``."""

    return is_valid_placement(piece.moved(dx, dy), board)


def ghost_row(piece: Piece, board: Board) -> int:
    """Return how many rows ``piece`` can fall before it would collide.

    Shapes are irregular, so the offset is found by probing one row at a time.
    """

    offset = 0
    while can_move(board, piece, 0, offset + 1):
        offset += 1
    return offset


def render_grid(
    board: Board, active: Optional[Piece] = None, *, ghost: bool = True
) -> List[List[int]]:
    """Return a copy of the board grid with the active piece overlaid.

    Locked and active cells hold the piece value from ``PIECE_VALUES``.  When
    ``ghost`` is set, empty cells covered by the landing projection of the
    active piece hold the *negated* piece value.  The board itself is left
    untouched.
    """

    grid = [[int(v) for v in row] for row in board.grid]
    if active is None:
        return grid
    value = PIECE_VALUES[active.shape_type]
    if ghost:
        drop = ghost_row(active, board)
        if drop:
            for r, c in active.moved(0, drop).blocks():
                if 0 <= r < board.height and 0 <= c < board.width and not grid[r][c]:
                    grid[r][c] = -value
    for r, c in active.blocks():
        if 0 <= r < board.height and 0 <= c < board.width:
            grid[r][c] = value
    return grid

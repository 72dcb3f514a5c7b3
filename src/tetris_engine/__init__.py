"""Deterministic falling-block puzzle engine."""

from .bag import Bag
from .board import Board
from .config import GameConfig
from .game import Game, Snapshot
from .game_state import Event, EventKind, GameState
from .rotation import KICK_OFFSETS, rotate_matrix, try_rotate
from .schedule import Scheduler, Timer
from .scoring import clear_points, level_for_lines, score_clear
from .tetromino import Piece, TetrominoType, TETROMINO_SHAPES
from .themes import theme_for_level
from .utils import can_move, ghost_row, gravity_interval_ms, is_valid_placement, render_grid

__all__ = [
    "Bag",
    "Board",
    "Event",
    "EventKind",
    "Game",
    "GameConfig",
    "GameState",
    "KICK_OFFSETS",
    "Piece",
    "Scheduler",
    "Snapshot",
    "TETROMINO_SHAPES",
    "TetrominoType",
    "Timer",
    "can_move",
    "clear_points",
    "ghost_row",
    "gravity_interval_ms",
    "is_valid_placement",
    "level_for_lines",
    "render_grid",
    "rotate_matrix",
    "score_clear",
    "theme_for_level",
    "try_rotate",
]

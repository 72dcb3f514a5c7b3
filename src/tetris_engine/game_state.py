"""Immutable game state and the one-shot notifications it carries."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple

from .board import Board
from .tetromino import Piece, TetrominoType


class EventKind(str, Enum):
    """Notifications emitted by transitions for the presentation layer."""

    SPAWN = "spawn"
    LOCK = "lock"
    LINE_CLEAR = "line_clear"
    LEVEL_UP = "level_up"
    HARD_DROP = "hard_drop"
    HOLD = "hold"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class Event:
    """A transient notification.

    ``value`` carries the event payload: the number of rows for
    ``LINE_CLEAR``, the new level for ``LEVEL_UP`` and the number of cells
    dropped for ``HARD_DROP``.
    """

    kind: EventKind
    value: int = 0


@dataclass(frozen=True, eq=False)
class GameState:
    """Snapshot of a game session.

    Instances are never mutated; every transition in :mod:`tetris_engine.engine`
    returns a new one.  ``events`` only lists the notifications produced by the
    transition that created this state.
    """

    board: Board = field(default_factory=Board)
    active: Optional[Piece] = None
    next_type: Optional[TetrominoType] = None
    held: Optional[TetrominoType] = None
    can_hold: bool = True
    score: int = 0
    lines: int = 0
    level: int = 1
    combo: int = 0
    last_clear_was_tetris: bool = False
    clearing_rows: Tuple[int, ...] = ()
    is_playing: bool = False
    is_paused: bool = False
    game_over: bool = False
    events: Tuple[Event, ...] = ()

    @property
    def is_clearing(self) -> bool:
        return bool(self.clearing_rows)

    @property
    def accepts_input(self) -> bool:
        """``True`` when piece-manipulating inputs may take effect."""

        return (
            self.is_playing
            and not self.is_paused
            and not self.game_over
            and not self.clearing_rows
            and self.active is not None
        )

    def evolve(self, *events: Event, **changes) -> "GameState":
        """Return a copy with ``changes`` applied and ``events`` as its notifications."""

        return replace(self, events=tuple(events), **changes)

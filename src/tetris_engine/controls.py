"""Input mapping shared by front-ends.

Keys are identified by the names ``pygame.key.name`` reports.  Horizontal
moves go through a :class:`RepeatThrottle` so held keys cannot move the piece
every frame; the engine's own moves stay unconditional single steps.
"""

from __future__ import annotations

import time
from enum import Enum
from typing import Callable, Dict, Optional

from .game import Game


class Action(str, Enum):
    START = "start"
    PAUSE = "pause"
    LEFT = "left"
    RIGHT = "right"
    SOFT_DROP = "soft_drop"
    ROTATE = "rotate"
    HARD_DROP = "hard_drop"
    HOLD = "hold"


KEY_BINDINGS: Dict[str, Action] = {
    "left": Action.LEFT,
    "a": Action.LEFT,
    "right": Action.RIGHT,
    "d": Action.RIGHT,
    "down": Action.SOFT_DROP,
    "s": Action.SOFT_DROP,
    "up": Action.ROTATE,
    "w": Action.ROTATE,
    "x": Action.ROTATE,
    "space": Action.HARD_DROP,
    "c": Action.HOLD,
    "left shift": Action.HOLD,
    "right shift": Action.HOLD,
    "p": Action.PAUSE,
    "escape": Action.PAUSE,
}

# Keys that start a game while none is running.
START_KEYS = frozenset({"return", "space"})

HORIZONTAL = frozenset({Action.LEFT, Action.RIGHT})


class RepeatThrottle:
    """Reject triggers arriving sooner than ``interval_ms`` after the last one."""

    def __init__(
        self, interval_ms: float = 50.0, *, clock: Optional[Callable[[], float]] = None
    ) -> None:
        self.interval_ms = interval_ms
        self._clock = clock or time.monotonic
        self._last: Optional[float] = None

    def ready(self) -> bool:
        now = self._clock() * 1000.0
        if self._last is not None and now - self._last < self.interval_ms:
            return False
        self._last = now
        return True

    def reset(self) -> None:
        self._last = None


def action_for_key(key_name: str, *, playing: bool) -> Optional[Action]:
    if not playing:
        return Action.START if key_name in START_KEYS else None
    return KEY_BINDINGS.get(key_name)


def dispatch(game: Game, action: Action, throttle: Optional[RepeatThrottle] = None) -> bool:
    """Forward ``action`` to ``game``.

    Returns ``False`` when a horizontal move was dropped by ``throttle``.
    """

    if action in HORIZONTAL and throttle is not None and not throttle.ready():
        return False
    handlers = {
        Action.START: game.start,
        Action.PAUSE: game.toggle_pause,
        Action.LEFT: game.move_left,
        Action.RIGHT: game.move_right,
        Action.SOFT_DROP: game.soft_drop,
        Action.ROTATE: game.rotate_cw,
        Action.HARD_DROP: game.hard_drop,
        Action.HOLD: game.hold,
    }
    handlers[action]()
    return True

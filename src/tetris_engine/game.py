"""Game loop: owns the state, the bag and the timers.

:class:`Game` is the boundary the presentation layer talks to.  Each input
method applies one pure transition from :mod:`tetris_engine.engine`, runs the
spawn cycle when the active slot was emptied, re-arms timers and pushes a
:class:`Snapshot` to subscribers.  Time only passes through :meth:`Game.advance`,
which makes the loop fully deterministic under test.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from . import engine
from .bag import Bag
from .config import GameConfig
from .game_state import Event, EventKind, GameState
from .schedule import Scheduler, Timer
from .tetromino import TetrominoType
from .themes import LevelTheme, theme_for_level
from .utils import gravity_interval_ms, render_grid

LOGGER = logging.getLogger(__name__)

Transition = Callable[[GameState], GameState]


@dataclass(frozen=True)
class Snapshot:
    """Observable view of the game after a transition.

    ``board`` has the ghost and active piece merged in (see
    :func:`~tetris_engine.utils.render_grid`); the authoritative board never
    contains them.
    """

    board: List[List[int]]
    next_type: Optional[TetrominoType]
    hold_type: Optional[TetrominoType]
    can_hold: bool
    score: int
    lines: int
    level: int
    combo: int
    clearing_rows: Tuple[int, ...]
    is_playing: bool
    is_paused: bool
    game_over: bool
    events: Tuple[Event, ...]
    theme: LevelTheme

    def event(self, kind: EventKind) -> Optional[Event]:
        """Return the notification of ``kind`` carried by this snapshot, if any."""

        for evt in self.events:
            if evt.kind is kind:
                return evt
        return None


Listener = Callable[[Snapshot], None]


class Game:
    """Single-threaded controller for one game session at a time."""

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        *,
        rng: Optional[random.Random] = None,
        scheduler: Optional[Scheduler] = None,
    ) -> None:
        self.config = config or GameConfig()
        self._rng = rng if rng is not None else random.Random(self.config.seed)
        self.scheduler = scheduler or Scheduler()
        self.bag = Bag(self._rng)
        self.state = GameState()
        self._gravity_timer: Optional[Timer] = None
        self._gravity_level = 0
        self._clear_timer: Optional[Timer] = None
        self._listeners: List[Listener] = []

    # ------------------------------------------------------------------
    # Observation
    # ------------------------------------------------------------------
    @property
    def running(self) -> bool:
        """``True`` while gravity should be ticking."""

        s = self.state
        return s.is_playing and not s.is_paused and not s.game_over

    @property
    def gravity_interval(self) -> float:
        return gravity_interval_ms(self.state.level, self.config)

    def snapshot(self) -> Snapshot:
        s = self.state
        return Snapshot(
            board=render_grid(s.board, s.active),
            next_type=s.next_type,
            hold_type=s.held,
            can_hold=s.can_hold,
            score=s.score,
            lines=s.lines,
            level=s.level,
            combo=s.combo,
            clearing_rows=s.clearing_rows,
            is_playing=s.is_playing,
            is_paused=s.is_paused,
            game_over=s.game_over,
            events=s.events,
            theme=theme_for_level(s.level),
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener`` for snapshots; returns a function that unsubscribes."""

        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------
    def start(self) -> None:
        """Begin a new game from idle or after a game over.

        Everything is reinitialised, including a fresh bag; pending timers
        from the previous session are cancelled.
        """

        if self.state.is_playing:
            LOGGER.debug("Start ignored: game already running")
            return
        self.scheduler.cancel_all()
        self._gravity_timer = None
        self._clear_timer = None
        self.bag = Bag(self._rng)
        previous = self.state
        self.state = engine.new_game(self.bag)
        LOGGER.info("Game started")
        self._after_transition(previous)

    def toggle_pause(self) -> None:
        if self._apply(engine.toggle_pause):
            LOGGER.info("Paused" if self.state.is_paused else "Resumed")

    def move_left(self) -> None:
        self._apply(engine.move_left)

    def move_right(self) -> None:
        self._apply(engine.move_right)

    def soft_drop(self) -> None:
        self._apply(engine.soft_drop)

    def rotate_cw(self) -> None:
        self._apply(engine.rotate_cw)

    def hard_drop(self) -> None:
        self._apply(engine.hard_drop)

    def hold(self) -> None:
        self._apply(engine.hold)

    def advance(self, elapsed_ms: float) -> int:
        """Let ``elapsed_ms`` of game time pass, firing any due timers."""

        return self.scheduler.advance(elapsed_ms)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _gravity_tick(self) -> None:
        self._apply(engine.apply_gravity)

    def _finish_clear(self) -> None:
        self._clear_timer = None
        self._apply(lambda s: engine.complete_clear(s, self.config.lines_per_level))

    def _apply(self, transition: Transition) -> bool:
        """Run ``transition`` plus the spawn cycle; return ``False`` on a no-op."""

        previous = self.state
        state = transition(previous)
        if state is previous:
            return False
        if state.active is None:
            spawned = engine.spawn(state, self.bag)
            if spawned is not state:
                state = spawned.evolve(*state.events, *spawned.events)
        self.state = state
        self._after_transition(previous)
        return True

    def _after_transition(self, previous: GameState) -> None:
        self._log_events()
        self._sync_timers(previous)
        snap = self.snapshot()
        for listener in list(self._listeners):
            listener(snap)

    def _log_events(self) -> None:
        for evt in self.state.events:
            if evt.kind is EventKind.LINE_CLEAR:
                LOGGER.debug("Clearing %d row(s): %s", evt.value, self.state.clearing_rows)
            elif evt.kind is EventKind.LEVEL_UP:
                LOGGER.info("Level up: %d", evt.value)
            elif evt.kind is EventKind.HOLD:
                LOGGER.debug("Held %s", self.state.held.value)
            elif evt.kind is EventKind.GAME_OVER:
                LOGGER.info("Game over. Score: %d", self.state.score)

    def _sync_timers(self, previous: GameState) -> None:
        """Start, stop or re-arm timers to match the current state.

        Gravity restarts at the full interval whenever it is (re)started, so
        time spent paused does not carry over into the next drop.
        """

        if not self.running:
            self._cancel_gravity()
            if self._clear_timer is not None:
                self._clear_timer.cancel()
                self._clear_timer = None
            return

        if self._gravity_timer is None or self.state.level != self._gravity_level:
            self._cancel_gravity()
            self._gravity_level = self.state.level
            self._gravity_timer = self.scheduler.schedule(
                self.gravity_interval, self._gravity_tick, repeat=True, name="gravity"
            )
            if previous.is_playing and self.state.level != previous.level:
                LOGGER.debug("Gravity interval now %.1f ms", self.gravity_interval)

        if self.state.clearing_rows and self._clear_timer is None:
            self._clear_timer = self.scheduler.schedule(
                self.config.clear_delay_ms, self._finish_clear, name="line-clear"
            )

    def _cancel_gravity(self) -> None:
        if self._gravity_timer is not None:
            self._gravity_timer.cancel()
            self._gravity_timer = None

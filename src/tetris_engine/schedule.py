"""Cancellable timers driven by an explicit clock.

The game never relies on fire-and-forget callbacks.  Every delayed effect
(the gravity tick, the end of a line-clear animation) is an entry in a
:class:`Scheduler` that the owner advances with elapsed time, so pausing or
restarting can cancel pending work deterministically.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

LOGGER = logging.getLogger(__name__)


@dataclass
class Timer:
    """Handle for a scheduled callback."""

    due: float
    interval: float
    callback: Callable[[], None] = field(repr=False)
    repeat: bool = False
    name: Optional[str] = None
    order: int = 0
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def active(self) -> bool:
        return not self.cancelled


class Scheduler:
    """Virtual-clock timer queue.

    ``now`` only moves forward through :meth:`advance`.  Timers due at the
    same instant fire in the order they were scheduled; each callback runs to
    completion before the next one starts.
    """

    def __init__(self) -> None:
        self.now: float = 0.0
        self._timers: List[Timer] = []
        self._counter = itertools.count()

    def schedule(
        self,
        delay_ms: float,
        callback: Callable[[], None],
        *,
        repeat: bool = False,
        name: Optional[str] = None,
    ) -> Timer:
        """Run ``callback`` after ``delay_ms`` (and every ``delay_ms`` if ``repeat``)."""

        if delay_ms < 0:
            raise ValueError("delay_ms cannot be negative")
        if repeat and delay_ms == 0:
            raise ValueError("Repeating timers need a positive interval")
        timer = Timer(
            due=self.now + delay_ms,
            interval=delay_ms,
            callback=callback,
            repeat=repeat,
            name=name,
            order=next(self._counter),
        )
        self._timers.append(timer)
        return timer

    def cancel_all(self) -> None:
        for timer in self._timers:
            timer.cancel()
        if self._timers:
            LOGGER.debug("Cancelled %d pending timer(s)", len(self._timers))
        self._timers.clear()

    def pending(self) -> List[Timer]:
        """Return active timers sorted by due time."""

        self._timers = [t for t in self._timers if t.active]
        return sorted(self._timers, key=lambda t: (t.due, t.order))

    def advance(self, elapsed_ms: float) -> int:
        """Move the clock forward and fire every timer that comes due.

        Returns the number of callbacks executed.
        """

        if elapsed_ms < 0:
            raise ValueError("elapsed_ms cannot be negative")
        target = self.now + elapsed_ms
        fired = 0
        while True:
            queue = self.pending()
            if not queue or queue[0].due > target:
                break
            timer = queue[0]
            self.now = timer.due
            if timer.repeat:
                timer.due += timer.interval
                timer.order = next(self._counter)
            else:
                self._timers.remove(timer)
                timer.cancelled = True
            timer.callback()
            fired += 1
        self.now = target
        return fired

"""7-bag randomizer."""

from __future__ import annotations

import random
from typing import List, Optional

from .tetromino import TetrominoType


class Bag:
    """Shuffled-permutation piece source.

    Every refill is a fresh permutation of all seven types, consumed from the
    end.  Any seven draws starting at a refill boundary therefore contain each
    type exactly once.  ``rng`` may be injected so tests can fix the order.
    """

    def __init__(self, rng: Optional[random.Random] = None, *, seed: Optional[int] = None) -> None:
        self._rng = rng if rng is not None else random.Random(seed)
        self._pieces: List[TetrominoType] = []

    def __len__(self) -> int:
        return len(self._pieces)

    def refill(self) -> None:
        """Replace the contents with a new uniformly shuffled permutation."""

        pieces = list(TetrominoType)
        # ``Random.shuffle`` is a Fisher-Yates shuffle.
        self._rng.shuffle(pieces)
        self._pieces = pieces

    def next_type(self) -> TetrominoType:
        if not self._pieces:
            self.refill()
        return self._pieces.pop()

    def peek_remaining(self) -> List[TetrominoType]:
        """Return the undrawn types in draw order."""

        return list(reversed(self._pieces))

"""Tunable engine settings."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class GameConfig:
    """Timing and progression parameters for a game session.

    All durations are in milliseconds.  ``seed`` seeds the bag randomizer when
    no explicit random source is handed to the game.
    """

    base_speed_ms: float = 800.0
    min_speed_ms: float = 50.0
    speed_factor: float = 0.85
    clear_delay_ms: float = 400.0
    lines_per_level: int = 10
    move_repeat_ms: float = 50.0
    seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.base_speed_ms <= 0 or self.min_speed_ms <= 0:
            raise ValueError("Gravity speeds must be positive")
        if self.min_speed_ms > self.base_speed_ms:
            raise ValueError("min_speed_ms cannot exceed base_speed_ms")
        if not 0 < self.speed_factor <= 1:
            raise ValueError("speed_factor must be in (0, 1]")
        if self.clear_delay_ms < 0 or self.move_repeat_ms < 0:
            raise ValueError("Delays cannot be negative")
        if self.lines_per_level <= 0:
            raise ValueError("lines_per_level must be positive")


DEFAULT_CONFIG = GameConfig()

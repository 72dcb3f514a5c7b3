"""Colour themes that change as the level rises."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class LevelTheme:
    hue: int
    name: str


# One theme per five levels; the last one covers every level from 36 up.
LEVEL_THEMES: Tuple[LevelTheme, ...] = (
    LevelTheme(180, "Cyan Ocean"),
    LevelTheme(280, "Purple Nebula"),
    LevelTheme(120, "Green Matrix"),
    LevelTheme(30, "Orange Sunset"),
    LevelTheme(340, "Pink Neon"),
    LevelTheme(200, "Blue Electric"),
    LevelTheme(60, "Gold Rush"),
    LevelTheme(0, "Red Fury"),
)

LEVELS_PER_THEME = 5


def theme_for_level(level: int) -> LevelTheme:
    index = min(max(level - 1, 0) // LEVELS_PER_THEME, len(LEVEL_THEMES) - 1)
    return LEVEL_THEMES[index]

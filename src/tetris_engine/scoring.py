"""Score, combo and level bookkeeping for line clears and hard drops."""

from __future__ import annotations

from dataclasses import dataclass

LINE_CLEAR_POINTS = {1: 100, 2: 300, 3: 500, 4: 800}
COMBO_BONUS = 50
BACK_TO_BACK_BONUS = 400
HARD_DROP_POINTS_PER_CELL = 2
TETRIS_LINES = 4


def clear_points(count: int, combo: int, last_clear_was_tetris: bool, level: int) -> int:
    """Return the points awarded for clearing ``count`` rows at once.

    ``combo`` is the counter *before* this clear; the back-to-back bonus only
    applies to a four-row clear directly following another one.
    """

    base = LINE_CLEAR_POINTS.get(count, 0)
    combo_bonus = combo * COMBO_BONUS * count
    back_to_back = BACK_TO_BACK_BONUS if last_clear_was_tetris and count == TETRIS_LINES else 0
    return (base + combo_bonus + back_to_back) * level


def level_for_lines(lines: int, lines_per_level: int = 10) -> int:
    return lines // lines_per_level + 1


def hard_drop_points(cells: int) -> int:
    return HARD_DROP_POINTS_PER_CELL * cells


@dataclass(frozen=True)
class ClearScore:
    """Outcome of scoring one clear event."""

    points: int
    combo: int
    last_clear_was_tetris: bool
    lines: int
    level: int
    leveled_up: bool


def score_clear(
    count: int,
    *,
    combo: int,
    last_clear_was_tetris: bool,
    lines: int,
    level: int,
    lines_per_level: int = 10,
) -> ClearScore:
    """Score a clear of ``count`` rows against the current counters.

    Points use the level in effect before the clear.  The combo counter
    increments on every clear, including the first of a chain.
    """

    points = clear_points(count, combo, last_clear_was_tetris, level)
    total_lines = lines + count
    new_level = level_for_lines(total_lines, lines_per_level)
    return ClearScore(
        points=points,
        combo=combo + 1,
        last_clear_was_tetris=count == TETRIS_LINES,
        lines=total_lines,
        level=max(level, new_level),
        leveled_up=new_level > level,
    )

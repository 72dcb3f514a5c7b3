import pytest

from tetris_engine.config import GameConfig
from tetris_engine.scoring import (
    clear_points,
    hard_drop_points,
    level_for_lines,
    score_clear,
)
from tetris_engine.themes import theme_for_level
from tetris_engine.utils import gravity_interval_ms


@pytest.mark.parametrize(
    "count, combo, b2b, level, expected",
    [
        (0, 0, False, 1, 0),
        (1, 0, False, 1, 100),
        (2, 3, False, 3, (300 + 300) * 3),
        (4, 0, False, 1, 800),
        (4, 0, True, 1, 1200),
        (4, 1, True, 2, (800 + 200 + 400) * 2),
        (3, 0, True, 1, 500),
    ],
)
def test_clear_points(count, combo, b2b, level, expected):
    assert clear_points(count, combo, b2b, level) == expected


def test_back_to_back_only_on_second_tetris():
    first = score_clear(4, combo=0, last_clear_was_tetris=False, lines=0, level=1)
    second = score_clear(
        4,
        combo=first.combo,
        last_clear_was_tetris=first.last_clear_was_tetris,
        lines=first.lines,
        level=first.level,
    )
    assert first.points == 800
    assert second.points == 800 + 1 * 50 * 4 + 400


def test_combo_increments_and_tetris_flag_tracks_last_clear():
    result = score_clear(1, combo=0, last_clear_was_tetris=True, lines=0, level=1)
    assert result.points == 100
    assert result.combo == 1
    assert result.last_clear_was_tetris is False


def test_tenth_line_levels_up():
    result = score_clear(1, combo=0, last_clear_was_tetris=False, lines=9, level=1)
    assert result.lines == 10
    assert result.level == 2
    assert result.leveled_up
    # Points use the level before the clear.
    assert result.points == 100


def test_level_for_lines():
    assert [level_for_lines(n) for n in (0, 9, 10, 25)] == [1, 1, 2, 3]
    assert level_for_lines(10, lines_per_level=5) == 3


def test_hard_drop_points():
    assert hard_drop_points(5) == 10
    assert hard_drop_points(0) == 0


def test_gravity_interval_speeds_up_with_floor():
    assert gravity_interval_ms(1) == pytest.approx(800.0)
    assert gravity_interval_ms(2) == pytest.approx(680.0)
    assert gravity_interval_ms(2) < gravity_interval_ms(1)
    assert gravity_interval_ms(40) == 50.0
    config = GameConfig(base_speed_ms=1000, min_speed_ms=100, speed_factor=0.5)
    assert gravity_interval_ms(2, config) == pytest.approx(500.0)
    assert gravity_interval_ms(10, config) == 100.0


def test_config_validation():
    with pytest.raises(ValueError):
        GameConfig(base_speed_ms=0)
    with pytest.raises(ValueError):
        GameConfig(min_speed_ms=900)
    with pytest.raises(ValueError):
        GameConfig(lines_per_level=0)


def test_level_themes():
    assert theme_for_level(1).name == "Cyan Ocean"
    assert theme_for_level(5).name == "Cyan Ocean"
    assert theme_for_level(6).name == "Purple Nebula"
    assert theme_for_level(36).name == "Red Fury"
    assert theme_for_level(99).hue == 0

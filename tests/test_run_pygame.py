from tetris_engine.board import Board
from tetris_engine.run_pygame import (
    BANNER_MS,
    CLEAR_SHAKE_MS,
    FLASH_MS,
    SCORE_POP_MS,
    SHAKE_MS,
    Effects,
    GameRunner,
)
from tetris_engine.tetromino import Piece, TetrominoType


def test_effects_expire_after_duration():
    effects = Effects()
    effects.trigger("flash", 300)
    effects.update(299)
    assert effects.active("flash")
    effects.update(1)
    assert not effects.active("flash")


def test_hard_drop_triggers_shake():
    runner = GameRunner(seed=0)
    runner.game.start()
    runner.game.hard_drop()
    assert runner.effects.active("shake")
    runner.update(SHAKE_MS)
    assert not runner.effects.active("shake")


def test_line_clear_and_level_up_trigger_effects():
    runner = GameRunner(seed=0)
    runner.game.start()
    board = Board()
    board.grid[19] = 1
    board.grid[19, 3:7] = 0
    piece = Piece.spawn(TetrominoType.I, board.width).moved(0, 18)
    runner.game.state = runner.game.state.evolve(board=board, active=piece, lines=9)

    runner.game.soft_drop()
    assert runner.effects.active("flash")

    runner.update(FLASH_MS + 100)
    assert not runner.effects.active("flash")
    assert runner.effects.active("level_up")
    runner.update(BANNER_MS)
    assert not runner.effects.active("level_up")


def test_shorter_trigger_keeps_longer_effect():
    effects = Effects()
    effects.trigger("shake", 300)
    effects.trigger("shake", 150)
    effects.update(200)
    assert effects.active("shake")


def test_line_clear_shakes_and_pops_score():
    runner = GameRunner(seed=0)
    runner.game.start()
    board = Board()
    board.grid[19] = 1
    board.grid[19, 3:7] = 0
    piece = Piece.spawn(TetrominoType.I, board.width).moved(0, 18)
    runner.game.state = runner.game.state.evolve(board=board, active=piece)

    runner.game.soft_drop()
    assert runner.effects.active("shake")
    assert runner.effects.active("score_pop")

    runner.update(SHAKE_MS)
    assert runner.effects.active("shake")
    runner.update(max(CLEAR_SHAKE_MS, SCORE_POP_MS) - SHAKE_MS)
    assert not runner.effects.active("shake")
    assert not runner.effects.active("score_pop")

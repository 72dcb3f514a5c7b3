import random

import pytest

from tetris_engine.board import Board
from tetris_engine.game import Game
from tetris_engine.game_state import EventKind
from tetris_engine.tetromino import Piece, TetrominoType
from tetris_engine.utils import is_valid_placement


class NoShuffle:
    def shuffle(self, seq) -> None:
        pass


def _started_game() -> Game:
    game = Game(rng=NoShuffle())
    game.start()
    return game


def _prime_single_clear(game: Game, **changes) -> None:
    board = Board()
    board.grid[19] = 1
    board.grid[19, 3:7] = 0
    piece = Piece.spawn(TetrominoType.I, board.width).moved(0, 18)
    game.state = game.state.evolve(board=board, active=piece, **changes)


def test_start_pushes_snapshot_and_arms_gravity():
    game = Game(rng=NoShuffle())
    snaps = []
    game.subscribe(snaps.append)
    game.start()

    assert len(snaps) == 1
    snap = snaps[0]
    assert snap.is_playing and not snap.is_paused and not snap.game_over
    assert snap.next_type is TetrominoType.J
    assert snap.theme.name == "Cyan Ocean"
    assert [t.name for t in game.scheduler.pending()] == ["gravity"]


def test_gravity_tick_moves_piece_one_row_per_interval():
    game = _started_game()
    row = game.state.active.position[0]
    game.advance(799)
    assert game.state.active.position[0] == row
    game.advance(1)
    assert game.state.active.position[0] == row + 1
    game.advance(1600)
    assert game.state.active.position[0] == row + 3


def test_pause_stops_timer_and_resume_restarts_fresh():
    game = _started_game()
    game.advance(500)
    game.toggle_pause()
    assert game.state.is_paused
    assert game.scheduler.pending() == []
    position = game.state.active.position
    game.advance(5000)
    assert game.state.active.position == position

    game.toggle_pause()
    game.advance(799)
    assert game.state.active.position == position
    game.advance(1)
    assert game.state.active.position[0] == position[0] + 1


def test_clear_window_suspends_gravity_and_spawn():
    game = _started_game()
    snaps = []
    game.subscribe(snaps.append)
    _prime_single_clear(game)

    game.soft_drop()

    assert game.state.clearing_rows == (19,)
    assert game.state.active is None
    assert snaps[-1].event(EventKind.LINE_CLEAR).value == 1
    assert snaps[-1].clearing_rows == (19,)

    count = len(snaps)
    game.move_left()
    game.rotate_cw()
    game.advance(399)
    assert len(snaps) == count
    assert game.state.clearing_rows == (19,)

    game.advance(1)
    assert game.state.clearing_rows == ()
    assert game.state.score == 100
    assert game.state.active.shape_type is TetrominoType.J
    assert game.state.next_type is TetrominoType.Z
    assert snaps[-1].event(EventKind.SPAWN) is not None


def test_pausing_during_clear_rearms_full_window():
    game = _started_game()
    _prime_single_clear(game)
    game.soft_drop()
    game.advance(200)
    game.toggle_pause()
    game.advance(1000)
    assert game.state.clearing_rows == (19,)
    game.toggle_pause()
    game.advance(399)
    assert game.state.clearing_rows == (19,)
    game.advance(1)
    assert game.state.clearing_rows == ()


def test_level_up_reschedules_gravity():
    game = _started_game()
    snaps = []
    game.subscribe(snaps.append)
    _prime_single_clear(game, lines=9)
    game.soft_drop()
    game.advance(400)

    assert game.state.level == 2
    assert snaps[-1].event(EventKind.LEVEL_UP).value == 2
    assert game.gravity_interval == pytest.approx(680.0)
    gravity = [t for t in game.scheduler.pending() if t.name == "gravity"]
    assert len(gravity) == 1
    assert gravity[0].interval == pytest.approx(680.0)

    row = game.state.active.position[0]
    game.advance(679)
    assert game.state.active.position[0] == row
    game.advance(1)
    assert game.state.active.position[0] == row + 1


def test_spawn_collision_stops_timer_until_restart():
    game = _started_game()
    board = Board()
    board.grid[0:2, 3:7] = 1
    piece = Piece.spawn(TetrominoType.O, board.width).moved(4, 18)
    game.state = game.state.evolve(board=board, active=piece)
    snaps = []
    game.subscribe(snaps.append)

    game.soft_drop()

    assert game.state.game_over
    assert not game.state.is_playing
    assert game.scheduler.pending() == []
    assert snaps[-1].event(EventKind.GAME_OVER) is not None
    game.hard_drop()
    game.toggle_pause()
    assert len(snaps) == 1

    game.start()
    assert game.state.is_playing
    assert game.state.score == 0
    assert not game.state.board.grid.any()
    assert [t.name for t in game.scheduler.pending()] == ["gravity"]


def test_hard_drop_scores_and_spawns_next():
    game = _started_game()
    game.hard_drop()
    assert game.state.score == 36
    assert game.state.active.shape_type is TetrominoType.J
    assert game.state.can_hold


def test_hold_once_per_spawn():
    game = _started_game()
    game.hold()
    assert game.state.held is TetrominoType.L
    assert game.state.active.shape_type is TetrominoType.J
    assert game.state.next_type is TetrominoType.Z
    assert game.state.can_hold is True

    game.hold()
    assert game.state.held is TetrominoType.J
    assert game.state.active.shape_type is TetrominoType.L
    assert game.state.can_hold is False

    game.hold()
    assert game.state.held is TetrominoType.J
    assert game.state.active.shape_type is TetrominoType.L

    game.hard_drop()
    assert game.state.active.shape_type is TetrominoType.Z
    assert game.state.can_hold
    game.hold()
    assert game.state.held is TetrominoType.Z
    assert game.state.active.shape_type is TetrominoType.J


def test_start_ignored_while_playing():
    game = _started_game()
    game.move_left()
    state = game.state
    game.start()
    assert game.state is state


def test_unsubscribe_stops_pushes():
    game = Game(rng=NoShuffle())
    snaps = []
    unsubscribe = game.subscribe(snaps.append)
    game.start()
    unsubscribe()
    game.move_left()
    assert len(snaps) == 1


def test_random_play_keeps_active_piece_valid():
    game = Game(rng=random.Random(1234))
    game.start()
    rng = random.Random(99)
    actions = [
        game.move_left,
        game.move_right,
        game.rotate_cw,
        game.soft_drop,
        game.hard_drop,
        game.hold,
        lambda: game.advance(150),
    ]
    for _ in range(2000):
        rng.choice(actions)()
        state = game.state
        assert state.board.grid.shape == (Board.height, Board.width)
        if state.active is not None:
            assert is_valid_placement(state.active, state.board)
        else:
            assert state.clearing_rows or not state.is_playing
        if state.game_over:
            game.start()

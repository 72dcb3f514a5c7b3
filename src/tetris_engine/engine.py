"""Pure state transitions.

Every function takes a :class:`GameState` and returns the next one without
mutating its input; the board is copied before anything is written to it.  A
transition whose preconditions are not met returns the *same* state object,
which lets callers detect no-ops with ``is``.

Spawning draws from a :class:`~tetris_engine.bag.Bag`, the only stateful
collaborator.  Transitions that leave the active slot empty (a lock or a hold
into an empty slot) do not spawn by themselves; the game loop runs
:func:`spawn` afterwards unless a line clear is in progress.
"""

from __future__ import annotations

from .bag import Bag
from .board import Board
from .game_state import Event, EventKind, GameState
from .rotation import try_rotate
from .scoring import hard_drop_points, score_clear
from .tetromino import Piece
from .utils import can_move, ghost_row, is_valid_placement


def new_game(bag: Bag) -> GameState:
    """Return a fresh playing state with the first piece already spawned."""

    state = GameState(is_playing=True, next_type=bag.next_type())
    return spawn(state, bag)


def _top_out(state: GameState) -> GameState:
    return state.evolve(
        Event(EventKind.GAME_OVER),
        active=None,
        is_playing=False,
        is_paused=False,
        game_over=True,
    )


def spawn(state: GameState, bag: Bag) -> GameState:
    """Move the queued type into the active slot and queue a new one.

    Every spawn from the bag re-arms the hold slot.  A piece whose spawn
    cells are already occupied ends the game.
    """

    if (
        not state.is_playing
        or state.game_over
        or state.clearing_rows
        or state.active is not None
    ):
        return state
    shape_type = state.next_type if state.next_type is not None else bag.next_type()
    piece = Piece.spawn(shape_type, state.board.width)
    if not is_valid_placement(piece, state.board):
        return _top_out(state)
    return state.evolve(
        Event(EventKind.SPAWN), active=piece, next_type=bag.next_type(), can_hold=True
    )


def _shift(state: GameState, dx: int) -> GameState:
    if not state.accepts_input or not can_move(state.board, state.active, dx, 0):
        return state
    return state.evolve(active=state.active.moved(dx, 0))


def move_left(state: GameState) -> GameState:
    return _shift(state, -1)


def move_right(state: GameState) -> GameState:
    return _shift(state, 1)


def rotate_cw(state: GameState) -> GameState:
    """Rotate clockwise, applying the first wall kick that fits."""

    if not state.accepts_input:
        return state
    rotated = try_rotate(state.active, state.board)
    if rotated is None:
        return state
    return state.evolve(active=rotated)


def apply_gravity(state: GameState) -> GameState:
    """Move the active piece down one row, locking it if it cannot move."""

    if not state.accepts_input:
        return state
    if can_move(state.board, state.active, 0, 1):
        return state.evolve(active=state.active.moved(0, 1))
    return lock(state)


# A soft drop is a player-triggered gravity step and awards nothing.
soft_drop = apply_gravity


def hard_drop(state: GameState) -> GameState:
    """Drop the active piece to its landing row and lock it.

    Two points per row travelled are awarded before the lock is resolved.
    """

    if not state.accepts_input:
        return state
    distance = ghost_row(state.active, state.board)
    dropped = state.evolve(
        active=state.active.moved(0, distance),
        score=state.score + hard_drop_points(distance),
    )
    locked = lock(dropped)
    return locked.evolve(Event(EventKind.HARD_DROP, distance), *locked.events)


def lock(state: GameState) -> GameState:
    """Commit the active piece to the board and look for completed rows.

    Without completed rows the combo resets and the active slot is emptied
    for the next spawn.  Otherwise the rows are recorded in ``clearing_rows``
    and stay on the board until :func:`complete_clear` runs.
    """

    if state.active is None or state.clearing_rows:
        return state
    board = state.board.copy()
    board.lock_piece(state.active)
    rows = board.full_rows()
    if not rows:
        return state.evolve(Event(EventKind.LOCK), board=board, active=None, combo=0)
    return state.evolve(
        Event(EventKind.LOCK),
        Event(EventKind.LINE_CLEAR, len(rows)),
        board=board,
        active=None,
        clearing_rows=tuple(rows),
    )


def complete_clear(state: GameState, lines_per_level: int = 10) -> GameState:
    """Remove the rows being cleared and apply the clear's score."""

    if not state.clearing_rows:
        return state
    board: Board = state.board.copy()
    count = board.remove_rows(state.clearing_rows)
    result = score_clear(
        count,
        combo=state.combo,
        last_clear_was_tetris=state.last_clear_was_tetris,
        lines=state.lines,
        level=state.level,
        lines_per_level=lines_per_level,
    )
    events = [Event(EventKind.LEVEL_UP, result.level)] if result.leveled_up else []
    return state.evolve(
        *events,
        board=board,
        clearing_rows=(),
        score=state.score + result.points,
        combo=result.combo,
        last_clear_was_tetris=result.last_clear_was_tetris,
        lines=result.lines,
        level=result.level,
    )


def hold(state: GameState) -> GameState:
    """Swap the active piece into the hold slot.

    A previously held type comes back as a freshly spawned piece; with an
    empty hold slot the active slot is left empty.  Allowed once per spawn.
    """

    if not state.accepts_input or not state.can_hold:
        return state
    current = state.active.shape_type
    if state.held is None:
        return state.evolve(Event(EventKind.HOLD), active=None, held=current, can_hold=False)
    piece = Piece.spawn(state.held, state.board.width)
    swapped = state.evolve(held=current, can_hold=False, active=None)
    if not is_valid_placement(piece, state.board):
        return _top_out(swapped)
    return swapped.evolve(Event(EventKind.HOLD), active=piece)


def toggle_pause(state: GameState) -> GameState:
    if not state.is_playing or state.game_over:
        return state
    return state.evolve(is_paused=not state.is_paused)

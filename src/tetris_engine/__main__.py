"""Command-line entry point.

Run with: `python -m tetris_engine`

By default the pygame front-end opens.  ``--ascii`` instead prints a single
frame (board, ghost and active piece) from a freshly started game, useful as
a minimal smoke test that renderers see more than a blank grid.
"""

from __future__ import annotations

import argparse
import logging
from typing import List, Optional

from .game import Game, Snapshot
from .config import GameConfig


def format_grid(grid: List[List[int]]) -> str:
    chars = []
    for row in grid:
        chars.append("".join("#" if cell > 0 else "+" if cell < 0 else "." for cell in row))
    return "\n".join(chars)


def ascii_frame(seed: Optional[int] = None) -> str:
    game = Game(GameConfig(seed=seed))
    game.start()
    snap: Snapshot = game.snapshot()
    header = f"next={snap.next_type.value} level={snap.level} score={snap.score}"
    return header + "\n" + format_grid(snap.board)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--seed", type=int, default=None, help="Seed for the piece randomizer.")
    parser.add_argument("--ascii", action="store_true", help="Print one ASCII frame and exit.")
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Logging level (e.g. DEBUG, INFO, WARNING).",
    )
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.INFO), format="%(message)s")
    if args.ascii:
        print(ascii_frame(args.seed))
        return

    from .run_pygame import main as run_window

    run_window(seed=args.seed)


if __name__ == "__main__":
    main()

"""Simple pygame front-end for the engine.

This module is a thin presentation layer: it forwards keyboard input to a
:class:`~tetris_engine.game.Game`, advances the game clock by the frame time
and draws the snapshots it receives.  Visual effects (line-clear flash,
screen shake, score pop, level-up banner) are timed here; the engine only
reports that they happened.
"""

from __future__ import annotations

import asyncio
import logging
import random
from typing import Dict, Optional

import pygame

from .board import HEIGHT, PIECE_VALUES, WIDTH
from .config import GameConfig
from .controls import RepeatThrottle, action_for_key, dispatch
from .game import Game, Snapshot
from .game_state import EventKind
from .tetromino import TETROMINO_SHAPES, TetrominoType, shape_cells

LOGGER = logging.getLogger(__name__)

# Size of a single board cell in pixels
CELL_SIZE = 30
# Width of the side panels in cells
PANEL_CELLS = 5
# Frames per second to run the game loop at
FPS = 60

# Effect durations in milliseconds
FLASH_MS = 300
SHAKE_MS = 150
CLEAR_SHAKE_MS = 300
SCORE_POP_MS = 300
BANNER_MS = 1000
SHAKE_PX = 4

# Colours for each tetromino type
SHAPE_COLORS = {
    TetrominoType.I: (0, 255, 255),
    TetrominoType.O: (255, 255, 0),
    TetrominoType.T: (128, 0, 128),
    TetrominoType.S: (0, 255, 0),
    TetrominoType.Z: (255, 0, 0),
    TetrominoType.J: (0, 0, 255),
    TetrominoType.L: (255, 165, 0),
}

# Mapping from the integer stored in the board grid to a colour
CELL_COLORS = {0: (0, 0, 0)}
for shape, value in PIECE_VALUES.items():
    CELL_COLORS[value] = SHAPE_COLORS[shape]

GRID_LINE = (50, 50, 50)
FLASH_COLOR = (255, 255, 255)
TEXT_COLOR = (230, 230, 230)
POP_COLOR = (255, 215, 0)


class Effects:
    """Countdown timers for transient visual effects."""

    def __init__(self) -> None:
        self._remaining: Dict[str, float] = {}

    def trigger(self, name: str, duration_ms: float) -> None:
        """Start ``name`` or extend it; a shorter trigger never cuts one short."""

        self._remaining[name] = max(self._remaining.get(name, 0), duration_ms)

    def update(self, dt: float) -> None:
        for name in list(self._remaining):
            self._remaining[name] -= dt
            if self._remaining[name] <= 0:
                del self._remaining[name]

    def active(self, name: str) -> bool:
        return name in self._remaining

    def clear(self) -> None:
        self._remaining.clear()


def _background(snap: Snapshot) -> pygame.Color:
    color = pygame.Color(0, 0, 0)
    color.hsla = (snap.theme.hue, 60, 8, 100)
    return color


def _draw_cell(surface: pygame.Surface, x: int, y: int, color, *, ghost: bool = False) -> None:
    rect = pygame.Rect(x, y, CELL_SIZE, CELL_SIZE)
    if ghost:
        pygame.draw.rect(surface, color, rect, 2)
    else:
        pygame.draw.rect(surface, color, rect)
        pygame.draw.rect(surface, GRID_LINE, rect, 1)


def draw_board(surface: pygame.Surface, snap: Snapshot, origin: tuple[int, int], flash: bool) -> None:
    """Render the merged board grid, ghost cells included."""

    ox, oy = origin
    pygame.draw.rect(surface, (0, 0, 0), (ox, oy, WIDTH * CELL_SIZE, HEIGHT * CELL_SIZE))
    for r, row in enumerate(snap.board):
        for c, value in enumerate(row):
            x, y = ox + c * CELL_SIZE, oy + r * CELL_SIZE
            if flash and r in snap.clearing_rows:
                _draw_cell(surface, x, y, FLASH_COLOR)
            elif value > 0:
                _draw_cell(surface, x, y, CELL_COLORS[value])
            elif value < 0:
                _draw_cell(surface, x, y, CELL_COLORS[-value], ghost=True)
            else:
                pygame.draw.rect(surface, GRID_LINE, (x, y, CELL_SIZE, CELL_SIZE), 1)


def draw_preview(
    surface: pygame.Surface,
    font: pygame.font.Font,
    label: str,
    shape_type: Optional[TetrominoType],
    origin: tuple[int, int],
    dimmed: bool = False,
) -> None:
    ox, oy = origin
    surface.blit(font.render(label, True, TEXT_COLOR), (ox, oy))
    if shape_type is None:
        return
    color = SHAPE_COLORS[shape_type]
    if dimmed:
        color = tuple(v // 3 for v in color)
    size = CELL_SIZE * 2 // 3
    for r, c in shape_cells(TETROMINO_SHAPES[shape_type]):
        rect = pygame.Rect(ox + c * size, oy + 24 + r * size, size, size)
        pygame.draw.rect(surface, color, rect)


def draw_panel(
    surface: pygame.Surface,
    font: pygame.font.Font,
    snap: Snapshot,
    origin: tuple[int, int],
    pop: bool = False,
) -> None:
    ox, oy = origin
    lines = [
        f"SCORE {snap.score}",
        f"LINES {snap.lines}",
        f"LEVEL {snap.level}",
        snap.theme.name,
    ]
    if snap.combo > 1:
        lines.append(f"COMBO x{snap.combo}")
    for i, text in enumerate(lines):
        if i == 0 and pop:
            # Highlighted and nudged up while popping.
            surface.blit(font.render(text, True, POP_COLOR), (ox, oy - 3))
            continue
        surface.blit(font.render(text, True, TEXT_COLOR), (ox, oy + i * 24))


def draw_banner(surface: pygame.Surface, font: pygame.font.Font, text: str) -> None:
    label = font.render(text, True, TEXT_COLOR)
    rect = label.get_rect(center=surface.get_rect().center)
    surface.blit(label, rect)


class GameRunner:
    """Drive a :class:`Game` from the pygame event loop."""

    def __init__(self, config: Optional[GameConfig] = None, *, seed: Optional[int] = None) -> None:
        self.config = config or GameConfig(seed=seed)
        self.game = Game(self.config, rng=random.Random(self.config.seed))
        self.effects = Effects()
        self.throttle = RepeatThrottle(self.config.move_repeat_ms)
        self._snap: Snapshot = self.game.snapshot()
        self._running = False
        self.game.subscribe(self._on_snapshot)

    @property
    def running(self) -> bool:
        return self._running

    def _on_snapshot(self, snap: Snapshot) -> None:
        self._snap = snap
        if snap.event(EventKind.LINE_CLEAR):
            self.effects.trigger("flash", FLASH_MS)
            self.effects.trigger("shake", CLEAR_SHAKE_MS)
            self.effects.trigger("score_pop", SCORE_POP_MS)
            if snap.event(EventKind.LINE_CLEAR).value >= 2:
                self.effects.trigger("combo", BANNER_MS)
        if snap.event(EventKind.HARD_DROP):
            self.effects.trigger("shake", SHAKE_MS)
        if snap.event(EventKind.LEVEL_UP):
            self.effects.trigger("level_up", BANNER_MS)
        if snap.event(EventKind.GAME_OVER):
            self.effects.clear()

    def handle_key(self, event: pygame.event.Event) -> None:
        """Translate a key press into an engine input."""

        action = action_for_key(pygame.key.name(event.key), playing=self._snap.is_playing)
        if action is not None:
            dispatch(self.game, action, self.throttle)

    def update(self, dt: float) -> None:
        self.effects.update(dt)
        self.game.advance(dt)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font) -> None:
        snap = self._snap
        screen.fill(_background(snap))
        shake = SHAKE_PX if self.effects.active("shake") else 0
        board_origin = (PANEL_CELLS * CELL_SIZE, shake)
        draw_board(screen, snap, board_origin, self.effects.active("flash"))
        draw_preview(screen, font, "HOLD", snap.hold_type, (10, 10), dimmed=not snap.can_hold)
        draw_panel(screen, font, snap, (10, 6 * CELL_SIZE), pop=self.effects.active("score_pop"))
        right = (PANEL_CELLS + WIDTH) * CELL_SIZE + 10
        draw_preview(screen, font, "NEXT", snap.next_type, (right, 10))
        if snap.game_over:
            draw_banner(screen, font, f"GAME OVER - {snap.score}  (Enter)")
        elif not snap.is_playing:
            draw_banner(screen, font, "Press Enter to start")
        elif snap.is_paused:
            draw_banner(screen, font, "PAUSED")
        elif self.effects.active("level_up"):
            draw_banner(screen, font, f"LEVEL {snap.level}!")
        elif self.effects.active("combo") and snap.combo > 1:
            draw_banner(screen, font, f"{snap.combo}x COMBO!")

    async def run(self) -> None:
        pygame.init()
        size = ((WIDTH + 2 * PANEL_CELLS) * CELL_SIZE, HEIGHT * CELL_SIZE)
        screen = pygame.display.set_mode(size)
        pygame.display.set_caption("Tetris")
        pygame.key.set_repeat(170, 50)
        font = pygame.font.Font(None, 24)
        clock = pygame.time.Clock()
        LOGGER.info("Window opened")

        self._running = True
        while self._running:
            dt = clock.tick(FPS)
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self._running = False
                elif event.type == pygame.KEYDOWN:
                    self.handle_key(event)
            try:
                self.update(dt)
            except Exception:
                # Keep the window alive: log the failure and start over.
                LOGGER.exception("Crash detected, restarting")
                self.game = Game(self.config)
                self.game.subscribe(self._on_snapshot)
                self.effects.clear()
                self.game.start()
            self.draw(screen, font)
            pygame.display.set_caption(
                f"Tetris - {'Paused - ' if self._snap.is_paused else ''}Score: {self._snap.score}"
            )
            pygame.display.flip()
            # Yield to the host event loop to keep the UI responsive
            await asyncio.sleep(0)

        pygame.quit()
        LOGGER.info("Window closed")

    def stop(self) -> None:
        self._running = False


def main(seed: Optional[int] = None) -> None:
    asyncio.run(GameRunner(seed=seed).run())


if __name__ == "__main__":  # pragma: no cover - manual execution only
    main()

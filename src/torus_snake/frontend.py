"""Pygame window: keyboard input, frame pacing and drawing of snapshots."""

from __future__ import annotations

import enum
import logging

import pygame as pg

from torus_snake.config import GameConfig
from torus_snake.engine import GameEngine, Snapshot
from torus_snake.snake import Direction

logger = logging.getLogger(__name__)

BACKGROUND = (255, 255, 255)
BLOCK_COLOR = (0, 0, 0)
FOOD_COLOR = (200, 30, 30)
TEXT_COLOR = (90, 90, 90)


class Command(enum.Enum):
    """Non-directional key actions."""

    RESET = "reset"
    PAUSE = "pause"
    QUIT = "quit"


KEY_BINDINGS: dict[int, Direction | Command] = {
    pg.K_UP: Direction.UP,
    pg.K_DOWN: Direction.DOWN,
    pg.K_LEFT: Direction.LEFT,
    pg.K_RIGHT: Direction.RIGHT,
    pg.K_r: Command.RESET,
    pg.K_p: Command.PAUSE,
    pg.K_RETURN: Command.PAUSE,
    pg.K_ESCAPE: Command.QUIT,
}


def cell_rect(x: int, y: int, block_size: int) -> pg.Rect:
    """Screen rectangle covering grid cell (x, y)."""
    return pg.Rect(x * block_size, y * block_size, block_size, block_size)


def dispatch(engine: GameEngine, action: Direction | Command) -> bool:
    """Apply a key action to *engine*. Returns False when the game should quit."""
    if isinstance(action, Direction):
        engine.set_direction(action)
    elif action is Command.RESET:
        engine.reset()
    elif action is Command.PAUSE:
        engine.toggle_pause()
    elif action is Command.QUIT:
        return False
    return True


class PygameFrontend:
    """Owns the window and runs the input/update/render loop."""

    def __init__(self, engine: GameEngine) -> None:
        self.engine = engine
        self.config: GameConfig = engine.config
        self.surf: pg.Surface | None = None
        self.clock: pg.time.Clock | None = None
        self._font: pg.font.Font | None = None

    def open(self) -> None:
        pg.init()
        pg.display.set_caption("Snake")
        self.surf = pg.display.set_mode(
            (self.config.window_width, self.config.window_height),
        )
        self.clock = pg.time.Clock()
        self._font = pg.font.SysFont(None, 22)

    def close(self) -> None:
        try:
            pg.quit()
        finally:
            self.surf = None
            self.clock = None
            self._font = None

    def poll(self) -> bool:
        """Handle pending window events. Returns False on quit."""
        for event in pg.event.get():
            if event.type == pg.QUIT:
                return False
            if event.type != pg.KEYDOWN:
                continue
            action = KEY_BINDINGS.get(event.key)
            logger.debug("Key pressed: %s", pg.key.name(event.key))
            if action is not None and not dispatch(self.engine, action):
                return False
        return True

    def draw(self, snapshot: Snapshot) -> None:
        if self.surf is None:
            raise RuntimeError("Frontend not opened.")
        size = self.config.block_size
        self.surf.fill(BACKGROUND)
        for x, y in snapshot.snake:
            pg.draw.rect(self.surf, BLOCK_COLOR, cell_rect(x, y, size))
        if snapshot.food is not None:
            pg.draw.rect(self.surf, FOOD_COLOR, cell_rect(*snapshot.food, size))

        status = None
        if snapshot.won:
            status = f"You win! Score: {snapshot.score}  (R to restart)"
        elif snapshot.game_over:
            status = f"Game over. Score: {snapshot.score}  (R to restart)"
        elif snapshot.paused:
            status = "Paused"
        if status and self._font is not None:
            self.surf.blit(self._font.render(status, True, TEXT_COLOR), (6, 4))
        pg.display.flip()

    def run(self) -> None:
        """Loop until the window is closed or Escape is pressed."""
        self.open()
        try:
            running = True
            while running:
                dt = self.clock.tick(self.config.fps) / 1000.0
                running = self.poll()
                self.engine.update(dt)
                self.draw(self.engine.snapshot())
        finally:
            self.close()

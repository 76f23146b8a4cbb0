"""Session controller driving the grid from elapsed time and input intents."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from torus_snake.config import GameConfig
from torus_snake.grid import Grid, RandomSource, StepOutcome
from torus_snake.snake import Direction

logger = logging.getLogger(__name__)

INITIAL_DIRECTION = Direction.UP


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of a game for renderers.

    ``snake`` is ordered tail first, head last.
    """

    snake: tuple[tuple[int, int], ...]
    food: tuple[int, int] | None
    game_over: bool
    won: bool
    paused: bool
    score: int


class GameEngine:
    """Single-player, time-gated game controller.

    The engine owns the grid and the session flags. Call :meth:`update`
    once per frame with the elapsed time; a simulation step only runs once
    enough time has accumulated.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        rng: RandomSource | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.rng = rng
        self.want_direction: Direction | None = None
        self._new_session()

    def _new_session(self) -> None:
        self.grid = Grid.from_config(self.config, rng=self.rng)
        self.started = True
        self.direction = INITIAL_DIRECTION
        self.want_direction = None
        self.elapsed = 0.0
        self.update_period = self.config.update_period
        self.ticks = 0
        # A one-cell grid is already full before the first step.
        self.won = self.grid.food is None
        self.game_over = self.won
        if self.won:
            logger.info("Grid is full at start; nothing to play.")

    @property
    def score(self) -> int:
        return len(self.grid.snake) - 1

    @property
    def paused(self) -> bool:
        return not self.started

    # --- input ---

    def set_direction(self, direction: Direction) -> None:
        """Buffer *direction* for the next step; the latest intent wins."""
        if self.paused or self.game_over:
            return
        self.want_direction = direction

    def toggle_pause(self) -> None:
        self.started = not self.started
        logger.debug("Game %s.", "paused" if self.paused else "resumed")

    def reset(self) -> None:
        """Throw away the current session and start a fresh one."""
        self._new_session()
        logger.info("Game reset.")

    # --- simulation ---

    def update(self, dt: float) -> bool:
        """Feed *dt* seconds of elapsed time.

        Runs at most one step per call. When a step runs the accumulator
        goes back to zero, so time beyond one period is dropped. Returns
        whether a step ran.
        """
        if dt < 0:
            raise ValueError("Elapsed time must be non-negative.")
        if self.paused or self.game_over:
            return False
        self.elapsed += dt
        if self.elapsed < self.update_period:
            return False
        self.elapsed = 0.0
        self.step()
        return True

    def step(self) -> StepOutcome | None:
        """Advance the game by one tick; ``None`` when paused or over."""
        if self.paused or self.game_over:
            return None

        if self.want_direction is not None:
            if self.want_direction != self.direction.opposite:
                self.direction = self.want_direction
            self.want_direction = None

        outcome = self.grid.advance(self.direction)
        self.ticks += 1

        if outcome is StepOutcome.GREW:
            if self.config.variable_snake_speed:
                self.update_period = max(
                    self.update_period - self.config.speedup_step,
                    self.config.min_update_period,
                )
        elif outcome is StepOutcome.COLLIDED:
            self.game_over = True
            logger.info("Game over at tick %d with score %d.", self.ticks, self.score)
        elif outcome is StepOutcome.WON:
            self.won = True
            self.game_over = True
            logger.info("Grid filled at tick %d with score %d.", self.ticks, self.score)
        return outcome

    # --- views ---

    def snapshot(self) -> Snapshot:
        food = self.grid.food
        return Snapshot(
            snake=tuple(block.loc.as_tuple() for block in self.grid.snake),
            food=food.loc.as_tuple() if food is not None else None,
            game_over=self.game_over,
            won=self.won,
            paused=self.paused,
            score=self.score,
        )

    def get_state(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "ticks": self.ticks,
            "score": self.score,
            "game_over": self.game_over,
            "won": self.won,
            "paused": self.paused,
            "direction": self.direction.name,
            "update_period": self.update_period,
            "grid": self.grid.to_dict(),
        }

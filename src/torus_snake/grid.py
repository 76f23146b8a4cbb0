"""Toroidal game grid: occupancy map, snake body and food placement."""

from __future__ import annotations

import enum
import logging
from typing import TYPE_CHECKING, Protocol

import numpy as np

from torus_snake.snake import Block, Direction, Location, in_direction

if TYPE_CHECKING:
    from torus_snake.config import GameConfig

logger = logging.getLogger(__name__)


class CellType(enum.IntEnum):
    """Integer codes stored in the grid array."""

    EMPTY = 0
    SNAKE = 1
    FOOD = 2


class StepOutcome(enum.Enum):
    """Result of a single :meth:`Grid.advance` transition."""

    MOVED = "moved"
    GREW = "grew"
    COLLIDED = "collided"
    WON = "won"


class RandomSource(Protocol):
    """The subset of :class:`numpy.random.Generator` used for food placement."""

    def integers(self, low: int, high: int) -> int: ...


class Grid:
    """NumPy-backed occupancy map plus the snake that lives on it.

    Cells are indexed ``cells[y, x]`` (row, column). The snake body is kept
    tail first, head last. A cell is non-empty exactly when it holds a snake
    segment or the current food block.
    """

    def __init__(
        self,
        cols: int = 64,
        rows: int = 48,
        rng: RandomSource | None = None,
    ) -> None:
        if cols < 1 or rows < 1:
            raise ValueError("Grid dimensions must be at least 1×1.")
        self.cols = cols
        self.rows = rows
        self.rng = rng if rng is not None else np.random.default_rng()
        self.cells = np.zeros((rows, cols), dtype=np.int8)

        start = Block(self.location(cols // 2, rows // 2))
        self.snake: list[Block] = [start]
        self.insert(start)

        self.food: Block | None = None
        self.add_block()

    @classmethod
    def from_config(
        cls, config: GameConfig, rng: RandomSource | None = None,
    ) -> Grid:
        """Build a grid sized by the window and block size of *config*."""
        return cls(cols=config.cols, rows=config.rows, rng=rng)

    # --- bounds ---

    def location(self, x: int, y: int) -> Location:
        """Create a location on this grid.

        The dimension itself is tolerated since wrap computations pass
        through it; anything beyond is a bug.
        """
        if x > self.cols or y > self.rows:
            raise ValueError(
                f"Location ({x}, {y}) is outside a {self.cols}×{self.rows} grid."
            )
        return Location(x, y)

    def valid(self, x: int, y: int) -> bool:
        return self.valid_x(x) and self.valid_y(y)

    def valid_x(self, x: int) -> bool:
        return 0 <= x < self.cols

    def valid_y(self, y: int) -> bool:
        return 0 <= y < self.rows

    # --- occupancy ---

    def get(self, block: Block) -> CellType:
        """Return the cell type at the block's location."""
        return CellType(self.cells[block.y, block.x])

    def insert(self, block: Block, cell_type: CellType = CellType.SNAKE) -> None:
        """Mark the block's cell as occupied; out-of-bounds blocks are ignored."""
        if not self.valid(block.x, block.y):
            return
        if self.cells[block.y, block.x] != cell_type:
            self.cells[block.y, block.x] = cell_type

    def remove(self, block: Block) -> None:
        """Drop *block* from the snake (if present) and clear its cell."""
        if not self.valid(block.x, block.y):
            return
        if block in self.snake:
            self.snake.remove(block)
        if block == self.food:
            self.food = None
        self.cells[block.y, block.x] = CellType.EMPTY

    def contains(self, block: Block) -> bool:
        if not self.valid(block.x, block.y):
            return False
        return self.cells[block.y, block.x] != CellType.EMPTY

    def free_cells(self) -> int:
        return int(np.count_nonzero(self.cells == CellType.EMPTY))

    # --- food ---

    def add_block(self) -> Block | None:
        """Place a new food block on a random free cell.

        Draws uniform random cells until an unoccupied one turns up. When
        the grid is already full there is nowhere to go: the food is cleared
        and ``None`` is returned instead of sampling forever.
        """
        if self.free_cells() == 0:
            logger.warning("No free cells left for food on a %d×%d grid.", self.cols, self.rows)
            self.food = None
            return None

        while True:
            x = int(self.rng.integers(0, self.cols))
            y = int(self.rng.integers(0, self.rows))
            block = Block(self.location(x, y))
            if not self.contains(block):
                break

        self.insert(block, CellType.FOOD)
        self.food = block
        return block

    # --- snake ---

    def head(self) -> Block:
        if not self.snake:
            raise RuntimeError("The snake has no segments.")
        return self.snake[-1]

    def move_snake(self, direction: Direction) -> None:
        """Slide the snake one cell in *direction*.

        Every segment takes the previous position of its head-ward
        neighbour and the old tail cell is cleared. The destination must
        not be part of the body; callers check that first.
        """
        new_head = in_direction(self.head(), self, direction)
        self.insert(new_head)
        tail = self.snake[0]
        self.snake = self.snake[1:] + [new_head]
        self.cells[tail.y, tail.x] = CellType.EMPTY

    def add_to_snake(self, block: Block) -> None:
        """Grow by appending *block* as the new head; the tail stays put."""
        self.snake.append(block)
        self.insert(block)

    def advance(self, direction: Direction) -> StepOutcome:
        """Run one simulation transition in *direction*.

        Exactly one of grow, collide or slide happens. A collision leaves
        the grid untouched.
        """
        near_head = in_direction(self.head(), self, direction)
        if near_head == self.food:
            self.add_to_snake(near_head)
            logger.debug("Snake grew to %d at %s.", len(self.snake), near_head.loc)
            if self.add_block() is None:
                return StepOutcome.WON
            return StepOutcome.GREW
        if self.contains(near_head):
            return StepOutcome.COLLIDED
        self.move_snake(direction)
        return StepOutcome.MOVED

    # --- consistency ---

    def check_invariants(self) -> None:
        """Raise ``RuntimeError`` if the occupancy map disagrees with snake and food."""
        if len(set(self.snake)) != len(self.snake):
            raise RuntimeError("Snake body contains duplicate segments.")
        expected = np.zeros_like(self.cells)
        for block in self.snake:
            expected[block.y, block.x] = CellType.SNAKE
        if self.food is not None:
            if expected[self.food.y, self.food.x] != CellType.EMPTY:
                raise RuntimeError(f"Food at {self.food.loc} overlaps the snake.")
            expected[self.food.y, self.food.x] = CellType.FOOD
        elif self.free_cells() > 0:
            raise RuntimeError("No food on the grid although free cells remain.")
        if not np.array_equal(expected, self.cells):
            raise RuntimeError("Occupancy map does not match snake and food.")

    def to_dict(self) -> dict:
        """Serialize grid state to a dictionary."""
        return {
            "cols": self.cols,
            "rows": self.rows,
            "snake": [list(block.loc.as_tuple()) for block in self.snake],
            "food": list(self.food.loc.as_tuple()) if self.food is not None else None,
            "cells": self.cells.tolist(),
        }

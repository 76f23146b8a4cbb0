"""Cell geometry: directions, locations, blocks and toroidal translation."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from torus_snake.grid import Grid


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) values.

    ``x`` grows to the right and ``y`` grows downwards, so UP decrements y.
    """

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @property
    def opposite(self) -> Direction:
        """The direction that would reverse the snake onto itself."""
        return _OPPOSITES[self]


_OPPOSITES: dict[Direction, Direction] = {
    Direction.UP: Direction.DOWN,
    Direction.DOWN: Direction.UP,
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
}


@dataclass(frozen=True)
class Location:
    """An (x, y) cell coordinate; x is the column and y the row.

    Only negative coordinates are rejected here since grids are sized per
    instance. Build locations through :meth:`Grid.location`, which also
    rejects coordinates past the grid's dimensions.
    """

    x: int
    y: int

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError(
                f"Location coordinates must be non-negative, got ({self.x}, {self.y})."
            )

    def as_tuple(self) -> tuple[int, int]:
        return self.x, self.y


@dataclass(frozen=True)
class Block:
    """A single occupied cell. Blocks compare equal by location."""

    loc: Location

    @classmethod
    def at(cls, x: int, y: int) -> Block:
        """Unchecked against any grid; see :meth:`Grid.location`."""
        return cls(Location(x, y))

    @property
    def x(self) -> int:
        return self.loc.x

    @property
    def y(self) -> int:
        return self.loc.y

    def in_direction(self, grid: Grid, direction: Direction) -> Block:
        return in_direction(self, grid, direction)


def in_direction(block: Block, grid: Grid, direction: Direction) -> Block:
    """Return the neighbouring block one step in *direction*.

    The grid is a torus: stepping past the last column or row re-enters at
    0, and stepping below 0 re-enters at the last column or row. Only the
    axis of *direction* ever changes.
    """
    dx, dy = direction.value
    x, y = block.x + dx, block.y + dy

    if grid.valid_x(x):
        if grid.valid_y(y):
            return Block(grid.location(x, y))
        if y == grid.rows:
            return Block(grid.location(x, 0))
        return Block(grid.location(x, grid.rows - 1))
    if x == grid.cols:
        return Block(grid.location(0, y))
    return Block(grid.location(grid.cols - 1, y))
